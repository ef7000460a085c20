"""Force-directed layout for the mindmap.

Runs server-side with networkx's spring layout (Fruchterman-Reingold) so the
page only has to draw positions. The layout works in a unit square around
the canvas center; results are mapped to pixels and clamped to the canvas.
"""

import logging
import math
from dataclasses import dataclass

import networkx as nx
import numpy as np

from learnmap.models import (
    GROUP_MAIN_TOPIC,
    GROUP_SUB_TOPIC,
    MindmapData,
    MindmapLink,
    MindmapNode,
)
from learnmap.mindmap.visibility import get_visible_links, get_visible_nodes

logger = logging.getLogger(__name__)

NODE_COLORS = {1: "#8B5CC0", 2: "#B849BA", 3: "#BA496E"}
DEFAULT_NODE_COLOR = "#999"
NODE_SIZES = {1: 50, 2: 30, 3: 20}
DEFAULT_NODE_SIZE = 10
BOUNDARY_RADII = {1: 50, 2: 35, 3: 25}
DEFAULT_BOUNDARY_RADIUS = 15


def get_node_color(group: int) -> str:
    return NODE_COLORS.get(group, DEFAULT_NODE_COLOR)


def get_node_size(group: int) -> int:
    return NODE_SIZES.get(group, DEFAULT_NODE_SIZE)


def apply_boundary_constraints(
    node: MindmapNode, width: float, height: float, padding: float = 72
) -> None:
    """Clamp ``node`` inside the canvas, keeping padding plus its radius clear."""
    radius = BOUNDARY_RADII.get(node.group, DEFAULT_BOUNDARY_RADIUS)
    node.x = max(padding + radius, min(width - padding - radius, node.x or 0))
    node.y = max(padding + radius, min(height - padding - radius, node.y or 0))


@dataclass
class ForceConfig:
    """Spring layout parameters."""

    link_weight_main: float = 0.8   # main topic -> sub topic
    link_weight: float = 0.65
    k: float | None = None  # optimal distance in layout units, networkx default 1/sqrt(n)
    iterations: int = 50
    threshold: float = 1e-4
    scale: float = 0.8
    spawn_distance: float = 30.0  # px from the parent for newly shown nodes


class CanvasMapping:
    """Converts between pixel coordinates and the layout's unit square."""

    def __init__(self, width: float, height: float, padding: float) -> None:
        self.cx = width / 2
        self.cy = height / 2
        self.half_w = max(width / 2 - padding, 1.0)
        self.half_h = max(height / 2 - padding, 1.0)

    def to_layout(self, x: float, y: float) -> tuple[float, float]:
        return (x - self.cx) / self.half_w, (y - self.cy) / self.half_h

    def to_canvas(self, lx: float, ly: float) -> tuple[float, float]:
        return self.cx + lx * self.half_w, self.cy + ly * self.half_h


def build_graph(
    nodes: list[MindmapNode], links: list[MindmapLink], config: ForceConfig
) -> nx.Graph:
    """Undirected graph over ``nodes``; main->sub links pull harder."""
    by_id = {node.id: node for node in nodes}
    graph = nx.Graph()
    graph.add_nodes_from(by_id)
    for link in links:
        source, target = by_id.get(link.source), by_id.get(link.target)
        if source is None or target is None:
            continue
        main_link = source.group == GROUP_MAIN_TOPIC and target.group == GROUP_SUB_TOPIC
        weight = config.link_weight_main if main_link else config.link_weight
        graph.add_edge(source.id, target.id, weight=weight)
    return graph


def _place_near_parent(
    node: MindmapNode,
    by_id: dict[str, MindmapNode],
    rng: np.random.Generator,
    distance: float,
) -> None:
    parent = by_id.get(node.parent) if node.parent else None
    if parent is None or parent.x is None or parent.y is None:
        return
    angle = rng.uniform(0, 2 * math.pi)
    node.x = parent.x + distance * math.cos(angle)
    node.y = parent.y + distance * math.sin(angle)


def compute_layout(
    data: MindmapData,
    width: float = 1200,
    height: float = 800,
    padding: float = 72,
    config: ForceConfig | None = None,
    seed: int | None = None,
    visible_only: bool = True,
) -> int:
    """Lay out the mindmap in place and return the number of nodes placed.

    Nodes that already have positions start from them, so a click only
    nudges the existing picture. Nodes shown for the first time start next
    to their parent. Nodes with ``fx``/``fy`` stay pinned.
    """
    config = config or ForceConfig()
    nodes = get_visible_nodes(data.nodes) if visible_only else list(data.nodes)
    links = get_visible_links(data.links, nodes) if visible_only else list(data.links)
    if not nodes:
        return 0

    rng = np.random.default_rng(seed)
    by_id = data.node_index()
    for node in nodes:
        if node.fx is not None:
            node.x = node.fx
        if node.fy is not None:
            node.y = node.fy
        if node.x is None or node.y is None:
            _place_near_parent(node, by_id, rng, config.spawn_distance)

    mapping = CanvasMapping(width, height, padding)
    pos = {
        node.id: mapping.to_layout(node.x, node.y)
        for node in nodes
        if node.x is not None and node.y is not None
    }
    if pos:
        # networkx would scatter the rest over its own domain guess
        for node in nodes:
            if node.id not in pos:
                pos[node.id] = tuple(rng.uniform(-config.scale, config.scale, 2))
    fixed = [n.id for n in nodes if n.fx is not None and n.fy is not None]

    positions = nx.spring_layout(
        build_graph(nodes, links, config),
        k=config.k,
        pos=pos or None,
        fixed=fixed or None,
        iterations=config.iterations,
        threshold=config.threshold,
        weight="weight",
        scale=config.scale,
        seed=seed,
    )

    for node in nodes:
        lx, ly = positions[node.id]
        node.x, node.y = mapping.to_canvas(float(lx), float(ly))
        if node.fx is not None:
            node.x = node.fx
        if node.fy is not None:
            node.y = node.fy
        apply_boundary_constraints(node, width, height, padding)

    logger.debug(f"Laid out {len(nodes)} nodes and {len(links)} links")
    return len(nodes)
