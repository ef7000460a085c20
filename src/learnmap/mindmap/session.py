"""Mindmap state held between requests.

The page is a thin renderer: it asks for the visible graph, forwards
clicks, and redraws whatever comes back. Collapse flags and node
positions live here.
"""

import logging
import threading

from learnmap.config import settings
from learnmap.models import GROUP_TITLE, LearningEntry, MindmapData, MindmapPath
from learnmap.mindmap.events import (
    find_main_topic,
    find_sub_topic,
    handle_node_click,
    open_path,
)
from learnmap.mindmap.layout import (
    ForceConfig,
    compute_layout,
    get_node_color,
    get_node_size,
)
from learnmap.mindmap.transformer import entries_to_graph
from learnmap.mindmap.visibility import (
    get_visible_links,
    get_visible_nodes,
    hide_all_child_nodes,
    link_display,
    node_display,
)

logger = logging.getLogger(__name__)


class MindmapSession:
    """Graph, collapse state and layout for one mindmap view."""

    def __init__(
        self,
        width: int | None = None,
        height: int | None = None,
        padding: int | None = None,
        seed: int | None = None,
        force_config: ForceConfig | None = None,
    ) -> None:
        self.width = width or settings.layout_width
        self.height = height or settings.layout_height
        self.padding = settings.layout_padding if padding is None else padding
        self.seed = settings.layout_seed if seed is None else seed
        self.force_config = force_config or ForceConfig(iterations=settings.layout_iterations)
        self.data = MindmapData()
        self._lock = threading.Lock()

    def load(
        self, entries: list[LearningEntry], keep_open: MindmapPath | None = None
    ) -> MindmapData:
        """Rebuild the graph from ``entries`` with every branch closed.

        When ``keep_open`` is given, the branch leading to it is reopened,
        which is how a created or edited entry stays in view.
        """
        data = entries_to_graph(entries)
        hide_all_child_nodes(data.nodes)
        if keep_open is not None and not open_path(keep_open, data.nodes):
            logger.warning(f"Path to keep open not found in mindmap: {keep_open}")

        with self._lock:
            self.data = data
            self._relayout()
        logger.info(f"Mindmap loaded with {len(data.nodes)} nodes")
        return data

    def click(self, node_id: str) -> bool:
        """Apply a click on ``node_id``. Returns False for unknown nodes."""
        with self._lock:
            node = self.data.get_node(node_id)
            if node is None:
                return False
            handle_node_click(node, self.data.nodes)
            self._relayout()
        return True

    def open(self, path: MindmapPath) -> bool:
        """Reveal the branch leading to ``path`` without closing others."""
        with self._lock:
            found = open_path(path, self.data.nodes)
            if found:
                self._relayout()
        return found

    def node_detail(self, node_id: str) -> dict | None:
        """Entry details behind a title node, with its main and sub topic."""
        node = self.data.get_node(node_id)
        if node is None or node.group != GROUP_TITLE:
            return None
        return {
            "node_id": node.id,
            "entry_id": node.entry_id,
            "title": node.name,
            "description": node.description or "",
            "main_topic": find_main_topic(node, self.data.nodes),
            "sub_topic": find_sub_topic(node, self.data.nodes),
            "created_at": node.created_at.isoformat() if node.created_at else None,
            "updated_at": node.updated_at.isoformat() if node.updated_at else None,
        }

    def _relayout(self) -> None:
        compute_layout(
            self.data,
            width=self.width,
            height=self.height,
            padding=self.padding,
            config=self.force_config,
            seed=self.seed,
        )

    def visible_graph(self) -> dict:
        """Visible nodes and links, positioned and styled for drawing."""
        with self._lock:
            nodes = self.data.nodes
            visible_nodes = get_visible_nodes(nodes)
            visible_links = get_visible_links(self.data.links, visible_nodes)
            by_id = self.data.node_index()

            node_dicts = []
            for node in visible_nodes:
                item = node.to_dict()
                item["display"] = node_display(node)
                item["color"] = get_node_color(node.group)
                item["size"] = get_node_size(node.group)
                node_dicts.append(item)

            link_dicts = []
            for link in visible_links:
                source, target = by_id[link.source], by_id[link.target]
                link_dicts.append({
                    "source": link.source,
                    "target": link.target,
                    "display": link_display(link, nodes),
                    "x1": source.x,
                    "y1": source.y,
                    "x2": target.x,
                    "y2": target.y,
                })

        return {
            "width": self.width,
            "height": self.height,
            "nodes": node_dicts,
            "links": link_dicts,
        }
