"""Mindmap graph: building, visibility, click handling and layout."""

from learnmap.mindmap.events import (
    find_main_topic,
    find_root_node,
    find_sub_topic,
    handle_node_click,
    open_path,
)
from learnmap.mindmap.layout import (
    CanvasMapping,
    ForceConfig,
    apply_boundary_constraints,
    build_graph,
    compute_layout,
    get_node_color,
    get_node_size,
)
from learnmap.mindmap.session import MindmapSession
from learnmap.mindmap.transformer import entries_to_graph
from learnmap.mindmap.visibility import (
    get_visible_links,
    get_visible_nodes,
    hide_all_child_nodes,
    is_descendant_of,
    is_parent_collapsed,
    link_display,
    node_display,
)

__all__ = [
    "entries_to_graph",
    "hide_all_child_nodes",
    "get_visible_nodes",
    "get_visible_links",
    "is_parent_collapsed",
    "is_descendant_of",
    "node_display",
    "link_display",
    "handle_node_click",
    "open_path",
    "find_root_node",
    "find_main_topic",
    "find_sub_topic",
    "ForceConfig",
    "CanvasMapping",
    "build_graph",
    "apply_boundary_constraints",
    "compute_layout",
    "get_node_color",
    "get_node_size",
    "MindmapSession",
]
