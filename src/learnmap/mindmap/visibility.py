"""Which nodes and links of the mindmap are shown."""

from learnmap.models import (
    GROUP_MAIN_TOPIC,
    GROUP_SUB_TOPIC,
    GROUP_TITLE,
    MindmapLink,
    MindmapNode,
)


def _find(nodes: list[MindmapNode], node_id: str | None) -> MindmapNode | None:
    if node_id is None:
        return None
    for node in nodes:
        if node.id == node_id:
            return node
    return None


def hide_all_child_nodes(nodes: list[MindmapNode]) -> None:
    """Close every branch: hide sub topics and titles, collapse main topics."""
    for node in nodes:
        node.collapsed = True


def get_visible_nodes(nodes: list[MindmapNode]) -> list[MindmapNode]:
    """Main topics always, everything else when its parent is open.

    Nodes whose parent is missing from the graph stay visible.
    """
    visible = []
    for node in nodes:
        if node.group == GROUP_MAIN_TOPIC:
            visible.append(node)
            continue
        parent = _find(nodes, node.parent)
        if parent is None or not parent.collapsed:
            visible.append(node)
    return visible


def get_visible_links(
    links: list[MindmapLink], visible_nodes: list[MindmapNode]
) -> list[MindmapLink]:
    """Links with both ends visible."""
    visible_ids = {node.id for node in visible_nodes}
    return [
        link
        for link in links
        if link.source in visible_ids and link.target in visible_ids
    ]


def is_parent_collapsed(node: MindmapNode, nodes: list[MindmapNode]) -> bool:
    """True if any ancestor of ``node`` is collapsed."""
    parent = _find(nodes, node.parent)
    if parent is None:
        return False
    if parent.collapsed:
        return True
    return is_parent_collapsed(parent, nodes)


def is_descendant_of(
    node: MindmapNode | None, ancestor: MindmapNode, nodes: list[MindmapNode]
) -> bool:
    """True if ``ancestor`` is somewhere above ``node``."""
    if node is None or node.parent is None:
        return False
    if node.parent == ancestor.id:
        return True
    return is_descendant_of(_find(nodes, node.parent), ancestor, nodes)


def node_display(node: MindmapNode) -> bool:
    """Whether a node is drawn."""
    if node.group == GROUP_MAIN_TOPIC:
        return True
    return not node.collapsed


def link_display(link: MindmapLink, nodes: list[MindmapNode]) -> bool:
    """Whether a link is drawn.

    Only main-topic -> sub-topic and sub-topic -> title links are ever
    shown, and only while their target is shown and no ancestor of the
    target is collapsed.
    """
    source = _find(nodes, link.source)
    target = _find(nodes, link.target)
    if source is None or target is None:
        return False
    if is_parent_collapsed(target, nodes):
        return False

    hierarchy_link = (
        (source.group == GROUP_MAIN_TOPIC and target.group == GROUP_SUB_TOPIC)
        or (source.group == GROUP_SUB_TOPIC and target.group == GROUP_TITLE)
        or (source.group == GROUP_MAIN_TOPIC and target.group == GROUP_TITLE)
    )
    if hierarchy_link:
        return not target.collapsed
    return False
