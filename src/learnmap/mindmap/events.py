"""Collapse/expand state machine for node clicks, plus hierarchy lookups."""

import logging

from learnmap.models import (
    GROUP_MAIN_TOPIC,
    GROUP_SUB_TOPIC,
    GROUP_TITLE,
    MindmapNode,
    MindmapPath,
)

logger = logging.getLogger(__name__)


def _titles_under_sub_topics(nodes: list[MindmapNode]) -> list[MindmapNode]:
    sub_topic_ids = {n.id for n in nodes if n.group == GROUP_SUB_TOPIC}
    return [n for n in nodes if n.group == GROUP_TITLE and n.parent in sub_topic_ids]


def handle_node_click(clicked: MindmapNode, nodes: list[MindmapNode]) -> None:
    """Apply a click on ``clicked`` to the collapsed flags of ``nodes``.

    Main topic, open: everything below every main topic is hidden and the
    main topic is marked collapsed.
    Main topic, collapsed: its direct children are shown.
    Sub topic with shown titles: those titles are hidden.
    Sub topic otherwise: all sub-topic titles are hidden, then this sub
    topic's titles are shown, so one sub topic is open at a time.
    Titles do not change state.
    """
    if clicked.group == GROUP_MAIN_TOPIC:
        if not clicked.collapsed:
            for node in nodes:
                if node.group != GROUP_MAIN_TOPIC:
                    node.collapsed = True
        else:
            for node in nodes:
                if node.parent == clicked.id:
                    node.collapsed = False
        clicked.collapsed = not clicked.collapsed
        logger.debug(
            f"Main topic {clicked.id!r} {'closed' if clicked.collapsed else 'opened'}"
        )

    elif clicked.group == GROUP_SUB_TOPIC:
        children = [
            n for n in nodes if n.group == GROUP_TITLE and n.parent == clicked.id
        ]
        has_visible_children = any(not child.collapsed for child in children)

        if has_visible_children:
            for child in children:
                child.collapsed = True
        else:
            for title in _titles_under_sub_topics(nodes):
                title.collapsed = True
            for child in children:
                child.collapsed = False
        logger.debug(
            f"Sub topic {clicked.id!r} {'closed' if has_visible_children else 'opened'}"
        )


def open_path(path: MindmapPath, nodes: list[MindmapNode]) -> bool:
    """Open the branch leading to ``path``.

    The main topic is opened with all of its sub topics shown, then the
    titles of the path's sub topic are shown. Returns False when the main
    topic or sub topic does not exist.
    """
    root = next(
        (n for n in nodes if n.group == GROUP_MAIN_TOPIC and n.name == path.main_topic),
        None,
    )
    if root is None:
        return False

    if path.sub_topic:
        branch = next(
            (
                n
                for n in nodes
                if n.group == GROUP_SUB_TOPIC
                and n.parent == root.id
                and n.name == path.sub_topic
            ),
            None,
        )
        if branch is None:
            return False
    else:
        branch = root

    root.collapsed = False
    for node in nodes:
        if node.parent == root.id:
            node.collapsed = False

    for node in nodes:
        if node.group == GROUP_TITLE and node.parent == branch.id:
            node.collapsed = False
    return True


def find_root_node(node: MindmapNode, nodes: list[MindmapNode]) -> MindmapNode:
    """Walk up the parents to the top of the hierarchy."""
    by_id = {n.id: n for n in nodes}
    current = node
    while current.parent:
        parent = by_id.get(current.parent)
        if parent is None:
            break
        current = parent
    return current


def find_main_topic(node: MindmapNode, nodes: list[MindmapNode]) -> str:
    """Name of the main topic above ``node``."""
    return find_root_node(node, nodes).name


def find_sub_topic(node: MindmapNode, nodes: list[MindmapNode]) -> str:
    """Name of the sub topic a title hangs off, or '' if there is none."""
    parent = next((n for n in nodes if n.id == node.parent), None)
    if parent is None or parent.group != GROUP_SUB_TOPIC:
        return ""
    return parent.name
