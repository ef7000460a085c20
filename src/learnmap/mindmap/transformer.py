"""Build the three-level mindmap graph from learning entries."""

import logging

from learnmap.models import (
    GROUP_MAIN_TOPIC,
    GROUP_SUB_TOPIC,
    GROUP_TITLE,
    LearningEntry,
    MindmapData,
    MindmapLink,
    MindmapNode,
)

logger = logging.getLogger(__name__)


def sub_topic_id(main_topic: str, sub_topic: str) -> str:
    """Preferred node id of a sub topic."""
    return f"{main_topic}-{sub_topic}"


def _unique_id(candidate: str, taken: set[str], hint: str | None = None) -> str:
    """``candidate``, or a ``#``-suffixed variant not yet in ``taken``."""
    if candidate not in taken:
        return candidate
    if hint is not None and f"{candidate}#{hint}" not in taken:
        return f"{candidate}#{hint}"
    counter = 2
    while f"{candidate}#{counter}" in taken:
        counter += 1
    return f"{candidate}#{counter}"


def entries_to_graph(entries: list[LearningEntry]) -> MindmapData:
    """Transform learning entries into mindmap nodes and links.

    1. One main-topic node (group 1) per distinct main topic.
    2. One sub-topic node (group 2) per distinct (main topic, sub topic)
       pair, linked from its main topic.
    3. One title node (group 3) per entry, linked from its sub topic, or
       from its main topic when it has none.

    Ids are ``"main"``, ``"main-sub"`` and ``"parent-title"``. Names can
    make those collide across levels (main topic ``"Web-API"`` vs. sub topic
    ``"API"`` under ``"Web"``), so a taken id gets a ``#`` suffix: the entry
    id for titles, otherwise a counter. Node order follows first appearance
    in ``entries``.
    """
    data = MindmapData()
    taken: set[str] = set()
    main_ids: dict[str, str] = {}
    sub_ids: dict[tuple[str, str], str] = {}

    for entry in entries:
        if entry.main_topic in main_ids:
            continue
        node_id = _unique_id(entry.main_topic, taken)
        taken.add(node_id)
        main_ids[entry.main_topic] = node_id
        data.nodes.append(
            MindmapNode(
                id=node_id,
                name=entry.main_topic,
                group=GROUP_MAIN_TOPIC,
                collapsed=False,
            )
        )

    for entry in entries:
        key = (entry.main_topic, entry.sub_topic)
        if not entry.sub_topic or key in sub_ids:
            continue
        main_id = main_ids[entry.main_topic]
        node_id = _unique_id(sub_topic_id(main_id, entry.sub_topic), taken)
        if node_id != sub_topic_id(main_id, entry.sub_topic):
            logger.debug(f"Sub topic id clash for {key!r}, using {node_id!r}")
        taken.add(node_id)
        sub_ids[key] = node_id
        data.nodes.append(
            MindmapNode(
                id=node_id,
                name=entry.sub_topic,
                group=GROUP_SUB_TOPIC,
                collapsed=True,
                parent=main_id,
            )
        )
        data.links.append(MindmapLink(source=main_id, target=node_id))

    for entry in entries:
        if entry.sub_topic:
            parent_id = sub_ids[(entry.main_topic, entry.sub_topic)]
        else:
            parent_id = main_ids[entry.main_topic]
        node_id = _unique_id(f"{parent_id}-{entry.title}", taken, hint=entry.id)
        taken.add(node_id)
        data.nodes.append(
            MindmapNode(
                id=node_id,
                name=entry.title,
                group=GROUP_TITLE,
                collapsed=True,
                parent=parent_id,
                entry_id=entry.id,
                description=entry.description,
                created_at=entry.created_at,
                updated_at=entry.updated_at,
            )
        )
        data.links.append(MindmapLink(source=parent_id, target=node_id))

    logger.debug(
        f"Built mindmap with {len(data.nodes)} nodes and {len(data.links)} links "
        f"from {len(entries)} entries"
    )
    return data
