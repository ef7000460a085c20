"""Mindmap graph model - nodes, links and hierarchy paths."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

# Node groups, one per hierarchy level
GROUP_MAIN_TOPIC = 1
GROUP_SUB_TOPIC = 2
GROUP_TITLE = 3

NodeGroup = Literal[1, 2, 3]


@dataclass(frozen=True)
class MindmapPath:
    """Main topic, sub topic and title of one entry."""

    main_topic: str
    sub_topic: str = ""
    title: str = ""

    def to_dict(self) -> dict:
        return {
            "main_topic": self.main_topic,
            "sub_topic": self.sub_topic,
            "title": self.title,
        }


@dataclass
class MindmapNode:
    """
    A node of the mindmap.

    For main topics ``collapsed`` means the branch is closed. For sub topics
    and titles it means the node itself is hidden.
    """

    id: str
    name: str
    group: int
    collapsed: bool = True
    parent: str | None = None

    # Title nodes carry the entry they were built from
    entry_id: str | None = None
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # Layout state
    x: float | None = None
    y: float | None = None
    fx: float | None = None
    fy: float | None = None

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dict for the visualization."""
        return {
            "id": self.id,
            "name": self.name,
            "group": self.group,
            "collapsed": self.collapsed,
            "parent": self.parent,
            "entry_id": self.entry_id,
            "description": self.description,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "x": self.x,
            "y": self.y,
        }


@dataclass
class MindmapLink:
    """Parent-to-child edge, referencing node ids."""

    source: str
    target: str

    def to_dict(self) -> dict:
        return {"source": self.source, "target": self.target}


@dataclass
class MindmapData:
    """The full graph: every node and link, visible or not."""

    nodes: list[MindmapNode] = field(default_factory=list)
    links: list[MindmapLink] = field(default_factory=list)

    def get_node(self, node_id: str) -> MindmapNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def node_index(self) -> dict[str, MindmapNode]:
        """Map node ids to nodes."""
        return {node.id: node for node in self.nodes}
