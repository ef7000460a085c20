"""Learnmap data models."""

from learnmap.models.entry import LearningEntry, utcnow
from learnmap.models.mindmap import (
    GROUP_MAIN_TOPIC,
    GROUP_SUB_TOPIC,
    GROUP_TITLE,
    MindmapData,
    MindmapLink,
    MindmapNode,
    MindmapPath,
    NodeGroup,
)

__all__ = [
    "LearningEntry",
    "utcnow",
    "MindmapData",
    "MindmapLink",
    "MindmapNode",
    "MindmapPath",
    "NodeGroup",
    "GROUP_MAIN_TOPIC",
    "GROUP_SUB_TOPIC",
    "GROUP_TITLE",
]
