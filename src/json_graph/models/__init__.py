"""Data models for the JSON graph engine."""

from .graph_node import GraphNode, Position, NODE_COLORS
from .graph_edge import GraphEdge
from .graph_result import GraphBuildResult

__all__ = ["GraphNode", "Position", "NODE_COLORS", "GraphEdge", "GraphBuildResult"]
