"""Build result model bundling nodes, edges and diagnostics."""

from dataclasses import dataclass, field
from typing import Any, Dict, List
from ..types import Diagnostic, ErrorType
from .graph_node import GraphNode
from .graph_edge import GraphEdge


@dataclass
class GraphBuildResult:
    """
    Result of turning a JSON value into a graph.

    Always contains at least one node. ``diagnostics`` lists every guard,
    formatting or traversal problem that was degraded instead of raised.
    """

    nodes: List[GraphNode]
    edges: List[GraphEdge]
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def warnings(self) -> List[str]:
        return [d.message for d in self.diagnostics]

    @property
    def truncated(self) -> bool:
        """True if the depth guard cut off part of the document."""
        return any(d.error_type == ErrorType.STRUCTURAL_GUARD for d in self.diagnostics)

    @property
    def root(self) -> GraphNode:
        for node in self.nodes:
            if node.is_root:
                return node
        return self.nodes[0]

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a JSON-serializable graph document."""
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GraphBuildResult':
        """Create GraphBuildResult from a graph document."""
        diagnostics = [
            Diagnostic(
                error_type=ErrorType(d["errorType"]),
                message=d.get("message", ""),
                path=d.get("path"),
            )
            for d in data.get("diagnostics", [])
        ]
        return cls(
            nodes=[GraphNode.from_dict(n) for n in data.get("nodes", [])],
            edges=[GraphEdge.from_dict(e) for e in data.get("edges", [])],
            diagnostics=diagnostics,
        )
