"""
JSON Graph - Bidirectional JSON <-> visual node-graph transformation.

Turns nested JSON documents into positioned nodes and parent/child edges
for visual editing, and rebuilds the JSON from an edited graph.
"""

from typing import Any, List, Optional, Sequence

from .engine import JSONGraphEngine
from .config import EngineConfig, DEFAULT_METADATA_FIELDS, field_name_predicate
from .models import GraphNode, GraphEdge, GraphBuildResult, Position
from .types import (
    NodeKind,
    EdgeKind,
    ErrorType,
    Diagnostic,
    ReconstructionResult,
    GraphProcessingError,
    UNDEFINED,
)
from .editing import validate_connection, suggest_field_name, connect

__version__ = "1.0.0"


def build(data: Any, config: Optional[EngineConfig] = None) -> GraphBuildResult:
    """Turn a JSON value into graph nodes and edges. Never raises."""
    return JSONGraphEngine(config).build(data)


def layout(nodes: Sequence[GraphNode], edges: Sequence[GraphEdge],
           previous: Optional[Sequence[GraphNode]] = None,
           config: Optional[EngineConfig] = None) -> List[GraphNode]:
    """Return copies of ``nodes`` with hierarchical positions assigned."""
    return JSONGraphEngine(config).layout(nodes, edges, previous)


def reconstruct(nodes: Sequence[GraphNode], edges: Sequence[GraphEdge],
                config: Optional[EngineConfig] = None) -> Any:
    """Rebuild the JSON value described by a graph. Never raises."""
    return JSONGraphEngine(config).reconstruct(nodes, edges)


__all__ = [
    "build",
    "layout",
    "reconstruct",
    "JSONGraphEngine",
    "EngineConfig",
    "DEFAULT_METADATA_FIELDS",
    "field_name_predicate",
    "GraphNode",
    "GraphEdge",
    "GraphBuildResult",
    "Position",
    "NodeKind",
    "EdgeKind",
    "ErrorType",
    "Diagnostic",
    "ReconstructionResult",
    "GraphProcessingError",
    "UNDEFINED",
    "validate_connection",
    "suggest_field_name",
    "connect",
]
