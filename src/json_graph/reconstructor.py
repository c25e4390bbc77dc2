"""Reconstructor rebuilding JSON values from graph nodes and edges."""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Set, Tuple
from .config import EngineConfig
from .error_handler import ErrorHandler
from .models import GraphNode, GraphEdge
from .types import (
    NodeKind,
    ErrorType,
    GraphProcessingError,
    Diagnostic,
    ReconstructionResult,
)
from .utils.graph_index import GraphIndex
from .value_classifier import ValueClassifier


@dataclass
class _Frame:
    """A container node whose children are still being assembled."""
    node: GraphNode
    value: Any
    child_ids: List[str]
    position: int = 0

    def store(self, field_name: str, child_value: Any) -> None:
        if isinstance(self.value, dict):
            self.value[field_name] = child_value
        else:
            self.value.append(child_value)


class Reconstructor:
    """
    Inverse of the tree builder.

    Children are assembled in edge order. Primitive nodes yield their stored
    literal, never the display label. Gaps in the graph (dangling edges,
    cycles, a missing root) degrade to partial output plus diagnostics.
    """

    def __init__(self, config: Optional[EngineConfig] = None,
                 classifier: Optional[ValueClassifier] = None,
                 error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the reconstructor.

        Args:
            config: Optional EngineConfig
            classifier: Optional ValueClassifier used to normalize edited literals
            error_handler: Optional ErrorHandler instance
            logger: Optional logger instance
        """
        self.config = config or EngineConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.classifier = classifier or ValueClassifier(logger=self.logger)
        self.error_handler = error_handler or ErrorHandler(self.logger, self.config.max_depth)

    def reconstruct(self, nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]) -> Any:
        """Rebuild the JSON value described by a graph."""
        return self.reconstruct_with_report(nodes, edges).value

    def reconstruct_with_report(self, nodes: Sequence[GraphNode],
                                edges: Sequence[GraphEdge]) -> ReconstructionResult:
        """
        Rebuild the JSON value and report every gap that was papered over.

        Args:
            nodes: Graph nodes (any order)
            edges: Graph edges (order defines child order)

        Returns:
            ReconstructionResult with the value and diagnostics
        """
        diagnostics: List[Diagnostic] = []

        try:
            index = GraphIndex(nodes, edges)
            root = index.find_root()

            if root is None:
                value = self._without_root(index, diagnostics)
            else:
                value = self._build_value(root.id, index, diagnostics)
        except Exception as e:
            self._record(diagnostics, f"Reconstruction aborted: {e}", "root")
            value = {}

        self.logger.info(f"Reconstructed JSON from {len(nodes)} nodes "
                         f"({len(diagnostics)} diagnostics)")
        return ReconstructionResult(value=value, diagnostics=diagnostics)

    def _without_root(self, index: GraphIndex, diagnostics: List[Diagnostic]) -> Any:
        self._record(diagnostics, "No root node found in graph", "root")
        if not self.config.merge_orphan_roots:
            return {}

        merged = {}
        for node in index.parentless_nodes():
            merged[node.field_name or "root"] = self._build_value(node.id, index, diagnostics)
        return merged

    def _build_value(self, node_id: str, index: GraphIndex, diagnostics: List[Diagnostic]) -> Any:
        """Assemble the value below ``node_id`` on an explicit stack of open containers."""
        visiting: Set[str] = set()
        value, frame = self._open(node_id, index, visiting, diagnostics)
        stack = [frame] if frame is not None else []

        while stack:
            frame = stack[-1]
            if frame.position >= len(frame.child_ids):
                stack.pop()
                visiting.discard(frame.node.id)
                continue

            child_id = frame.child_ids[frame.position]
            frame.position += 1

            child = index.get(child_id)
            if child is None:
                self._record(diagnostics, f"Edge from {frame.node.id} points to unknown node {child_id}",
                             frame.node.path)
                continue
            if frame.node.kind == NodeKind.OBJECT and child.field_name in frame.value:
                self._record(diagnostics, f"Duplicate key '{child.field_name}' under {frame.node.id}; "
                             f"last value wins", frame.node.path)

            child_value, child_frame = self._open(child_id, index, visiting, diagnostics)
            frame.store(child.field_name, child_value)
            if child_frame is not None:
                stack.append(child_frame)

        return value

    def _open(self, node_id: str, index: GraphIndex, visiting: Set[str],
              diagnostics: List[Diagnostic]) -> Tuple[Any, Optional[_Frame]]:
        """
        Start the value for one node.

        Containers come back empty together with a frame to fill them;
        primitives, cycles and unknown ids come back finished.
        """
        node = index.get(node_id)
        if node is None:
            self._record(diagnostics, f"Edge points to unknown node {node_id}", node_id)
            return None, None

        if node_id in visiting:
            self._record(diagnostics, f"Cycle detected at node {node_id}", node.path)
            return None, None

        child_ids = index.children_of(node_id)

        if node.is_container:
            visiting.add(node_id)
            frame = _Frame(node=node, value={} if node.kind == NodeKind.OBJECT else [], child_ids=child_ids)
            return frame.value, frame

        if child_ids:
            self._record(diagnostics, f"Primitive node {node_id} has {len(child_ids)} children; ignored",
                         node.path)
        return self.classifier.coerce_literal(node.kind, node.value), None

    def _record(self, diagnostics: List[Diagnostic], message: str, path: Optional[str]) -> None:
        response = self.error_handler.handle_processing_error(GraphProcessingError(
            message,
            ErrorType.RECONSTRUCTION,
            context={"path": path}
        ))
        diagnostics.append(response.diagnostic)
