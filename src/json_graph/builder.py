"""Tree builder turning a JSON value into graph nodes and edges."""

import json
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple
from .config import EngineConfig
from .error_handler import ErrorHandler
from .layout import LayoutAssigner
from .models import GraphNode, GraphEdge, GraphBuildResult
from .types import (
    NodeKind,
    EdgeKind,
    ErrorType,
    GraphProcessingError,
    Diagnostic,
    UNDEFINED,
)
from .value_classifier import ValueClassifier, FORMAT_ERROR


PLACEHOLDER_DISPLAY = "[Max depth reached]"
TRAVERSAL_ERROR_DISPLAY = "[Traversal Error]"
ERROR_NODE_ID = "error-node"


def _key_path(parent_path: str, key: str) -> str:
    """Append an object key to a path, quoting keys that would read as path syntax."""
    if "." in key or "[" in key:
        return f"{parent_path}[{json.dumps(key, ensure_ascii=False)}]"
    return f"{parent_path}.{key}"


@dataclass
class _WorkItem:
    """A value waiting to become a node."""
    value: Any
    field_name: str
    parent_id: Optional[str]
    depth: int
    path: str
    is_metadata: bool


class _BuildState:
    """Per-call accumulators; never shared between builds."""

    def __init__(self):
        self.counter = 0
        self.nodes: List[GraphNode] = []
        self.edges: List[GraphEdge] = []
        self.diagnostics: List[Diagnostic] = []

    def next_id(self) -> str:
        node_id = f"node-{self.counter}"
        self.counter += 1
        return node_id


class TreeBuilder:
    """
    Depth-first builder producing one node per JSON field.

    Traversal runs on an explicit work stack and emits nodes in pre-order,
    each edge right after its target node. A failure inside one subtree
    turns that subtree into a single error node; ``build`` never raises.
    """

    def __init__(self, config: Optional[EngineConfig] = None,
                 classifier: Optional[ValueClassifier] = None,
                 error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the tree builder.

        Args:
            config: Optional EngineConfig (defaults apply when omitted)
            classifier: Optional ValueClassifier instance
            error_handler: Optional ErrorHandler instance
            logger: Optional logger instance
        """
        self.config = config or EngineConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.classifier = classifier or ValueClassifier(
            max_display_length=self.config.max_display_length,
            safe_display_mode=self.config.safe_display_mode,
            logger=self.logger
        )
        self.error_handler = error_handler or ErrorHandler(self.logger, self.config.max_depth)

    def build(self, data: Any) -> GraphBuildResult:
        """
        Build a graph from a JSON value.

        Args:
            data: Any JSON-compatible value (object, array or primitive)

        Returns:
            GraphBuildResult with at least one node
        """
        state = _BuildState()

        try:
            self._traverse(data, state)
        except Exception as e:
            self._record(state, GraphProcessingError(
                f"Graph build aborted after {len(state.nodes)} nodes: {e}",
                ErrorType.TRAVERSAL,
                context={"path": "root"}
            ))

        if not state.nodes:
            state.edges = []
            state.nodes.append(self._error_root_node())

        nodes = state.nodes
        if self.config.incremental_layout:
            nodes = LayoutAssigner(self.config, self.logger).assign_incremental(nodes)

        self.logger.info(f"Built graph with {len(nodes)} nodes and {len(state.edges)} edges "
                         f"({len(state.diagnostics)} diagnostics)")
        return GraphBuildResult(nodes=nodes, edges=state.edges, diagnostics=state.diagnostics)

    def _traverse(self, data: Any, state: _BuildState) -> None:
        stack = [_WorkItem(
            value=data,
            field_name="root",
            parent_id=None,
            depth=0,
            path="root",
            is_metadata=False
        )]

        while stack:
            item = stack.pop()
            node_id = state.next_id()

            try:
                node, children = self._expand(item, node_id, state)
            except Exception as e:
                node, children = self._error_node(item, node_id, e, state), []

            state.nodes.append(node)
            if item.parent_id is not None:
                kind = EdgeKind.METADATA_LINK if item.is_metadata else EdgeKind.NORMAL
                state.edges.append(GraphEdge.between(item.parent_id, node_id, kind))

            # Reversed so the first child is popped first
            stack.extend(reversed(children))

    def _expand(self, item: _WorkItem, node_id: str,
                state: _BuildState) -> Tuple[GraphNode, List[_WorkItem]]:
        """Create the node for one work item and list its children."""
        if item.depth >= self.config.max_depth:
            return self._placeholder_node(item, node_id, state), []

        kind = self.classifier.classify(item.value)
        display = self.classifier.format_display_value(item.value, kind)
        if display == FORMAT_ERROR:
            self._record(state, GraphProcessingError(
                f"Could not render value at {item.path}",
                ErrorType.FORMATTING,
                context={"path": item.path}
            ))

        children: List[_WorkItem] = []
        literal = None

        if kind == NodeKind.OBJECT:
            for key, child in list(item.value.items()):
                name = str(key)
                children.append(_WorkItem(
                    value=child,
                    field_name=name,
                    parent_id=node_id,
                    depth=item.depth + 1,
                    path=_key_path(item.path, name),
                    is_metadata=item.is_metadata or self.config.is_metadata_field(name)
                ))
        elif kind == NodeKind.ARRAY:
            for index, child in enumerate(list(item.value)):
                children.append(_WorkItem(
                    value=child,
                    field_name=f"[{index}]",
                    parent_id=node_id,
                    depth=item.depth + 1,
                    path=f"{item.path}[{index}]",
                    is_metadata=item.is_metadata
                ))
        else:
            literal = self._literal(item, kind, state)

        node = GraphNode(
            id=node_id,
            kind=kind,
            field_name=item.field_name,
            depth=item.depth,
            path=item.path,
            display_value=display,
            value=literal,
            child_count=len(children),
            is_root=item.parent_id is None,
            is_metadata=item.is_metadata
        )
        return node, children

    def _literal(self, item: _WorkItem, kind: NodeKind, state: _BuildState) -> Any:
        """Literal stored on a primitive node."""
        value = item.value
        if value is UNDEFINED:
            self.logger.debug(f"Undefined value at {item.path} stored as null")
            return None
        if self.classifier.is_json_value(value):
            return value

        self._record(state, GraphProcessingError(
            f"Non-JSON value of type {type(value).__name__} at {item.path} stored as string",
            ErrorType.FORMATTING,
            context={"path": item.path}
        ))
        return str(value)

    def _placeholder_node(self, item: _WorkItem, node_id: str, state: _BuildState) -> GraphNode:
        self._record(state, GraphProcessingError(
            f"Max depth {self.config.max_depth} reached at {item.path}; subtree truncated",
            ErrorType.STRUCTURAL_GUARD,
            context={"path": item.path}
        ))
        return GraphNode(
            id=node_id,
            kind=NodeKind.NULL,
            field_name=item.field_name,
            depth=item.depth,
            path=item.path,
            display_value=PLACEHOLDER_DISPLAY,
            is_root=item.parent_id is None,
            is_metadata=item.is_metadata,
            is_placeholder=True
        )

    def _error_node(self, item: _WorkItem, node_id: str, error: Exception,
                    state: _BuildState) -> GraphNode:
        self._record(state, GraphProcessingError(
            f"Failed to process {item.path}: {error}",
            ErrorType.TRAVERSAL,
            context={"path": item.path}
        ))
        return GraphNode(
            id=node_id,
            kind=NodeKind.NULL,
            field_name=item.field_name,
            depth=item.depth,
            path=item.path,
            display_value=TRAVERSAL_ERROR_DISPLAY,
            is_root=item.parent_id is None,
            is_metadata=item.is_metadata,
            is_error=True
        )

    def _error_root_node(self) -> GraphNode:
        return GraphNode(
            id=ERROR_NODE_ID,
            kind=NodeKind.NULL,
            field_name="error",
            depth=0,
            path="error",
            display_value="Error parsing JSON",
            is_error=True
        )

    def _record(self, state: _BuildState, error: GraphProcessingError) -> None:
        response = self.error_handler.handle_processing_error(error)
        state.diagnostics.append(response.diagnostic)
