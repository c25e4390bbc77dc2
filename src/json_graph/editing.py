"""Helpers for re-wiring a graph while it is being edited."""

from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple
from .config import EngineConfig
from .models import GraphNode, GraphEdge
from .types import ConnectionCheck, EdgeKind, ErrorType, GraphProcessingError, NodeKind
from .utils.graph_index import GraphIndex


def validate_connection(source: Optional[GraphNode], target: Optional[GraphNode],
                        edges: Optional[Sequence[GraphEdge]] = None) -> ConnectionCheck:
    """
    Check whether ``target`` may become a child of ``source``.

    When ``edges`` is given, connections that would close a cycle are
    rejected as well.
    """
    if source is None or target is None:
        return ConnectionCheck(valid=False, reason="Node not found")

    if source.id == target.id:
        return ConnectionCheck(valid=False, reason="A node cannot contain itself")

    if not source.is_container:
        return ConnectionCheck(valid=False, reason="Primitive values cannot have children")

    if edges is not None:
        index = GraphIndex([source, target], edges)
        if target.id in index.ancestors_of(source.id):
            return ConnectionCheck(valid=False, reason="Connection would create a cycle")

    return ConnectionCheck(valid=True)


def suggest_field_name(source: GraphNode, target: GraphNode,
                       edges: Optional[Sequence[GraphEdge]] = None) -> str:
    """Suggest the key a dragged-in node should get under ``source``."""
    if source.kind == NodeKind.ARRAY:
        count = source.child_count
        if edges is not None:
            count = sum(1 for edge in edges if edge.source == source.id and edge.target != target.id)
        return f"[{count}]"

    if target.field_name and target.field_name != "root" and not target.field_name.startswith("["):
        return target.field_name

    if target.kind == NodeKind.ARRAY:
        return "items"
    if target.kind == NodeKind.OBJECT:
        return "data"
    return "value"


def connect(nodes: Sequence[GraphNode], edges: Sequence[GraphEdge], source_id: str,
            target_id: str, field_name: Optional[str] = None,
            config: Optional[EngineConfig] = None) -> Tuple[List[GraphNode], List[GraphEdge]]:
    """
    Move ``target_id`` under ``source_id``.

    Any existing incoming edge of the target is dropped and the new edge is
    appended, so the target becomes the last child of the source. Metadata
    tagging of the moved subtree is recomputed against its new parent, and
    every edge inside it is retagged to match. Depth and path are not
    recomputed; rebuild the graph for that.

    Returns:
        New (nodes, edges) lists

    Raises:
        GraphProcessingError: If the connection is not allowed
    """
    config = config or EngineConfig()
    index = GraphIndex(nodes, edges)
    source = index.get(source_id)
    target = index.get(target_id)

    check = validate_connection(source, target, edges)
    if not check.valid:
        raise GraphProcessingError(
            f"Cannot connect {source_id} -> {target_id}: {check.reason}",
            ErrorType.STRUCTURE,
            context={"source": source_id, "target": target_id}
        )

    name = field_name or suggest_field_name(source, target, edges)

    old_parents = set(index.parents.get(target_id, []))
    new_edges = [edge for edge in edges if edge.target != target_id]
    new_edges.append(GraphEdge.between(source_id, target_id))

    moved = _subtree_metadata(source, target_id, name, GraphIndex(nodes, new_edges), config)

    new_nodes = []
    for node in nodes:
        if node.id == target_id:
            node = replace(node, field_name=name, is_root=False)
        elif node.id == source_id or node.id in old_parents:
            if node.is_container:
                count = sum(1 for edge in new_edges if edge.source == node.id)
                node = replace(node, child_count=count)
        if node.id in moved and node.is_metadata != moved[node.id]:
            node = replace(node, is_metadata=moved[node.id])
        new_nodes.append(node)

    new_edges = [
        _retag(edge, moved[edge.target]) if edge.target in moved else edge
        for edge in new_edges
    ]
    return new_nodes, new_edges


def _subtree_metadata(source: GraphNode, target_id: str, name: str,
                      index: GraphIndex, config: EngineConfig) -> Dict[str, bool]:
    """Metadata flag of every node in the moved subtree, keyed by node id."""
    tags = {target_id: source.is_metadata or (
        source.kind == NodeKind.OBJECT and config.is_metadata_field(name))}
    stack = [target_id]
    while stack:
        parent_id = stack.pop()
        parent = index.get(parent_id)
        for child_id in index.children_of(parent_id):
            child = index.get(child_id)
            if child is None or child_id in tags:
                continue
            keyed = parent is not None and parent.kind == NodeKind.OBJECT
            tags[child_id] = tags[parent_id] or (keyed and config.is_metadata_field(child.field_name))
            stack.append(child_id)
    return tags


def _retag(edge: GraphEdge, is_metadata: bool) -> GraphEdge:
    kind = EdgeKind.METADATA_LINK if is_metadata else EdgeKind.NORMAL
    return edge if edge.kind == kind else replace(edge, kind=kind)
