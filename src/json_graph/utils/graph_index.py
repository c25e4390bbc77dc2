"""Adjacency index over a node/edge collection."""

from typing import Dict, List, Optional, Sequence
from ..models import GraphNode, GraphEdge


class GraphIndex:
    """
    Lookup tables derived from a node list and an edge list.

    Child order follows edge order, which is what keeps array elements
    in place across a build/reconstruct round trip.
    """

    def __init__(self, nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]):
        self.nodes = list(nodes)
        self.node_map: Dict[str, GraphNode] = {}
        for node in self.nodes:
            self.node_map.setdefault(node.id, node)

        self.children: Dict[str, List[str]] = {}
        self.parents: Dict[str, List[str]] = {}
        for edge in edges:
            self.children.setdefault(edge.source, []).append(edge.target)
            self.parents.setdefault(edge.target, []).append(edge.source)

    def get(self, node_id: str) -> Optional[GraphNode]:
        return self.node_map.get(node_id)

    def children_of(self, node_id: str) -> List[str]:
        return self.children.get(node_id, [])

    def parent_of(self, node_id: str) -> Optional[str]:
        parents = self.parents.get(node_id)
        return parents[0] if parents else None

    def has_parent(self, node_id: str) -> bool:
        return node_id in self.parents

    def parentless_nodes(self) -> List[GraphNode]:
        return [node for node in self.nodes if not self.has_parent(node.id)]

    def find_root(self) -> Optional[GraphNode]:
        """
        Locate the root node.

        A node flagged ``is_root`` wins; otherwise a node labelled ``root``
        that has no incoming edge. Returns None when neither exists.
        """
        for node in self.nodes:
            if node.is_root:
                return node
        for node in self.nodes:
            if node.field_name == "root" and not self.has_parent(node.id):
                return node
        return None

    def ancestors_of(self, node_id: str) -> List[str]:
        """Walk first-parent links upward; stops on a repeated id."""
        ancestors = []
        seen = {node_id}
        current = self.parent_of(node_id)
        while current is not None and current not in seen:
            ancestors.append(current)
            seen.add(current)
            current = self.parent_of(current)
        return ancestors
