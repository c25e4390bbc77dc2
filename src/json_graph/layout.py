"""Hierarchical layout for built graphs."""

import logging
from collections import deque
from typing import Dict, Iterable, List, Optional, Sequence
from .config import EngineConfig
from .models import GraphNode, GraphEdge, Position
from .utils.graph_index import GraphIndex


class LayoutAssigner:
    """
    Assigns canvas positions to graph nodes.

    Levels are breadth-first edge distances from the root. Each level is a
    vertical band at ``level * horizontal_spacing``; nodes inside a band
    are stacked in discovery order. Input nodes are never mutated.
    """

    def __init__(self, config: Optional[EngineConfig] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the layout assigner.

        Args:
            config: Optional EngineConfig supplying the spacing values
            logger: Optional logger instance
        """
        self.config = config or EngineConfig()
        self.logger = logger or logging.getLogger(__name__)

    def layout(self, nodes: Sequence[GraphNode], edges: Sequence[GraphEdge],
               previous: Optional[Iterable[GraphNode]] = None) -> List[GraphNode]:
        """
        Compute positions for every node.

        Args:
            nodes: Builder output nodes
            edges: Builder output edges
            previous: Nodes of an earlier layout; matching paths keep their position

        Returns:
            New node list, same order as ``nodes``, with positions set
        """
        try:
            positions = self._compute_positions(nodes, edges)
        except Exception as e:
            self.logger.error(f"Layout failed, returning nodes unchanged: {e}")
            return list(nodes)

        preserved: Dict[str, Position] = {}
        for node in previous or []:
            preserved.setdefault(node.path, node.position)

        kept = 0
        result = []
        for node in nodes:
            if node.path in preserved:
                position = preserved[node.path]
                kept += 1
            else:
                position = positions[node.id]
            result.append(node.with_position(position.x, position.y))

        self.logger.debug(f"Laid out {len(result)} nodes ({kept} positions preserved)")
        return result

    def assign_incremental(self, nodes: Sequence[GraphNode]) -> List[GraphNode]:
        """
        Position nodes in creation order: indent by depth, one row per node.

        Args:
            nodes: Nodes in the order they were built

        Returns:
            New node list with positions set
        """
        return [
            node.with_position(node.depth * self.config.incremental_indent,
                               row * self.config.incremental_row_height)
            for row, node in enumerate(nodes)
        ]

    def _compute_positions(self, nodes: Sequence[GraphNode],
                           edges: Sequence[GraphEdge]) -> Dict[str, Position]:
        index = GraphIndex(nodes, edges)
        root = index.find_root()

        if root is None:
            self.logger.warning("No root node found; laying out by stored depth")
            bands = self._bands_by_depth(nodes)
        else:
            bands = self._bands_by_level(index, root)

        positions: Dict[str, Position] = {}
        for level, node_ids in bands.items():
            for row, node_id in enumerate(node_ids):
                positions.setdefault(node_id, Position(
                    x=level * self.config.horizontal_spacing,
                    y=row * self.config.vertical_spacing
                ))
        return positions

    def _bands_by_level(self, index: GraphIndex, root: GraphNode) -> Dict[int, List[str]]:
        bands: Dict[int, List[str]] = {}
        visited = {root.id}
        queue = deque([(root.id, 0)])

        while queue:
            node_id, level = queue.popleft()
            bands.setdefault(level, []).append(node_id)
            for child_id in index.children_of(node_id):
                if child_id in visited or child_id not in index.node_map:
                    continue
                visited.add(child_id)
                queue.append((child_id, level + 1))

        orphans = [node.id for node in index.nodes if node.id not in visited]
        if orphans:
            self.logger.debug(f"{len(orphans)} nodes unreachable from root; placing them on an extra band")
            bands.setdefault(max(bands) + 1, []).extend(orphans)
        return bands

    def _bands_by_depth(self, nodes: Sequence[GraphNode]) -> Dict[int, List[str]]:
        bands: Dict[int, List[str]] = {}
        for node in nodes:
            bands.setdefault(node.depth, []).append(node.id)
        return dict(sorted(bands.items()))
