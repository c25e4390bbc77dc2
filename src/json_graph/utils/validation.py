"""Validation utilities for JSON input and graph integrity."""

import json
from collections import deque
from typing import Any, List, Sequence
from ..types import ValidationResult, ValidationError, ErrorType
from ..models import GraphNode, GraphEdge
from .graph_index import GraphIndex


class ValidationUtils:
    """Utility class for validating JSON input and built graphs."""

    @staticmethod
    def validate_json_string(json_string: str, max_depth: int = 50) -> ValidationResult:
        """
        Validate JSON string syntax and nesting.

        Args:
            json_string: JSON string to validate
            max_depth: Depth guard the document will be built with

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        # Check if string is empty
        if not json_string.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON string is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        # Try to parse JSON
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)
        except RecursionError:
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message="JSON nesting is too deep to parse",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        depth = ValidationUtils.calculate_max_depth(data)
        if depth >= max_depth:
            warnings.append(f"Deep nesting detected (depth: {depth}). "
                            f"Levels at or beyond {max_depth} will be replaced by placeholders.")

        return ValidationResult(is_valid=True, errors=errors, warnings=warnings)

    @staticmethod
    def calculate_max_depth(data: Any) -> int:
        """Calculate maximum nesting depth (a scalar root has depth 0)."""
        max_depth = 0
        stack = [(data, 0)]
        while stack:
            value, depth = stack.pop()
            max_depth = max(max_depth, depth)
            if isinstance(value, dict):
                stack.extend((child, depth + 1) for child in value.values())
            elif isinstance(value, list):
                stack.extend((child, depth + 1) for child in value)
        return max_depth

    @staticmethod
    def validate_graph(nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]) -> ValidationResult:
        """
        Check that a node/edge collection forms a well-formed rooted tree.

        Args:
            nodes: Graph nodes
            edges: Graph edges

        Returns:
            ValidationResult with validation details
        """
        errors: List[ValidationError] = []
        warnings: List[str] = []
        index = GraphIndex(nodes, edges)

        if len(index.node_map) != len(nodes):
            seen = set()
            for node in nodes:
                if node.id in seen:
                    errors.append(ValidationError(
                        type=ErrorType.STRUCTURE,
                        message=f"Duplicate node id {node.id}",
                        location=node.path
                    ))
                seen.add(node.id)

        for edge in edges:
            for end in (edge.source, edge.target):
                if end not in index.node_map:
                    errors.append(ValidationError(
                        type=ErrorType.STRUCTURE,
                        message=f"Edge {edge.id} references unknown node {end}",
                        location=edge.id
                    ))

        for node_id, parents in index.parents.items():
            if len(parents) > 1:
                errors.append(ValidationError(
                    type=ErrorType.STRUCTURE,
                    message=f"Node {node_id} has {len(parents)} parents",
                    location=node_id
                ))

        roots = [node for node in nodes if node.is_root]
        if len(roots) > 1:
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message=f"Graph has {len(roots)} root nodes",
                location="root"
            ))

        root = index.find_root()
        if root is None:
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message="Graph has no root node",
                location="root"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        if index.has_parent(root.id):
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message=f"Root node {root.id} has an incoming edge",
                location=root.path
            ))

        # Breadth-first walk for reachability, cycles and depth consistency
        visited = {root.id}
        queue = deque([(root.id, 0)])
        while queue:
            node_id, level = queue.popleft()
            node = index.get(node_id)
            if node is not None and node.depth != level:
                errors.append(ValidationError(
                    type=ErrorType.STRUCTURE,
                    message=f"Node {node_id} has depth {node.depth} but sits at level {level}",
                    location=node.path
                ))
            for child_id in index.children_of(node_id):
                if child_id in visited:
                    errors.append(ValidationError(
                        type=ErrorType.STRUCTURE,
                        message=f"Cycle or shared child detected at node {child_id}",
                        location=child_id
                    ))
                    continue
                visited.add(child_id)
                queue.append((child_id, level + 1))

        unreachable = [node.id for node in nodes if node.id not in visited]
        if unreachable:
            warnings.append(f"{len(unreachable)} node(s) are not reachable from the root: "
                            f"{', '.join(unreachable[:5])}")

        for node in nodes:
            if node.is_container:
                actual = len(index.children_of(node.id))
                if actual != node.child_count:
                    warnings.append(f"Node {node.id} reports {node.child_count} children "
                                    f"but has {actual} outgoing edges")
            elif index.children_of(node.id):
                warnings.append(f"Primitive node {node.id} has outgoing edges")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )
