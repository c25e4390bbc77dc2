"""Main JSON graph engine wiring the builder, layout and reconstructor."""

import logging
from dataclasses import replace
from typing import Any, List, Optional, Sequence
from .types import GraphEngineInterface, ReconstructionResult
from .config import EngineConfig
from .models import GraphNode, GraphEdge, GraphBuildResult
from .value_classifier import ValueClassifier
from .error_handler import ErrorHandler
from .builder import TreeBuilder
from .layout import LayoutAssigner
from .reconstructor import Reconstructor


class JSONGraphEngine(GraphEngineInterface):
    """
    Bidirectional JSON <-> node-graph engine.

    ``build``, ``layout`` and ``reconstruct`` are pure and never raise;
    problems surface as diagnostics on the returned results and as log
    lines. The engine keeps no state between calls.
    """

    def __init__(self, config: Optional[EngineConfig] = None,
                 logger: Optional[logging.Logger] = None,
                 **overrides: Any):
        """
        Initialize the engine.

        Args:
            config: Optional EngineConfig
            logger: Optional logger instance
            **overrides: EngineConfig fields overriding ``config`` (e.g. ``max_depth=20``)
        """
        if overrides:
            config = replace(config or EngineConfig(), **overrides)

        self.config = config or EngineConfig()
        self.logger = logger or logging.getLogger(__name__)

        self.error_handler = ErrorHandler(self.logger, self.config.max_depth)
        self.classifier = ValueClassifier(
            max_display_length=self.config.max_display_length,
            safe_display_mode=self.config.safe_display_mode,
            logger=self.logger
        )
        self.builder = TreeBuilder(self.config, self.classifier, self.error_handler, self.logger)
        self.layout_assigner = LayoutAssigner(self.config, self.logger)
        self.reconstructor = Reconstructor(self.config, self.classifier, self.error_handler, self.logger)

    def build(self, data: Any) -> GraphBuildResult:
        """Turn a JSON value into graph nodes and edges."""
        return self.builder.build(data)

    def layout(self, nodes: Sequence[GraphNode], edges: Sequence[GraphEdge],
               previous: Optional[Sequence[GraphNode]] = None) -> List[GraphNode]:
        """Assign positions to nodes, keeping positions of ``previous`` nodes by path."""
        return self.layout_assigner.layout(nodes, edges, previous)

    def reconstruct(self, nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]) -> Any:
        """Rebuild a JSON value from graph nodes and edges."""
        return self.reconstructor.reconstruct(nodes, edges)

    def reconstruct_with_report(self, nodes: Sequence[GraphNode],
                                edges: Sequence[GraphEdge]) -> ReconstructionResult:
        """Rebuild a JSON value and return the diagnostics alongside it."""
        return self.reconstructor.reconstruct_with_report(nodes, edges)

    def build_and_layout(self, data: Any) -> GraphBuildResult:
        """Build a graph and run the hierarchical layout on it."""
        result = self.build(data)
        result.nodes = self.layout(result.nodes, result.edges)
        return result
