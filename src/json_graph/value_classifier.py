"""Value classification and display formatting for graph nodes."""

import logging
import math
from collections.abc import Mapping
from typing import Any, Optional
from .types import NodeKind, UNDEFINED


FORMAT_ERROR = "[Format Error]"
INVALID_DISPLAY = "[Invalid Display Value]"


class ValueClassifier:
    """
    Classifier mapping Python values produced by ``json.loads`` to node kinds.

    Also renders the always-string ``display_value`` shown on node labels
    and normalizes primitive literals that were edited in a graph.
    """

    def __init__(self, max_display_length: int = 100,
                 safe_display_mode: bool = True,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the value classifier.

        Args:
            max_display_length: Cap for string previews in safe display mode
            safe_display_mode: Truncate string previews to ``max_display_length``
            logger: Optional logger instance
        """
        self.max_display_length = max_display_length
        self.safe_display_mode = safe_display_mode
        self.logger = logger or logging.getLogger(__name__)

    def classify(self, value: Any) -> NodeKind:
        """
        Classify a value into a node kind.

        ``None`` and ``UNDEFINED`` are both null. Values outside the JSON
        model fall through to string.

        Args:
            value: Value to classify

        Returns:
            NodeKind for the value
        """
        if value is None or value is UNDEFINED:
            return NodeKind.NULL
        if isinstance(value, Mapping):
            return NodeKind.OBJECT
        if isinstance(value, (list, tuple)):
            return NodeKind.ARRAY
        if isinstance(value, bool):
            return NodeKind.BOOLEAN
        if isinstance(value, (int, float)):
            return NodeKind.NUMBER
        return NodeKind.STRING

    def is_json_value(self, value: Any) -> bool:
        """Check whether a leaf value belongs to the JSON data model."""
        return value is None or isinstance(value, (str, bool, int, float, Mapping, list, tuple))

    def format_display_value(self, value: Any, kind: NodeKind) -> str:
        """
        Render a value as a UI-safe label. Never raises.

        Args:
            value: Value to render
            kind: Kind previously returned by ``classify``

        Returns:
            Display string, or ``FORMAT_ERROR`` if rendering failed
        """
        try:
            display = self._format(value, kind)
        except Exception as e:
            self.logger.warning(f"Failed to format {kind.value} value for display: {e}")
            return FORMAT_ERROR

        if not isinstance(display, str):
            return INVALID_DISPLAY
        return display

    def _format(self, value: Any, kind: NodeKind) -> str:
        if kind == NodeKind.NULL:
            return "null"
        if kind == NodeKind.STRING:
            return f'"{self._truncate(str(value))}"'
        if kind == NodeKind.BOOLEAN:
            return "true" if value else "false"
        if kind == NodeKind.NUMBER:
            return str(value)
        if kind == NodeKind.ARRAY:
            return f"Array[{len(value)} items]"
        if kind == NodeKind.OBJECT:
            return f"Object{{{len(value)} fields}}"
        return self._truncate(str(value))

    def _truncate(self, text: str) -> str:
        if self.safe_display_mode:
            return text[:self.max_display_length]
        return text

    def coerce_literal(self, kind: NodeKind, value: Any) -> Any:
        """
        Normalize a primitive literal to its node kind.

        Values already of the right type are returned unchanged, so builder
        output passes through untouched.

        Args:
            kind: Primitive node kind
            value: Stored (possibly user-edited) literal

        Returns:
            Literal of the matching Python type
        """
        if kind == NodeKind.NULL:
            return None
        if kind == NodeKind.STRING:
            return value if isinstance(value, str) else ("" if value is None else str(value))
        if kind == NodeKind.BOOLEAN:
            if isinstance(value, str):
                return value.strip().lower() in ("true", "1", "yes")
            return bool(value)
        if kind == NodeKind.NUMBER:
            return self._coerce_number(value)
        return value

    def _coerce_number(self, value: Any) -> Any:
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, (int, float)):
            return value
        if isinstance(value, str):
            text = value.strip()
            try:
                return int(text)
            except ValueError:
                pass
            try:
                number = float(text)
            except ValueError:
                return 0
            return number if math.isfinite(number) else 0
        return 0
