"""Graph node model with validation and serialization helpers."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional
from ..types import NodeKind


NODE_COLORS = {
    NodeKind.OBJECT: "#9333ea",
    NodeKind.ARRAY: "#3b82f6",
    NodeKind.STRING: "#10b981",
    NodeKind.NUMBER: "#f59e0b",
    NodeKind.BOOLEAN: "#ef4444",
    NodeKind.NULL: "#6b7280",
}


@dataclass(frozen=True)
class Position:
    """Canvas coordinates of a node."""
    x: float = 0
    y: float = 0

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'Position':
        if not data:
            return cls()
        return cls(x=data.get("x", 0), y=data.get("y", 0))


@dataclass
class GraphNode:
    """
    One visual unit of the graph: a single JSON field or the synthetic root.

    Container nodes never hold their value; their content is reachable only
    through outgoing edges. Primitive nodes keep the literal in ``value`` so
    the graph can be turned back into JSON. ``display_value`` is a label for
    renderers and is never read during reconstruction.
    """

    id: str
    kind: NodeKind
    field_name: str
    depth: int
    path: str
    display_value: str
    position: Position = field(default_factory=Position)
    value: Any = None
    child_count: int = 0
    is_root: bool = False
    is_metadata: bool = False
    is_placeholder: bool = False
    is_error: bool = False

    def __post_init__(self):
        """Validate node after initialization."""
        self._validate()

    def _validate(self) -> None:
        if not self.id:
            raise ValueError("id cannot be empty")

        if not isinstance(self.kind, NodeKind):
            raise ValueError(f"Invalid kind: {self.kind}")

        if self.depth < 0:
            raise ValueError("depth must be non-negative")

        if not isinstance(self.display_value, str):
            raise ValueError("display_value must be a string")

        if self.kind.is_container and self.value is not None:
            raise ValueError("container nodes cannot hold a value")

    @property
    def is_container(self) -> bool:
        return self.kind.is_container

    @property
    def render_type(self) -> str:
        """Renderer component name for this node."""
        if self.is_metadata and self.is_container:
            return "jsonMetadata"
        if self.kind == NodeKind.OBJECT:
            return "jsonObject"
        if self.kind == NodeKind.ARRAY:
            return "jsonArray"
        return "jsonPrimitive"

    @property
    def color(self) -> str:
        return NODE_COLORS[self.kind]

    def with_position(self, x: float, y: float) -> 'GraphNode':
        """Return a copy of this node placed at (x, y)."""
        return replace(self, position=Position(x, y))

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "kind": self.kind.value,
            "fieldName": self.field_name,
            "depth": self.depth,
            "path": self.path,
            "displayValue": self.display_value,
            "position": self.position.to_dict(),
            "value": self.value,
            "childCount": self.child_count,
            "isRoot": self.is_root,
            "isMetadata": self.is_metadata,
            "isPlaceholder": self.is_placeholder,
            "isError": self.is_error,
            "renderType": self.render_type,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GraphNode':
        """Create GraphNode from dictionary."""
        kind = NodeKind(data["kind"])
        return cls(
            id=data["id"],
            kind=kind,
            field_name=data.get("fieldName", ""),
            depth=data.get("depth", 0),
            path=data.get("path", ""),
            display_value=str(data.get("displayValue", "")),
            position=Position.from_dict(data.get("position")),
            value=None if kind.is_container else data.get("value"),
            child_count=data.get("childCount", 0),
            is_root=data.get("isRoot", False),
            is_metadata=data.get("isMetadata", False),
            is_placeholder=data.get("isPlaceholder", False),
            is_error=data.get("isError", False),
        )
