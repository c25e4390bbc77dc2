"""Graph edge model."""

from dataclasses import dataclass
from typing import Any, Dict
from ..types import EdgeKind


@dataclass
class GraphEdge:
    """A directed parent -> child containment relation."""

    id: str
    source: str
    target: str
    kind: EdgeKind = EdgeKind.NORMAL

    def __post_init__(self):
        """Validate edge after initialization."""
        if not self.source or not self.target:
            raise ValueError("source and target cannot be empty")

        if not isinstance(self.kind, EdgeKind):
            raise ValueError(f"Invalid kind: {self.kind}")

    @classmethod
    def between(cls, source: str, target: str, kind: EdgeKind = EdgeKind.NORMAL) -> 'GraphEdge':
        """Create an edge with the conventional ``edge-<source>-<target>`` id."""
        return cls(id=f"edge-{source}-{target}", source=source, target=target, kind=kind)

    @property
    def animated(self) -> bool:
        return self.kind == EdgeKind.METADATA_LINK

    @property
    def render_type(self) -> str:
        return "smoothstep"

    def to_dict(self) -> Dict[str, Any]:
        """Convert edge to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "kind": self.kind.value,
            "animated": self.animated,
            "type": self.render_type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GraphEdge':
        """Create GraphEdge from dictionary."""
        source = data["source"]
        target = data["target"]
        return cls(
            id=data.get("id") or f"edge-{source}-{target}",
            source=source,
            target=target,
            kind=EdgeKind(data.get("kind", EdgeKind.NORMAL.value)),
        )
