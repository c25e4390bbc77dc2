"""Engine configuration."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Tuple


MetadataPredicate = Callable[[str], bool]

DEFAULT_METADATA_FIELDS: Tuple[str, ...] = (
    "meta",
    "recommendedStructuredData",
    "semanticRelationships",
    "aiSearchBoost",
    "pageBlueprint",
)


def field_name_predicate(names: Iterable[str]) -> MetadataPredicate:
    """Build a metadata predicate matching an exact set of field names."""
    name_set = frozenset(names)

    def is_metadata_field(field_name: str) -> bool:
        return field_name in name_set

    return is_metadata_field


@dataclass
class EngineConfig:
    """
    Tunables shared by the builder, layout assigner and reconstructor.

    ``metadata_predicate`` takes precedence over ``metadata_fields`` when set.
    """

    max_depth: int = 50
    max_display_length: int = 100
    safe_display_mode: bool = True
    metadata_fields: Tuple[str, ...] = DEFAULT_METADATA_FIELDS
    metadata_predicate: Optional[MetadataPredicate] = field(default=None, compare=False)
    incremental_layout: bool = False
    horizontal_spacing: float = 280
    vertical_spacing: float = 150
    incremental_indent: float = 100
    incremental_row_height: float = 100
    merge_orphan_roots: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.metadata_fields = tuple(self.metadata_fields)
        self._validate()
        self._predicate = self.metadata_predicate or field_name_predicate(self.metadata_fields)

    def _validate(self) -> None:
        for name in ("max_depth", "max_display_length"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer, got {value!r}")

        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")

        if self.max_display_length < 1:
            raise ValueError("max_display_length must be positive")

        for name in ("horizontal_spacing", "vertical_spacing",
                     "incremental_indent", "incremental_row_height"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative")

        if self.metadata_predicate is not None and not callable(self.metadata_predicate):
            raise ValueError("metadata_predicate must be callable")

    def is_metadata_field(self, field_name: str) -> bool:
        return bool(self._predicate(field_name))

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary (the predicate is not serialized)."""
        return {
            "maxDepth": self.max_depth,
            "maxDisplayLength": self.max_display_length,
            "safeDisplayMode": self.safe_display_mode,
            "metadataFields": list(self.metadata_fields),
            "incrementalLayout": self.incremental_layout,
            "horizontalSpacing": self.horizontal_spacing,
            "verticalSpacing": self.vertical_spacing,
            "incrementalIndent": self.incremental_indent,
            "incrementalRowHeight": self.incremental_row_height,
            "mergeOrphanRoots": self.merge_orphan_roots,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EngineConfig':
        """Create EngineConfig from dictionary, using defaults for missing keys."""
        defaults = cls()
        return cls(
            max_depth=data.get("maxDepth", defaults.max_depth),
            max_display_length=data.get("maxDisplayLength", defaults.max_display_length),
            safe_display_mode=data.get("safeDisplayMode", defaults.safe_display_mode),
            metadata_fields=tuple(data.get("metadataFields", defaults.metadata_fields)),
            incremental_layout=data.get("incrementalLayout", defaults.incremental_layout),
            horizontal_spacing=data.get("horizontalSpacing", defaults.horizontal_spacing),
            vertical_spacing=data.get("verticalSpacing", defaults.vertical_spacing),
            incremental_indent=data.get("incrementalIndent", defaults.incremental_indent),
            incremental_row_height=data.get("incrementalRowHeight", defaults.incremental_row_height),
            merge_orphan_roots=data.get("mergeOrphanRoots", defaults.merge_orphan_roots),
        )
