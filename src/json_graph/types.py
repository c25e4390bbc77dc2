"""Core type definitions for the JSON graph engine."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class NodeKind(Enum):
    """Enumeration of JSON value kinds a graph node can represent."""
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"

    @property
    def is_container(self) -> bool:
        return self in (NodeKind.OBJECT, NodeKind.ARRAY)


class EdgeKind(Enum):
    """Enumeration of edge kinds."""
    NORMAL = "normal"
    METADATA_LINK = "metadata_link"


class ErrorType(Enum):
    """Enumeration of error types."""
    STRUCTURAL_GUARD = "structural_guard"
    FORMATTING = "formatting"
    TRAVERSAL = "traversal"
    RECONSTRUCTION = "reconstruction"
    SYNTAX = "syntax"
    STRUCTURE = "structure"


class _Undefined:
    """Input-only stand-in for a missing value; classified as null."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


@dataclass
class Diagnostic:
    """A side-channel report of a degraded (but recovered) operation."""
    error_type: ErrorType
    message: str
    path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "errorType": self.error_type.value,
            "message": self.message,
            "path": self.path,
        }


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input or graph validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str
    diagnostic: Optional[Diagnostic] = None


@dataclass
class ConnectionCheck:
    """Outcome of checking whether two nodes may be connected."""
    valid: bool
    reason: Optional[str] = None


@dataclass
class ReconstructionResult:
    """Result of rebuilding a JSON value from a graph."""
    value: Any
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def warnings(self) -> List[str]:
        return [d.message for d in self.diagnostics]


class GraphProcessingError(Exception):
    """Custom exception for graph processing errors."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context or {}


# Abstract base classes for interfaces

class GraphEngineInterface(ABC):
    """Abstract interface for the JSON graph engine."""

    @abstractmethod
    def build(self, data: Any) -> "GraphBuildResult":
        """Turn a JSON value into graph nodes and edges."""
        pass

    @abstractmethod
    def layout(self, nodes: List["GraphNode"], edges: List["GraphEdge"],
               previous: Optional[List["GraphNode"]] = None) -> List["GraphNode"]:
        """Assign positions to built nodes."""
        pass

    @abstractmethod
    def reconstruct(self, nodes: List["GraphNode"], edges: List["GraphEdge"]) -> Any:
        """Rebuild a JSON value from graph nodes and edges."""
        pass


class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""

    @abstractmethod
    def validate_input(self, input_data: str) -> ValidationResult:
        """Validate input data."""
        pass

    @abstractmethod
    def handle_processing_error(self, error: GraphProcessingError) -> ErrorResponse:
        """Handle processing errors."""
        pass
