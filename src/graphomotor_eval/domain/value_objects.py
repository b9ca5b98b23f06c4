"""
Domain Value Objects

Defines immutable data structures for points, exercise context and
evaluation requests.
"""

from dataclasses import dataclass
from enum import Enum


class ExpectedShape(str, Enum):
    """Shape the patient is asked to draw."""
    SQUARE = "square"
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    STAR = "star"
    LINE = "line"

    @property
    def label(self) -> str:
        """Spanish label embedded in the evaluator payload"""
        return _SHAPE_LABELS[self]

    @classmethod
    def parse(cls, value: "str | ExpectedShape") -> "ExpectedShape":
        """
        Resolve a shape from its English value or its Spanish label

        Raises:
            ValueError: If the value names no known shape
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for shape in cls:
            if key in (shape.value, shape.label):
                return shape
        raise ValueError(f"Unknown shape: {value}. Valid values: {[s.value for s in cls]}")


_SHAPE_LABELS = {
    ExpectedShape.SQUARE: "cuadrado",
    ExpectedShape.CIRCLE: "circulo",
    ExpectedShape.TRIANGLE: "triangulo",
    ExpectedShape.STAR: "estrella",
    ExpectedShape.LINE: "linea",
}


@dataclass(frozen=True)
class Point:
    """A single sampled pen/finger position"""
    x: float
    y: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "Point":
        return cls(x=data["x"], y=data["y"])


# Ordered stroke; order is significant
Trace = list[Point]


def parse_trace(raw: list) -> Trace:
    """Build a Trace from a list of {"x": .., "y": ..} dictionaries"""
    return [p if isinstance(p, Point) else Point.from_dict(p) for p in raw]


@dataclass(frozen=True)
class ExerciseContext:
    """
    Exercise metadata attached to a request

    Optional fields left as None receive their defaults when the payload is built.
    """
    expected_shape: ExpectedShape
    exercise_type: str | None = None
    level: str | None = None
    patient_label: str | None = None
    session_label: str | None = None
    timestamp: str | None = None  # ISO-8601


@dataclass(frozen=True)
class EvaluationRequest:
    """One user trace compared against one reference trace"""
    user_trace: Trace
    model_trace: Trace
    context: ExerciseContext


@dataclass
class BuiltRequest:
    """Structured payload plus the instruction document sent to the evaluator"""
    payload: dict
    instruction_text: str


@dataclass
class SubmitResponse:
    """Decoded reply from the evaluation backend"""
    success: bool
    data: str | None = None
    error: str | None = None
    tokens_used: int | None = None


@dataclass
class InputValidation:
    """Result of the trace length check"""
    valid: bool
    errors: list[str]
