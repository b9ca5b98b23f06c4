"""
Domain Entities

Defines the evaluation result schema and the outcome of a dispatch.
"""

import math
from dataclasses import dataclass, field
from typing import Union


def clamp_unit(value: float) -> float:
    """Clamp a metric to the range 0.0-1.0"""
    return max(0.0, min(1.0, float(value)))


def clamp_score(value: float) -> int:
    """Round half up and clamp a score to the integer range 0-100"""
    return max(0, min(100, math.floor(float(value) + 0.5)))


@dataclass
class ResultDetails:
    """Detailed comparison against the reference trace"""
    similarity: float = 0.0
    errors: list[str] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.similarity = clamp_unit(self.similarity)


@dataclass
class EvaluationResult:
    """Validated evaluator judgment. Numeric fields are clamped on construction."""
    score: int
    analysis: str
    detected_shape: str
    precision: float = 0.0
    coverage: float = 0.0
    suggestions: list[str] = field(default_factory=list)
    details: ResultDetails = field(default_factory=ResultDetails)

    def __post_init__(self):
        self.score = clamp_score(self.score)
        self.precision = clamp_unit(self.precision)
        self.coverage = clamp_unit(self.coverage)


@dataclass
class EvaluationMetadata:
    """Timing information attached to every outcome"""
    timestamp: str
    processing_time_ms: int
    tokens_used: int | None = None

    def __post_init__(self):
        if self.processing_time_ms < 0:
            raise ValueError("processing_time_ms must be non-negative")


@dataclass
class EvaluationSuccess:
    """A dispatch that produced a validated result"""
    result: EvaluationResult
    metadata: EvaluationMetadata
    success: bool = field(default=True, init=False)


@dataclass
class EvaluationFailure:
    """A dispatch that failed at any stage"""
    error: str
    metadata: EvaluationMetadata
    success: bool = field(default=False, init=False)


EvaluationOutcome = Union[EvaluationSuccess, EvaluationFailure]


@dataclass
class EvaluatorStatistics:
    """Aggregate usage counters reported by the backend"""
    total_evaluations: int
    average_processing_time_ms: float
    tokens_used: int
    last_evaluation_timestamp: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "EvaluatorStatistics":
        """Create from the backend's stats body (Spanish keys, English fallback)"""
        def pick(*keys, default=None):
            for key in keys:
                if data.get(key) is not None:
                    return data[key]
            return default

        return cls(
            total_evaluations=int(pick("totalEvaluaciones", "totalEvaluations", default=0)),
            average_processing_time_ms=float(pick("promedioTiempo", "averageProcessingTime", default=0.0)),
            tokens_used=int(pick("tokensUsados", "tokensUsed", default=0)),
            last_evaluation_timestamp=pick("ultimaEvaluacion", "lastEvaluation"),
        )
