"""
Domain Layer

Defines constants, entities, and value objects that form the core of the business logic.
Has no dependencies on external libraries.
"""

from graphomotor_eval.domain.constants import (
    DEFAULT_BATCH_PAUSE_SECONDS,
    DEFAULT_BATCH_SIZE,
    MAX_TRACE_POINTS,
    MIN_TRACE_POINTS,
    NORMALIZED_SPAN,
)
from graphomotor_eval.domain.entities import (
    EvaluationFailure,
    EvaluationMetadata,
    EvaluationOutcome,
    EvaluationResult,
    EvaluationSuccess,
    EvaluatorStatistics,
    ResultDetails,
)
from graphomotor_eval.domain.value_objects import (
    BuiltRequest,
    EvaluationRequest,
    ExerciseContext,
    ExpectedShape,
    InputValidation,
    Point,
    SubmitResponse,
    Trace,
    parse_trace,
)

__all__ = [
    # constants
    "DEFAULT_BATCH_PAUSE_SECONDS",
    "DEFAULT_BATCH_SIZE",
    "MAX_TRACE_POINTS",
    "MIN_TRACE_POINTS",
    "NORMALIZED_SPAN",
    # entities
    "EvaluationFailure",
    "EvaluationMetadata",
    "EvaluationOutcome",
    "EvaluationResult",
    "EvaluationSuccess",
    "EvaluatorStatistics",
    "ResultDetails",
    # value objects
    "BuiltRequest",
    "EvaluationRequest",
    "ExerciseContext",
    "ExpectedShape",
    "InputValidation",
    "Point",
    "SubmitResponse",
    "Trace",
    "parse_trace",
]
