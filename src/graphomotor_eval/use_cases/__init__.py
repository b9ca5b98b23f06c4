"""
Use Cases Layer

Aggregates business logic and provides use cases called from the runner.
"""

from graphomotor_eval.use_cases.evaluation import (
    evaluate,
    evaluate_batch,
    outcomes_to_dataframe,
    summarize_outcomes,
)
from graphomotor_eval.use_cases.health_check import (
    check_availability,
    get_statistics,
)

__all__ = [
    # evaluation
    "evaluate",
    "evaluate_batch",
    "outcomes_to_dataframe",
    "summarize_outcomes",
    # health_check
    "check_availability",
    "get_statistics",
]
