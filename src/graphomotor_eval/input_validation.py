"""
Input Validation

Checks that both traces have a point count the evaluator can work with.
"""

from graphomotor_eval.domain.constants import MAX_TRACE_POINTS, MIN_TRACE_POINTS
from graphomotor_eval.domain.value_objects import InputValidation, Trace


def validate_input_lengths(user_trace: Trace, model_trace: Trace) -> InputValidation:
    """
    Check both traces against the point count bounds

    Every violation is reported; checks do not short-circuit.

    Args:
        user_trace: Trace drawn by the patient
        model_trace: Reference trace

    Returns:
        InputValidation (valid flag + error messages)
    """
    errors: list[str] = []

    if len(user_trace) < MIN_TRACE_POINTS:
        errors.append(f"User trace has too few points (minimum {MIN_TRACE_POINTS})")
    if len(model_trace) < MIN_TRACE_POINTS:
        errors.append(f"Model trace has too few points (minimum {MIN_TRACE_POINTS})")
    if len(user_trace) > MAX_TRACE_POINTS:
        errors.append(f"User trace has too many points (maximum {MAX_TRACE_POINTS})")
    if len(model_trace) > MAX_TRACE_POINTS:
        errors.append(f"Model trace has too many points (maximum {MAX_TRACE_POINTS})")

    return InputValidation(valid=not errors, errors=errors)
