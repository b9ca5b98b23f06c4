"""
Request Loader

Loads evaluation requests from JSON files.

Format:
    {
      "requests": [
        {
          "user_trace": [{"x": 50, "y": 50}, ...],
          "model_trace": [{"x": 50, "y": 50}, ...],   # optional
          "expected_shape": "square",
          "context": {"level": "...", "patient": "...", "session": "...",
                      "exercise_type": "...", "timestamp": "..."}  # optional
        }
      ]
    }
"""

import json

from graphomotor_eval.domain.value_objects import (
    EvaluationRequest,
    ExerciseContext,
    ExpectedShape,
    parse_trace,
)
from graphomotor_eval.reference_shapes import reference_trace


def _parse_request_data(data: dict, file_path: str = "<memory>") -> EvaluationRequest:
    """
    Create an EvaluationRequest from dictionary data

    A missing model_trace is replaced by the built-in reference trace for the
    expected shape.

    Raises:
        KeyError: If a required field is missing
        ValueError: If the shape is unknown
    """
    for field in ("user_trace", "expected_shape"):
        if field not in data:
            raise KeyError(f"Required field '{field}' is missing: {file_path}")

    shape = ExpectedShape.parse(data["expected_shape"])
    context_data = data.get("context") or {}

    context = ExerciseContext(
        expected_shape=shape,
        exercise_type=context_data.get("exercise_type"),
        level=context_data.get("level"),
        patient_label=context_data.get("patient"),
        session_label=context_data.get("session"),
        timestamp=context_data.get("timestamp"),
    )

    model_trace = data.get("model_trace")
    return EvaluationRequest(
        user_trace=parse_trace(data["user_trace"]),
        model_trace=parse_trace(model_trace) if model_trace is not None else reference_trace(shape),
        context=context,
    )


def load_requests(file_path: str) -> list[EvaluationRequest]:
    """
    Load a batch of evaluation requests

    Args:
        file_path: Path to the requests JSON file

    Returns:
        list[EvaluationRequest]: Requests in file order

    Raises:
        FileNotFoundError: If the file does not exist
        KeyError: If a required field is missing
        ValueError: If a shape is unknown
    """
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if "requests" not in data:
        raise KeyError(f"Required field 'requests' is missing: {file_path}")

    return [_parse_request_data(item, file_path) for item in data["requests"]]
