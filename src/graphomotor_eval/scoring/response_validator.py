"""
Evaluator response validation

Turns the evaluator's free-text reply into an EvaluationResult. This is the
only place where untrusted evaluator output is interpreted.
"""

from __future__ import annotations

import json
import logging
import math
import re

from graphomotor_eval.domain.entities import EvaluationResult, ResultDetails

logger = logging.getLogger(__name__)


class ResponseValidationError(Exception):
    """Error raised when an evaluator response cannot be accepted"""
    pass


class ResponseParseError(ResponseValidationError):
    """The response is not valid JSON"""
    pass


class ResponseSchemaError(ResponseValidationError):
    """The response is JSON but lacks required fields"""
    pass


_FENCED_BLOCK_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")

# Spanish contract key first, English fallback
_SCORE_KEYS = ("puntuacion", "score")
_ANALYSIS_KEYS = ("analisis", "analysis")
_SHAPE_KEYS = ("formaDetectada", "detectedShape")
_PRECISION_KEYS = ("precision",)
_COVERAGE_KEYS = ("cobertura", "coverage")
_SUGGESTION_KEYS = ("sugerencias", "suggestions")
_DETAILS_KEYS = ("detalles", "details")
_SIMILARITY_KEYS = ("similitud", "similarity")
_ERROR_KEYS = ("errores", "errors")
_STRENGTH_KEYS = ("fortalezas", "strengths")


def strip_code_fences(raw: str) -> str:
    """Return the content of a fenced code block if present, else the trimmed text"""
    text = raw.strip()
    match = _FENCED_BLOCK_RE.search(text)
    if match:
        return match.group(1).strip()
    # Unterminated fence markers
    return text.replace("```json", "").replace("```", "").strip()


def _lookup(data: dict, keys: tuple[str, ...]):
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _to_number(value) -> float | None:
    """Interpret a JSON value as a finite number, or None"""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _to_text(value) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _to_string_list(value) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in value if item is not None]


def validate_response(raw: str) -> EvaluationResult:
    """
    Parse, check and clamp an evaluator reply

    Steps:
    1. Strip code fences
    2. JSON parse
    3. Presence check of score / analysis / detected shape
    4. Clamp numeric fields, default missing lists to []

    Args:
        raw: Raw evaluator output

    Returns:
        EvaluationResult

    Raises:
        ResponseParseError: When the text is not valid JSON
        ResponseSchemaError: When required fields are missing or invalid
    """
    if not isinstance(raw, str):
        raise ResponseParseError(f"Evaluator response must be text, got {type(raw).__name__}")

    text = strip_code_fences(raw)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Failed to parse evaluator response as JSON: {text[:200]}") from e

    if not isinstance(data, dict):
        raise ResponseSchemaError("Evaluator returned an invalid response structure: expected a JSON object")

    score = _to_number(_lookup(data, _SCORE_KEYS))
    analysis = _to_text(_lookup(data, _ANALYSIS_KEYS))
    detected_shape = _to_text(_lookup(data, _SHAPE_KEYS))

    missing = [
        name for name, value in (
            ("score", score),
            ("analysis", analysis),
            ("detectedShape", detected_shape),
        )
        if value is None
    ]
    if missing:
        raise ResponseSchemaError(
            f"Evaluator returned an invalid response structure: missing {', '.join(missing)}"
        )

    details = _lookup(data, _DETAILS_KEYS)
    if not isinstance(details, dict):
        details = {}

    result = EvaluationResult(
        score=score,
        analysis=analysis,
        detected_shape=detected_shape,
        precision=_to_number(_lookup(data, _PRECISION_KEYS)) or 0.0,
        coverage=_to_number(_lookup(data, _COVERAGE_KEYS)) or 0.0,
        suggestions=_to_string_list(_lookup(data, _SUGGESTION_KEYS)),
        details=ResultDetails(
            similarity=_to_number(_lookup(details, _SIMILARITY_KEYS)) or 0.0,
            errors=_to_string_list(_lookup(details, _ERROR_KEYS)),
            strengths=_to_string_list(_lookup(details, _STRENGTH_KEYS)),
        ),
    )
    logger.debug("Validated evaluator response: score=%d shape=%s", result.score, result.detected_shape)
    return result
