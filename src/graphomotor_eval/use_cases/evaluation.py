"""
Evaluation Execution

Handles single dispatches through paced batches, including outcome aggregation.
"""

import asyncio
import logging
import time
from dataclasses import asdict

import pandas as pd

from graphomotor_eval.domain.entities import (
    EvaluationFailure,
    EvaluationMetadata,
    EvaluationOutcome,
    EvaluationSuccess,
)
from graphomotor_eval.domain.value_objects import EvaluationRequest, SubmitResponse
from graphomotor_eval.infrastructure.evaluator_clients.base import EvaluatorClient
from graphomotor_eval.input_validation import validate_input_lengths
from graphomotor_eval.prompt_builder import build_submission, utc_timestamp
from graphomotor_eval.scoring.response_validator import ResponseValidationError, validate_response
from graphomotor_eval.service_config import ServiceConfig, load_config

logger = logging.getLogger(__name__)


def _failure(error: str, processing_time_ms: int = 0) -> EvaluationFailure:
    return EvaluationFailure(
        error=error,
        metadata=EvaluationMetadata(timestamp=utc_timestamp(), processing_time_ms=processing_time_ms),
    )


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


async def evaluate(
    request: EvaluationRequest,
    client: EvaluatorClient,
    config: ServiceConfig | None = None,
) -> EvaluationOutcome:
    """
    Execute a single evaluation.

    Never raises: every failure is returned as an EvaluationFailure. Failures
    before anything is sent carry processing_time_ms=0; later failures carry
    the measured elapsed time.

    Args:
        request: Evaluation request
        client: Evaluator client
        config: ServiceConfig (loads from env if not provided)

    Returns:
        EvaluationOutcome
    """
    start = time.monotonic()
    try:
        if config is None:
            config = load_config()
        return await _dispatch(request, client, config, start)
    except Exception as e:
        logger.warning("Unexpected evaluation error: %s", e, exc_info=True)
        return _failure(f"Unexpected evaluation error: {e}", _elapsed_ms(start))


async def _dispatch(
    request: EvaluationRequest,
    client: EvaluatorClient,
    config: ServiceConfig,
    start: float,
) -> EvaluationOutcome:
    lengths = validate_input_lengths(request.user_trace, request.model_trace)
    if not lengths.valid:
        logger.warning("Rejected request before dispatch: %s", lengths.errors)
        return _failure("; ".join(lengths.errors))

    try:
        body = build_submission(request, config.evaluator)
    except Exception as e:
        logger.warning("Failed to build evaluation request: %s", e)
        return _failure(f"Failed to build evaluation request: {e}")

    logger.debug(
        "Dispatching evaluation: user=%d points, model=%d points, shape=%s",
        len(request.user_trace), len(request.model_trace), request.context.expected_shape.value,
    )

    timeout = config.backend.timeout_seconds
    try:
        async with asyncio.timeout(timeout):
            response = await client.submit(body)
    except TimeoutError:
        logger.warning("Evaluation timed out after %ss", timeout)
        return _failure(f"Evaluation timed out after {timeout}s", _elapsed_ms(start))
    except Exception as e:
        logger.warning("Evaluation dispatch failed: %s", e)
        return _failure(str(e) or type(e).__name__, _elapsed_ms(start))

    processing_time_ms = _elapsed_ms(start)

    if not isinstance(response, SubmitResponse):
        logger.warning("Evaluator client returned %s instead of a SubmitResponse", type(response).__name__)
        return _failure("Unknown server error", processing_time_ms)

    if not response.success or not response.data:
        error = response.error or "Unknown server error"
        logger.warning("Evaluation backend reported failure: %s", error)
        return _failure(str(error), processing_time_ms)

    try:
        result = validate_response(response.data)
    except ResponseValidationError as e:
        logger.warning("Rejected evaluator response: %s", e)
        return _failure(f"Error processing evaluator response: {e}", processing_time_ms)
    except Exception as e:
        logger.warning("Unexpected error validating evaluator response: %s", e)
        return _failure(f"Error processing evaluator response: {e}", processing_time_ms)

    return EvaluationSuccess(
        result=result,
        metadata=EvaluationMetadata(
            timestamp=utc_timestamp(),
            processing_time_ms=processing_time_ms,
            tokens_used=response.tokens_used,
        ),
    )


async def evaluate_batch(
    requests: list[EvaluationRequest],
    client: EvaluatorClient,
    config: ServiceConfig | None = None,
) -> list[EvaluationOutcome]:
    """
    Execute evaluations in paced groups.

    Each group of config.batch.batch_size requests is dispatched concurrently
    and joined before the next group starts; groups are separated by a fixed
    pause of config.batch.pause_seconds (none after the last group).

    Args:
        requests: Evaluation requests
        client: Evaluator client
        config: ServiceConfig (loads from env if not provided)

    Returns:
        list[EvaluationOutcome]: One outcome per request, in input order
    """
    if config is None:
        config = load_config()

    batch_size = config.batch.batch_size
    outcomes: list[EvaluationOutcome] = []
    logger.info("Dispatching %d evaluations in groups of %d", len(requests), batch_size)

    for start in range(0, len(requests), batch_size):
        group = requests[start:start + batch_size]
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(evaluate(request, client, config)) for request in group]
        outcomes.extend(task.result() for task in tasks)

        if start + batch_size < len(requests):
            await asyncio.sleep(config.batch.pause_seconds)

    succeeded = sum(1 for o in outcomes if o.success)
    logger.info("Processed %d evaluations (%d succeeded)", len(outcomes), succeeded)
    return outcomes


def outcomes_to_dataframe(outcomes: list[EvaluationOutcome]) -> pd.DataFrame:
    """
    Tabulate outcomes, one row per request in input order.

    Args:
        outcomes: Outcomes returned by evaluate / evaluate_batch

    Returns:
        pd.DataFrame
    """
    rows = []
    for index, outcome in enumerate(outcomes):
        row = {
            "index": index,
            "success": outcome.success,
            "score": None,
            "detected_shape": None,
            "precision": None,
            "coverage": None,
            "similarity": None,
            "error": None,
            **asdict(outcome.metadata),
        }
        if isinstance(outcome, EvaluationSuccess):
            result = outcome.result
            row.update({
                "score": result.score,
                "detected_shape": result.detected_shape,
                "precision": result.precision,
                "coverage": result.coverage,
                "similarity": result.details.similarity,
            })
        else:
            row["error"] = outcome.error
        rows.append(row)

    columns = [
        "index", "success", "score", "detected_shape", "precision", "coverage",
        "similarity", "error", "timestamp", "processing_time_ms", "tokens_used",
    ]
    return pd.DataFrame(rows, columns=columns)


def summarize_outcomes(df: pd.DataFrame) -> dict:
    """
    Aggregate totals over an outcome table.

    Args:
        df: Table built by outcomes_to_dataframe

    Returns:
        dict with total, succeeded, failed, mean_score, mean_processing_time_ms, total_tokens
    """
    if df.empty:
        return {
            "total": 0,
            "succeeded": 0,
            "failed": 0,
            "mean_score": 0.0,
            "mean_processing_time_ms": 0.0,
            "total_tokens": 0,
        }

    successes = df[df["success"]]
    return {
        "total": int(len(df)),
        "succeeded": int(len(successes)),
        "failed": int(len(df) - len(successes)),
        "mean_score": float(pd.to_numeric(successes["score"]).mean()) if not successes.empty else 0.0,
        "mean_processing_time_ms": float(df["processing_time_ms"].mean()),
        "total_tokens": int(pd.to_numeric(df["tokens_used"], errors="coerce").fillna(0).sum()),
    }
