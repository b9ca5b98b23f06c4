"""
Health Check

Probes availability of the evaluation backend and retrieves its usage counters.
"""

import logging

from graphomotor_eval.domain.entities import EvaluatorStatistics
from graphomotor_eval.infrastructure.evaluator_clients.base import EvaluatorClient

logger = logging.getLogger(__name__)


async def check_availability(client: EvaluatorClient) -> bool:
    """
    Check whether the evaluation backend is reachable and healthy.

    Args:
        client: Evaluator client

    Returns:
        bool: True on a success-class status, False on any error
    """
    try:
        return await client.check_status()
    except Exception as e:
        logger.warning("Error checking evaluator availability: %s", e)
        return False


async def get_statistics(client: EvaluatorClient) -> EvaluatorStatistics | None:
    """
    Retrieve aggregate usage counters.

    Args:
        client: Evaluator client

    Returns:
        EvaluatorStatistics, or None on any transport error, non-success status
        or malformed body
    """
    try:
        data = await client.fetch_statistics()
    except Exception as e:
        logger.warning("Error fetching evaluator statistics: %s", e)
        return None

    if data is None:
        return None

    try:
        return EvaluatorStatistics.from_dict(data)
    except (TypeError, ValueError) as e:
        logger.warning("Malformed evaluator statistics: %s", e)
        return None
