"""
Evaluator client factory

Creates the backend client from configuration.
"""

from __future__ import annotations

from graphomotor_eval.infrastructure.evaluator_clients.base import (
    CredentialProvider,
    EvaluatorClient,
    env_token,
)
from graphomotor_eval.infrastructure.evaluator_clients.backend import BackendEvaluatorClient
from graphomotor_eval.service_config import ServiceConfig, load_config


def create_client(
    config: ServiceConfig | None = None,
    credential_provider: CredentialProvider | None = None,
) -> EvaluatorClient:
    """
    Create the evaluator client

    Args:
        config: ServiceConfig (loads from env if not provided)
        credential_provider: Token source (reads config.backend.token_env_var if not provided)

    Returns:
        EvaluatorClient
    """
    if config is None:
        config = load_config()
    if credential_provider is None:
        credential_provider = env_token(config.backend.token_env_var)

    return BackendEvaluatorClient(
        config.backend.base_url,
        credential_provider,
        timeout_seconds=config.backend.timeout_seconds,
    )
