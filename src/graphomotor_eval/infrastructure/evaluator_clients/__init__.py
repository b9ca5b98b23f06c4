"""
Evaluator client package

Provides the transport boundary to the evaluation backend.
"""

from graphomotor_eval.infrastructure.evaluator_clients.base import (
    CredentialProvider,
    EvaluatorClient,
    EvaluatorTransportError,
    env_token,
    static_token,
)
from graphomotor_eval.infrastructure.evaluator_clients.backend import BackendEvaluatorClient
from graphomotor_eval.infrastructure.evaluator_clients.factory import create_client

__all__ = [
    "BackendEvaluatorClient",
    "CredentialProvider",
    "EvaluatorClient",
    "EvaluatorTransportError",
    "create_client",
    "env_token",
    "static_token",
]
