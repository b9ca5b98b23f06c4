"""
Evaluator client base class and credential providers

Defines the abstract base class inherited by all evaluator clients and the
callables that supply the bearer token.
"""

import os
from abc import ABC, abstractmethod
from typing import Callable

from graphomotor_eval.domain.value_objects import SubmitResponse


# Returns the bearer token, or None when no session is available
CredentialProvider = Callable[[], str | None]


def static_token(token: str | None) -> CredentialProvider:
    """Credential provider returning a fixed token"""
    return lambda: token


def env_token(key: str) -> CredentialProvider:
    """Credential provider reading the token from an environment variable on each call"""
    return lambda: os.environ.get(key)


class EvaluatorTransportError(Exception):
    """Network or HTTP failure while talking to the evaluation backend"""
    pass


class EvaluatorClient(ABC):
    """Abstract base class for evaluator clients"""

    @abstractmethod
    async def submit(self, body: dict) -> SubmitResponse:
        """Send an evaluation body and retrieve the backend reply"""
        pass

    @abstractmethod
    async def check_status(self) -> bool:
        """Return True if the backend reports itself available"""
        pass

    @abstractmethod
    async def fetch_statistics(self) -> dict | None:
        """Retrieve usage counters, or None on a non-success status"""
        pass
