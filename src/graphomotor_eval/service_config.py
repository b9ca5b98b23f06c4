"""
Evaluation Service Configuration

Manages loading from environment variables and default values.
"""

import os
from dataclasses import dataclass, field, asdict

from graphomotor_eval.domain.constants import (
    DEFAULT_BATCH_PAUSE_SECONDS,
    DEFAULT_BATCH_SIZE,
    DEFAULT_EVALUATOR_MAX_TOKENS,
    DEFAULT_EVALUATOR_MODEL,
    DEFAULT_EVALUATOR_TEMPERATURE,
)


def _env_int(key: str, default: int) -> int:
    """Convert an environment variable to int"""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"The value '{val}' of environment variable '{key}' cannot be converted to an integer.")


def _env_float(key: str, default: float) -> float:
    """Convert an environment variable to float"""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        raise ValueError(f"The value '{val}' of environment variable '{key}' cannot be converted to a number.")


def _env_str(key: str, default: str) -> str:
    """Get an environment variable as a string"""
    return os.environ.get(key, default)


@dataclass
class BackendConfig:
    """Evaluation backend connection"""
    base_url: str = "http://localhost:5000"
    token_env_var: str = "GRAPHO_API_TOKEN"
    timeout_seconds: float = 60.0


@dataclass
class EvaluatorModelConfig:
    """Model settings forwarded to the backend with each submission"""
    model: str = DEFAULT_EVALUATOR_MODEL
    temperature: float = DEFAULT_EVALUATOR_TEMPERATURE
    max_tokens: int = DEFAULT_EVALUATOR_MAX_TOKENS


@dataclass
class BatchConfig:
    """Batch dispatch pacing"""
    batch_size: int = DEFAULT_BATCH_SIZE
    pause_seconds: float = DEFAULT_BATCH_PAUSE_SECONDS

    def __post_init__(self):
        if self.batch_size < 1:
            raise ValueError("batch_size must be at least 1.")
        if self.pause_seconds < 0:
            raise ValueError("pause_seconds must be non-negative.")


@dataclass
class ServiceConfig:
    """Overall evaluation service configuration"""
    backend: BackendConfig = field(default_factory=BackendConfig)
    evaluator: EvaluatorModelConfig = field(default_factory=EvaluatorModelConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)

    def to_dict(self) -> dict:
        """Convert to dictionary format"""
        return {"service_config": asdict(self)}

    @classmethod
    def from_dict(cls, data: dict) -> "ServiceConfig":
        """Create from dictionary (handles presence/absence of service_config key)"""
        config_data = data.get("service_config", data)
        return cls(
            backend=BackendConfig(**config_data.get("backend", {})),
            evaluator=EvaluatorModelConfig(**config_data.get("evaluator", {})),
            batch=BatchConfig(**config_data.get("batch", {})),
        )


def load_config() -> ServiceConfig:
    """
    Load configuration from environment variables

    Uses default values when environment variables are not set.

    Returns:
        ServiceConfig
    """
    backend = BackendConfig(
        base_url=_env_str("GRAPHO_API_URL", "http://localhost:5000"),
        token_env_var=_env_str("GRAPHO_API_TOKEN_VAR", "GRAPHO_API_TOKEN"),
        timeout_seconds=_env_float("GRAPHO_TIMEOUT_SECONDS", 60.0),
    )
    evaluator = EvaluatorModelConfig(
        model=_env_str("GRAPHO_EVALUATOR_MODEL", DEFAULT_EVALUATOR_MODEL),
        temperature=_env_float("GRAPHO_EVALUATOR_TEMPERATURE", DEFAULT_EVALUATOR_TEMPERATURE),
        max_tokens=_env_int("GRAPHO_EVALUATOR_MAX_TOKENS", DEFAULT_EVALUATOR_MAX_TOKENS),
    )
    batch = BatchConfig(
        batch_size=_env_int("GRAPHO_BATCH_SIZE", DEFAULT_BATCH_SIZE),
        pause_seconds=_env_float("GRAPHO_BATCH_PAUSE_SECONDS", DEFAULT_BATCH_PAUSE_SECONDS),
    )
    return ServiceConfig(backend=backend, evaluator=evaluator, batch=batch)
