"""
Evaluation backend client (httpx)

Talks to the application backend, which proxies the evaluator model.
"""

import json
import logging

import httpx

from graphomotor_eval.domain.constants import EVALUATION_PATH, STATS_PATH, STATUS_PATH
from graphomotor_eval.domain.value_objects import SubmitResponse
from graphomotor_eval.infrastructure.evaluator_clients.base import (
    CredentialProvider,
    EvaluatorClient,
    EvaluatorTransportError,
)

logger = logging.getLogger(__name__)


def _token_count(value) -> int | None:
    """Token count from the reply metadata, or None when it is not a whole number"""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float) and value.is_integer() and value >= 0:
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


class BackendEvaluatorClient(EvaluatorClient):
    """Client for the /api/evaluaciones/chatgpt endpoints"""

    def __init__(
        self,
        base_url: str,
        credential_provider: CredentialProvider,
        timeout_seconds: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            base_url: Backend origin (e.g. http://localhost:5000)
            credential_provider: Callable returning the bearer token
            timeout_seconds: httpx timeout for each request
            transport: Optional httpx transport (e.g. httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._credential_provider = credential_provider
        self._transport = transport

    def _headers(self, with_body: bool = False) -> dict[str, str]:
        headers = {}
        if with_body:
            headers["Content-Type"] = "application/json"
        token = self._credential_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        else:
            logger.warning("No bearer token available; calling %s unauthenticated", self.base_url)
        return headers

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            transport=self._transport,
        )

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            async with self._http() as http:
                return await http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise EvaluatorTransportError(f"Request to {path} failed: {e}") from e

    async def submit(self, body: dict) -> SubmitResponse:
        """
        POST an evaluation body

        Args:
            body: Submission body (prompt, coordenadas, configuracion)

        Returns:
            SubmitResponse: Decoded backend reply

        Raises:
            EvaluatorTransportError: On network failure, non-success status or a non-JSON body
        """
        response = await self._request(
            "POST",
            EVALUATION_PATH,
            content=json.dumps(body, ensure_ascii=False).encode("utf-8"),
            headers=self._headers(with_body=True),
        )
        if not response.is_success:
            raise EvaluatorTransportError(
                f"Server error: {response.status_code} {response.reason_phrase}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise EvaluatorTransportError("Evaluation backend returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise EvaluatorTransportError("Evaluation backend returned an unexpected body")

        raw = data.get("data")
        # Some backend versions forward the evaluator JSON already decoded
        if isinstance(raw, (dict, list)):
            raw = json.dumps(raw, ensure_ascii=False)

        metadata = data.get("metadata")
        tokens_used = _token_count(metadata.get("tokensUsed")) if isinstance(metadata, dict) else None
        error = data.get("error")

        return SubmitResponse(
            success=bool(data.get("success")),
            data=raw,
            error=str(error) if error is not None else None,
            tokens_used=tokens_used,
        )

    async def check_status(self) -> bool:
        """
        GET the status endpoint

        Raises:
            EvaluatorTransportError: On network failure
        """
        response = await self._request("GET", STATUS_PATH, headers=self._headers())
        return response.is_success

    async def fetch_statistics(self) -> dict | None:
        """
        GET the stats endpoint

        Returns:
            Stats body, or None on a non-success status or undecodable body

        Raises:
            EvaluatorTransportError: On network failure
        """
        response = await self._request("GET", STATS_PATH, headers=self._headers())
        if not response.is_success:
            return None
        try:
            data = response.json()
        except ValueError:
            logger.warning("Stats endpoint returned a non-JSON body")
            return None
        return data if isinstance(data, dict) else None
