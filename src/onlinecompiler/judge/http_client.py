"""
Judge client speaking HTTP to a Judge0-compatible service.

Submissions are posted to ``<base_url>/submissions`` in "wait" mode
(``wait=true``) so the reply already carries the finished result, and with
``base64_encoded=false`` so source, stdin and outputs travel as plain text.
Hosted judges behind RapidAPI additionally expect the ``x-rapidapi-key`` and
``x-rapidapi-host`` headers; both are sent only when configured.

No timeout is enforced here beyond the transport's own; an expired timeout
surfaces like any other transport error.  Failed submissions are not retried.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import httpx

from ..config import Config
from ..languages import LanguageRegistry, registry as default_registry
from .base import JudgeClient, SubmissionResult, build_request, parse_response


logger = logging.getLogger("onlinecompiler.judge")

SUBMISSIONS_PATH = "/submissions"
SUBMISSIONS_PARAMS = {"base64_encoded": "false", "wait": "true"}


class HttpJudgeClient(JudgeClient):
    """Submit programs to a remote judge over HTTP."""

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        api_host: str = "",
        timeout: float = 30.0,
        registry: LanguageRegistry = default_registry,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Parameters
        ----------
        base_url: str
            Root URL of the judge; ``/submissions`` is appended.
        api_key: str, optional
            RapidAPI key.  The header is omitted when empty.
        api_host: str, optional
            RapidAPI host.  The header is omitted when empty.
        timeout: float, optional
            Transport timeout in seconds for the whole round trip.
        registry: LanguageRegistry, optional
            Catalog used to map service ids to judge language ids.
        transport: httpx.AsyncBaseTransport, optional
            Custom transport, mainly for tests.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.api_host = api_host
        self.timeout = timeout
        self.registry = registry
        self._transport = transport

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> "HttpJudgeClient":
        return cls(
            base_url=config.judge_url,
            api_key=config.judge_api_key,
            api_host=config.judge_api_host,
            timeout=float(config.judge_timeout_seconds),
            **kwargs,
        )

    @property
    def submissions_url(self) -> str:
        return self.base_url + SUBMISSIONS_PATH

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.api_key:
            headers["x-rapidapi-key"] = self.api_key
        if self.api_host:
            headers["x-rapidapi-host"] = self.api_host
        return headers

    async def submit(
        self,
        service_id: str,
        source_code: str,
        stdin: str = "",
    ) -> SubmissionResult:
        request = build_request(service_id, source_code, stdin, registry=self.registry)
        logger.info(
            "Submitting %s program (language_id=%s, %d chars, stdin=%s)",
            service_id,
            request.language_id,
            len(request.source_code),
            bool(request.stdin),
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.submissions_url,
                    params=SUBMISSIONS_PARAMS,
                    headers=self._headers(),
                    json=request.model_dump(),
                )
        except httpx.TimeoutException as exc:
            logger.warning("Judge request timed out after %ss: %s", self.timeout, exc)
            return SubmissionResult.transport_failure(f"Judge request timed out: {exc}")
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Judge request failed: %s", exc)
            return SubmissionResult.transport_failure(f"Judge request failed: {exc}")

        if not response.is_success:
            logger.warning(
                "Judge returned status %s: %s", response.status_code, response.text[:200]
            )
            return SubmissionResult.transport_failure(
                f"Judge returned status {response.status_code}"
            )

        try:
            payload = response.json()
        except (ValueError, RecursionError) as exc:
            logger.warning("Judge returned an undecodable body: %s", type(exc).__name__)
            return SubmissionResult.transport_failure("Malformed judge response: body is not JSON")

        result = parse_response(payload)
        if result.is_transport_failure:
            logger.warning("Rejected judge response: %s", result.text)
        else:
            logger.info("Submission for %s finished: %s", service_id, result.kind.value)
        return result
