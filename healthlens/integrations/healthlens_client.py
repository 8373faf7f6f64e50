"""
HealthLens Remote API Client
============================
Wraps the remote HealthLens API that enriches the local persona engine:
persona metadata, persona calculation with confidence, adaptive views
and stored lab results.

Every call is a single attempt bounded by a timeout. There is no retry:
callers catch HealthLensError and fall back to local data immediately.

Environment Variables:
- HEALTHLENS_API_BASE_URL: Base URL (e.g., https://.../api/v1)
- HEALTHLENS_API_TIMEOUT_SECONDS: Request timeout
- HEALTHLENS_REMOTE_ENABLED: "false" turns every call into HealthLensNotConfiguredError

Usage:
    from healthlens.integrations.healthlens_client import HealthLensClient

    client = HealthLensClient()
    info = client.get_persona_info("analytical")
"""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from healthlens import config
from healthlens.persona.models import (
    PersonaCalculation,
    PersonaMetadata,
    QuestionnaireResponse,
)

logger = logging.getLogger(__name__)


class HealthLensError(Exception):
    """Base exception for remote HealthLens API failures."""

    def __init__(self, message: str, status_code: Optional[int] = None, response_body: Optional[Any] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class HealthLensNotConfiguredError(HealthLensError):
    """Remote calls disabled or base URL missing."""
    pass


class HealthLensConnectionError(HealthLensError):
    """Network-level failure (DNS, refused, reset)."""
    pass


class HealthLensTimeoutError(HealthLensError):
    """Request exceeded the configured timeout."""
    pass


class HealthLensAPIError(HealthLensError):
    """Non-2xx response."""
    pass


class HealthLensNotFoundError(HealthLensAPIError):
    """Resource not found (404)."""
    pass


class HealthLensPayloadError(HealthLensError):
    """2xx response whose body is not JSON or does not match the contract."""
    pass


class HealthLensClient:
    """
    Remote HealthLens API client.

    Features:
    - Single attempt per call, bounded by timeout
    - Structured error hierarchy
    - Pydantic validation of persona payloads
    """

    DEFAULT_TIMEOUT = config.HEALTHLENS_API_TIMEOUT_SECONDS

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        enabled: Optional[bool] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            base_url: API base URL (defaults to HEALTHLENS_API_BASE_URL)
            timeout: Request timeout in seconds
            enabled: Override HEALTHLENS_REMOTE_ENABLED
            transport: Optional httpx transport (e.g. httpx.MockTransport)
        """
        self.base_url = (base_url if base_url is not None else config.HEALTHLENS_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else self.DEFAULT_TIMEOUT
        self.enabled = config.HEALTHLENS_REMOTE_ENABLED if enabled is None else enabled
        self._transport = transport

        if not self.base_url:
            logger.warning("HEALTHLENS_API_BASE_URL not configured")

    @property
    def is_configured(self) -> bool:
        return bool(self.enabled and self.base_url)

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _handle_response(self, response: httpx.Response) -> Any:
        """Return parsed JSON or raise the matching HealthLensError."""
        if 200 <= response.status_code < 300:
            try:
                return response.json()
            except (json.JSONDecodeError, ValueError):
                raise HealthLensPayloadError(
                    "Response body is not valid JSON",
                    status_code=response.status_code,
                    response_body=response.text[:500],
                )

        try:
            error_body = response.json() if response.content else {}
        except (json.JSONDecodeError, ValueError):
            error_body = {"raw": response.text[:500]}

        if response.status_code == 404:
            raise HealthLensNotFoundError(
                f"Resource not found: {response.request.url if response.request else ''}",
                status_code=404,
                response_body=error_body,
            )

        raise HealthLensAPIError(
            f"HealthLens API error ({response.status_code})",
            status_code=response.status_code,
            response_body=error_body,
        )

    def _request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Single request to the remote API.

        Args:
            method: HTTP method
            endpoint: Path below base_url (e.g., /persona/calculate)
            data: JSON body
            params: Query parameters

        Returns:
            Parsed JSON body
        """
        if not self.is_configured:
            raise HealthLensNotConfiguredError("HealthLens remote API disabled or not configured")

        url = f"{self.base_url}{endpoint}"
        client_kwargs: Dict[str, Any] = {"timeout": self.timeout}
        if self._transport is not None:
            client_kwargs["transport"] = self._transport

        try:
            with httpx.Client(**client_kwargs) as client:
                response = client.request(
                    method=method,
                    url=url,
                    headers=self._get_headers(),
                    json=data,
                    params=params,
                )
                return self._handle_response(response)
        except httpx.TimeoutException:
            raise HealthLensTimeoutError(f"Request to {endpoint} timed out after {self.timeout}s")
        except httpx.RequestError as e:
            raise HealthLensConnectionError(f"Request to {endpoint} failed: {str(e)}")

    # ===== Persona API =====

    def get_persona_info(self, label: str) -> PersonaMetadata:
        """Fetch display metadata for a persona label."""
        payload = self._request("GET", f"/persona/info/{label}")
        if not isinstance(payload, dict):
            raise HealthLensPayloadError("Persona info payload is not an object", response_body=payload)
        try:
            metadata = PersonaMetadata.model_validate(payload)
        except ValidationError as e:
            raise HealthLensPayloadError(f"Invalid persona info payload: {e.error_count()} errors", response_body=payload)
        metadata.source = "remote"
        return metadata

    def calculate_persona(
        self,
        user_profile: Dict[str, Any],
        responses: QuestionnaireResponse,
    ) -> PersonaCalculation:
        """
        Ask the remote service to classify the user.

        Returns:
            persona + confidence (0..1) + reasoning
        """
        body = {
            "user_profile": user_profile or {},
            "questionnaire_responses": responses.model_dump(),
        }
        payload = self._request("POST", "/persona/calculate", data=body)
        if not isinstance(payload, dict):
            raise HealthLensPayloadError("Persona calculation payload is not an object", response_body=payload)
        try:
            return PersonaCalculation.model_validate(payload)
        except ValidationError as e:
            raise HealthLensPayloadError(f"Invalid persona calculation payload: {e.error_count()} errors", response_body=payload)

    # ===== Data API =====

    def get_adaptive_view(self, user_id: str, report_id: Optional[str] = None) -> Dict[str, Any]:
        """Raw adaptive view payload; callers validate against the content contract."""
        params = {"user_id": user_id}
        if report_id:
            params["report_id"] = report_id
        payload = self._request("GET", "/adaptive-view", params=params)
        if not isinstance(payload, dict):
            raise HealthLensPayloadError("Adaptive view payload is not an object", response_body=payload)
        return payload

    def get_lab_results(self, user_id: str, report_id: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"report_id": report_id} if report_id else None
        payload = self._request("GET", f"/data/lab-results/{user_id}", params=params)
        if isinstance(payload, dict):
            payload = payload.get("lab_results", [])
        if not isinstance(payload, list):
            raise HealthLensPayloadError("Lab results payload is not a list", response_body=payload)
        return payload

    def health_check(self) -> Dict[str, Any]:
        return self._request("GET", "/health")
