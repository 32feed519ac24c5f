"""
Shared plumbing for third-party API clients.

Every client issues JSON GET requests through ``httpx.AsyncClient`` and
validates the payload against an explicit schema. Transport failures,
non-success responses and payloads of the wrong shape all surface as
``RemoteServiceError``; nothing undefined leaks past this boundary.
"""

import logging
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError

from wanderplan.core.exceptions import RemoteServiceError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseAPIClient:
    """Base for GeoDB, OpenWeather, Foursquare and Mapbox clients."""

    service_name = "remote"

    def __init__(
        self,
        base_url: str,
        timeout: float = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # Tests inject httpx.MockTransport here
        self._transport = transport

    def _get_headers(self) -> Dict[str, str]:
        return {"Accept": "application/json"}

    def _require_credential(self, value: Optional[str], name: str) -> str:
        if not value:
            logger.warning(f"{self.service_name} credential {name} not configured")
            raise RemoteServiceError(
                self.service_name,
                message=f"{self.service_name} is not configured",
                details={"missing": name},
            )
        return value

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(
                headers=self._get_headers(),
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=params)
        except httpx.TimeoutException:
            logger.warning(f"Timeout calling {self.service_name}: {path}")
            raise RemoteServiceError(self.service_name, message=f"{self.service_name} request timed out")
        except httpx.HTTPError as e:
            logger.warning(f"Network error calling {self.service_name}: {e}")
            raise RemoteServiceError(self.service_name, message=f"Could not reach {self.service_name}")

        if response.status_code != 200:
            logger.warning(
                f"{self.service_name} returned {response.status_code} for {path}",
                extra={"service": self.service_name, "status_code": response.status_code},
            )
            raise RemoteServiceError(
                self.service_name,
                message=f"{self.service_name} returned status {response.status_code}",
                details={"upstream_status": response.status_code},
            )

        try:
            return response.json()
        except ValueError:
            raise RemoteServiceError(self.service_name, message=f"{self.service_name} returned invalid JSON")

    def _parse(self, model: Type[ModelT], payload: Any) -> ModelT:
        try:
            return model.model_validate(payload)
        except PydanticValidationError as e:
            logger.warning(f"Unexpected {self.service_name} payload: {e.error_count()} errors")
            raise RemoteServiceError(
                self.service_name,
                message=f"{self.service_name} returned an unexpected response",
                details={"schema": model.__name__},
            )
