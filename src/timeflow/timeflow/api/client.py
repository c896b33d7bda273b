from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from ..core.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from ..core.exceptions import NetworkFailure, RemoteRejected

logger = logging.getLogger(__name__)


@dataclass
class ApiConfig:
    base_url: str
    token: Optional[str] = None
    timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS


class ApiClient:
    """Singleton-like REST client for the scheduler backend.

    Note: One ``requests.Session`` per client; the backend is the source of truth
    and every call is a blocking round trip.
    """

    _instance: Optional["ApiClient"] = None

    def __init__(self, config: ApiConfig, *, session: Optional[requests.Session] = None):
        self._config = config
        self._session = session or requests.Session()

    @classmethod
    def get_instance(cls, config: ApiConfig) -> "ApiClient":
        if cls._instance is None:
            cls._instance = ApiClient(config)
        return cls._instance

    def _url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._config.token:
            headers["Authorization"] = f"Bearer {self._config.token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        clean_params = {k: _param_value(v) for k, v in (params or {}).items() if v is not None}
        try:
            resp = self._session.request(
                method,
                self._url(path),
                params=clean_params or None,
                json=json,
                headers=self._headers(),
                timeout=self._config.timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise NetworkFailure(f"Could not reach the server: {e}") from e

        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.warning("%s %s rejected (%s): %s", method, path, resp.status_code, message)
            raise RemoteRejected(message, status_code=resp.status_code)

        if not resp.content:
            return {}
        content_type = resp.headers.get("Content-Type", "")
        if "application/json" not in content_type:
            return {}
        return resp.json()

    def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, data: Any = None) -> Any:
        return self.request("POST", path, json=data if data is not None else {})

    def patch(self, path: str, data: Any = None) -> Any:
        return self.request("PATCH", path, json=data if data is not None else {})

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)


def _param_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            if body.get(key):
                return str(body[key])
    return resp.reason or f"HTTP error! status: {resp.status_code}"
