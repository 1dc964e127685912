"""
HTTP client for the document-management backend.
Async implementation using httpx.
"""
import json
import logging
from typing import Any, Dict, Optional

import httpx

from ..constants import AUTH_COOKIE_NAME, HTTP_MAX_CONNECTIONS, HTTP_MAX_KEEPALIVE
from ..exceptions import BackendError

logger = logging.getLogger(__name__)


class BackendClient:
    """Thin async wrapper over one shared ``httpx.AsyncClient``.

    Every failure (non-2xx status, connection problem, timeout) is logged and
    re-raised as :class:`BackendError` carrying the upstream status code, or
    503 when the backend could not be reached.
    """

    def __init__(
        self,
        base_url: str,
        auth_token: Optional[str] = None,
        timeout: Optional[float] = None,
        verify: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip('/')
        self.auth_token = auth_token
        self.timeout = timeout
        self.verify = verify
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    def _get_http_client(self) -> httpx.AsyncClient:
        """Получить или создать async HTTP клиент."""
        if self._http_client is None:
            cookies = {AUTH_COOKIE_NAME: self.auth_token} if self.auth_token else None
            self._http_client = httpx.AsyncClient(
                timeout=self.timeout,
                verify=self.verify,
                follow_redirects=True,
                cookies=cookies,
                limits=httpx.Limits(
                    max_connections=HTTP_MAX_CONNECTIONS,
                    max_keepalive_connections=HTTP_MAX_KEEPALIVE,
                ),
                transport=self._transport,
            )
        return self._http_client

    async def aclose(self) -> None:
        """Закрыть HTTP клиент (для cleanup)."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def get_json(self, path: str) -> Any:
        return await self._request("GET", path)

    async def post_json(self, path: str, body: Dict[str, Any]) -> Any:
        return await self._request("POST", path, strict_json=False, json=body)

    async def post_form(self, path: str, fields: Dict[str, str]) -> Any:
        return await self._request("POST", path, strict_json=False, data=fields)

    async def _request(self, method: str, path: str, strict_json: bool = True, **kwargs) -> Any:
        """
        Make an async request to the backend and decode the JSON answer.

        Args:
            method: HTTP method (GET, POST)
            path: path relative to the API root (e.g. "user/register_requests")
            strict_json: raise on an undecodable body instead of returning None
            **kwargs: passed to ``httpx.AsyncClient.request`` (json=, data=)

        Returns:
            Parsed JSON response, or None for an empty body

        Raises:
            BackendError: On HTTP errors or connection failures
        """
        full_url = self.url_for(path)
        client = self._get_http_client()
        logger.debug(f"➡️ {method} {full_url}")

        try:
            response = await client.request(method, full_url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error_text = e.response.text or "Upstream error"
            logger.error(f"HTTP error {e.response.status_code} from {method} {full_url}: {error_text}")
            raise BackendError(error_text, status_code=e.response.status_code) from e
        except (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError) as e:
            logger.error(f"Connection error to backend ({method} {full_url}): {e}")
            raise BackendError(f"Backend unavailable: {e}", status_code=503) from e
        except httpx.HTTPError as e:
            logger.error(f"Unexpected HTTP error ({method} {full_url}): {e}", exc_info=True)
            raise BackendError(f"Unexpected error: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as e:
            if not strict_json:
                # Тело подтверждения не используется
                return None
            logger.error(f"Backend returned non-JSON body for {method} {full_url}")
            raise BackendError("Backend returned an invalid JSON body") from e
