"""Async HTTP client shared by the provider adapters."""

from typing import Any, Iterable, Mapping, Optional

import httpx

from ..config.constants import DEFAULT_TIMEOUT_SECONDS, FORM_CONTENT_TYPE, USER_AGENT
from ..errors import ResponseParseError
from ..providers.errors import ErrorMapper


class ApiClient:
    """
    Thin wrapper over ``httpx.AsyncClient`` bound to one provider.

    Every call either returns a response with an expected status or raises a
    ``ProviderError``: ``ProviderRejected`` for other statuses and
    ``TransportError`` when no response arrived.
    """

    def __init__(
        self,
        provider: str,
        base_url: str,
        headers: Optional[Mapping[str, str]] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Args:
            provider: Provider name used in errors and logs
            base_url: Prefix for every request path
            headers: Default headers merged into every request
            timeout: Total timeout in seconds for each request
            transport: Optional httpx transport (e.g. ``httpx.MockTransport``)
        """
        self.provider = provider
        self.base_url = base_url.rstrip("/")
        default_headers = {"User-Agent": USER_AGENT}
        default_headers.update(headers or {})
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=default_headers,
            timeout=timeout,
            transport=transport
        )

    def url_for(self, path: str) -> str:
        """Absolute URL for ``path``, as used in OAuth base strings."""
        return f"{self.base_url}{path}"

    async def request(
        self,
        method: str,
        path: str,
        expected: Iterable[int] = (200,),
        **kwargs: Any
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise ErrorMapper.map_transport_error(e, self.provider) from e

        if response.status_code not in tuple(expected):
            raise ErrorMapper.map_response(response, self.provider)
        return response

    async def get_json(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        response = await self.request("GET", path, params=params)
        return self._decode_json(response, path)

    async def send_json(self, method: str, path: str, payload: Any) -> httpx.Response:
        return await self.request(method, path, json=payload)

    async def post_form(
        self,
        path: str,
        form: Mapping[str, str],
        expected: Iterable[int] = (200,)
    ) -> httpx.Response:
        return await self.request(
            "POST",
            path,
            data=dict(form),
            headers={"Content-Type": FORM_CONTENT_TYPE},
            expected=expected
        )

    def _decode_json(self, response: httpx.Response, path: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            error = ResponseParseError(
                f"Invalid JSON from {self.provider} {path}",
                provider=self.provider,
                status_code=response.status_code,
                body=response.text
            )
            error.original_error = e
            raise error from e

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
