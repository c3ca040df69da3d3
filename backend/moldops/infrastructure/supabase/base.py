"""Shared httpx plumbing for the Supabase adapters."""

from typing import Any

import httpx


def error_message(response: httpx.Response) -> str:
    """Best-effort human message from a PostgREST or GoTrue error body."""
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(data, dict):
        for key in ("msg", "message", "error_description", "error"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
    return response.text or response.reason_phrase


class SupabaseHTTP:
    """Base for adapters talking to one Supabase project.

    An injected ``http_client`` is reused and never closed here; otherwise a
    short-lived client is opened per call.
    """

    def __init__(
        self,
        url: str,
        anon_key: str,
        *,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        if not url:
            raise ValueError("Supabase URL is not configured")
        self._url = url.rstrip("/")
        self._anon_key = anon_key
        self._timeout = timeout
        self._http_client = http_client

    def headers(self, access_token: str | None = None, **extra: str) -> dict[str, str]:
        headers = {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {access_token or self._anon_key}",
        }
        headers.update(extra)
        return headers

    async def send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Issue one request; transport failures propagate as ``httpx.HTTPError``."""
        url = f"{self._url}{path}"
        if self._http_client is not None:
            return await self._http_client.request(method, url, **kwargs)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.request(method, url, **kwargs)
