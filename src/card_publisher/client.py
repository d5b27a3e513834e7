"""HTTP client for the CMS author (source) and publish (destination) APIs."""

from __future__ import annotations

from typing import Any

import requests

from src.common.config import settings
from src.common.logging import get_logger

from .errors import NETWORK_ERROR_STATUS, DestinationWriteFailed, SourceFetchFailed
from .models import PublishedPayload

logger = get_logger("client")


def cache_control_header(ttl_seconds: int) -> str:
    """Cache directive marking a write publicly cacheable and immutable."""
    return f"public, max-age={ttl_seconds}, immutable"


class ContentApiClient:
    """Thin wrapper over ``requests`` for one fetch and one write.

    No retries: any failure surfaces immediately as a terminal error. Every
    request carries a bounded timeout so a hung upstream fails instead of
    blocking the invocation.
    """

    def __init__(
        self,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.timeout = timeout if timeout is not None else settings.publisher.request_timeout_seconds
        self._session = session or requests.Session()

    def fetch_json(self, url: str, access_token: str) -> Any:
        """GET a JSON document with a bearer credential.

        Raises:
            SourceFetchFailed: Non-success status, network error, or a body
                that is not JSON.
        """
        try:
            resp = self._session.get(
                url,
                headers=self._headers(access_token),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Source fetch error for %s: %s", url, exc)
            raise SourceFetchFailed(NETWORK_ERROR_STATUS, str(exc)) from exc

        if not resp.ok:
            raise SourceFetchFailed(resp.status_code, resp.text)

        try:
            return resp.json()
        except ValueError as exc:
            raise SourceFetchFailed(
                NETWORK_ERROR_STATUS, f"Source returned non-JSON body: {resp.text[:200]}"
            ) from exc

    def put_json(
        self,
        url: str,
        access_token: str,
        payload: PublishedPayload,
        ttl_seconds: int,
    ) -> requests.Response:
        """PUT a payload as an immutable, publicly cacheable artifact.

        Raises:
            DestinationWriteFailed: Non-success status or network error.
        """
        headers = self._headers(access_token)
        headers["Cache-Control"] = cache_control_header(ttl_seconds)
        try:
            resp = self._session.put(
                url,
                headers=headers,
                data=payload.to_json().encode("utf-8"),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Destination write error for %s: %s", url, exc)
            raise DestinationWriteFailed(NETWORK_ERROR_STATUS, str(exc)) from exc

        if not resp.ok:
            raise DestinationWriteFailed(resp.status_code, resp.text)
        return resp

    @staticmethod
    def _headers(access_token: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> ContentApiClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
