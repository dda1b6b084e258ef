"""HTTP fetcher for the Kontent delivery API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, cast

from pydantic import ValidationError

from kontentsync.adapters.http_resilience import ResilientClient, build_limiter
from kontentsync.config.kontent import KONTENT_DELIVERY_URL, KontentConfig, get_kontent_config
from kontentsync.domain.ports.fetching import ContentItemFetcher, ContentItemFetchResult

from .schema import ErrorResponse
from .translator import parse_item_listing

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    import httpx
    from aiolimiter import AsyncLimiter

    from kontentsync.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

WAIT_FOR_NEW_CONTENT_HEADER = "X-KC-Wait-For-Loading-New-Content"


def _default_client_factory(
    config: ResilienceConfig, limiter: AsyncLimiter | None
) -> ResilientClient:
    return ResilientClient(config, limiter=limiter)


class KontentAPIError(RuntimeError):
    """Raised when the delivery API returns an error or an unexpected payload."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.request_id = request_id


@dataclass(slots=True)
class KontentDeliveryFetcher:
    """Resolve one item in one language, including its modular content.

    Language fallbacks are applied by the delivery API, so the returned item may
    carry a different ``system.language`` than the one requested. Each call runs
    its own event loop and client, but all calls share one rate limiter.
    """

    config: KontentConfig = field(default_factory=get_kontent_config)
    client_factory: Callable[[ResilienceConfig, AsyncLimiter | None], ResilientClient] = field(
        default=_default_client_factory
    )
    _limiter: AsyncLimiter | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self._limiter = build_limiter(self.config.resilience)

    def __call__(
        self,
        item_id: str,
        language: str,
        *,
        include_components: bool = True,
    ) -> ContentItemFetchResult:
        return asyncio.run(
            self._fetch_item_async(
                item_id=item_id,
                language=language,
                include_components=include_components,
            )
        )

    async def _fetch_item_async(
        self,
        *,
        item_id: str,
        language: str,
        include_components: bool,
    ) -> ContentItemFetchResult:
        params = {"system.id": item_id, "language": language}
        async with self.client_factory(self.config.resilience, self._limiter) as client:
            response = await client.get(
                self._items_url(),
                params=params,
                headers=self._headers(),
            )

        payload = self._read_payload(response)
        try:
            return parse_item_listing(payload, include_components=include_components)
        except ValidationError as exc:
            raise KontentAPIError(
                f"Unexpected Kontent item listing for {item_id} ({language})",
                status_code=response.status_code,
            ) from exc

    def _items_url(self) -> str:
        base_url = self.config.resilience.base_url or KONTENT_DELIVERY_URL
        return f"{base_url.rstrip('/')}/{self.config.project_id}/items"

    def _headers(self) -> dict[str, str]:
        headers = {WAIT_FOR_NEW_CONTENT_HEADER: "true"}
        if self.config.authorization_key:
            headers["Authorization"] = f"Bearer {self.config.authorization_key}"
        return headers

    def _read_payload(self, response: httpx.Response) -> Mapping[str, object]:
        if response.is_error:
            _raise_for_error(response)

        try:
            payload = response.json()
        except ValueError as exc:
            raise KontentAPIError(
                "Kontent response is not JSON", status_code=response.status_code
            ) from exc

        if not isinstance(payload, dict) or "items" not in payload:
            raise KontentAPIError(
                "Unexpected Kontent response payload", status_code=response.status_code
            )
        return cast("Mapping[str, object]", payload)


def _raise_for_error(response: httpx.Response) -> None:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and "message" in payload:
        error = ErrorResponse.model_validate(payload)
        log.error(f"Kontent API error {response.status_code}: {error.message}")
        raise KontentAPIError(
            error.message,
            status_code=response.status_code,
            request_id=error.request_id,
        ) from None
    response.raise_for_status()


if TYPE_CHECKING:
    _fetcher_check: ContentItemFetcher = KontentDeliveryFetcher()
