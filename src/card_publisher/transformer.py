"""Publish transform — CMS content fragment to cacheable card artifact.

Orchestrates one publish invocation:
validate params → fetch record → check cardId → resolve TTL →
resolve static tokens per text field → write payload with cache headers.

Usage:
    with CardPublisher() as publisher:
        outcome = publisher.publish(PublishRequest(...))
        print(outcome.to_dict())
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from src.common.config import settings
from src.common.logging import get_logger

from .client import ContentApiClient
from .errors import (
    CardPublishError,
    InvalidParameter,
    MissingParameter,
    MissingRequiredField,
)
from .models import ContentRecord, PublishedPayload, PublishOutcome, PublishRequest
from .tokens import find_unresolved_tokens, resolve_static_tokens

logger = get_logger("transformer")

# Fields run through the static token pass. ``image`` is a reference id, not text.
TEXT_FIELDS = ("headline", "body", "ctaLabel", "termsText")

SUCCESS_MESSAGE = "Card payload published"


def resolve_ttl(raw: Any, default: int | None = None) -> int:
    """Cache lifetime in whole seconds, falling back to the default.

    Absent, blank, non-numeric, non-finite, and non-positive values all use
    the default; a bad TTL never fails a publish.
    """
    default = default if default is not None else settings.publisher.default_cache_ttl
    if raw is None or isinstance(raw, bool):
        return default
    try:
        ttl = float(str(raw).strip())
    except ValueError:
        return default
    if not math.isfinite(ttl) or ttl <= 0:
        return default
    return int(ttl)


def build_payload(
    record: ContentRecord,
    static_tokens: Mapping[str, str],
    profile_prefix: str | None = None,
) -> PublishedPayload:
    """Assemble the published payload from a fetched record.

    Raises:
        MissingRequiredField: The record has no usable cardId.
    """
    prefix = profile_prefix or settings.tokens.profile_prefix
    card_id = (record.text("cardId") or "").strip()
    if not card_id:
        raise MissingRequiredField("cardId is required")

    resolved: dict[str, Any] = {}
    for name in TEXT_FIELDS:
        text = record.text(name)
        unresolved = find_unresolved_tokens(text, static_tokens, prefix)
        if unresolved:
            logger.warning(
                "Card %s field %s has tokens with no static value: %s",
                card_id, name, ", ".join(unresolved),
            )
        resolved[name] = resolve_static_tokens(text, static_tokens, prefix)

    return PublishedPayload(
        cardId=card_id,
        headline=resolved["headline"],
        body=resolved["body"],
        image=record.value("image") or None,
        ctaLabel=resolved["ctaLabel"],
        ctaAction=record.text("ctaAction") or settings.publisher.default_cta_action,
        termsText=resolved["termsText"],
        cacheTTL=resolve_ttl(record.value("cacheTTL")),
    )


class CardPublisher:
    """Runs publish invocations against the author and publish APIs.

    Holds no per-card state; one instance may serve many invocations.
    """

    def __init__(self, client: ContentApiClient | None = None):
        self.client = client or ContentApiClient()

    def source_url(self, request: PublishRequest) -> str:
        return f"{request.author_host}{request.cf_path}{settings.publisher.model_suffix}"

    def publish_url(self, request: PublishRequest, card_id: str) -> str:
        path = settings.publisher.publish_path_template.format(card_id=quote(card_id, safe=""))
        return f"{request.publish_host.rstrip('/')}{path}"

    def publish(self, request: PublishRequest) -> PublishOutcome:
        """Execute one publish invocation.

        Args:
            request: Locations, credentials, and static token table.

        Returns:
            PublishOutcome: 200 with publishUrl on success, otherwise the
            status and message of the first failure.
        """
        try:
            publish_url = self._run(request)
        except CardPublishError as exc:
            logger.error("Publish failed for %s: %s", request.cf_path or "<no path>", exc)
            return PublishOutcome(status_code=exc.status_code, body=exc.body)

        return PublishOutcome(
            status_code=200,
            body={"message": SUCCESS_MESSAGE, "publishUrl": publish_url},
        )

    def _run(self, request: PublishRequest) -> str:
        missing = request.missing_parameters()
        if missing:
            logger.warning("Missing required parameters: %s", ", ".join(missing))
            raise MissingParameter("Missing required parameters")

        invalid = request.invalid_parameters()
        if invalid:
            logger.warning("Invalid parameters: %s", ", ".join(invalid))
            raise InvalidParameter(f"Invalid {', '.join(invalid)}")

        # Step 1: Fetch
        source_url = self.source_url(request)
        logger.info("Fetching content record: %s", source_url)
        raw = self.client.fetch_json(source_url, request.author_access_token)
        record = ContentRecord.model_validate(raw if isinstance(raw, Mapping) else {})

        # Step 2: Transform
        payload = build_payload(
            record, request.static_tokens, settings.tokens.profile_prefix,
        )

        # Step 3: Write
        publish_url = self.publish_url(request, payload.card_id)
        logger.info("Publishing card %s (ttl=%ds): %s", payload.card_id, payload.cache_ttl, publish_url)
        self.client.put_json(
            publish_url, request.publish_access_token, payload, payload.cache_ttl,
        )
        return publish_url

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> CardPublisher:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
