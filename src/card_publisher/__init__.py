# Card Publisher — CMS content fragment to cacheable card artifact
"""
Card publisher module.

Resolves static placeholder tokens in authored card content, leaves
profile tokens for the render-time pass, and writes an immutable,
user-agnostic JSON payload to the publish host.
"""

from .errors import (
    CardPublishError,
    DestinationWriteFailed,
    MissingParameter,
    MissingRequiredField,
    SourceFetchFailed,
)
from .models import (
    ContentElement,
    ContentRecord,
    CtaAction,
    PublishedPayload,
    PublishOutcome,
    PublishRequest,
)
from .tokens import is_profile_token, resolve_profile_tokens, resolve_static_tokens
from .transformer import CardPublisher, build_payload, resolve_ttl

__all__ = [
    "CardPublishError",
    "CardPublisher",
    "ContentElement",
    "ContentRecord",
    "CtaAction",
    "DestinationWriteFailed",
    "MissingParameter",
    "MissingRequiredField",
    "PublishOutcome",
    "PublishRequest",
    "PublishedPayload",
    "SourceFetchFailed",
    "build_payload",
    "is_profile_token",
    "resolve_profile_tokens",
    "resolve_static_tokens",
    "resolve_ttl",
]
