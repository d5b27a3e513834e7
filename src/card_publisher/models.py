"""Data models for the card publisher."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator


class CtaAction(str, Enum):
    """What the card's call-to-action button does when clicked."""
    BROWSER = "browser"  # navigate to the offers page
    OVERLAY = "overlay"  # open the terms overlay in place


# === Source: CMS content record ===

class ContentElement(BaseModel):
    """Single authored field, wrapped the way the CMS model export wraps it."""
    value: Any = None


class ContentRecord(BaseModel):
    """Authored content fragment for one card (``<path>.model.json``)."""
    elements: dict[str, ContentElement] = Field(default_factory=dict)

    @field_validator("elements", mode="before")
    @classmethod
    def _drop_unwrapped(cls, raw: Any) -> Any:
        # Entries without a {"value": ...} wrapper carry nothing we can read.
        if not isinstance(raw, Mapping):
            return {}
        return {
            k: v for k, v in raw.items() if isinstance(v, (Mapping, ContentElement))
        }

    def value(self, name: str) -> Any:
        """Return the wrapped value for ``name``, or None when absent."""
        element = self.elements.get(name)
        return element.value if element is not None else None

    def text(self, name: str) -> Optional[str]:
        """Return the value for ``name`` as a string, or None when absent."""
        value = self.value(name)
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)


# === Output: published payload ===

class PublishedPayload(BaseModel):
    """User-agnostic card artifact written to the cacheable destination.

    Field order is the serialised key order, so the same source record always
    produces byte-identical JSON.
    """
    card_id: str = Field(alias="cardId")
    headline: Optional[str] = None
    body: Optional[str] = None
    image: Any = None  # CMS reference, published as authored
    cta_label: Optional[str] = Field(default=None, alias="ctaLabel")
    cta_action: str = Field(default=CtaAction.BROWSER.value, alias="ctaAction")
    terms_text: Optional[str] = Field(default=None, alias="termsText")
    cache_ttl: int = Field(alias="cacheTTL")

    model_config = {"populate_by_name": True, "frozen": True}

    def to_dict(self) -> dict:
        """Serialise with the camelCase keys consumers read."""
        return self.model_dump(by_alias=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


# === Invocation ===

@dataclass
class PublishRequest:
    """Parameters for one publish invocation.

    ``static_tokens`` keeps whatever the trigger sent when it is not a mapping,
    so the publish step can reject it with a 400 before any network call.
    """
    cf_path: str = ""
    author_host: str = ""
    publish_host: str = ""
    author_access_token: str = ""
    publish_access_token: str = ""
    static_tokens: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> PublishRequest:
        """Build a request from the trigger's camelCase parameter mapping."""
        tokens = params.get("staticTokens") or {}
        if isinstance(tokens, Mapping):
            tokens = {str(k): str(v) for k, v in tokens.items()}
        return cls(
            cf_path=params.get("cfPath") or "",
            author_host=params.get("authorHost") or "",
            publish_host=params.get("publishHost") or "",
            author_access_token=params.get("authorAccessToken") or "",
            publish_access_token=params.get("publishAccessToken") or "",
            static_tokens=tokens,
        )

    def missing_parameters(self) -> list[str]:
        """Names of required location parameters that are absent or blank."""
        required = {
            "cfPath": self.cf_path,
            "authorHost": self.author_host,
            "publishHost": self.publish_host,
        }
        return [name for name, value in required.items() if not str(value).strip()]

    def invalid_parameters(self) -> list[str]:
        """Names of parameters present with the wrong type."""
        if not isinstance(self.static_tokens, Mapping):
            return ["staticTokens"]
        return []


@dataclass
class PublishOutcome:
    """Result of one publish invocation: status code plus message or payload."""
    status_code: int
    body: Union[str, dict]

    @property
    def success(self) -> bool:
        return 200 <= self.status_code < 300

    def to_dict(self) -> dict:
        """Response shape returned to the trigger."""
        return {"statusCode": self.status_code, "body": self.body}
