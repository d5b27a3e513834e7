"""Render-time card view: the second, per-reader token pass.

The published artifact is user-agnostic. At render time the client resolves
``{{ profile.* }}`` tokens against the reader's profile and combines the card
with the reader's eligibility state. This module reproduces that view so a
published payload can be previewed for a sample profile.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .models import CtaAction
from .tokens import resolve_profile_tokens

OFFERS_PATH = "/offers"


@dataclass
class CardView:
    """What a reader sees for one card."""
    card_id: str
    headline: Optional[str]
    body: Optional[str]
    image: Any
    cta_label: Optional[str]
    cta_action: str
    terms_text: Optional[str]
    status: Optional[str] = None
    progress_pct: Optional[float] = None

    @property
    def cta_target(self) -> str:
        """Overlay cards open their terms in place; others go to the offers page."""
        if self.cta_action == CtaAction.OVERLAY.value:
            return "overlay:terms"
        return OFFERS_PATH

    def to_dict(self) -> dict:
        return {
            "cardId": self.card_id,
            "headline": self.headline,
            "body": self.body,
            "image": self.image,
            "ctaLabel": self.cta_label,
            "ctaAction": self.cta_action,
            "ctaTarget": self.cta_target,
            "termsText": self.terms_text,
            "status": self.status,
            "progressPct": self.progress_pct,
        }


def progress_percent(progress: Any) -> Optional[float]:
    """Map a 0-10 progress score onto a 0-100 bar width."""
    if progress is None:
        return None
    try:
        value = float(progress) * 10
    except (TypeError, ValueError):
        value = 0.0
    return min(100.0, max(0.0, value))


def render_card(
    payload: Mapping[str, Any],
    profile: Mapping[str, Any],
    state: Optional[Mapping[str, Any]] = None,
) -> CardView:
    """Build the reader's view of a published payload.

    Args:
        payload: Published card JSON (camelCase keys).
        profile: Reader profile data for ``{{ profile.* }}`` tokens.
        state: Optional eligibility state with ``status`` and ``progress``.
    """
    state = state or {}
    return CardView(
        card_id=str(payload.get("cardId", "")),
        headline=resolve_profile_tokens(payload.get("headline"), profile),
        body=resolve_profile_tokens(payload.get("body"), profile),
        image=payload.get("image"),
        cta_label=resolve_profile_tokens(payload.get("ctaLabel"), profile),
        cta_action=payload.get("ctaAction") or CtaAction.BROWSER.value,
        terms_text=resolve_profile_tokens(payload.get("termsText"), profile),
        status=state.get("status") or None,
        progress_pct=progress_percent(state.get("progress")),
    )
