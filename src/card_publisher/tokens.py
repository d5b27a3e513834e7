"""Placeholder token resolution for card text fields.

Cards carry two kinds of ``{{ name }}`` placeholders:

- static tokens, substituted once at publish time from a per-run table
  (e.g. ``{{ env.brand }}``), identical for every reader;
- profile tokens, namespaced under ``profile.`` (e.g. ``{{ profile.name }}``),
  which belong to the render-time pass and are never touched here.

Substitution is a single pass. A static value that itself contains
``{{...}}`` is written out as-is and is not expanded again.

Usage:
    from src.card_publisher.tokens import resolve_static_tokens

    resolve_static_tokens("Hi {{env.brand}}, {{profile.name}}", {"env.brand": "Acme"})
    # -> "Hi Acme, {{profile.name}}"
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Optional

PROFILE_PREFIX = "profile."

TOKEN_RE = re.compile(r"\{\{\s*([^}]+?)\s*\}\}")


def is_profile_token(name: str, prefix: str = PROFILE_PREFIX) -> bool:
    """True if the trimmed token name lives in the profile namespace."""
    return name.strip().startswith(prefix)


def find_tokens(text: Optional[str]) -> list[str]:
    """Return the trimmed names of every token in ``text``, in order."""
    if not text:
        return []
    return [match.group(1).strip() for match in TOKEN_RE.finditer(text)]


def find_unresolved_tokens(
    text: Optional[str],
    static_tokens: Mapping[str, str],
    prefix: str = PROFILE_PREFIX,
) -> list[str]:
    """Non-profile token names in ``text`` that the static table does not cover."""
    return [
        name
        for name in find_tokens(text)
        if not is_profile_token(name, prefix) and name not in static_tokens
    ]


def resolve_static_tokens(
    text: Optional[str],
    static_tokens: Mapping[str, str],
    prefix: str = PROFILE_PREFIX,
) -> Optional[str]:
    """Substitute known static tokens, leaving profile and unknown tokens intact.

    Args:
        text: Source text. ``None`` or empty text is returned unchanged.
        static_tokens: Token name to literal replacement value.
        prefix: Reserved profile namespace prefix.

    Returns:
        Text with every known static token replaced by its value.
    """
    if not text:
        return text

    def _replace(match: re.Match) -> str:
        name = match.group(1).strip()
        if is_profile_token(name, prefix):
            return match.group(0)
        if name in static_tokens:
            return str(static_tokens[name])
        return match.group(0)

    return TOKEN_RE.sub(_replace, text)


def _lookup_path(profile: Mapping[str, Any], path: str) -> Any:
    value: Any = profile
    for key in path.split("."):
        if not isinstance(value, Mapping) or key not in value:
            return None
        value = value[key]
    return value


def resolve_profile_tokens(
    text: Optional[str],
    profile: Mapping[str, Any],
    prefix: str = PROFILE_PREFIX,
) -> Optional[str]:
    """Render-time pass: fill profile tokens from a reader's profile data.

    ``{{ profile.tier.name }}`` walks ``profile["tier"]["name"]``. Missing
    paths and ``None`` values leave the token in place. Static tokens are
    ignored.
    """
    if not text:
        return text

    def _replace(match: re.Match) -> str:
        name = match.group(1).strip()
        if not is_profile_token(name, prefix):
            return match.group(0)
        value = _lookup_path(profile, name[len(prefix):])
        if value is None:
            return match.group(0)
        return str(value)

    return TOKEN_RE.sub(_replace, text)
