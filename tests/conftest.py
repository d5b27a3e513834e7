"""Shared test fixtures for the card publisher."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.card_publisher.client import ContentApiClient
from src.card_publisher.models import PublishRequest


def make_response(status_code: int = 200, json_body=None, text: str = "") -> MagicMock:
    """Build a stand-in for ``requests.Response``."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.text = text
    if json_body is None:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = json_body
    return resp


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def sample_cf_json() -> dict:
    """Return a content fragment export as the author host serves it."""
    return {
        "title": "Coffee cup card",
        "elements": {
            "cardId": {"value": "cup"},
            "headline": {"value": "Hi {{env.brand}}, {{profile.name}}"},
            "body": {"value": "Earn {{ offer.points }} points at {{env.brand}}."},
            "image": {"value": "/content/dam/cards/cup.png"},
            "ctaLabel": {"value": "See {{env.brand}} offers"},
            "ctaAction": {"value": "overlay"},
            "termsText": {"value": "Min spend {{offer.min_spend}} applies."},
            "cacheTTL": {"value": 3600},
        },
    }


@pytest.fixture
def static_tokens() -> dict:
    return {"env.brand": "Acme", "offer.points": "500", "offer.min_spend": "$50"}


@pytest.fixture
def publish_request(static_tokens) -> PublishRequest:
    return PublishRequest(
        cf_path="/content/dam/cards/cup",
        author_host="https://author.example.com",
        publish_host="https://publish.example.com",
        author_access_token="author-token",
        publish_access_token="publish-token",
        static_tokens=static_tokens,
    )


@pytest.fixture
def mock_session() -> MagicMock:
    """A ``requests.Session`` stand-in with successful defaults."""
    session = MagicMock()
    session.put.return_value = make_response(200, {"ok": True})
    return session


@pytest.fixture
def api_client(mock_session) -> ContentApiClient:
    return ContentApiClient(timeout=5.0, session=mock_session)
