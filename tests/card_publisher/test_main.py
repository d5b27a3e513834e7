"""Tests for the card publisher CLI."""

import json
from unittest.mock import patch

import pytest

from src.card_publisher.main import load_mapping, main
from src.card_publisher.models import PublishOutcome


class TestLoadMapping:
    def test_yaml(self, tmp_path):
        path = tmp_path / "tokens.yaml"
        path.write_text("env.brand: Acme\noffer.min_spend: \"$50\"\n", encoding="utf-8")
        assert load_mapping(path) == {"env.brand": "Acme", "offer.min_spend": "$50"}

    def test_json(self, tmp_path):
        path = tmp_path / "profile.json"
        path.write_text(json.dumps({"name": "Ana"}), encoding="utf-8")
        assert load_mapping(path) == {"name": "Ana"}

    def test_none_and_empty(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_mapping(None) == {}
        assert load_mapping(path) == {}

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_mapping(path)


class TestPublishCommand:
    @patch("src.card_publisher.main.CardPublisher")
    def test_builds_request_from_env_and_tokens(self, mock_publisher_cls, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("AUTHOR_HOST", "https://author.example.com")
        monkeypatch.setenv("PUBLISH_HOST", "https://publish.example.com")
        monkeypatch.setenv("AUTHOR_ACCESS_TOKEN", "a-tok")
        monkeypatch.setenv("PUBLISH_ACCESS_TOKEN", "p-tok")
        tokens = tmp_path / "tokens.yaml"
        tokens.write_text("env.brand: Acme\nyear: 2026\n", encoding="utf-8")

        publisher = mock_publisher_cls.return_value.__enter__.return_value
        publisher.publish.return_value = PublishOutcome(200, {"message": "ok", "publishUrl": "u"})

        code = main(["publish", "--cf-path", "/content/dam/cards/cup", "--tokens", str(tokens)])

        assert code == 0
        request = publisher.publish.call_args.args[0]
        assert request.author_host == "https://author.example.com"
        assert request.publish_access_token == "p-tok"
        assert request.static_tokens == {"env.brand": "Acme", "year": "2026"}
        assert json.loads(capsys.readouterr().out)["statusCode"] == 200

    @patch("src.card_publisher.main.CardPublisher")
    def test_failure_exit_code(self, mock_publisher_cls, monkeypatch):
        monkeypatch.delenv("PUBLISH_HOST", raising=False)
        publisher = mock_publisher_cls.return_value.__enter__.return_value
        publisher.publish.return_value = PublishOutcome(400, "Missing required parameters")

        code = main(["publish", "--cf-path", "/p", "--author-host", "https://a"])

        assert code == 1
        assert publisher.publish.call_args.args[0].publish_host == ""


class TestPreviewCommand:
    def test_renders_profile_tokens(self, tmp_path, capsys):
        payload = tmp_path / "cup.json"
        payload.write_text(json.dumps({
            "cardId": "cup",
            "headline": "Hi Acme, {{profile.name}}",
            "ctaAction": "browser",
            "cacheTTL": 3600,
        }), encoding="utf-8")
        profile = tmp_path / "profile.json"
        profile.write_text(json.dumps({"name": "Ana"}), encoding="utf-8")

        code = main(["preview", "--payload", str(payload), "--profile", str(profile)])

        assert code == 0
        out = json.loads(capsys.readouterr().out)
        assert out["headline"] == "Hi Acme, Ana"
        assert out["ctaTarget"] == "/offers"
