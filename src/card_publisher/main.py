"""CLI entry point for card publishing.

Usage:
    python -m src.card_publisher.main publish --cf-path /content/dam/cards/cup \
        --tokens config/static_tokens.yaml
    python -m src.card_publisher.main preview --payload cup.json --profile profile.json

Hosts and access tokens default to AUTHOR_HOST, PUBLISH_HOST,
AUTHOR_ACCESS_TOKEN and PUBLISH_ACCESS_TOKEN from the environment / .env.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import yaml

from src.common.config import get_env_credential

from .models import PublishRequest
from .render import render_card
from .transformer import CardPublisher


def load_mapping(path: Path | None) -> dict:
    """Load a YAML or JSON mapping file; missing path gives an empty mapping."""
    if path is None:
        return {}
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Publish informational cards")
    sub = parser.add_subparsers(dest="command", required=True)

    publish = sub.add_parser("publish", help="Fetch, resolve, and publish one card")
    publish.add_argument("--cf-path", required=True, help="Content fragment path on the author host")
    publish.add_argument("--author-host", default=None, help="Author host (default: $AUTHOR_HOST)")
    publish.add_argument("--publish-host", default=None, help="Publish host (default: $PUBLISH_HOST)")
    publish.add_argument(
        "--tokens",
        type=Path,
        default=None,
        help="YAML/JSON file of static tokens ({name: value})",
    )

    preview = sub.add_parser("preview", help="Render a published payload for a profile")
    preview.add_argument("--payload", type=Path, required=True, help="Published card JSON")
    preview.add_argument("--profile", type=Path, default=None, help="Reader profile JSON/YAML")
    preview.add_argument("--state", type=Path, default=None, help="Card state JSON/YAML (status, progress)")
    return parser


def run_publish(args: argparse.Namespace) -> int:
    tokens = load_mapping(args.tokens)
    request = PublishRequest(
        cf_path=args.cf_path,
        author_host=args.author_host or get_env_credential("AUTHOR_HOST"),
        publish_host=args.publish_host or get_env_credential("PUBLISH_HOST"),
        author_access_token=get_env_credential("AUTHOR_ACCESS_TOKEN"),
        publish_access_token=get_env_credential("PUBLISH_ACCESS_TOKEN"),
        static_tokens={str(k): str(v) for k, v in tokens.items()},
    )
    with CardPublisher() as publisher:
        outcome = publisher.publish(request)

    print(json.dumps(outcome.to_dict(), ensure_ascii=False, indent=2))
    return 0 if outcome.success else 1


def run_preview(args: argparse.Namespace) -> int:
    payload = json.loads(args.payload.read_text(encoding="utf-8"))
    view = render_card(payload, load_mapping(args.profile), load_mapping(args.state))
    print(json.dumps(view.to_dict(), ensure_ascii=False, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.command == "publish":
        return run_publish(args)
    return run_preview(args)


if __name__ == "__main__":
    sys.exit(main())
