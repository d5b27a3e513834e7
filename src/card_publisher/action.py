"""Serverless action entry point, triggered by a content-fragment publish event.

Expected params from the event:
    - cfPath: path of the content fragment on the author host
    - authorHost, publishHost
    - authorAccessToken, publishAccessToken (service credentials)
    - staticTokens: optional {name: value} table

Returns ``{"statusCode": int, "body": str | dict}``.
"""

from __future__ import annotations

from typing import Any, Mapping

from .models import PublishRequest
from .transformer import CardPublisher


def main(params: Mapping[str, Any]) -> dict:
    request = PublishRequest.from_params(params)
    with CardPublisher() as publisher:
        outcome = publisher.publish(request)
    return outcome.to_dict()
