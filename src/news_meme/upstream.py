"""Shared JSON-over-HTTP plumbing for the upstream clients."""

from __future__ import annotations

import logging
from typing import Any, Optional, Type

import requests

from .errors import UpstreamError

logger = logging.getLogger(__name__)


def _client(session: Optional[Any]):
    """Use an injected session (tests, connection reuse) or the requests module."""
    return session if session is not None else requests


def request_json(
    method: str,
    url: str,
    *,
    error_cls: Type[UpstreamError],
    failure: str,
    api_name: str,
    timeout: float,
    session: Optional[Any] = None,
    **kwargs: Any,
) -> Any:
    """
    Issue one request and return the decoded JSON body.

    Transport failures, non-2xx statuses, and undecodable bodies are raised as
    `error_cls` with a message of the form "<failure>: <detail>". Query
    strings are not logged because some upstreams take credentials there.
    """
    send = getattr(_client(session), method.lower())
    try:
        resp = send(url, timeout=timeout, **kwargs)
    except requests.RequestException as exc:
        logger.error("%s request failed: %s", api_name, exc)
        raise error_cls(f"{failure}: {exc}") from exc

    if not resp.ok:
        logger.warning(
            "%s returned HTTP %s %s", api_name, resp.status_code, resp.reason
        )
        raise error_cls(
            f"{failure}: {api_name} error: {resp.status_code} {resp.reason}",
            status_code=resp.status_code,
            status_text=resp.reason,
        )

    try:
        return resp.json()
    except ValueError as exc:
        logger.warning("%s returned a non-JSON body", api_name)
        raise error_cls(
            f"{failure}: {api_name} returned invalid JSON",
            status_code=resp.status_code,
            status_text=resp.reason,
        ) from exc
