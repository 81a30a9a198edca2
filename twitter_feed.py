"""Twitter archive page transport.

The timeline search endpoint answers with a JSON envelope whose
``items_html`` field holds the rendered markup of up to ~20 tweets.
"""

from __future__ import annotations

import os
from typing import Any

import requests

from errors import PayloadDecodeError, TransportError

REQUEST_TIMEOUT_SECONDS = int(os.getenv("TWITSCRAPE_TIMEOUT_SECONDS", "20"))


def fetch_items_html(
    url: str,
    session: requests.Session | None = None,
    timeout: int = REQUEST_TIMEOUT_SECONDS,
) -> str:
    """GET one search page and return its ``items_html`` markup.

    Raises:
        TransportError: the request failed or returned an error status.
        PayloadDecodeError: the body was not a JSON object.
    """
    getter = session.get if session is not None else requests.get
    try:
        response = getter(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise TransportError(f"GET {url}: {exc}") from exc

    try:
        payload = response.json()
    except ValueError as exc:
        raise PayloadDecodeError(f"could not decode: {exc}") from exc

    return _items_html(payload)


def _items_html(payload: Any) -> str:
    if not isinstance(payload, dict):
        raise PayloadDecodeError(
            f"could not decode: expected a JSON object, got {type(payload).__name__}"
        )
    html = payload.get("items_html")
    # A missing field reads as an empty page, which ends pagination normally.
    if html is None:
        return ""
    if not isinstance(html, str):
        raise PayloadDecodeError(
            f"could not decode: items_html is {type(html).__name__}, not a string"
        )
    return html
