"""Defensive extraction of a meme caption from free-form model output."""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Optional, Union

from .models import CaptionDraft

logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)
_REQUIRED_FIELDS = ("image", "topText", "bottomText")


def strip_code_fences(raw: str) -> str:
    """Remove Markdown fence markers (```json / ```) and surrounding whitespace."""
    return _FENCE_PATTERN.sub("", raw).strip()


def coerce_number(value: Any) -> Optional[Union[int, float]]:
    """Numbers and numeric strings to int (when integral) or float; else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        txt = value.strip()
        try:
            number = int(txt)
        except ValueError:
            try:
                number = float(txt)
            except ValueError:
                return None
    else:
        return None
    if isinstance(number, float):
        if not math.isfinite(number):
            return None
        if number.is_integer():
            return int(number)
    return number


def parse_meme_caption(raw: Optional[str]) -> Optional[CaptionDraft]:
    """
    Turn model output into a CaptionDraft, or None when nothing usable is there.

    Never raises: malformed output is expected from a generative model, and
    callers only need to know whether a caption is available. The reason for
    a rejection is logged.
    """
    if not raw or not raw.strip():
        logger.warning("Caption output was empty")
        return None

    cleaned = strip_code_fences(raw)
    try:
        data = json.loads(cleaned)
    except (ValueError, RecursionError) as exc:
        logger.warning("Caption output is not valid JSON: %s", exc)
        return None

    if not isinstance(data, dict):
        logger.warning("Caption output is JSON but not an object")
        return None

    missing = [key for key in _REQUIRED_FIELDS if not data.get(key)]
    if missing:
        logger.warning(
            "Invalid meme caption format - missing required fields: %s",
            ", ".join(missing),
        )
        return None

    image = coerce_number(data["image"])
    if image is None:
        logger.warning("Invalid image template ID: %r", data["image"])
        return None

    return CaptionDraft(
        image=image,
        top_text=str(data["topText"]),
        bottom_text=str(data["bottomText"]),
    )
