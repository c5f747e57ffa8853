"""Caption generation via the Gemini generateContent API."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from .config import GEMINI_CREDENTIALS, Settings, require_credentials
from .errors import CaptionGenerationError
from .models import CaptionDraft
from .parsing import parse_meme_caption
from .upstream import request_json

logger = logging.getLogger(__name__)


def build_caption_prompt(
    title: str, description: str, template_ids: Sequence[int]
) -> str:
    ids = ", ".join(str(template_id) for template_id in template_ids)
    return (
        f"Generate a meme worthy caption for the following news: {title}, {description}\n\n"
        "Response should be valid JSON in this exact format:\n"
        "{\n"
        '  "image": <number>,\n'
        '  "topText": "<string>",\n'
        '  "bottomText": "<string>"\n'
        "}\n\n"
        "The image number should be a template ID from imgflip that's relevant to this meme.\n"
        f"Choose from these template IDs only: {ids}\n\n"
        "Make the meme funny and relevant to the news content. "
        "Respond with the JSON object only, with no other text."
    )


def _first_text(data: Any) -> str:
    """Pull candidates[0].content.parts[0].text, tolerating any missing level."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates") or []
    if not isinstance(candidates, list) or not candidates:
        return ""
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return ""
    text = parts[0].get("text")
    return text if isinstance(text, str) else ""


def request_caption_text(
    settings: Settings,
    title: str,
    description: str,
    template_ids: Sequence[int],
    *,
    session: Optional[Any] = None,
) -> str:
    """Send the caption prompt as a single-turn request; return raw model text."""
    if not template_ids:
        raise ValueError("At least one template id is required to generate a caption.")
    require_credentials(settings, GEMINI_CREDENTIALS)
    url = f"{settings.gemini_base_url}/models/{settings.gemini_model}:generateContent"
    body = {
        "contents": [
            {"parts": [{"text": build_caption_prompt(title, description, template_ids)}]}
        ]
    }
    data = request_json(
        "POST",
        url,
        params={"key": settings.gemini_api_key},
        json=body,
        error_cls=CaptionGenerationError,
        failure="Failed to generate caption",
        api_name="Gemini API",
        timeout=settings.http_timeout,
        session=session,
    )
    text = _first_text(data)
    if not text:
        logger.warning("Gemini API returned empty response")
    return text


def generate_caption(
    settings: Settings,
    title: str,
    description: str,
    template_ids: Sequence[int],
    *,
    session: Optional[Any] = None,
) -> Optional[CaptionDraft]:
    """Ask the model for a caption; None when it produced nothing usable."""
    raw = request_caption_text(
        settings, title, description, template_ids, session=session
    )
    if not raw:
        return None
    caption = parse_meme_caption(raw)
    if caption is not None:
        logger.info("Model chose template %s", caption.image)
    return caption
