"""Clients for the Imgflip template catalog and caption renderer."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Union

from pydantic import ValidationError

from .config import IMGFLIP_CREDENTIALS, Settings, require_credentials
from .errors import MemeRenderError, TemplateFetchError
from .models import TemplateRef
from .upstream import request_json

logger = logging.getLogger(__name__)

MAX_TEMPLATES = 100


def fetch_templates(
    settings: Settings, *, session: Optional[Any] = None
) -> List[TemplateRef]:
    """Return at most the first 100 templates, in the order Imgflip lists them."""
    failure = "Failed to fetch templates"
    data = request_json(
        "GET",
        f"{settings.imgflip_base_url}/get_memes",
        error_cls=TemplateFetchError,
        failure=failure,
        api_name="Imgflip templates API",
        timeout=settings.http_timeout,
        session=session,
    )
    if not isinstance(data, dict) or not data.get("success"):
        raise TemplateFetchError(f"{failure}: Imgflip API returned success: false")

    payload = data.get("data")
    memes = payload.get("memes") if isinstance(payload, dict) else None
    if not isinstance(memes, list):
        raise TemplateFetchError(f"{failure}: Imgflip API response has no meme list")

    templates: List[TemplateRef] = []
    for entry in memes[:MAX_TEMPLATES]:
        if not isinstance(entry, dict):
            continue
        try:
            templates.append(TemplateRef(id=entry.get("id"), name=entry.get("name")))
        except ValidationError as exc:
            logger.debug("Skipping malformed template entry %r: %s", entry, exc)
    logger.info("Fetched %d meme template(s)", len(templates))
    return templates


def _format_template_id(template_id: Union[int, float, str]) -> str:
    if isinstance(template_id, float) and template_id.is_integer():
        return str(int(template_id))
    return str(template_id)


def render_meme(
    settings: Settings,
    template_id: Union[int, float, str],
    top_text: str,
    bottom_text: str,
    *,
    session: Optional[Any] = None,
) -> Optional[str]:
    """
    Caption a template and return the rendered image URL.

    Returns None when Imgflip reports success but omits the URL.
    """
    require_credentials(settings, IMGFLIP_CREDENTIALS)
    failure = "Failed to generate meme"
    form = {
        "template_id": _format_template_id(template_id),
        "username": settings.imgflip_username,
        "password": settings.imgflip_password,
        "text0": top_text,
        "text1": bottom_text,
    }
    data = request_json(
        "POST",
        f"{settings.imgflip_base_url}/caption_image",
        data=form,
        error_cls=MemeRenderError,
        failure=failure,
        api_name="Imgflip API",
        timeout=settings.http_timeout,
        session=session,
    )
    if not isinstance(data, dict) or not data.get("success"):
        message = data.get("error_message") if isinstance(data, dict) else None
        logger.warning("Imgflip refused caption request: %s", message)
        raise MemeRenderError(f"{failure}: Imgflip API error: {message}")

    payload = data.get("data")
    url = (payload.get("url") if isinstance(payload, dict) else None) or None
    logger.info("Rendered meme for template %s", form["template_id"])
    return url
