"""The five meme operations shared by the REST and MCP front-ends.

Both transports are thin adapters over MemeToolkit: they translate their
request shape into `invoke(name, arguments)` / `call(name, arguments)` and
return the resulting envelope.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from .config import Settings
from .errors import NewsMemeError, ToolArgumentError
from .gemini import generate_caption
from .imgflip import fetch_templates, render_meme
from .models import WorkflowRequest
from .news import fetch_news
from .parsing import coerce_number
from .schema import load_tool_descriptors, validate_tool_arguments
from .workflow import generate_news_meme

logger = logging.getLogger(__name__)


def success_envelope(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {"success": True, **payload}


def error_envelope(exc: BaseException) -> Dict[str, Any]:
    return {"success": False, "error": str(exc)}


def _require_values(arguments: Dict[str, Any], names: List[str]) -> None:
    if any(not arguments.get(name) for name in names):
        raise ToolArgumentError(f"Missing required parameters: {', '.join(names)}")


class MemeToolkit:
    """Capability set: fetch news, list templates, caption, render, full workflow."""

    def __init__(self, settings: Settings, session: Optional[Any] = None):
        self.settings = settings
        self.session = session
        self._handlers: Dict[str, Callable[..., Dict[str, Any]]] = {
            "fetch_indian_news": self.fetch_indian_news,
            "get_meme_templates": self.get_meme_templates,
            "generate_meme_caption": self.generate_meme_caption,
            "create_meme": self.create_meme,
            "generate_news_meme": self.generate_news_meme,
        }

    # --- Operations -------------------------------------------------------

    def fetch_indian_news(self, topic: Optional[str] = None) -> Dict[str, Any]:
        articles = fetch_news(self.settings, topic or "", session=self.session)
        return {
            "count": len(articles),
            "articles": [article.to_payload() for article in articles],
        }

    def get_meme_templates(self) -> Dict[str, Any]:
        templates = fetch_templates(self.settings, session=self.session)
        return {
            "count": len(templates),
            "templates": [template.to_payload() for template in templates],
        }

    def generate_meme_caption(
        self, title: str, description: str, availableTemplates: List[int]
    ) -> Dict[str, Any]:
        _require_values(
            {"title": title, "description": description, "availableTemplates": availableTemplates},
            ["title", "description", "availableTemplates"],
        )
        caption = generate_caption(
            self.settings, title, description, availableTemplates, session=self.session
        )
        if caption is None:
            raise NewsMemeError("Failed to generate meme caption")
        return {"caption": caption.to_payload()}

    def create_meme(self, templateId: Any, topText: str, bottomText: str) -> Dict[str, Any]:
        _require_values(
            {"templateId": templateId, "topText": topText, "bottomText": bottomText},
            ["templateId", "topText", "bottomText"],
        )
        template_id = coerce_number(templateId)
        if template_id is None:
            raise ToolArgumentError(f"templateId must be a number, got {templateId!r}")
        url = render_meme(
            self.settings, template_id, topText, bottomText, session=self.session
        )
        return {"memeUrl": url}

    def generate_news_meme(
        self, topic: Optional[str] = None, articleIndex: Optional[int] = 0
    ) -> Dict[str, Any]:
        request = WorkflowRequest(topic=topic, article_index=articleIndex)
        result = generate_news_meme(self.settings, request, session=self.session)
        return result.to_payload()

    # --- Dispatch ---------------------------------------------------------

    def list_tools(self) -> List[Dict[str, Any]]:
        return load_tool_descriptors()

    def invoke(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Validate and run one operation; returns the success envelope or raises."""
        handler = self._handlers.get(name)
        if handler is None:
            raise ToolArgumentError(f"Unknown tool: {name}")
        payload = validate_tool_arguments(name, arguments)
        logger.debug("Invoking tool %s", name)
        return success_envelope(handler(**payload))

    def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Like invoke, but logical failures come back as an error envelope."""
        try:
            return self.invoke(name, arguments)
        except NewsMemeError as exc:
            logger.warning("Tool %s failed: %s", name, exc)
            return error_envelope(exc)
