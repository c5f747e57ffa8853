"""MCP stdio server exposing the meme tools to assistant clients."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from .config import get_settings
from .logging_config import configure_logging
from .schema import get_tool_descriptor
from .tools import MemeToolkit

logger = logging.getLogger(__name__)

SERVER_NAME = "meme-generator-server"


def render_envelope(toolkit: MemeToolkit, name: str, arguments: Dict[str, Any]) -> str:
    """Run a tool and return its envelope as the text content of the reply."""
    return json.dumps(toolkit.call(name, arguments), indent=2, ensure_ascii=False)


def _description(name: str) -> str:
    return get_tool_descriptor(name)["description"]


def build_server(toolkit: MemeToolkit) -> FastMCP:
    server = FastMCP(SERVER_NAME)

    @server.tool(name="fetch_indian_news", description=_description("fetch_indian_news"))
    def fetch_indian_news(topic: Optional[str] = None) -> str:
        return render_envelope(toolkit, "fetch_indian_news", {"topic": topic})

    @server.tool(name="get_meme_templates", description=_description("get_meme_templates"))
    def get_meme_templates() -> str:
        return render_envelope(toolkit, "get_meme_templates", {})

    @server.tool(
        name="generate_meme_caption", description=_description("generate_meme_caption")
    )
    def generate_meme_caption(
        title: str, description: str, availableTemplates: List[int]
    ) -> str:
        return render_envelope(
            toolkit,
            "generate_meme_caption",
            {
                "title": title,
                "description": description,
                "availableTemplates": availableTemplates,
            },
        )

    @server.tool(name="create_meme", description=_description("create_meme"))
    def create_meme(templateId: int, topText: str, bottomText: str) -> str:
        return render_envelope(
            toolkit,
            "create_meme",
            {"templateId": templateId, "topText": topText, "bottomText": bottomText},
        )

    @server.tool(name="generate_news_meme", description=_description("generate_news_meme"))
    def generate_news_meme(topic: Optional[str] = None, articleIndex: int = 0) -> str:
        return render_envelope(
            toolkit, "generate_news_meme", {"topic": topic, "articleIndex": articleIndex}
        )

    return server


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    server = build_server(MemeToolkit(settings))
    logger.info("Meme Generator MCP server running on stdio")
    server.run()


if __name__ == "__main__":
    main()
