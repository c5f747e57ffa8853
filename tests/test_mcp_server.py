import asyncio
import json

from fakes import NEWS_URL, FakeResponse, FakeSession, make_settings, news_body
from news_meme.mcp_server import SERVER_NAME, build_server, render_envelope
from news_meme.tools import MemeToolkit


def test_server_registers_the_five_tools():
    server = build_server(MemeToolkit(make_settings()))

    tools = asyncio.run(server.list_tools())

    assert server.name == SERVER_NAME
    assert sorted(tool.name for tool in tools) == [
        "create_meme",
        "fetch_indian_news",
        "generate_meme_caption",
        "generate_news_meme",
        "get_meme_templates",
    ]
    caption_tool = next(tool for tool in tools if tool.name == "generate_meme_caption")
    assert set(caption_tool.inputSchema["required"]) == {
        "title",
        "description",
        "availableTemplates",
    }


def test_render_envelope_returns_json_text():
    session = FakeSession({("GET", NEWS_URL): FakeResponse(news_body(1))})
    toolkit = MemeToolkit(make_settings(), session=session)

    text = render_envelope(toolkit, "fetch_indian_news", {"topic": None})

    payload = json.loads(text)
    assert payload["success"] is True
    assert payload["articles"][0]["title"] == "Headline 0"


def test_render_envelope_reports_failures_as_text():
    toolkit = MemeToolkit(make_settings(IMGFLIP_USERNAME=None), session=FakeSession())

    text = render_envelope(
        toolkit, "create_meme", {"templateId": 87, "topText": "A", "bottomText": "B"}
    )

    assert json.loads(text) == {
        "success": False,
        "error": "Missing required environment variables: IMGFLIP_USERNAME",
    }
