import pytest

from fakes import (
    CAPTION_URL,
    TEMPLATES_URL,
    FakeResponse,
    FakeSession,
    make_settings,
    templates_body,
)
from news_meme.errors import ConfigurationError, MemeRenderError, TemplateFetchError
from news_meme.imgflip import fetch_templates, render_meme


def test_templates_are_capped_at_100_and_keep_order(settings):
    session = FakeSession({("GET", TEMPLATES_URL): FakeResponse(templates_body(150))})

    templates = fetch_templates(settings, session=session)

    assert len(templates) == 100
    assert [t.id for t in templates[:3]] == [1000, 1001, 1002]
    assert templates[-1].id == 1099
    assert templates[0].to_payload() == {"id": 1000, "name": "Template 0"}


def test_templates_need_no_credentials():
    session = FakeSession({("GET", TEMPLATES_URL): FakeResponse(templates_body(2))})
    settings = make_settings(
        NEWSDATA_API_KEY=None,
        GEMINI_API_KEY=None,
        IMGFLIP_USERNAME=None,
        IMGFLIP_PASSWORD=None,
    )

    assert len(fetch_templates(settings, session=session)) == 2


def test_malformed_template_entries_are_skipped(settings):
    body = {
        "success": True,
        "data": {
            "memes": [
                {"id": "61579", "name": "One Does Not Simply"},
                {"id": "not-a-number", "name": "Broken"},
                {"name": "No id"},
                {"id": "87743020", "name": "Two Buttons"},
            ]
        },
    }
    session = FakeSession({("GET", TEMPLATES_URL): FakeResponse(body)})

    templates = fetch_templates(settings, session=session)

    assert [t.id for t in templates] == [61579, 87743020]


def test_templates_success_false_raises(settings):
    session = FakeSession({("GET", TEMPLATES_URL): FakeResponse({"success": False})})

    with pytest.raises(TemplateFetchError) as excinfo:
        fetch_templates(settings, session=session)

    assert "success: false" in str(excinfo.value)


def test_templates_missing_meme_list_raises(settings):
    session = FakeSession(
        {("GET", TEMPLATES_URL): FakeResponse({"success": True, "data": {}})}
    )

    with pytest.raises(TemplateFetchError):
        fetch_templates(settings, session=session)


def test_templates_http_error_raises(settings):
    response = FakeResponse(None, status_code=502, reason="Bad Gateway")
    session = FakeSession({("GET", TEMPLATES_URL): response})

    with pytest.raises(TemplateFetchError) as excinfo:
        fetch_templates(settings, session=session)

    assert excinfo.value.status_code == 502


def test_render_meme_posts_form_fields(settings):
    body = {"success": True, "data": {"url": "https://i.imgflip.com/abc.jpg"}}
    session = FakeSession({("POST", CAPTION_URL): FakeResponse(body)})

    url = render_meme(settings, 87.0, "When the match", "Gets rained out", session=session)

    assert url == "https://i.imgflip.com/abc.jpg"
    assert session.calls[0]["data"] == {
        "template_id": "87",
        "username": "imgflip-user",
        "password": "imgflip-pass",
        "text0": "When the match",
        "text1": "Gets rained out",
    }


def test_render_meme_success_without_url_returns_none(settings):
    session = FakeSession({("POST", CAPTION_URL): FakeResponse({"success": True})})

    assert render_meme(settings, 87, "A", "B", session=session) is None


def test_render_meme_success_false_carries_upstream_message(settings):
    body = {"success": False, "error_message": "Invalid username/password"}
    session = FakeSession({("POST", CAPTION_URL): FakeResponse(body)})

    with pytest.raises(MemeRenderError) as excinfo:
        render_meme(settings, 87, "A", "B", session=session)

    assert "Invalid username/password" in str(excinfo.value)


def test_render_meme_invalid_json_raises(settings):
    session = FakeSession({("POST", CAPTION_URL): FakeResponse(invalid_json=True)})

    with pytest.raises(MemeRenderError):
        render_meme(settings, 87, "A", "B", session=session)


def test_render_meme_requires_imgflip_credentials():
    session = FakeSession()

    with pytest.raises(ConfigurationError) as excinfo:
        render_meme(make_settings(IMGFLIP_USERNAME=""), 87, "A", "B", session=session)

    assert excinfo.value.missing == ["IMGFLIP_USERNAME"]
    assert session.calls == []
