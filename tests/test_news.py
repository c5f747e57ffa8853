import pytest

from fakes import NEWS_URL, FakeResponse, FakeSession, make_settings, news_body
from news_meme.errors import ConfigurationError, NewsFetchError
from news_meme.news import build_news_params, fetch_news


@pytest.mark.parametrize("topic", ["", "   ", "\t\n", None])
def test_blank_topic_omits_query_filter(settings, topic):
    params = build_news_params(settings, topic)

    assert "q" not in params
    assert params == {
        "apikey": "news-key",
        "country": "in",
        "language": "en",
        "size": "10",
    }


@pytest.mark.parametrize("topic", ["cricket", "  monsoon rains ", "ISRO launch"])
def test_non_blank_topic_is_sent_verbatim(settings, topic):
    assert build_news_params(settings, topic)["q"] == topic


def test_fetch_news_normalizes_articles(settings):
    session = FakeSession({("GET", NEWS_URL): FakeResponse(news_body(3))})

    articles = fetch_news(settings, "cricket", session=session)

    assert [a.title for a in articles] == ["Headline 0", "Headline 1", "Headline 2"]
    assert articles[0].link == "https://example.com/0"
    assert articles[0].to_payload()["pubDate"] == "2025-01-15 10:00:00"
    assert session.calls[0]["params"]["q"] == "cricket"
    assert session.calls[0]["timeout"] == settings.http_timeout


def test_fetch_news_caps_results_at_ten(settings):
    session = FakeSession({("GET", NEWS_URL): FakeResponse(news_body(25))})

    articles = fetch_news(settings, "", session=session)

    assert len(articles) == 10


@pytest.mark.parametrize(
    "body",
    [
        {"status": "success"},
        {"status": "success", "results": None},
        {"status": "success", "results": {"title": "not a list"}},
        ["not", "an", "object"],
        {"status": "success", "results": []},
    ],
)
def test_malformed_and_empty_results_both_give_empty_list(settings, body):
    session = FakeSession({("GET", NEWS_URL): FakeResponse(body)})

    assert fetch_news(settings, "cricket", session=session) == []


def test_null_fields_and_non_object_items_are_tolerated(settings):
    body = {
        "results": [
            "junk",
            {"title": "Budget 2025", "description": None, "link": None},
        ]
    }
    session = FakeSession({("GET", NEWS_URL): FakeResponse(body)})

    articles = fetch_news(settings, "", session=session)

    assert len(articles) == 1
    assert articles[0].description == ""
    assert not articles[0].is_captionable


def test_http_error_raises_with_status(settings):
    response = FakeResponse({}, status_code=429, reason="Too Many Requests")
    session = FakeSession({("GET", NEWS_URL): response})

    with pytest.raises(NewsFetchError) as excinfo:
        fetch_news(settings, "cricket", session=session)

    assert excinfo.value.status_code == 429
    assert excinfo.value.status_text == "Too Many Requests"
    assert str(excinfo.value) == (
        "Failed to fetch news: NewsData API error: 429 Too Many Requests"
    )


def test_transport_error_raises_news_fetch_error(settings, transport_error):
    session = FakeSession({("GET", NEWS_URL): transport_error})

    with pytest.raises(NewsFetchError) as excinfo:
        fetch_news(settings, "", session=session)

    assert "connection refused" in str(excinfo.value)
    assert excinfo.value.status_code is None


def test_missing_api_key_fails_before_any_request():
    session = FakeSession()

    with pytest.raises(ConfigurationError):
        fetch_news(make_settings(NEWSDATA_API_KEY=None), "", session=session)

    assert session.calls == []
