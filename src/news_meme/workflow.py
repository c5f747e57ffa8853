"""End-to-end news meme workflow.

Steps run strictly in order, each a blocking upstream round-trip:
- fetch news (NewsData)
- select one article
- fetch the template catalog (Imgflip)
- generate a caption (Gemini), then parse it defensively
- render the meme (Imgflip)

There is no retry and no partial result: the run either returns a full
MemeResult or raises WorkflowError carrying the inner message. The step
functions can be injected for offline use and tests.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence

from .config import ALL_CREDENTIALS, Settings, require_credentials
from .errors import NewsMemeError, WorkflowError
from .gemini import generate_caption
from .imgflip import fetch_templates, render_meme
from .models import CaptionDraft, MemeResult, NewsArticle, TemplateRef, WorkflowRequest
from .news import fetch_news

logger = logging.getLogger(__name__)

WORKFLOW_FAILURE = "Failed to generate news meme"

NewsFn = Callable[[Settings, str], List[NewsArticle]]
TemplatesFn = Callable[[Settings], List[TemplateRef]]
CaptionFn = Callable[[Settings, str, str, Sequence[int]], Optional[CaptionDraft]]
RenderFn = Callable[[Settings, Any, str, str], Optional[str]]


def select_article(articles: Sequence[NewsArticle], index: int) -> NewsArticle:
    """Pick the requested article; out-of-range and incomplete picks fail alike."""
    if not articles:
        raise WorkflowError("No news articles found")
    article = articles[index] if 0 <= index < len(articles) else None
    if article is None or not article.is_captionable:
        raise WorkflowError("Selected article missing title or description")
    return article


def _run_steps(
    settings: Settings,
    request: WorkflowRequest,
    news_fn: NewsFn,
    templates_fn: TemplatesFn,
    caption_fn: CaptionFn,
    render_fn: RenderFn,
) -> MemeResult:
    logger.debug("Step 1/4: fetching news")
    articles = news_fn(settings, request.topic or "")
    article = select_article(articles, request.article_index)
    logger.debug(
        "Step 1/4 done: %d article(s), selected %d: %s",
        len(articles),
        request.article_index,
        article.title,
    )

    logger.debug("Step 2/4: fetching templates")
    templates = templates_fn(settings)
    template_ids = [template.id for template in templates]
    if not template_ids:
        raise WorkflowError("No meme templates available")
    logger.debug("Step 2/4 done: %d template(s)", len(template_ids))

    logger.debug("Step 3/4: generating caption")
    caption = caption_fn(settings, article.title, article.description, template_ids)
    if caption is None:
        raise WorkflowError("Failed to generate meme caption")
    logger.debug("Step 3/4 done: template %s", caption.image)

    logger.debug("Step 4/4: rendering meme")
    meme_url = render_fn(settings, caption.image, caption.top_text, caption.bottom_text)
    logger.debug("Step 4/4 done: %s", meme_url)
    return MemeResult(article=article, caption=caption, meme_url=meme_url)


def generate_news_meme(
    settings: Settings,
    request: Optional[WorkflowRequest] = None,
    *,
    session: Optional[Any] = None,
    news_fn: Optional[NewsFn] = None,
    templates_fn: Optional[TemplatesFn] = None,
    caption_fn: Optional[CaptionFn] = None,
    render_fn: Optional[RenderFn] = None,
) -> MemeResult:
    """
    Run fetch -> select -> templates -> caption -> render for one request.

    Credentials for every step are checked before the first network call;
    a ConfigurationError is raised as-is. Any other failure surfaces as
    WorkflowError("Failed to generate news meme: <inner message>").
    """
    request = request or WorkflowRequest()
    require_credentials(settings, ALL_CREDENTIALS)

    news_fn = news_fn or (lambda s, topic: fetch_news(s, topic, session=session))
    templates_fn = templates_fn or (lambda s: fetch_templates(s, session=session))
    caption_fn = caption_fn or (
        lambda s, title, desc, ids: generate_caption(s, title, desc, ids, session=session)
    )
    render_fn = render_fn or (
        lambda s, template_id, top, bottom: render_meme(
            s, template_id, top, bottom, session=session
        )
    )

    logger.info(
        "Generating news meme (topic=%r, article_index=%d)",
        request.topic or "",
        request.article_index,
    )
    try:
        result = _run_steps(
            settings, request, news_fn, templates_fn, caption_fn, render_fn
        )
    except NewsMemeError as exc:
        logger.error("%s: %s", WORKFLOW_FAILURE, exc)
        raise WorkflowError(f"{WORKFLOW_FAILURE}: {exc}") from exc

    logger.info("News meme ready: %s", result.meme_url)
    return result
