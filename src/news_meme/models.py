"""Data models for the news meme workflow."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    def to_payload(self) -> dict:
        """JSON-ready dict using the camelCase wire names."""
        return self.model_dump(mode="json", by_alias=True)


class NewsArticle(_CamelModel):
    """A single news item as returned by the news search API."""

    title: str = ""
    description: str = ""
    link: Optional[str] = None
    pub_date: Optional[str] = Field(
        None, description="Publication timestamp as reported upstream."
    )

    @field_validator("title", "description", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return "" if value is None else value

    @property
    def is_captionable(self) -> bool:
        return bool(self.title) and bool(self.description)


class TemplateRef(_CamelModel):
    """A meme template offered by the rendering service."""

    id: int = Field(..., gt=0)
    name: str


class CaptionDraft(_CamelModel):
    """Caption proposed by the generative model: template id plus two texts."""

    image: Union[int, float]
    top_text: str
    bottom_text: str


class WorkflowRequest(_CamelModel):
    """Inputs for one end-to-end news meme run."""

    topic: Optional[str] = None
    article_index: int = 0

    @field_validator("article_index", mode="before")
    @classmethod
    def default_index(cls, value):
        return 0 if value is None else value


class MemeResult(_CamelModel):
    """Final artifact of a successful workflow run."""

    article: NewsArticle
    caption: CaptionDraft
    meme_url: Optional[str] = None

    def to_payload(self) -> dict:
        return {
            "article": {
                "title": self.article.title,
                "description": self.article.description,
            },
            "caption": self.caption.to_payload(),
            "memeUrl": self.meme_url,
        }
