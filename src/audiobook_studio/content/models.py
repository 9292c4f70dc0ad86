"""Data models for generated content and saved sessions."""

import time
import uuid
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from audiobook_studio.config.pydantic_config import BaseConfig
from audiobook_studio.constants import DEFAULT_DURATION_MINUTES, DEFAULT_FRAME_RATIO


class Language(str, Enum):
    """Output language of generated content."""

    VI = "vi"
    EN = "en"


class ContentModel(BaseConfig):
    """Base model for content documents, serialized with camelCase keys."""

    model_config = BaseConfig.model_config | ConfigDict(alias_generator=to_camel, extra="ignore")


class OutlineItem(ContentModel):
    """A chapter of the outline."""

    index: int = 0
    title: str
    focus: str = ""
    actions: list[str] = Field(default_factory=list)


class StoryMetadata(ContentModel):
    """Character names kept consistent across chapters."""

    female_lead: str = ""
    male_lead: str = ""
    villain: str = ""


class OutlineResult(ContentModel):
    """Structured result of outline generation."""

    chapters: list[OutlineItem]
    metadata: Optional[StoryMetadata] = None


class StoryBlock(ContentModel):
    """A chapter of story prose."""

    index: int
    title: str
    content: str


class ScriptBlock(ContentModel):
    """A block of the narration/review script."""

    index: int
    chapter: str
    text: str
    chars: int = 0


class SEOResult(ContentModel):
    """SEO metadata for the video."""

    titles: list[str] = Field(default_factory=list)
    hashtags: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    description: str = ""


class SavedSession(ContentModel):
    """Everything produced for one book, as persisted between runs."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    last_modified: int = Field(default_factory=lambda: int(time.time() * 1000))
    book_title: str
    language: Language = Language.VI
    book_idea: str = ""
    book_image: Optional[str] = None
    channel_name: str = ""
    mc_name: str = ""
    duration_min: int = DEFAULT_DURATION_MINUTES
    is_auto_duration: bool = False
    chapters_count: int = 0
    frame_ratio: str = DEFAULT_FRAME_RATIO
    story_metadata: Optional[StoryMetadata] = None
    outline: list[OutlineItem] = Field(default_factory=list)
    story_blocks: list[StoryBlock] = Field(default_factory=list)
    script_blocks: list[ScriptBlock] = Field(default_factory=list)
    seo: Optional[SEOResult] = None
    video_prompts: list[str] = Field(default_factory=list)
    thumb_text_ideas: list[str] = Field(default_factory=list)
    evaluation_result: Optional[str] = None
    is_story_uploaded: bool = False

    def touch(self) -> None:
        """Update the last-modified timestamp."""
        self.last_modified = int(time.time() * 1000)
