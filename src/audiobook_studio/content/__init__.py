"""Content generation for the YouTube audiobook package."""

from audiobook_studio.content.models import (
    Language,
    OutlineItem,
    OutlineResult,
    SavedSession,
    ScriptBlock,
    SEOResult,
    StoryBlock,
    StoryMetadata,
)
from audiobook_studio.content.pipeline import ContentPipeline
from audiobook_studio.content.session import SessionStore, load_session_file, save_session_file
from audiobook_studio.content.text_utils import chunk_text, slugify

__all__ = [
    # Models
    "Language",
    "OutlineItem",
    "OutlineResult",
    "SavedSession",
    "ScriptBlock",
    "SEOResult",
    "StoryBlock",
    "StoryMetadata",
    # Orchestration
    "ContentPipeline",
    "SessionStore",
    "load_session_file",
    "save_session_file",
    # Utilities
    "chunk_text",
    "slugify",
]
