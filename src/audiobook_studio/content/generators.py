"""Content generators for the video package.

Each generator builds a prompt (and a response schema where the output is
structured) and calls ``generate_text``. Structured results are decoded with
``json.loads``; a malformed response raises ``json.JSONDecodeError`` and a
wrong shape raises ``pydantic.ValidationError``.
"""

import json
from typing import Any, Optional

from loguru import logger
from pydantic import TypeAdapter

from audiobook_studio.constants import DEFAULT_MODEL, GEMINI_FLASH
from audiobook_studio.facade import generate_text
from audiobook_studio.providers.types import GenerationRequest, KeysInput

from .models import Language, OutlineItem, OutlineResult, SEOResult, StoryBlock, StoryMetadata
from .prompts import (
    EVALUATE_SYSTEM_PROMPT,
    NOVELIST_SYSTEM_PROMPT,
    OUTLINE_SCHEMA,
    REVIEW_SYSTEM_PROMPT,
    SEO_SCHEMA,
    STRING_LIST_SCHEMA,
    build_evaluate_prompt,
    build_outline_prompt,
    build_review_prompt,
    build_rewrite_prompt,
    build_seo_prompt,
    build_story_prompt,
    build_thumb_prompt,
    build_video_prompts_prompt,
)
from .text_utils import format_duration

module_logger = logger

_STRING_LIST = TypeAdapter(list[str])


async def _generate_json(request: GenerationRequest, keys: KeysInput) -> Any:
    text = await generate_text(request, keys)
    return json.loads(text.strip())


async def generate_outline(
    book_title: str,
    idea: str,
    channel_name: str,
    mc_name: str,
    chapters_count: int,
    duration_min: int,
    language: Language,
    is_auto_duration: bool = False,
    model: str = DEFAULT_MODEL,
    keys: KeysInput = None,
) -> OutlineResult:
    """Generate the chapter outline and the story's character names.

    Chapters are re-indexed from 0 in the returned order.
    """
    prompt = build_outline_prompt(
        book_title=book_title,
        idea=idea,
        channel_name=channel_name,
        mc_name=mc_name,
        chapters_count=chapters_count,
        duration_min=duration_min,
        language=language,
        is_auto_duration=is_auto_duration,
    )
    data = await _generate_json(GenerationRequest(model=model, prompt=prompt, schema=OUTLINE_SCHEMA), keys)
    result = OutlineResult.model_validate(data)
    for index, chapter in enumerate(result.chapters):
        chapter.index = index
    module_logger.info(f"Generated outline for '{book_title}' with {len(result.chapters)} chapters")
    return result


async def generate_story_block(
    item: OutlineItem,
    metadata: Optional[StoryMetadata],
    book_title: str,
    idea: str,
    language: Language,
    model: str = GEMINI_FLASH,
    keys: KeysInput = None,
) -> str:
    """Write the prose of one outline chapter."""
    request = GenerationRequest(
        model=model,
        prompt=build_story_prompt(item, metadata, book_title, idea, language),
        system_instruction=NOVELIST_SYSTEM_PROMPT[language],
    )
    return await generate_text(request, keys)


async def rewrite_story_block(
    content: str,
    feedback: str,
    metadata: Optional[StoryMetadata],
    language: Language,
    model: str = GEMINI_FLASH,
    keys: KeysInput = None,
) -> str:
    """Rewrite a passage following editor feedback."""
    request = GenerationRequest(
        model=model,
        prompt=build_rewrite_prompt(content, feedback, metadata, language),
        system_instruction=NOVELIST_SYSTEM_PROMPT[language],
    )
    return await generate_text(request, keys)


async def generate_review_block(
    story_content: str,
    chapter_title: str,
    book_title: str,
    channel_name: str,
    mc_name: str,
    language: Language,
    model: str = GEMINI_FLASH,
    keys: KeysInput = None,
) -> str:
    """Write the narration/review script for one story block."""
    request = GenerationRequest(
        model=model,
        prompt=build_review_prompt(story_content, chapter_title, book_title, channel_name, mc_name, language),
        system_instruction=REVIEW_SYSTEM_PROMPT[language],
    )
    return await generate_text(request, keys)


async def generate_seo(
    book_title: str,
    channel_name: str,
    duration_min: int,
    language: Language,
    model: str = DEFAULT_MODEL,
    keys: KeysInput = None,
) -> SEOResult:
    """Generate titles, hashtags, keywords and a description."""
    request = GenerationRequest(
        model=model,
        prompt=build_seo_prompt(book_title, channel_name, duration_min, language),
        schema=SEO_SCHEMA,
    )
    return SEOResult.model_validate(await _generate_json(request, keys))


async def generate_video_prompts(
    book_title: str,
    frame_ratio: str,
    model: str = GEMINI_FLASH,
    keys: KeysInput = None,
) -> list[str]:
    """Generate prompts for background video clips."""
    request = GenerationRequest(
        model=model,
        prompt=build_video_prompts_prompt(book_title, frame_ratio),
        schema=STRING_LIST_SCHEMA,
    )
    return _STRING_LIST.validate_python(await _generate_json(request, keys))


async def generate_thumb_ideas(
    book_title: str,
    duration_min: int,
    language: Language,
    model: str = GEMINI_FLASH,
    keys: KeysInput = None,
) -> list[str]:
    """Generate short thumbnail texts, one of them carrying the duration."""
    request = GenerationRequest(
        model=model,
        prompt=build_thumb_prompt(book_title, format_duration(duration_min), language),
        schema=STRING_LIST_SCHEMA,
    )
    return _STRING_LIST.validate_python(await _generate_json(request, keys))


async def evaluate_story(
    blocks: list[StoryBlock],
    book_title: str,
    language: Language,
    model: str = DEFAULT_MODEL,
    keys: KeysInput = None,
) -> str:
    """Critique the whole story and suggest rewrites."""
    request = GenerationRequest(
        model=model,
        prompt=build_evaluate_prompt(blocks, book_title, language),
        system_instruction=EVALUATE_SYSTEM_PROMPT[language],
    )
    return await generate_text(request, keys)
