"""Orchestration of the full video content package for one session."""

import asyncio
from typing import Callable, Optional

from loguru import logger

from audiobook_studio.constants import UPLOAD_CHUNK_CHARS
from audiobook_studio.providers.types import KeysInput

from . import generators
from .models import Language, SavedSession, ScriptBlock, StoryBlock
from .text_utils import calculate_chapter_count, chunk_text

module_logger = logger

ProgressCallback = Callable[[str, Optional[int], str, Optional[str]], None]


class ContentPipeline:
    """Runs the generators against a ``SavedSession`` and stores their results on it.

    Steps run in the order outline -> story -> review script -> SEO -> prompts.
    Story and review blocks are generated one at a time, in order.
    """

    def __init__(
        self,
        session: SavedSession,
        model: str,
        keys: KeysInput = None,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        self.session = session
        self.model = model
        self.keys = keys
        self.progress_callback = progress_callback

    def _require_title(self) -> None:
        if not self.session.book_title.strip():
            raise ValueError("A book title is required before generating content.")

    def load_upload(self, text: str, title: Optional[str] = None, max_chars: int = UPLOAD_CHUNK_CHARS) -> None:
        """Replace the story with uploaded text split into review-ready blocks."""
        part = "Phần" if self.session.language == Language.VI else "Part"
        chunks = chunk_text(text, max_chars)
        if title:
            self.session.book_title = title
        self.session.story_blocks = [
            StoryBlock(index=i, title=f"{part} {i} (Upload)", content=chunk) for i, chunk in enumerate(chunks, start=1)
        ]
        self.session.outline = []
        self.session.story_metadata = None
        self.session.script_blocks = []
        self.session.is_story_uploaded = True
        module_logger.info(f"Loaded upload '{self.session.book_title}' as {len(chunks)} blocks")

    async def build_outline(self) -> None:
        self._require_title()
        session = self.session
        chapters_count = session.chapters_count or calculate_chapter_count(session.duration_min)
        result = await generators.generate_outline(
            book_title=session.book_title,
            idea=session.book_idea,
            channel_name=session.channel_name,
            mc_name=session.mc_name,
            chapters_count=chapters_count,
            duration_min=session.duration_min,
            language=session.language,
            is_auto_duration=session.is_auto_duration,
            model=self.model,
            keys=self.keys,
        )
        session.outline = result.chapters
        session.story_metadata = result.metadata
        session.chapters_count = len(result.chapters)
        session.story_blocks = []
        session.script_blocks = []
        session.is_story_uploaded = False
        self._notify("outline", None, "completed", f"{len(result.chapters)} chapters")

    async def write_story(self) -> None:
        self._require_title()
        session = self.session
        if not session.outline:
            raise ValueError("An outline is required before writing the story.")

        session.story_blocks = []
        for item in session.outline:
            self._notify("story", item.index, "generating")
            content = await generators.generate_story_block(
                item,
                session.story_metadata,
                session.book_title,
                session.book_idea,
                session.language,
                model=self.model,
                keys=self.keys,
            )
            session.story_blocks.append(StoryBlock(index=item.index, title=item.title, content=content))
            self._notify("story", item.index, "completed")

    async def write_review_script(self) -> None:
        self._require_title()
        session = self.session
        if not session.story_blocks:
            raise ValueError("Story content is required before writing the review script.")

        session.script_blocks = []
        for block in session.story_blocks:
            self._notify("script", block.index, "generating")
            text = await generators.generate_review_block(
                block.content,
                block.title,
                session.book_title,
                session.channel_name,
                session.mc_name,
                session.language,
                model=self.model,
                keys=self.keys,
            )
            session.script_blocks.append(ScriptBlock(index=block.index, chapter=block.title, text=text, chars=len(text)))
            self._notify("script", block.index, "completed")

    async def build_seo(self) -> None:
        self._require_title()
        session = self.session
        session.seo = await generators.generate_seo(
            session.book_title,
            session.channel_name,
            session.duration_min,
            session.language,
            model=self.model,
            keys=self.keys,
        )
        self._notify("seo", None, "completed")

    async def build_prompts(self) -> None:
        """Generate video prompts and thumbnail texts concurrently."""
        self._require_title()
        session = self.session
        prompts, thumbs = await asyncio.gather(
            generators.generate_video_prompts(session.book_title, session.frame_ratio, model=self.model, keys=self.keys),
            generators.generate_thumb_ideas(
                session.book_title, session.duration_min, session.language, model=self.model, keys=self.keys
            ),
        )
        session.video_prompts = prompts
        session.thumb_text_ideas = thumbs
        self._notify("prompts", None, "completed")

    async def rewrite_block(self, position: int, feedback: str) -> None:
        """Rewrite the story block at ``position`` (0-based) from feedback."""
        if not feedback.strip():
            raise ValueError("Rewrite feedback must not be empty.")
        block = self.session.story_blocks[position]
        block.content = await generators.rewrite_story_block(
            block.content,
            feedback,
            self.session.story_metadata,
            self.session.language,
            model=self.model,
            keys=self.keys,
        )
        self._notify("rewrite", block.index, "completed")

    async def rewrite_all(self, feedback: str) -> dict[int, Exception]:
        """
        Rewrite every story block in order.

        A failed block keeps its previous content and the remaining blocks are
        still processed.

        Returns:
            dict[int, Exception]: Failures keyed by block position
        """
        if not feedback.strip():
            raise ValueError("Rewrite feedback must not be empty.")

        failures: dict[int, Exception] = {}
        total = len(self.session.story_blocks)
        for position in range(total):
            try:
                await self.rewrite_block(position, feedback)
            except Exception as e:
                module_logger.error(f"Rewriting block {position + 1}/{total} failed: {type(e).__name__}: {e}")
                failures[position] = e
                self._notify("rewrite", self.session.story_blocks[position].index, "failed", str(e))
        return failures

    async def evaluate(self) -> str:
        self._require_title()
        session = self.session
        if not session.story_blocks:
            raise ValueError("Story content is required before evaluation.")
        session.evaluation_result = await generators.evaluate_story(
            session.story_blocks,
            session.book_title,
            session.language,
            model=self.model,
            keys=self.keys,
        )
        self._notify("evaluation", None, "completed")
        return session.evaluation_result

    async def run_all(self) -> SavedSession:
        """Generate the whole package; an uploaded story skips outline and story."""
        if not self.session.is_story_uploaded:
            await self.build_outline()
            await self.write_story()
        await self.write_review_script()
        await self.build_seo()
        await self.build_prompts()
        return self.session

    def _notify(self, stage: str, index: Optional[int], status: str, message: Optional[str] = None) -> None:
        """Notify progress callback if set."""
        if self.progress_callback:
            self.progress_callback(stage, index, status, message)
