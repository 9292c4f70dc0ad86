"""Tests for the content pipeline with the generators mocked."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from audiobook_studio.content import generators, pipeline as pipeline_module
from audiobook_studio.content.models import (
    Language,
    OutlineItem,
    OutlineResult,
    SavedSession,
    SEOResult,
    StoryBlock,
    StoryMetadata,
)
from audiobook_studio.content.pipeline import ContentPipeline

OUTLINE = OutlineResult(
    chapters=[
        OutlineItem(index=0, title="Opening", focus="Meet Lan", actions=["rain"]),
        OutlineItem(index=1, title="Ending", focus="Farewell", actions=["boat"]),
    ],
    metadata=StoryMetadata(female_lead="Lan", male_lead="Minh", villain="Hắc"),
)


@pytest.fixture
def mocked_generators(monkeypatch):
    mocks = {
        "generate_outline": AsyncMock(return_value=OUTLINE),
        "generate_story_block": AsyncMock(side_effect=lambda item, *args, **kwargs: f"story {item.title}"),
        "generate_review_block": AsyncMock(side_effect=lambda content, title, *args, **kwargs: f"review of {content}"),
        "generate_seo": AsyncMock(return_value=SEOResult(titles=["T"], description="D")),
        "generate_video_prompts": AsyncMock(return_value=["p1", "p2"]),
        "generate_thumb_ideas": AsyncMock(return_value=["1H00M"]),
        "rewrite_story_block": AsyncMock(side_effect=lambda content, feedback, *args, **kw: f"{content} + {feedback}"),
        "evaluate_story": AsyncMock(return_value="9/10"),
    }
    for name, mock in mocks.items():
        monkeypatch.setattr(generators, name, mock)
    return mocks


@pytest.fixture
def events():
    return []


def _pipeline(session: SavedSession, events=None, model="gemini-3-pro-preview") -> ContentPipeline:
    callback = None if events is None else (lambda *event: events.append(event))
    return ContentPipeline(session, model=model, keys={"google": "blob"}, progress_callback=callback)


class TestRunAll:
    def test_generates_full_package(self, mocked_generators, events):
        session = SavedSession(book_title="Hoa Sen", duration_min=10, language=Language.EN)

        asyncio.run(_pipeline(session, events).run_all())

        assert [b.content for b in session.story_blocks] == ["story Opening", "story Ending"]
        assert [b.index for b in session.story_blocks] == [0, 1]
        assert [b.text for b in session.script_blocks] == ["review of story Opening", "review of story Ending"]
        assert session.script_blocks[0].chars == len("review of story Opening")
        assert session.script_blocks[1].chapter == "Ending"
        assert session.story_metadata.female_lead == "Lan"
        assert session.chapters_count == 2
        assert session.seo.titles == ["T"]
        assert session.video_prompts == ["p1", "p2"]
        assert session.thumb_text_ideas == ["1H00M"]

        stages = [(stage, status) for stage, _, status, _ in events]
        assert stages[0] == ("outline", "completed")
        assert stages[-1] == ("prompts", "completed")
        assert stages.index(("seo", "completed")) > stages.index(("script", "completed"))

    def test_chapter_count_defaults_from_duration(self, mocked_generators):
        session = SavedSession(book_title="Hoa Sen", duration_min=45)
        asyncio.run(_pipeline(session).build_outline())

        kwargs = mocked_generators["generate_outline"].await_args.kwargs
        assert kwargs["chapters_count"] == 9
        assert kwargs["model"] == "gemini-3-pro-preview"
        assert kwargs["keys"] == {"google": "blob"}

    def test_explicit_chapter_count(self, mocked_generators):
        session = SavedSession(book_title="Hoa Sen", chapters_count=4)
        asyncio.run(_pipeline(session).build_outline())
        assert mocked_generators["generate_outline"].await_args.kwargs["chapters_count"] == 4

    def test_uploaded_story_skips_outline_and_story(self, mocked_generators):
        session = SavedSession(book_title="Hoa Sen")
        pipeline = _pipeline(session)
        pipeline.load_upload("First paragraph\nSecond paragraph")

        asyncio.run(pipeline.run_all())

        mocked_generators["generate_outline"].assert_not_awaited()
        mocked_generators["generate_story_block"].assert_not_awaited()
        assert len(session.script_blocks) == 1
        assert session.script_blocks[0].chapter == "Phần 1 (Upload)"

    def test_failure_stops_later_steps(self, mocked_generators):
        mocked_generators["generate_review_block"].side_effect = RuntimeError("quota")
        session = SavedSession(book_title="Hoa Sen")

        with pytest.raises(RuntimeError):
            asyncio.run(_pipeline(session).run_all())

        assert len(session.story_blocks) == 2
        mocked_generators["generate_seo"].assert_not_awaited()


class TestPreconditions:
    def test_blank_title(self, mocked_generators):
        with pytest.raises(ValueError, match="title"):
            asyncio.run(_pipeline(SavedSession(book_title="  ")).build_outline())

    def test_story_needs_outline(self, mocked_generators):
        with pytest.raises(ValueError, match="outline"):
            asyncio.run(_pipeline(SavedSession(book_title="Hoa Sen")).write_story())

    def test_script_needs_story(self, mocked_generators):
        with pytest.raises(ValueError, match="Story content"):
            asyncio.run(_pipeline(SavedSession(book_title="Hoa Sen")).write_review_script())

    def test_evaluation_needs_story(self, mocked_generators):
        with pytest.raises(ValueError):
            asyncio.run(_pipeline(SavedSession(book_title="Hoa Sen")).evaluate())

    def test_empty_feedback(self, mocked_generators):
        session = SavedSession(book_title="Hoa Sen", story_blocks=[StoryBlock(index=0, title="A", content="a")])
        with pytest.raises(ValueError, match="feedback"):
            asyncio.run(_pipeline(session).rewrite_all("   "))


class TestUpload:
    def test_splits_into_parts(self):
        session = SavedSession(book_title="Draft", language=Language.EN, script_blocks=[])
        pipeline = _pipeline(session)

        pipeline.load_upload("a" * 30 + "\n" + "b" * 30, title="My Story", max_chars=40)

        assert session.book_title == "My Story"
        assert session.is_story_uploaded is True
        assert [b.title for b in session.story_blocks] == ["Part 1 (Upload)", "Part 2 (Upload)"]
        assert [b.index for b in session.story_blocks] == [1, 2]
        assert session.outline == []


class TestRewrite:
    def _session(self):
        return SavedSession(
            book_title="Hoa Sen",
            story_blocks=[
                StoryBlock(index=0, title="A", content="first"),
                StoryBlock(index=1, title="B", content="second"),
                StoryBlock(index=2, title="C", content="third"),
            ],
        )

    def test_rewrite_single_block(self, mocked_generators):
        session = self._session()
        asyncio.run(_pipeline(session).rewrite_block(1, "darker"))
        assert [b.content for b in session.story_blocks] == ["first", "second + darker", "third"]

    def test_rewrite_all_continues_after_failure(self, mocked_generators, events):
        def rewrite(content, feedback, *args, **kwargs):
            if content == "second":
                raise RuntimeError("quota")
            return content.upper()

        mocked_generators["rewrite_story_block"].side_effect = rewrite
        session = self._session()

        failures = asyncio.run(_pipeline(session, events).rewrite_all("shout"))

        assert list(failures) == [1]
        assert [b.content for b in session.story_blocks] == ["FIRST", "second", "THIRD"]
        assert ("rewrite", 1, "failed", "quota") in events


def test_evaluate_stores_result(mocked_generators):
    session = SavedSession(book_title="Hoa Sen", story_blocks=[StoryBlock(index=0, title="A", content="a")])

    assert asyncio.run(_pipeline(session, model="gpt-5.2-pro").evaluate()) == "9/10"
    assert session.evaluation_result == "9/10"
    assert mocked_generators["evaluate_story"].await_args.kwargs["model"] == "gpt-5.2-pro"


def test_failed_rewrite_is_logged(mocked_generators, monkeypatch):
    log = Mock()
    monkeypatch.setattr(pipeline_module, "module_logger", log)
    mocked_generators["rewrite_story_block"].side_effect = RuntimeError("quota")
    session = SavedSession(book_title="Hoa Sen", story_blocks=[StoryBlock(index=0, title="A", content="a")])

    asyncio.run(_pipeline(session).rewrite_all("darker"))

    log.error.assert_called_once()
    assert "quota" in log.error.call_args.args[0]
