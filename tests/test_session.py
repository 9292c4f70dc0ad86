"""Tests for saved session models and storage."""

import json

from audiobook_studio.content.models import Language, OutlineItem, SavedSession, StoryBlock, StoryMetadata
from audiobook_studio.content.session import SessionStore, load_session_file, save_session_file


def _session(**kwargs) -> SavedSession:
    kwargs.setdefault("book_title", "Hoa Sen")
    return SavedSession(**kwargs)


class TestSavedSession:
    def test_defaults(self):
        session = _session()
        assert len(session.id) == 32
        assert session.language == Language.VI
        assert session.duration_min == 60
        assert session.frame_ratio == "16:9"
        assert session.story_blocks == []
        assert session.is_story_uploaded is False

    def test_serializes_with_camel_case_keys(self):
        session = _session(mc_name="Mai", story_metadata=StoryMetadata(female_lead="Lan"))
        data = json.loads(session.model_dump_json(by_alias=True))

        assert data["bookTitle"] == "Hoa Sen"
        assert data["mcName"] == "Mai"
        assert data["storyMetadata"]["femaleLead"] == "Lan"
        assert data["isStoryUploaded"] is False
        assert data["language"] == "vi"

    def test_accepts_camel_case_documents(self):
        session = SavedSession.model_validate(
            {"bookTitle": "Hoa Sen", "durationMin": 45, "language": "en", "unknownField": 1}
        )
        assert session.duration_min == 45
        assert session.language == Language.EN

    def test_touch_updates_timestamp(self):
        session = _session(last_modified=0)
        session.touch()
        assert session.last_modified > 0


class TestSessionStore:
    def test_save_and_load(self, tmp_path):
        store = SessionStore(tmp_path / "sessions")
        session = _session(
            outline=[OutlineItem(index=0, title="Opening", focus="Meet Lan", actions=["rain"])],
            story_blocks=[StoryBlock(index=0, title="Opening", content="Once")],
        )

        path = store.save(session)
        loaded = store.load(session.id)

        assert path == tmp_path / "sessions" / f"{session.id}.json"
        assert loaded == session

    def test_load_missing(self, tmp_path):
        assert SessionStore(tmp_path).load("nope") is None

    def test_list_sessions_newest_first_and_skips_broken(self, tmp_path):
        store = SessionStore(tmp_path)
        sessions = [_session(last_modified=stamp) for stamp in (100, 300, 200)]
        for session in sessions:
            # Written directly so the timestamps are kept
            store.path_for(session.id).write_text(session.model_dump_json(by_alias=True), encoding="utf-8")
        (tmp_path / "broken.json").write_text('{"bookTitle": 5, "outline": "x"}', encoding="utf-8")
        (tmp_path / "garbage.json").write_text("not json", encoding="utf-8")

        listed = store.list_sessions()

        assert [s.last_modified for s in listed] == [300, 200, 100]

    def test_list_sessions_missing_directory(self, tmp_path):
        assert SessionStore(tmp_path / "missing").list_sessions() == []

    def test_delete(self, tmp_path):
        store = SessionStore(tmp_path)
        session = _session()
        store.save(session)

        assert store.delete(session.id) is True
        assert store.delete(session.id) is False
        assert store.load(session.id) is None


def test_save_session_file_to_explicit_path(tmp_path):
    session = _session(book_title="Truyện Kiều")
    path = save_session_file(session, tmp_path / "nested" / "my.json")

    assert path.exists()
    assert load_session_file(path).book_title == "Truyện Kiều"
    assert "bookTitle" in path.read_text(encoding="utf-8")
