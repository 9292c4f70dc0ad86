"""Tests for CSV and text exports."""

import csv

from audiobook_studio.content.export import (
    CSV_BOM,
    export_filename,
    prompt_rows,
    script_rows,
    script_to_text,
    story_rows,
    to_csv,
    write_csv,
)
from audiobook_studio.content.models import Language, ScriptBlock, StoryBlock


class TestToCsv:
    def test_quotes_every_cell_and_uses_crlf(self):
        text = to_csv([["STT", "Prompt"], ["1", "misty river"]])
        assert text == f'{CSV_BOM}"STT","Prompt"\r\n"1","misty river"'

    def test_escapes_quotes_and_keeps_newlines(self):
        text = to_csv([["1", 'He said "go"\nthen left']])
        assert text == CSV_BOM + '"1","He said ""go""\nthen left"'

    def test_empty_cells(self):
        assert to_csv([["1", ""]]) == CSV_BOM + '"1",""'


class TestRows:
    def test_script_rows_vietnamese_header(self):
        blocks = [ScriptBlock(index=1, chapter="Mở đầu", text="Xin chào", chars=8)]
        assert script_rows(blocks) == [["STT", "Chương", "Review Script"], ["1", "Mở đầu", "Xin chào"]]

    def test_story_rows_english_header(self):
        blocks = [StoryBlock(index=0, title="Opening", content="Once")]
        assert story_rows(blocks, Language.EN) == [["No.", "Chapter", "Story Content"], ["0", "Opening", "Once"]]

    def test_prompt_rows_numbered_from_one(self):
        rows = prompt_rows(["a", "b"], Language.EN)
        assert rows == [["No.", "Prompt"], ["1", "a"], ["2", "b"]]


def test_export_filename():
    assert export_filename("script", "Truyện Kiều") == "review_truyen-kieu.csv"
    assert export_filename("story", "The Little Prince") == "truyen_the-little-prince.csv"
    assert export_filename("prompts", "") == "prompts_ndgroup.csv"
    assert export_filename("script", "A B", extension="txt") == "review_a-b.txt"


def test_write_csv_readable_by_csv_module(tmp_path):
    blocks = [StoryBlock(index=1, title="Chương 1", content='Dòng một\nDòng "hai"')]
    path = write_csv(tmp_path / "out" / "story.csv", story_rows(blocks))

    raw = path.read_bytes()
    assert raw.startswith(CSV_BOM.encode("utf-8"))
    assert b"\r\n" in raw

    with open(path, encoding="utf-8-sig", newline="") as f:
        rows = list(csv.reader(f))
    assert rows == [["STT", "Chương", "Nội dung Truyện"], ["1", "Chương 1", 'Dòng một\nDòng "hai"']]


def test_script_to_text():
    blocks = [
        ScriptBlock(index=1, chapter="One", text="  Hello  \n"),
        ScriptBlock(index=2, chapter="Two", text="World"),
    ]
    assert script_to_text(blocks) == "Hello\n\nWorld\n"
