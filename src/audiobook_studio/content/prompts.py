"""Prompt templates and response schemas for content generation."""

from typing import Any, Optional

from audiobook_studio.constants import (
    AUTO_CHAPTER_RANGE,
    AUTO_DURATION_RANGE,
    SEO_TITLE_COUNT,
    THUMB_IDEA_COUNT,
    VIDEO_PROMPT_COUNT,
)

from .models import Language, OutlineItem, StoryBlock, StoryMetadata

# =============================================================================
# Response Schemas
# =============================================================================

STRING_LIST_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "items": {"type": "STRING"},
}

OUTLINE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "chapters": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING"},
                    "focus": {"type": "STRING"},
                    "actions": STRING_LIST_SCHEMA,
                },
                "required": ["title", "focus", "actions"],
            },
        },
        "metadata": {
            "type": "OBJECT",
            "properties": {
                "femaleLead": {"type": "STRING"},
                "maleLead": {"type": "STRING"},
                "villain": {"type": "STRING"},
            },
            "required": ["femaleLead", "maleLead", "villain"],
        },
    },
    "required": ["chapters", "metadata"],
}

SEO_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "titles": STRING_LIST_SCHEMA,
        "hashtags": STRING_LIST_SCHEMA,
        "keywords": STRING_LIST_SCHEMA,
        "description": {"type": "STRING"},
    },
    "required": ["titles", "hashtags", "keywords", "description"],
}


# =============================================================================
# Outline
# =============================================================================

OUTLINE_PROMPT = {
    Language.VI: """Dựa trên tên sách/chủ đề "{book_title}". {idea_context} {identity_context}
Hãy tạo dàn ý kịch bản cho một video YouTube theo phong cách kể chuyện/audiobook.
{structure}
Cấu trúc bắt buộc: 1. Hook (nhắc tên kênh {channel_name} nếu phù hợp), 2. Intro (giới thiệu MC {mc_name}),
3. Các chương chính của câu chuyện, 4. Bài học rút ra, 5. Kết thúc.
Đặt tên cho nữ chính, nam chính và phản diện trong trường "metadata" và dùng thống nhất trong toàn bộ dàn ý.
Ngôn ngữ đầu ra: Tiếng Việt.""",
    Language.EN: """Based on the book/topic "{book_title}". {idea_context} {identity_context}
Create a script outline for a YouTube video in storytelling/audiobook style.
{structure}
Required structure: 1. Hook (mention channel {channel_name} if fitting), 2. Intro (introduce host {mc_name}),
3. Main story chapters, 4. Key takeaways, 5. Conclusion.
Name the female lead, male lead and villain in the "metadata" field and use these names consistently.
Output language: English (US). Tone: professional, engaging.""",
}

AUTO_STRUCTURE = {
    Language.VI: (
        "Mục tiêu: video dài khoảng {min_minutes}-{max_minutes} phút. Hãy tự quyết định số chương phù hợp "
        "(thường từ {min_chapters} đến {max_chapters} chương) để đủ độ sâu cho thời lượng này."
    ),
    Language.EN: (
        "Goal: a video approximately {min_minutes}-{max_minutes} minutes long. You decide the number of chapters "
        "(usually {min_chapters}-{max_chapters}) to ensure enough depth for this duration."
    ),
}

MANUAL_STRUCTURE = {
    Language.VI: "Mục tiêu: video dài chính xác {duration_min} phút. Chia nội dung thành {chapters_count} chương chính.",
    Language.EN: "Goal: a video strictly {duration_min} minutes long. Structure the content into "
    "{chapters_count} main chapters.",
}


def build_outline_prompt(
    book_title: str,
    idea: str,
    channel_name: str,
    mc_name: str,
    chapters_count: int,
    duration_min: int,
    language: Language,
    is_auto_duration: bool = False,
) -> str:
    """Build the outline generation prompt."""
    if language == Language.VI:
        idea_context = f'Kết hợp với ý tưởng/bối cảnh: "{idea}".' if idea else ""
        identity_context = f'Thông tin kênh: "{channel_name or "N/A"}", MC: "{mc_name or "N/A"}".'
    else:
        idea_context = f'Incorporate this idea/context: "{idea}".' if idea else ""
        identity_context = f'Context info - Channel Name: "{channel_name or "N/A"}", Host Name: "{mc_name or "N/A"}".'

    if is_auto_duration:
        structure = AUTO_STRUCTURE[language].format(
            min_minutes=AUTO_DURATION_RANGE[0],
            max_minutes=AUTO_DURATION_RANGE[1],
            min_chapters=AUTO_CHAPTER_RANGE[0],
            max_chapters=AUTO_CHAPTER_RANGE[1],
        )
    else:
        structure = MANUAL_STRUCTURE[language].format(duration_min=duration_min, chapters_count=chapters_count)

    return OUTLINE_PROMPT[language].format(
        book_title=book_title,
        idea_context=idea_context,
        identity_context=identity_context,
        structure=structure,
        channel_name=channel_name,
        mc_name=mc_name,
    )


# =============================================================================
# Story
# =============================================================================

NOVELIST_SYSTEM_PROMPT = {
    Language.VI: "Bạn là một tiểu thuyết gia tài ba. Văn phong lôi cuốn, giàu cảm xúc. Chỉ trả về nội dung truyện.",
    Language.EN: "You are a best-selling novelist. Your prose is engaging and emotional. Output only the story text.",
}

STORY_PROMPT = {
    Language.VI: """Viết nội dung chi tiết cho chương "{chapter_title}" của tác phẩm "{book_title}". {idea_context}
Mục tiêu: "{focus}". Tình tiết: {actions}.
Nhân vật (giữ nguyên tên): nữ chính {female_lead}, nam chính {male_lead}, phản diện {villain}.
Viết dạng văn xuôi, kể chuyện, 400-600 từ, tiếng Việt.""",
    Language.EN: """Write detailed content for the chapter "{chapter_title}" of the book/story "{book_title}". {idea_context}
Goal: "{focus}". Plot points: {actions}.
Characters (keep these names): female lead {female_lead}, male lead {male_lead}, villain {villain}.
Write in prose, storytelling style, 400-600 words, strictly in English.""",
}

DEFAULT_METADATA = {
    Language.VI: StoryMetadata(female_lead="Nữ chính", male_lead="Nam chính", villain="Phản diện"),
    Language.EN: StoryMetadata(female_lead="The heroine", male_lead="The hero", villain="The villain"),
}


def build_story_prompt(
    item: OutlineItem,
    metadata: Optional[StoryMetadata],
    book_title: str,
    idea: str,
    language: Language,
) -> str:
    """Build the prompt for writing one chapter of prose."""
    metadata = metadata or DEFAULT_METADATA[language]
    if idea:
        idea_context = f'Lưu ý ý tưởng chủ đạo: "{idea}".' if language == Language.VI else f'Note the core idea: "{idea}".'
    else:
        idea_context = ""

    return STORY_PROMPT[language].format(
        chapter_title=item.title,
        book_title=book_title,
        idea_context=idea_context,
        focus=item.focus,
        actions=", ".join(item.actions),
        female_lead=metadata.female_lead,
        male_lead=metadata.male_lead,
        villain=metadata.villain,
    )


REWRITE_PROMPT = {
    Language.VI: """## Đoạn truyện hiện tại
{content}

## Góp ý của biên tập viên
{feedback}

## Yêu cầu
Viết lại đoạn truyện theo góp ý trên. Giữ nguyên tên nhân vật{names}.
Chỉ trả về đoạn truyện đã viết lại, không kèm giải thích.""",
    Language.EN: """## Current Passage
{content}

## Editor Feedback
{feedback}

## Your Task
Rewrite the passage applying the feedback above. Keep the character names{names}.
Return only the rewritten passage, with no introduction or explanation.""",
}


def build_rewrite_prompt(
    content: str,
    feedback: str,
    metadata: Optional[StoryMetadata],
    language: Language,
) -> str:
    """Build the prompt for rewriting a passage from editor feedback."""
    names = ""
    if metadata:
        names = f" ({metadata.female_lead}, {metadata.male_lead}, {metadata.villain})"
    return REWRITE_PROMPT[language].format(content=content, feedback=feedback, names=names)


# =============================================================================
# Review Script
# =============================================================================

REVIEW_SYSTEM_PROMPT = {
    Language.VI: "Bạn là một Reviewer/MC kênh AudioBook nổi tiếng, giọng đọc trầm ấm, sâu sắc.",
    Language.EN: "You are a famous audiobook narrator and reviewer with a warm, insightful voice.",
}

REVIEW_PROMPT = {
    Language.VI: """Thông tin định danh: Tên Kênh: "{channel_name}", Tên MC: "{mc_name}".
Dùng tên Kênh và tên MC này thay cho các từ chung chung khi chào hỏi hoặc giới thiệu.
Nhiệm vụ: viết lời dẫn/kịch bản review cho phần nội dung sau của cuốn sách "{book_title}".
Chương: "{chapter_title}"
Nội dung gốc: "{story_content}"
Yêu cầu: phân tích, bình luận, dẫn dắt. Đan xen tóm tắt và bài học. Giọng văn tự nhiên. Trả lời tiếng Việt.""",
    Language.EN: """Identity info: Channel Name: "{channel_name}", Host Name: "{mc_name}".
Use this channel name and host name naturally in intros and outros instead of placeholders.
Task: write a narration/review script for the following content of the book "{book_title}".
Chapter: "{chapter_title}"
Original content: "{story_content}"
Requirements: analyze, comment and guide the listener. Interweave summary with insights.
Natural, conversational tone. Output strictly in English.""",
}


def build_review_prompt(
    story_content: str,
    chapter_title: str,
    book_title: str,
    channel_name: str,
    mc_name: str,
    language: Language,
) -> str:
    """Build the prompt for the narration script of one story block."""
    if language == Language.VI:
        channel_name = channel_name or "Kênh của bạn"
        mc_name = mc_name or "Mình"
    else:
        channel_name = channel_name or "Your Channel"
        mc_name = mc_name or "Me"
    return REVIEW_PROMPT[language].format(
        channel_name=channel_name,
        mc_name=mc_name,
        book_title=book_title,
        chapter_title=chapter_title,
        story_content=story_content,
    )


# =============================================================================
# SEO, Video Prompts and Thumbnails
# =============================================================================

SEO_PROMPT = {
    Language.VI: """Tạo nội dung SEO cho video YouTube về "{book_title}". {channel_context}
Dạng review/kể chuyện dài {duration_min} phút. Cung cấp: {title_count} tiêu đề clickbait, hashtags,
keywords (bao gồm tên kênh) và mô tả video chuẩn SEO (nhắc đến tên kênh). JSON format. Ngôn ngữ: Tiếng Việt.""",
    Language.EN: """Generate SEO content for a YouTube video about "{book_title}". {channel_context}
Format: audiobook/review, {duration_min} minutes long. Provide: {title_count} clickbait titles, hashtags,
keywords (include channel name) and an SEO-optimized video description (mention channel name).
JSON format. Language: English.""",
}


def build_seo_prompt(book_title: str, channel_name: str, duration_min: int, language: Language) -> str:
    """Build the SEO metadata prompt."""
    if channel_name:
        channel_context = (
            f'Tên kênh là "{channel_name}".' if language == Language.VI else f'Channel name is "{channel_name}".'
        )
    else:
        channel_context = ""
    return SEO_PROMPT[language].format(
        book_title=book_title,
        channel_context=channel_context,
        duration_min=duration_min,
        title_count=SEO_TITLE_COUNT,
    )


VIDEO_PROMPTS_PROMPT = (
    "Generate {count} cinematic, photorealistic video prompts for background visuals in a YouTube video "
    'about "{book_title}". Visuals should match the story\'s mood. Aspect ratio: {frame_ratio}. '
    "No text or logos. JSON array of strings."
)


def build_video_prompts_prompt(book_title: str, frame_ratio: str) -> str:
    """Build the prompt for background video prompts, always in English."""
    return VIDEO_PROMPTS_PROMPT.format(count=VIDEO_PROMPT_COUNT, book_title=book_title, frame_ratio=frame_ratio)


THUMB_PROMPT = {
    Language.VI: 'Cho video YouTube về "{book_title}", đề xuất {count} text thumbnail ngắn gọn, gây tò mò, '
    "tiếng Việt. Một ý phải chứa thời lượng: {duration}. JSON array.",
    Language.EN: 'For a YouTube video about "{book_title}", suggest {count} short, curiosity-inducing thumbnail '
    "texts in English. One idea must include the duration: {duration}. JSON array.",
}


def build_thumb_prompt(book_title: str, duration: str, language: Language) -> str:
    """Build the thumbnail text prompt."""
    return THUMB_PROMPT[language].format(book_title=book_title, count=THUMB_IDEA_COUNT, duration=duration)


# =============================================================================
# Evaluation
# =============================================================================

EVALUATE_SYSTEM_PROMPT = {
    Language.VI: "Bạn là một biên tập viên văn học khó tính và công tâm.",
    Language.EN: "You are a demanding but fair literary editor.",
}

EVALUATE_PROMPT = {
    Language.VI: """Đánh giá câu chuyện "{book_title}" dưới đây.

{story}

Chấm điểm (thang 10) cho: cốt truyện, nhân vật, nhịp độ, cảm xúc, độ phù hợp để làm audiobook.
Nêu điểm mạnh, điểm yếu và các góp ý cụ thể để viết lại. Trả lời tiếng Việt.""",
    Language.EN: """Evaluate the story "{book_title}" below.

{story}

Score (out of 10): plot, characters, pacing, emotional impact, suitability for audiobook narration.
List strengths, weaknesses and concrete rewrite suggestions. Answer in English.""",
}


def build_evaluate_prompt(blocks: list[StoryBlock], book_title: str, language: Language) -> str:
    """Build the story evaluation prompt from all story blocks."""
    story = "\n\n---\n\n".join(f"### {block.title}\n\n{block.content}" for block in blocks)
    return EVALUATE_PROMPT[language].format(book_title=book_title, story=story)
