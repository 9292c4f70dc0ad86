"""
Constants for Audiobook Studio.

This module centralizes the key shapes, retry classification markers, model
names and content defaults used throughout the application.
"""

import re

# =============================================================================
# API Keys
# =============================================================================

# Google keys are 39 chars: "AIza" + 35 chars of base64url
GEMINI_KEY_PATTERN = re.compile(r"AIza[0-9A-Za-z\-_]{35}")

# Characters stripped from a key line that does not match its provider pattern
KEY_STRIP_CHARS = " \t\r\n\"'`"


# =============================================================================
# Retry Classification
# =============================================================================

RETRYABLE_STATUS_CODES = frozenset({429, 500, 503})
RETRYABLE_MESSAGE_MARKERS = ("quota", "limit", "resource_exhausted", "overloaded")
RESOURCE_EXHAUSTED_STATUS = "RESOURCE_EXHAUSTED"


# =============================================================================
# Models
# =============================================================================

GEMINI_PRO = "gemini-3-pro-preview"
GEMINI_FLASH = "gemini-3-flash-preview"

GPT_AUTO = "gpt-5.2-auto"
GPT_INSTANT = "gpt-5.2-instant"
GPT_THINKING = "gpt-5.2-thinking"
GPT_PRO = "gpt-5.2-pro"

LOGICAL_MODELS = (GEMINI_PRO, GEMINI_FLASH, GPT_AUTO, GPT_INSTANT, GPT_THINKING, GPT_PRO)

# Logical model ids containing any of these tokens are served by the
# OpenAI-compatible backend
OPENAI_MODEL_TOKENS = ("gpt", "chatgpt", "openai")

DEFAULT_MODEL = GEMINI_PRO

# OpenAI-compatible backend
DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
OPENAI_CHAT_COMPLETIONS_PATH = "/chat/completions"
SYSTEM_INSTRUCTIONS_LABEL = "[System Instructions]"
JSON_OUTPUT_INSTRUCTION = "Respond with a valid JSON object only. Do not wrap it in markdown."


# =============================================================================
# Content Defaults
# =============================================================================

DEFAULT_CHUNK_CHARS = 2000
UPLOAD_CHUNK_CHARS = 3000
DEFAULT_DURATION_MINUTES = 60
MINUTES_PER_CHAPTER = 5
MIN_CHAPTERS = 3
AUTO_DURATION_RANGE = (40, 60)
AUTO_CHAPTER_RANGE = (15, 25)
VIDEO_PROMPT_COUNT = 5
THUMB_IDEA_COUNT = 5
SEO_TITLE_COUNT = 8
DEFAULT_FRAME_RATIO = "16:9"
DEFAULT_SLUG = "ndgroup"
