# services/ai_content.py
"""Gemini-backed writing helpers.

Every helper is a coroutine so callers can cancel or time it out, and every
failure (no API key, timeout, client error, unreadable reply) ends in a fixed
fallback value instead of an exception. Nothing here touches task or leave
state: the UI decides what to do with the text.
"""
import asyncio
import json
import logging
from typing import Iterable, Optional

import google.generativeai as genai

from models.task import TaskPriority
from utils.config import get_setting

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
MISSING_KEY_TEXT = "API Key missing."
FAILED_TEXT = "Error generating content."
MAX_CONTEXT_CHARS = 10000


def _api_key() -> Optional[str]:
    return get_setting("GEMINI_API_KEY") or get_setting("API_KEY")


def _model():
    key = _api_key()
    if not key:
        return None
    genai.configure(api_key=key)
    return genai.GenerativeModel(get_setting("GEMINI_MODEL", DEFAULT_MODEL))


async def _generate(prompt: str, fallback: str, missing: str = MISSING_KEY_TEXT, model=None) -> str:
    model = model if model is not None else _model()
    if model is None:
        logger.warning("No Gemini API key configured")
        return missing
    timeout = float(get_setting("AI_TIMEOUT_SECONDS", 30))
    try:
        response = await asyncio.wait_for(model.generate_content_async(prompt), timeout)
        text = (response.text or "").strip()
    except Exception as e:
        logger.error(f"Gemini Error: {e}")
        return fallback
    return text or fallback


def _strip_fences(text: str) -> str:
    return text.strip().replace("```json", "").replace("```", "").strip()


async def enhance_task_description(title: str, task_type: str, model=None) -> dict:
    fallback = {"description": "Could not generate description.", "priority": TaskPriority.MEDIUM.value,
                "subtasks": []}
    prompt = f"""
I am a Business Analyst creating a {task_type} task with the title: "{title}".
Please provide a professional, concise description for this task, suggest an appropriate priority level
(Low, Medium, High, Critical), and a list of 3-5 actionable subtasks.

Return only JSON with this exact structure:
{{
    "description": "text",
    "priority": "Low|Medium|High|Critical",
    "subtasks": ["step", "step"]
}}
"""
    if model is None and not _api_key():
        return dict(fallback, description=MISSING_KEY_TEXT)
    text = await _generate(prompt, fallback="", model=model)
    if not text:
        return fallback
    try:
        data = json.loads(_strip_fences(text))
    except json.JSONDecodeError:
        logger.warning("Unreadable JSON from Gemini for %r", title)
        return fallback
    priority = data.get("priority")
    if priority not in {p.value for p in TaskPriority}:
        priority = TaskPriority.MEDIUM.value
    return {
        "description": str(data.get("description") or fallback["description"]),
        "priority": priority,
        "subtasks": [str(s) for s in (data.get("subtasks") or [])],
    }


async def generate_daily_standup(logs: Iterable, user_name: str, model=None) -> str:
    recent = [{"action": l.action, "details": l.details, "timestamp": l.timestamp.isoformat()}
              for l in list(logs)[:20]]
    prompt = (f"Based on the following activity logs for user {user_name}, write a short, professional daily "
              f"standup summary (past tense). Focus on completed items and new assignments.\n"
              f"Logs: {json.dumps(recent)}")
    return await _generate(prompt, fallback="Failed to generate standup report.",
                           missing="API Key missing. Cannot generate report.", model=model)


async def generate_email(recipient: str, topic: str, tone: str, model=None) -> str:
    prompt = (f"Draft a professional email for a Business Analyst.\n"
              f"Recipient: {recipient}\nTopic: {topic}\nTone: {tone}\n\n"
              f"Return only the email body text, no conversational filler.")
    return await _generate(prompt, fallback=FAILED_TEXT, model=model)


async def generate_documentation(title: str, notes: str, doc_format: str = "Markdown",
                                 include_toc: bool = False, model=None) -> str:
    prompt = (f"Generate technical documentation for a business process or feature.\n"
              f"Title: {title}\nContext/Notes: {notes[:MAX_CONTEXT_CHARS]}\nFormat: {doc_format}\n"
              + ("Requirements: Include a Table of Contents at the very beginning.\n" if include_toc else "")
              + "Ensure the content is well-structured with clear headers and sections appropriate for the "
                "selected format.")
    return await _generate(prompt, fallback=FAILED_TEXT, model=model)
