"""
Mission creation and AI structuring of mission content.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Optional

from providers.exceptions import ProviderInvalidResponseError
from providers.openai_chat import call_chat
from service.config import Settings
from service.db import DbClient, MissionRecord
from service.errors import DownstreamError, InvalidRequestError, NotFoundError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an expert educator creating structured learning content."

CONTENT_PROMPT = """You are an expert educator creating engaging learning content for Indian students preparing for competitive exams.

Topic: {title}
Content Type: {content_type}
Subject: {subject}
Exam Focus: {exam_focus}
Original Content: {content_text}

Create comprehensive learning content with the following sections:

1. Overview: A clear, engaging introduction to the topic (2-3 paragraphs)
2. Key Concepts: The most important concepts explained clearly (3-5 key points with explanations)
3. Detailed Explanation: In-depth coverage of the topic with examples
4. Examples: Real-world examples and applications (at least 3)
5. Practice Questions: 5 practice questions with answers

Format the response as JSON with these exact keys: overview, keyConcepts, detailedExplanation, examples, practiceQuestions

Also generate a quiz under the key "quiz" with 5 multiple-choice questions in this format:
{{
  "questions": [
    {{
      "question": "Question text",
      "options": ["Option A", "Option B", "Option C", "Option D"],
      "correctAnswer": 0,
      "explanation": "Why this is correct"
    }}
  ]
}}

Make the content engaging, use analogies, and relate to Indian context where relevant."""

_FALLBACKS = {
    "overview": "No overview generated",
    "keyConcepts": "No key concepts generated",
    "detailedExplanation": "No detailed explanation generated",
    "examples": "No examples generated",
    "practiceQuestions": "No practice questions generated",
}


def create_mission(
    db: DbClient,
    user_id: Optional[str],
    *,
    title: Optional[str],
    content_text: Optional[str],
    description: Optional[str] = None,
    content_type: Optional[str] = None,
    subject_name: Optional[str] = None,
    exam_focus: Optional[str] = None,
    difficulty: Optional[str] = None,
) -> MissionRecord:
    if not title or not content_text:
        raise InvalidRequestError("Title and content text are required")
    mission = MissionRecord(
        user_id=user_id,
        title=title,
        content_text=content_text,
        description=description,
        content_type=content_type or "text",
        subject_name=subject_name,
        exam_focus=exam_focus,
        difficulty=difficulty or "medium",
    )
    return db.create_mission(mission)


def analyze_mission(db: DbClient, content_id: Optional[str], settings: Settings) -> dict:
    """
    Builds structured learning content for a mission with one OpenAI call and
    stores it on the mission. The mission is left untouched if the call fails.
    """
    if not content_id:
        raise InvalidRequestError("Content ID is required")
    mission = db.get_mission(content_id)
    if not mission:
        raise NotFoundError("Mission not found")
    if not settings.openai_api_key:
        raise DownstreamError("OpenAI API key not configured")

    prompt = CONTENT_PROMPT.format(
        title=mission.title,
        content_type=mission.content_type,
        subject=mission.subject_name,
        exam_focus=mission.exam_focus or "general",
        content_text=mission.content_text,
    )
    reply = call_chat(
        [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        temperature=0.7,
        json_mode=True,
    )
    try:
        generated = json.loads(reply)
    except ValueError as e:
        raise ProviderInvalidResponseError(
            f"OpenAI returned non-JSON content for mission {content_id}"
        ) from e
    if not isinstance(generated, dict):
        raise ProviderInvalidResponseError(
            f"OpenAI returned no content object for mission {content_id}"
        )

    content = {
        "title": mission.title,
        "description": mission.description,
        **{key: generated.get(key) or fallback for key, fallback in _FALLBACKS.items()},
        "quiz": generated.get("quiz") or {"questions": []},
        "estimatedTime": math.ceil(len(mission.content_text or "x" * 1000) / 200),
        "difficulty": mission.difficulty or "medium",
    }
    db.complete_mission(mission.id, content)
    logger.info("Mission %s analyzed", mission.id)
    return content
