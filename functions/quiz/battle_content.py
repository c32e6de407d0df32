"""
AI battle content actions: topic moderation, question generation with
per-day limits for free users, and subscription lookup.
"""

from __future__ import annotations

import logging
import uuid

from providers.claude import call_claude
from providers.exceptions import ProviderError
from providers.openai_chat import call_chat
from quiz.question_bank import POPULAR_TOPICS, SUGGESTED_TOPICS
from service.config import Settings
from service.dispatch import ActionContext
from service.errors import InvalidRequestError
from shared.clock import parse_iso, today_iso, utc_now
from shared.json_utils import extract_json_array, extract_json_object

logger = logging.getLogger(__name__)

FREE_DAILY_AI_LIMIT = 3
FREE_BATTLE_LIMIT = 5
PRO_LIMIT = 999999
MAX_QUESTION_COUNT = 50

BLOCKED_KEYWORDS = [
    "sex", "sexual", "porn", "adult", "nude", "naked", "erotic", "xxx",
    "drugs", "cocaine", "heroin", "marijuana", "cannabis", "meth",
    "violence", "murder", "kill", "suicide", "bomb", "terrorism",
    "hate", "racist", "nazi", "fascist", "discrimination",
    "gambling", "casino", "betting", "poker",
    "alcohol", "beer", "wine", "drunk", "liquor",
]

POINTS_BY_DIFFICULTY = {"easy": 10, "medium": 20, "hard": 30}
DEFAULT_POINTS = 15

MODERATION_PROMPT = """You are an educational content moderator for a quiz app used by students in India preparing for competitive exams like UPSC, JEE, NEET, Banking, etc.

Analyze this topic: "{topic}"

Determine if this topic is:
1. Appropriate for educational quiz content
2. Suitable for students aged 16-30
3. Related to academics, competitive exams, general knowledge, or professional development

Respond with JSON only:
{{
  "isAppropriate": boolean,
  "reason": "brief explanation",
  "suggestedTopics": ["alternative topic 1", "alternative topic 2", "alternative topic 3"]
}}"""

ENHANCEMENT_PROMPT = """Enhance this topic for Indian competitive exam preparation: "{topic}"

Make it more specific and educational. Examples:
- "History" -> "Indian Freedom Struggle and Modern History"
- "Science" -> "Physics and Chemistry for Competitive Exams"
- "Math" -> "Quantitative Aptitude and Mathematical Reasoning"

Respond with just the enhanced topic name (max 50 characters):"""

QUESTION_SYSTEM_PROMPT = (
    "You are an expert quiz creator for Indian competitive exams. Generate "
    "high-quality educational questions. Respond only with valid JSON array."
)

QUESTION_PROMPT = """Generate {count} multiple choice questions for a competitive exam quiz battle on the topic: "{topic}"

Difficulty level: {difficulty}
Target audience: Indian students preparing for competitive exams (UPSC, JEE, NEET, Banking, SSC)

Requirements:
1. Questions should be factual and educational
2. 4 options each (A, B, C, D)
3. Include detailed explanations
4. Focus on {difficulty} level complexity
5. Make questions India-specific when applicable

Respond with JSON array only:
[
  {{
    "question": "Question text here?",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "correct_answer": 0,
    "explanation": "Detailed explanation why this is correct...",
    "category": "{topic}",
    "difficulty": "{difficulty}"
  }}
]"""


def points_for(difficulty: str) -> int:
    return POINTS_BY_DIFFICULTY.get(difficulty, DEFAULT_POINTS)


def _moderate_with_ai(topic: str, api_key: str, model: str) -> dict:
    reply = call_chat(
        [
            {
                "role": "system",
                "content": "You are an educational content moderator. Respond only with valid JSON.",
            },
            {"role": "user", "content": MODERATION_PROMPT.format(topic=topic)},
        ],
        api_key=api_key,
        model=model,
        temperature=0.3,
        max_tokens=300,
    )
    return extract_json_object(reply)


def _enhance_topic(topic: str, api_key: str, model: str) -> str:
    try:
        reply = call_chat(
            [{"role": "user", "content": ENHANCEMENT_PROMPT.format(topic=topic)}],
            api_key=api_key,
            model=model,
            temperature=0.5,
            max_tokens=50,
        )
    except ProviderError as e:
        logger.warning("Topic enhancement failed: %s", e)
        return topic
    return reply.strip() or topic


def moderate_topic(ctx: ActionContext, params: dict) -> dict:
    topic = params.get("topic")
    if not topic or not isinstance(topic, str):
        raise InvalidRequestError("Topic is required")

    lowered = topic.lower()
    if any(keyword in lowered for keyword in BLOCKED_KEYWORDS):
        return {
            "isAppropriate": False,
            "warning": "🚫 Inappropriate Content Detected",
            "message": (
                "This topic contains content that is not suitable for educational "
                "battles. Please choose a different topic related to academics, "
                "science, history, or general knowledge."
            ),
            "suggestedTopics": list(SUGGESTED_TOPICS),
        }

    settings = ctx.settings
    if not settings.openai_api_key:
        return {"isAppropriate": True, "enhancedTopic": topic}

    try:
        verdict = _moderate_with_ai(topic, settings.openai_api_key, settings.openai_model)
    except (ProviderError, ValueError) as e:
        logger.warning("AI moderation failed, continuing with keyword check: %s", e)
        verdict = {}
    if verdict.get("isAppropriate") is False:
        return {
            "isAppropriate": False,
            "warning": "⚠️ Content Review Required",
            "message": (
                "This topic may not be suitable for educational content. Please "
                "choose topics related to academics, competitive exams, or general "
                "knowledge."
            ),
            "suggestedTopics": verdict.get("suggestedTopics") or list(SUGGESTED_TOPICS),
        }

    return {
        "isAppropriate": True,
        "enhancedTopic": _enhance_topic(topic, settings.openai_api_key, settings.openai_model),
    }


def get_popular_topics(ctx: ActionContext, params: dict) -> list[dict]:
    return [dict(t) for t in POPULAR_TOPICS]


def subscription_status(ctx: ActionContext, user_id: str) -> dict:
    subscription = ctx.db.get_subscription(user_id)
    usage = ctx.db.get_usage(user_id, today_iso())
    is_pro = bool(
        subscription
        and subscription.status == "active"
        and subscription.expires_at
        and parse_iso(subscription.expires_at) > utc_now()
    )
    return {
        "isPro": is_pro,
        "plan": subscription.subscription_type if is_pro else "Free",
        "dailyAiLimit": PRO_LIMIT if is_pro else FREE_DAILY_AI_LIMIT,
        "aiGenerationsUsed": usage.ai_generations_used if usage else 0,
        "battleLimit": PRO_LIMIT if is_pro else FREE_BATTLE_LIMIT,
        "battlesUsed": usage.battles_used if usage else 0,
    }


def check_subscription(ctx: ActionContext, params: dict) -> dict:
    return subscription_status(ctx, ctx.require_user())


def _finish_questions(raw: list, difficulty: str, count: int, prefix: str) -> list[dict]:
    stamp = uuid.uuid4().hex[:8]
    usable = [q for q in raw if isinstance(q, dict)][:count]
    return [
        {**q, "id": f"{prefix}_{stamp}_{i}", "points": points_for(difficulty)}
        for i, q in enumerate(usable)
    ]


def fallback_questions(topic: str, difficulty: str, count: int) -> list[dict]:
    stamp = uuid.uuid4().hex[:8]
    return [
        {
            "id": f"fallback_{stamp}_{i}",
            "question": f"Sample {difficulty} question {i + 1} about {topic}?",
            "options": ["Concept A", "Concept B", "Concept C", "Concept D"],
            "correct_answer": 0,
            "explanation": f"This is a sample question about {topic}.",
            "category": topic,
            "difficulty": difficulty,
            "points": points_for(difficulty),
        }
        for i in range(count)
    ]


def generate_questions(
    topic: str, difficulty: str, count: int, settings: Settings
) -> list[dict]:
    """Tries OpenAI, then Claude, then templated questions."""
    prompt = QUESTION_PROMPT.format(count=count, topic=topic, difficulty=difficulty)

    if settings.openai_api_key:
        try:
            reply = call_chat(
                [
                    {"role": "system", "content": QUESTION_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                api_key=settings.openai_api_key,
                model=settings.openai_model,
                temperature=0.7,
                max_tokens=2000,
            )
            questions = _finish_questions(extract_json_array(reply), difficulty, count, "ai")
            if questions:
                return questions
        except (ProviderError, ValueError) as e:
            logger.warning("OpenAI battle question generation failed: %s", e)

    if settings.claude_api_key:
        try:
            reply = call_claude(
                prompt,
                api_key=settings.claude_api_key,
                model=settings.claude_model,
                max_tokens=2000,
            )
            questions = _finish_questions(extract_json_array(reply), difficulty, count, "ai")
            if questions:
                return questions
        except (ProviderError, ValueError) as e:
            logger.warning("Claude battle question generation failed: %s", e)

    return fallback_questions(topic, difficulty, count)


def generate_battle_questions(ctx: ActionContext, params: dict) -> dict:
    user_id = ctx.require_user()
    topic = params.get("customTopic") or params.get("topic")
    if not topic or not isinstance(topic, str):
        raise InvalidRequestError("Topic is required")
    difficulty = params.get("difficulty") or "medium"
    if not isinstance(difficulty, str):
        raise InvalidRequestError("difficulty must be a string")
    count = params.get("questionCount", 10)
    if isinstance(count, bool) or not isinstance(count, int) or not (
        1 <= count <= MAX_QUESTION_COUNT
    ):
        raise InvalidRequestError(
            f"questionCount must be between 1 and {MAX_QUESTION_COUNT}"
        )

    status = subscription_status(ctx, user_id)
    if not status["isPro"] and status["aiGenerationsUsed"] >= status["dailyAiLimit"]:
        raise InvalidRequestError(
            "Daily AI generation limit reached. Upgrade to Pro for unlimited AI battles!"
        )

    questions = generate_questions(topic, difficulty, count, ctx.settings)
    if not status["isPro"]:
        ctx.db.increment_ai_usage(user_id, today_iso())
    return {"questions": questions}


ACTIONS = {
    "moderate_topic": moderate_topic,
    "get_popular_topics": get_popular_topics,
    "check_subscription": check_subscription,
    "generate_battle_questions": generate_battle_questions,
}
