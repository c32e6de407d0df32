"""
Daily quiz: get-or-create per date, submission scoring, and quality validation.
"""

from __future__ import annotations

import copy
import json
import logging
import random
from datetime import timedelta
from typing import Optional

from providers.claude import call_claude
from providers.exceptions import ProviderError
from providers.openai_chat import call_chat
from quiz import scoring
from quiz.question_bank import DAILY_QUESTIONS, POINTS_BY_DIFFICULTY
from service.config import Settings
from service.db import (
    DailyQuizRecord,
    DbClient,
    DuplicateRecordError,
    QuizAttemptRecord,
    QuizValidationRecord,
    UserStatsRecord,
)
from service.errors import InvalidRequestError, NotFoundError
from shared.clock import parse_date, previous_day_iso, to_iso, today_iso, utc_now
from shared.json_utils import extract_json_object

logger = logging.getLogger(__name__)

QUESTIONS_PER_QUIZ = 10
DIFFICULTY_TARGETS = (("easy", 4), ("medium", 4), ("hard", 2))
DIFFICULTIES = ("easy", "medium", "hard")

ALREADY_ATTEMPTED = "You have already attempted today's quiz"

EXPECTED_SUBJECTS = [
    "History",
    "Polity",
    "Geography",
    "Economy",
    "Science & Technology",
    "Current Affairs",
]

EXAM_KEYWORDS = [
    "article",
    "constitution",
    "act",
    "policy",
    "scheme",
    "mission",
    "river",
    "mountain",
    "state",
    "capital",
    "dynasty",
    "empire",
    "governor",
    "president",
    "minister",
    "parliament",
    "court",
]

AI_VALIDATION_DEFAULTS = {
    "factual_accuracy_score": 75,
    "exam_relevance_score": 80,
    "explanation_quality_score": 70,
    "overall_ai_score": 75,
    "issues_found": ["AI validation unavailable"],
    "recommendations": ["Manual review recommended"],
}

GENERATION_SYSTEM_PROMPT = (
    "You are an expert question setter for Indian competitive exams. Create "
    "factually accurate, exam-relevant questions. Always return valid JSON."
)

GENERATION_PROMPT = """Generate 10 high-quality multiple-choice questions for Indian competitive exams (UPSC, SSC, Banking).

Requirements:
1. Cover these subjects with specified counts:
   - History: 2 questions (focus on important events, personalities, movements)
   - Polity: 2 questions (Constitution, recent amendments, important articles)
   - Geography: 2 questions (physical features, resources, climate)
   - Economy: 1 question (recent economic policies, budget highlights, RBI decisions)
   - Science & Technology: 1 question (recent discoveries, space missions, technology)
   - Current Affairs: 2 questions (events from last 6 months as of {month_year})

2. Difficulty distribution:
   - Easy: 4 questions (basic facts, well-known information)
   - Medium: 4 questions (conceptual understanding, application)
   - Hard: 2 questions (in-depth knowledge, analysis)

3. Each question must be factually accurate, relevant to Indian competitive exams, clear, and have exactly one correct answer.

Return a JSON object with a "questions" array containing exactly 10 questions in this format:
{{
  "questions": [
    {{
      "question": "Clear, concise question text",
      "options": ["Option A", "Option B", "Option C", "Option D"],
      "correct_answer": 0,
      "explanation": "Detailed explanation with facts and context",
      "subject": "Subject name",
      "subtopic": "Specific topic",
      "difficulty": "easy",
      "points": 5
    }}
  ]
}}

Points allocation: easy=5, medium=10, hard=15"""

MASCOT_SYSTEM_PROMPT = (
    "You are Grok, known for witty, humorous responses with cultural "
    "references. Keep responses brief and encouraging."
)

MASCOT_PROMPT = """You are the MindGains mascot, a witty and encouraging study buddy. A student just completed an Indian competitive exam daily quiz with {correct}/{total} correct answers ({percentage}%).

Generate a witty, encouraging, and culturally relevant response that:
1. References Indian culture, history, or current events humorously
2. Is encouraging but realistic about their performance
3. Includes relevant emojis
4. Keeps it under 150 characters

Make it specific to their {percentage}% score and Indian context."""

VALIDATION_PROMPT = """As an expert in Indian competitive exams, validate these daily quiz questions for factual accuracy and exam relevance:

{questions}

Check for:
1. Factual accuracy of questions and answers
2. Relevance to Indian competitive exams (UPSC, SSC, Banking)
3. Appropriate difficulty progression
4. Quality of explanations

Return JSON:
{{
  "factual_accuracy_score": 0-100,
  "exam_relevance_score": 0-100,
  "explanation_quality_score": 0-100,
  "overall_ai_score": 0-100,
  "issues_found": ["issue1", "issue2"],
  "recommendations": ["rec1", "rec2"]
}}"""


def resolve_date(value: Optional[str]) -> str:
    """Returns a YYYY-MM-DD string, defaulting to today (UTC)."""
    if not value:
        return today_iso()
    try:
        return parse_date(value).isoformat()
    except (TypeError, ValueError) as e:
        raise InvalidRequestError("Invalid date, expected YYYY-MM-DD") from e


def select_daily_questions(quiz_date: str) -> list[dict]:
    """
    Picks 4 easy, 4 medium and 2 hard questions from the curated bank,
    filling any shortfall from the rest. The order is seeded by the date,
    so every caller gets the same selection for the same day.
    """
    pool = copy.deepcopy(DAILY_QUESTIONS)
    random.Random(parse_date(quiz_date).toordinal()).shuffle(pool)

    selected = []
    for difficulty, count in DIFFICULTY_TARGETS:
        selected.extend([q for q in pool if q["difficulty"] == difficulty][:count])
    for question in pool:
        if len(selected) >= QUESTIONS_PER_QUIZ:
            break
        if question not in selected:
            selected.append(question)

    return _renumber(selected[:QUESTIONS_PER_QUIZ])


def _renumber(questions: list[dict]) -> list[dict]:
    return [{**q, "id": f"dq{i + 1}"} for i, q in enumerate(questions)]


def _text(value, default: str) -> str:
    return value if isinstance(value, str) and value.strip() else default


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def normalize_question(raw: dict) -> Optional[dict]:
    """
    Coerces one AI-generated question into the stored shape. Returns None
    when the question text or options are unusable.
    """
    question = raw.get("question")
    options = raw.get("options")
    if not isinstance(question, str) or not question.strip():
        return None
    if (
        not isinstance(options, list)
        or len(options) < 2
        or not all(isinstance(o, str) for o in options)
    ):
        return None

    difficulty = raw.get("difficulty")
    if not isinstance(difficulty, str) or difficulty not in DIFFICULTIES:
        difficulty = "medium"
    correct = raw.get("correct_answer")
    points = raw.get("points")
    return {
        "question": question,
        "options": options,
        "correct_answer": correct if _is_int(correct) and 0 <= correct < len(options) else 0,
        "explanation": _text(raw.get("explanation"), ""),
        "subject": _text(raw.get("subject"), "General Knowledge"),
        "subtopic": _text(raw.get("subtopic"), "Miscellaneous"),
        "difficulty": difficulty,
        "points": points if _is_int(points) and points > 0 else POINTS_BY_DIFFICULTY[difficulty],
    }


def generate_ai_questions(quiz_date: str, settings: Settings) -> list[dict]:
    """
    Asks OpenAI for a full quiz. Short results are topped up from the
    curated selection and long ones truncated.

    Raises:
        ProviderError: If the call fails or the reply is not usable JSON.
    """
    prompt = GENERATION_PROMPT.format(
        month_year=parse_date(quiz_date).strftime("%B %Y")
    )
    reply = call_chat(
        [
            {"role": "system", "content": GENERATION_SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        temperature=0.7,
        max_tokens=3000,
        json_mode=True,
    )
    try:
        raw_questions = json.loads(reply).get("questions") or []
    except (ValueError, AttributeError) as e:
        raise ProviderError(f"Unparseable quiz generation reply: {e}") from e

    if not isinstance(raw_questions, list):
        raise ProviderError("Quiz generation reply has no questions list")

    questions = []
    for raw in raw_questions:
        question = normalize_question(raw) if isinstance(raw, dict) else None
        if question:
            questions.append(question)
        else:
            logger.info("Dropping unusable generated question: %r", raw)
    if len(questions) < QUESTIONS_PER_QUIZ:
        questions.extend(
            select_daily_questions(quiz_date)[: QUESTIONS_PER_QUIZ - len(questions)]
        )
    return _renumber(questions[:QUESTIONS_PER_QUIZ])


def build_quiz(quiz_date: str, questions: list[dict], generation_method: str) -> DailyQuizRecord:
    now = utc_now()
    subjects: list[str] = []
    for q in questions:
        if q["subject"] not in subjects:
            subjects.append(q["subject"])
    return DailyQuizRecord(
        date=quiz_date,
        questions=questions,
        total_points=sum(q["points"] for q in questions),
        difficulty_distribution={
            d: sum(1 for q in questions if q["difficulty"] == d) for d in DIFFICULTIES
        },
        subjects_covered=subjects,
        generated_at=to_iso(now),
        expires_at=to_iso(now + timedelta(hours=24)),
        generation_method=generation_method,
    )


def get_or_create_daily_quiz(db: DbClient, settings: Settings, quiz_date: str) -> tuple[DailyQuizRecord, bool]:
    """Returns (quiz, created). Safe to call concurrently for the same date."""
    existing = db.get_daily_quiz_by_date(quiz_date)
    if existing:
        return existing, False

    questions = None
    method = "curated_questions"
    if settings.openai_api_key:
        try:
            questions = generate_ai_questions(quiz_date, settings)
            method = "ai_generated"
        except ProviderError as e:
            logger.warning("AI quiz generation failed, using curated questions: %s", e)
    if questions is None:
        questions = select_daily_questions(quiz_date)

    candidate = build_quiz(quiz_date, questions, method)
    stored = db.insert_daily_quiz(candidate)
    created = stored.id == candidate.id
    if created:
        logger.info("Daily quiz for %s stored (%s)", quiz_date, method)
    return stored, created


def generate_daily_quiz(db: DbClient, settings: Settings, date: Optional[str]) -> dict:
    quiz_date = resolve_date(date)
    quiz, created = get_or_create_daily_quiz(db, settings, quiz_date)
    response = {
        "success": True,
        "quiz": quiz.as_dict(),
        "message": "Daily quiz generated successfully" if created else "Daily quiz already exists",
    }
    if created:
        response["generation_method"] = quiz.generation_method
    return response


def _mascot_message(percentage: int, correct: int, total: int, settings: Settings) -> str:
    if not settings.grok_api_key:
        return scoring.fallback_mascot_message(percentage)
    try:
        reply = call_chat(
            [
                {"role": "system", "content": MASCOT_SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": MASCOT_PROMPT.format(
                        correct=correct, total=total, percentage=percentage
                    ),
                },
            ],
            api_key=settings.grok_api_key,
            model=settings.grok_model,
            base_url=settings.grok_base_url,
            temperature=0.9,
            max_tokens=200,
        )
    except ProviderError as e:
        logger.warning("Mascot message generation failed: %s", e)
        return scoring.fallback_mascot_message(percentage)
    return reply.strip()


def _update_user_stats(db: DbClient, user_id: str, xp: int, today: str) -> UserStatsRecord:
    stats = db.get_user_stats(user_id) or UserStatsRecord(user_id=user_id)
    stats.total_xp += xp
    stats.current_level = scoring.level_for_xp(stats.total_xp)
    stats.streak_days = scoring.next_streak(
        stats.streak_days, stats.last_activity_date, today, previous_day_iso(today)
    )
    stats.rank = scoring.rank_for(stats.current_level, stats.total_xp)
    stats.last_activity_date = today
    stats.updated_at = to_iso(utc_now())
    db.save_user_stats(stats)
    return stats


def submit_daily_quiz(
    db: DbClient,
    settings: Settings,
    user_id: str,
    daily_quiz_id,
    answers,
    time_spent,
) -> dict:
    if (
        not daily_quiz_id
        or not isinstance(answers, list)
        or isinstance(time_spent, bool)
        or not isinstance(time_spent, (int, float))
    ):
        raise InvalidRequestError(
            "Missing required fields: daily_quiz_id, answers, time_spent"
        )

    quiz = db.get_daily_quiz(daily_quiz_id)
    if not quiz:
        raise NotFoundError("Daily quiz not found")

    if db.get_quiz_attempt(user_id, quiz.date):
        raise InvalidRequestError(ALREADY_ATTEMPTED)

    graded = scoring.score_answers(quiz.questions, answers)
    attempt = QuizAttemptRecord(
        user_id=user_id,
        daily_quiz_id=quiz.id,
        quiz_date=quiz.date,
        answers=graded["detailed_results"],
        correct_answers=graded["correct_answers"],
        total_questions=graded["total_questions"],
        score_percentage=graded["score_percentage"],
        total_points=graded["total_points"],
        time_spent=time_spent,
    )
    try:
        db.create_quiz_attempt(attempt)
    except DuplicateRecordError:
        raise InvalidRequestError(ALREADY_ATTEMPTED) from None

    breakdown = scoring.xp_breakdown(
        graded["correct_answers"], graded["total_questions"], time_spent
    )
    xp = sum(breakdown.values())
    _update_user_stats(db, user_id, xp, today_iso())

    results = {
        **graded,
        "time_spent": time_spent,
        "xp_earned": xp,
        "xp_breakdown": breakdown,
        "mascot_message": _mascot_message(
            graded["score_percentage"],
            graded["correct_answers"],
            graded["total_questions"],
            settings,
        ),
        "recommendations": scoring.recommendations(
            graded["score_percentage"], graded["detailed_results"]
        ),
        "attempt_id": attempt.id,
    }
    return {
        "success": True,
        "results": results,
        "message": "Daily quiz submitted successfully",
    }


def traditional_validation(questions: list[dict]) -> dict:
    subjects = {q.get("subject") for q in questions}
    difficulty = {d: sum(1 for q in questions if q.get("difficulty") == d) for d in DIFFICULTIES}
    relevant = [
        q
        for q in questions
        if any(k in (q.get("question") or "").lower() for k in EXAM_KEYWORDS)
    ]
    checks = {
        "subjectBalance": all(s in subjects for s in EXPECTED_SUBJECTS),
        "difficultyBalance": difficulty["easy"] >= 4
        and difficulty["medium"] >= 3
        and difficulty["hard"] >= 1,
        "examRelevance": len(relevant) >= len(questions) * 0.7,
        "factualAccuracy": all(_is_well_formed(q) for q in questions),
    }
    checks["qualityScore"] = 25 * sum(1 for passed in checks.values() if passed)
    return checks


def _is_well_formed(question: dict) -> bool:
    options = question.get("options")
    correct = question.get("correct_answer")
    return bool(
        question.get("question")
        and isinstance(options, list)
        and len(options) == 4
        and isinstance(correct, int)
        and 0 <= correct <= 3
        and len(question.get("explanation") or "") > 20
    )


def ai_validation(questions: list[dict], settings: Settings) -> dict:
    if not settings.claude_api_key:
        return dict(AI_VALIDATION_DEFAULTS)
    try:
        reply = call_claude(
            VALIDATION_PROMPT.format(questions=json.dumps(questions, indent=2)),
            api_key=settings.claude_api_key,
            model=settings.claude_model,
            max_tokens=1500,
            temperature=0.3,
        )
        parsed = extract_json_object(reply)
    except (ProviderError, ValueError) as e:
        logger.warning("AI quiz validation unavailable: %s", e)
        return dict(AI_VALIDATION_DEFAULTS)
    result = {**AI_VALIDATION_DEFAULTS, **parsed}
    if not isinstance(result["overall_ai_score"], (int, float)):
        result["overall_ai_score"] = AI_VALIDATION_DEFAULTS["overall_ai_score"]
    for key in ("issues_found", "recommendations"):
        if not isinstance(result[key], list):
            result[key] = []
    return result


def _validator_notes(validation: dict) -> str:
    notes = []
    if not validation["subjectBalance"]:
        notes.append("Subject distribution needs improvement")
    if not validation["difficultyBalance"]:
        notes.append("Difficulty balance requires adjustment")
    if not validation["examRelevance"]:
        notes.append("Exam relevance could be enhanced")
    issues = validation["ai_cross_check"]["issues_found"]
    if issues:
        notes.append(f"AI identified: {', '.join(str(i) for i in issues)}")
    return "; ".join(notes) if notes else "All validation checks passed"


def _improvement_recommendations(validation: dict) -> list[str]:
    result = []
    if validation["overall_quality"] < 80:
        result.append("Consider regenerating questions with stricter criteria")
    if not validation["subjectBalance"]:
        result.append("Ensure at least 1 question from each core subject")
    if not validation["difficultyBalance"]:
        result.append("Maintain 40% easy, 40% medium, 20% hard distribution")
    result.extend(validation["ai_cross_check"]["recommendations"])
    return result


def validate_daily_quiz(db: DbClient, settings: Settings, quiz_date: Optional[str]) -> dict:
    target_date = resolve_date(quiz_date)
    quiz = db.get_daily_quiz_by_date(target_date, active_only=False)
    if not quiz:
        raise NotFoundError("Quiz not found for validation")

    traditional = traditional_validation(quiz.questions)
    ai = ai_validation(quiz.questions, settings)
    validation = {
        **traditional,
        "ai_cross_check": ai,
        "overall_quality": scoring.round_half_up(
            traditional["qualityScore"] * 0.6 + ai["overall_ai_score"] * 0.4
        ),
    }

    db.save_quiz_validation(
        QuizValidationRecord(
            quiz_date=target_date,
            questions_validated=True,
            validation_method="traditional_plus_ai",
            validator_notes=_validator_notes(validation),
            quality_score=validation["overall_quality"],
            subjects_balance_check=traditional["subjectBalance"],
            difficulty_balance_check=traditional["difficultyBalance"],
            exam_relevance_check=traditional["examRelevance"],
            validated_by="automated_system",
        )
    )
    return {
        "success": True,
        "validation": validation,
        "recommendations": _improvement_recommendations(validation),
        "quiz_approved": validation["overall_quality"] >= 75,
    }
