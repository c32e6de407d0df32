"""
Daily India Challenge actions: one tournament per date, joined per user and
scored per answered question.
"""

from __future__ import annotations

import logging
from typing import Optional

from quiz.daily_quiz import resolve_date
from quiz.question_bank import CHALLENGE_QUESTIONS
from service.db import (
    ChallengeRecord,
    DbClient,
    DuplicateRecordError,
    MomentRecord,
    ParticipantRecord,
)
from service.dispatch import ActionContext
from service.errors import InvalidRequestError, NotFoundError

logger = logging.getLogger(__name__)

CHALLENGE_QUESTION_COUNT = 20
QUESTION_TIME_LIMIT = 30  # seconds
POINTS_PER_CORRECT = 10
STREAK_MOMENT_SCORE = 150
VIRAL_MOMENT_TYPES = {"upset", "record"}
LEADERBOARD_SIZE = 10
MOMENTS_LIMIT = 20

CHALLENGE_DESCRIPTION = (
    "Test your knowledge and represent your state in India's biggest "
    "educational tournament!"
)


def build_challenge_questions() -> list[dict]:
    return [
        {
            **CHALLENGE_QUESTIONS[i % len(CHALLENGE_QUESTIONS)],
            "id": i + 1,
            "time_limit": QUESTION_TIME_LIMIT,
        }
        for i in range(CHALLENGE_QUESTION_COUNT)
    ]


def _log_moment(
    db: DbClient,
    challenge_id: str,
    moment_type: str,
    title: str,
    description: str,
    participant_id: Optional[str] = None,
) -> None:
    db.add_moment(
        MomentRecord(
            challenge_id=challenge_id,
            moment_type=moment_type,
            title=title,
            description=description,
            participant_id=participant_id,
            is_viral=moment_type in VIRAL_MOMENT_TYPES,
        )
    )


def _optional_text(params: dict, key: str) -> Optional[str]:
    value = params.get(key)
    if value is not None and not isinstance(value, str):
        raise InvalidRequestError(f"{key} must be a string")
    return value


def _require_challenge(db: DbClient, challenge_id) -> ChallengeRecord:
    if not challenge_id or not isinstance(challenge_id, str):
        raise InvalidRequestError("challenge_id is required")
    challenge = db.get_challenge(challenge_id)
    if not challenge:
        raise NotFoundError("Challenge not found")
    return challenge


def get_or_create_challenge(
    db: DbClient,
    challenge_date: str,
    title: Optional[str] = None,
    topic: Optional[str] = None,
) -> ChallengeRecord:
    existing = db.get_challenge_by_date(challenge_date)
    if existing:
        return existing
    questions = build_challenge_questions()
    stored = db.insert_challenge(
        ChallengeRecord(
            challenge_date=challenge_date,
            title=title or f"Daily India Challenge - {challenge_date}",
            description=CHALLENGE_DESCRIPTION,
            topic=topic or "General Knowledge",
            start_time=f"{challenge_date}T15:30:00.000Z",
            end_time=f"{challenge_date}T16:00:00.000Z",
            questions=questions,
            total_questions=len(questions),
        )
    )
    logger.info("Daily challenge for %s is %s", challenge_date, stored.id)
    return stored


def get_daily_challenge(ctx: ActionContext, params: dict) -> dict:
    return get_or_create_challenge(ctx.db, resolve_date(params.get("date"))).as_dict()


def create_daily_challenge(ctx: ActionContext, params: dict) -> dict:
    challenge = get_or_create_challenge(
        ctx.db,
        resolve_date(params.get("date")),
        title=_optional_text(params, "title"),
        topic=_optional_text(params, "topic"),
    )
    return challenge.as_dict()


def join_daily_challenge(ctx: ActionContext, params: dict) -> dict:
    user_id = ctx.require_user()
    challenge = _require_challenge(ctx.db, params.get("challenge_id"))
    state = (_optional_text(params, "state") or "").strip() or "Unknown"

    participant, created = ctx.db.join_challenge(
        ParticipantRecord(challenge_id=challenge.id, user_id=user_id, state=state)
    )
    if not created:
        return {"success": True, "message": "Already joined"}

    _log_moment(
        ctx.db,
        challenge.id,
        "milestone",
        f"🎯 {state} Warrior Joins the Battle!",
        "Another brave soul enters tonight's India Challenge!",
    )
    return {"success": True, "participant": participant.as_dict()}


def submit_challenge_answer(ctx: ActionContext, params: dict) -> dict:
    user_id = ctx.require_user()
    challenge_id = params.get("challenge_id")
    if not challenge_id or not isinstance(challenge_id, str):
        raise InvalidRequestError("challenge_id is required")
    if not ctx.db.get_participant(challenge_id, user_id):
        raise InvalidRequestError("Not participating in this challenge")
    challenge = _require_challenge(ctx.db, challenge_id)

    index = params.get("question_index")
    if isinstance(index, bool) or not isinstance(index, int) or not (
        0 <= index < len(challenge.questions)
    ):
        raise InvalidRequestError("Invalid question index")

    question = challenge.questions[index]
    selected = params.get("selected_answer")
    is_correct = selected == question["correct_answer"]
    points = POINTS_PER_CORRECT if is_correct else 0
    entry = {
        "question_index": index,
        "selected_answer": selected,
        "correct_answer": question["correct_answer"],
        "is_correct": is_correct,
        "time_taken": params.get("time_taken"),
        "points_earned": points,
    }

    try:
        participant = ctx.db.record_challenge_answer(
            challenge_id,
            user_id,
            entry,
            POINTS_PER_CORRECT,
            finished=index == len(challenge.questions) - 1,
        )
    except DuplicateRecordError:
        raise InvalidRequestError("Question already answered") from None
    if participant is None:
        raise InvalidRequestError("Not participating in this challenge")

    if is_correct and participant.score > STREAK_MOMENT_SCORE:
        _log_moment(
            ctx.db,
            challenge_id,
            "streak",
            f"🔥 {participant.state} on Fire!",
            f"Perfect streak continues! Someone from {participant.state} is dominating tonight!",
            participant_id=participant.id,
        )

    return {
        "isCorrect": is_correct,
        "points_earned": points,
        "current_score": participant.score,
        "explanation": question.get("explanation"),
    }


def complete_daily_challenge(ctx: ActionContext, params: dict) -> dict:
    challenge = _require_challenge(ctx.db, params.get("challenge_id"))
    ctx.db.update_challenge_status(challenge.id, "completed")

    standings = sorted(
        ctx.db.list_participants(challenge.id), key=lambda p: (-p.score, p.joined_at)
    )
    ctx.db.set_participant_ranks({p.id: rank for rank, p in enumerate(standings, start=1)})
    return {"success": True, "message": "Challenge completed!"}


def get_state_leaderboard(ctx: ActionContext, params: dict) -> list[dict]:
    challenge = _require_challenge(ctx.db, params.get("challenge_id"))

    by_state: dict[str, dict] = {}
    for participant in ctx.db.list_participants(challenge.id):
        entry = by_state.setdefault(
            participant.state,
            {"challenge_id": challenge.id, "state": participant.state, "participants": 0, "total_score": 0},
        )
        entry["participants"] += 1
        entry["total_score"] += participant.score

    board = sorted(by_state.values(), key=lambda s: (-s["total_score"], s["state"]))
    for rank, entry in enumerate(board, start=1):
        entry["average_score"] = round(entry["total_score"] / entry["participants"], 2)
        entry["state_rank"] = rank
    return board[:LEADERBOARD_SIZE]


def get_tournament_moments(ctx: ActionContext, params: dict) -> list[dict]:
    challenge = _require_challenge(ctx.db, params.get("challenge_id"))
    return [m.as_dict() for m in ctx.db.list_moments(challenge.id, limit=MOMENTS_LIMIT)]


ACTIONS = {
    "get_daily_challenge": get_daily_challenge,
    "create_daily_challenge": create_daily_challenge,
    "join_daily_challenge": join_daily_challenge,
    "submit_challenge_answer": submit_challenge_answer,
    "complete_daily_challenge": complete_daily_challenge,
    "get_state_leaderboard": get_state_leaderboard,
    "get_tournament_moments": get_tournament_moments,
}
