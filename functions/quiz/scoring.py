"""
Score, XP, level, streak and rank rules for the daily quiz.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Optional

BASE_XP = 50
ACCURACY_XP = 50
XP_PER_LEVEL = 1000
DEFAULT_QUESTION_POINTS = 10

# (rank, min level, min total XP), highest first.
RANK_LADDER = [
    ("Grandmaster Scholar", 20, 25000),
    ("Master Scholar", 15, 15000),
    ("Expert Scholar", 10, 8000),
    ("Advanced Scholar", 7, 4000),
    ("Intermediate Scholar", 5, 2000),
    ("Developing Scholar", 3, 1000),
]
DEFAULT_RANK = "Beginner Scholar"

SUBJECT_TIPS = {
    "History": "Try timeline-based learning for History! 📅",
    "Polity": "Focus on article numbers for Polity! ⚖️",
    "Geography": "Use maps for Geography concepts! 🗺️",
    "Economy": "Connect economic policies to current events! 💰",
    "Science & Technology": "Follow ISRO and tech news! 🚀",
    "Current Affairs": "Read newspapers daily! 📰",
}
DEFAULT_SUBJECT_TIP = "Keep practicing this subject! 📖"


def round_half_up(value: float) -> int:
    """Rounds .5 away from zero for positive values, unlike round()."""
    return math.floor(value + 0.5)


def score_answers(questions: list[dict], answers: list) -> dict:
    """
    Grades submitted answers against the stored questions.

    Answers are matched by position. A missing answer counts as -1, and a
    question without points is worth DEFAULT_QUESTION_POINTS.
    """
    correct = 0
    total_points = 0
    detailed = []
    for index, question in enumerate(questions):
        user_answer = answers[index] if index < len(answers) and answers[index] is not None else -1
        is_correct = user_answer == question.get("correct_answer")
        points = question.get("points") or DEFAULT_QUESTION_POINTS
        if is_correct:
            correct += 1
            total_points += points
        detailed.append(
            {
                "question_id": question.get("id") or f"q{index}",
                "question": question.get("question"),
                "options": question.get("options"),
                "user_answer": user_answer,
                "correct_answer": question.get("correct_answer"),
                "is_correct": is_correct,
                "points_earned": points if is_correct else 0,
                "explanation": question.get("explanation"),
                "subject": question.get("subject"),
                "subtopic": question.get("subtopic") or question.get("subject"),
                "difficulty": question.get("difficulty") or "medium",
            }
        )

    total = len(questions)
    percentage = round_half_up(correct / total * 100) if total else 0
    return {
        "correct_answers": correct,
        "total_questions": total,
        "score_percentage": percentage,
        "total_points": total_points,
        "detailed_results": detailed,
    }


def xp_breakdown(correct: int, total: int, time_spent: float) -> dict:
    accuracy = round_half_up(correct / total * ACCURACY_XP) if total else 0
    if time_spent < 300:
        speed = 20
    elif time_spent < 600:
        speed = 10
    else:
        speed = 0
    return {"base": BASE_XP, "accuracy": accuracy, "speed": speed}


def level_for_xp(total_xp: int) -> int:
    return total_xp // XP_PER_LEVEL + 1


def rank_for(level: int, total_xp: int) -> str:
    for rank, min_level, min_xp in RANK_LADDER:
        if level >= min_level and total_xp >= min_xp:
            return rank
    return DEFAULT_RANK


def next_streak(
    current: int, last_activity: Optional[str], today: str, yesterday: str
) -> int:
    if last_activity == yesterday:
        return current + 1
    if last_activity == today:
        return current
    return 1


def fallback_mascot_message(percentage: int) -> str:
    if percentage == 100:
        return "🎯 Perfect score! You're basically a walking encyclopedia of Indian knowledge! Time to challenge Einstein! 🧠✨"
    if percentage >= 90:
        return "🌟 Outstanding! You're so smart, even Google would ask you for answers! Keep this momentum going! 🚀"
    if percentage >= 80:
        return "💪 Excellent work! You're crushing it like Bhagat Singh crushed the British morale! 🇮🇳"
    if percentage >= 70:
        return "📚 Good job! You're on the right track, just channel your inner Chandragupta Maurya! 👑"
    if percentage >= 60:
        return "🎯 Not bad! Rome wasn't built in a day, and neither was the Taj Mahal. Keep practicing! 🏛️"
    if percentage >= 50:
        return "🤔 Looks like the books need more of your time than Netflix does! But hey, we all start somewhere! 📖"
    return "😅 Well, at least you showed up! Try again tomorrow! 💪"


def recommendations(percentage: int, detailed_results: list[dict]) -> list[str]:
    if percentage >= 90:
        result = ["Outstanding! You're mastering Indian knowledge! 🌟"]
    elif percentage >= 70:
        result = ["Great job! Keep up the excellent work! 💪"]
    elif percentage >= 50:
        result = ["Good effort! Focus on weak areas to improve! 📚"]
    else:
        result = ["Don't worry! Practice makes perfect! 🎯"]

    misses = Counter(r["subject"] for r in detailed_results if not r["is_correct"])
    if misses:
        weakest, _ = misses.most_common(1)[0]
        result.append(SUBJECT_TIPS.get(weakest, DEFAULT_SUBJECT_TIP))
    return result
