"""
Database abstraction for Postgres and an in-memory test implementation.
"""

from __future__ import annotations

import copy
import threading
import uuid
from dataclasses import asdict, dataclass, field, fields
from typing import Dict, List, Optional, Protocol, Tuple

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Float,
    Integer,
    String,
    Text,
    UniqueConstraint,
    create_engine,
    select,
    update,
)
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from shared.clock import utc_now_iso


class DuplicateRecordError(Exception):
    """Raised when an insert collides with a unique key."""


class DbClient(Protocol):
    """Interface for database access."""

    def create_mission(self, mission: "MissionRecord") -> "MissionRecord":
        ...

    def get_mission(self, mission_id: str) -> Optional["MissionRecord"]:
        ...

    def complete_mission(
        self, mission_id: str, ai_generated_content: dict
    ) -> Optional["MissionRecord"]:
        ...

    def get_daily_quiz(self, quiz_id: str) -> Optional["DailyQuizRecord"]:
        ...

    def get_daily_quiz_by_date(
        self, quiz_date: str, active_only: bool = True
    ) -> Optional["DailyQuizRecord"]:
        ...

    def insert_daily_quiz(self, quiz: "DailyQuizRecord") -> "DailyQuizRecord":
        ...

    def get_quiz_attempt(
        self, user_id: str, quiz_date: str
    ) -> Optional["QuizAttemptRecord"]:
        ...

    def create_quiz_attempt(self, attempt: "QuizAttemptRecord") -> "QuizAttemptRecord":
        ...

    def get_user_stats(self, user_id: str) -> Optional["UserStatsRecord"]:
        ...

    def save_user_stats(self, stats: "UserStatsRecord") -> None:
        ...

    def get_quiz_validation(self, quiz_date: str) -> Optional["QuizValidationRecord"]:
        ...

    def save_quiz_validation(self, validation: "QuizValidationRecord") -> None:
        ...

    def get_challenge(self, challenge_id: str) -> Optional["ChallengeRecord"]:
        ...

    def get_challenge_by_date(self, challenge_date: str) -> Optional["ChallengeRecord"]:
        ...

    def insert_challenge(self, challenge: "ChallengeRecord") -> "ChallengeRecord":
        ...

    def update_challenge_status(self, challenge_id: str, status: str) -> None:
        ...

    def get_participant(
        self, challenge_id: str, user_id: str
    ) -> Optional["ParticipantRecord"]:
        ...

    def join_challenge(
        self, participant: "ParticipantRecord"
    ) -> Tuple["ParticipantRecord", bool]:
        ...

    def record_challenge_answer(
        self,
        challenge_id: str,
        user_id: str,
        entry: dict,
        points: int,
        finished: bool,
    ) -> Optional["ParticipantRecord"]:
        ...

    def list_participants(self, challenge_id: str) -> List["ParticipantRecord"]:
        ...

    def set_participant_ranks(self, ranks: Dict[str, int]) -> None:
        ...

    def add_moment(self, moment: "MomentRecord") -> None:
        ...

    def list_moments(self, challenge_id: str, limit: int = 20) -> List["MomentRecord"]:
        ...

    def get_usage(self, user_id: str, usage_date: str) -> Optional["UsageRecord"]:
        ...

    def increment_ai_usage(self, user_id: str, usage_date: str) -> "UsageRecord":
        ...

    def get_subscription(self, user_id: str) -> Optional["SubscriptionRecord"]:
        ...

    def save_subscription(self, subscription: "SubscriptionRecord") -> None:
        ...


def _new_id() -> str:
    return uuid.uuid4().hex


class _Record:
    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class MissionRecord(_Record):
    user_id: Optional[str]
    title: str
    content_text: str
    description: Optional[str] = None
    content_type: str = "text"
    subject_name: Optional[str] = None
    exam_focus: Optional[str] = None
    difficulty: str = "medium"
    ai_generated_content: Optional[dict] = None
    status: str = "pending"
    id: str = field(default_factory=_new_id)
    created_at: str = field(default_factory=utc_now_iso)


@dataclass
class DailyQuizRecord(_Record):
    date: str
    questions: list
    total_points: int
    difficulty_distribution: dict
    subjects_covered: list
    generated_at: str
    expires_at: str
    generation_method: str
    is_active: bool = True
    id: str = field(default_factory=_new_id)


@dataclass
class QuizAttemptRecord(_Record):
    user_id: str
    daily_quiz_id: str
    quiz_date: str
    answers: list
    correct_answers: int
    total_questions: int
    score_percentage: int
    total_points: int
    time_spent: float
    id: str = field(default_factory=_new_id)
    created_at: str = field(default_factory=utc_now_iso)


@dataclass
class UserStatsRecord(_Record):
    user_id: str
    total_xp: int = 0
    current_level: int = 1
    streak_days: int = 0
    rank: str = "Beginner Scholar"
    last_activity_date: Optional[str] = None
    updated_at: str = field(default_factory=utc_now_iso)


@dataclass
class QuizValidationRecord(_Record):
    quiz_date: str
    questions_validated: bool
    validation_method: str
    validator_notes: str
    quality_score: int
    subjects_balance_check: bool
    difficulty_balance_check: bool
    exam_relevance_check: bool
    validated_by: str
    validated_at: str = field(default_factory=utc_now_iso)


@dataclass
class ChallengeRecord(_Record):
    challenge_date: str
    title: str
    description: str
    topic: str
    start_time: str
    end_time: str
    questions: list
    total_questions: int
    total_prize_pool: int = 25000
    sponsor_name: str = "MindGains AI"
    participant_count: int = 0
    status: str = "upcoming"
    id: str = field(default_factory=_new_id)
    created_at: str = field(default_factory=utc_now_iso)


@dataclass
class ParticipantRecord(_Record):
    challenge_id: str
    user_id: str
    state: str = "Unknown"
    score: int = 0
    correct_answers: int = 0
    answers: list = field(default_factory=list)
    rank: Optional[int] = None
    finished_at: Optional[str] = None
    id: str = field(default_factory=_new_id)
    joined_at: str = field(default_factory=utc_now_iso)


@dataclass
class MomentRecord(_Record):
    challenge_id: str
    moment_type: str
    title: str
    description: str
    participant_id: Optional[str] = None
    is_viral: bool = False
    id: str = field(default_factory=_new_id)
    timestamp: str = field(default_factory=utc_now_iso)


@dataclass
class UsageRecord(_Record):
    user_id: str
    date: str
    ai_generations_used: int = 0
    battles_used: int = 0


@dataclass
class SubscriptionRecord(_Record):
    user_id: str
    subscription_type: str
    status: str
    expires_at: Optional[str] = None


def _apply_answer(
    participant: ParticipantRecord, entry: dict, points: int, finished: bool
) -> None:
    if any(
        a.get("question_index") == entry["question_index"] for a in participant.answers
    ):
        raise DuplicateRecordError("Question already answered")
    participant.answers = participant.answers + [entry]
    if entry.get("is_correct"):
        participant.score += points
        participant.correct_answers += 1
    if finished:
        participant.finished_at = utc_now_iso()


class InMemoryDbClient:
    """Simple in-memory database for development and tests."""

    def __init__(self):
        self._lock = threading.Lock()
        self.missions: Dict[str, MissionRecord] = {}
        self.daily_quizzes: Dict[str, DailyQuizRecord] = {}
        self.attempts: Dict[Tuple[str, str], QuizAttemptRecord] = {}
        self.user_stats: Dict[str, UserStatsRecord] = {}
        self.validations: Dict[str, QuizValidationRecord] = {}
        self.challenges: Dict[str, ChallengeRecord] = {}
        self.participants: Dict[Tuple[str, str], ParticipantRecord] = {}
        self.moments: List[MomentRecord] = []
        self.usage: Dict[Tuple[str, str], UsageRecord] = {}
        self.subscriptions: Dict[str, SubscriptionRecord] = {}

    # Records are copied in and out so callers never alias stored state.

    def create_mission(self, mission: MissionRecord) -> MissionRecord:
        with self._lock:
            self.missions[mission.id] = copy.deepcopy(mission)
        return mission

    def get_mission(self, mission_id: str) -> Optional[MissionRecord]:
        return copy.deepcopy(self.missions.get(mission_id))

    def complete_mission(
        self, mission_id: str, ai_generated_content: dict
    ) -> Optional[MissionRecord]:
        with self._lock:
            mission = self.missions.get(mission_id)
            if not mission:
                return None
            mission.ai_generated_content = copy.deepcopy(ai_generated_content)
            mission.status = "completed"
            return copy.deepcopy(mission)

    def get_daily_quiz(self, quiz_id: str) -> Optional[DailyQuizRecord]:
        for quiz in self.daily_quizzes.values():
            if quiz.id == quiz_id:
                return copy.deepcopy(quiz)
        return None

    def get_daily_quiz_by_date(
        self, quiz_date: str, active_only: bool = True
    ) -> Optional[DailyQuizRecord]:
        quiz = self.daily_quizzes.get(quiz_date)
        if not quiz or (active_only and not quiz.is_active):
            return None
        return copy.deepcopy(quiz)

    def insert_daily_quiz(self, quiz: DailyQuizRecord) -> DailyQuizRecord:
        with self._lock:
            stored = self.daily_quizzes.setdefault(quiz.date, copy.deepcopy(quiz))
            return copy.deepcopy(stored)

    def get_quiz_attempt(
        self, user_id: str, quiz_date: str
    ) -> Optional[QuizAttemptRecord]:
        return copy.deepcopy(self.attempts.get((user_id, quiz_date)))

    def create_quiz_attempt(self, attempt: QuizAttemptRecord) -> QuizAttemptRecord:
        key = (attempt.user_id, attempt.quiz_date)
        with self._lock:
            if key in self.attempts:
                raise DuplicateRecordError("Attempt already recorded")
            self.attempts[key] = copy.deepcopy(attempt)
        return attempt

    def get_user_stats(self, user_id: str) -> Optional[UserStatsRecord]:
        return copy.deepcopy(self.user_stats.get(user_id))

    def save_user_stats(self, stats: UserStatsRecord) -> None:
        with self._lock:
            self.user_stats[stats.user_id] = copy.deepcopy(stats)

    def get_quiz_validation(self, quiz_date: str) -> Optional[QuizValidationRecord]:
        return copy.deepcopy(self.validations.get(quiz_date))

    def save_quiz_validation(self, validation: QuizValidationRecord) -> None:
        with self._lock:
            self.validations[validation.quiz_date] = copy.deepcopy(validation)

    def get_challenge(self, challenge_id: str) -> Optional[ChallengeRecord]:
        for challenge in self.challenges.values():
            if challenge.id == challenge_id:
                return copy.deepcopy(challenge)
        return None

    def get_challenge_by_date(self, challenge_date: str) -> Optional[ChallengeRecord]:
        return copy.deepcopy(self.challenges.get(challenge_date))

    def insert_challenge(self, challenge: ChallengeRecord) -> ChallengeRecord:
        with self._lock:
            stored = self.challenges.setdefault(
                challenge.challenge_date, copy.deepcopy(challenge)
            )
            return copy.deepcopy(stored)

    def update_challenge_status(self, challenge_id: str, status: str) -> None:
        with self._lock:
            for challenge in self.challenges.values():
                if challenge.id == challenge_id:
                    challenge.status = status

    def get_participant(
        self, challenge_id: str, user_id: str
    ) -> Optional[ParticipantRecord]:
        return copy.deepcopy(self.participants.get((challenge_id, user_id)))

    def join_challenge(
        self, participant: ParticipantRecord
    ) -> Tuple[ParticipantRecord, bool]:
        key = (participant.challenge_id, participant.user_id)
        with self._lock:
            existing = self.participants.get(key)
            if existing:
                return copy.deepcopy(existing), False
            self.participants[key] = copy.deepcopy(participant)
            for challenge in self.challenges.values():
                if challenge.id == participant.challenge_id:
                    challenge.participant_count += 1
        return participant, True

    def record_challenge_answer(
        self,
        challenge_id: str,
        user_id: str,
        entry: dict,
        points: int,
        finished: bool,
    ) -> Optional[ParticipantRecord]:
        with self._lock:
            participant = self.participants.get((challenge_id, user_id))
            if not participant:
                return None
            _apply_answer(participant, entry, points, finished)
            return copy.deepcopy(participant)

    def list_participants(self, challenge_id: str) -> List[ParticipantRecord]:
        return [
            copy.deepcopy(p)
            for p in self.participants.values()
            if p.challenge_id == challenge_id
        ]

    def set_participant_ranks(self, ranks: Dict[str, int]) -> None:
        with self._lock:
            for participant in self.participants.values():
                if participant.id in ranks:
                    participant.rank = ranks[participant.id]

    def add_moment(self, moment: MomentRecord) -> None:
        with self._lock:
            self.moments.append(copy.deepcopy(moment))

    def list_moments(self, challenge_id: str, limit: int = 20) -> List[MomentRecord]:
        moments = [m for m in self.moments if m.challenge_id == challenge_id]
        moments.sort(key=lambda m: m.timestamp, reverse=True)
        return copy.deepcopy(moments[:limit])

    def get_usage(self, user_id: str, usage_date: str) -> Optional[UsageRecord]:
        return copy.deepcopy(self.usage.get((user_id, usage_date)))

    def increment_ai_usage(self, user_id: str, usage_date: str) -> UsageRecord:
        with self._lock:
            usage = self.usage.setdefault(
                (user_id, usage_date), UsageRecord(user_id=user_id, date=usage_date)
            )
            usage.ai_generations_used += 1
            return copy.deepcopy(usage)

    def get_subscription(self, user_id: str) -> Optional[SubscriptionRecord]:
        return copy.deepcopy(self.subscriptions.get(user_id))

    def save_subscription(self, subscription: SubscriptionRecord) -> None:
        with self._lock:
            self.subscriptions[subscription.user_id] = copy.deepcopy(subscription)


def _to_record(record_cls, row):
    return record_cls(**{f.name: getattr(row, f.name) for f in fields(record_cls)})


class PostgresDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for PostgresDbClient")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def create_mission(self, mission: MissionRecord) -> MissionRecord:
        with self.Session() as session:
            session.add(MissionRow(**mission.as_dict()))
            session.commit()
        return mission

    def get_mission(self, mission_id: str) -> Optional[MissionRecord]:
        with self.Session() as session:
            row = session.get(MissionRow, mission_id)
            return _to_record(MissionRecord, row) if row else None

    def complete_mission(
        self, mission_id: str, ai_generated_content: dict
    ) -> Optional[MissionRecord]:
        with self.Session() as session:
            row = session.get(MissionRow, mission_id)
            if not row:
                return None
            row.ai_generated_content = ai_generated_content
            row.status = "completed"
            session.commit()
            return _to_record(MissionRecord, row)

    def get_daily_quiz(self, quiz_id: str) -> Optional[DailyQuizRecord]:
        with self.Session() as session:
            row = session.get(DailyQuizRow, quiz_id)
            return _to_record(DailyQuizRecord, row) if row else None

    def get_daily_quiz_by_date(
        self, quiz_date: str, active_only: bool = True
    ) -> Optional[DailyQuizRecord]:
        with self.Session() as session:
            stmt = select(DailyQuizRow).where(DailyQuizRow.date == quiz_date)
            if active_only:
                stmt = stmt.where(DailyQuizRow.is_active.is_(True))
            row = session.execute(stmt).scalar_one_or_none()
            return _to_record(DailyQuizRecord, row) if row else None

    def insert_daily_quiz(self, quiz: DailyQuizRecord) -> DailyQuizRecord:
        with self.Session() as session:
            session.add(DailyQuizRow(**quiz.as_dict()))
            try:
                session.commit()
                return quiz
            except IntegrityError:
                session.rollback()
            row = session.execute(
                select(DailyQuizRow).where(DailyQuizRow.date == quiz.date)
            ).scalar_one()
            return _to_record(DailyQuizRecord, row)

    def get_quiz_attempt(
        self, user_id: str, quiz_date: str
    ) -> Optional[QuizAttemptRecord]:
        with self.Session() as session:
            row = session.execute(
                select(QuizAttemptRow).where(
                    QuizAttemptRow.user_id == user_id,
                    QuizAttemptRow.quiz_date == quiz_date,
                )
            ).scalar_one_or_none()
            return _to_record(QuizAttemptRecord, row) if row else None

    def create_quiz_attempt(self, attempt: QuizAttemptRecord) -> QuizAttemptRecord:
        with self.Session() as session:
            session.add(QuizAttemptRow(**attempt.as_dict()))
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                raise DuplicateRecordError("Attempt already recorded") from e
        return attempt

    def get_user_stats(self, user_id: str) -> Optional[UserStatsRecord]:
        with self.Session() as session:
            row = session.get(UserStatsRow, user_id)
            return _to_record(UserStatsRecord, row) if row else None

    def save_user_stats(self, stats: UserStatsRecord) -> None:
        with self.Session() as session:
            session.merge(UserStatsRow(**stats.as_dict()))
            session.commit()

    def get_quiz_validation(self, quiz_date: str) -> Optional[QuizValidationRecord]:
        with self.Session() as session:
            row = session.get(QuizValidationRow, quiz_date)
            return _to_record(QuizValidationRecord, row) if row else None

    def save_quiz_validation(self, validation: QuizValidationRecord) -> None:
        with self.Session() as session:
            session.merge(QuizValidationRow(**validation.as_dict()))
            session.commit()

    def get_challenge(self, challenge_id: str) -> Optional[ChallengeRecord]:
        with self.Session() as session:
            row = session.get(ChallengeRow, challenge_id)
            return _to_record(ChallengeRecord, row) if row else None

    def get_challenge_by_date(self, challenge_date: str) -> Optional[ChallengeRecord]:
        with self.Session() as session:
            row = session.execute(
                select(ChallengeRow).where(ChallengeRow.challenge_date == challenge_date)
            ).scalar_one_or_none()
            return _to_record(ChallengeRecord, row) if row else None

    def insert_challenge(self, challenge: ChallengeRecord) -> ChallengeRecord:
        with self.Session() as session:
            session.add(ChallengeRow(**challenge.as_dict()))
            try:
                session.commit()
                return challenge
            except IntegrityError:
                session.rollback()
            row = session.execute(
                select(ChallengeRow).where(
                    ChallengeRow.challenge_date == challenge.challenge_date
                )
            ).scalar_one()
            return _to_record(ChallengeRecord, row)

    def update_challenge_status(self, challenge_id: str, status: str) -> None:
        with self.Session() as session:
            row = session.get(ChallengeRow, challenge_id)
            if not row:
                return
            row.status = status
            session.commit()

    def _participant_stmt(self, challenge_id: str, user_id: str):
        return select(ParticipantRow).where(
            ParticipantRow.challenge_id == challenge_id,
            ParticipantRow.user_id == user_id,
        )

    def get_participant(
        self, challenge_id: str, user_id: str
    ) -> Optional[ParticipantRecord]:
        with self.Session() as session:
            row = session.execute(
                self._participant_stmt(challenge_id, user_id)
            ).scalar_one_or_none()
            return _to_record(ParticipantRecord, row) if row else None

    def join_challenge(
        self, participant: ParticipantRecord
    ) -> Tuple[ParticipantRecord, bool]:
        with self.Session() as session:
            try:
                session.add(ParticipantRow(**participant.as_dict()))
                session.flush()
                session.execute(
                    update(ChallengeRow)
                    .where(ChallengeRow.id == participant.challenge_id)
                    .values(participant_count=ChallengeRow.participant_count + 1)
                )
                session.commit()
                return participant, True
            except IntegrityError:
                session.rollback()
            row = session.execute(
                self._participant_stmt(participant.challenge_id, participant.user_id)
            ).scalar_one()
            return _to_record(ParticipantRecord, row), False

    def record_challenge_answer(
        self,
        challenge_id: str,
        user_id: str,
        entry: dict,
        points: int,
        finished: bool,
    ) -> Optional[ParticipantRecord]:
        with self.Session() as session:
            row = session.execute(
                self._participant_stmt(challenge_id, user_id).with_for_update()
            ).scalar_one_or_none()
            if not row:
                return None
            participant = _to_record(ParticipantRecord, row)
            _apply_answer(participant, entry, points, finished)
            row.answers = participant.answers
            row.score = participant.score
            row.correct_answers = participant.correct_answers
            row.finished_at = participant.finished_at
            session.commit()
            return participant

    def list_participants(self, challenge_id: str) -> List[ParticipantRecord]:
        with self.Session() as session:
            rows = session.execute(
                select(ParticipantRow).where(ParticipantRow.challenge_id == challenge_id)
            ).scalars()
            return [_to_record(ParticipantRecord, row) for row in rows]

    def set_participant_ranks(self, ranks: Dict[str, int]) -> None:
        with self.Session() as session:
            for participant_id, rank in ranks.items():
                session.execute(
                    update(ParticipantRow)
                    .where(ParticipantRow.id == participant_id)
                    .values(rank=rank)
                )
            session.commit()

    def add_moment(self, moment: MomentRecord) -> None:
        with self.Session() as session:
            session.add(MomentRow(**moment.as_dict()))
            session.commit()

    def list_moments(self, challenge_id: str, limit: int = 20) -> List[MomentRecord]:
        with self.Session() as session:
            rows = session.execute(
                select(MomentRow)
                .where(MomentRow.challenge_id == challenge_id)
                .order_by(MomentRow.timestamp.desc())
                .limit(limit)
            ).scalars()
            return [_to_record(MomentRecord, row) for row in rows]

    def get_usage(self, user_id: str, usage_date: str) -> Optional[UsageRecord]:
        with self.Session() as session:
            row = session.get(UsageRow, (user_id, usage_date))
            return _to_record(UsageRecord, row) if row else None

    def increment_ai_usage(self, user_id: str, usage_date: str) -> UsageRecord:
        with self.Session() as session:
            row = session.get(UsageRow, (user_id, usage_date), with_for_update=True)
            if row:
                row.ai_generations_used += 1
            else:
                row = UsageRow(
                    user_id=user_id,
                    date=usage_date,
                    ai_generations_used=1,
                    battles_used=0,
                )
                session.add(row)
            session.commit()
            return _to_record(UsageRecord, row)

    def get_subscription(self, user_id: str) -> Optional[SubscriptionRecord]:
        with self.Session() as session:
            row = session.get(SubscriptionRow, user_id)
            return _to_record(SubscriptionRecord, row) if row else None

    def save_subscription(self, subscription: SubscriptionRecord) -> None:
        with self.Session() as session:
            session.merge(SubscriptionRow(**subscription.as_dict()))
            session.commit()


Base = declarative_base()


class MissionRow(Base):
    __tablename__ = "missions"

    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    content_type = Column(String, nullable=False)
    content_text = Column(Text, nullable=False)
    subject_name = Column(String, nullable=True)
    exam_focus = Column(String, nullable=True)
    difficulty = Column(String, nullable=False)
    ai_generated_content = Column(JSON, nullable=True)
    status = Column(String, nullable=False, default="pending")
    created_at = Column(String, nullable=False)


class DailyQuizRow(Base):
    __tablename__ = "daily_quizzes"

    id = Column(String, primary_key=True)
    date = Column(String, nullable=False, unique=True)
    questions = Column(JSON, nullable=False)
    total_points = Column(Integer, nullable=False)
    difficulty_distribution = Column(JSON, nullable=False)
    subjects_covered = Column(JSON, nullable=False)
    generated_at = Column(String, nullable=False)
    expires_at = Column(String, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    generation_method = Column(String, nullable=False)


class QuizAttemptRow(Base):
    __tablename__ = "daily_quiz_attempts"
    __table_args__ = (UniqueConstraint("user_id", "quiz_date"),)

    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False)
    daily_quiz_id = Column(String, nullable=False, index=True)
    quiz_date = Column(String, nullable=False)
    answers = Column(JSON, nullable=False)
    correct_answers = Column(Integer, nullable=False)
    total_questions = Column(Integer, nullable=False)
    score_percentage = Column(Integer, nullable=False)
    total_points = Column(Integer, nullable=False)
    time_spent = Column(Float, nullable=False)
    created_at = Column(String, nullable=False)


class UserStatsRow(Base):
    __tablename__ = "user_stats"

    user_id = Column(String, primary_key=True)
    total_xp = Column(Integer, nullable=False, default=0)
    current_level = Column(Integer, nullable=False, default=1)
    streak_days = Column(Integer, nullable=False, default=0)
    rank = Column(String, nullable=False)
    last_activity_date = Column(String, nullable=True)
    updated_at = Column(String, nullable=False)


class QuizValidationRow(Base):
    __tablename__ = "daily_quiz_validation"

    quiz_date = Column(String, primary_key=True)
    questions_validated = Column(Boolean, nullable=False)
    validation_method = Column(String, nullable=False)
    validator_notes = Column(Text, nullable=False)
    quality_score = Column(Integer, nullable=False)
    subjects_balance_check = Column(Boolean, nullable=False)
    difficulty_balance_check = Column(Boolean, nullable=False)
    exam_relevance_check = Column(Boolean, nullable=False)
    validated_by = Column(String, nullable=False)
    validated_at = Column(String, nullable=False)


class ChallengeRow(Base):
    __tablename__ = "daily_challenges"

    id = Column(String, primary_key=True)
    challenge_date = Column(String, nullable=False, unique=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    topic = Column(String, nullable=False)
    start_time = Column(String, nullable=False)
    end_time = Column(String, nullable=False)
    questions = Column(JSON, nullable=False)
    total_questions = Column(Integer, nullable=False)
    total_prize_pool = Column(Integer, nullable=False)
    sponsor_name = Column(String, nullable=False)
    participant_count = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False)
    created_at = Column(String, nullable=False)


class ParticipantRow(Base):
    __tablename__ = "challenge_participants"
    __table_args__ = (UniqueConstraint("challenge_id", "user_id"),)

    id = Column(String, primary_key=True)
    challenge_id = Column(String, nullable=False, index=True)
    user_id = Column(String, nullable=False)
    state = Column(String, nullable=False)
    score = Column(Integer, nullable=False, default=0)
    correct_answers = Column(Integer, nullable=False, default=0)
    answers = Column(JSON, nullable=False)
    rank = Column(Integer, nullable=True)
    finished_at = Column(String, nullable=True)
    joined_at = Column(String, nullable=False)


class MomentRow(Base):
    __tablename__ = "tournament_moments"

    id = Column(String, primary_key=True)
    challenge_id = Column(String, nullable=False, index=True)
    moment_type = Column(String, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    participant_id = Column(String, nullable=True)
    is_viral = Column(Boolean, nullable=False, default=False)
    timestamp = Column(String, nullable=False)


class UsageRow(Base):
    __tablename__ = "usage_tracking"

    user_id = Column(String, primary_key=True)
    date = Column(String, primary_key=True)
    ai_generations_used = Column(Integer, nullable=False, default=0)
    battles_used = Column(Integer, nullable=False, default=0)


class SubscriptionRow(Base):
    __tablename__ = "user_subscriptions"

    user_id = Column(String, primary_key=True)
    subscription_type = Column(String, nullable=False)
    status = Column(String, nullable=False)
    expires_at = Column(String, nullable=True)
