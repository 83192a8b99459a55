"""
SQLAlchemy repository backend.

Quizzes and submissions live in two tables; the nested question/answer
structures are stored as JSON columns since the engines always read a quiz
as a whole.
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import JSON, Integer, String, Text, create_engine, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

from ..exceptions import StorageError
from ..models import Answer, Question, Quiz, Submission
from .base import QuizRepository


# =============================================================================
# ORM Models
# =============================================================================


class Base(DeclarativeBase):
    pass


class QuizRecord(Base):
    """A stored quiz. ``row_id`` keeps creation order."""

    __tablename__ = "quizzes"

    row_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(128), unique=True, index=True, nullable=False)
    title: Mapped[str] = mapped_column(Text, default="")
    subtitle: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[str] = mapped_column(String(64), default="")
    questions: Mapped[list] = mapped_column(JSON, default=list)

    def __repr__(self) -> str:
        return f"<QuizRecord(id={self.id}, title={self.title})>"

    def to_quiz(self) -> Quiz:
        return Quiz(
            id=self.id,
            title=self.title or "",
            subtitle=self.subtitle or "",
            created_at=self.created_at or "",
            questions=tuple(Question.from_dict(q) for q in self.questions or []),
        )


class SubmissionRecord(Base):
    """
    A stored submission.

    quiz_id is a plain indexed column: submissions may outlive an edit of
    their quiz, and the cascade on quiz deletion is done by the repository.
    """

    __tablename__ = "submissions"

    row_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(128), unique=True, index=True, nullable=False)
    quiz_id: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    timestamp: Mapped[str] = mapped_column(String(64), default="")
    answers: Mapped[list] = mapped_column(JSON, default=list)
    total_score: Mapped[int] = mapped_column(Integer, default=0)
    max_possible_score: Mapped[int] = mapped_column(Integer, default=0)

    def __repr__(self) -> str:
        return f"<SubmissionRecord(id={self.id}, quiz_id={self.quiz_id}, score={self.total_score})>"

    def to_submission(self) -> Submission:
        return Submission(
            id=self.id,
            quiz_id=self.quiz_id,
            timestamp=self.timestamp or "",
            answers=tuple(Answer.from_dict(a) for a in self.answers or []),
            total_score=self.total_score or 0,
            max_possible_score=self.max_possible_score or 0,
        )


# =============================================================================
# Repository
# =============================================================================


class SqlRepository(QuizRepository):
    """Relational store for any SQLAlchemy URL (SQLite by default)."""

    name = "sql"

    def __init__(self, database_url: str, echo: bool = False):
        kwargs: dict = {"echo": echo, "pool_pre_ping": True}
        if database_url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if database_url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool

        self.engine = create_engine(database_url, **kwargs)
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)
        Base.metadata.create_all(bind=self.engine)
        logger.info(f"SqlRepository initialized at {self.engine.url.render_as_string(hide_password=True)}")

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """Provide a transactional scope around a series of operations."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Database error: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self) -> None:
        self.engine.dispose()

    # =========================================================================
    # Quizzes
    # =========================================================================

    def list_quizzes(self) -> list[Quiz]:
        with self.session_scope() as session:
            rows = session.scalars(select(QuizRecord).order_by(QuizRecord.row_id)).all()
            return [row.to_quiz() for row in rows]

    def fetch_quiz(self, quiz_id: str) -> Quiz | None:
        with self.session_scope() as session:
            row = session.scalar(select(QuizRecord).where(QuizRecord.id == quiz_id))
            return row.to_quiz() if row else None

    def upsert_quiz(self, quiz: Quiz) -> None:
        questions = [q.to_dict() for q in quiz.questions]
        with self.session_scope() as session:
            row = session.scalar(select(QuizRecord).where(QuizRecord.id == quiz.id))
            if row is None:
                session.add(
                    QuizRecord(
                        id=quiz.id,
                        title=quiz.title,
                        subtitle=quiz.subtitle,
                        created_at=quiz.created_at,
                        questions=questions,
                    )
                )
            else:
                row.title = quiz.title
                row.subtitle = quiz.subtitle
                row.created_at = quiz.created_at
                row.questions = questions
        logger.debug(f"Saved quiz {quiz.id!r}")

    def delete_quiz(self, quiz_id: str) -> None:
        with self.session_scope() as session:
            session.execute(delete(SubmissionRecord).where(SubmissionRecord.quiz_id == quiz_id))
            session.execute(delete(QuizRecord).where(QuizRecord.id == quiz_id))
        logger.info(f"Deleted quiz {quiz_id!r} and its submissions")

    # =========================================================================
    # Submissions
    # =========================================================================

    def fetch_submissions(self, quiz_id: str) -> list[Submission]:
        with self.session_scope() as session:
            rows = session.scalars(
                select(SubmissionRecord)
                .where(SubmissionRecord.quiz_id == quiz_id)
                .order_by(SubmissionRecord.row_id)
            ).all()
            return [row.to_submission() for row in rows]

    def append_submission(self, submission: Submission) -> None:
        with self.session_scope() as session:
            session.add(
                SubmissionRecord(
                    id=submission.id,
                    quiz_id=submission.quiz_id,
                    timestamp=submission.timestamp,
                    answers=[a.to_dict() for a in submission.answers],
                    total_score=submission.total_score,
                    max_possible_score=submission.max_possible_score,
                )
            )
        logger.debug(f"Appended submission {submission.id!r} to quiz {submission.quiz_id!r}")

    def delete_submission(self, submission_id: str) -> None:
        with self.session_scope() as session:
            session.execute(delete(SubmissionRecord).where(SubmissionRecord.id == submission_id))
