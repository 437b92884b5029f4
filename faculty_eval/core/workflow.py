"""
Scoring workflow - quiz submission, demo evaluation and attempt reset

Each operation is a straight sequence of single store writes followed by a
best-effort notification. Nothing is rolled back: if the evaluation upsert
succeeds and a later step fails, the evaluation stays written.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from faculty_eval.core.errors import Forbidden, NotFound, ValidationError
from faculty_eval.core.notifier import ADMIN_ROOM, EVENT_SUBMITTED, EVENT_UPDATED, Notifier
from faculty_eval.core.roles import Capability, can
from faculty_eval.core.scoring import (
    calculate_total,
    max_demo_score,
    score_answers,
    validate_demo_scores,
)
from faculty_eval.core.store import DocumentStore
from faculty_eval.models import Evaluation, SectionScores, User
from faculty_eval.services import evaluations as evaluation_records
from faculty_eval.services import question_bank
from faculty_eval.services import system_config
from faculty_eval.services import users as user_registry


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScoringWorkflow:
    """
    Owns every write to evaluation records

    Args:
        store: Document store
        notifier: Receives evaluation:submitted / evaluation:updated events
        evaluated_by: Label recorded on demo evaluations
        max_demo_section_score: Upper bound for each demo section sub-score
        clock: Timestamp source
    """

    def __init__(
        self,
        store: DocumentStore,
        notifier: Notifier,
        evaluated_by: str = "Admin",
        max_demo_section_score: float = 10,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.notifier = notifier
        self.evaluated_by = evaluated_by
        self.max_demo_section_score = max_demo_section_score
        self.clock = clock

    async def _emit(self, event: str, evaluation: Evaluation) -> None:
        await self.notifier.publish(ADMIN_ROOM, event, evaluation.model_dump(mode="json", by_alias=True))

    async def submit_quiz(self, participant: User, answers: Dict[str, int]) -> Evaluation:
        """
        Score an answer set and upsert the participant's evaluation

        Repeated calls overwrite the quiz fields; they never add up.

        Raises:
            Forbidden: caller is not a participant
            ValidationError: participant has no employee id
        """
        if not can(participant.role, Capability.SUBMIT_QUIZ):
            raise Forbidden("Only participants can submit quiz")
        if not participant.employee_id:
            raise ValidationError("Participant has no employee ID")

        questions = question_bank.list_questions(self.store)
        quiz_score, section_scores = score_answers(questions, answers)

        existing = evaluation_records.get_evaluation(self.store, participant.employee_id)
        demo_score = existing.demo_score if existing else None
        now = self.clock()

        doc = self.store.evaluations.find_one_and_update(
            {"employee_id": participant.employee_id},
            {
                "user_id": participant.id,
                "name": participant.name,
                "batch": participant.batch,
                "department": participant.department,
                "designation": participant.designation,
                "quiz_score": quiz_score,
                "quiz_section_scores": section_scores,
                "total_score": calculate_total(quiz_score, demo_score),
                "submitted_at": now,
                "updated_at": now,
            },
            upsert=True,
            set_on_insert={
                "demo_score": None,
                "demo_section_scores": None,
                "evaluated_by": None,
                "created_at": now,
            },
        )
        evaluation = Evaluation.model_validate(doc)

        user_registry.set_quiz_attempted(self.store, participant.id, True)

        logger.info(
            f"📝 Quiz submitted | {participant.employee_id} | "
            f"Quiz: {evaluation.quiz_score:g} | Total: {evaluation.total_score:g}"
        )
        await self._emit(EVENT_SUBMITTED, evaluation)
        return evaluation

    async def submit_demo_score(
        self,
        employee_id: str,
        demo_score: Optional[float] = None,
        demo_section_scores: Optional[SectionScores] = None,
    ) -> Evaluation:
        """
        Record demo scores on an existing evaluation

        None keeps the stored value. The total is recomputed from the stored
        quiz score and the resulting demo score.

        Raises:
            NotFound: no evaluation for employee_id (quiz not taken yet)
            ValidationError: non-finite or out-of-range demo input; the demo
                score is capped at demo sections × max_demo_section_score
        """
        existing = evaluation_records.get_evaluation(self.store, employee_id)
        if existing is None:
            raise NotFound("Evaluation not found")

        config = system_config.find_config(self.store)
        section_count = len(config.demo_sections) if config else 0
        validate_demo_scores(
            demo_score,
            demo_section_scores,
            self.max_demo_section_score,
            max_demo_score(section_count, self.max_demo_section_score),
        )

        new_demo = demo_score if demo_score is not None else existing.demo_score
        new_sections = demo_section_scores if demo_section_scores is not None else existing.demo_section_scores

        doc = self.store.evaluations.find_one_and_update(
            {"employee_id": employee_id},
            {
                "demo_score": new_demo,
                "demo_section_scores": new_sections,
                "total_score": calculate_total(existing.quiz_score, new_demo),
                "evaluated_by": self.evaluated_by,
                "updated_at": self.clock(),
            },
        )
        evaluation = Evaluation.model_validate(doc)

        logger.info(
            f"🎤 Demo evaluated | {employee_id} | "
            f"Demo: {evaluation.demo_score} | Total: {evaluation.total_score:g}"
        )
        await self._emit(EVENT_UPDATED, evaluation)
        return evaluation

    def reset_attempt(self, actor: User, user_id: str) -> User:
        """
        Reopen the quiz for a user by deleting their evaluation outright

        Quiz and demo data are both lost; there is no undo.

        Raises:
            Forbidden: actor may not reset attempts
            NotFound: unknown user id
        """
        if not can(actor.role, Capability.RESET_ATTEMPTS):
            raise Forbidden("Access denied")

        user = user_registry.set_quiz_attempted(self.store, user_id, False)
        if user is None:
            raise NotFound("User not found")

        removed = None
        if user.employee_id:
            removed = evaluation_records.delete_evaluation(self.store, user.employee_id)

        logger.info(
            f"♻️ Attempt reset | {user.employee_id or user.id} | "
            f"Evaluation {'deleted' if removed else 'absent'}"
        )
        return user
