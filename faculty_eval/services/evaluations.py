"""
Evaluation records - lookups, leaderboard and admin aggregate views
"""
from typing import Any, Dict, List, Optional

from faculty_eval.core.roles import Role
from faculty_eval.core.store import DESCENDING, DocumentStore
from faculty_eval.models import Evaluation
from faculty_eval.services import users as user_registry


ALL_BATCHES = "All"

# Evaluation fields never merged over the user's own fields in the faculty view
_IDENTITY_FIELDS = {"id", "email", "role", "quiz_attempted", "created_at"}


def _batch_filter(batch: Optional[str]) -> Optional[str]:
    return batch if batch and batch != ALL_BATCHES else None


def get_evaluation(store: DocumentStore, employee_id: str) -> Optional[Evaluation]:
    doc = store.evaluations.find_one({"employee_id": employee_id})
    return Evaluation.model_validate(doc) if doc else None


def delete_evaluation(store: DocumentStore, employee_id: str) -> Optional[Evaluation]:
    doc = store.evaluations.find_one_and_delete({"employee_id": employee_id})
    return Evaluation.model_validate(doc) if doc else None


def list_evaluations(store: DocumentStore, batch: Optional[str] = None) -> List[Evaluation]:
    """All evaluations by total score, highest first"""
    batch = _batch_filter(batch)
    filter = {"batch": batch} if batch else None
    docs = store.evaluations.find(filter, sort=("total_score", DESCENDING))
    return [Evaluation.model_validate(doc) for doc in docs]


def clamp_limit(limit: Optional[int], default: int = 10, maximum: int = 50) -> int:
    """Missing or non-positive -> default; never above maximum"""
    if not limit or limit <= 0:
        limit = default
    return min(limit, maximum)


def get_leaderboard(store: DocumentStore, limit: int) -> List[Evaluation]:
    """Top evaluations by total score (limit must already be clamped)"""
    docs = store.evaluations.find(sort=("total_score", DESCENDING), limit=limit)
    return [Evaluation.model_validate(doc) for doc in docs]


def _evaluation_index(store: DocumentStore) -> Dict[str, Evaluation]:
    return {
        doc["employee_id"]: Evaluation.model_validate(doc)
        for doc in store.evaluations.find()
    }


def get_faculty_view(store: DocumentStore, batch: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Participants joined with their evaluation by employee id

    Participants without an evaluation carry no score keys at all: a missing
    score means "not yet submitted", never zero.
    """
    participants = user_registry.list_users(store, role=Role.PARTICIPANT, batch=_batch_filter(batch))
    index = _evaluation_index(store)

    faculty = []
    for user in participants:
        row = user.model_dump(mode="json", by_alias=True)
        evaluation = index.get(user.employee_id) if user.employee_id else None
        if evaluation is not None:
            row.update(evaluation.model_dump(mode="json", by_alias=True, exclude=_IDENTITY_FIELDS))
        faculty.append(row)
    return faculty


def get_analysis_view(store: DocumentStore, batch: Optional[str] = None) -> List[Dict[str, Any]]:
    """Per-participant identity plus quiz/demo breakdown for admin analysis"""
    participants = user_registry.list_users(store, role=Role.PARTICIPANT, batch=_batch_filter(batch))
    index = _evaluation_index(store)

    rows = []
    for user in participants:
        evaluation = index.get(user.employee_id) if user.employee_id else None
        row = {
            "id": user.id,
            "name": user.name,
            "employeeId": user.employee_id,
            "batch": user.batch,
            "department": user.department,
            "designation": user.designation,
            "quizSectionScores": {},
            "demoSectionScores": {},
        }
        if evaluation is not None:
            row.update({
                "quizScore": evaluation.quiz_score,
                "quizSectionScores": evaluation.quiz_section_scores or {},
                "demoScore": evaluation.demo_score,
                "demoSectionScores": evaluation.demo_section_scores or {},
                "totalScore": evaluation.total_score,
            })
        rows.append(row)
    return rows
