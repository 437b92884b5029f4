"""
Question bank - ordered quiz questions
"""
import re
from typing import Any, Dict, List

from faculty_eval.core.errors import NotFound
from faculty_eval.core.store import ASCENDING, DocumentStore
from faculty_eval.models import QuizQuestion


def _numeric_part(question_id: str) -> int:
    """'q12' -> 12; ids without digits sort first"""
    match = re.search(r"\d+", str(question_id))
    return int(match.group()) if match else 0


def list_questions(store: DocumentStore) -> List[QuizQuestion]:
    """All questions ordered by the numeric part of their id"""
    docs = store.questions.find(sort=("id", ASCENDING))
    questions = [QuizQuestion.model_validate(doc) for doc in docs]
    questions.sort(key=lambda q: _numeric_part(q.id))
    return questions


def add_question(store: DocumentStore, question: QuizQuestion) -> QuizQuestion:
    return QuizQuestion.model_validate(store.questions.insert_one(question.model_dump()))


def upsert_question(store: DocumentStore, question: QuizQuestion) -> QuizQuestion:
    doc = store.questions.find_one_and_update({"id": question.id}, question.model_dump(), upsert=True)
    return QuizQuestion.model_validate(doc)


def update_question(store: DocumentStore, question_id: str, updates: Dict[str, Any]) -> QuizQuestion:
    fields = {k: v for k, v in updates.items() if v is not None}
    doc = store.questions.find_one_and_update({"id": question_id}, fields)
    if doc is None:
        raise NotFound("Question not found")
    return QuizQuestion.model_validate(doc)


def delete_question(store: DocumentStore, question_id: str) -> QuizQuestion:
    doc = store.questions.find_one_and_delete({"id": question_id})
    if doc is None:
        raise NotFound("Question not found")
    return QuizQuestion.model_validate(doc)
