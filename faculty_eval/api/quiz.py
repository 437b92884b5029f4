"""
Question bank endpoints
"""
from fastapi import APIRouter, Depends

from faculty_eval.api.deps import get_current_user, get_store, require
from faculty_eval.core.roles import Capability, can
from faculty_eval.core.store import DocumentStore
from faculty_eval.models import PublicQuizQuestion, QuestionUpdate, QuizQuestion, User
from faculty_eval.services import question_bank


router = APIRouter(prefix="/api/quiz", tags=["quiz"])


@router.get("")
async def list_questions(
    user: User = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    """List all questions; correct answers only for question managers"""
    questions = question_bank.list_questions(store)
    if can(user.role, Capability.MANAGE_QUESTIONS):
        return [q.model_dump(mode="json", by_alias=True) for q in questions]
    return [
        PublicQuizQuestion.model_validate(q.model_dump()).model_dump(mode="json", by_alias=True)
        for q in questions
    ]


@router.post("", response_model=QuizQuestion, status_code=201)
async def add_question(
    payload: QuizQuestion,
    _: User = Depends(require(Capability.MANAGE_QUESTIONS)),
    store: DocumentStore = Depends(get_store),
):
    return question_bank.add_question(store, payload)


@router.put("/{question_id}", response_model=QuizQuestion)
async def update_question(
    question_id: str,
    payload: QuestionUpdate,
    _: User = Depends(require(Capability.MANAGE_QUESTIONS)),
    store: DocumentStore = Depends(get_store),
):
    return question_bank.update_question(store, question_id, payload.model_dump(exclude_none=True))


@router.delete("/{question_id}")
async def delete_question(
    question_id: str,
    _: User = Depends(require(Capability.MANAGE_QUESTIONS)),
    store: DocumentStore = Depends(get_store),
):
    question_bank.delete_question(store, question_id)
    return {"message": "Deleted"}
