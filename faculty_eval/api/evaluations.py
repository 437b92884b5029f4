"""
Evaluation endpoints: quiz submission, demo scoring, leaderboard and admin views
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from faculty_eval import state
from faculty_eval.api.deps import get_current_user, get_store, get_workflow, require
from faculty_eval.core.errors import Forbidden
from faculty_eval.core.roles import Capability
from faculty_eval.core.store import DocumentStore
from faculty_eval.core.workflow import ScoringWorkflow
from faculty_eval.models import DemoScoreUpdate, Evaluation, QuizSubmission, User
from faculty_eval.services import evaluations as evaluation_records


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/evaluations", tags=["evaluations"])


@router.get("/leaderboard", response_model=List[Evaluation])
async def leaderboard(
    limit: Optional[int] = Query(None),
    store: DocumentStore = Depends(get_store),
):
    """Public: top evaluations by total score (default 10, at most 50)"""
    limit = evaluation_records.clamp_limit(
        limit,
        default=state.SETTINGS.leaderboard_default_limit,
        maximum=state.SETTINGS.leaderboard_max_limit,
    )
    return evaluation_records.get_leaderboard(store, limit)


@router.get("", response_model=List[Evaluation])
async def list_evaluations(
    batch: Optional[str] = None,
    _: User = Depends(require(Capability.VIEW_EVALUATIONS)),
    store: DocumentStore = Depends(get_store),
):
    return evaluation_records.list_evaluations(store, batch)


@router.get("/faculty")
async def faculty(
    batch: Optional[str] = None,
    _: User = Depends(require(Capability.VIEW_EVALUATIONS)),
    store: DocumentStore = Depends(get_store),
):
    """Participants merged with their evaluation; no score keys until they submit"""
    return evaluation_records.get_faculty_view(store, batch)


@router.get("/analysis")
async def analysis(
    batch: Optional[str] = None,
    _: User = Depends(require(Capability.VIEW_EVALUATIONS)),
    store: DocumentStore = Depends(get_store),
):
    return evaluation_records.get_analysis_view(store, batch)


@router.get("/me", response_model=Optional[Evaluation])
async def my_evaluation(
    user: User = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    if not user.employee_id:
        return None
    return evaluation_records.get_evaluation(store, user.employee_id)


@router.post("", response_model=Evaluation)
async def submit_quiz(
    payload: QuizSubmission,
    user: User = Depends(get_current_user),
    workflow: ScoringWorkflow = Depends(get_workflow),
):
    """
    Participant: submit quiz answers

    Request:
        {"answers": {"q1": 1, "q2": 0, ...}}   # question id -> selected option index

    One attempt per participant: rejected once quizAttempted is set, until a
    super admin resets the attempt.
    """
    if user.quiz_attempted:
        raise Forbidden("Quiz already attempted")
    return await workflow.submit_quiz(user, payload.answers)


@router.put("/{employee_id}", response_model=Evaluation)
async def submit_demo_score(
    employee_id: str,
    payload: DemoScoreUpdate,
    _: User = Depends(require(Capability.EVALUATE_DEMO)),
    workflow: ScoringWorkflow = Depends(get_workflow),
):
    """
    Admin: record demo scores

    Request:
        {"demoScore": 35, "demoSectionScores": {"Use of Tools": 7, ...}}
    """
    return await workflow.submit_demo_score(
        employee_id,
        demo_score=payload.demo_score,
        demo_section_scores=payload.demo_section_scores,
    )
