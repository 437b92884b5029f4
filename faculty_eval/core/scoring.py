"""
Evaluation Scoring Rules

Quiz:
  quizScore = Σ marks(q) for every question q where selected(q) == correctAnswer(q)
  quizSectionScores[s] = same sum restricted to questions of section s
  (every section of the bank appears, so the sub-scores sum to quizScore)

Total:
  totalScore = quizScore + (demoScore or 0)

Demo:
  0 <= demoScoreSection <= maxSectionScore, 0 <= demoScore <= sections × maxSectionScore

Submissions overwrite; scores never accumulate across submissions.
"""
import logging
import math
from typing import Dict, Iterable, Optional, Tuple

from faculty_eval.core.errors import ValidationError
from faculty_eval.models import QuizQuestion, SectionScores


logger = logging.getLogger(__name__)

# Demo sections assumed when the config lists none
DEFAULT_DEMO_SECTION_COUNT = 5


def score_answers(
    questions: Iterable[QuizQuestion],
    answers: Dict[str, int],
) -> Tuple[float, SectionScores]:
    """
    Score an answer set against the question bank

    Args:
        questions: Question bank
        answers: question id -> selected option index

    Returns:
        (quiz_score, section_scores)

    Example:
        Two questions worth 2 marks in section "A", one answered correctly
        -> (2, {"A": 2})
    """
    quiz_score = 0.0
    section_scores: SectionScores = {}
    known_ids = set()

    for question in questions:
        known_ids.add(question.id)
        section_scores.setdefault(question.section, 0.0)
        selected = answers.get(question.id)
        if selected is not None and selected == question.correct_answer:
            quiz_score += question.marks
            section_scores[question.section] += question.marks

    unknown = sorted(set(answers) - known_ids)
    if unknown:
        logger.warning(f"Ignoring answers for unknown questions: {unknown}")

    return quiz_score, section_scores


def calculate_total(quiz_score: Optional[float], demo_score: Optional[float]) -> float:
    """Total score: quiz + demo, missing parts count as 0"""
    return (quiz_score or 0) + (demo_score or 0)


def max_demo_score(demo_section_count: int, max_section_score: float) -> float:
    """Highest demo score: every demo section at its maximum"""
    return (demo_section_count or DEFAULT_DEMO_SECTION_COUNT) * max_section_score


def validate_demo_scores(
    demo_score: Optional[float],
    demo_section_scores: Optional[SectionScores],
    max_section_score: float,
    max_total: float,
) -> None:
    """
    Reject out-of-range demo input

    Raises:
        ValidationError: non-finite value, demo score outside [0, max_total],
            or a section sub-score outside [0, max_section_score]
    """
    if demo_score is not None:
        if not math.isfinite(demo_score):
            raise ValidationError("demoScore must be a finite number")
        if demo_score < 0 or demo_score > max_total:
            raise ValidationError(f"demoScore must be between 0 and {max_total:g}")

    for section, value in (demo_section_scores or {}).items():
        if not math.isfinite(value):
            raise ValidationError(f"Demo score for '{section}' must be a finite number")
        if value < 0 or value > max_section_score:
            raise ValidationError(
                f"Demo score for '{section}' must be between 0 and {max_section_score:g}"
            )
