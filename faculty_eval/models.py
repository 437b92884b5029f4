"""
Data models for the faculty evaluation server

Attributes are snake_case in Python and camelCase on the wire.
"""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from faculty_eval.core.roles import Role


# Section name -> sub-score. Overwritten wholesale on every submission.
SectionScores = Dict[str, float]


class WireModel(BaseModel):
    """Base model: camelCase aliases, snake_case attributes"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class User(WireModel):
    """Registered account (password hash never leaves the store)"""
    id: str
    name: str
    email: str
    employee_id: str = ""
    designation: str = ""
    department: str = ""
    batch: str = ""
    role: Role = Role.PARTICIPANT
    quiz_attempted: bool = False
    created_at: Optional[datetime] = None


class QuizQuestion(WireModel):
    """Quiz question with its correct option index"""
    id: str
    section: str
    question: str
    options: List[str] = []
    correct_answer: int
    marks: float = 2


class PublicQuizQuestion(WireModel):
    """Quiz question as shown to participants"""
    id: str
    section: str
    question: str
    options: List[str] = []
    marks: float = 2


class Evaluation(WireModel):
    """Per-participant score document, keyed by employee_id"""
    employee_id: str
    user_id: Optional[str] = None
    name: Optional[str] = None
    batch: Optional[str] = None
    department: Optional[str] = None
    designation: Optional[str] = None
    quiz_score: float = 0
    quiz_section_scores: SectionScores = {}
    demo_score: Optional[float] = None
    demo_section_scores: Optional[SectionScores] = None
    total_score: float = 0
    evaluated_by: Optional[str] = None
    submitted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SystemConfig(WireModel):
    """Singleton configuration document"""
    key: str = "main"
    batches: List[str] = []
    demo_sections: List[str] = []
    designations: List[str] = []
    quiz_duration: int = 30


# ==================== REQUEST BODIES ====================

class RegisterRequest(WireModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    employee_id: Optional[str] = None
    designation: Optional[str] = None
    department: Optional[str] = None
    batch: Optional[str] = None


class CreateUserRequest(RegisterRequest):
    role: Optional[Role] = None


class UpdateUserRequest(WireModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    employee_id: Optional[str] = None
    designation: Optional[str] = None
    department: Optional[str] = None
    batch: Optional[str] = None
    role: Optional[Role] = None
    quiz_attempted: Optional[bool] = None


class LoginRequest(WireModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(WireModel):
    token: str
    user: User


class QuizSubmission(WireModel):
    """Selected option index per question id"""
    answers: Dict[str, int] = Field(default_factory=dict)


class DemoScoreUpdate(WireModel):
    demo_score: Optional[float] = None
    demo_section_scores: Optional[SectionScores] = None


class QuestionUpdate(WireModel):
    section: Optional[str] = None
    question: Optional[str] = None
    options: Optional[List[str]] = None
    correct_answer: Optional[int] = None
    marks: Optional[float] = None


class ConfigUpdate(WireModel):
    batches: Optional[List[str]] = None
    demo_sections: Optional[List[str]] = None
    designations: Optional[List[str]] = None
    quiz_duration: Optional[int] = None
