"""
Authentication endpoints
"""
import logging

from fastapi import APIRouter, Depends

from faculty_eval import state
from faculty_eval.api.deps import get_current_user, get_store
from faculty_eval.core.errors import Unauthorized, ValidationError
from faculty_eval.core.roles import Role
from faculty_eval.core.security import create_token
from faculty_eval.core.store import DocumentStore
from faculty_eval.models import AuthResponse, LoginRequest, RegisterRequest, User
from faculty_eval.services import users as user_registry


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _issue(user: User) -> AuthResponse:
    token = create_token(user.id, state.SETTINGS.jwt_secret, state.SETTINGS.token_expiry_days)
    return AuthResponse(token=token, user=user)


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(payload: RegisterRequest, store: DocumentStore = Depends(get_store)):
    """
    Self-registration, always as a participant

    Request:
        {"name": ..., "email": ..., "password": ..., "employeeId": ..., "batch": ...}
    """
    user = user_registry.create_user(
        store,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=Role.PARTICIPANT,
        employee_id=payload.employee_id,
        designation=payload.designation,
        department=payload.department,
        batch=payload.batch,
    )
    logger.info(f"👤 Registered {user.email} ({user.employee_id or 'no employee id'})")
    return _issue(user)


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest, store: DocumentStore = Depends(get_store)):
    if not payload.email or not payload.password:
        raise ValidationError("Email and password required")

    user = user_registry.authenticate(store, payload.email, payload.password)
    if user is None:
        raise Unauthorized("Invalid email or password")
    return _issue(user)


@router.get("/me", response_model=User)
async def me(user: User = Depends(get_current_user)):
    return user
