"""
User administration endpoints
"""
import logging
from typing import List

from fastapi import APIRouter, Depends

from faculty_eval.api.deps import get_current_user, get_store, get_workflow, require
from faculty_eval.core.errors import Forbidden
from faculty_eval.core.roles import Capability, Role, can
from faculty_eval.core.store import DocumentStore
from faculty_eval.core.workflow import ScoringWorkflow
from faculty_eval.models import CreateUserRequest, UpdateUserRequest, User
from faculty_eval.services import users as user_registry
from faculty_eval.services.users import PROFILE_FIELDS


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=List[User])
async def list_users(
    _: User = Depends(require(Capability.LIST_USERS)),
    store: DocumentStore = Depends(get_store),
):
    return user_registry.list_users(store)


@router.get("/participants", response_model=List[User])
async def list_participants(
    _: User = Depends(require(Capability.LIST_USERS)),
    store: DocumentStore = Depends(get_store),
):
    return user_registry.list_users(store, role=Role.PARTICIPANT)


@router.post("", response_model=User, status_code=201)
async def create_user(
    payload: CreateUserRequest,
    _: User = Depends(require(Capability.MANAGE_USERS)),
    store: DocumentStore = Depends(get_store),
):
    """Super admin: create credentials for any role"""
    user = user_registry.create_user(
        store,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role or Role.PARTICIPANT,
        employee_id=payload.employee_id,
        designation=payload.designation,
        department=payload.department,
        batch=payload.batch,
    )
    logger.info(f"👤 Created {user.role.value} {user.email}")
    return user


@router.put("/{user_id}", response_model=User)
async def update_user(
    user_id: str,
    payload: UpdateUserRequest,
    caller: User = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
):
    """
    Super admin: update any field of any user.
    Everyone else: only their own profile fields.
    """
    updates = payload.model_dump(exclude_none=True)

    if not can(caller.role, Capability.MANAGE_USERS):
        if caller.id != user_id:
            raise Forbidden("Access denied")
        disallowed = sorted(set(updates) - PROFILE_FIELDS)
        if disallowed:
            raise Forbidden(f"Cannot update: {', '.join(disallowed)}")

    return user_registry.update_user(store, user_id, updates)


@router.patch("/{user_id}/reset-attempt", response_model=User)
async def reset_attempt(
    user_id: str,
    caller: User = Depends(get_current_user),
    workflow: ScoringWorkflow = Depends(get_workflow),
):
    """Super admin: clear the attempted flag and delete the user's evaluation"""
    return workflow.reset_attempt(caller, user_id)
