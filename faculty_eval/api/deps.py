"""
Shared endpoint dependencies: store, notifier, workflow and the caller's identity
"""
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from faculty_eval import state
from faculty_eval.core.errors import Forbidden, Unauthorized
from faculty_eval.core.notifier import Notifier
from faculty_eval.core.roles import Capability, can
from faculty_eval.core.security import decode_token
from faculty_eval.core.store import DocumentStore
from faculty_eval.core.workflow import ScoringWorkflow
from faculty_eval.models import User
from faculty_eval.services import users as user_registry


bearer_scheme = HTTPBearer(auto_error=False)


def get_store() -> DocumentStore:
    return state.STORE


def get_notifier() -> Notifier:
    return state.HUB


def get_workflow(
    store: DocumentStore = Depends(get_store),
    notifier: Notifier = Depends(get_notifier),
) -> ScoringWorkflow:
    return ScoringWorkflow(
        store,
        notifier,
        evaluated_by=state.SETTINGS.evaluated_by_label,
        max_demo_section_score=state.SETTINGS.max_demo_section_score,
    )


def resolve_token(store: DocumentStore, token: Optional[str]) -> User:
    """
    Map a bearer token to its user

    Raises:
        Unauthorized: missing/invalid token or the user no longer exists
    """
    if not token:
        raise Unauthorized("Not authorized, no token")
    user_id = decode_token(token, state.SETTINGS.jwt_secret)
    user = user_registry.get_user(store, user_id)
    if user is None:
        raise Unauthorized("User not found")
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    store: DocumentStore = Depends(get_store),
) -> User:
    return resolve_token(store, credentials.credentials if credentials else None)


def require(capability: Capability) -> Callable[..., User]:
    """Dependency factory: the current user, provided their role grants capability"""

    def dependency(user: User = Depends(get_current_user)) -> User:
        if not can(user.role, capability):
            raise Forbidden("Access denied")
        return user

    return dependency
