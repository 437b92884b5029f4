"""
User registry - accounts, credentials and the quiz-attempted flag
"""
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from faculty_eval.core.errors import Conflict, NotFound, ValidationError
from faculty_eval.core.roles import Role
from faculty_eval.core.security import hash_password, verify_password
from faculty_eval.core.store import DESCENDING, DocumentStore
from faculty_eval.models import User


MIN_PASSWORD_LENGTH = 6

PROFILE_FIELDS = {"name", "email", "designation", "department", "batch", "password"}


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _to_user(doc: Dict[str, Any]) -> User:
    return User.model_validate({k: v for k, v in doc.items() if k != "password_hash"})


def create_user(
    store: DocumentStore,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    role: Role = Role.PARTICIPANT,
    employee_id: Optional[str] = None,
    designation: Optional[str] = None,
    department: Optional[str] = None,
    batch: Optional[str] = None,
) -> User:
    """
    Create an account

    Raises:
        ValidationError: missing name/email/password or short password
        Conflict: email or employee id already registered
    """
    name = (name or "").strip()
    email = normalize_email(email or "")
    if not name or not email or not password:
        raise ValidationError("Name, email and password are required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if store.users.find_one({"email": email}):
        raise Conflict("Email already registered")
    if employee_id and store.users.find_one({"employee_id": employee_id}):
        raise Conflict("Employee ID already registered")

    doc = {
        "id": uuid.uuid4().hex,
        "name": name,
        "email": email,
        "password_hash": hash_password(password),
        "employee_id": (employee_id or "").strip(),
        "designation": designation or "",
        "department": department or "",
        "batch": batch or "",
        "role": Role(role),
        "quiz_attempted": False,
        "created_at": datetime.now(timezone.utc),
    }
    return _to_user(store.users.insert_one(doc))


def authenticate(store: DocumentStore, email: str, password: str) -> Optional[User]:
    """Return the user when the credentials match, else None"""
    doc = store.users.find_one({"email": normalize_email(email)})
    if doc is None or not verify_password(password, doc.get("password_hash", "")):
        return None
    return _to_user(doc)


def get_user(store: DocumentStore, user_id: str) -> Optional[User]:
    doc = store.users.find_one({"id": user_id})
    return _to_user(doc) if doc else None


def get_user_by_email(store: DocumentStore, email: str) -> Optional[User]:
    doc = store.users.find_one({"email": normalize_email(email)})
    return _to_user(doc) if doc else None


def list_users(store: DocumentStore, role: Optional[Role] = None, batch: Optional[str] = None) -> List[User]:
    """Users newest first, optionally filtered by role and batch"""
    filter: Dict[str, Any] = {}
    if role is not None:
        filter["role"] = role
    if batch:
        filter["batch"] = batch
    return [_to_user(doc) for doc in store.users.find(filter, sort=("created_at", DESCENDING))]


def update_user(store: DocumentStore, user_id: str, updates: Dict[str, Any]) -> User:
    """
    Set fields on a user; a password is re-hashed before storage

    Raises:
        NotFound: unknown user id
        ValidationError: short password
        Conflict: email or employee id taken by another user, or the
            employee id changes while an evaluation is keyed by the old one
    """
    fields = {k: v for k, v in updates.items() if v is not None}
    password = fields.pop("password", None)
    if password is not None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        fields["password_hash"] = hash_password(password)
    if "email" in fields:
        fields["email"] = normalize_email(fields["email"])

    if "employee_id" in fields:
        current = store.users.find_one({"id": user_id})
        old_id = current.get("employee_id") if current else None
        if old_id and fields["employee_id"] != old_id and store.evaluations.find_one({"employee_id": old_id}):
            raise Conflict("Cannot change employee ID while an evaluation exists; reset the attempt first")

    doc = store.users.find_one_and_update({"id": user_id}, fields)
    if doc is None:
        raise NotFound("User not found")
    return _to_user(doc)


def set_quiz_attempted(store: DocumentStore, user_id: str, attempted: bool) -> Optional[User]:
    doc = store.users.find_one_and_update({"id": user_id}, {"quiz_attempted": attempted})
    return _to_user(doc) if doc else None
