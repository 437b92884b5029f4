"""
Roles and the capabilities they grant
"""
from enum import Enum
from typing import Dict, FrozenSet


class Role(str, Enum):
    PARTICIPANT = "participant"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class Capability(str, Enum):
    SUBMIT_QUIZ = "submit_quiz"
    EVALUATE_DEMO = "evaluate_demo"
    VIEW_EVALUATIONS = "view_evaluations"
    MANAGE_QUESTIONS = "manage_questions"
    MANAGE_CONFIG = "manage_config"
    LIST_USERS = "list_users"
    MANAGE_USERS = "manage_users"
    RESET_ATTEMPTS = "reset_attempts"


_ADMIN_CAPABILITIES = frozenset({
    Capability.EVALUATE_DEMO,
    Capability.VIEW_EVALUATIONS,
    Capability.MANAGE_QUESTIONS,
    Capability.MANAGE_CONFIG,
    Capability.LIST_USERS,
})

CAPABILITIES: Dict[Role, FrozenSet[Capability]] = {
    Role.PARTICIPANT: frozenset({Capability.SUBMIT_QUIZ}),
    Role.ADMIN: _ADMIN_CAPABILITIES,
    Role.SUPER_ADMIN: _ADMIN_CAPABILITIES | {Capability.MANAGE_USERS, Capability.RESET_ATTEMPTS},
}


def can(role: Role, capability: Capability) -> bool:
    """Check whether a role grants a capability"""
    return capability in CAPABILITIES.get(Role(role), frozenset())
