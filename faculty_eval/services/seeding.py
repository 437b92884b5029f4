"""
Seed data loader

Loads system config, the question bank and demo accounts from a YAML file.
Questions and config are upserted; users are only created when their email
is not registered yet, so restarting never resets passwords or flags.
"""
import logging
from pathlib import Path
from typing import Dict

import yaml

from faculty_eval.core.roles import Role
from faculty_eval.core.store import DocumentStore
from faculty_eval.models import QuizQuestion
from faculty_eval.services import question_bank, system_config
from faculty_eval.services import users as user_registry


logger = logging.getLogger(__name__)


def load_seed(seed_path: str) -> Dict:
    path = Path(seed_path)

    if not path.exists():
        raise FileNotFoundError(f"Seed file not found: {seed_path}")

    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def apply_seed(store: DocumentStore, seed: Dict) -> Dict[str, int]:
    """
    Write seed data into the store

    Returns:
        Counts of questions upserted and users created
    """
    config = seed.get("config")
    if config:
        system_config.update_config(store, {
            "batches": config.get("batches"),
            "demo_sections": config.get("demo_sections"),
            "designations": config.get("designations"),
            "quiz_duration": config.get("quiz_duration"),
        })

    questions = seed.get("questions", [])
    for raw in questions:
        question_bank.upsert_question(store, QuizQuestion.model_validate(raw))

    created = 0
    for raw in seed.get("users", []):
        if user_registry.get_user_by_email(store, raw["email"]):
            logger.info(f"User exists, skip: {raw['email']}")
            continue
        user_registry.create_user(
            store,
            name=raw.get("name"),
            email=raw.get("email"),
            password=raw.get("password"),
            role=Role(raw.get("role", Role.PARTICIPANT)),
            employee_id=raw.get("employee_id"),
            designation=raw.get("designation"),
            department=raw.get("department"),
            batch=raw.get("batch"),
        )
        created += 1

    return {"questions": len(questions), "users": created}
