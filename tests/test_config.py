"""
Tests for settings loading, the config singleton and seed data
"""
from pathlib import Path

from faculty_eval.config import load_settings
from faculty_eval.core.roles import Capability, Role, can
from faculty_eval.core.store import DocumentStore
from faculty_eval.services import question_bank, system_config
from faculty_eval.services import users as user_registry
from faculty_eval.services.seeding import apply_seed, load_seed


ROOT = Path(__file__).resolve().parent.parent


def test_settings_from_yaml(tmp_path, monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    monkeypatch.delenv("CORS_ORIGIN", raising=False)
    path = tmp_path / "settings.yaml"
    path.write_text("jwt_secret: from-file\nmax_demo_section_score: 5\n")

    settings = load_settings(str(path))
    assert settings.jwt_secret == "from-file"
    assert settings.max_demo_section_score == 5
    assert settings.leaderboard_max_limit == 50


def test_settings_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "from-env")
    monkeypatch.setenv("CORS_ORIGIN", "http://a.test, http://b.test")

    settings = load_settings(str(tmp_path / "missing.yaml"))
    assert settings.jwt_secret == "from-env"
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_missing_settings_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    settings = load_settings(str(tmp_path / "missing.yaml"))
    assert settings.token_expiry_days == 7
    assert settings.evaluated_by_label == "Admin"


def test_config_update_upserts_with_defaults():
    store = DocumentStore()
    config = system_config.update_config(store, {"batches": ["Batch A"], "quiz_duration": None})
    assert config.batches == ["Batch A"]
    assert config.quiz_duration == 30
    assert system_config.get_config(store).batches == ["Batch A"]


def test_shipped_seed():
    """25 questions over five sections, 50 marks in total"""
    store = DocumentStore()
    counts = apply_seed(store, load_seed(str(ROOT / "data" / "seed.yaml")))

    assert counts == {"questions": 25, "users": 5}
    questions = question_bank.list_questions(store)
    assert sum(q.marks for q in questions) == 50
    assert len({q.section for q in questions}) == 5
    assert len(system_config.get_config(store).demo_sections) == 5

    admin = user_registry.authenticate(store, "super@faculty.com", "admin123")
    assert admin.role == Role.SUPER_ADMIN


def test_seed_is_repeatable():
    """Re-applying never duplicates users or questions"""
    store = DocumentStore()
    seed = load_seed(str(ROOT / "data" / "seed.yaml"))
    apply_seed(store, seed)
    counts = apply_seed(store, seed)
    assert counts["users"] == 0
    assert len(store.questions) == 25
    assert len(store.users) == 5


def test_role_capabilities():
    assert can(Role.PARTICIPANT, Capability.SUBMIT_QUIZ)
    assert not can(Role.ADMIN, Capability.SUBMIT_QUIZ)
    assert can(Role.ADMIN, Capability.EVALUATE_DEMO)
    assert not can(Role.ADMIN, Capability.RESET_ATTEMPTS)
    assert can(Role.SUPER_ADMIN, Capability.RESET_ATTEMPTS)
    assert can("super_admin", Capability.MANAGE_USERS)
