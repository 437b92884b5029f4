"""
Configuration loader
"""
import logging
import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/settings.yaml"


class Settings(BaseModel):
    """Server settings"""
    app_name: str = "Faculty Evaluation Server"
    log_level: str = "INFO"
    jwt_secret: str = "change-me-in-production"
    token_expiry_days: int = 7
    cors_origins: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]
    seed_file: Optional[str] = None
    max_demo_section_score: float = 10
    evaluated_by_label: str = "Admin"
    leaderboard_default_limit: int = 10
    leaderboard_max_limit: int = 50


def load_settings(config_path: Optional[str] = None) -> Settings:
    """
    Load settings from YAML file, then apply environment overrides

    Args:
        config_path: Path to settings file (default: $FACULTY_EVAL_CONFIG or
            config/settings.yaml). A missing file yields defaults.

    Returns:
        Settings object

    Environment:
        JWT_SECRET: overrides jwt_secret
        CORS_ORIGIN: comma separated list, overrides cors_origins
    """
    path = Path(config_path or os.getenv("FACULTY_EVAL_CONFIG", DEFAULT_CONFIG_PATH))

    data = {}
    if path.exists():
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    else:
        logger.warning(f"Config file not found: {path}, using defaults")

    if os.getenv("JWT_SECRET"):
        data["jwt_secret"] = os.environ["JWT_SECRET"]
    if os.getenv("CORS_ORIGIN"):
        data["cors_origins"] = [o.strip() for o in os.environ["CORS_ORIGIN"].split(",") if o.strip()]

    return Settings(**data)
