"""
System configuration endpoints
"""
import logging

from fastapi import APIRouter, Depends

from faculty_eval.api.deps import get_store, require
from faculty_eval.core.roles import Capability
from faculty_eval.core.store import DocumentStore
from faculty_eval.models import ConfigUpdate, SystemConfig, User
from faculty_eval.services import system_config


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/config", tags=["config"])


@router.get("", response_model=SystemConfig)
async def get_config(store: DocumentStore = Depends(get_store)):
    """Batches, demo sections, designations and quiz duration"""
    return system_config.get_config(store)


@router.put("", response_model=SystemConfig)
async def update_config(
    payload: ConfigUpdate,
    user: User = Depends(require(Capability.MANAGE_CONFIG)),
    store: DocumentStore = Depends(get_store),
):
    """
    Admin: update only the supplied fields

    Request:
        {"batches": [...], "demoSections": [...], "designations": [...], "quizDuration": 30}
    """
    config = system_config.update_config(store, payload.model_dump(exclude_none=True))
    logger.info(f"⚙️ Config updated by {user.email}")
    return config
