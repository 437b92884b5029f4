"""
System configuration singleton (batches, demo sections, designations, quiz duration)
"""
from typing import Any, Dict, Optional

from faculty_eval.core.store import DocumentStore
from faculty_eval.models import SystemConfig


CONFIG_KEY = "main"


def find_config(store: DocumentStore) -> Optional[SystemConfig]:
    """Return the config without creating it"""
    doc = store.system_config.find_one({"key": CONFIG_KEY})
    return SystemConfig.model_validate(doc) if doc else None


def get_config(store: DocumentStore) -> SystemConfig:
    """Return the config, creating the default one on first read"""
    doc = store.system_config.find_one({"key": CONFIG_KEY})
    if doc is None:
        doc = store.system_config.insert_one(SystemConfig(key=CONFIG_KEY).model_dump())
    return SystemConfig.model_validate(doc)


def update_config(store: DocumentStore, updates: Dict[str, Any]) -> SystemConfig:
    """Overwrite only the supplied fields, creating the config if absent"""
    fields = {k: v for k, v in updates.items() if v is not None and k != "key"}
    defaults = SystemConfig(key=CONFIG_KEY).model_dump()
    doc = store.system_config.find_one_and_update(
        {"key": CONFIG_KEY},
        fields,
        upsert=True,
        set_on_insert=defaults,
    )
    return SystemConfig.model_validate(doc)
