"""
Global application state
Shared resources accessible across all modules
"""
from faculty_eval.config import Settings
from faculty_eval.core.notifier import ConnectionHub
from faculty_eval.core.store import DocumentStore

# Server settings, replaced at startup by the loaded YAML settings
SETTINGS: Settings = Settings()

# Document store holding users, questions, evaluations and system config
STORE: DocumentStore = DocumentStore()

# Connected admin dashboards
HUB: ConnectionHub = ConnectionHub()
