from .config import AppConfig, load_config
from .history_store import InMemoryHistoryStore
from .session_store import InMemorySessionStore

__all__ = ["AppConfig", "load_config", "InMemoryHistoryStore", "InMemorySessionStore"]
