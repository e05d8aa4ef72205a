"""Configuration and history persistence for nlgit."""

from .manager import ConfigManager, create_config_manager
from .history import HistoryEntry, HistoryStore, create_history_store
from .templates import CONFIG_TEMPLATE, PAYLOAD_TEMPLATE, RESPONSE_PATH_TEMPLATE

__all__ = [
    "ConfigManager",
    "create_config_manager",
    "HistoryEntry",
    "HistoryStore",
    "create_history_store",
    "CONFIG_TEMPLATE",
    "PAYLOAD_TEMPLATE",
    "RESPONSE_PATH_TEMPLATE",
]
