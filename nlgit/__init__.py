"""
nlgit - Natural Language Git.

Translates natural-language requests into git command sequences, classifies
their risk, asks before destructive or remote operations, runs them against
the local repository and records every request in a local history.
"""

__version__ = "0.1.0"
__author__ = "nlgit Team"

# Main API imports
from .core.application import NLGit, create_application
from .core.orchestrator import ExecutionOrchestrator, TaskStatus, create_orchestrator
from .config.manager import ConfigManager, create_config_manager

__all__ = [
    "NLGit",
    "create_application",
    "ExecutionOrchestrator",
    "TaskStatus",
    "create_orchestrator",
    "ConfigManager",
    "create_config_manager",
    "__version__",
]
