"""Core application logic for nlgit."""

from .agent import IntentParser, IntentType, ParsedIntent, create_intent_parser
from .application import NLGit, create_application
from .orchestrator import ExecutionOrchestrator, ExecutionOutcome, TaskStatus, create_orchestrator

__all__ = [
    "IntentParser",
    "IntentType",
    "ParsedIntent",
    "create_intent_parser",
    "NLGit",
    "create_application",
    "ExecutionOrchestrator",
    "ExecutionOutcome",
    "TaskStatus",
    "create_orchestrator",
]
