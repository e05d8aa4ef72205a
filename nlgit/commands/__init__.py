"""Git command classification, execution and scripted rebases for nlgit."""

from .executor import (
    GitCommandExecutor,
    GitOperationResult,
    create_git_executor,
    split_command,
    strip_git_prefix,
    tokenize,
)
from .rebase import (
    RebaseAction,
    RebaseCommit,
    RebasePlan,
    RebasePlanner,
    RebaseResult,
    build_squash_plan,
    create_rebase_planner,
    parse_rebase_command,
    render_todo,
)
from .safety import CommandSafetyChecker, OperationSafety, classify, create_safety_checker

__all__ = [
    "GitCommandExecutor",
    "GitOperationResult",
    "create_git_executor",
    "split_command",
    "strip_git_prefix",
    "tokenize",
    "RebaseAction",
    "RebaseCommit",
    "RebasePlan",
    "RebasePlanner",
    "RebaseResult",
    "build_squash_plan",
    "create_rebase_planner",
    "parse_rebase_command",
    "render_todo",
    "CommandSafetyChecker",
    "OperationSafety",
    "classify",
    "create_safety_checker",
]
