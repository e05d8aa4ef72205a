"""Safety classification of git commands for nlgit."""

import re
from enum import Enum

from ..utils.logging import logger


class OperationSafety(Enum):
    """Risk tier of a git command."""
    SAFE = "safe"
    DESTRUCTIVE = "destructive"
    CLOUD = "cloud"


# Subcommands that never require confirmation
SAFE_COMMANDS = frozenset([
    "status",
    "log",
    "diff",
    "show",
    "branch",
    "remote",
    "fetch",
    "ls-files",
    "ls-remote",
    "describe",
    "rev-parse",
    "symbolic-ref",
])

# Checked by substring containment, after the cloud keywords
DESTRUCTIVE_COMMANDS = (
    "reset",
    "clean",
    "checkout",
    "rebase",
    "merge",
    "cherry-pick",
    "revert",
    "rm",
    "branch -d",
    "branch -D",
    "stash drop",
    "stash clear",
)

# Checked first; a match wins over any destructive keyword
CLOUD_COMMANDS = (
    "push",
    "pull",
    "clone",
    "fetch --all",
)

SAFETY_WARNINGS = {
    OperationSafety.CLOUD: "This operation will interact with remote repositories.",
    OperationSafety.DESTRUCTIVE: "This operation may be destructive.",
}


def _compile_keywords(keywords) -> "re.Pattern[str]":
    # The command is lower-cased before matching, so keywords are too
    unique = sorted({k.lower() for k in keywords}, key=len, reverse=True)
    return re.compile("|".join(re.escape(k) for k in unique))


class CommandSafetyChecker:
    """Classifies git commands into SAFE, DESTRUCTIVE or CLOUD tiers."""

    def __init__(self):
        """Compile the keyword sets once."""
        self._cloud_matcher = _compile_keywords(CLOUD_COMMANDS)
        self._destructive_matcher = _compile_keywords(DESTRUCTIVE_COMMANDS)

    def classify(self, command: str) -> OperationSafety:
        """Classify a git command, with or without its leading ``git``.

        Cloud keywords are checked first, then destructive keywords, then the
        leading token against the safe allow-list. Anything else is treated as
        destructive so unknown commands are never auto-approved.

        Args:
            command: Command text, e.g. ``"push --force"``

        Returns:
            The OperationSafety tier
        """
        lower_command = (command or "").lower()

        if self._cloud_matcher.search(lower_command):
            return OperationSafety.CLOUD

        if self._destructive_matcher.search(lower_command):
            return OperationSafety.DESTRUCTIVE

        parts = lower_command.split()
        if parts and parts[0] == "git":
            parts = parts[1:]
        base_command = parts[0] if parts else ""
        if base_command in SAFE_COMMANDS:
            return OperationSafety.SAFE

        logger.debug(f"Unrecognized git command '{command}', treating as destructive.")
        return OperationSafety.DESTRUCTIVE

    def requires_confirmation(self, safety: OperationSafety) -> bool:
        """Whether a tier must be confirmed by the user before running."""
        return safety in (OperationSafety.DESTRUCTIVE, OperationSafety.CLOUD)

    def get_safety_warning(self, safety: OperationSafety) -> str:
        """Tier-specific warning shown before the confirmation prompt."""
        return SAFETY_WARNINGS.get(safety, "")


_default_checker = None


def classify(command: str) -> OperationSafety:
    """Classify a command with a shared checker instance."""
    global _default_checker
    if _default_checker is None:
        _default_checker = CommandSafetyChecker()
    return _default_checker.classify(command)


def create_safety_checker() -> CommandSafetyChecker:
    """Create a command safety checker with the default keyword sets."""
    return CommandSafetyChecker()
