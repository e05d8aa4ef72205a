"""Confirmation-gated execution of git command sequences for nlgit."""

import shlex
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..commands.executor import GitCommandExecutor, split_command, strip_git_prefix
from ..commands.rebase import RebasePlanner, parse_rebase_command
from ..commands.safety import CommandSafetyChecker
from ..config.history import HistoryEntry, HistoryStore
from ..constants import HISTORY_FAILURE_MARKER, MIN_COMMIT_MESSAGE_LENGTH
from ..utils.console import (
    ask_confirmation, display_code, display_error, display_info, display_warning,
    get_text_input
)
from ..utils.logging import logger
from .agent import fallback_commit_message

INTERACTIVE_REBASE_MARKERS = ("rebase -i", "rebase --interactive")
MESSAGE_FLAGS = ("-m", "--message")
REBASE_CANCELLED = "Operation cancelled"

# Substrings of common git errors and the guidance shown for them
ERROR_HINTS = [
    ("not have any commits yet", [
        "This repository has no commits yet. Try creating your first commit:",
        "  git add <files>",
        '  git commit -m "Initial commit"',
    ]),
    ("unknown revision", [
        "This appears to be a newly initialized repository with no commits.",
        "Create at least one commit before using this command.",
    ]),
    ("not a git repository", [
        "This directory is not a git repository.",
        "Initialize one with: git init",
    ]),
]


class TaskStatus(Enum):
    """Outcome of a user request."""
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


@dataclass
class ExecutionOutcome:
    """What happened to one request's command list."""
    status: TaskStatus
    outputs: List[str] = field(default_factory=list)
    executed_commands: List[str] = field(default_factory=list)
    error: Optional[str] = None
    history_entry: Optional[HistoryEntry] = None

    @property
    def success(self) -> bool:
        return self.status != TaskStatus.FAILED

    @property
    def combined_output(self) -> str:
        return "\n".join(self.outputs)


class ExecutionOrchestrator:
    """Runs the commands of one request in order, stopping at the first failure.

    Each command is classified after any commit message backfill, so the user
    confirms the command exactly as it will run. Interactive rebases are handed
    to the rebase planner and end the request.
    """

    def __init__(self,
                 executor: GitCommandExecutor,
                 safety_checker: CommandSafetyChecker,
                 rebase_planner: RebasePlanner,
                 history_store: HistoryStore,
                 message_generator=None,
                 cwd: Optional[str] = None):
        """Initialize the orchestrator.

        Args:
            executor: Runs individual git invocations
            safety_checker: Classifies commands into safety tiers
            rebase_planner: Handles ``rebase -i HEAD~N`` commands
            history_store: Receives one entry per request
            message_generator: Object with ``generate_commit_message(files, diff)``;
                None uses the deterministic fallback message
            cwd: Repository working directory (defaults to the process's)
        """
        self.executor = executor
        self.safety_checker = safety_checker
        self.rebase_planner = rebase_planner
        self.history_store = history_store
        self.message_generator = message_generator
        self.cwd = cwd

    def run(self, user_prompt: str, commands: List[str], description: str = "") -> ExecutionOutcome:
        """Present, gate, execute and record a list of git commands.

        Args:
            user_prompt: The original natural-language request
            commands: Raw command strings, e.g. ``["git add -A", "git commit -m x"]``
            description: Human-readable summary of what the commands do

        Returns:
            ExecutionOutcome with the final TaskStatus
        """
        if not commands:
            logger.warning("No git commands to execute.")
            return ExecutionOutcome(status=TaskStatus.COMPLETED)

        self._present(commands, description)
        outcome = ExecutionOutcome(status=TaskStatus.IN_PROGRESS)

        for raw_command in commands:
            command = strip_git_prefix(raw_command)

            if any(marker in command for marker in INTERACTIVE_REBASE_MARKERS):
                commit_count = parse_rebase_command(f"git {command}")
                if commit_count is not None:
                    self._run_rebase(commit_count, raw_command, outcome)
                    break
                logger.warning("Only HEAD~N interactive rebases can be scripted; "
                               "git will open your editor for this one.")

            subcommand, args = split_command(command)
            if not subcommand:
                logger.warning(f"Skipping empty command '{raw_command}'")
                continue

            if subcommand == "commit":
                self._backfill_commit_message(args)

            if not self._confirm(subcommand, args):
                logger.user(f"Declined to run: git {shlex.join([subcommand, *args])}")
                display_info("Operation cancelled.")
                outcome.status = TaskStatus.CANCELLED
                break

            result = self.executor.execute(subcommand, args, self.cwd)
            outcome.executed_commands.append(raw_command)

            if not result.success:
                outcome.status = TaskStatus.FAILED
                outcome.error = result.error
                self._report_failure(result.error)
                break

            outcome.outputs.append(result.output)

        if outcome.status == TaskStatus.IN_PROGRESS:
            outcome.status = TaskStatus.COMPLETED

        outcome.history_entry = self._record(user_prompt, commands, outcome)
        return outcome

    def _present(self, commands: List[str], description: str) -> None:
        display_info(f"I'll execute: {description or 'Git operation'}")
        for command in commands:
            display_code(f"  {command}")

    def _run_rebase(self, commit_count: int, raw_command: str, outcome: ExecutionOutcome) -> None:
        result = self.rebase_planner.plan_and_run(commit_count, self.cwd)

        if result.success:
            outcome.executed_commands.append(raw_command)
            outcome.outputs.append(f"Combined {commit_count} commits: {result.final_message}")
            outcome.status = TaskStatus.COMPLETED
        elif result.error == REBASE_CANCELLED:
            display_info("Operation cancelled.")
            outcome.status = TaskStatus.CANCELLED
        else:
            outcome.executed_commands.append(raw_command)
            outcome.status = TaskStatus.FAILED
            outcome.error = result.error
            self._report_failure(result.error)

    def _backfill_commit_message(self, args: List[str]) -> None:
        """Replace an empty or too-short ``-m`` value with a suggested message."""
        flag_index = next((i for i, arg in enumerate(args) if arg in MESSAGE_FLAGS), None)
        if flag_index is None:
            return

        value_index = flag_index + 1
        message = args[value_index] if value_index < len(args) else ""
        if len(message.strip()) >= MIN_COMMIT_MESSAGE_LENGTH:
            return

        display_info("Analyzing changes to generate commit message...")
        staged_files = self.executor.get_staged_files(self.cwd)
        if not staged_files:
            display_warning("No staged changes to analyze")
            return

        diff_result = self.executor.get_staged_diff(self.cwd)
        diff = diff_result.output if diff_result.success else ""
        if not diff.strip():
            stat_result = self.executor.get_staged_diff_stat(self.cwd)
            diff = stat_result.output if stat_result.success else ""

        if self.message_generator is not None:
            suggestion = self.message_generator.generate_commit_message(staged_files, diff)
        else:
            suggestion = fallback_commit_message(staged_files)

        display_info("Suggested commit message:")
        display_code(f"  {suggestion}")

        if ask_confirmation("Use this message?", default=True):
            chosen = suggestion
        else:
            chosen = get_text_input("Enter commit message", suggestion)

        if value_index < len(args):
            args[value_index] = chosen
        else:
            args.append(chosen)

    def _confirm(self, subcommand: str, args: List[str]) -> bool:
        """Ask before destructive or cloud commands. Safe commands pass through."""
        command_text = " ".join([subcommand, *args])
        safety = self.safety_checker.classify(command_text)
        logger.debug(f"'{command_text}' classified as {safety.value}")

        if not self.safety_checker.requires_confirmation(safety):
            return True

        display_code(f"  git {shlex.join([subcommand, *args])}")
        display_warning(self.safety_checker.get_safety_warning(safety))
        return ask_confirmation("Proceed?", default=False)

    def _report_failure(self, error: Optional[str]) -> None:
        display_error("Operation failed")
        if not error:
            return

        for needle, hint_lines in ERROR_HINTS:
            if needle in error:
                for line in hint_lines:
                    if line.startswith("  "):
                        display_code(line)
                    else:
                        display_info(line)
                break

        display_info("Git error:")
        display_code(error)

    def _record(self, user_prompt: str, commands: List[str],
                outcome: ExecutionOutcome) -> Optional[HistoryEntry]:
        """Write the single history entry for this request."""
        if outcome.status == TaskStatus.CANCELLED and not outcome.executed_commands:
            logger.debug("Nothing was executed; no history entry recorded.")
            return None

        failed = outcome.status == TaskStatus.FAILED
        return self.history_store.add_entry(
            user_prompt,
            list(commands),
            not failed,
            outcome.combined_output,
            HISTORY_FAILURE_MARKER if failed else None,
        )


def create_orchestrator(executor: GitCommandExecutor,
                        safety_checker: CommandSafetyChecker,
                        rebase_planner: RebasePlanner,
                        history_store: HistoryStore,
                        message_generator=None,
                        cwd: Optional[str] = None) -> ExecutionOrchestrator:
    """Create an execution orchestrator from its collaborators."""
    return ExecutionOrchestrator(executor, safety_checker, rebase_planner,
                                 history_store, message_generator, cwd)
