"""Scripted interactive rebase for nlgit.

Interactive rebases are run without opening a text editor: the todo script
and the final commit message are computed up front, written to temp files,
and handed to git through ``GIT_SEQUENCE_EDITOR`` and ``GIT_EDITOR``, which
git invokes with the path of the file it expects to be edited.
"""

import os
import re
import shlex
import tempfile
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from ..constants import REBASE_TEMP_PREFIX
from ..utils.logging import logger
from ..utils.console import (
    ask_confirmation, display_code, display_info, get_text_input, select_from_list
)
from .executor import GitCommandExecutor, create_git_executor

_REBASE_COMMAND = re.compile(r"^\s*git\s+rebase\s+(?:.*\s)?(?:-i|--interactive)(?:\s|$)")
_HEAD_OFFSET = re.compile(r"HEAD~(\d+)")

LOG_FORMAT = "%H|%h|%s"
CUSTOM_MESSAGE_CHOICE = "custom"


class RebaseAction(Enum):
    """Todo script verbs understood by git rebase."""
    PICK = "pick"
    SQUASH = "squash"
    FIXUP = "fixup"
    REWORD = "reword"
    EDIT = "edit"
    DROP = "drop"


@dataclass
class RebaseCommit:
    """One commit in a rebase plan."""
    full_hash: str
    short_hash: str
    subject: str
    action: RebaseAction = RebaseAction.PICK


@dataclass
class RebasePlan:
    """Commits in execution order (oldest first)."""
    commits: List[RebaseCommit] = field(default_factory=list)
    original_commit_count: int = 0

    @property
    def base_commit(self) -> str:
        return self.commits[0].full_hash


@dataclass
class RebaseResult:
    """Outcome of a scripted rebase."""
    success: bool
    final_message: Optional[str] = None
    error: Optional[str] = None


def parse_rebase_command(command: str) -> Optional[int]:
    """Extract N from an interactive ``git rebase ... HEAD~N`` command.

    Only the numeric ``HEAD~N`` form is recognized; ``HEAD^``, branch names
    and hashes return None, as does a rebase without ``-i``/``--interactive``.
    """
    if not command or not _REBASE_COMMAND.match(command):
        return None
    match = _HEAD_OFFSET.search(command)
    return int(match.group(1)) if match else None


def parse_log_output(output: str) -> List[RebaseCommit]:
    """Parse ``git log --format=%H|%h|%s`` output into commits, oldest first."""
    commits = []
    for line in output.strip().splitlines():
        if not line.strip():
            continue
        full_hash, short_hash, subject = (line.split("|", 2) + ["", ""])[:3]
        commits.append(RebaseCommit(full_hash=full_hash, short_hash=short_hash, subject=subject))
    commits.reverse()
    return commits


def build_squash_plan(commits: List[RebaseCommit], original_commit_count: int = 0) -> RebasePlan:
    """Keep the oldest commit and squash every later one into it."""
    for index, commit in enumerate(commits):
        commit.action = RebaseAction.PICK if index == 0 else RebaseAction.SQUASH
    return RebasePlan(commits=commits, original_commit_count=original_commit_count or len(commits))


def render_todo(plan: RebasePlan) -> str:
    """Render a plan as a git rebase todo script."""
    lines = [f"{c.action.value} {c.full_hash} {c.subject}" for c in plan.commits]
    return "\n".join(lines) + "\n"


class RebasePlanner:
    """Plans and runs squash rebases over the last N commits."""

    def __init__(self, executor: Optional[GitCommandExecutor] = None):
        self.executor = executor or create_git_executor()

    def get_rebase_commits(self, count: int, cwd: Optional[str] = None) -> List[RebaseCommit]:
        """Fetch the last ``count`` commits, oldest first."""
        result = self.executor.execute(
            "log", [f"-{count}", f"--format={LOG_FORMAT}"], cwd, interactive=False
        )
        if not result.success:
            raise RuntimeError(result.error or "git log failed")
        return parse_log_output(result.output)

    def plan_and_run(self, commit_count: int, cwd: Optional[str] = None) -> RebaseResult:
        """Squash the last ``commit_count`` commits after confirming with the user.

        Args:
            commit_count: Number of commits counted back from HEAD
            cwd: Repository working directory

        Returns:
            RebaseResult with the final message on success, or the error text
        """
        display_info(f"Interactive rebase for last {commit_count} commits")

        try:
            commits = self.get_rebase_commits(commit_count, cwd)
        except RuntimeError as e:
            return RebaseResult(success=False, error=str(e))

        if not commits:
            return RebaseResult(success=False, error="No commits found")

        display_info("Current commits (oldest to newest):")
        for commit in commits:
            display_code(f"  {commit.short_hash} {commit.subject}")

        if not ask_confirmation("Do you want to squash/combine commits?", default=True):
            logger.user("Declined to squash commits.")
            return RebaseResult(success=False, error="Operation cancelled")

        plan = build_squash_plan(commits, commit_count)
        final_message = self._choose_final_message(plan)

        display_info("Executing rebase...")
        return self.run_plan(plan, final_message, cwd)

    def _choose_final_message(self, plan: RebasePlan) -> str:
        choices = [(str(i), f"{c.subject}  (from {c.short_hash})") for i, c in enumerate(plan.commits)]
        choices.append((CUSTOM_MESSAGE_CHOICE, "Write custom message"))

        choice = select_from_list("Choose commit message for the combined commit:", choices)
        if choice == CUSTOM_MESSAGE_CHOICE:
            return get_text_input("Enter commit message", plan.commits[0].subject)
        return plan.commits[int(choice)].subject

    def run_plan(self, plan: RebasePlan, final_message: str,
                 cwd: Optional[str] = None) -> RebaseResult:
        """Run ``git rebase -i <base>~1`` with the editors replaced by file copies."""
        todo_path = self._write_temp_file(render_todo(plan), ".todo")
        message_path = None
        try:
            message_path = self._write_temp_file(final_message + "\n", ".msg")
            env = {
                "GIT_SEQUENCE_EDITOR": f"cp {shlex.quote(todo_path)}",
                "GIT_EDITOR": f"cp {shlex.quote(message_path)}",
            }
            logger.rebase(f"Rebasing {len(plan.commits)} commits onto {plan.base_commit}~1")

            result = self.executor.execute(
                "rebase", ["-i", f"{plan.base_commit}~1"], cwd, interactive=False, env=env
            )
            if not result.success:
                return RebaseResult(success=False, error=result.error)
            return RebaseResult(success=True, final_message=final_message)
        finally:
            self._remove_temp_file(todo_path)
            if message_path:
                self._remove_temp_file(message_path)

    def _write_temp_file(self, content: str, suffix: str) -> str:
        prefix = f"{REBASE_TEMP_PREFIX}{int(time.time() * 1000)}-"
        fd, path = tempfile.mkstemp(prefix=prefix, suffix=suffix)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def _remove_temp_file(self, path: str) -> None:
        try:
            Path(path).unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove temporary file {path}: {e}")


def create_rebase_planner(executor: Optional[GitCommandExecutor] = None) -> RebasePlanner:
    """Create a rebase planner that runs git through the given executor."""
    return RebasePlanner(executor)
