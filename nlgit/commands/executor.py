"""Git command execution utilities for nlgit."""

import os
import re
import shlex
import subprocess
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..utils.logging import logger

INTERACTIVE_FLAGS = ("-i", "--interactive")
INTERACTIVE_COMPLETION_MESSAGE = "Interactive command completed"

_QUOTED_TOKEN = re.compile(r'(?:[^\s"]+|"[^"]*")+')
_EDGE_QUOTES = re.compile(r'^"|"$')


@dataclass
class GitOperationResult:
    """Result of a single git invocation."""
    success: bool
    output: str = ""
    error: Optional[str] = None

    def __str__(self) -> str:
        if self.success:
            return self.output if self.output else "(no output)"
        return f"Failed: {self.error or '(no error message)'}"


def strip_git_prefix(command: str) -> str:
    """Remove a leading ``git `` from a raw command string."""
    command = command.strip()
    if command == "git" or command.startswith("git "):
        return command[3:].strip()
    return command


def tokenize(command: str) -> List[str]:
    """Split a command into tokens, keeping quoted substrings together.

    shlex handles both quote styles. Unbalanced quotes (for example an
    apostrophe in an unquoted message) fall back to a double-quote-aware split.
    """
    try:
        return shlex.split(command)
    except ValueError:
        logger.debug(f"shlex could not tokenize '{command}', using quote-aware split")
        return [_EDGE_QUOTES.sub('', token) for token in _QUOTED_TOKEN.findall(command)]


def split_command(raw_command: str) -> Tuple[str, List[str]]:
    """Parse a raw command like ``git commit -m "msg"`` into (subcommand, args)."""
    parts = tokenize(strip_git_prefix(raw_command))
    if not parts:
        return "", []
    return parts[0], parts[1:]


class GitCommandExecutor:
    """Runs git as a child process, one invocation at a time."""

    def __init__(self, git_binary: str = "git"):
        """Initialize git executor.

        Args:
            git_binary: Name or path of the git executable
        """
        self.git_binary = git_binary

    def execute(self,
                subcommand: str,
                args: Sequence[str] = (),
                cwd: Optional[str] = None,
                interactive: Optional[bool] = None,
                env: Optional[Dict[str, str]] = None) -> GitOperationResult:
        """Execute ``git <subcommand> <args...>`` without a shell.

        Args:
            subcommand: Git subcommand, e.g. ``status``
            args: Remaining arguments, passed through untouched
            cwd: Working directory (defaults to the process's current directory)
            interactive: True hands the terminal to git, False always captures,
                None decides from the presence of ``-i``/``--interactive``
            env: Extra environment variables for this invocation only

        Returns:
            GitOperationResult describing the outcome
        """
        args = list(args)
        if interactive is None:
            interactive = any(arg in INTERACTIVE_FLAGS for arg in args)

        argv = [self.git_binary, subcommand, *args]
        work_dir = cwd or os.getcwd()
        child_env = {**os.environ, **env} if env else None

        logger.debug(f"Executing: {shlex.join(argv)} (cwd: {work_dir}, interactive: {interactive})")

        if interactive:
            return self._run_interactive(argv, work_dir, child_env)
        return self._run_captured(argv, work_dir, child_env)

    def _run_captured(self, argv: List[str], cwd: str,
                      env: Optional[Dict[str, str]]) -> GitOperationResult:
        try:
            process = subprocess.run(
                argv,
                cwd=cwd,
                env=env,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            logger.error(f"Could not start git: {e}")
            return GitOperationResult(success=False, output="", error=str(e))

        if process.returncode == 0:
            logger.debug(f"git {argv[1]} completed with exit code 0")
            return GitOperationResult(success=True, output=process.stdout or process.stderr)

        error = process.stderr.strip() or f"git {argv[1]} exited with code {process.returncode}"
        logger.debug(f"git {argv[1]} failed with exit code {process.returncode}: {error}")
        return GitOperationResult(success=False, output=process.stdout, error=error)

    def _run_interactive(self, argv: List[str], cwd: str,
                         env: Optional[Dict[str, str]]) -> GitOperationResult:
        # Standard streams are inherited, so nothing is captured
        logger.git(f"Handing the terminal to git {argv[1]}")
        try:
            process = subprocess.run(argv, cwd=cwd, env=env)
        except OSError as e:
            logger.error(f"Could not start git: {e}")
            return GitOperationResult(success=False, output="", error=str(e))

        if process.returncode == 0:
            return GitOperationResult(success=True, output=INTERACTIVE_COMPLETION_MESSAGE)

        return GitOperationResult(
            success=False,
            output="",
            error=f"git {argv[1]} exited with code {process.returncode}",
        )

    def is_git_repository(self, cwd: Optional[str] = None) -> bool:
        """Check whether cwd is inside a git work tree."""
        result = self.execute("rev-parse", ["--is-inside-work-tree"], cwd, interactive=False)
        return result.success and result.output.strip() == "true"

    def get_current_branch(self, cwd: Optional[str] = None) -> Optional[str]:
        """Name of the checked out branch, or None outside a repository."""
        result = self.execute("branch", ["--show-current"], cwd, interactive=False)
        return result.output.strip() if result.success else None

    def get_staged_files(self, cwd: Optional[str] = None) -> List[str]:
        """Names of the files staged for the next commit."""
        result = self.execute("diff", ["--cached", "--name-only"], cwd, interactive=False)
        if not result.success:
            return []
        return [line.strip() for line in result.output.splitlines() if line.strip()]

    def get_staged_diff(self, cwd: Optional[str] = None) -> GitOperationResult:
        """Full diff of the staged changes."""
        return self.execute("diff", ["--cached"], cwd, interactive=False)

    def get_staged_diff_stat(self, cwd: Optional[str] = None) -> GitOperationResult:
        """Per-file summary of the staged changes."""
        return self.execute("diff", ["--cached", "--stat"], cwd, interactive=False)


def create_git_executor(git_binary: str = "git") -> GitCommandExecutor:
    """Create a git command executor."""
    return GitCommandExecutor(git_binary)
