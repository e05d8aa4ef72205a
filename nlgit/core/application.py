"""Main application class for nlgit."""

import signal
import sys
from typing import Optional
from pathlib import Path

from ..commands import create_git_executor, create_rebase_planner, create_safety_checker
from ..config.history import create_history_store
from ..config.manager import create_config_manager
from ..llm import create_llm_client
from ..utils.console import (
    ask_confirmation, display_code, display_info, display_success, display_warning
)
from ..utils.helpers import check_dependencies
from ..utils.logging import logger
from ..constants import CLR_BOLD_CYAN, CLR_RESET
from .agent import NON_GIT_RESPONSE, IntentType, create_intent_parser, is_likely_git_related
from .orchestrator import ExecutionOutcome, TaskStatus, create_orchestrator

# Outputs at most this long are printed inline instead of as a block
SHORT_OUTPUT_LINES = 3
SHORT_OUTPUT_CHARS = 200

HELP_TEXT = """Just describe what you want to do with git, for example:
  nlgit "show me the status"
  nlgit "create a branch called feature-x"
  nlgit "commit all changes with message 'fix bug'"
  nlgit "squash the last 3 commits\""""


class NLGit:
    """Main application class for nlgit."""

    def __init__(self, config_dir: Optional[str] = None, debug: bool = False):
        """Initialize the nlgit application.

        Args:
            config_dir: Custom configuration directory path
            debug: Enable debug logging
        """
        logger.set_debug(debug)

        config_path = Path(config_dir) if config_dir else None
        self.config_manager = create_config_manager(config_path)
        self.config = self.config_manager.config

        if not debug and self.config.get("enable_debug", False):
            logger.set_debug(True)

        check_dependencies()

        self.llm_client = create_llm_client(
            self.config,
            self.config_manager.payload_file,
            self.config_manager.response_path_file,
        )
        self.intent_parser = create_intent_parser(self.llm_client, self.config["max_diff_chars"])
        self.history_store = create_history_store(
            self.config_manager.history_file, self.config["history_limit"]
        )
        self.executor = create_git_executor()
        self.orchestrator = create_orchestrator(
            executor=self.executor,
            safety_checker=create_safety_checker(),
            rebase_planner=create_rebase_planner(self.executor),
            history_store=self.history_store,
            message_generator=self.intent_parser,
        )

        self._setup_signal_handlers()

        logger.debug("Application initialization complete")

    def handle_request(self, prompt: str) -> TaskStatus:
        """Turn one natural-language request into executed git commands.

        Args:
            prompt: The user's request

        Returns:
            TaskStatus of the request
        """
        try:
            return self._handle_request(prompt)
        except Exception as e:
            logger.error(f"Unexpected error during request handling: {e}")
            return TaskStatus.FAILED

    def _handle_request(self, prompt: str) -> TaskStatus:
        if not self.executor.is_git_repository():
            display_warning("Not in a git repository!")
            display_info("NLGit works best inside a git repository.")
            if not ask_confirmation("Continue anyway?", default=False):
                return TaskStatus.CANCELLED
        else:
            logger.debug(f"Current branch: {self.executor.get_current_branch() or '(detached)'}")

        display_info("Understanding your request...")
        intent = self.intent_parser.parse(prompt)
        logger.debug(f"Parsed intent: {intent.type.value} (confidence {intent.confidence:.2f})")

        if intent.type == IntentType.NON_GIT:
            if intent.description == "Could not parse intent" and is_likely_git_related(prompt):
                display_warning("I couldn't turn that into git commands. Try rephrasing the request.")
            else:
                print(f"\n{NON_GIT_RESPONSE}")
            return TaskStatus.COMPLETED

        if intent.type == IntentType.HELP:
            display_info("NLGit - Natural Language Git Interface")
            display_code(HELP_TEXT)
            return TaskStatus.COMPLETED

        if not intent.is_git_operation or not intent.git_commands:
            display_warning("I'm not sure how to help with that.")
            display_info('Try describing a git operation, like "show status" or "create a branch"')
            return TaskStatus.COMPLETED

        outcome = self.orchestrator.run(prompt, intent.git_commands, intent.description)
        if outcome.status == TaskStatus.COMPLETED:
            self._show_result(outcome, intent.description)
        return outcome.status

    def _show_result(self, outcome: ExecutionOutcome, description: str) -> None:
        display_success("Operation completed successfully!")

        combined_output = outcome.combined_output.strip()
        if not combined_output:
            display_info(description or "Changes applied successfully.")
            return

        lines = [line for line in combined_output.splitlines() if line.strip()]
        if len(lines) <= SHORT_OUTPUT_LINES and len(combined_output) < SHORT_OUTPUT_CHARS:
            display_info("Result:")
            for line in lines:
                print(f"  {line}")
        else:
            display_info("Git output:")
            display_code(combined_output)

    def run_single_task(self, task: str) -> int:
        """Run a single request and return the process exit status."""
        status = self.handle_request(task)
        return 1 if status == TaskStatus.FAILED else 0

    def run_interactive_mode(self) -> None:
        """Prompt for requests until the user exits."""
        logger.system("Starting interactive mode. Type 'exit', 'quit', or use Ctrl+C to stop.")

        while True:
            try:
                user_input = input(f"\n{CLR_BOLD_CYAN}nlgit>{CLR_RESET} ").strip()
            except EOFError:
                logger.system("Goodbye!")
                break

            if user_input.lower() in ['exit', 'quit', 'q']:
                logger.system("Goodbye!")
                break

            if not user_input:
                continue

            status = self.handle_request(user_input)
            if status == TaskStatus.FAILED:
                logger.warning("Request did not complete successfully")

    def show_history(self, count: int = 10) -> None:
        """Print the most recent history entries, newest first."""
        entries = self.history_store.recent(count)
        if not entries:
            display_info("No history yet.")
            return

        for entry in entries:
            marker = "✓" if entry.success else "✗"
            print(f"{marker} [{entry.timestamp}] {entry.user_prompt}")
            for command in entry.git_commands:
                display_code(f"    {command}")

    def clear_history(self) -> bool:
        """Remove every history entry."""
        if self.history_store.clear():
            display_success("History cleared.")
            return True
        return False

    def get_config_summary(self) -> dict:
        """Get a summary of the current configuration."""
        return {
            "endpoint": self.config.get("endpoint", "Not set"),
            "model": self.config.get("model", "Not set"),
            "request_timeout": self.config.get("request_timeout"),
            "history_limit": self.config.get("history_limit"),
            "max_diff_chars": self.config.get("max_diff_chars"),
            "enable_debug": self.config.get("enable_debug", False),
            "config_dir": str(self.config_manager.config_dir),
        }

    def print_config_summary(self) -> None:
        """Print a summary of the current configuration."""
        logger.system("Configuration Summary:")
        for key, value in self.get_config_summary().items():
            logger.system(f"  {key}: {value}")

    def close(self) -> None:
        """Release the LLM session."""
        self.llm_client.close()

    def _setup_signal_handlers(self) -> None:
        """Set up signal handlers for graceful shutdown."""
        def signal_handler(sig, frame):
            print()
            display_info("Operation cancelled by user.")
            self.close()
            sys.exit(0)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

        if hasattr(signal, 'SIGHUP'):
            signal.signal(signal.SIGHUP, signal_handler)


def create_application(config_dir: Optional[str] = None, debug: bool = False) -> NLGit:
    """Create and initialize an NLGit application instance.

    Args:
        config_dir: Custom configuration directory path
        debug: Enable debug logging

    Returns:
        Initialized NLGit instance
    """
    return NLGit(config_dir, debug)
