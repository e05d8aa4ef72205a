"""Unit tests for request handling and the command-line interface."""

from unittest.mock import Mock, patch

import pytest

from nlgit.cli import create_parser, main
from nlgit.core.agent import IntentType, ParsedIntent
from nlgit.core.application import NLGit
from nlgit.core.orchestrator import ExecutionOutcome, TaskStatus


class TestRequestHandling:
    """Test cases for NLGit request dispatch with collaborators mocked out."""

    def setup_method(self):
        """Set up test fixtures."""
        self.app = NLGit.__new__(NLGit)
        self.app.executor = Mock()
        self.app.executor.is_git_repository.return_value = True
        self.app.intent_parser = Mock()
        self.app.orchestrator = Mock()

    def test_git_request_runs_orchestrator(self):
        self.app.intent_parser.parse.return_value = ParsedIntent(
            type=IntentType.GIT_OPERATION, git_commands=["git status"], description="Show status"
        )
        self.app.orchestrator.run.return_value = ExecutionOutcome(
            status=TaskStatus.COMPLETED, outputs=["clean"]
        )

        status = self.app.handle_request("show status")

        assert status == TaskStatus.COMPLETED
        self.app.orchestrator.run.assert_called_once_with("show status", ["git status"], "Show status")

    def test_non_git_request_runs_nothing(self):
        self.app.intent_parser.parse.return_value = ParsedIntent(type=IntentType.NON_GIT)

        assert self.app.handle_request("what's the weather?") == TaskStatus.COMPLETED
        self.app.orchestrator.run.assert_not_called()

    def test_help_request(self):
        self.app.intent_parser.parse.return_value = ParsedIntent(type=IntentType.HELP)

        assert self.app.handle_request("help") == TaskStatus.COMPLETED
        self.app.orchestrator.run.assert_not_called()

    def test_git_intent_without_commands(self):
        self.app.intent_parser.parse.return_value = ParsedIntent(type=IntentType.GIT_OPERATION)

        assert self.app.handle_request("do something") == TaskStatus.COMPLETED
        self.app.orchestrator.run.assert_not_called()

    @patch("nlgit.core.application.ask_confirmation", return_value=False)
    def test_outside_repository_can_be_declined(self, mock_confirm):
        self.app.executor.is_git_repository.return_value = False

        assert self.app.handle_request("show status") == TaskStatus.CANCELLED
        self.app.intent_parser.parse.assert_not_called()

    def test_unexpected_error_is_a_failure(self):
        self.app.intent_parser.parse.side_effect = ValueError("boom")

        assert self.app.handle_request("show status") == TaskStatus.FAILED

    def test_run_single_task_exit_codes(self):
        with patch.object(self.app, "handle_request", return_value=TaskStatus.FAILED):
            assert self.app.run_single_task("x") == 1
        with patch.object(self.app, "handle_request", return_value=TaskStatus.CANCELLED):
            assert self.app.run_single_task("x") == 0


class TestCLI:
    """Test cases for the argument parser and entry point."""

    @pytest.fixture(autouse=True)
    def no_colorama(self):
        with patch("nlgit.cli.colorama_init"):
            yield

    def test_prompt_words_are_collected(self):
        args = create_parser().parse_args(["show", "me", "the", "status"])

        assert args.prompt == ["show", "me", "the", "status"]
        assert args.history is None

    def test_history_default_count(self):
        assert create_parser().parse_args(["--history"]).history == 10
        assert create_parser().parse_args(["--history", "3"]).history == 3

    @patch("nlgit.cli.create_application")
    def test_single_task_exit_status(self, mock_create):
        app = mock_create.return_value
        app.run_single_task.return_value = 1

        with pytest.raises(SystemExit) as exc_info:
            main(["--config-dir", "/tmp/cfg", "show", "status"])

        assert exc_info.value.code == 1
        app.run_single_task.assert_called_once_with("show status")
        mock_create.assert_called_once_with(config_dir="/tmp/cfg", debug=False)
        app.close.assert_called_once()

    @patch("nlgit.cli.create_application")
    def test_show_history(self, mock_create):
        app = mock_create.return_value

        main(["--history", "5"])

        app.show_history.assert_called_once_with(5)
        app.run_interactive_mode.assert_not_called()

    @patch("nlgit.cli.create_application", side_effect=OSError("disk full"))
    def test_initialization_failure(self, mock_create):
        with pytest.raises(SystemExit) as exc_info:
            main(["status"])

        assert exc_info.value.code == 1
