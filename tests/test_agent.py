"""Unit tests for intent parsing and commit message suggestions."""

from unittest.mock import Mock

from nlgit.commands.safety import OperationSafety
from nlgit.core.agent import (
    IntentParser,
    IntentType,
    fallback_commit_message,
    is_likely_git_related,
)


class TestIntentParser:
    """Test cases for IntentParser."""

    def setup_method(self):
        """Set up test fixtures."""
        self.llm_client = Mock()
        self.parser = IntentParser(self.llm_client, max_diff_chars=20)

    def test_parse_git_operation(self):
        self.llm_client.generate.return_value = (
            'Sure! {"type": "git_operation", "confidence": 0.9, '
            '"gitCommands": ["git add -A", "git commit -m \\"fix bug\\""], '
            '"description": "Stage and commit", "safety": "safe"}'
        )

        intent = self.parser.parse("commit everything as fix bug")

        assert intent.type == IntentType.GIT_OPERATION
        assert intent.is_git_operation is True
        assert intent.confidence == 0.9
        assert intent.git_commands == ["git add -A", 'git commit -m "fix bug"']
        assert intent.description == "Stage and commit"
        assert intent.safety == OperationSafety.SAFE
        self.llm_client.generate.assert_called_once_with("intent", "commit everything as fix bug")

    def test_parse_single_command_string(self):
        self.llm_client.generate.return_value = (
            '{"type": "git_operation", "gitCommands": "git push", "safety": "cloud"}'
        )

        intent = self.parser.parse("push")

        assert intent.git_commands == ["git push"]
        assert intent.safety == OperationSafety.CLOUD
        assert intent.confidence == 0.5

    def test_parse_non_git(self):
        self.llm_client.generate.return_value = '{"type": "non_git", "confidence": 1.0}'

        intent = self.parser.parse("what's the weather?")

        assert intent.type == IntentType.NON_GIT
        assert intent.is_git_operation is False
        assert intent.git_commands == []

    def test_parse_unknown_type_is_non_git(self):
        self.llm_client.generate.return_value = '{"type": "launch_rocket", "safety": "extreme"}'

        intent = self.parser.parse("x")

        assert intent.type == IntentType.NON_GIT
        assert intent.safety == OperationSafety.SAFE

    def test_parse_without_response(self):
        self.llm_client.generate.return_value = None

        intent = self.parser.parse("show status")

        assert intent.type == IntentType.NON_GIT
        assert intent.confidence == 0.0
        assert intent.description == "Error parsing intent"

    def test_parse_without_json(self):
        self.llm_client.generate.return_value = "I think you want git status."

        intent = self.parser.parse("show status")

        assert intent.type == IntentType.NON_GIT
        assert intent.description == "Could not parse intent"

    def test_generate_commit_message(self):
        self.llm_client.generate.return_value = '"feat: add login form"\nExplanation follows.'

        message = self.parser.generate_commit_message(["login.py"], "+form")

        assert message == "feat: add login form"
        phase, request = self.llm_client.generate.call_args[0]
        assert phase == "commit_message"
        assert "- login.py" in request

    def test_generate_commit_message_truncates_diff(self):
        self.llm_client.generate.return_value = "chore: tidy"

        self.parser.generate_commit_message(["a.py"], "x" * 100)

        request = self.llm_client.generate.call_args[0][1]
        assert "x" * 20 + "..." in request
        assert "x" * 21 not in request

    def test_generate_commit_message_falls_back_on_error(self):
        self.llm_client.generate.side_effect = RuntimeError("connection reset")

        assert self.parser.generate_commit_message(["a.py", "b.py"], "") == "update a.py"

    def test_generate_commit_message_falls_back_on_empty_reply(self):
        self.llm_client.generate.return_value = "   "

        assert self.parser.generate_commit_message(["a.py"], "") == "change a.py"


class TestHelpers:
    """Test cases for module-level helpers."""

    def test_fallback_commit_message(self):
        assert fallback_commit_message(["a.py"]) == "change a.py"
        assert fallback_commit_message(["a.py", "b.py"]) == "update a.py"
        assert fallback_commit_message([]) == "change files"

    def test_is_likely_git_related(self):
        assert is_likely_git_related("Squash my last commits") is True
        assert is_likely_git_related("push to origin") is True
        assert is_likely_git_related("what's the weather?") is False
