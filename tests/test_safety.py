"""Unit tests for git command safety classification."""

import pytest

from nlgit.commands.safety import (
    SAFE_COMMANDS,
    CommandSafetyChecker,
    OperationSafety,
    classify,
    create_safety_checker,
)


class TestCommandSafetyChecker:
    """Test cases for CommandSafetyChecker."""

    def setup_method(self):
        """Set up test fixtures."""
        self.checker = create_safety_checker()

    @pytest.mark.parametrize("command", sorted(SAFE_COMMANDS))
    def test_safe_allow_list(self, command):
        """Leading tokens on the allow-list are safe."""
        assert self.checker.classify(command) == OperationSafety.SAFE

    def test_safe_with_arguments(self):
        """Arguments after a safe subcommand do not change the tier."""
        assert self.checker.classify("log --oneline -5") == OperationSafety.SAFE
        assert self.checker.classify("remote -v") == OperationSafety.SAFE

    def test_leading_git_is_ignored(self):
        """A full command line with the git prefix classifies like the bare subcommand."""
        assert self.checker.classify("git status") == OperationSafety.SAFE

    @pytest.mark.parametrize("command", [
        "reset --hard",
        "clean -fd",
        "checkout main",
        "rebase -i HEAD~2",
        "merge feature",
        "cherry-pick abc123",
        "revert HEAD",
        "rm file.txt",
        "branch -d old",
        "branch -D old",
        "stash drop",
        "stash clear",
    ])
    def test_destructive_keywords(self, command):
        """Destructive keywords are matched anywhere in the command."""
        assert self.checker.classify(command) == OperationSafety.DESTRUCTIVE

    @pytest.mark.parametrize("command", ["push", "pull origin main", "clone url", "fetch --all"])
    def test_cloud_keywords(self, command):
        """Remote operations are classified as cloud."""
        assert self.checker.classify(command) == OperationSafety.CLOUD

    def test_cloud_wins_over_destructive(self):
        """Cloud keywords are checked before destructive ones."""
        assert self.checker.classify("push --force") == OperationSafety.CLOUD
        assert self.checker.classify("pull --rebase") == OperationSafety.CLOUD

    def test_fetch_alone_is_safe(self):
        """Only 'fetch --all' is a cloud keyword."""
        assert self.checker.classify("fetch origin") == OperationSafety.SAFE

    def test_unknown_command_defaults_to_destructive(self):
        """Unrecognized commands are never auto-approved."""
        assert self.checker.classify("unknown-command") == OperationSafety.DESTRUCTIVE
        assert self.checker.classify("commit -m message") == OperationSafety.DESTRUCTIVE

    def test_empty_command(self):
        """Empty input classifies without raising."""
        assert self.checker.classify("") == OperationSafety.DESTRUCTIVE
        assert self.checker.classify(None) == OperationSafety.DESTRUCTIVE

    def test_case_insensitive(self):
        """Upper-case commands classify like lower-case ones."""
        assert self.checker.classify("PUSH") == self.checker.classify("push") == OperationSafety.CLOUD
        assert self.checker.classify("STATUS") == OperationSafety.SAFE
        assert self.checker.classify("Reset --HARD") == OperationSafety.DESTRUCTIVE

    def test_substring_containment(self):
        """Keywords match inside longer words."""
        assert self.checker.classify("log --format=%s") == OperationSafety.DESTRUCTIVE

    def test_requires_confirmation(self):
        """Only safe commands skip confirmation."""
        assert self.checker.requires_confirmation(OperationSafety.SAFE) is False
        assert self.checker.requires_confirmation(OperationSafety.DESTRUCTIVE) is True
        assert self.checker.requires_confirmation(OperationSafety.CLOUD) is True

    def test_safety_warnings(self):
        """Each gated tier has its own warning."""
        assert "remote" in self.checker.get_safety_warning(OperationSafety.CLOUD)
        assert "destructive" in self.checker.get_safety_warning(OperationSafety.DESTRUCTIVE)
        assert self.checker.get_safety_warning(OperationSafety.SAFE) == ""

    def test_classification_is_idempotent(self):
        """Repeated calls return the same tier."""
        results = {self.checker.classify("merge dev") for _ in range(3)}
        assert results == {OperationSafety.DESTRUCTIVE}


def test_module_level_classify():
    """The shared checker agrees with a fresh instance."""
    assert classify("push") == CommandSafetyChecker().classify("push")
    assert classify("status") == OperationSafety.SAFE
