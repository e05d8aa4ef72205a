"""Natural-language intent parsing and commit message suggestions for nlgit."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ..commands.safety import OperationSafety
from ..llm import LLMClient, clean_commit_message, parse_json_object
from ..utils.logging import logger


class IntentType(Enum):
    """Kinds of request the intent parser distinguishes."""
    GIT_OPERATION = "git_operation"
    REVERT_OPERATION = "revert_operation"
    NON_GIT = "non_git"
    HELP = "help"
    CONFIG = "config"


@dataclass
class ParsedIntent:
    """Structured reading of a user prompt."""
    type: IntentType
    confidence: float = 0.5
    git_commands: List[str] = field(default_factory=list)
    description: str = ""
    safety: OperationSafety = OperationSafety.SAFE

    @property
    def is_git_operation(self) -> bool:
        return self.type in (IntentType.GIT_OPERATION, IntentType.REVERT_OPERATION)


GIT_KEYWORDS = [
    "git", "commit", "branch", "push", "pull", "merge", "rebase", "status",
    "log", "diff", "checkout", "stash", "remote", "clone", "fetch", "reset",
    "revert", "cherry-pick", "tag", "repository", "repo", "squash", "stage",
]

NON_GIT_RESPONSE = """I'm NLGit, a specialized tool for Git operations. I can only help with Git-related tasks like:

• Checking status and viewing changes
• Creating commits and branches
• Merging and rebasing
• Pushing and pulling
• Managing remotes

For non-Git tasks, please use other tools. How can I help you with Git?"""

COMMIT_MESSAGE_REQUEST = """Generate a concise git commit message for these changes:

Changed files:
{files}

Diff:
{diff}"""


def is_likely_git_related(prompt: str) -> bool:
    """Cheap keyword pre-filter for prompts that mention git concepts."""
    lower_prompt = prompt.lower()
    return any(keyword in lower_prompt for keyword in GIT_KEYWORDS)


def fallback_commit_message(changed_files: List[str]) -> str:
    """Deterministic message used when generation fails."""
    main_file = changed_files[0] if changed_files else "files"
    action = "update" if len(changed_files) > 1 else "change"
    return f"{action} {main_file}"


def _coerce_enum(enum_cls, value, default):
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        return default


class IntentParser:
    """Turns prompts into git command lists through the LLM session."""

    def __init__(self, llm_client: LLMClient, max_diff_chars: int = 4000):
        """Initialize the parser.

        Args:
            llm_client: Session used for every generation call
            max_diff_chars: Staged diff characters included in commit message requests
        """
        self.llm_client = llm_client
        self.max_diff_chars = max_diff_chars

    def parse(self, prompt: str) -> ParsedIntent:
        """Ask the model for a structured intent and normalize its reply."""
        response = self.llm_client.generate("intent", prompt)
        if not response:
            logger.error("No response from LLM while parsing the request")
            return ParsedIntent(type=IntentType.NON_GIT, confidence=0.0,
                                description="Error parsing intent")

        logger.debug(f"Intent reply: {response}")
        data = parse_json_object(response)
        if data is None:
            return ParsedIntent(type=IntentType.NON_GIT, confidence=0.5,
                                description="Could not parse intent")

        commands = data.get("gitCommands") or []
        if isinstance(commands, str):
            commands = [commands]

        try:
            confidence = float(data.get("confidence") or 0.5)
        except (TypeError, ValueError):
            confidence = 0.5

        return ParsedIntent(
            type=_coerce_enum(IntentType, data.get("type") or "non_git", IntentType.NON_GIT),
            confidence=confidence,
            git_commands=[str(c).strip() for c in commands if str(c).strip()],
            description=str(data.get("description") or ""),
            safety=_coerce_enum(OperationSafety, data.get("safety") or "safe", OperationSafety.SAFE),
        )

    def generate_commit_message(self, changed_files: List[str], diff: str) -> str:
        """Suggest a commit message for the staged changes, never failing."""
        if len(diff) > self.max_diff_chars:
            logger.debug(f"Staged diff ({len(diff)} chars) truncated to {self.max_diff_chars}.")
            diff = diff[:self.max_diff_chars] + "..."

        request = COMMIT_MESSAGE_REQUEST.format(
            files="\n".join(f"- {name}" for name in changed_files),
            diff=diff,
        )

        try:
            response = self.llm_client.generate("commit_message", request)
        except Exception as e:
            logger.warning(f"Commit message generation failed: {e}")
            response = None

        message = clean_commit_message(response) if response else ""
        if not message:
            message = fallback_commit_message(changed_files)
            logger.debug(f"Using fallback commit message '{message}'")
        else:
            logger.llm(f"Suggested commit message: {message}")
        return message


def create_intent_parser(llm_client: LLMClient, max_diff_chars: int = 4000) -> IntentParser:
    """Create an intent parser bound to an LLM session."""
    return IntentParser(llm_client, max_diff_chars)
