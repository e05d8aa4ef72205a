"""Constants used throughout the nlgit package."""

from pathlib import Path
from colorama import Fore, Style

# Configuration directory
CONFIG_DIR = Path.home() / ".config" / "nlgit"

# ANSI Color Codes (using colorama)
CLR_RESET = Style.RESET_ALL
CLR_DIM = Style.DIM
CLR_RED = Fore.RED
CLR_BOLD_RED = Style.BRIGHT + Fore.RED
CLR_GREEN = Fore.GREEN
CLR_BOLD_GREEN = Style.BRIGHT + Fore.GREEN
CLR_YELLOW = Fore.YELLOW
CLR_BOLD_YELLOW = Style.BRIGHT + Fore.YELLOW
CLR_BLUE = Fore.BLUE
CLR_BOLD_BLUE = Style.BRIGHT + Fore.BLUE
CLR_MAGENTA = Fore.MAGENTA
CLR_BOLD_MAGENTA = Style.BRIGHT + Fore.MAGENTA
CLR_CYAN = Fore.CYAN
CLR_BOLD_CYAN = Style.BRIGHT + Fore.CYAN
CLR_WHITE = Fore.WHITE
CLR_BOLD_WHITE = Style.BRIGHT + Fore.WHITE

# LLM phases with a configurable system prompt
LLM_PHASES = ["intent", "commit_message"]

# Default configuration values
DEFAULT_MODEL = "llama3.2:latest"
DEFAULT_REQUEST_TIMEOUT = 60
DEFAULT_HISTORY_LIMIT = 50
DEFAULT_MAX_DIFF_CHARS = 4000
DEFAULT_ENABLE_DEBUG = False

# Commit messages shorter than this are treated as missing
MIN_COMMIT_MESSAGE_LENGTH = 3

# Marker stored in history instead of the raw git error
HISTORY_FAILURE_MARKER = "Command execution failed"

# Prefix for rebase todo/message temp files
REBASE_TEMP_PREFIX = "nlgit-rebase-"
