"""Terminal presentation and user prompts for nlgit."""

from typing import List, Optional, Tuple

from ..constants import (
    CLR_RESET, CLR_DIM, CLR_GREEN, CLR_RED, CLR_YELLOW, CLR_BLUE,
    CLR_CYAN, CLR_BOLD_CYAN
)

ASCII_LOGO = r"""
 _   _ _     ____ _ _
| \ | | |   / ___(_) |_
|  \| | |  | |  _| | __|
| |\  | |__| |_| | | |_
|_| \_|_____\____|_|\__|
"""


def display_welcome() -> None:
    """Print the logo banner."""
    print(f"{CLR_CYAN}{ASCII_LOGO}{CLR_RESET}")
    print(f"{CLR_BOLD_CYAN}Natural Language Git{CLR_RESET}\n")


def display_success(message: str) -> None:
    print(f"{CLR_GREEN}✓{CLR_RESET} {message}")


def display_error(message: str) -> None:
    print(f"{CLR_RED}✗{CLR_RESET} {message}")


def display_warning(message: str) -> None:
    print(f"{CLR_YELLOW}⚠{CLR_RESET} {message}")


def display_info(message: str) -> None:
    print(f"{CLR_BLUE}ℹ{CLR_RESET} {message}")


def display_code(code: str) -> None:
    """Print command text or git output dimmed."""
    print(f"{CLR_DIM}{code}{CLR_RESET}")


def ask_confirmation(message: str, default: bool = False) -> bool:
    """Ask a yes/no question. An empty answer returns the default."""
    hint = "[Y/n]" if default else "[y/N]"
    while True:
        answer = input(f"{CLR_YELLOW}{message} {hint}: {CLR_RESET}").strip().lower()
        if not answer:
            return default
        if answer in ['y', 'yes']:
            return True
        if answer in ['n', 'no']:
            return False
        print(f"{CLR_RED}Invalid choice. Enter y or n.{CLR_RESET}")


def get_text_input(message: str, default: Optional[str] = None) -> str:
    """Read a line of text. An empty answer returns the default when one is given."""
    suffix = f" [{default}]" if default else ""
    answer = input(f"{CLR_YELLOW}{message}{suffix}: {CLR_RESET}").strip()
    if not answer and default is not None:
        return default
    return answer


def select_from_list(message: str, choices: List[Tuple[str, str]]) -> str:
    """Let the user pick one of (value, label) choices by number and return its value.

    Args:
        message: Question shown above the numbered list
        choices: Ordered (value, label) pairs

    Returns:
        The value of the chosen entry
    """
    print(f"{CLR_YELLOW}{message}{CLR_RESET}")
    for index, (_, label) in enumerate(choices, 1):
        print(f"  {index}) {label}")

    while True:
        answer = input(f"{CLR_YELLOW}Choice [1-{len(choices)}]: {CLR_RESET}").strip()
        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            return choices[int(answer) - 1][0]
        print(f"{CLR_RED}Invalid choice. Enter a number between 1 and {len(choices)}.{CLR_RESET}")
