"""Command-line interface for nlgit."""

import argparse
import sys
from typing import List, Optional

from colorama import init as colorama_init

from .core.application import create_application
from .utils.console import display_welcome
from .utils.logging import logger
from . import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="nlgit",
        description="nlgit: run git with natural language requests.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  nlgit "show me the status"
  nlgit "create a branch called feature-x"
  nlgit "commit all changes with message 'fix bug'"
  nlgit "squash the last 3 commits"
  nlgit                                  # Interactive mode

Safety:
  Read-only commands run immediately. Destructive commands (reset, rebase,
  merge, ...) and remote commands (push, pull, clone) ask for confirmation
  first, defaulting to "no".
        """
    )

    parser.add_argument(
        'prompt',
        nargs='*',
        help="Natural-language request. If empty, enters interactive mode."
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'nlgit {__version__}'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help="Enable debug logging output"
    )

    parser.add_argument(
        '--config-dir',
        type=str,
        help="Custom configuration directory path"
    )

    parser.add_argument(
        '--config-summary',
        action='store_true',
        help="Show configuration summary and exit"
    )

    parser.add_argument(
        '--history',
        type=int,
        nargs='?',
        const=10,
        metavar='N',
        help="Show the N most recent requests (default 10) and exit"
    )

    parser.add_argument(
        '--clear-history',
        action='store_true',
        help="Delete the request history and exit"
    )

    return parser


def main(args: Optional[List[str]] = None) -> None:
    """Main entry point for the CLI."""
    colorama_init(autoreset=True)

    parser = create_parser()
    parsed_args = parser.parse_args(args)

    try:
        app = create_application(
            config_dir=parsed_args.config_dir,
            debug=parsed_args.debug
        )
    except SystemExit:
        # Configuration setup or validation already reported
        raise
    except Exception as e:
        logger.error(f"Failed to initialize nlgit: {e}")
        sys.exit(1)

    try:
        if parsed_args.config_summary:
            app.print_config_summary()
            return

        if parsed_args.clear_history:
            sys.exit(0 if app.clear_history() else 1)

        if parsed_args.history is not None:
            app.show_history(parsed_args.history)
            return

        if parsed_args.prompt:
            sys.exit(app.run_single_task(" ".join(parsed_args.prompt)))

        display_welcome()
        app.run_interactive_mode()
    finally:
        app.close()

    logger.system("nlgit session ended.")


if __name__ == "__main__":
    main()
