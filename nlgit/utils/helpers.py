"""Helper utility functions for nlgit."""

import datetime
import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict

from ..utils.logging import logger


def get_current_timestamp() -> str:
    """Returns the current timestamp in YYYY-MM-DD HH:MM:SS format."""
    return datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')


def check_dependencies() -> bool:
    """Checks that the git executable is available on PATH."""
    if shutil.which("git") is None:
        logger.warning(
            "The 'git' executable was not found on PATH. "
            "Every git command nlgit runs will fail until it is installed."
        )
        return False

    logger.debug("Dependency check passed (git found on PATH).")
    return True


def get_current_context() -> Dict[str, str]:
    """Get current system context (time, directory) for prompt templates."""
    return {
        'current_time': get_current_timestamp(),
        'current_directory': os.getcwd(),
    }


def format_template_string(template: str, **kwargs) -> str:
    """Safely format a template string with context variables."""
    try:
        return template.format(**kwargs)
    except KeyError as e:
        logger.error(f"Missing template variable: {e}")
        return template
    except Exception as e:
        logger.error(f"Template formatting error: {e}")
        return template


def safe_file_write(file_path: Path, content: str, description: str = None) -> bool:
    """Safely write content to a file with error handling."""
    desc = description or f"file {file_path}"
    try:
        file_path.write_text(content)
        logger.system(f"Generated {desc}")
        return True
    except Exception as e:
        logger.error(f"Failed to write {desc}: {e}")
        return False


def atomic_write_json(file_path: Path, data: Any) -> bool:
    """Write JSON through a temp file in the same directory, then move it into place."""
    temp_name = None
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile('w', delete=False, dir=file_path.parent,
                                         suffix='.json', encoding='utf-8') as tmp_f:
            json.dump(data, tmp_f, indent=2)
            temp_name = tmp_f.name
        shutil.move(temp_name, str(file_path))
        return True
    except Exception as e:
        logger.error(f"Failed to write {file_path}: {e}")
        if temp_name and Path(temp_name).exists():
            Path(temp_name).unlink()
        return False
