"""LLM response parsing utilities for nlgit."""

import json
import re
from typing import Any, Dict, Optional

from ..utils.logging import logger

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)
_THINK_BLOCK = re.compile(r"<think>.*?</think>", re.DOTALL)
_PATH_PART = re.compile(r"^([^\[\]]*)((?:\[\d+\])*)$")


def strip_think_blocks(llm_output: str) -> str:
    """Remove <think>...</think> reasoning blocks some models emit."""
    return _THINK_BLOCK.sub("", llm_output).strip()


def parse_json_object(llm_output: str) -> Optional[Dict[str, Any]]:
    """Extract and decode the outermost {...} block from an LLM reply."""
    if not llm_output:
        return None

    match = _JSON_OBJECT.search(strip_think_blocks(llm_output))
    if not match:
        return None

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.debug(f"LLM reply contained invalid JSON: {e}")
        return None

    return data if isinstance(data, dict) else None


def clean_commit_message(llm_output: str) -> str:
    """Reduce an LLM reply to a single-line commit message without wrapping quotes."""
    text = strip_think_blocks(llm_output or "")
    text = text.replace("```", "").strip()
    first_line = next((line.strip() for line in text.splitlines() if line.strip()), "")
    return re.sub(r'^["\'`]|["\'`]$', "", first_line).strip()


def extract_response_content(response_data: Any, response_path: str) -> Optional[str]:
    """Extract content from LLM response using a jq-like path.

    Args:
        response_data: LLM response JSON data
        response_path: jq-like path (e.g., ".response", ".choices[0].message.content")

    Returns:
        Extracted content or None if not found
    """
    if not response_path.startswith('.'):
        logger.warning(f"Response path should start with '.': {response_path}")
        return None

    current = response_data
    for part in [p for p in response_path[1:].split('.') if p]:
        match = _PATH_PART.match(part)
        if not match:
            logger.warning(f"Unsupported response path segment '{part}' in {response_path}")
            return None

        key, indices = match.groups()
        if key:
            if not isinstance(current, dict):
                return None
            current = current.get(key)

        for index in re.findall(r"\[(\d+)\]", indices):
            idx = int(index)
            if not isinstance(current, list) or idx >= len(current):
                return None
            current = current[idx]

        if current is None:
            return None

    if current is None:
        return None
    return current if isinstance(current, str) else json.dumps(current)
