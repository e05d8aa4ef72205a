"""LLM payload preparation utilities for nlgit."""

import json
from typing import Dict, Any, Optional
from pathlib import Path

from ..utils.logging import logger
from ..utils.helpers import get_current_context, format_template_string
from ..constants import DEFAULT_MODEL, LLM_PHASES


class PayloadBuilder:
    """Builds JSON payloads for LLM API calls from payload.json."""

    def __init__(self, config: Dict[str, Any], payload_file: Path):
        """Initialize payload builder.

        Args:
            config: Application configuration
            payload_file: Path to payload template file
        """
        self.config = config
        self.payload_file = payload_file

    def prepare_payload(self, phase: str, prompt_content: str) -> Optional[str]:
        """Prepares the JSON payload for the LLM API call.

        Args:
            phase: Prompt phase ("intent" or "commit_message")
            prompt_content: User prompt content

        Returns:
            JSON payload string or None if preparation failed
        """
        if phase not in LLM_PHASES:
            logger.error(f"Invalid phase '{phase}' provided to prepare_payload.")
            return None

        system_prompt = self.config.get(f"{phase}_prompt", "")
        if not system_prompt:
            logger.error(f"No system prompt configured for phase '{phase}'.")
            return None

        final_system_prompt = format_template_string(system_prompt, **get_current_context())
        return self._build_json_payload(final_system_prompt, prompt_content)

    def _build_json_payload(self, system_prompt: str, user_prompt: str) -> Optional[str]:
        """Build the final JSON payload from template and prompts."""
        payload_data_str = ""
        try:
            with open(self.payload_file, 'r') as f:
                payload_template = f.read()

            # json.dumps escapes the content for use inside JSON string values
            escaped_system_prompt = json.dumps(system_prompt.strip())[1:-1]
            escaped_user_prompt = json.dumps(user_prompt.strip())[1:-1]
            escaped_model = json.dumps(self.config.get("model", DEFAULT_MODEL))[1:-1]

            payload_data_str = payload_template.replace("<system_prompt>", escaped_system_prompt)
            payload_data_str = payload_data_str.replace("<user_prompt>", escaped_user_prompt)
            payload_data_str = payload_data_str.replace("<model_name>", escaped_model)

            json.loads(payload_data_str)
            return payload_data_str

        except FileNotFoundError:
            logger.error(f"{self.payload_file} not found.")
            return None
        except json.JSONDecodeError as e:
            logger.error(f"{self.payload_file} (after substitutions) is not valid JSON: {e}.")
            logger.debug(f"Problematic payload string before JSON parsing: {payload_data_str}")
            return None


def create_payload_builder(config: Dict[str, Any], payload_file: Path) -> PayloadBuilder:
    """Create a configured payload builder instance."""
    return PayloadBuilder(config, payload_file)
