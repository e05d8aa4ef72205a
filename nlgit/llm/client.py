"""LLM client for API communication in nlgit."""

import json
from typing import Any, Dict, Optional
from pathlib import Path

import requests

from ..constants import DEFAULT_REQUEST_TIMEOUT
from ..utils.logging import logger
from .parsers import extract_response_content
from .payload import PayloadBuilder, create_payload_builder


class LLMClient:
    """An explicitly owned LLM session.

    The application creates one client, passes it to everything that needs
    text generation, and closes it on shutdown.
    """

    def __init__(self, config: Dict[str, Any], payload_file: Path, response_path_file: Path):
        """Initialize LLM client.

        Args:
            config: Application configuration
            payload_file: Path to payload template file
            response_path_file: Path to response path template file
        """
        self.config = config
        self.response_path_file = response_path_file
        self.endpoint = config.get("endpoint", "")
        self.api_key = config.get("api_key")
        self.request_timeout = config.get("request_timeout", DEFAULT_REQUEST_TIMEOUT)
        self.payload_builder: PayloadBuilder = create_payload_builder(config, payload_file)
        self._session: Optional[requests.Session] = None
        self._response_path: Optional[str] = None

    @property
    def session(self) -> requests.Session:
        """The HTTP session, created on first use and reused afterwards."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({"Content-Type": "application/json"})
            if self.api_key:
                self._session.headers["Authorization"] = f"Bearer {self.api_key}"
        return self._session

    def generate(self, phase: str, prompt: str) -> Optional[str]:
        """Build the payload for a phase and return the model's reply text."""
        payload = self.payload_builder.prepare_payload(phase, prompt)
        if not payload:
            logger.error(f"Failed to prepare payload for {phase} phase")
            return None
        return self.send_request(payload)

    def send_request(self, payload: str) -> Optional[str]:
        """Send request to LLM API and extract response content.

        Args:
            payload: JSON payload string

        Returns:
            Extracted response content or None if failed
        """
        if not self.endpoint:
            logger.error("No LLM endpoint configured")
            return None

        response_data = self._make_api_call(payload)
        if response_data is None:
            return None

        response_path = self._get_response_path()
        if not response_path:
            return None

        content = extract_response_content(response_data, response_path)
        if content is None:
            logger.error(f"Response path '{response_path}' matched nothing in the LLM response.")
            logger.debug(f"Raw response: {response_data}")
        return content

    def _make_api_call(self, payload: str) -> Optional[Any]:
        """POST the payload and decode the JSON body."""
        logger.debug(f"Making LLM API call to {self.endpoint}")
        try:
            response = self.session.post(self.endpoint, data=payload.encode("utf-8"),
                                         timeout=self.request_timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"LLM API request failed: {e}")
            return None

        try:
            return json.loads(response.text)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse LLM response as JSON: {e}")
            logger.debug(f"Raw response: {response.text}")
            return None

    def _get_response_path(self) -> Optional[str]:
        """Read the first non-comment line of the response path file."""
        if self._response_path:
            return self._response_path

        try:
            lines = self.response_path_file.read_text().splitlines()
        except OSError as e:
            logger.error(f"Error reading response path file {self.response_path_file}: {e}")
            return None

        for line in lines:
            line = line.strip()
            if line and not line.startswith('#'):
                logger.debug(f"Using response path: {line}")
                self._response_path = line
                return line

        logger.error(f"No valid response path found in {self.response_path_file}.")
        return None

    def close(self) -> None:
        """Dispose of the HTTP session."""
        if self._session is not None:
            self._session.close()
            self._session = None


def create_llm_client(config: Dict[str, Any], payload_file: Path,
                      response_path_file: Path) -> LLMClient:
    """Create a configured LLM client instance."""
    return LLMClient(config, payload_file, response_path_file)
