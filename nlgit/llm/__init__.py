"""LLM integration for nlgit."""

from .client import LLMClient, create_llm_client
from .payload import PayloadBuilder, create_payload_builder
from .parsers import (
    clean_commit_message,
    extract_response_content,
    parse_json_object,
    strip_think_blocks,
)

__all__ = [
    "LLMClient",
    "create_llm_client",
    "PayloadBuilder",
    "create_payload_builder",
    "clean_commit_message",
    "extract_response_content",
    "parse_json_object",
    "strip_think_blocks",
]
