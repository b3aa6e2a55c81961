"""OpenAI client configuration for the brand strategy generator."""

import os
from typing import Callable, Optional

import httpx
from openai import OpenAI
from dotenv import load_dotenv

load_dotenv()

OPENAI_API_KEY_ENV = "OPENAI_API_KEY"

ClientFactory = Callable[[str], OpenAI]


def get_openai_api_key() -> Optional[str]:
    """Return the configured OpenAI key, or None when it is missing or blank."""
    return os.getenv(OPENAI_API_KEY_ENV) or None


def build_openai_client(api_key: str, *, http_client: Optional[httpx.Client] = None) -> OpenAI:
    # Single attempt per request: the SDK retries twice unless told otherwise.
    return OpenAI(api_key=api_key, max_retries=0, http_client=http_client)


def get_openai_client_factory() -> ClientFactory:
    return build_openai_client


__all__ = [
    "ClientFactory",
    "OPENAI_API_KEY_ENV",
    "build_openai_client",
    "get_openai_api_key",
    "get_openai_client_factory",
]
