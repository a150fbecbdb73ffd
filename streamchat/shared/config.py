"""Environment-driven settings for the chat client."""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from streamchat.exceptions import ConfigurationError

API_KEY_ENV = "DEEPINFRA_API_KEY"
DEFAULT_BASE_URL = "https://api.deepinfra.com/v1/openai"
DEFAULT_MODEL = "deepseek-ai/DeepSeek-R1"
DEFAULT_MAX_TOKENS = 10000
DEFAULT_TIMEOUT = 120.0

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ClientSettings:
    """Connection and request settings for ``ChatCompletionClient``.

    Example:
        settings = ClientSettings.from_env()
        settings = settings.with_overrides(model="meta-llama/Llama-3.3-70B-Instruct")
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout: float = DEFAULT_TIMEOUT
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientSettings":
        """Build settings from environment variables.

        Raises ConfigurationError when the API key is missing or a numeric
        setting cannot be parsed.
        """
        env = os.environ if environ is None else environ

        api_key = env.get(API_KEY_ENV, "").strip()
        if not api_key:
            raise ConfigurationError(
                f"API key is missing. Set {API_KEY_ENV} environment variable."
            )

        return cls(
            api_key=api_key,
            base_url=env.get("STREAMCHAT_BASE_URL", DEFAULT_BASE_URL),
            model=env.get("STREAMCHAT_MODEL", DEFAULT_MODEL),
            max_tokens=_parse_number(env, "STREAMCHAT_MAX_TOKENS", int, DEFAULT_MAX_TOKENS),
            timeout=_parse_number(env, "STREAMCHAT_TIMEOUT", float, DEFAULT_TIMEOUT),
            debug=env.get("STREAMCHAT_DEBUG", "").strip().lower() in _TRUTHY,
        )

    def with_overrides(self, **overrides) -> "ClientSettings":
        """Return a copy with the non-None overrides applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _parse_number(env: Mapping[str, str], name: str, kind, default):
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = kind(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value
