# =============================================================================
# vocab/config.py  —  Process configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads every setting the server needs from environment variables (a .env
#   file is loaded into the environment by main.py before this runs).
#
#   GEMINI_API_KEY        required — no key, no server
#   GEMINI_EXPAND_MODEL   model used by expand_vocab        (gemini-2.5-flash)
#   GEMINI_EXTRACT_MODEL  model used by extract_vocab_...   (gemini-2.5-flash)
#   EXPAND_MAX_TOKENS     output bound for one expansion    (2048)
#   EXTRACT_MAX_TOKENS    output bound for one extraction   (4096)
#   DEBUG                 "1" / "true" → DEBUG-level logging
#
# Settings is frozen: it is shared read-only by every tool call.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from vocab.errors import ConfigurationError

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_EXPAND_MAX_TOKENS = 2048
DEFAULT_EXTRACT_MAX_TOKENS = 4096


def is_debug_enabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    """True when DEBUG is set to "1" or "true"."""
    env = os.environ if environ is None else environ
    return env.get("DEBUG", "").strip().lower() in ("1", "true")


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Everything the pipelines need to know about their environment."""

    api_key: str
    expand_model: str = DEFAULT_MODEL
    extract_model: str = DEFAULT_MODEL
    expand_max_tokens: int = DEFAULT_EXPAND_MAX_TOKENS
    extract_max_tokens: int = DEFAULT_EXTRACT_MAX_TOKENS
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build Settings from the environment.

        Raises:
            ConfigurationError: GEMINI_API_KEY is missing, or a token bound
                is not a positive integer.
        """
        env = os.environ if environ is None else environ

        api_key = env.get("GEMINI_API_KEY", "").strip()
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY environment variable is required")

        return cls(
            api_key=api_key,
            expand_model=env.get("GEMINI_EXPAND_MODEL", "").strip() or DEFAULT_MODEL,
            extract_model=env.get("GEMINI_EXTRACT_MODEL", "").strip() or DEFAULT_MODEL,
            expand_max_tokens=_positive_int(env, "EXPAND_MAX_TOKENS", DEFAULT_EXPAND_MAX_TOKENS),
            extract_max_tokens=_positive_int(env, "EXTRACT_MAX_TOKENS", DEFAULT_EXTRACT_MAX_TOKENS),
            debug=is_debug_enabled(env),
        )

    def __repr__(self) -> str:
        # Keep the credential out of logs.
        return (
            f"Settings(expand_model={self.expand_model!r}, "
            f"extract_model={self.extract_model!r}, "
            f"expand_max_tokens={self.expand_max_tokens}, "
            f"extract_max_tokens={self.extract_max_tokens}, debug={self.debug})"
        )
