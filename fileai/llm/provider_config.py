"""Runtime configuration for the analysis pipeline.

Architectural role:
    Resolves models, endpoint, prompts and credential once into an immutable
    `AnalysisConfig` that is handed to `fileai.core.engine.Dispatcher` at
    construction time. Nothing reads process-wide state during dispatch.

Resolution order:
    1. The nearest `.env` at or above the working directory (via
       `python-dotenv`, never overriding variables already set).
    2. Process environment (`FILEAI_*`, `OPENAI_API_KEY`).
    3. Key file `config/openai.key` for the API key.
    4. Built-in defaults below.

Failure behavior:
    - Missing API key is represented as `None`; the dispatcher reports it as
      `MissingCredentialError` before any network call.
    - Non-numeric values for numeric settings raise `ConfigError`.
    - An unreadable key file or prompt file raises `ConfigError`.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from fileai.core.errors import ConfigError
from fileai.prompting.prompt_store import DEFAULT_PROMPTS, PromptSet, load_prompts


# Chat-completions endpoint and model defaults.
DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_TEXT_MODEL = "gpt-4-turbo"
DEFAULT_VISION_MODEL = "gpt-4-turbo"

DEFAULT_KEY_FILE = "config/openai.key"
DEFAULT_PROMPTS_PATH = "prompts/prompts.json"

DEFAULT_TIMEOUT_SECONDS = 120.0
DEFAULT_MAX_TEXT_TOKENS = 128000
DEFAULT_IMAGE_MAX_TOKENS = 300

# System instruction framing every text summary request.
SYSTEM_MESSAGE = "You are a helpful assistant."


@dataclass(frozen=True)
class AnalysisConfig:
    """Immutable configuration bundle for one process.

    Attributes:
        api_key: Bearer credential, `None` when not configured.
        api_url: Chat-completions endpoint.
        text_model: Model used for text summaries.
        vision_model: Vision-capable model used for image descriptions.
        system_message: System role content for text requests.
        prompts: Read-only mapping of content kind -> `PromptSet`.
        timeout_seconds: Per-request transport timeout.
        max_text_tokens: Estimated token ceiling for text payloads.
        image_max_tokens: Completion cap sent with image requests.
    """

    api_key: str | None = None
    api_url: str = DEFAULT_API_URL
    text_model: str = DEFAULT_TEXT_MODEL
    vision_model: str = DEFAULT_VISION_MODEL
    system_message: str = SYSTEM_MESSAGE
    prompts: Mapping[str, PromptSet] = field(default_factory=lambda: DEFAULT_PROMPTS)
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_text_tokens: int = DEFAULT_MAX_TEXT_TOKENS
    image_max_tokens: int | None = DEFAULT_IMAGE_MAX_TOKENS

    def prompt_for(self, kind: str) -> PromptSet:
        return self.prompts.get(kind) or DEFAULT_PROMPTS.get(kind, PromptSet())


def load_key(path):
    """Load API key from environment override or key file.

    Resolution order:
        1. Environment variable inferred from file stem (for example
           `config/openai.key` -> `OPENAI_API_KEY`).
        2. Raw file contents at `path`.

    Edge cases:
        - `None` path returns `None`.
        - Missing or blank file returns `None`.

    Raises:
        ConfigError: The key file exists but is a directory, unreadable or
            not UTF-8.
    """
    if not path:
        return None
    key_name = os.path.splitext(os.path.basename(path))[0].upper() + "_API_KEY"
    env_value = os.getenv(key_name, "").strip()
    if env_value:
        return env_value
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip() or None
    except (OSError, UnicodeDecodeError) as err:
        raise ConfigError(f"failed to read key file {path}: {err}") from err


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError as err:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from err
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def load_config(dotenv: bool = True) -> AnalysisConfig:
    """Resolve the process configuration.

    Args:
        dotenv: Whether to read a `.env` file first.

    Raises:
        ConfigError: On unreadable key or prompt file, malformed prompt file or
            numeric settings.
    """
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    prompts_path = os.getenv("FILEAI_PROMPTS_PATH", DEFAULT_PROMPTS_PATH)

    return AnalysisConfig(
        api_key=load_key(os.getenv("FILEAI_KEY_FILE", DEFAULT_KEY_FILE)),
        api_url=os.getenv("FILEAI_API_URL", DEFAULT_API_URL),
        text_model=os.getenv("FILEAI_TEXT_MODEL", DEFAULT_TEXT_MODEL),
        vision_model=os.getenv("FILEAI_VISION_MODEL", DEFAULT_VISION_MODEL),
        system_message=os.getenv("FILEAI_SYSTEM_MESSAGE", SYSTEM_MESSAGE),
        prompts=load_prompts(prompts_path),
        timeout_seconds=_env_number("FILEAI_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS, float),
        max_text_tokens=_env_number("FILEAI_MAX_TEXT_TOKENS", DEFAULT_MAX_TEXT_TOKENS, int),
        image_max_tokens=_env_number("FILEAI_IMAGE_MAX_TOKENS", DEFAULT_IMAGE_MAX_TOKENS, int),
    )
