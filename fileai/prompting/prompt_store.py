"""Prompt configuration loader.

Reads the per-content-kind prompt table from a JSON file:

    {"prompts": {"text":  {"summary": "...", "description": "..."},
                 "image": {"summary": "...", "description": "..."}}}

Failure behavior:
    - Missing file: built-in `DEFAULT_PROMPTS` are used.
    - Unreadable or non-UTF-8 file, invalid JSON or wrong shape: `ConfigError`.

The returned mapping is read-only.
"""

import json
import logging
import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from fileai.core.errors import ConfigError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromptSet:
    summary: str = ""
    description: str = ""


DEFAULT_PROMPTS = MappingProxyType({
    "text": PromptSet(
        summary="Summarize this content",
        description="Describe this content",
    ),
    "image": PromptSet(
        summary="Summarize this image",
        description="What's in this image?",
    ),
})


def _parse_prompt_set(kind: str, raw) -> PromptSet:
    if not isinstance(raw, dict):
        raise ConfigError(f"prompts.{kind} must be an object")

    values = {}
    for field in ("summary", "description"):
        value = raw.get(field, "")
        if not isinstance(value, str):
            raise ConfigError(f"prompts.{kind}.{field} must be a string")
        values[field] = value
    return PromptSet(**values)


def load_prompts(path: str) -> Mapping[str, PromptSet]:
    """Load prompts from `path`, overlaying them on the defaults.

    Kinds absent from the file keep their default `PromptSet`.
    """
    if not os.path.exists(path):
        logger.debug("Prompt file %s not found, using defaults", path)
        return DEFAULT_PROMPTS

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError) as err:
        raise ConfigError(f"failed to read prompt file {path}: {err}") from err
    except json.JSONDecodeError as err:
        raise ConfigError(f"invalid JSON in prompt file {path}: {err}") from err

    if not isinstance(data, dict) or not isinstance(data.get("prompts"), dict):
        raise ConfigError(f"prompt file {path} must contain a 'prompts' object")

    prompts = dict(DEFAULT_PROMPTS)
    for kind, raw in data["prompts"].items():
        prompts[kind] = _parse_prompt_set(kind, raw)

    logger.debug("Loaded prompts for %s from %s", sorted(prompts), path)
    return MappingProxyType(prompts)
