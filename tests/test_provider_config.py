import dataclasses
import json

import pytest

from fileai.core.errors import ConfigError
from fileai.llm.provider_config import (
    DEFAULT_API_URL,
    DEFAULT_MAX_TEXT_TOKENS,
    SYSTEM_MESSAGE,
    load_config,
    load_key,
)
from fileai.prompting.prompt_store import DEFAULT_PROMPTS, load_prompts


def _write_prompts(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_defaults_without_environment(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    config = load_config(dotenv=False)

    assert config.api_key is None
    assert config.api_url == DEFAULT_API_URL
    assert config.system_message == SYSTEM_MESSAGE
    assert config.max_text_tokens == DEFAULT_MAX_TEXT_TOKENS
    assert config.prompts is DEFAULT_PROMPTS


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("FILEAI_TEXT_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("FILEAI_VISION_MODEL", "gpt-4o")
    monkeypatch.setenv("FILEAI_TIMEOUT_SECONDS", "15.5")
    monkeypatch.setenv("FILEAI_IMAGE_MAX_TOKENS", "500")

    config = load_config(dotenv=False)

    assert config.api_key == "sk-env"
    assert config.text_model == "gpt-4o-mini"
    assert config.vision_model == "gpt-4o"
    assert config.timeout_seconds == 15.5
    assert config.image_max_tokens == 500


def test_dotenv_file_is_read(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("OPENAI_API_KEY=sk-dotenv\nFILEAI_TEXT_MODEL=from-dotenv\n")

    config = load_config()

    assert config.api_key == "sk-dotenv"
    assert config.text_model == "from-dotenv"


def test_key_file_fallback(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "openai.key").write_text("sk-from-file\n")

    assert load_key("config/openai.key") == "sk-from-file"
    assert load_config(dotenv=False).api_key == "sk-from-file"


def test_key_env_wins_over_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "openai.key").write_text("sk-from-file")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

    assert load_key("config/openai.key") == "sk-env"


def test_empty_key_file_is_missing(tmp_path):
    key = tmp_path / "openai.key"
    key.write_text("  \n")
    assert load_key(str(key)) is None
    assert load_key(None) is None


@pytest.mark.parametrize("value", ["abc", "0", "-3"])
def test_invalid_numeric_setting_is_config_error(tmp_path, monkeypatch, value):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FILEAI_MAX_TEXT_TOKENS", value)

    with pytest.raises(ConfigError):
        load_config(dotenv=False)


def test_config_is_immutable(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = load_config(dotenv=False)

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.api_key = "sk-late"
    with pytest.raises(TypeError):
        config.prompts["text"] = None


# ---------------------------------------------------------
# prompt store
# ---------------------------------------------------------

def test_prompt_file_overlays_defaults(tmp_path):
    path = _write_prompts(
        tmp_path / "prompts.json",
        {"prompts": {"text": {"summary": "TL;DR please", "description": "Outline it"}}},
    )

    prompts = load_prompts(path)

    assert prompts["text"].summary == "TL;DR please"
    assert prompts["text"].description == "Outline it"
    assert prompts["image"] == DEFAULT_PROMPTS["image"]


def test_prompts_path_from_environment(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = _write_prompts(
        tmp_path / "custom.json",
        {"prompts": {"image": {"description": "List the objects."}}},
    )
    monkeypatch.setenv("FILEAI_PROMPTS_PATH", path)

    config = load_config(dotenv=False)

    assert config.prompt_for("image").description == "List the objects."
    assert config.prompt_for("image").summary == ""


def test_missing_prompt_file_uses_defaults(tmp_path):
    assert load_prompts(str(tmp_path / "nope.json")) is DEFAULT_PROMPTS


def test_invalid_json_prompt_file(tmp_path):
    path = tmp_path / "prompts.json"
    path.write_text("{not json")

    with pytest.raises(ConfigError):
        load_prompts(str(path))


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"templates": {}},
        {"prompts": {"text": "Summarize"}},
        {"prompts": {"text": {"summary": 42}}},
    ],
)
def test_malformed_prompt_file(tmp_path, data):
    path = _write_prompts(tmp_path / "prompts.json", data)

    with pytest.raises(ConfigError):
        load_prompts(path)


def test_key_path_that_is_a_directory_is_config_error(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config" / "openai.key").mkdir(parents=True)

    with pytest.raises(ConfigError) as exc_info:
        load_config(dotenv=False)
    assert isinstance(exc_info.value.__cause__, OSError)


def test_non_utf8_key_file_is_config_error(tmp_path):
    key = tmp_path / "openai.key"
    key.write_bytes(b"sk-\xff\xfe")

    with pytest.raises(ConfigError):
        load_key(str(key))


def test_non_utf8_prompt_file_is_config_error(tmp_path):
    path = tmp_path / "prompts.json"
    path.write_bytes(b'{"prompts": {"text": {"summary": "\xff"}}}')

    with pytest.raises(ConfigError) as exc_info:
        load_prompts(str(path))
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
