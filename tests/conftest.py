import os

import pytest
from PIL import Image


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer credentials and overrides out of the tests."""
    for name in list(os.environ):
        if name.startswith("FILEAI_") or name == "OPENAI_API_KEY":
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def png_file(tmp_path):
    path = tmp_path / "picture.png"
    Image.new("RGBA", (1600, 400), (200, 30, 30, 128)).save(path, format="PNG")
    return path
