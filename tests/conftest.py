import os
from pathlib import Path

import pytest

# Set the environment variables before any other imports happen.
# This ensures that when config.py is imported, it loads config/test.yaml
os.environ["PREACHPOINT_ENV"] = "test"
os.environ["PREACHPOINT_CONFIG_DIR"] = str(Path(__file__).parents[1] / "config")

SAMPLE_KJV_PATH = Path(__file__).parent / "data" / "kjv_sample.json"


@pytest.fixture
def sample_kjv_path() -> Path:
    return SAMPLE_KJV_PATH


@pytest.fixture
def verse_store():
    from preachpoint.helpers.verse_store import VerseStore

    return VerseStore.from_json_file(SAMPLE_KJV_PATH)
