from __future__ import annotations

import pytest

DIRECTUS_ENV_KEYS = (
    "DIRECTUS_URL",
    "DIRECTUS_TOKEN",
    "DIRECTUS_TIMEOUT_SECONDS",
    "DIRECTUS_VERIFY_SSL",
)


@pytest.fixture()
def clean_directus_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    # setenv first so teardown removes whatever load_dotenv writes later
    for key in DIRECTUS_ENV_KEYS:
        monkeypatch.setenv(key, "placeholder")
        monkeypatch.delenv(key)
    return monkeypatch
