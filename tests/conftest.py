import json

import pytest

_ENV_VARS = (
    "GOOGLE_APPLICATION_CREDENTIALS",
    "PROM_PUSHGW_URL",
    "PROM_PUSHGW_JOB",
    "CLOUDQUERY_ENABLE_EMITTER",
    "CLOUDQUERY_DEBUG_ECHO",
    "CLOUDQUERY_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def split_fragments(text: str) -> list:
    """Parse concatenated JSON documents one by one."""
    decoder = json.JSONDecoder()
    docs, pos = [], 0
    while pos < len(text):
        doc, pos = decoder.raw_decode(text, pos)
        docs.append(doc)
    return docs


@pytest.fixture
def fragments():
    return split_fragments
