from __future__ import annotations

import pytest

import asserting.config as config
from asserting import TB, RecordingReporter


@pytest.fixture(autouse=True)
def clean_config(monkeypatch: pytest.MonkeyPatch):
    for key in (config.CONFIG_ENV_KEY, config.FATAL_ENV_KEY, config.WIDTH_ENV_KEY):
        monkeypatch.delenv(key, raising=False)
    yield
    config.set(None)


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def tb(reporter: RecordingReporter):
    return TB(reporter)
