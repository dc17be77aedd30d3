from pathlib import Path

import pytest

_BOUND_TEST_VARS = (
    "NUMBER",
    "NUMBER8",
    "NUMBER16",
    "NUMBER32",
    "NUMBER64",
    "STRING",
    "BOOL",
    "PTR_BOOL",
    "TIMEOUT",
    "APP_NAME",
    "APP_DEBUG",
    "APP_WORKERS",
    "APP_TIMEOUT",
    "APP_GRACE",
)


def pytest_configure(config) -> None:
    # Register marker in code so alternate test harnesses without pytest.ini stay consistent.
    config.addinivalue_line(
        "markers",
        "boundary: pins accepted edge-case behavior (e.g. integer wraparound)",
    )


@pytest.fixture
def data_dir() -> Path:
    return Path(__file__).resolve().parent / "data"


@pytest.fixture(autouse=True)
def _clear_bound_env(monkeypatch) -> None:
    for name in _BOUND_TEST_VARS:
        monkeypatch.delenv(name, raising=False)
