import pytest

from meterbill.registry import TariffRegistry

SPANISH_WINDOWS = [
    (1, 10, 14),
    (1, 18, 22),
    (2, 8, 10),
    (2, 14, 18),
    (2, 22, 0),
    (3, 0, 8),
]


@pytest.fixture
def time_windows():
    return list(SPANISH_WINDOWS)


@pytest.fixture
def empty_registry():
    return TariffRegistry([], 0)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep config lookups away from the repository and the user's home."""
    monkeypatch.delenv("METERBILL_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
