import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from layered_config import ConfigLoader, MemoryEnvironment  # noqa: E402


@pytest.fixture
def memory_env():
    return MemoryEnvironment()


@pytest.fixture
def loader(memory_env):
    return ConfigLoader(environment=memory_env)


@pytest.fixture
def write(tmp_path):
    """Write ``text`` to ``tmp_path / name`` and return the path."""

    def _write(name, text):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
