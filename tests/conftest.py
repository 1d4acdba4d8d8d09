import pytest
from fastapi.testclient import TestClient

from app import app
from settings import get_root


@pytest.fixture
def root(tmp_path):
    base = tmp_path / "served"
    base.mkdir()
    return base.resolve()


@pytest.fixture
def client(root):
    app.dependency_overrides[get_root] = lambda: root
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def write(root):
    """Create a file under the root, making parent directories as needed."""
    def _write(rel: str, data: bytes = b""):
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        return target
    return _write
