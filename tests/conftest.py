import io
import logging
import shutil

import pytest
from dulwich import porcelain

from repovol.capability import get_capabilities


def pytest_collection_modifyitems(config, items):
    if shutil.which("git") is not None:
        return
    skip_git = pytest.mark.skip(reason="git executable not available")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_git)


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("repovol")
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream

    logger.removeHandler(handler)
    logger.setLevel(previous_level)
    log_stream.close()


@pytest.fixture(autouse=True)
def fresh_capabilities():
    """Every test starts without a cached capabilities."""
    get_capabilities.cache_clear()
    yield
    get_capabilities.cache_clear()


def commit_file(repo_dir, name: str, content: str, message: str) -> str:
    """Write ``name`` in ``repo_dir`` and commit it; returns the commit hash."""
    path = repo_dir / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    porcelain.add(str(repo_dir), paths=[str(path)])
    commit_sha = porcelain.commit(
        str(repo_dir),
        message=message.encode("utf-8"),
        author=b"Test <test@test>",
        committer=b"Test <test@test>",
    )
    return commit_sha.decode("ascii")


class Upstream:
    """A local repository standing in for a remote."""

    def __init__(self, path):
        self.path = path
        self.commits = []

    @property
    def uri(self) -> str:
        return str(self.path)

    def commit(self, name: str, content: str, message: str = "update") -> str:
        sha = commit_file(self.path, name, content, message)
        self.commits.append(sha)
        return sha


@pytest.fixture
def upstream(tmp_path):
    """Upstream repository with one commit adding hello.txt."""
    repo_dir = tmp_path / "upstream"
    repo_dir.mkdir()
    porcelain.init(str(repo_dir))
    repo = Upstream(repo_dir)
    repo.commit("hello.txt", "hello", "initial commit")
    return repo
