import sys
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()

from skillsync.models import Platform  # noqa: E402
from skillsync.paths import platform_env_var  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("SKILLSYNC_HOME", str(tmp_path / ".skillsync"))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    for platform in Platform:
        monkeypatch.delenv(platform_env_var(platform), raising=False)


@pytest.fixture
def write_skill():
    def _write(path: Path, body: str, name: str | None = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        text = body
        if name is not None:
            text = f"---\nname: {name}\n---\n{body}"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def claude_root(tmp_path: Path) -> Path:
    return tmp_path / ".claude" / "skills"


@pytest.fixture
def cursor_root(tmp_path: Path) -> Path:
    return tmp_path / ".cursor" / "skills"


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / ".skillsync" / "permissions.yaml"


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            env.setdefault("SKILLSYNC_HOME", str(tmp_path / ".skillsync"))
            env.setdefault("COLUMNS", "160")
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()
