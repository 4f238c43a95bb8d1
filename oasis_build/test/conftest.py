from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

from oasis_build.core.config import BackendConfig, BuildConfig, FrontendConfig

FAKE_NPM = """\
import sys
from pathlib import Path

if sys.argv[1] == "install":
    Path("node_modules").mkdir(exist_ok=True)
elif sys.argv[1] == "build":
    out = Path("public")
    (out / "js").mkdir(parents=True, exist_ok=True)
    (out / "css" / "themes").mkdir(parents=True, exist_ok=True)
    (out / "index.html").write_text("<html>oasis</html>")
    (out / "js" / "app.js").write_text("console.log('oasis');")
    (out / "css" / "themes" / "dark.css").write_bytes(b"body{color:#fff}\\x00\\xff")
"""

FAKE_CARGO = """\
import os
import sys
from pathlib import Path

if os.environ.get("FAKE_CARGO_EXIT"):
    sys.stderr.write("error[E0425]: cannot find value\\n")
    sys.exit(int(os.environ["FAKE_CARGO_EXIT"]))

args = sys.argv[1:]
out = Path("target")
windows = sys.platform.startswith("win")
if "--target" in args:
    triple = args[args.index("--target") + 1]
    out = out / triple
    windows = "windows" in triple
out = out / "release"
out.mkdir(parents=True, exist_ok=True)
binary = out / ("oasis.exe" if windows else "oasis")
binary.write_bytes(b"\\x7fELF fake oasis binary")
os.chmod(binary, 0o644)
"""


@pytest.fixture
def fake_project(tmp_path: Path) -> Path:
    """A project root with scripted stand-ins for npm and cargo."""
    root = tmp_path / "project"
    frontend = root / "frontend"
    backend = root / "backend"
    frontend.mkdir(parents=True)
    (backend / "assets").mkdir(parents=True)
    (frontend / "fake_npm.py").write_text(FAKE_NPM, encoding="utf-8")
    (backend / "fake_cargo.py").write_text(FAKE_CARGO, encoding="utf-8")
    (backend / "assets" / "oasis.conf.sample").write_text(
        "# Oasis server config\nip = 0.0.0.0\nport = 8000\n", encoding="utf-8"
    )
    return root


@pytest.fixture
def fake_config() -> BuildConfig:
    return BuildConfig(
        frontend=FrontendConfig(
            install=(sys.executable, "fake_npm.py", "install"),
            build=(sys.executable, "fake_npm.py", "build"),
        ),
        backend=BackendConfig(build=(sys.executable, "fake_cargo.py", "build", "--release")),
    )


@pytest.fixture
def tree_snapshot() -> Callable[[Path], dict[str, bytes | None]]:
    """Map every path under a root to its bytes (None for directories)."""

    def take(root: Path) -> dict[str, bytes | None]:
        return {
            p.relative_to(root).as_posix(): None if p.is_dir() else p.read_bytes()
            for p in sorted(root.rglob("*"))
        }

    return take
