from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

import pytest

from oasis_build.core.result import Err, Ok
from oasis_build.output.console import MockConsole, Style
from oasis_build.services.build_errors import (
    ArtifactMissing,
    CommandFailed,
    CopyFailed,
    PermissionFailed,
)
from oasis_build.services.executor import StepExecutor
from oasis_build.services.steps import CopyTree, RunCommand, SetPermissions

PY = sys.executable


def test_runs_steps_in_order(tmp_path: Path) -> None:
    console = MockConsole()
    (tmp_path / "src").mkdir()
    steps = [
        RunCommand("Write", (PY, "-c", "open('a.txt', 'w').write('a')"), tmp_path / "src"),
        CopyTree("Stage", tmp_path / "src" / "a.txt", tmp_path / "out" / "a.txt"),
    ]

    result = StepExecutor(console=console).execute(steps)

    assert result == Ok(None)
    assert (tmp_path / "out" / "a.txt").read_text() == "a"
    headers = [o.message for o in console.outputs if o.style == Style.HEADER]
    assert headers == ["[1/2] Write", "[2/2] Stage"]


def test_stops_at_first_failure(tmp_path: Path) -> None:
    steps = [
        RunCommand("Fail", (PY, "-c", "import sys; sys.exit(2)"), tmp_path),
        RunCommand("Never", (PY, "-c", "open('ran', 'w')"), tmp_path),
    ]

    result = StepExecutor(console=MockConsole()).execute(steps)

    assert isinstance(result, Err)
    assert result.error == CommandFailed("Fail", steps[0].argv, 2)
    assert not (tmp_path / "ran").exists()


def test_launch_failure(tmp_path: Path) -> None:
    step = RunCommand("Build frontend", ("nonexistent_npm_12345", "run", "build"), tmp_path)

    result = StepExecutor(console=MockConsole()).execute([step])

    assert isinstance(result, Err)
    assert isinstance(result.error, CommandFailed)
    assert result.error.returncode == -1
    assert result.error.detail


def test_missing_required_artifact(tmp_path: Path) -> None:
    step = CopyTree("Stage backend binary", tmp_path / "oasis", tmp_path / "out" / "oasis")

    result = StepExecutor(console=MockConsole()).execute([step])

    assert result == Err(ArtifactMissing("Stage backend binary", tmp_path / "oasis"))
    assert not (tmp_path / "out").exists()


def test_missing_optional_artifact_warns(tmp_path: Path) -> None:
    console = MockConsole()
    step = CopyTree("Stage extras", tmp_path / "README", tmp_path / "out", required=False)

    assert StepExecutor(console=console).execute([step]) == Ok(None)
    assert any(o.style == Style.WARNING for o in console.outputs)


def test_copy_failure(tmp_path: Path) -> None:
    src = tmp_path / "oasis.conf.sample"
    src.write_text("port = 8000")
    (tmp_path / "blocker").write_text("file where a dir is needed")
    step = CopyTree("Stage sample configuration", src, tmp_path / "blocker" / "x" / "conf")

    result = StepExecutor(console=MockConsole()).execute([step])

    assert isinstance(result, Err)
    assert isinstance(result.error, CopyFailed)
    assert result.error.source == src


def test_set_permissions_missing_file(tmp_path: Path) -> None:
    result = StepExecutor(console=MockConsole()).execute(
        [SetPermissions("Make backend executable", tmp_path / "oasis")]
    )

    assert isinstance(result, Err)
    assert isinstance(result.error, PermissionFailed)


@pytest.mark.skipif(sys.platform.startswith("win"), reason="POSIX permission bits")
def test_set_permissions(tmp_path: Path) -> None:
    binary = tmp_path / "oasis"
    binary.write_bytes(b"bin")
    os.chmod(binary, 0o644)

    StepExecutor(console=MockConsole()).execute([SetPermissions("chmod", binary)])

    assert stat.S_IMODE(binary.stat().st_mode) == 0o755


def test_dry_run_touches_nothing(tmp_path: Path) -> None:
    console = MockConsole()
    steps = [
        RunCommand("Write", (PY, "-c", "open('a.txt', 'w')"), tmp_path),
        CopyTree("Stage", tmp_path / "missing", tmp_path / "out"),
        SetPermissions("chmod", tmp_path / "missing"),
    ]

    result = StepExecutor(console=console, dry_run=True).execute(steps)

    assert result == Ok(None)
    assert list(tmp_path.iterdir()) == []
    assert console.count(Style.HEADER) == 3
    assert console.count(Style.DIM) == 3


@pytest.mark.skipif(sys.platform.startswith("win"), reason="symlinks need privileges")
def test_dangling_entry_in_assets_fails_the_copy(tmp_path: Path) -> None:
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<html></html>")
    (public / "app.js").symlink_to(tmp_path / "missing.js")
    step = CopyTree("Stage frontend assets", public, tmp_path / "release" / "public")

    result = StepExecutor(console=MockConsole()).execute([step])

    assert isinstance(result, Err)
    assert isinstance(result.error, CopyFailed)
    assert result.error.label == "Stage frontend assets"
