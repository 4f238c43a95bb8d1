from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class LayoutFailed:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class CommandFailed:
    label: str
    command: tuple[str, ...]
    returncode: int
    detail: str = ""


@dataclass(frozen=True, slots=True)
class ArtifactMissing:
    label: str
    path: Path


@dataclass(frozen=True, slots=True)
class CopyFailed:
    label: str
    source: Path
    reason: str


@dataclass(frozen=True, slots=True)
class PermissionFailed:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class PrereqMissing:
    name: str
    hint: str


BuildError = (
    LayoutFailed | CommandFailed | ArtifactMissing | CopyFailed | PermissionFailed | PrereqMissing
)
