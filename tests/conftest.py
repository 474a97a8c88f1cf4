"""
Shared fixtures for mcmod tests.
"""

from pathlib import Path
from typing import Optional

import pytest

from mcmod.project import Project


class FakeConsole:
    """Console that records output and replays scripted answers."""

    def __init__(self, *answers: Optional[str]):
        self.answers = list(answers)
        self.lines: list[str] = []
        self.prompts: list[str] = []

    def write_line(self, text: str) -> None:
        self.lines.append(text)

    def prompt(self, text: str) -> Optional[str]:
        self.prompts.append(text)
        if not self.answers:
            return None
        return self.answers.pop(0)


def write_project(root: Path, config: str = "forge_dir: forge\n") -> Path:
    """Create a minimal project with a Forge workspace under root."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "mcmod.yaml").write_text(config, encoding="utf-8")
    (root / "forge" / "run").mkdir(parents=True, exist_ok=True)
    (root / "src").mkdir(exist_ok=True)
    return root


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    return write_project(tmp_path / "project")


@pytest.fixture
def project(project_dir: Path) -> Project:
    return Project.new_in(project_dir)
