"""
Tests for mcmod.eula - the EULA agreement gate
"""

import asyncio
from pathlib import Path

import pytest

from mcmod.config import EulaConfig
from mcmod.errors import EulaNotAgreed
from mcmod.eula import EULA_PROMPT, ensure_eula_agreed, eula_path, is_eula_accepted

from conftest import FakeConsole


def _gate(project, auto_agree=False, console=None):
    asyncio.run(ensure_eula_agreed(project, EulaConfig(auto_agree=auto_agree), console))


def test_eula_path_is_under_forge_run(project) -> None:
    assert eula_path(project) == project.forge_root() / "run" / "eula.txt"


def test_accepted_file_skips_prompt_and_write(project) -> None:
    path = eula_path(project)
    path.write_text("#By changing the setting below\n  eula=true  \nfoo=bar\n", encoding="utf-8")
    before = path.read_bytes()
    console = FakeConsole()

    _gate(project, console=console)

    assert console.prompts == []
    assert console.lines == []
    assert path.read_bytes() == before


def test_gate_is_idempotent(project) -> None:
    path = eula_path(project)
    path.write_text("eula=true", encoding="utf-8")
    console = FakeConsole()

    _gate(project, console=console)
    _gate(project, console=console)

    assert console.prompts == []
    assert path.read_text(encoding="utf-8") == "eula=true"


@pytest.mark.parametrize("answer", ["y", "Y", "  y  "])
def test_prompt_yes_writes_file(project, answer: str) -> None:
    console = FakeConsole(answer)

    _gate(project, console=console)

    assert console.prompts == [EULA_PROMPT]
    assert eula_path(project).read_bytes() == b"eula=true"
    assert any("https://account.mojang.com/documents/minecraft_eula" in line for line in console.lines)
    assert any("MCMOD_EULA_AUTO_AGREE=true" in line for line in console.lines)


@pytest.mark.parametrize("answer", ["", "n", "yes", "no", None])
def test_prompt_other_answer_fails_without_write(project, answer) -> None:
    console = FakeConsole(answer)

    with pytest.raises(EulaNotAgreed):
        _gate(project, console=console)

    assert not eula_path(project).exists()


def test_file_without_accepting_line_prompts_again(project) -> None:
    path = eula_path(project)
    path.write_text("eula=false\n", encoding="utf-8")
    console = FakeConsole("n")

    with pytest.raises(EulaNotAgreed):
        _gate(project, console=console)

    assert console.prompts == [EULA_PROMPT]
    assert path.read_text(encoding="utf-8") == "eula=false\n"


def test_auto_agree_writes_without_prompt(project) -> None:
    path = eula_path(project)
    path.write_text("eula=false\n", encoding="utf-8")
    console = FakeConsole()

    _gate(project, auto_agree=True, console=console)

    assert console.prompts == []
    assert path.read_bytes() == b"eula=true"
    assert "Automatically agreeing" in console.lines[0]


def test_missing_run_directory_propagates(project) -> None:
    (project.forge_root() / "run").rmdir()

    with pytest.raises(OSError):
        _gate(project, auto_agree=True, console=FakeConsole())


def test_is_eula_accepted_requires_exact_line(tmp_path: Path) -> None:
    path = tmp_path / "eula.txt"
    assert is_eula_accepted(path) is False

    path.write_text("eula=TRUE\n# eula=true\n", encoding="utf-8")
    assert is_eula_accepted(path) is False

    path.write_text("\teula=true\r\n", encoding="utf-8")
    assert is_eula_accepted(path) is True


@pytest.mark.parametrize("value,expected", [
    ("true", True),
    ("1", True),
    ("TRUE", False),
    ("yes", False),
    ("", False),
])
def test_env_override_values(value: str, expected: bool) -> None:
    assert EulaConfig.from_env({"MCMOD_EULA_AUTO_AGREE": value}).auto_agree is expected


def test_env_override_unset() -> None:
    assert EulaConfig.from_env({}).auto_agree is False


def test_undecodable_file_raises_os_error(project) -> None:
    eula_path(project).write_bytes(b"#\xff\xfe\neula=true\n")

    with pytest.raises(OSError, match="eula.txt"):
        _gate(project, auto_agree=True, console=FakeConsole())


def test_only_newlines_split_lines(tmp_path: Path) -> None:
    path = tmp_path / "eula.txt"

    path.write_bytes(b"x\x0ceula=true\n")
    assert is_eula_accepted(path) is False

    path.write_bytes(b"x\xe2\x80\xa8eula=true\n")
    assert is_eula_accepted(path) is False

    path.write_bytes(b"# header\r\neula=true\r\n")
    assert is_eula_accepted(path) is True


def test_default_config_reads_environment(project, monkeypatch) -> None:
    monkeypatch.setenv("MCMOD_EULA_AUTO_AGREE", "1")
    console = FakeConsole()

    asyncio.run(ensure_eula_agreed(project, console=console))

    assert console.prompts == []
    assert eula_path(project).read_bytes() == b"eula=true"


def test_default_config_without_override_prompts(project, monkeypatch) -> None:
    monkeypatch.setenv("MCMOD_EULA_AUTO_AGREE", "TRUE")
    console = FakeConsole("n")

    with pytest.raises(EulaNotAgreed):
        asyncio.run(ensure_eula_agreed(project, console=console))

    assert console.prompts == [EULA_PROMPT]
