import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from codeintel import cli
from codeintel.version import get_version

from helpers import write_file

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)


def sample_codebase(root: Path) -> Path:
    write_file(root, "src/Repository.php", "<?php\n\ninterface Repository\n{\n}\n")
    write_file(
        root,
        "src/UserRepository.php",
        "<?php\n\nclass UserRepository implements Repository\n{\n"
        "    public function find(int $id): array\n    {\n        return [];\n    }\n}\n",
    )
    write_file(root, "vendor/lib.php", "<?php\nclass Lib {}\n")
    return root


def test_chunk_command_writes_chunks_and_manifest(tmp_path: Path) -> None:
    codebase = sample_codebase(tmp_path / "project")
    output = tmp_path / "out"
    result = runner.invoke(
        cli.app,
        ["chunk", str(codebase), "--language", "php", "--output", str(output)],
    )
    assert result.exit_code == 0, result.output
    assert "Created 1 chunks from 2 files" in result.output

    chunk_file = output / "chunk_000.md"
    assert chunk_file.is_file()
    assert "class UserRepository implements Repository" in chunk_file.read_text()

    manifest = json.loads((output / "manifest.json").read_text())
    assert len(manifest) == 1
    assert manifest[0]["path"] == "chunk_000.md"
    assert manifest[0]["files"] == ["src/UserRepository.php", "src/Repository.php"]
    assert "content" not in manifest[0]


def test_chunk_command_limits_chunk_count(tmp_path: Path) -> None:
    for idx in range(4):
        write_file(tmp_path, f"mod_{idx}.py", f"print({idx})\n" * 30)
    result = runner.invoke(
        cli.app,
        ["chunk", str(tmp_path), "-l", "python", "--chunk-size", "50", "--max-chunks", "2"],
    )
    assert result.exit_code == 0, result.output
    assert "Limiting to 2 chunks out of 4" in result.output
    assert "Created 2 chunks" in result.output


def test_chunk_command_rejects_missing_directory(tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["chunk", str(tmp_path / "missing")])
    assert result.exit_code == 2
    assert "not a directory" in result.output


def test_chunk_command_reports_empty_codebase(tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["chunk", str(tmp_path), "-l", "golang"])
    assert result.exit_code == 0
    assert "No chunks created" in result.output


def test_languages_and_version_commands() -> None:
    languages = runner.invoke(cli.app, ["languages"])
    assert languages.exit_code == 0
    assert "- python (py)" in languages.output
    assert "- golang (go)" in languages.output

    version = runner.invoke(cli.app, ["version"])
    assert version.exit_code == 0
    assert version.output.strip() == get_version()
