from __future__ import annotations

import json
from argparse import Namespace
from pathlib import Path
from typing import Any

import pytest

from schemabuilder import cli
from schemabuilder.exceptions import ModelLoadError
from schemabuilder.settings import Settings


@pytest.fixture
def model_path(tmp_path: Path, pet_model: dict[str, Any]) -> Path:
    path = tmp_path / "pets.json"
    path.write_text(json.dumps(pet_model), encoding="utf-8")
    return path


@pytest.fixture
def cli_env(mocker, tmp_path: Path) -> Settings:
    settings = Settings(output_dir=str(tmp_path / "generated"), package_name="pet_builders")
    mocker.patch("schemabuilder.cli.get_settings", return_value=settings)
    mocker.patch("schemabuilder.cli.configure_logging")
    return settings


def test_build_parser_supports_version_flag(capsys) -> None:
    parser = cli.build_parser()

    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["--version"])
    assert exc_info.value.code == 0

    captured = capsys.readouterr()
    assert "0.1.0" in captured.out


def test_build_parser_parses_generate_options() -> None:
    args = cli.build_parser().parse_args(
        ["generate", "--model", "pets.yaml", "--output-dir", "out", "--package", "pets", "--license", "HEADER"],
    )

    assert args == Namespace(
        command="generate",
        model="pets.yaml",
        output_dir=Path("out"),
        package_name="pets",
        license_path=Path("HEADER"),
    )


def test_main_without_command_prints_help(cli_env: Settings, capsys) -> None:
    assert cli.main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_main_generate_uses_settings_defaults(cli_env: Settings, model_path: Path, capsys) -> None:
    result = cli.main(["generate", "--model", str(model_path)])

    assert result == 0
    package_dir = Path(cli_env.output_dir) / "pet_builders"
    assert (package_dir / "builders.py").is_file()
    assert str(package_dir / "messages.py") in capsys.readouterr().out


def test_main_generate_prepends_the_license(cli_env: Settings, model_path: Path, tmp_path: Path) -> None:
    license_path = tmp_path / "HEADER"
    license_path.write_text("Copyright Pets", encoding="utf-8")

    result = cli.main(
        [
            "generate",
            "--model",
            str(model_path),
            "--output-dir",
            str(tmp_path / "out"),
            "--package",
            "pets",
            "--license",
            str(license_path),
        ],
    )

    assert result == 0
    source = (tmp_path / "out" / "pets" / "messages.py").read_text(encoding="utf-8")
    assert source.startswith("# Copyright Pets\n")


def test_main_build_prints_the_instance(cli_env: Settings, model_path: Path, tmp_path: Path, capsys) -> None:
    document = tmp_path / "rex.yaml"
    document.write_text("name: Rex\ntags: cute\nx-chip: '123'\n", encoding="utf-8")

    result = cli.main(["build", "--model", str(model_path), "--class", "Pet", "--input", str(document)])

    assert result == 0
    assert json.loads(capsys.readouterr().out) == {"name": "Rex", "tags": ["cute"], "extensions": {"x-chip": "123"}}


def test_main_build_fails_on_non_conforming_input(cli_env: Settings, model_path: Path, tmp_path: Path) -> None:
    document = tmp_path / "owner.json"
    document.write_text('{"age": 3}', encoding="utf-8")

    result = cli.main(["build", "--model", str(model_path), "--class", "Owner", "--input", str(document)])

    assert result == 1


def test_main_build_fails_on_unknown_class(cli_env: Settings, model_path: Path, tmp_path: Path) -> None:
    document = tmp_path / "cow.json"
    document.write_text("{}", encoding="utf-8")

    result = cli.main(["build", "--model", str(model_path), "--class", "Cow", "--input", str(document)])

    assert result == 1


def test_main_classes_lists_kinds(cli_env: Settings, model_path: Path, capsys) -> None:
    result = cli.main(["classes", "--model", str(model_path)])

    assert result == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Animal\tone_of"
    assert "Tags\tstring_array" in lines


def test_main_returns_one_on_package_errors(cli_env: Settings, mocker) -> None:
    mocker.patch("schemabuilder.cli.load_class_collection", side_effect=ModelLoadError(source="pets.json"))

    assert cli.main(["classes", "--model", "pets.json"]) == 1


def test_main_returns_130_when_interrupted(cli_env: Settings, mocker) -> None:
    mocker.patch("schemabuilder.cli.load_class_collection", side_effect=KeyboardInterrupt)

    assert cli.main(["classes", "--model", "pets.json"]) == 130


def test_main_checks_loading_dependencies(cli_env: Settings, mocker, model_path: Path) -> None:
    mock_check = mocker.patch("schemabuilder.cli.ensure_cli_dependencies_for_load")

    assert cli.main(["classes", "--model", str(model_path)]) == 0
    mock_check.assert_called_once_with()
