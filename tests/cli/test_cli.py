"""Tests for CLI parser and main behavior."""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

import pytest
import yaml

from restgate.cli.main import build_parser, main
from restgate.exceptions import CompatibilityError, DescriptorParseError, GenerationError

# The package re-exports ``main``, which shadows the submodule attribute.
cli_main = importlib.import_module("restgate.cli.main")

MODEL_GENERATOR_SCRIPT = """
import json, os, pathlib, sys
out = pathlib.Path(sys.argv[1])
out.mkdir(parents=True, exist_ok=True)
names = []
for source in filter(None, sys.argv[2].split(os.pathsep)):
    name = pathlib.Path(source).stem + ".java"
    (out / name).write_text("// generated\\n")
    names.append(name)
print(json.dumps({"modifiedFiles": names, "targetFiles": []}))
"""


def _write_config(root: Path, payload: dict[str, object]) -> None:
    (root / "restgate.yaml").write_text(yaml.safe_dump(payload), encoding="utf-8")


def _model_generator_config() -> dict[str, object]:
    return {
        "descriptor_dir": "pegasus",
        "model_dir": "codegen",
        "generators": {
            "data_template": [sys.executable, "-c", MODEL_GENERATOR_SCRIPT, "{output_dir}", "{source_paths}"]
        },
    }


def test_build_parser_accepts_publish_flags(tmp_path: Path) -> None:
    parser = build_parser()

    args = parser.parse_args(["publish-api", "--root", str(tmp_path), "--compat-mode", "BACKWARDS", "-v"])

    assert args.command == "publish-api"
    assert args.root == tmp_path
    assert args.compat_mode == "backwards"
    assert args.verbose is True
    assert args.config is None


def test_build_parser_rejects_unknown_compat_mode(tmp_path: Path) -> None:
    parser = build_parser()

    with pytest.raises(SystemExit):
        parser.parse_args(["publish-api", "--root", str(tmp_path), "--compat-mode", "strict"])


def test_validate_config_reports_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_config(tmp_path, {"compat_mod": "backwards"})

    exit_code = main(["validate-config", "--root", str(tmp_path)])

    assert exit_code == 2
    err = capsys.readouterr().err
    assert "[CFG004]" in err
    assert "did you mean 'compat_mode'?" in err


def test_validate_config_accepts_valid_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_config(tmp_path, _model_generator_config())

    assert main(["validate-config", "--root", str(tmp_path)]) == 0
    assert "Configuration is valid." in capsys.readouterr().out


def test_missing_generator_command_is_a_config_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "src" / "main" / "pegasus").mkdir(parents=True)

    exit_code = main(["generate-models", "--root", str(tmp_path)])

    assert exit_code == 2
    assert "generators.data_template" in capsys.readouterr().err


def test_missing_descriptor_dir_exits_with_config_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_config(tmp_path, _model_generator_config())

    exit_code = main(["generate-models", "--root", str(tmp_path)])

    assert exit_code == 2
    assert "Descriptor source directory does not exist" in capsys.readouterr().err


def test_generate_models_runs_command_then_hits_cache(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_config(tmp_path, _model_generator_config())
    (tmp_path / "pegasus").mkdir()
    (tmp_path / "pegasus" / "Greeting.pdsc").write_text('{"name": "Greeting"}', encoding="utf-8")

    assert main(["generate-models", "--root", str(tmp_path)]) == 0
    assert "Data models regenerated: 1 file(s)" in capsys.readouterr().out
    assert (tmp_path / "codegen" / "Greeting.java").is_file()

    assert main(["generate-models", "--root", str(tmp_path)]) == 0
    assert "Data models up to date: 1 file(s)" in capsys.readouterr().out


def test_compatibility_failure_exits_non_zero(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _reject(args: argparse.Namespace) -> int:
        raise CompatibilityError("Incompatible changes:\n  1) a.restspec.json $.fields[id]: removed\n", level="equivalent")

    monkeypatch.setattr(cli_main, "handle_publish_api", _reject)

    exit_code = main(["publish-api", "--root", str(tmp_path)])

    assert exit_code == 1
    err = capsys.readouterr().err
    assert "Compatibility check failed:" in err
    assert "$.fields[id]: removed" in err


def test_descriptor_parse_error_exits_non_zero(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _fail(args: argparse.Namespace) -> int:
        raise DescriptorParseError(
            "JSON parse error in Greeting.pdsc: line: 3, column: 7",
            source=Path("Greeting.pdsc"),
            line=3,
            column=7,
            kind="data_template",
        )

    monkeypatch.setattr(cli_main, "handle_generate_models", _fail)

    assert main(["generate-models", "--root", str(tmp_path)]) == 1
    assert "Descriptor error: JSON parse error in Greeting.pdsc" in capsys.readouterr().err


def test_generation_error_exits_non_zero(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _fail(args: argparse.Namespace) -> int:
        raise GenerationError("idl generator error: exporter crashed", kind="idl")

    monkeypatch.setattr(cli_main, "handle_publish_api", _fail)

    assert main(["publish-api", "--root", str(tmp_path)]) == 1
    assert "Generation error: idl generator error" in capsys.readouterr().err
