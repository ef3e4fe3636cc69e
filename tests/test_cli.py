import json
from pathlib import Path
from typing import Any

import pytest

from solverbench import cli
from solverbench.errors import (
    ConfigurationError,
    FilesystemError,
    ToolchainError,
    UnknownVariantError,
)


@pytest.fixture
def registry_file(tmp_path: Path, flint_source: Path) -> Path:
    path = tmp_path / "variants.json"
    path.write_text(
        json.dumps(
            {
                "default": "flint",
                "variants": {"flint": {"source": flint_source.name, "link": ["flint", "gmp"]}},
            },
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def fake_toolchain(monkeypatch: pytest.MonkeyPatch, toolchain: Any) -> Any:
    monkeypatch.setattr("solverbench.pipeline.SubprocessToolchain", lambda tool: toolchain)
    return toolchain


def test_default_command_builds(
    tmp_path: Path,
    registry_file: Path,
    fake_toolchain: Any,
    capsys: pytest.CaptureFixture[str],
) -> None:
    output = tmp_path / "output"

    code = cli.main(["--registry", str(registry_file), "--output-dir", str(output)])

    assert code == 0
    assert (output / "solver").exists()
    assert "Built flint" in capsys.readouterr().out
    assert fake_toolchain.calls[0]["link_flags"] == ("-lflint", "-lgmp")


def test_clean_command_removes_executable(
    tmp_path: Path,
    registry_file: Path,
    fake_toolchain: Any,
) -> None:
    output = tmp_path / "output"
    args = ["--registry", str(registry_file), "--output-dir", str(output)]
    assert cli.main([*args, "build"]) == 0

    assert cli.main([*args, "clean"]) == 0
    assert not (output / "solver").exists()
    assert cli.main([*args, "clean"]) == 0


def test_unknown_variant_exits_with_usage_code(
    tmp_path: Path,
    registry_file: Path,
    fake_toolchain: Any,
    capsys: pytest.CaptureFixture[str],
) -> None:
    output = tmp_path / "output"

    code = cli.main(
        ["--registry", str(registry_file), "--output-dir", str(output), "--impl", "missing"],
    )

    assert code == cli.EXIT_USAGE
    assert "E_UNKNOWN_VARIANT" in capsys.readouterr().err
    assert not output.exists()


def test_toolchain_exit_status_is_propagated(
    tmp_path: Path,
    registry_file: Path,
    fake_toolchain: Any,
    capsys: pytest.CaptureFixture[str],
) -> None:
    fake_toolchain.returncode = 3
    fake_toolchain.stderr = "undefined reference to foo"

    code = cli.main(["--registry", str(registry_file), "--output-dir", str(tmp_path / "out")])

    assert code == 3
    assert "undefined reference to foo" in capsys.readouterr().err


def test_environment_selects_variant(
    tmp_path: Path,
    registry_file: Path,
    fake_toolchain: Any,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("SOLVERBENCH_IMPL", "missing")

    code = cli.main(["--registry", str(registry_file), "--output-dir", str(tmp_path / "out")])

    assert code == cli.EXIT_USAGE
    assert fake_toolchain.calls == []


def test_variants_command_marks_default(
    registry_file: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert cli.main(["--registry", str(registry_file), "variants"]) == 0

    line = capsys.readouterr().out.strip()
    assert line.startswith("* flint")
    assert line.endswith("-lflint -lgmp")


def test_log_file_records_pipeline_operations(
    tmp_path: Path,
    registry_file: Path,
    fake_toolchain: Any,
) -> None:
    log_file = tmp_path / "logs" / "build.jsonl"

    cli.main(
        [
            "--registry",
            str(registry_file),
            "--output-dir",
            str(tmp_path / "out"),
            "--log-file",
            str(log_file),
        ],
    )

    records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert [record["operation"] for record in records] == [
        "resolve_variant",
        "ensure_output_dir",
        "toolchain_invoke",
        "build_complete",
    ]


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (UnknownVariantError("x"), 2),
        (ConfigurationError("bad"), 2),
        (FilesystemError("denied"), 1),
        (ToolchainError("failed", returncode=4), 4),
        (ToolchainError("not found"), 1),
    ],
)
def test_exit_codes(error: Exception, expected: int) -> None:
    assert cli.exit_code_for(error) == expected  # type: ignore[arg-type]


def test_options_after_subcommand_are_accepted(
    tmp_path: Path,
    registry_file: Path,
    fake_toolchain: Any,
    capsys: pytest.CaptureFixture[str],
) -> None:
    output = tmp_path / "output"

    assert cli.main(["build", "--registry", str(registry_file), "--output-dir", str(output)]) == 0
    assert (output / "solver").exists()
    assert cli.main(["clean", "--registry", str(registry_file), "--output-dir", str(output)]) == 0
    assert not (output / "solver").exists()
    assert cli.main(["variants", "--registry", str(registry_file)]) == 0
    assert "* flint" in capsys.readouterr().out


def test_subcommand_without_options_keeps_leading_options(registry_file: Path) -> None:
    args = cli.build_parser().parse_args(["--registry", str(registry_file), "variants"])

    assert args.command == "variants"
    assert args.registry == str(registry_file)
    assert args.impl is None


def test_empty_impl_is_a_configuration_error(
    tmp_path: Path,
    registry_file: Path,
    fake_toolchain: Any,
    capsys: pytest.CaptureFixture[str],
) -> None:
    output = tmp_path / "output"

    code = cli.main(
        ["build", "--impl", "", "--registry", str(registry_file), "--output-dir", str(output)],
    )

    assert code == cli.EXIT_USAGE
    assert "E_CONFIGURATION" in capsys.readouterr().err
    assert fake_toolchain.calls == []
    assert not output.exists()


def test_report_write_failure_exits_with_filesystem_code(
    tmp_path: Path,
    registry_file: Path,
    fake_toolchain: Any,
    capsys: pytest.CaptureFixture[str],
) -> None:
    output = tmp_path / "output"
    (output / "build-report.json").mkdir(parents=True)

    code = cli.main(["--registry", str(registry_file), "--output-dir", str(output)])

    assert code == cli.EXIT_FILESYSTEM
    assert "E_FILESYSTEM" in capsys.readouterr().err
