"""
Tests for the kataify CLI

Author: Kataify maintainers | 2026-10-18
"""

import json

import pytest

from kataify_core.version import VERSION_FULL
from kataify_unix.cli import build_parser, main


@pytest.fixture(autouse=True)
def isolated(temp_dir, monkeypatch):
    """Run every CLI test from an empty directory with no user config."""
    monkeypatch.chdir(temp_dir)
    monkeypatch.setenv("HOME", str(temp_dir))
    for name in ("KATAIFY_MODE", "KATAIFY_MAX_PARALLEL", "KATAIFY_FAIL_FAST",
                 "KATAIFY_ENCODING", "KATAIFY_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def run_cli(*argv) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(list(argv))
    return exc_info.value.code


class TestParser:
    """Tests for argument parsing."""

    def test_repeatable_map(self):
        args = build_parser().parse_args(["--map", "a:b", "-m", "c:d"])
        assert args.mappings == ["a:b", "c:d"]

    def test_mode_choices(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--mode", "sometimes"])


class TestMain:
    """Tests for the CLI entry point."""

    def test_single_mapping(self, temp_dir, solution_source, kata_source):
        (temp_dir / "sum.spec.js").write_text(solution_source)
        code = run_cli("-q", "--map", "sum.spec.js:katas/sum.spec.js")

        assert code == 0
        assert (temp_dir / "katas" / "sum.spec.js").read_text() == kata_source

    def test_source_dir(self, temp_dir, solutions_tree):
        code = run_cli(
            "-q",
            "--source-dir", str(solutions_tree),
            "--dest-dir", str(temp_dir / "katas"),
            "--pattern", "*.spec.js",
            "--exclude", "node_modules/*",
        )
        assert code == 0
        assert (temp_dir / "katas" / "array" / "from.spec.js").read_text() == "const arr = [];\n"
        assert not (temp_dir / "katas" / "node_modules").exists()
        assert not (temp_dir / "katas" / "array" / "README.md").exists()

    def test_config_file(self, temp_dir):
        (temp_dir / "a.js").write_text("////a\nb\nc\n")
        config = temp_dir / "kataify.yaml"
        config.write_text(
            "transform:\n"
            "  mode: until_next_marker\n"
            "mappings:\n"
            "  - sourceFilename: a.js\n"
            "    destinationFilename: out/a.js\n"
        )
        assert run_cli("-q", str(config)) == 0
        assert (temp_dir / "out" / "a.js").read_text() == "a"

    def test_config_is_auto_detected(self, temp_dir):
        (temp_dir / "a.js").write_text("////a\nb\n")
        (temp_dir / "kataify.yaml").write_text(
            "mappings:\n  - source_filename: a.js\n    destination_filename: b.js\n"
        )
        assert run_cli("-q") == 0
        assert (temp_dir / "b.js").read_text() == "a\n"

    def test_mode_flag_overrides_config(self, temp_dir):
        (temp_dir / "a.js").write_text("////a\nb\nc")
        (temp_dir / "kataify.yaml").write_text("transform:\n  mode: until_next_marker\n")
        assert run_cli("-q", "--mode", "next_line", "--map", "a.js:b.js") == 0
        assert (temp_dir / "b.js").read_text() == "a\nc"

    def test_dry_run_writes_nothing(self, temp_dir, capsys):
        (temp_dir / "a.js").write_text("////a\nb\n")
        assert run_cli("--dry-run", "--map", "a.js:out/a.js") == 0
        assert not (temp_dir / "out").exists()
        assert "dry run" in capsys.readouterr().out

    def test_json_report(self, temp_dir):
        (temp_dir / "a.js").write_text("////a\nb\n")
        report = temp_dir / "report.json"
        assert run_cli("-q", "--map", "a.js:b.js", "--map", "missing.js:c.js",
                       "--json-report", str(report)) == 2

        data = json.loads(report.read_text())
        assert data["exit_code"] == 2
        assert data["completed_files"] == 1
        assert data["failed_files"] == 1

    def test_all_missing_fails(self):
        assert run_cli("-q", "--map", "missing.js:out.js") == 1

    def test_nothing_to_do(self):
        assert run_cli("-q") == 10

    def test_missing_config(self, temp_dir):
        assert run_cli("-q", str(temp_dir / "nope.yaml")) == 10

    def test_bad_mapping_argument(self):
        assert run_cli("-q", "--map", "no-colon") == 10

    def test_bad_max_parallel(self):
        assert run_cli("-q", "--map", "a:b", "--max-parallel", "0") == 10

    def test_missing_source_dir(self, temp_dir):
        assert run_cli("-q", "--source-dir", str(temp_dir / "nope"), "--dest-dir", "out") == 10

    def test_section_that_is_not_a_mapping(self, temp_dir):
        config = temp_dir / "kataify.yaml"
        config.write_text("transform: next_line\n")
        assert run_cli("-q", str(config), "--map", "a:b") == 10

    def test_version(self, capsys):
        assert run_cli("--version") == 0
        assert f"Kataify v{VERSION_FULL}" in capsys.readouterr().out
