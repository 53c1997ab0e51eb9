"""Unit tests for asview.cli module.

These tests verify CLI orchestration behaviour, not engine internals.
"""

import json
import signal

import pytest

import asview.cli
from asview.cli import main


def input_args(files):
    return [
        "--relationships", str(files["relationships"]),
        "--bgp", str(files["bgp"]),
        "--destinations", str(files["destinations"]),
        "--vantages", str(files["vantages"]),
    ]


# ---------------------------------------------------------------------
# Argument and file handling
# ---------------------------------------------------------------------

def test_main_returns_2_when_inputs_are_not_configured(monkeypatch, capsys):
    for key in ("RELATIONSHIPS", "BGP", "DESTINATIONS", "VANTAGES"):
        monkeypatch.delenv(f"ASVIEW_{key}", raising=False)

    result = main([])

    assert result == 2
    assert "Missing input file setting" in capsys.readouterr().err


def test_main_returns_1_when_input_file_missing(world_files, tmp_path, capsys):
    world_files["bgp"] = tmp_path / "does_not_exist.txt"

    result = main(input_args(world_files))

    assert result == 1
    assert "Input file not found" in capsys.readouterr().err


def test_main_returns_1_when_config_file_missing(tmp_path, capsys):
    result = main(["--config", str(tmp_path / "missing.yaml")])

    assert result == 1
    assert "Config file not found" in capsys.readouterr().err


def test_main_rejects_unknown_output_mode():
    with pytest.raises(SystemExit):
        main(["--output", "xml"])


# ---------------------------------------------------------------------
# Input loading
# ---------------------------------------------------------------------

def test_main_returns_2_on_malformed_input(world_files, capsys):
    world_files["relationships"].write_text("1|2|-1\n1|2|minus-one\n")

    result = main(input_args(world_files))

    assert result == 2
    err = capsys.readouterr().err
    assert "Failed to load inputs" in err
    assert ":2:" in err


def test_main_returns_2_on_malformed_vantages(world_files, capsys):
    world_files["vantages"].write_text("as4;10.4.0.9\n")

    result = main(input_args(world_files))

    assert result == 2


def test_main_returns_3_when_analysis_fails(world_files, monkeypatch, capsys):
    def boom(*args, **kwargs):
        raise RuntimeError("pool crashed")

    monkeypatch.setattr("asview.cli.build_views", boom)

    result = main(input_args(world_files))

    assert result == 3
    assert "Analysis failed: pool crashed" in capsys.readouterr().err


# ---------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------

def test_main_prints_report(world_files, capsys):
    result = main(input_args(world_files))

    assert result == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "3"
    assert "as4 as5 0.600000 0.750000" in lines


def test_main_writes_json(world_files, tmp_path, capsys):
    target = tmp_path / "report.json"

    result = main(input_args(world_files) + ["--output", "json", "--json-file", str(target)])

    assert result == 0
    assert "Report JSON dumped" in capsys.readouterr().out
    document = json.loads(target.read_text())
    assert [v["name"] for v in document["views"]] == ["as1", "as4", "as5"]


def test_main_returns_4_when_json_cannot_be_written(world_files, tmp_path, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")

    result = main(
        input_args(world_files) + ["--output", "json", "--json-file", str(blocker / "report.json")]
    )

    assert result == 4
    assert "Failed to write JSON file" in capsys.readouterr().err


def test_main_reads_config_file(world_files, tmp_path, capsys):
    config = tmp_path / "run.yaml"
    config.write_text(
        "relationships: as_relationships.txt\n"
        "bgp: bgp.txt\n"
        "destinations: sites.txt\n"
        "vantages: servers.txt\n"
    )

    result = main(["--config", str(config)])

    assert result == 0
    assert capsys.readouterr().out.splitlines()[0] == "3"


def test_main_reads_environment(world_files, monkeypatch, capsys):
    monkeypatch.setenv("ASVIEW_RELATIONSHIPS", str(world_files["relationships"]))
    monkeypatch.setenv("ASVIEW_BGP", str(world_files["bgp"]))
    monkeypatch.setenv("ASVIEW_DESTINATIONS", str(world_files["destinations"]))
    monkeypatch.setenv("ASVIEW_VANTAGES", str(world_files["vantages"]))

    result = main([])

    assert result == 0


def test_main_returns_2_on_undecodable_input(world_files, capsys):
    world_files["destinations"].write_bytes(b"10.4.1.1\n\xff\xfe\n")

    result = main(input_args(world_files))

    assert result == 2
    assert "Invalid UTF-8" in capsys.readouterr().err


def test_main_returns_1_when_input_is_a_directory(world_files, tmp_path, capsys):
    world_files["bgp"] = tmp_path / "bgp_dir"
    world_files["bgp"].mkdir()

    result = main(input_args(world_files))

    assert result == 1
    assert "Failed to read inputs" in capsys.readouterr().err


# ---------------------------------------------------------------------
# Console script
# ---------------------------------------------------------------------

@pytest.mark.skipif(not hasattr(signal, "SIGPIPE"), reason="platform has no SIGPIPE")
def test_run_restores_default_sigpipe_and_exits_with_main_code(monkeypatch):
    installed = []
    monkeypatch.setattr(signal, "signal", lambda sig, handler: installed.append((sig, handler)))
    monkeypatch.setattr(asview.cli, "main", lambda: 3)

    with pytest.raises(SystemExit) as excinfo:
        asview.cli.run()

    assert excinfo.value.code == 3
    assert installed == [(signal.SIGPIPE, signal.SIG_DFL)]
