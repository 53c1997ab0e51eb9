"""Unit tests for asview/config.py"""

from pathlib import Path

import pytest

from asview.config import RunConfig, environment_overrides, load_config_file, resolve_config
from asview.errors import ConfigError


@pytest.mark.unit
class TestRunConfig:
    def test_defaults(self):
        config = RunConfig()

        assert config.workers == 1
        assert config.output == "cli"
        assert config.missing_inputs() == ["relationships", "bgp", "destinations", "vantages"]

    def test_merged_ignores_none(self):
        config = RunConfig().merged({"bgp": "bgp.txt", "workers": None})

        assert config.bgp == Path("bgp.txt")
        assert config.workers == 1

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown configuration key"):
            RunConfig().merged({"colour": "red"})

    @pytest.mark.parametrize("overrides", [{"workers": 0}, {"workers": "many"}, {"output": "xml"}])
    def test_invalid_values(self, overrides):
        with pytest.raises(ConfigError):
            RunConfig().merged(overrides)

    def test_require_inputs(self):
        with pytest.raises(ConfigError, match="bgp"):
            RunConfig(relationships=Path("r"), destinations=Path("d"), vantages=Path("v")).require_inputs()


@pytest.mark.unit
class TestConfigSources:
    def test_yaml_paths_resolve_against_file(self, tmp_path):
        config_file = tmp_path / "run.yaml"
        config_file.write_text("relationships: data/rel.txt\nbgp: /abs/bgp.txt\nworkers: 3\n")

        values = load_config_file(config_file)

        assert values["relationships"] == tmp_path / "data" / "rel.txt"
        assert values["bgp"] == Path("/abs/bgp.txt")
        assert values["workers"] == 3

    def test_empty_yaml(self, tmp_path):
        config_file = tmp_path / "run.yaml"
        config_file.write_text("")

        assert load_config_file(config_file) == {}

    @pytest.mark.parametrize("content", ["- a\n- b\n", "bgp: [1, 2]\n", "bgp: 'x\n"])
    def test_invalid_yaml(self, tmp_path, content):
        config_file = tmp_path / "run.yaml"
        config_file.write_text(content)

        with pytest.raises(ConfigError):
            load_config_file(config_file)

    def test_environment(self):
        values = environment_overrides({"ASVIEW_BGP": "/data/bgp.txt", "ASVIEW_WORKERS": "4", "OTHER": "x"})

        assert values == {"bgp": "/data/bgp.txt", "workers": "4"}

    def test_precedence(self, tmp_path):
        config_file = tmp_path / "run.yaml"
        config_file.write_text("bgp: file.txt\nworkers: 2\noutput: json\n")

        config = resolve_config(
            config_file,
            {"workers": 5, "output": None},
            environ={"ASVIEW_BGP": "/env/bgp.txt", "ASVIEW_WORKERS": "3"},
        )

        assert config.bgp == Path("/env/bgp.txt")
        assert config.workers == 5
        assert config.output == "json"
