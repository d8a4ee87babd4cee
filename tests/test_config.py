"""
Tests for socialcharts/config.py
"""

import logging
from pathlib import Path

import pytest

from socialcharts.config import ChartsConfig, config_from_dict, load_config
from socialcharts.data.schemas import ChartKind
from socialcharts.exceptions import ConfigError


# =============================================================================
# CHARTS CONFIG TESTS
# =============================================================================


class TestChartsConfig:
    """Tests for ChartsConfig defaults and validation."""

    def test_defaults(self) -> None:
        config = ChartsConfig()
        assert config.charts == (ChartKind.BOXPLOT, ChartKind.GROUPED_BAR, ChartKind.LINE)
        assert config.output_format == "png"
        assert config.load_retries == 1
        assert config.source_path(ChartKind.LINE) == Path("data/socialMediaTime.csv")

    def test_output_path(self) -> None:
        config = ChartsConfig(output_dir=Path("out"), output_format="svg")
        assert config.output_path("boxplot") == Path("out/boxplot.svg")
        assert config.output_path("boxplot", "json") == Path("out/boxplot.json")

    @pytest.mark.parametrize(
        "kwargs, key",
        [
            ({"output_format": "gif"}, "output_format"),
            ({"load_retries": -1}, "load_retries"),
            ({"retry_delay_s": -0.5}, "retry_delay_s"),
            ({"dpi": 0}, "dpi"),
            ({"style": "whitgrid"}, "style"),
            ({"sources": {}}, "sources"),
        ],
    )
    def test_invalid_values(self, kwargs: dict, key: str) -> None:
        with pytest.raises(ConfigError) as exc_info:
            ChartsConfig(**kwargs)
        assert exc_info.value.key == key


# =============================================================================
# DICT / YAML LOADING TESTS
# =============================================================================


class TestConfigFromDict:
    """Tests for config_from_dict."""

    def test_overrides(self) -> None:
        config = config_from_dict({"data_dir": "in", "output_format": "svg", "dpi": 150})
        assert config.data_dir == Path("in")
        assert config.output_format == "svg"
        assert config.dpi == 150

    def test_charts_list_and_string(self) -> None:
        assert config_from_dict({"charts": ["line"]}).charts == (ChartKind.LINE,)
        assert config_from_dict({"charts": "boxplot, line"}).charts == (ChartKind.BOXPLOT, ChartKind.LINE)

    def test_unknown_chart_raises(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            config_from_dict({"charts": ["pie"]})
        assert exc_info.value.key == "charts"

    def test_sources_merge_with_base(self) -> None:
        config = config_from_dict({"sources": {"line": "times.csv"}})
        assert config.sources[ChartKind.LINE] == "times.csv"
        assert config.sources[ChartKind.BOXPLOT] == "socialMedia.csv"

    @pytest.mark.parametrize("key", ["data_dir", "output_dir"])
    def test_empty_path_raises(self, key: str) -> None:
        with pytest.raises(ConfigError) as exc_info:
            config_from_dict({key: None})
        assert exc_info.value.key == key

    def test_unknown_key_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="socialcharts.config"):
            config = config_from_dict({"colour": "red"})
        assert config == ChartsConfig()
        assert "colour" in caplog.text

    def test_base_is_kept(self) -> None:
        base = ChartsConfig(dpi=200)
        assert config_from_dict({"export_json": True}, base=base).dpi == 200


class TestLoadConfig:
    """Tests for load_config."""

    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "charts.yaml"
        path.write_text(
            "data_dir: samples\n"
            "output_format: svg\n"
            "parallel_load: true\n"
            "charts: [grouped_bar]\n"
        )
        config = load_config(path)
        assert config.data_dir == Path("samples")
        assert config.parallel_load is True
        assert config.charts == (ChartKind.GROUPED_BAR,)

    def test_empty_file_returns_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == ChartsConfig()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("charts: [boxplot\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- boxplot\n- line\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_repository_example_loads(self) -> None:
        example = Path(__file__).parent.parent / "config" / "charts.yaml"
        assert load_config(example) == ChartsConfig()

    def test_misspelled_style_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "style.yaml"
        path.write_text("style: whitgrid\n")
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.key == "style"

    def test_blank_data_dir_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "blank.yaml"
        path.write_text("data_dir:\n")
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.key == "data_dir"
