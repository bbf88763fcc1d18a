"""Tests for infrastructure/config.py."""

from pathlib import Path

import pytest

from seqtrace.domain.exceptions.configuration import ConfigurationError
from seqtrace.infrastructure.config import config_from_mapping, load_config
from seqtrace.infrastructure.filters.composite import ExcludeAny
from seqtrace.infrastructure.filters.default import DefaultTraceFilter
from tests.factories import make_index, make_method, make_type


class TestConfigFromMapping:
    """Tests for config_from_mapping."""

    def test_defaults(self) -> None:
        """Empty mapping gives default config."""
        config = config_from_mapping({})

        assert config.depth == 1
        assert config.base_packages == frozenset()
        assert isinstance(config.filter, DefaultTraceFilter)

    def test_all_keys(self) -> None:
        """Every supported key is applied."""
        config = config_from_mapping(
            {
                "depth": 4,
                "base-packages": ["com.example."],
                "hide-details-in-conditionals": True,
                "hide-details-in-chain-expression": True,
                "excluded-type-prefixes": ["com.example.log."],
                "excluded-method-names": ["audit"],
            }
        )

        assert config.depth == 4
        assert config.base_packages == frozenset({"com.example."})
        assert config.hide_details_in_conditionals is True
        assert config.hide_details_in_chain_expression is True
        assert config.filter.should_exclude_call("com.example.log.Log", "write", None) is True
        assert config.filter.should_exclude_call("com.example.A", "audit", None) is True

    def test_standard_noise(self) -> None:
        """exclude-standard-noise adds library prefixes."""
        config = config_from_mapping({"exclude-standard-noise": True})

        assert config.filter.should_exclude_call("java.util.List", "add", None) is True

    def test_accessors(self) -> None:
        """exclude-accessors composes the accessor filter."""
        index = make_index(make_type("pkg.U", make_method("getX"), make_method("setX")))
        config = config_from_mapping({"exclude-accessors": True})

        assert isinstance(config.filter, ExcludeAny)
        assert config.filter.should_exclude_call("pkg.U", "getX", index) is True

    @pytest.mark.parametrize(
        ("data", "message"),
        [
            ({"depth": "3"}, "depth"),
            ({"depth": True}, "depth"),
            ({"base-packages": "pkg."}, "base-packages"),
            ({"base-packages": [1]}, "base-packages"),
            ({"exclude-accessors": "yes"}, "exclude-accessors"),
            ({"colour": "blue"}, "unknown keys: colour"),
        ],
    )
    def test_invalid_values(self, data: dict, message: str) -> None:
        """Wrong types and unknown keys rejected."""
        with pytest.raises(ConfigurationError, match=message):
            config_from_mapping(data)


class TestLoadConfig:
    """Tests for load_config."""

    def test_tool_table(self, tmp_path: Path) -> None:
        """[tool.seqtrace] in pyproject.toml is read."""
        path = tmp_path / "pyproject.toml"
        path.write_text(
            '[project]\nname = "x"\n\n[tool.seqtrace]\ndepth = 3\nbase-packages = ["pkg."]\n',
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.depth == 3
        assert config.base_packages == frozenset({"pkg."})

    def test_pyproject_without_table(self, tmp_path: Path) -> None:
        """pyproject.toml without the table gives defaults."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n', encoding="utf-8")

        assert load_config(path).depth == 1

    def test_top_level_file(self, tmp_path: Path) -> None:
        """Dedicated file uses top-level keys."""
        path = tmp_path / "seqtrace.toml"
        path.write_text("depth = 5\n", encoding="utf-8")

        assert load_config(path).depth == 5

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing file is a configuration error."""
        with pytest.raises(ConfigurationError, match="cannot read"):
            load_config(tmp_path / "absent.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Syntax errors are configuration errors."""
        path = tmp_path / "bad.toml"
        path.write_text("depth = = 3\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="invalid TOML"):
            load_config(path)
