"""Tests for domain/model/configuration.py."""

import pytest

from seqtrace.domain.model.configuration import SequenceOutputConfig
from seqtrace.domain.ports.trace_filter import ExcludeNothing


class TestSequenceOutputConfig:
    """Tests for SequenceOutputConfig."""

    def test_defaults(self) -> None:
        """Defaults: depth 1, empty scope, details shown, no-op filter."""
        config = SequenceOutputConfig()

        assert config.depth == 1
        assert config.base_packages == frozenset()
        assert config.hide_details_in_conditionals is False
        assert config.hide_details_in_chain_expression is False
        assert isinstance(config.filter, ExcludeNothing)
        assert config.filter.should_exclude("pkg.B.bar()", None) is False
        assert config.filter.should_exclude_call("pkg.B", "bar", None) is False

    def test_base_packages_converted(self) -> None:
        """Any iterable of prefixes becomes a frozenset."""
        config = SequenceOutputConfig(base_packages=["pkg."])  # type: ignore[arg-type]

        assert config.base_packages == frozenset({"pkg."})

    def test_base_packages_string_rejected(self) -> None:
        """A bare string is a programmer error."""
        with pytest.raises(TypeError, match="base_packages"):
            SequenceOutputConfig(base_packages="pkg.")  # type: ignore[arg-type]

    def test_filter_none_rejected(self) -> None:
        """None filter is a programmer error."""
        with pytest.raises(TypeError, match="filter"):
            SequenceOutputConfig(filter=None)  # type: ignore[arg-type]

    def test_traces_nothing(self) -> None:
        """Zero depth or empty scope make every trace empty."""
        assert SequenceOutputConfig(depth=0, base_packages=frozenset({"pkg."})).traces_nothing is True
        assert SequenceOutputConfig(depth=2).traces_nothing is True
        assert SequenceOutputConfig(depth=2, base_packages=frozenset({"pkg."})).traces_nothing is False

    def test_frozen(self) -> None:
        """Config is immutable."""
        config = SequenceOutputConfig()

        with pytest.raises(AttributeError):
            config.depth = 5  # type: ignore[misc]
