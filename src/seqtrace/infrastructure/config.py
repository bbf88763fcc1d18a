"""TOML configuration loading.

Settings live in ``[tool.seqtrace]`` of a pyproject-style file, or at the
top level of a dedicated file::

    [tool.seqtrace]
    depth = 3
    base-packages = ["com.example."]
    exclude-accessors = true
    exclude-standard-noise = true
    excluded-method-names = ["log"]
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from seqtrace.domain.exceptions.configuration import ConfigurationError
from seqtrace.domain.model.configuration import SequenceOutputConfig
from seqtrace.infrastructure.filters.accessor import AccessorPairFilter
from seqtrace.infrastructure.filters.composite import exclude_any
from seqtrace.infrastructure.filters.default import DefaultTraceFilter
from seqtrace.infrastructure.filters.noise import standard_noise_filter

logger = logging.getLogger(__name__)

_KNOWN_KEYS = frozenset(
    {
        "depth",
        "base-packages",
        "hide-details-in-conditionals",
        "hide-details-in-chain-expression",
        "excluded-type-prefixes",
        "excluded-method-names",
        "exclude-accessors",
        "exclude-standard-noise",
    }
)


def load_config(path: Path) -> SequenceOutputConfig:
    """Load trace configuration from TOML file.

    Args:
        path: TOML file (pyproject.toml or a dedicated seqtrace file)

    Returns:
        Parsed configuration

    Raises:
        ConfigurationError: If file cannot be read or holds invalid values
    """
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except OSError as e:
        raise ConfigurationError(f"cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"invalid TOML in {path}: {e}") from e

    tool = data.get("tool")
    table = tool.get("seqtrace") if isinstance(tool, dict) else None
    if table is None:
        if path.name == "pyproject.toml":
            logger.warning("no [tool.seqtrace] table in %s, using defaults", path)
            table = {}
        else:
            table = data
    if not isinstance(table, dict):
        raise ConfigurationError(f"[tool.seqtrace] in {path} must be a table")

    logger.debug("loaded seqtrace config from %s", path)
    return config_from_mapping(table)


def config_from_mapping(data: Mapping[str, Any]) -> SequenceOutputConfig:
    """Build configuration from parsed settings.

    Args:
        data: Settings keyed by their TOML names (kebab-case)

    Returns:
        Configuration with the filter assembled from the exclusion settings

    Raises:
        ConfigurationError: If a key is unknown or a value has the wrong type
    """
    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(f"unknown keys: {', '.join(unknown)}")

    depth = data.get("depth", 1)
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise ConfigurationError(f"depth must be an integer, got {depth!r}")

    type_prefixes = _str_set(data, "excluded-type-prefixes")
    method_names = _str_set(data, "excluded-method-names")

    if _flag(data, "exclude-standard-noise"):
        base_filter = standard_noise_filter(type_prefixes, method_names)
    else:
        base_filter = DefaultTraceFilter(type_prefixes, method_names)

    trace_filter = base_filter
    if _flag(data, "exclude-accessors"):
        trace_filter = exclude_any(base_filter, AccessorPairFilter())

    return SequenceOutputConfig(
        depth=depth,
        base_packages=_str_set(data, "base-packages"),
        hide_details_in_conditionals=_flag(data, "hide-details-in-conditionals"),
        hide_details_in_chain_expression=_flag(data, "hide-details-in-chain-expression"),
        filter=trace_filter,
    )


def _flag(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise ConfigurationError(f"{key} must be true or false, got {value!r}")
    return value


def _str_set(data: Mapping[str, Any], key: str) -> frozenset[str]:
    value = data.get(key, [])
    if isinstance(value, str) or not isinstance(value, list):
        raise ConfigurationError(f"{key} must be a list of strings, got {value!r}")
    if not all(isinstance(item, str) for item in value):
        raise ConfigurationError(f"{key} must contain only strings")
    return frozenset(item for item in value if item)
