"""Configuration loading and management for jilb-insight.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.jilb-insight.toml)
    3. Project config (./jilb-insight.toml)
    4. Explicit config file
    5. Environment variables (JILB_* prefix)
    6. Keyword overrides (typically CLI flags)

Example:
    >>> config = load_config(metric_variant="operator_ratio")
    >>> config.metric_variant
    'operator_ratio'
    >>> config.weight_for("if")
    1.0
"""

from __future__ import annotations

import os
import tomllib
from collections import abc
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Literal, Mapping, Optional, get_type_hints

from .exceptions import InvalidConfigError, JilbInsightError
from .scanning.lexicon import CONTROL_KINDS

MetricVariant = Literal["statement_ratio", "operator_ratio"]
WeightProfile = Literal["reference", "legacy"]

METRIC_VARIANTS: tuple[str, ...] = ("statement_ratio", "operator_ratio")

# Reference weighting: branches and loops score 1, each case arm beyond the
# first scores 1, everything else is structural.
REFERENCE_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "if": 1.0,
        "elif": 1.0,
        "else": 0.0,
        "match": 0.0,
        "with": 0.0,
        "when": 0.0,
        "case": 1.0,
        "for": 1.0,
        "while": 1.0,
    }
)

# Earlier classroom weighting: else scores like a branch, match carries a
# flat 2 and guards a half point.
LEGACY_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {**REFERENCE_WEIGHTS, "else": 1.0, "match": 2.0, "when": 0.5}
)

WEIGHT_PROFILES: Mapping[str, Mapping[str, float]] = MappingProxyType(
    {"reference": REFERENCE_WEIGHTS, "legacy": LEGACY_WEIGHTS}
)

GLOBAL_CONFIG_NAME = ".jilb-insight.toml"
PROJECT_CONFIG_NAME = "jilb-insight.toml"
ENV_PREFIX = "JILB_"


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for a single analysis call.

    Attributes:
        metric_variant: Denominator of the relative complexity.
            "statement_ratio" divides by the statement count,
            "operator_ratio" by the total operator frequency.
        case_arm_marker: Lexeme that starts a match case arm.
        weight_profile: Base weight table ("reference" or "legacy").
        weights: Per-kind overrides applied on top of the profile.
        else_opens_frame: Whether ``else`` pushes a nesting frame.
    """

    metric_variant: MetricVariant = "statement_ratio"
    case_arm_marker: str = "|"
    weight_profile: WeightProfile = "reference"
    weights: Mapping[str, float] = field(default_factory=dict)
    else_opens_frame: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.metric_variant not in METRIC_VARIANTS:
            raise ValueError(
                f"metric_variant must be one of {', '.join(METRIC_VARIANTS)}, "
                f"got {self.metric_variant!r}"
            )
        if self.weight_profile not in WEIGHT_PROFILES:
            raise ValueError(
                f"weight_profile must be one of {', '.join(WEIGHT_PROFILES)}, "
                f"got {self.weight_profile!r}"
            )
        if not self.case_arm_marker or any(c.isspace() for c in self.case_arm_marker):
            raise ValueError("case_arm_marker must be a non-empty string without whitespace")

        for kind, weight in self.weights.items():
            if kind not in CONTROL_KINDS:
                raise ValueError(f"Unknown weight kind {kind!r}")
            if isinstance(weight, bool) or not isinstance(weight, (int, float)):
                raise ValueError(f"Weight for {kind!r} must be a number")
            if weight < 0:
                raise ValueError(f"Weight for {kind!r} must be non-negative")

        # Read-only copy, independent of the caller's dict
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))

    def weight_for(self, kind: str) -> float:
        """Effective weight of a control kind."""
        if kind in self.weights:
            return float(self.weights[kind])
        return WEIGHT_PROFILES[self.weight_profile][kind]

    @property
    def resolved_weights(self) -> dict[str, float]:
        """Full kind -> weight table after applying overrides."""
        return {kind: self.weight_for(kind) for kind in CONTROL_KINDS}


DEFAULT_CONFIG = AnalysisConfig()


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options fall through.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        JilbInsightError: If a config file is missing or unreadable
        InvalidConfigError: If a value fails validation
    """
    merged: dict[str, Any] = {}
    weights: dict[str, float] = {}

    candidates = [
        Path.home() / GLOBAL_CONFIG_NAME,
        Path.cwd() / PROJECT_CONFIG_NAME,
    ]
    for path in candidates:
        if path.exists():
            _merge_file(path, merged, weights)

    if config_file is not None:
        if not config_file.exists():
            raise JilbInsightError(f"Config file not found: {config_file}")
        _merge_file(config_file, merged, weights)

    merged.update(_load_env_vars())

    override_weights = overrides.pop("weights", None)
    if override_weights:
        weights.update(override_weights)
    merged.update({key: value for key, value in overrides.items() if value is not None})

    if weights:
        merged["weights"] = weights

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise JilbInsightError(f"Invalid configuration: {e}")
    except ValueError as e:
        key = _guess_failing_key(str(e), merged)
        raise InvalidConfigError(key, merged.get(key), str(e))


def _merge_file(path: Path, merged: dict[str, Any], weights: dict[str, float]) -> None:
    try:
        data = _load_toml_file(path)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise JilbInsightError(f"Invalid config file '{path}': {e}")

    file_weights = data.pop("weights", None)
    if file_weights is not None:
        if not isinstance(file_weights, dict):
            raise InvalidConfigError("weights", file_weights, "[weights] must be a table")
        weights.update(file_weights)
    merged.update(data)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from JILB_* environment variables.

    Supported environment variables:
        JILB_METRIC_VARIANT: statement_ratio/operator_ratio
        JILB_CASE_ARM_MARKER: str
        JILB_WEIGHT_PROFILE: reference/legacy
        JILB_ELSE_OPENS_FRAME: bool (true/false/1/0)

    Returns:
        Dict of field_name -> parsed_value for any JILB_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Args:
        value: Raw string from environment
        type_hint: Type annotation from dataclass

    Returns:
        Parsed value or None if the field cannot be set from the environment

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Mappings (weights) are too structured for env vars
    if origin in (dict, abc.Mapping) or type_hint is dict:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is str or origin is Literal:
        return value

    return None


def _guess_failing_key(message: str, merged: dict[str, Any]) -> str:
    for key in AnalysisConfig.__dataclass_fields__:
        if key in message:
            return key
    if "Weight" in message or "weight kind" in message:
        return "weights"
    return next(iter(merged), "config")


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    with open(path, "rb") as f:
        return tomllib.load(f)
