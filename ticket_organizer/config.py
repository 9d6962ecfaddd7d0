"""Configuration helpers for the ticket organizer tools."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, Tuple

import yaml

from .keywords import DEFAULT_MIN_KEYWORD_LENGTH, DEFAULT_STOP_WORDS
from .models import DEFAULT_CATEGORIES, DEFAULT_STATUSES
from .similarity import DEFAULT_RESULT_LIMIT, DEFAULT_SIMILARITY_THRESHOLD


class ConfigError(RuntimeError):
    """Raised when configuration cannot be loaded."""


PACKAGE_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_CONFIG_LOCATIONS = (
    PACKAGE_ROOT / "config" / "config.yaml",
    PACKAGE_ROOT / "config" / "config.yml",
    Path("./config/config.yaml"),
    Path("./config/config.yml"),
    Path.home() / ".ticket_organizer" / "config.yaml",
)


def resolve_path(path_str: str | None, *, base: Path | None = None) -> Path:
    """Resolve a path string that may be relative to an optional base directory."""
    base_path = base or Path.cwd()
    if not path_str:
        return base_path
    path = Path(path_str)
    if not path.is_absolute():
        path = base_path / path
    return path


def load_config(path: str | os.PathLike[str] | None = None, *, allow_missing: bool = False) -> Dict[str, Any]:
    """Load configuration from YAML.

    Parameters
    ----------
    path: Optional path to a configuration file. If not provided, default
        locations will be searched.
    allow_missing: Return an empty mapping instead of raising when no file
        is found in the default locations. An explicit ``path`` must exist.
    """
    if path:
        candidate_paths = [Path(path)]
    else:
        candidate_paths = list(DEFAULT_CONFIG_LOCATIONS)

    for candidate in candidate_paths:
        if candidate.exists():
            with candidate.open("r", encoding="utf-8") as handle:
                try:
                    data = yaml.safe_load(handle) or {}
                except yaml.YAMLError as exc:
                    raise ConfigError(f"Unable to parse configuration file {candidate}") from exc
            if not isinstance(data, dict):
                raise ConfigError(f"Configuration file {candidate} must contain a mapping")
            return data
    if allow_missing and not path:
        return {}
    raise ConfigError(
        "No configuration file could be located. Provide --config or create "
        "config/config.yaml."
    )


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Configuration section '{name}' must be a mapping")
    return section


def _as_float(value: Any, *, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Configuration value {name}={value!r} is not a number") from exc


def _as_int(value: Any, *, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Configuration value {name}={value!r} is not an integer") from exc


@dataclass(frozen=True)
class MatchingSettings:
    stop_words: FrozenSet[str] = DEFAULT_STOP_WORDS
    min_keyword_length: int = DEFAULT_MIN_KEYWORD_LENGTH
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    result_limit: int = DEFAULT_RESULT_LIMIT

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "MatchingSettings":
        matching_cfg = _section(config, "matching")
        if matching_cfg.get("stop_words") is not None:
            stop_words = {str(word).lower() for word in matching_cfg["stop_words"]}
        else:
            stop_words = set(DEFAULT_STOP_WORDS)
        stop_words.update(str(word).lower() for word in matching_cfg.get("extra_stop_words") or [])

        threshold = _as_float(
            matching_cfg.get("similarity_threshold", DEFAULT_SIMILARITY_THRESHOLD),
            name="matching.similarity_threshold",
        )
        if not 0.0 <= threshold <= 1.0:
            raise ConfigError("matching.similarity_threshold must be between 0 and 1")
        limit = _as_int(matching_cfg.get("result_limit", DEFAULT_RESULT_LIMIT), name="matching.result_limit")
        min_length = _as_int(
            matching_cfg.get("min_keyword_length", DEFAULT_MIN_KEYWORD_LENGTH),
            name="matching.min_keyword_length",
        )
        return cls(
            stop_words=frozenset(stop_words),
            min_keyword_length=max(1, min_length),
            similarity_threshold=threshold,
            result_limit=max(0, limit),
        )


@dataclass(frozen=True)
class HighlightSettings:
    open_tag: str = "<mark>"
    close_tag: str = "</mark>"

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "HighlightSettings":
        highlight_cfg = _section(config, "highlight")
        return cls(
            open_tag=str(highlight_cfg.get("open_tag", cls.open_tag)),
            close_tag=str(highlight_cfg.get("close_tag", cls.close_tag)),
        )


@dataclass(frozen=True)
class IntakeSettings:
    categories: Tuple[str, ...] = DEFAULT_CATEGORIES
    statuses: Tuple[str, ...] = DEFAULT_STATUSES

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "IntakeSettings":
        intake_cfg = _section(config, "intake")
        categories = tuple(str(item) for item in intake_cfg.get("categories") or DEFAULT_CATEGORIES)
        statuses = tuple(str(item) for item in intake_cfg.get("statuses") or DEFAULT_STATUSES)
        return cls(categories=categories, statuses=statuses)
