from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Callable, Iterable

from .git import run_git
from .identity import github_username_from_email
from .patterns import DEFAULT_PATTERN_SOURCES, PatternSet, compile_patterns, validate_patterns

PATTERNS_KEY = "bot_regex_sources"
AUTHOR_KEY = "author"


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    return json.loads(config_path.read_text(encoding="utf-8"))


def save_config(config_path: Path, config: dict) -> None:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(config, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def pattern_sources_from_config(config: dict) -> list[str]:
    sources = config.get(PATTERNS_KEY)
    if isinstance(sources, str):
        return [sources]
    if not isinstance(sources, list):
        return list(DEFAULT_PATTERN_SOURCES)
    return list(sources)


def author_from_config(config: dict) -> str | None:
    author = str(config.get(AUTHOR_KEY) or "").strip()
    return author or None


def warn_invalid_pattern(source: object, error: Exception) -> None:
    print(f"[remove-pr-bots] Invalid regex source skipped: {source!r} ({error})", file=sys.stderr)


class PatternStore:
    """
    Holds the active PatternSet.

    `update` builds the replacement set completely before swapping the
    reference, so readers see either the old set or the new one.
    """

    def __init__(self, sources: Iterable[object] | None = None) -> None:
        self._listeners: list[Callable[[PatternSet], None]] = []
        self._current = compile_patterns(
            DEFAULT_PATTERN_SOURCES if sources is None else sources,
            on_invalid=warn_invalid_pattern,
        )

    @classmethod
    def from_config(cls, config: dict) -> "PatternStore":
        return cls(pattern_sources_from_config(config))

    @property
    def current(self) -> PatternSet:
        return self._current

    @property
    def sources(self) -> list[str]:
        return self._current.sources

    def subscribe(self, callback: Callable[[PatternSet], None]) -> None:
        self._listeners.append(callback)

    def update(self, sources: Iterable[object] | None) -> PatternSet:
        new = compile_patterns(
            DEFAULT_PATTERN_SOURCES if sources is None else sources,
            on_invalid=warn_invalid_pattern,
        )
        self._current = new
        for cb in list(self._listeners):
            cb(new)
        return new


def save_pattern_sources(config_path: Path, sources: list[str]) -> None:
    errors = validate_patterns(sources)
    if errors:
        raise ValueError("Invalid regex:\n" + "\n".join(errors))
    config = load_config(config_path)
    config[PATTERNS_KEY] = list(sources)
    save_config(config_path, config)


def reset_pattern_sources(config_path: Path) -> None:
    config = load_config(config_path)
    config[PATTERNS_KEY] = list(DEFAULT_PATTERN_SOURCES)
    save_config(config_path, config)


def infer_author_from_git() -> str | None:
    code, out, _ = run_git(["config", "--global", "--get", "user.email"], cwd=Path.cwd())
    if code != 0 or not out.strip():
        return None
    return github_username_from_email(out.strip()) or None
