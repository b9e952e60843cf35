from __future__ import annotations

import dataclasses
import re
from typing import Callable, Iterable

DEFAULT_PATTERN_SOURCES: tuple[str, ...] = (
    # dependabot[bot], dependabot[bot]@users.noreply.github.com
    r"\[bot\]",
    # renovate-bot, ci.bot, bot+123, ...
    r"(?:^|[+\-._])bot(?:$|[+\-._])",
    r"Copilot",
)

FALLBACK_PATTERN_SOURCE = r"\[bot\]"


@dataclasses.dataclass(frozen=True)
class RegexMatcher:
    source: str
    regex: re.Pattern[str]

    @classmethod
    def compile(cls, source: str) -> "RegexMatcher":
        return cls(source=source, regex=re.compile(source, re.IGNORECASE))

    def matches(self, text: str) -> bool:
        try:
            return self.regex.search(text) is not None
        except Exception:  # a broken matcher counts as a miss
            return False


@dataclasses.dataclass(frozen=True)
class PatternSet:
    matchers: tuple[RegexMatcher, ...]

    def __post_init__(self) -> None:
        if not self.matchers:
            raise ValueError("PatternSet needs at least one matcher")

    @property
    def sources(self) -> list[str]:
        return [m.source for m in self.matchers]

    def matches_any(self, *texts: str) -> bool:
        return any(m.matches(t) for m in self.matchers for t in texts)


def compile_patterns(
    sources: Iterable[object] | None,
    on_invalid: Callable[[object, Exception], None] | None = None,
) -> PatternSet:
    """
    Compile regex sources into a case-insensitive PatternSet.

    Sources that fail to compile are skipped (and reported through `on_invalid`).
    If nothing survives, the set holds the single `[bot]` fallback matcher.
    """
    out: list[RegexMatcher] = []
    for src in sources or ():
        if not isinstance(src, str):
            if on_invalid is not None:
                on_invalid(src, TypeError(f"pattern must be a string, got {type(src).__name__}"))
            continue
        try:
            out.append(RegexMatcher.compile(src))
        except re.error as e:
            if on_invalid is not None:
                on_invalid(src, e)
    if not out:
        out.append(RegexMatcher.compile(FALLBACK_PATTERN_SOURCE))
    return PatternSet(tuple(out))


def validate_patterns(sources: Iterable[str]) -> list[str]:
    errors: list[str] = []
    for src in sources:
        try:
            re.compile(src, re.IGNORECASE)
        except re.error as e:
            errors.append(f"{src}: {e}")
    return errors


def parse_pattern_lines(text: str) -> list[str]:
    return [s.strip() for s in re.split(r"\r?\n", text or "") if s.strip()]
