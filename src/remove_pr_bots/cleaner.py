from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Callable

from .identity import normalize_github_username, signoff_belongs_to
from .models import CleanResult
from .patterns import PatternSet
from .trailers import (
    is_blank,
    is_coauthor_line,
    is_separator_line,
    is_signoff_line,
    parse_coauthor,
    parse_signoff,
    split_lines,
)

if TYPE_CHECKING:
    from .config import PatternStore

AuthorLookup = Callable[[], "str | None"]


def is_bot_coauthor(line: str, patterns: PatternSet) -> bool:
    parsed = parse_coauthor(line)
    if parsed is None:
        return False
    return patterns.matches_any(parsed.name, parsed.email, parsed.local, line)


def _remove_author_signoff(lines: list[str], author: str) -> bool:
    """Drop the PR author's sign-off and the `---` separator it hangs under. Mutates `lines`."""
    idx = next((i for i, line in enumerate(lines) if is_signoff_line(line)), -1)
    if idx == -1:
        return False
    info = parse_signoff(lines[idx])
    if info is None or not signoff_belongs_to(info, author):
        return False

    del lines[idx]

    j = min(idx - 1, len(lines) - 1)
    while j >= 0 and is_blank(lines[j]):
        j -= 1
    if j >= 0 and is_separator_line(lines[j]):
        del lines[j]
        return True

    # a lone separator with nothing left under it
    if not any(is_coauthor_line(line) for line in lines):
        sep_idx = next((i for i, line in enumerate(lines) if is_separator_line(line)), -1)
        if sep_idx != -1:
            del lines[sep_idx]
    return True


def clean_commit_message(
    text: object,
    patterns: PatternSet,
    author: str | AuthorLookup | None = None,
) -> CleanResult:
    """
    Remove bot `Co-authored-by:` lines from a merge commit message.

    When a bot co-author was dropped (or no co-authors are left at all), the
    `Signed-off-by:` line of the PR author is dropped too, together with the
    `---` separator above it. Trailing blank lines are always trimmed.

    `author` is the PR author's username, or a zero-arg callable returning it;
    the callable is only invoked when the sign-off needs checking and must not
    raise; `MessageCleaner` wraps its lookup so that a failure counts as absent.
    """
    if not isinstance(text, str) or not text:
        return CleanResult(text=text, changed=False)

    lines = split_lines(text)
    had_coauthors = any(is_coauthor_line(line) for line in lines)
    changed = False
    removed_bot = False

    kept: list[str] = []
    for line in lines:
        if is_coauthor_line(line) and is_bot_coauthor(line, patterns):
            changed = True
            removed_bot = True
            continue
        kept.append(line)

    has_coauthors_left = any(is_coauthor_line(line) for line in kept)
    if removed_bot or (had_coauthors and not has_coauthors_left):
        who = author() if callable(author) else author
        who = normalize_github_username(who) if isinstance(who, str) else ""
        if who and _remove_author_signoff(kept, who):
            changed = True

    while kept and is_blank(kept[-1]):
        kept.pop()
        changed = True

    return CleanResult(text="\n".join(kept), changed=changed)


class MessageCleaner:
    """Cleans messages against the store's current PatternSet."""

    def __init__(self, store: PatternStore, author_lookup: AuthorLookup | None = None) -> None:
        self.store = store
        self.author_lookup = author_lookup

    def _author(self) -> str | None:
        if self.author_lookup is None:
            return None
        try:
            return self.author_lookup()
        except Exception as e:
            print(f"[remove-pr-bots] Failed to get PR author username: {e}", file=sys.stderr)
            return None

    def clean(self, text: object) -> CleanResult:
        patterns = self.store.current
        return clean_commit_message(text, patterns, self._author)
