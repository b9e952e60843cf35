from __future__ import annotations

import re

from .models import CoAuthorLine, SignOffLine

_NEWLINE_RE = re.compile(r"\r?\n")
_COAUTHOR_LABEL_RE = re.compile(r"^\s*Co-authored-by:\s+", re.IGNORECASE)
_COAUTHOR_RE = re.compile(r"^\s*Co-authored-by:\s*(.+?)\s*<([^>]+)>\s*$", re.IGNORECASE)
# "Signed-off-by", "Signed off by", "Signed-off by", ...
_SIGNOFF_LABEL_RE = re.compile(r"^\s*Signed[-\s]*off[-\s]*by:\s+", re.IGNORECASE)
_SIGNOFF_RE = re.compile(r"^\s*Signed[-\s]*off[-\s]*by:\s*(.+?)\s*<([^>]+)>\s*$", re.IGNORECASE)
_SEPARATOR_RE = re.compile(r"^\s*-{3,}\s*$")


def split_lines(text: str) -> list[str]:
    return _NEWLINE_RE.split(text)


def is_blank(line: str) -> bool:
    return line.strip() == ""


def is_coauthor_line(line: str) -> bool:
    return _COAUTHOR_LABEL_RE.match(line) is not None


def parse_coauthor(line: str) -> CoAuthorLine | None:
    m = _COAUTHOR_RE.match(line)
    if not m:
        return None
    name = m.group(1).strip()
    email = m.group(2).strip()
    return CoAuthorLine(name=name, email=email, local=email.split("@", 1)[0])


def is_signoff_line(line: str) -> bool:
    return _SIGNOFF_LABEL_RE.match(line) is not None


def parse_signoff(line: str) -> SignOffLine | None:
    m = _SIGNOFF_RE.match(line)
    if not m:
        return None
    return SignOffLine(name=m.group(1).strip(), email=m.group(2).strip())


def is_separator_line(line: str) -> bool:
    return _SEPARATOR_RE.match(line) is not None
