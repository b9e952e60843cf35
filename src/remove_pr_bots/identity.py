from __future__ import annotations

import re

from .models import SignOffLine

_NOREPLY_DOMAIN = "users.noreply.github.com"
_NON_USERNAME_CHARS_RE = re.compile(r"[^A-Za-z0-9_-]+")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_github_username(username: str) -> str:
    return username.strip().lstrip("@").lower()


def github_username_from_email(email: str) -> str:
    """
    Extract GitHub username from GitHub noreply patterns:
      - username@users.noreply.github.com
      - 123456+username@users.noreply.github.com
    Returns normalized username or "".
    """
    e = normalize_email(email)
    if not e:
        return ""
    if not e.endswith("@" + _NOREPLY_DOMAIN):
        return ""
    local = e.split("@", 1)[0]
    if "+" in local:
        local = local.split("+", 1)[1]
    return normalize_github_username(local)


def username_candidates(email: str, name: str) -> set[str]:
    """
    Usernames a `Name <email>` footer could plausibly belong to.

    The email local part, both halves of a `id+username` local part, and the
    display name squashed down to username characters.
    """
    out: set[str] = set()
    local_raw, _, domain = (email or "").partition("@")
    local = local_raw.lower()
    dom = domain.lower()

    if local:
        out.add(local)
    if "+" in local:
        left, right = local.split("+", 1)
        if left:
            out.add(left)
        if right:
            out.add(right)
        # id+username@users.noreply.github.com
        if right and dom.endswith(_NOREPLY_DOMAIN):
            out.add(right)

    name_candidate = _NON_USERNAME_CHARS_RE.sub("", name or "").lower()
    if name_candidate:
        out.add(name_candidate)
    return out


def signoff_belongs_to(signoff: SignOffLine, author: str) -> bool:
    if not author:
        return False
    name = signoff.name.lower()
    if author in username_candidates(signoff.email, signoff.name):
        return True
    return name == author or f"@{author}" in name
