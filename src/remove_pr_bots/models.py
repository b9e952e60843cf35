from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class CoAuthorLine:
    name: str
    email: str
    local: str


@dataclasses.dataclass(frozen=True)
class SignOffLine:
    name: str
    email: str


@dataclasses.dataclass(frozen=True)
class CleanResult:
    text: object
    changed: bool = False
