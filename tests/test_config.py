from __future__ import annotations

import json
from pathlib import Path

import pytest

from remove_pr_bots import config as config_mod
from remove_pr_bots.config import (
    PatternStore,
    author_from_config,
    infer_author_from_git,
    load_config,
    pattern_sources_from_config,
    reset_pattern_sources,
    save_pattern_sources,
)
from remove_pr_bots.patterns import DEFAULT_PATTERN_SOURCES, FALLBACK_PATTERN_SOURCE


def test_load_missing_config_is_empty(tmp_path: Path) -> None:
    assert load_config(tmp_path / "nope.json") == {}


def test_pattern_sources_from_config() -> None:
    assert pattern_sources_from_config({}) == list(DEFAULT_PATTERN_SOURCES)
    assert pattern_sources_from_config({"bot_regex_sources": None}) == list(DEFAULT_PATTERN_SOURCES)
    assert pattern_sources_from_config({"bot_regex_sources": ["a", "b"]}) == ["a", "b"]
    assert pattern_sources_from_config({"bot_regex_sources": []}) == []


def test_author_from_config() -> None:
    assert author_from_config({"author": " alice "}) == "alice"
    assert author_from_config({"author": ""}) is None
    assert author_from_config({}) is None


def test_save_and_reset_pattern_sources(tmp_path: Path) -> None:
    path = tmp_path / "sub" / "config.json"
    path.parent.mkdir()
    path.write_text(json.dumps({"author": "alice"}), encoding="utf-8")

    save_pattern_sources(path, ["renovate", r"\[bot\]"])
    cfg = load_config(path)
    assert cfg == {"author": "alice", "bot_regex_sources": ["renovate", r"\[bot\]"]}
    assert path.read_text(encoding="utf-8").endswith("\n")

    reset_pattern_sources(path)
    assert load_config(path)["bot_regex_sources"] == list(DEFAULT_PATTERN_SOURCES)


def test_save_pattern_sources_rejects_invalid(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    with pytest.raises(ValueError, match="Invalid regex"):
        save_pattern_sources(path, ["ok", "("])
    assert not path.exists()


def test_store_swaps_and_notifies(capsys: pytest.CaptureFixture[str]) -> None:
    store = PatternStore.from_config({"bot_regex_sources": ["("]})
    assert store.sources == [FALLBACK_PATTERN_SOURCE]
    assert "Invalid regex source skipped" in capsys.readouterr().err

    seen: list[list[str]] = []
    store.subscribe(lambda ps: seen.append(ps.sources))
    old = store.current
    new = store.update(["renovate"])
    assert store.current is new
    assert old.sources == [FALLBACK_PATTERN_SOURCE]
    assert seen == [["renovate"]]

    store.update(None)
    assert store.sources == list(DEFAULT_PATTERN_SOURCES)


def test_infer_author_from_git(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_mod, "run_git", lambda args, cwd: (0, "12345+Alice@users.noreply.github.com\n", ""))
    assert infer_author_from_git() == "alice"

    monkeypatch.setattr(config_mod, "run_git", lambda args, cwd: (0, "alice@example.com\n", ""))
    assert infer_author_from_git() is None

    monkeypatch.setattr(config_mod, "run_git", lambda args, cwd: (1, "", ""))
    assert infer_author_from_git() is None


def test_non_list_pattern_sources_fall_back_to_defaults() -> None:
    assert pattern_sources_from_config({"bot_regex_sources": 5}) == list(DEFAULT_PATTERN_SOURCES)
    assert pattern_sources_from_config({"bot_regex_sources": True}) == list(DEFAULT_PATTERN_SOURCES)
    assert pattern_sources_from_config({"bot_regex_sources": {"a": 1}}) == list(DEFAULT_PATTERN_SOURCES)
    assert pattern_sources_from_config({"bot_regex_sources": "renovate"}) == ["renovate"]
