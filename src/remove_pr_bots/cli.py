from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .cleaner import MessageCleaner
from .config import (
    PatternStore,
    author_from_config,
    infer_author_from_git,
    load_config,
    pattern_sources_from_config,
    reset_pattern_sources,
    save_pattern_sources,
)
from .patterns import parse_pattern_lines, validate_patterns


def _build_clean_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="remove-pr-bots clean",
        description="Remove bot Co-authored-by lines (and the PR author's sign-off) from a commit message.",
    )
    p.add_argument("file", type=Path, nargs="?", default=None, help="Message file (default: stdin).")
    p.add_argument("--config", type=Path, default=Path("config.json"), help="Path to config.json.")
    p.add_argument("--pattern", type=str, action="append", default=None, help="Bot regex (repeatable; overrides config).")
    p.add_argument("--author", type=str, default="", help="PR author username (overrides config `author`).")
    p.add_argument(
        "--author-from-git",
        action="store_true",
        help="Fall back to the GitHub username in `git config --global user.email` (noreply addresses only).",
    )
    mode = p.add_mutually_exclusive_group()
    mode.add_argument("--in-place", action="store_true", help="Rewrite FILE when the message changes.")
    mode.add_argument("--check", action="store_true", help="Exit 1 if the message would change; print nothing.")
    return p


def _clean_main(argv: list[str]) -> int:
    p = _build_clean_parser()
    args = p.parse_args(argv)
    if args.in_place and args.file is None:
        p.error("--in-place requires FILE")

    try:
        config = load_config(args.config)
        if args.file is None:
            text = sys.stdin.read()
        else:
            text = args.file.read_text(encoding="utf-8")
    except (OSError, ValueError) as e:
        print(f"[remove-pr-bots] {e}", file=sys.stderr)
        return 1

    store = PatternStore(args.pattern if args.pattern else pattern_sources_from_config(config))

    def author_lookup() -> str | None:
        author = (args.author or "").strip() or author_from_config(config)
        if not author and args.author_from_git:
            author = infer_author_from_git()
        return author

    result = MessageCleaner(store, author_lookup).clean(text)
    # git message files end with a newline; that alone is not a change
    changed = result.changed and result.text != text and result.text + "\n" != text

    if args.check:
        return 1 if changed else 0
    if args.in_place:
        if changed:
            args.file.write_text(result.text + "\n", encoding="utf-8")
        return 0
    print(result.text)
    return 0


def _patterns_main(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="remove-pr-bots patterns", description="Show or edit the bot regex list.")
    p.add_argument("action", choices=["show", "set", "reset", "check"], nargs="?", default="show")
    p.add_argument("sources", nargs="*", help="Regex sources (for `set` and `check`).")
    p.add_argument("--config", type=Path, default=Path("config.json"), help="Path to config.json.")
    p.add_argument("--from-file", type=str, default="", help="Read regex sources one per line from a file (`-` for stdin).")
    args = p.parse_args(argv)

    try:
        sources = parse_pattern_lines("\n".join(args.sources))
        if args.from_file == "-":
            sources += parse_pattern_lines(sys.stdin.read())
        elif args.from_file:
            sources += parse_pattern_lines(Path(args.from_file).read_text(encoding="utf-8"))
        if args.action == "show":
            for src in pattern_sources_from_config(load_config(args.config)):
                print(src)
            return 0
        if args.action == "reset":
            reset_pattern_sources(args.config)
            print("Reset to defaults")
            return 0
        if args.action == "check":
            errors = validate_patterns(sources)
            for err in errors:
                print(f"Invalid regex: {err}", file=sys.stderr)
            return 1 if errors else 0
        if not sources:
            p.error("`set` needs at least one regex")
        save_pattern_sources(args.config, sources)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 1
    except OSError as e:
        print(f"[remove-pr-bots] {e}", file=sys.stderr)
        return 1
    print("Saved")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if not argv or argv[0] in ("-h", "--help"):
        print("usage: remove-pr-bots <command> [options]")
        print("")
        print("commands:")
        print("  clean      Clean a commit message (file or stdin).")
        print("  patterns   Show, set, reset or check the bot regex list.")
        print("")
        print("Run `remove-pr-bots <command> --help` for command-specific options.")
        return 0
    if argv[0] == "clean":
        return _clean_main(argv[1:])
    if argv[0] == "patterns":
        return _patterns_main(argv[1:])
    print(f"remove-pr-bots: unknown command {argv[0]!r}", file=sys.stderr)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
