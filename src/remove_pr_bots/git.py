from __future__ import annotations

import subprocess
from pathlib import Path


def run_git(args: list[str], cwd: Path, timeout_s: int = 30) -> tuple[int, str, str]:
    try:
        proc = subprocess.run(
            ["git", *args],
            cwd=str(cwd),
            capture_output=True,
            text=True,
            timeout=timeout_s,
        )
    except FileNotFoundError as e:
        return 127, "", str(e)
    return proc.returncode, proc.stdout, proc.stderr
