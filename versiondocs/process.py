"""Execution of external commands (git, docker)."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable, Optional

from .errors import CommandError
from .logging import get_logger

Runner = Callable[..., str]

_LOGGER = get_logger("process")


def run_command(args: Iterable[str], *, cwd: Optional[Path] = None) -> str:
    """Run ``args`` and return its combined stdout/stderr output.

    A non-zero exit status raises :class:`CommandError` carrying the output.
    """
    command = [str(arg) for arg in args]
    _LOGGER.debug("Running %s", " ".join(command))
    try:
        completed = subprocess.run(
            command,
            cwd=str(cwd) if cwd is not None else None,
            check=False,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
    except FileNotFoundError as exc:
        raise CommandError(command, 127, f"executable not found: {command[0]}") from exc

    output = completed.stdout or ""
    if completed.returncode != 0:
        raise CommandError(command, completed.returncode, output)
    return output


__all__ = ["Runner", "run_command"]
