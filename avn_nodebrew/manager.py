# avn_nodebrew/manager.py
from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass

from .config import (
    DEFAULT_COMMAND,
    DEFAULT_LIST_ARGS,
    DEFAULT_NULL_SINK,
    DEFAULT_TIMEOUT,
    DEFAULT_USE_ARGS,
    ManagerConfig,
)


class ExternalToolError(Exception):
    """The version manager could not be run or exited non-zero"""

    def __init__(self, message: str, stderr: str = "", returncode: int | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr
        self.returncode = returncode


@dataclass(frozen=True)
class VersionManager:
    command: str = DEFAULT_COMMAND
    list_args: tuple[str, ...] = tuple(DEFAULT_LIST_ARGS)
    use_args: tuple[str, ...] = tuple(DEFAULT_USE_ARGS)
    null_sink: str = DEFAULT_NULL_SINK
    timeout: float | None = DEFAULT_TIMEOUT

    @classmethod
    def from_config(cls, cfg: ManagerConfig) -> VersionManager:
        return cls(
            command=cfg.command,
            list_args=tuple(cfg.list_args),
            use_args=tuple(cfg.use_args),
            null_sink=cfg.null_sink,
            timeout=cfg.timeout,
        )

    def list_output(self) -> str:
        """
        Run `<command> list` and return its stdout.

        Raises ExternalToolError when the process cannot be started,
        times out, or exits non-zero.
        """
        argv = [self.command, *self.list_args]
        try:
            proc = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            # captured output on timeout can be bytes even with text=True
            stderr = e.stderr or ""
            if isinstance(stderr, bytes):
                stderr = stderr.decode("utf-8", errors="replace")
            raise ExternalToolError(
                f"{self.command} command error: timed out after {e.timeout}s",
                stderr=stderr,
            ) from e
        except OSError as e:
            raise ExternalToolError(
                f"{self.command} command error: {e}", stderr=str(e)
            ) from e

        if proc.returncode != 0:
            stderr = proc.stderr or ""
            raise ExternalToolError(
                f"{self.command} command error: {stderr.strip()}",
                stderr=stderr,
                returncode=proc.returncode,
            )
        return proc.stdout or ""

    def use_command(self, version: str) -> str:
        parts = [self.command, *self.use_args, version]
        argv = " ".join(shlex.quote(part) for part in parts)
        return f"{argv} > {shlex.quote(self.null_sink)};"
