"""External command execution.

Runs the container tool as an opaque subprocess. Every failure mode is
converted into ``SubprocessFailure`` (recoverable) or, for the startup probe,
``DaemonUnreachable`` (fatal).
"""

from __future__ import annotations

import subprocess

from loguru import logger

from .commands import Prompt
from .errors import DaemonUnreachable, SubprocessFailure

DEFAULT_EXECUTABLE = "docker"
DEFAULT_TIMEOUT_SECONDS = 60.0
PROBE_TIMEOUT_SECONDS = 15.0


def _first_line(data: bytes) -> str:
    for line in data.decode("utf-8", errors="replace").splitlines():
        stripped = line.strip()
        if stripped:
            return stripped
    return ""


def probe_daemon(executable: str = DEFAULT_EXECUTABLE, timeout_seconds: float = PROBE_TIMEOUT_SECONDS) -> None:
    """Check that the daemon answers ``<executable> info``."""
    try:
        proc = subprocess.run(
            [executable, "info"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
            timeout=timeout_seconds,
        )
    except FileNotFoundError as exc:
        raise DaemonUnreachable(f"{executable}: executable not found") from exc
    except subprocess.TimeoutExpired as exc:
        raise DaemonUnreachable(f"{executable} info timed out after {timeout_seconds:g}s") from exc
    except OSError as exc:
        raise DaemonUnreachable(f"{executable}: cannot be executed ({exc.strerror or exc})") from exc
    if proc.returncode != 0:
        raise DaemonUnreachable(f"Failed to contact daemon ({executable} info exited with {proc.returncode})")
    logger.debug("Daemon probe succeeded for {}", executable)


class CommandRunner:
    """Execute prompts against one executable with a fixed timeout."""

    def __init__(self, executable: str = DEFAULT_EXECUTABLE, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self.executable = executable
        self.timeout_seconds = timeout_seconds

    def argv(self, prompt: Prompt) -> list[str]:
        return [self.executable, *prompt.arguments()]

    def describe(self, prompt: Prompt) -> str:
        return " ".join(self.argv(prompt))

    def run(self, prompt: Prompt) -> list[str]:
        """Run ``prompt`` and return its stdout lines.

        Raises ``SubprocessFailure`` on non-zero exit, timeout, an executable
        that is missing or cannot be run, or output that is not valid UTF-8.
        """
        argv = self.argv(prompt)
        logger.info("Running {}", argv)
        try:
            proc = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False,
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError as exc:
            raise SubprocessFailure(f"{self.executable}: executable not found") from exc
        except subprocess.TimeoutExpired as exc:
            logger.warning("{} timed out after {}s", argv, self.timeout_seconds)
            raise SubprocessFailure(f"'{' '.join(argv)}' timed out after {self.timeout_seconds:g}s") from exc
        except OSError as exc:
            raise SubprocessFailure(f"{self.executable}: cannot be executed ({exc.strerror or exc})") from exc

        logger.info("{} exited with {}", argv, proc.returncode)
        if proc.returncode != 0:
            detail = _first_line(proc.stderr) or f"exit status {proc.returncode}"
            raise SubprocessFailure(f"'{' '.join(argv)}' failed: {detail}")
        try:
            text = proc.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SubprocessFailure(f"'{' '.join(argv)}' produced output that is not valid UTF-8") from exc
        return text.splitlines()
