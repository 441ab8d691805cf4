"""Structured error types for the decode/runtime boundary."""

from __future__ import annotations

from dataclasses import dataclass


class HyeongError(Exception):
    """Base class for structured hyeong errors."""


class HyeongDecodeError(HyeongError, ValueError):
    """Malformed or truncated UTF-8 on an input stream."""


class HyeongRuntimeError(HyeongError):
    """Generic failure that ends a run."""


@dataclass(frozen=True)
class HyeongFlushError(HyeongRuntimeError):
    """Final flush of the output streams failed.

    The program's exit code was already decided when this happens and is kept
    untouched in ``exit_code`` (``None`` if the run ended without one).
    """

    message: str
    exit_code: int | None = None

    def __str__(self) -> str:
        if self.exit_code is None:
            return self.message
        return f"{self.message} (exit code {self.exit_code})"


@dataclass(frozen=True)
class HyeongCancelled(HyeongRuntimeError):
    """Run stopped by the embedding before the program decided an exit code."""

    steps: int

    def __str__(self) -> str:
        return f"Execution cancelled after {self.steps} steps"
