"""Interpreter configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InterpreterOptions:
    """Knobs an embedding may set on a run.

    - `recover_unclosed`: skip an open syllable that never closes and keep
      scanning after it, instead of ending the program text there.
    - `max_steps`: cancel the run after this many processor steps.
    """

    recover_unclosed: bool = False
    max_steps: int | None = None

    def __post_init__(self) -> None:
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {self.max_steps}")
