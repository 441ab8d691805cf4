"""Instruction loop: dispatch, heart branching and label memo."""

from __future__ import annotations

import logging
from typing import BinaryIO, Iterable, Iterator

from .ast import Heart, Instruction, OperationType, Return
from .errors import HyeongCancelled, HyeongFlushError
from .options import InterpreterOptions
from .parser import Parser
from .stack import StackManager

logger = logging.getLogger(__name__)


class Processor:
    """Runs a (possibly lazy) instruction stream against a stack manager.

    Instructions are pulled from ``inner`` only when the program counter
    reaches the end of the cache; once ``inner`` is exhausted the counter
    wraps to the first instruction, so programs loop until they exit.
    """

    def __init__(
        self,
        inner: Iterable[Instruction],
        stacks: StackManager,
        options: InterpreterOptions | None = None,
    ) -> None:
        self._inner: Iterator[Instruction] = iter(inner)
        self.stacks = stacks
        self.options = options or InterpreterOptions()
        self.instructions: list[Instruction] = []
        self.position = 0
        self.last_jump: int | None = None
        self.labels: dict[tuple[int, int], int] = {}
        self.steps = 0
        self._exhausted = False
        self._flushed = False

    @classmethod
    def from_source(
        cls,
        source: str,
        stdin: BinaryIO,
        stdout: BinaryIO,
        stderr: BinaryIO,
        options: InterpreterOptions | None = None,
    ) -> "Processor":
        return cls(Parser(source, options), StackManager.from_streams(stdin, stdout, stderr), options)

    @property
    def exit_code(self) -> int | None:
        return self.stacks.exit_code

    def _fetch(self) -> Instruction | None:
        if self.position >= len(self.instructions):
            instr = None if self._exhausted else next(self._inner, None)
            if instr is None:
                self._exhausted = True
                if not self.instructions:
                    return None
                logger.debug("End of program text after %d instructions, wrapping", len(self.instructions))
                self.position = 0
            else:
                self.instructions.append(instr)
        return self.instructions[self.position]

    def _dispatch(self, instr: Instruction) -> None:
        stacks = self.stacks
        count = instr.hangul_count
        dots = instr.dots
        op_type = instr.operation_type
        if op_type is OperationType.PUSH:
            stacks.push(count, dots)
        elif op_type is OperationType.ADD:
            stacks.add(count, dots)
        elif op_type is OperationType.MULTIPLY:
            stacks.multiply(count, dots)
        elif op_type is OperationType.NEGATE:
            stacks.negate(count, dots)
        elif op_type is OperationType.RECIPROCATE:
            stacks.reciprocate(count, dots)
        elif op_type is OperationType.DUPLICATE:
            stacks.duplicate(count, dots)
        else:
            raise AssertionError(f"unknown operation {op_type!r}")

    def advance(self) -> int | None:
        """Execute one instruction; return the exit code once one is decided."""
        instr = self._fetch()
        if instr is None:
            # Nothing to execute, ever: treat as a clean exit.
            return 0
        self.steps += 1

        self._dispatch(instr)
        result = self.stacks.process_hearts(instr.heart_tree, instr.hangul_times_dots)

        if isinstance(result, Heart):
            label = (instr.dots, result.id)
            target = self.labels.setdefault(label, self.position)
            if target != self.position:
                logger.debug("Jump %d -> %d on label %s", self.position, target, label)
                self.last_jump = self.position
                self.position = target
            else:
                self.position += 1
        elif isinstance(result, Return) and self.last_jump is not None:
            logger.debug("Return %d -> %d", self.position, self.last_jump)
            self.position = self.last_jump
        else:
            self.position += 1

        return self.stacks.exit_code

    def run(self) -> int:
        """Run to completion and flush the output streams exactly once.

        Raises `HyeongCancelled` when `max_steps` runs out and
        `HyeongFlushError` when the final flush fails.
        """
        max_steps = self.options.max_steps
        try:
            while True:
                if max_steps is not None and self.steps >= max_steps:
                    raise HyeongCancelled(steps=self.steps)
                exit_code = self.advance()
                if exit_code is not None:
                    break
        finally:
            self.flush()
        logger.debug("Program exited with %d after %d steps", exit_code, self.steps)
        return exit_code

    def flush(self) -> None:
        if self._flushed:
            return
        self._flushed = True
        try:
            self.stacks.flush()
        except OSError as exc:
            raise HyeongFlushError(message=f"Failed to flush output: {exc}", exit_code=self.exit_code) from exc


def run_source(
    source: str,
    stdin: BinaryIO,
    stdout: BinaryIO,
    stderr: BinaryIO,
    options: InterpreterOptions | None = None,
) -> int:
    return Processor.from_source(source, stdin, stdout, stderr, options).run()
