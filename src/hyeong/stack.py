"""Numbered value stacks, three of them bound to byte streams."""

from __future__ import annotations

import logging
from typing import BinaryIO, Protocol

from .ast import Equals, Heart, HeartLeaf, HeartTree, LessThan, Nil, Return
from .errors import HyeongDecodeError
from .rational import NAN, HyeongRational
from .utf8 import read_scalar

logger = logging.getLogger(__name__)

STDIN = 0
STDOUT = 1
STDERR = 2
DEFAULT_SELECTED = 3

HeartResult = HeartLeaf


class HyeongStack(Protocol):
    def push_one(self, value: HyeongRational) -> None: ...

    def pop_one(self) -> HyeongRational: ...


class ValueStack(list):
    """Plain LIFO stack; popping when empty yields NaN."""

    def push_one(self, value: HyeongRational) -> None:
        self.append(value)

    def pop_one(self) -> HyeongRational:
        if not self:
            return NAN
        return self.pop()


class ReadStack:
    """Stack 0: pushed values first, then scalars decoded from the input."""

    def __init__(self, inner: BinaryIO) -> None:
        self.inner = inner
        self.stack = ValueStack()

    def push_one(self, value: HyeongRational) -> None:
        self.stack.push_one(value)

    def pop_one(self) -> HyeongRational:
        if self.stack:
            return self.stack.pop_one()
        try:
            return HyeongRational.from_int(read_scalar(self.inner))
        except (HyeongDecodeError, OSError) as exc:
            logger.debug("Input pop yields NaN: %s", exc)
            return NAN


class WriteStack:
    """Stacks 1 and 2: every pushed value is rendered to the stream."""

    def __init__(self, inner: BinaryIO) -> None:
        self.inner = inner

    def push_one(self, value: HyeongRational) -> None:
        self.inner.write(str(value).encode("utf-8", "surrogatepass"))

    def pop_one(self) -> HyeongRational:
        return NAN

    def flush(self) -> None:
        self.inner.flush()


class StackManager:
    """Owns every stack of a run plus the selection and exit state."""

    def __init__(self, stdin: ReadStack, stdout: WriteStack, stderr: WriteStack) -> None:
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr
        self.stacks: dict[int, ValueStack] = {DEFAULT_SELECTED: ValueStack()}
        self.selected = DEFAULT_SELECTED
        self._exit_code: int | None = None

    @classmethod
    def from_streams(cls, stdin: BinaryIO, stdout: BinaryIO, stderr: BinaryIO) -> "StackManager":
        return cls(ReadStack(stdin), WriteStack(stdout), WriteStack(stderr))

    @property
    def exit_code(self) -> int | None:
        return self._exit_code

    def stack(self, stack_id: int) -> HyeongStack:
        if stack_id == STDIN:
            return self.stdin
        if stack_id == STDOUT:
            return self.stdout
        if stack_id == STDERR:
            return self.stderr
        if stack_id < 0:
            raise ValueError(f"Stack ids are non-negative, got {stack_id}")
        stack = self.stacks.get(stack_id)
        if stack is None:
            stack = self.stacks[stack_id] = ValueStack()
        return stack

    def selected_stack(self) -> HyeongStack:
        return self.stack(self.selected)

    def snapshot(self) -> dict[int, list[HyeongRational]]:
        """Current contents of the buffered input and every plain stack."""
        out = {STDIN: list(self.stdin.stack)}
        for stack_id, stack in sorted(self.stacks.items()):
            out[stack_id] = list(stack)
        return out

    def _check_exit(self) -> bool:
        if self.selected not in (STDOUT, STDERR):
            return False
        if self._exit_code is None:
            self._exit_code = 0 if self.selected == STDOUT else 1
            logger.debug("Stack %d selected during arithmetic, exit code %d", self.selected, self._exit_code)
        return True

    def push(self, hangul: int, dots: int) -> None:
        self.selected_stack().push_one(HyeongRational.from_int(hangul * dots))

    def add(self, count: int, to: int) -> None:
        if self._check_exit():
            return
        source = self.selected_stack()
        total = HyeongRational.zero()
        for _ in range(count):
            total = total + source.pop_one()
        self.stack(to).push_one(total)

    def multiply(self, count: int, to: int) -> None:
        if self._check_exit():
            return
        source = self.selected_stack()
        total = HyeongRational.one()
        for _ in range(count):
            total = total * source.pop_one()
        self.stack(to).push_one(total)

    def negate(self, count: int, to: int) -> None:
        if self._check_exit():
            return
        source = self.selected_stack()
        values = [-source.pop_one() for _ in range(count)]
        for value in reversed(values):
            source.push_one(value)
        total = HyeongRational.zero()
        for value in values:
            total = total + value
        self.stack(to).push_one(total)

    def reciprocate(self, count: int, to: int) -> None:
        if self._check_exit():
            return
        source = self.selected_stack()
        values = [source.pop_one().reciprocal() for _ in range(count)]
        for value in reversed(values):
            source.push_one(value)
        total = HyeongRational.one()
        for value in values:
            total = total * value
        self.stack(to).push_one(total)

    def duplicate(self, count: int, into: int) -> None:
        source = self.selected_stack()
        value = source.pop_one()
        source.push_one(value)
        self.selected = into
        target = self.selected_stack()
        for _ in range(count):
            target.push_one(value)

    def process_hearts(self, heart: HeartTree, target: int) -> HeartResult:
        """Walk ``heart`` popping one value per branch node; return the leaf reached."""
        if isinstance(heart, (Heart, Return, Nil)):
            return heart
        value = self.selected_stack().pop_one()
        expected = HyeongRational.from_int(target)
        if isinstance(heart, LessThan):
            branch = heart.left if value < expected else heart.right
        elif isinstance(heart, Equals):
            branch = heart.left if value == expected else heart.right
        else:
            raise TypeError(f"Unsupported heart tree node {type(heart).__name__}")
        return self.process_hearts(branch, target)

    def flush(self) -> None:
        self.stdout.flush()
        self.stderr.flush()
