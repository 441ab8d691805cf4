"""Instruction and heart-tree nodes produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class OperationType(str, Enum):
    PUSH = "push"  # 형
    ADD = "add"  # 항
    MULTIPLY = "multiply"  # 핫
    NEGATE = "negate"  # 흣
    RECIPROCATE = "reciprocate"  # 흡
    DUPLICATE = "duplicate"  # 흑


@dataclass(frozen=True)
class Operation:
    op_type: OperationType
    hangul_count: int = 1

    def __post_init__(self) -> None:
        if self.hangul_count < 1:
            raise ValueError("Operation repeat count must be at least 1")


@dataclass(frozen=True)
class Heart:
    id: int


@dataclass(frozen=True)
class Return:
    pass


@dataclass(frozen=True)
class Nil:
    pass


@dataclass(frozen=True)
class Equals:
    left: "HeartTree"
    right: "HeartTree"


@dataclass(frozen=True)
class LessThan:
    left: "HeartTree"
    right: "HeartTree"


HeartLeaf = Union[Heart, Return, Nil]
HeartTree = Union[Heart, Return, Nil, Equals, LessThan]


@dataclass(frozen=True)
class Instruction:
    operation: Operation
    dots: int = 0
    hearts: HeartTree = Nil()

    @property
    def operation_type(self) -> OperationType:
        return self.operation.op_type

    @property
    def hangul_count(self) -> int:
        return self.operation.hangul_count

    @property
    def magnitude(self) -> int:
        return self.dots

    @property
    def heart_tree(self) -> HeartTree:
        return self.hearts

    @property
    def hangul_times_dots(self) -> int:
        """Comparison target used when evaluating the heart tree."""
        return self.operation.hangul_count * self.dots
