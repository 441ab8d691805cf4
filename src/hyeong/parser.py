"""Lazy instruction parser for Hyeong source text."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from .ast import Equals, Heart, HeartLeaf, HeartTree, Instruction, LessThan, Nil, Operation, Return
from .lexer import BANG, HEART, QMARK, RETURN, SELF_ENDING, TRIGGERS, Token, classify, closing_operation, is_hangul_syllable
from .options import InterpreterOptions

logger = logging.getLogger(__name__)


def count_dots(tokens: Iterable[Token]) -> int:
    """Magnitude of a token run: the leading dot tokens only."""
    total = 0
    for token in tokens:
        if not token.is_dot:
            break
        total += token.dots
    return total


def _fold_equals(tree: list[HeartTree], count: int) -> None:
    for _ in range(count):
        right = tree.pop()
        left = tree.pop()
        tree.append(Equals(left, right))


def build_heart_tree(tokens: Iterable[Token]) -> HeartTree:
    """Reduce the heart tokens of a run into a single condition tree.

    ``!`` opens an equality, ``?`` closes every open equality, and whatever
    groups remain are folded right to left into nested less-than nodes. Only
    the first heart before each ``!``/``?`` counts.
    """
    current: HeartLeaf | None = None
    tree: list[HeartTree] = []
    op_count = 0

    for token in tokens:
        if token.is_dot:
            continue
        if token.kind == HEART:
            if current is None:
                current = Heart(token.heart_id)
        elif token.kind == RETURN:
            if current is None:
                current = Return()
        elif token.kind == BANG:
            tree.append(current if current is not None else Nil())
            current = None
            op_count += 1
        elif token.kind == QMARK:
            tree.append(current if current is not None else Nil())
            current = None
            _fold_equals(tree, op_count)
            op_count = 0

    tree.append(current if current is not None else Nil())
    _fold_equals(tree, op_count)

    while len(tree) > 1:
        right = tree.pop()
        left = tree.pop()
        tree.append(LessThan(left, right))
    return tree.pop() if tree else Nil()


class Parser:
    """Iterator of instructions over a source string.

    The next operation is always resolved one step ahead: the punctuation
    trailing an operation is only known once the following trigger syllable
    has been found.
    """

    def __init__(self, source: str, options: InterpreterOptions | None = None) -> None:
        self._code = source
        self._pos = 0
        self._recover_unclosed = (options or InterpreterOptions()).recover_unclosed
        self._tokens: list[Token] = []
        self._operation_cache = self._parse_hangul()

    @classmethod
    def from_str(cls, source: str, options: InterpreterOptions | None = None) -> "Parser":
        return cls(source, options)

    def __iter__(self) -> Iterator[Instruction]:
        return self

    def __next__(self) -> Instruction:
        op = self._operation_cache
        if op is None:
            raise StopIteration
        self._operation_cache = self._parse_hangul()

        tokens = self._tokens
        return Instruction(op, count_dots(tokens), build_heart_tree(tokens))

    def _parse_hangul(self) -> Operation | None:
        self._tokens = []
        code = self._code
        while True:
            start = None
            while self._pos < len(code):
                ch = code[self._pos]
                self._pos += 1
                if ch in TRIGGERS:
                    start = ch
                    break
                token = classify(ch)
                if token is not None:
                    self._tokens.append(token)

            if start is None:
                return None
            if start in SELF_ENDING:
                return Operation(SELF_ENDING[start])

            found = self._find_matching_end(start)
            if found is not None:
                op, end = found
                self._pos = end
                return op

            if not self._recover_unclosed:
                logger.debug("Unclosed %r at index %d ends the program text", start, self._pos - 1)
                self._pos = len(code)
                return None
            logger.debug("Skipping unclosed %r at index %d", start, self._pos - 1)

    def _find_matching_end(self, start: str) -> tuple[Operation, int] | None:
        code = self._code
        count = 0
        i = self._pos
        while i < len(code):
            ch = code[i]
            i += 1
            if is_hangul_syllable(ch):
                count += 1
            op_type = closing_operation(start, ch)
            if op_type is not None:
                assert count >= 1, "closing syllable must be a Hangul syllable"
                return Operation(op_type, count + 1), i
        return None


def parse(source: str, options: InterpreterOptions | None = None) -> list[Instruction]:
    return list(Parser(source, options))
