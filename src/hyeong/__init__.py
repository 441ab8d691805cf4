"""hyeong public API."""

import logging

from .ast import Equals, Heart, Instruction, LessThan, Nil, Operation, OperationType, Return
from .errors import HyeongCancelled, HyeongDecodeError, HyeongError, HyeongFlushError, HyeongRuntimeError
from .options import InterpreterOptions
from .parser import Parser, parse
from .processor import Processor, run_source
from .rational import NAN, HyeongRational
from .stack import ReadStack, StackManager, WriteStack
from .utf8 import read_scalar

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "parse",
    "Parser",
    "Processor",
    "run_source",
    "StackManager",
    "ReadStack",
    "WriteStack",
    "HyeongRational",
    "NAN",
    "read_scalar",
    "InterpreterOptions",
    "Instruction",
    "Operation",
    "OperationType",
    "Heart",
    "Return",
    "Nil",
    "Equals",
    "LessThan",
    "HyeongError",
    "HyeongDecodeError",
    "HyeongRuntimeError",
    "HyeongFlushError",
    "HyeongCancelled",
]
