"""Character classes of the Hyeong language."""

from __future__ import annotations

from dataclasses import dataclass

from .ast import OperationType

HANGUL_FIRST = "\uac00"  # 가
HANGUL_LAST = "\ud7a3"  # 힣

SELF_ENDING = {
    "형": OperationType.PUSH,
    "항": OperationType.ADD,
    "핫": OperationType.MULTIPLY,
    "흣": OperationType.NEGATE,
    "흡": OperationType.RECIPROCATE,
    "흑": OperationType.DUPLICATE,
}

# Open syllable -> the closing syllables that may finish it.
OPEN_ENDINGS = {
    "혀": {"엉": OperationType.PUSH},
    "하": {"앙": OperationType.ADD, "앗": OperationType.MULTIPLY},
    "흐": {"읏": OperationType.NEGATE, "읍": OperationType.RECIPROCATE, "윽": OperationType.DUPLICATE},
}

TRIGGERS = frozenset(SELF_ENDING) | frozenset(OPEN_ENDINGS)

HEART_MARKS = (
    "\u2665",  # ♥
    "\u2764",  # ❤
    "\U0001f495",  # 💕
    "\U0001f496",  # 💖
    "\U0001f497",  # 💗
    "\U0001f498",  # 💘
    "\U0001f499",  # 💙
    "\U0001f49a",  # 💚
    "\U0001f49b",  # 💛
    "\U0001f49c",  # 💜
    "\U0001f49d",  # 💝
)
RETURN_HEART = "\u2661"  # ♡
THREE_DOTS = frozenset({"\u2026", "\u22ee", "\u22ef"})  # … ⋮ ⋯

_HEART_IDS = {mark: idx for idx, mark in enumerate(HEART_MARKS)}

DOT = "DOT"
THREE_DOT = "THREE_DOTS"
HEART = "HEART"
RETURN = "RETURN"
BANG = "BANG"
QMARK = "QMARK"

_SINGLE_TOKENS = {
    ".": DOT,
    RETURN_HEART: RETURN,
    "!": BANG,
    "?": QMARK,
}


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    heart_id: int | None = None

    @property
    def is_dot(self) -> bool:
        return self.kind in {DOT, THREE_DOT}

    @property
    def dots(self) -> int:
        if self.kind == DOT:
            return 1
        if self.kind == THREE_DOT:
            return 3
        return 0


def is_hangul_syllable(ch: str) -> bool:
    return HANGUL_FIRST <= ch <= HANGUL_LAST


def is_self_ending(ch: str) -> bool:
    return ch in SELF_ENDING


def closing_operation(start: str, ch: str) -> OperationType | None:
    """Operation that ``ch`` closes for open syllable ``start``, if any."""
    return OPEN_ENDINGS[start].get(ch)


def classify(ch: str) -> Token | None:
    """Token for a punctuation character, or None for inert filler."""
    kind = _SINGLE_TOKENS.get(ch)
    if kind is not None:
        return Token(kind, ch)
    if ch in THREE_DOTS:
        return Token(THREE_DOT, ch)
    heart_id = _HEART_IDS.get(ch)
    if heart_id is not None:
        return Token(HEART, ch, heart_id)
    return None


def tokenize(text: str) -> list[Token]:
    """Classify every character of ``text``, dropping filler."""
    tokens: list[Token] = []
    for ch in text:
        token = classify(ch)
        if token is not None:
            tokens.append(token)
    return tokens
