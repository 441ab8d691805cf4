from __future__ import annotations

import unittest

from hyeong.ast import Equals, Heart, Instruction, LessThan, Nil, Operation, OperationType, Return
from hyeong.lexer import tokenize
from hyeong.options import InterpreterOptions
from hyeong.parser import Parser, build_heart_tree, count_dots, parse

PUSH = OperationType.PUSH
ADD = OperationType.ADD
MUL = OperationType.MULTIPLY
NEG = OperationType.NEGATE
RECIP = OperationType.RECIPROCATE
DUP = OperationType.DUPLICATE

RECOVER = InterpreterOptions(recover_unclosed=True)


def _instr(op_type: OperationType, count: int, dots: int, hearts=Nil()) -> Instruction:
    return Instruction(Operation(op_type, count), dots, hearts)


class ParserInstructionTests(unittest.TestCase):
    def test_six_self_ending_syllables(self) -> None:
        self.assertEqual(
            parse("형항핫흣흡흑"),
            [
                _instr(PUSH, 1, 0),
                _instr(ADD, 1, 0),
                _instr(MUL, 1, 0),
                _instr(NEG, 1, 0),
                _instr(RECIP, 1, 0),
                _instr(DUP, 1, 0),
            ],
        )

    def test_simple_open_syllable(self) -> None:
        self.assertEqual(parse("혀엉..."), [_instr(PUSH, 2, 3)])

    def test_self_ending_with_dots(self) -> None:
        self.assertEqual(
            parse("형 항. 핫... 흡.. 흑. 흣....."),
            [
                _instr(PUSH, 1, 0),
                _instr(ADD, 1, 1),
                _instr(MUL, 1, 3),
                _instr(RECIP, 1, 2),
                _instr(DUP, 1, 1),
                _instr(NEG, 1, 5),
            ],
        )

    def test_multiple_operations(self) -> None:
        self.assertEqual(
            parse("혀엉... 흑. 흐읏..... 하아아앙..."),
            [
                _instr(PUSH, 2, 3),
                _instr(DUP, 1, 1),
                _instr(NEG, 2, 5),
                _instr(ADD, 4, 3),
            ],
        )

    def test_open_syllable_counts_every_scanned_hangul(self) -> None:
        self.assertEqual(parse("혀내 이름은 메구밍!엉..."), [_instr(PUSH, 9, 3)])

    def test_long_prose_between_open_and_closing_syllables(self) -> None:
        source = (
            "혀내 이름은 메구밍!엉... 흐아크 위저드를 생업으로 삼고 있으며읍..... "
            "최강의 공격마법, 하폭렬마법앙....을 흐으으... 펼치는 자아읏...!"
        )
        self.assertEqual(
            parse(source),
            [
                _instr(PUSH, 9, 3),
                _instr(RECIP, 17, 5),
                _instr(ADD, 6, 4),
                _instr(NEG, 9, 3, Equals(Nil(), Nil())),
            ],
        )

    def test_triggers_inside_open_scan_are_counted_not_executed(self) -> None:
        self.assertEqual(parse("혀하앙... 흐으읏.. 흡 흐윽...... 혀어어엉......."), [_instr(PUSH, 13, 7)])
        self.assertEqual(parse("혀일....이삼사오육앙♥앗?!읏♡읍...엉"), [_instr(PUSH, 12, 0)])

    def test_unclosed_open_syllable_ends_program_text(self) -> None:
        self.assertEqual(parse("흐으응... 너무 커엇..."), [])
        self.assertEqual(parse("혀형하앙... 흐읏.. 흡 흐윽...... 하앗."), [])
        self.assertEqual(parse("형.. 혀 항.."), [_instr(PUSH, 1, 2)])

    def test_unclosed_open_syllable_recovery_mode(self) -> None:
        self.assertEqual(parse("흐으응... 너무 커엇...", RECOVER), [])
        self.assertEqual(
            parse("혀형하앙... 흐읏.. 흡 흐윽...... 하앗.", RECOVER),
            [
                _instr(PUSH, 1, 0),
                _instr(ADD, 2, 3),
                _instr(NEG, 2, 2),
                _instr(RECIP, 1, 0),
                _instr(DUP, 2, 6),
                _instr(MUL, 2, 1),
            ],
        )

    def test_three_dot_glyphs(self) -> None:
        self.assertEqual(parse("하앗. … ⋯ ⋮"), [_instr(MUL, 2, 10)])

    def test_magnitude_is_leading_dot_run_only(self) -> None:
        self.assertEqual(parse("형..♥...…"), [_instr(PUSH, 1, 2, Heart(0))])
        self.assertEqual(parse("형!..."), [_instr(PUSH, 1, 0, Equals(Nil(), Nil()))])
        self.assertEqual(count_dots(tokenize(".…..?.")), 6)
        self.assertEqual(count_dots(tokenize("")), 0)

    def test_leading_text_before_first_operation_is_ignored(self) -> None:
        self.assertEqual(parse("...♥! 형."), [_instr(PUSH, 1, 1)])

    def test_hearts_equals_with_return_suffix(self) -> None:
        self.assertEqual(parse("하앗....♥♡!"), [_instr(MUL, 2, 4, Equals(Heart(0), Nil()))])

    def test_hearts_less_than_over_equals_group(self) -> None:
        self.assertEqual(
            parse("하아앗.. . ? ♥ ! 💖"),
            [_instr(MUL, 3, 3, LessThan(Nil(), Equals(Heart(0), Heart(3))))],
        )
        self.assertEqual(
            parse("하아앗...! ♥ ? 💖"),
            [_instr(MUL, 3, 3, LessThan(Equals(Nil(), Heart(0)), Heart(3)))],
        )

    def test_hearts_nested_equals(self) -> None:
        self.assertEqual(
            parse("흐읏...!♡!"),
            [_instr(NEG, 2, 3, Equals(Nil(), Equals(Return(), Nil())))],
        )

    def test_less_than_fold_is_right_to_left(self) -> None:
        self.assertEqual(build_heart_tree(tokenize("?♥?💕")), LessThan(Nil(), LessThan(Heart(0), Heart(2))))
        self.assertEqual(build_heart_tree(tokenize("♥?💕")), LessThan(Heart(0), Heart(2)))

    def test_first_heart_wins_until_bang_or_qmark(self) -> None:
        self.assertEqual(build_heart_tree(tokenize("♥💕!")), Equals(Heart(0), Nil()))
        self.assertEqual(build_heart_tree(tokenize("♡💕")), Return())
        self.assertEqual(build_heart_tree(tokenize("💝♥")), Heart(10))

    def test_lone_question_mark_still_pushes_a_leaf(self) -> None:
        self.assertEqual(build_heart_tree(tokenize("?")), LessThan(Nil(), Nil()))
        self.assertEqual(build_heart_tree(tokenize("")), Nil())
        self.assertEqual(build_heart_tree(tokenize("...")), Nil())

    def test_heart_tokens_between_dots_still_build_tree(self) -> None:
        self.assertEqual(build_heart_tree(tokenize(".♥.!.")), Equals(Heart(0), Nil()))

    def test_filler_does_not_change_instructions(self) -> None:
        plain = "형..♥항.흑...혀어엉?.💖"
        noisy = "abc 형 xyz..  ♥\n항 가나 . 흑 1 2 ...\t혀어엉 ~ ? 다 .💖 end"
        self.assertEqual(parse(noisy), parse(plain))

    def test_parser_is_lazy_iterator(self) -> None:
        parser = Parser.from_str("형.항..")
        self.assertIs(iter(parser), parser)
        self.assertEqual(next(parser), _instr(PUSH, 1, 1))
        self.assertEqual(next(parser), _instr(ADD, 1, 2))
        with self.assertRaises(StopIteration):
            next(parser)
        with self.assertRaises(StopIteration):
            next(parser)

    def test_instruction_accessors(self) -> None:
        (instr,) = parse("하아앗....♥")
        self.assertEqual(instr.operation_type, MUL)
        self.assertEqual(instr.hangul_count, 3)
        self.assertEqual(instr.magnitude, 4)
        self.assertEqual(instr.hangul_times_dots, 12)
        self.assertEqual(instr.heart_tree, Heart(0))


if __name__ == "__main__":
    unittest.main()
