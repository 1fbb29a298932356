import unittest

from question_import.utils.text_parser import (
    Solution,
    match_solutions,
    normalize_text,
    parse_options,
    resolve_answer_index,
    split_blocks,
    split_sections,
    split_stem_and_options,
)


class NormalizeTextTests(unittest.TestCase):
    def test_line_endings_and_page_markers(self) -> None:
        text = 'SAYFA 1\r\n1. Soru?\r\nA) x\rB) y\nPAGE 2 of 10\n'
        self.assertEqual(normalize_text(text), '\n1. Soru?\nA) x\nB) y\n\n')


class SplitSectionsTests(unittest.TestCase):
    def test_no_solutions(self) -> None:
        self.assertEqual(split_sections('1. Q?\nA) a\nB) b'), ('1. Q?\nA) a\nB) b', ''))

    def test_first_solution_line(self) -> None:
        questions, solutions = split_sections('1. Q?\nA) a\nB) b\n1. SOLUTION: because ANSWER: B')
        self.assertEqual(questions, '1. Q?\nA) a\nB) b\n')
        self.assertEqual(solutions, '1. SOLUTION: because ANSWER: B')

    def test_header_before_first_solution_wins(self) -> None:
        text = '1. Q?\nA) a\nB) b\nÇÖZÜMLER\n1. ÇÖZÜM: çünkü CEVAP: A'
        questions, solutions = split_sections(text)
        self.assertEqual(questions, '1. Q?\nA) a\nB) b\n')
        self.assertTrue(solutions.startswith('ÇÖZÜMLER'))

    def test_question_starting_with_solution_word_is_not_a_marker(self) -> None:
        text = '1. Solutions of x^2 = 4 are which?\nA) 2\nB) -2 and 2'
        self.assertEqual(split_sections(text), (text, ''))

        text = '1. Çözüm kümesi hangisidir?\nA) x\nB) y'
        self.assertEqual(split_sections(text), (text, ''))

    def test_header_must_stand_alone(self) -> None:
        text = '1. Which solutions are valid?\nA) a\nB) b'
        self.assertEqual(split_sections(text)[1], '')


class SplitBlocksTests(unittest.TestCase):
    def test_numbered_blocks(self) -> None:
        region = 'Deneme Sınavı\n1. First?\nA) a\n2. Second?\nB) b\n'
        self.assertEqual(split_blocks(region), [(1, 'First?\nA) a'), (2, 'Second?\nB) b')])

    def test_unnumbered_text_is_discarded(self) -> None:
        self.assertEqual(split_blocks('just a title\nand notes'), [])

    def test_number_needs_space(self) -> None:
        # "3.5" inside a stem does not start a new block
        blocks = split_blocks('1. Value is\n3.5 units?\nA) a')
        self.assertEqual(len(blocks), 1)


class ParseOptionsTests(unittest.TestCase):
    def test_multiline_options(self) -> None:
        self.assertEqual(parse_options('A) Ankara\nB) İstanbul\nC) İzmir'), ['Ankara', 'İstanbul', 'İzmir'])

    def test_inline_options(self) -> None:
        self.assertEqual(parse_options('A) 1 B) 2 C) 3 D) 4 E) 5'), ['1', '2', '3', '4', '5'])

    def test_alternative_marker_punctuation(self) -> None:
        self.assertEqual(parse_options('A. one\nB- two\nC: three'), ['one', 'two', 'three'])

    def test_wrapped_option_is_joined(self) -> None:
        self.assertEqual(parse_options('A) a long\noption\nB) short'), ['a long option', 'short'])

    def test_empty_segments_dropped(self) -> None:
        self.assertEqual(parse_options('A)\nB) b\nC) c'), ['b', 'c'])

    def test_no_marker(self) -> None:
        self.assertEqual(parse_options(''), [])
        self.assertEqual(parse_options('no options here'), [])


class SplitStemAndOptionsTests(unittest.TestCase):
    def test_options_on_own_lines(self) -> None:
        stem, raw = split_stem_and_options('Capital?\n  A) Ankara\nB) İzmir')
        self.assertEqual(stem, 'Capital?')
        self.assertEqual(raw, 'A) Ankara\nB) İzmir')

    def test_inline_options(self) -> None:
        stem, raw = split_stem_and_options('Capital? A) Ankara B) İzmir')
        self.assertEqual(stem, 'Capital?')
        self.assertEqual(raw, 'A) Ankara B) İzmir')

    def test_no_options(self) -> None:
        self.assertEqual(split_stem_and_options('Only a stem'), ('Only a stem', ''))


class MatchSolutionsTests(unittest.TestCase):
    def test_builds_map(self) -> None:
        region = (
            'SOLUTIONS\n'
            '1. SOLUTION: Ankara is the\ncapital.   ANSWER: A\n'
            '2. solution: Mars orbits the Sun. answer: b\n'
        )
        solutions = match_solutions(region)
        self.assertEqual(solutions[1], Solution('Ankara is the capital.', 'A'))
        self.assertEqual(solutions[2], Solution('Mars orbits the Sun.', 'B'))

    def test_turkish_markers(self) -> None:
        solutions = match_solutions('3. ÇÖZÜM: Lale Devri 1718. CEVAP: E')
        self.assertEqual(solutions[3].answer_letter, 'E')

    def test_answer_index(self) -> None:
        self.assertEqual(resolve_answer_index(Solution('', 'C'), 5), 2)
        self.assertEqual(resolve_answer_index(Solution('', 'E'), 4), 0)
        self.assertEqual(resolve_answer_index(None, 5), 0)


if __name__ == '__main__':
    unittest.main()
