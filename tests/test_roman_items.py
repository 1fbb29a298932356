import unittest

from question_import.utils.roman_items import (
    MULTILINE_TAIL_RE,
    extract_inline_items,
    extract_multiline_items,
    extract_roman_items,
    is_roman_sequence,
    split_question_tail,
)


class SequenceTests(unittest.TestCase):
    def test_consecutive_from_one(self) -> None:
        self.assertTrue(is_roman_sequence(['I', 'II', 'III']))
        self.assertTrue(is_roman_sequence(['I', 'II', 'III', 'IV', 'V']))

    def test_gaps_and_reordering_rejected(self) -> None:
        self.assertFalse(is_roman_sequence(['I', 'III']))
        self.assertFalse(is_roman_sequence(['II', 'I']))
        self.assertFalse(is_roman_sequence(['II', 'III']))


class MultilineTests(unittest.TestCase):
    def test_statements_context_and_stem(self) -> None:
        body = (
            'Osmanlı Devleti ile ilgili,\n'
            'I. Tımar sistemi uygulanmıştır.\n'
            'II. Divan-ı Hümayun kurulmuştur.\n'
            'III. Lale Devri yaşanmıştır. yargılarından hangileri doğrudur?'
        )
        result = extract_multiline_items(body)
        self.assertEqual(result.content_items, [
            'Tımar sistemi uygulanmıştır.',
            'Divan-ı Hümayun kurulmuştur.',
            'Lale Devri yaşanmıştır.',
        ])
        self.assertEqual(result.context_text, 'Osmanlı Devleti ile ilgili,')
        self.assertEqual(result.question_text, 'yargılarından hangileri doğrudur?')

    def test_question_before_list_becomes_question_text(self) -> None:
        body = 'Which statements are correct?\nI. Water is wet.\nII. Fire is cold.'
        result = extract_multiline_items(body)
        self.assertEqual(result.content_items, ['Water is wet.', 'Fire is cold.'])
        self.assertEqual(result.context_text, '')
        self.assertEqual(result.question_text, 'Which statements are correct?')

    def test_wrapped_item_and_trailing_comma(self) -> None:
        body = 'Intro\nI. first part\ncontinued,\nII. second'
        result = extract_multiline_items(body)
        self.assertEqual(result.content_items, ['first part continued', 'second'])

    def test_no_intro_and_no_stem_uses_last_item(self) -> None:
        result = extract_multiline_items('I. a\nII. b?')
        self.assertEqual(result.content_items, ['a', 'b?'])
        self.assertEqual(result.context_text, '')
        self.assertEqual(result.question_text, 'b?')

    def test_gap_rejected(self) -> None:
        self.assertIsNone(extract_multiline_items('Intro\nI. one\nIII. three'))

    def test_out_of_order_rejected(self) -> None:
        self.assertIsNone(extract_multiline_items('Intro\nII. two\nI. one'))


class InlineTests(unittest.TestCase):
    def test_items_in_one_paragraph(self) -> None:
        body = 'I. Tımar, II. Devşirme, III. Müsadere uygulamalarından hangileri Osmanlı Devleti\'ne aittir?'
        result = extract_inline_items(body)
        self.assertEqual(result.content_items, ['Tımar', 'Devşirme', 'Müsadere uygulamalarından'])
        self.assertEqual(result.question_text, 'hangileri Osmanlı Devleti\'ne aittir?')
        self.assertEqual(result.context_text, '')

    def test_separators_before_markers(self) -> None:
        body = 'Dönemler (I. Lale; II. Islahat) arasında hangisi önce gelir?'
        result = extract_inline_items(body)
        self.assertEqual(result.content_items[0], 'Lale;')
        self.assertEqual(result.context_text, 'Dönemler (')

    def test_unsplit_tail_falls_back_to_body(self) -> None:
        body = 'I. alpha, II. beta?'
        result = extract_inline_items(body)
        self.assertEqual(result.content_items, ['alpha', 'beta?'])
        self.assertEqual(result.question_text, body)


class TailSplitterTests(unittest.TestCase):
    def test_no_question_mark(self) -> None:
        self.assertEqual(split_question_tail('Plain statement.', MULTILINE_TAIL_RE), ('Plain statement.', None))

    def test_unknown_connector(self) -> None:
        item = 'Statement. Which are true?'
        self.assertEqual(split_question_tail(item, MULTILINE_TAIL_RE), (item, None))

    def test_connector_kept_with_stem(self) -> None:
        item = 'Kurultay toplanmıştır. bilgilerinden hangisine ulaşılabilir?'
        self.assertEqual(
            split_question_tail(item, MULTILINE_TAIL_RE),
            ('Kurultay toplanmıştır.', 'bilgilerinden hangisine ulaşılabilir?'),
        )


class ExtractRomanItemsTests(unittest.TestCase):
    def test_plain_stem_is_unchanged(self) -> None:
        result = extract_roman_items('  Türkiye\'nin başkenti neresidir?  ')
        self.assertEqual(result.content_items, [])
        self.assertEqual(result.context_text, '')
        self.assertEqual(result.question_text, 'Türkiye\'nin başkenti neresidir?')

    def test_broken_sequence_falls_back_to_whole_stem(self) -> None:
        body = 'Intro\nI. one\nIII. three\nWhich?'
        result = extract_roman_items(body)
        self.assertEqual(result.content_items, [])
        self.assertEqual(result.question_text, body)

    def test_single_statement_is_a_one_item_list(self) -> None:
        body = 'Aşağıdaki ifade ile ilgili,\nI. Tımar sistemi uygulanmıştır. yargılarından hangisi doğrudur?'
        result = extract_roman_items(body)
        self.assertEqual(result.content_items, ['Tımar sistemi uygulanmıştır.'])
        self.assertEqual(result.context_text, 'Aşağıdaki ifade ile ilgili,')
        self.assertEqual(result.question_text, 'yargılarından hangisi doğrudur?')


if __name__ == '__main__':
    unittest.main()
