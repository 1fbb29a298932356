"""
Roman-numeral statement lists inside question stems.

Multi-statement questions look like::

    Osmanlı Devleti ile ilgili,
    I. Tımar sistemi uygulanmıştır.
    II. Divan-ı Hümayun kurulmuştur.
    III. Lale Devri yaşanmıştır. yargılarından hangileri doğrudur?

The statements become ``content_items``, the paragraph before them becomes
``context_text`` and the interrogative clause glued to the last statement
becomes ``question_text``.
"""

import re
import logging
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

from question_import.utils.validators import collapse_whitespace

logger = logging.getLogger(__name__)

ROMAN_NUMERALS = ('I', 'II', 'III', 'IV', 'V', 'VI', 'VII', 'VIII', 'IX', 'X')

# Longest numerals first so "III." is not read as "I" followed by "II."
_NUMERAL_PATTERN = '|'.join(sorted(ROMAN_NUMERALS, key=len, reverse=True))

MULTILINE_MARKER_RE = re.compile(rf'^[ \t]*({_NUMERAL_PATTERN})\.\s+', re.MULTILINE)
INLINE_MARKER_RE = re.compile(rf'(?:^|(?<=[\s,(;]))({_NUMERAL_PATTERN})\.\s+')

# Question phrasings that may follow the last statement, in match order
MULTILINE_CONNECTORS = (
    'durumlarından',
    'yargılarından',
    'ifadelerinden',
    'özelliklerinden',
    'bilgilerinden',
    'gelişmelerinden',
    'hangisi',
    'hangileri',
)

INLINE_CONNECTORS = (
    'Yukarıdakilerden',
    'durumlarından',
    'yargılarından',
    'dönemlerinin',
    'devletlerinden',
    'hangisi',
    'hangileri',
    'hangisine',
    'hangilerinde',
    'hangisinde',
)


class RomanExtraction(NamedTuple):
    content_items: List[str]
    context_text: str
    question_text: str


def _connector_regex(connectors: Sequence[str]):
    alternatives = '|'.join(re.escape(c) for c in connectors)
    return re.compile(rf'^(.*?)\s+({alternatives})\s*(.*?\?)\s*$', re.IGNORECASE | re.DOTALL)


MULTILINE_TAIL_RE = _connector_regex(MULTILINE_CONNECTORS)
INLINE_TAIL_RE = _connector_regex(INLINE_CONNECTORS)


def is_roman_sequence(numerals: Sequence[str]) -> bool:
    """True when numerals run I, II, III, ... without gaps or reordering."""
    if len(numerals) > len(ROMAN_NUMERALS):
        return False
    return all(numeral == ROMAN_NUMERALS[i] for i, numeral in enumerate(numerals))


def split_question_tail(item: str, tail_re) -> Tuple[str, Optional[str]]:
    """
    Split an embedded question off the last enumerated statement.

    Returns (statement, question stem). The stem is None when the item has no
    question mark or no known connector phrase.
    """
    if '?' not in item:
        return item, None

    match = tail_re.match(item)
    if not match:
        return item, None

    return match.group(1).strip(), item[match.start(2):].strip()


def _collect_items(body: str, markers) -> Tuple[str, List[str]]:
    intro = body[:markers[0].start()].strip()
    items = []
    for i, marker in enumerate(markers):
        end = markers[i + 1].start() if i + 1 < len(markers) else len(body)
        text = collapse_whitespace(body[marker.end():end])
        items.append(text.rstrip(',').strip())
    return intro, items


def _extract(body: str, marker_re, tail_re, fallback: str) -> Optional[RomanExtraction]:
    markers = list(marker_re.finditer(body))
    if not markers:
        return None

    numerals = [m.group(1) for m in markers]
    if not is_roman_sequence(numerals):
        logger.debug(f"Rejecting roman numeral list out of sequence: {numerals}")
        return None

    intro, items = _collect_items(body, markers)
    items[-1], stem = split_question_tail(items[-1], tail_re)

    if stem:
        return RomanExtraction(items, intro, stem)

    # No separable stem: the introduction is the question, else the fallback text
    if fallback == 'body':
        question_text = intro or body.strip()
    else:
        question_text = intro or items[-1]
    return RomanExtraction(items, '', question_text)


def extract_multiline_items(body: str) -> Optional[RomanExtraction]:
    """Statements each starting on their own line."""
    return _extract(body, MULTILINE_MARKER_RE, MULTILINE_TAIL_RE, fallback='last_item')


def extract_inline_items(body: str) -> Optional[RomanExtraction]:
    """Statements run together in one paragraph: "I. x, II. y ve III. z"."""
    return _extract(body, INLINE_MARKER_RE, INLINE_TAIL_RE, fallback='body')


EXTRACTION_STRATEGIES: Tuple[Callable[[str], Optional[RomanExtraction]], ...] = (
    extract_multiline_items,
    extract_inline_items,
)


def extract_roman_items(body: str) -> RomanExtraction:
    """Try each strategy in order; without a list the body is the question text."""
    for strategy in EXTRACTION_STRATEGIES:
        result = strategy(body)
        if result is not None:
            return result
    return RomanExtraction([], '', body.strip())
