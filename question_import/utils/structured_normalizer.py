"""
Map decoded JSON onto QuestionRecord objects.

Payloads come from many tools and people, so every logical field accepts a
list of spellings (English, Turkish and snake_case). The first key present
wins.
"""

import re
import logging
from typing import Any, Dict, List, Optional, Tuple

from question_import.models import QuestionRecord, OPTION_LETTERS
from question_import.utils.text_parser import parse_options
from question_import.utils.validators import (
    EXPECTED_OPTIONS,
    sanitize_string,
    validate_option_count,
    validate_question_fields,
)

logger = logging.getLogger(__name__)

RECORD_LIST_KEYS = ('questions', 'sorular')

FIELD_ALIASES = {
    'id': ('id', '_id', 'questionId', 'question_id', 'soruId'),
    'question_text': ('questionText', 'question', 'text', 'stem', 'questionRoot',
                      'soru', 'soruMetni', 'soruKoku', 'question_text'),
    'context_text': ('contextText', 'context', 'intro', 'passage',
                     'baglam', 'bağlam', 'girisMetni', 'context_text'),
    'content_items': ('contentItems', 'items', 'statements',
                      'maddeler', 'onculler', 'öncüller', 'content_items'),
    'options': ('options', 'choices',
                'secenekler', 'seçenekler', 'siklar', 'şıklar'),
    'correct_option_index': ('correctOptionIndex', 'correctIndex', 'answerIndex',
                             'dogruSecenekIndex', 'correct_option_index', 'correct_option'),
    'answer': ('answer', 'correctAnswer', 'correct',
               'cevap', 'dogruCevap', 'doğruCevap', 'correct_answer'),
    'explanation': ('explanation', 'solution', 'rationale',
                    'aciklama', 'açıklama', 'cozum', 'çözüm'),
    'source_tag': ('sourceTag', 'source', 'tag', 'kaynak', 'source_tag'),
    'image_url': ('imageUrl', 'image', 'imageURL', 'gorsel', 'görsel', 'resim', 'image_url'),
}

OPTION_TEXT_KEYS = ('text', 'label', 'value', 'metin')

ANSWER_LETTER_RE = re.compile(r'^([A-Ea-e])\s*[).:]?$')
DIGITS_RE = re.compile(r'^\d+$')

NO_ARRAY_MESSAGE = (
    "No usable question array found: expected a top-level array "
    "or an object with a 'questions' array"
)


def pick(record: Dict[str, Any], field: str, default=None):
    """Value of the first alias of ``field`` present in ``record``."""
    for key in FIELD_ALIASES[field]:
        value = record.get(key)
        if value is not None:
            return value
    return default


def resolve_record_list(value: Any) -> Optional[List[Any]]:
    """The record list: the value itself, or the array under a 'questions' key."""
    if isinstance(value, list):
        return value

    if isinstance(value, dict):
        for key in RECORD_LIST_KEYS:
            records = value.get(key)
            if isinstance(records, list):
                return records

    return None


def _option_text(option: Any) -> str:
    if isinstance(option, dict):
        for key in OPTION_TEXT_KEYS:
            if option.get(key) is not None:
                return sanitize_string(option[key])
        return ''
    return sanitize_string(option)


def resolve_options(raw: Any) -> Tuple[List[str], int]:
    """Returns (options, number of blank entries removed)."""
    if isinstance(raw, str):
        return parse_options(raw), 0

    if not isinstance(raw, list):
        return [], 0

    texts = [_option_text(option) for option in raw]
    options = [text for text in texts if text]
    return options, len(texts) - len(options)


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and DIGITS_RE.match(value.strip()):
        return int(value.strip())
    return None


def resolve_answer(answer: Any, option_count: int) -> Optional[int]:
    """
    Turn an answer reference into a 0-based option index.

    Letters A-E map directly. JSON numbers are read as 0-based indexes and
    digit strings as 1-based option numbers; when only the other reading is
    in range, that one is used. Returns None when nothing fits.
    """
    if isinstance(answer, str):
        match = ANSWER_LETTER_RE.match(answer.strip())
        if match:
            index = OPTION_LETTERS.index(match.group(1).upper())
            return index if index < option_count else None

    number = _as_int(answer)
    if number is None:
        return None

    zero_based = number if 0 <= number < option_count else None
    one_based = number - 1 if 1 <= number <= option_count else None

    if isinstance(answer, str):
        return one_based if one_based is not None else zero_based
    return zero_based if zero_based is not None else one_based


def _resolve_content_items(raw: Any) -> Optional[Tuple[str, ...]]:
    if isinstance(raw, str):
        raw = raw.splitlines()
    if not isinstance(raw, list):
        return None
    items = tuple(text for text in (sanitize_string(item) for item in raw) if text)
    return items or None


def normalize_record(record: Any, ordinal: int, id_prefix: str) -> Tuple[Optional[QuestionRecord], List[str]]:
    """
    Build one QuestionRecord from a decoded JSON object.

    Returns the record (None when it has to be dropped) and the problems
    found, each prefixed with the 1-based ordinal.
    """
    label = f"Question {ordinal}"

    if not isinstance(record, dict):
        return None, [f"{label}: expected an object, got {type(record).__name__}"]

    problems = []

    question_text = sanitize_string(pick(record, 'question_text'))
    options, blank_count = resolve_options(pick(record, 'options'))

    is_valid, errors = validate_question_fields(question_text, options)
    problems.extend(errors)
    if not is_valid:
        return None, [f"{label}: {problem}" for problem in problems]

    if blank_count:
        problems.append(f"{blank_count} blank option(s) removed")

    count_warning = validate_option_count(options)
    if count_warning:
        problems.append(count_warning)
    options = options[:EXPECTED_OPTIONS]

    correct_index = None
    explicit = pick(record, 'correct_option_index')
    if explicit is not None:
        explicit_index = _as_int(explicit)
        if explicit_index is None:
            problems.append(f"correct option index {explicit!r} is not a valid index")
        elif 0 <= explicit_index < len(options):
            correct_index = explicit_index
        else:
            problems.append(f"correct option index {explicit!r} is out of range")

    if correct_index is None:
        answer = pick(record, 'answer')
        if answer is not None:
            correct_index = resolve_answer(answer, len(options))
            if correct_index is None:
                problems.append(f"could not resolve answer {answer!r}; defaulting to option A")

    record_id = sanitize_string(pick(record, 'id')) or f"{id_prefix}_{ordinal}"

    question = QuestionRecord(
        id=record_id,
        question_text=question_text,
        options=tuple(options),
        correct_option_index=correct_index or 0,
        explanation=sanitize_string(pick(record, 'explanation')),
        context_text=sanitize_string(pick(record, 'context_text')) or None,
        content_items=_resolve_content_items(pick(record, 'content_items')),
        source_tag=sanitize_string(pick(record, 'source_tag')) or None,
        image_url=sanitize_string(pick(record, 'image_url')) or None,
    )
    return question, [f"{label}: {problem}" for problem in problems]


def normalize_records(value: Any, id_prefix: str = 'bulk') -> Tuple[List[QuestionRecord], List[str]]:
    """Normalize every record of a decoded payload, collecting diagnostics."""
    records = resolve_record_list(value)
    if records is None:
        logger.info(f"Structured payload has no question array (got {type(value).__name__})")
        return [], [NO_ARRAY_MESSAGE]

    questions = []
    errors = []
    for ordinal, record in enumerate(records, start=1):
        question, problems = normalize_record(record, ordinal, id_prefix)
        errors.extend(problems)
        if question is None:
            logger.debug(f"Dropped structured record #{ordinal}: {problems}")
            continue
        questions.append(question)

    return questions, errors
