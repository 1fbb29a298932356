import logging
from typing import List, Optional, Tuple

from question_import.models import (
    QuestionRecord,
    ParseReport,
    build_report,
    INPUT_FORMAT_TEXT,
    INPUT_FORMAT_STRUCTURED,
)
from question_import.utils.payload_repair import (
    FENCE_MARKER,
    StructuredPayloadError,
    decode_structured_payload,
)
from question_import.utils.roman_items import extract_roman_items
from question_import.utils.structured_normalizer import NO_ARRAY_MESSAGE, normalize_records
from question_import.utils.text_parser import (
    match_solutions,
    normalize_text,
    parse_options,
    resolve_answer_index,
    split_blocks,
    split_sections,
    split_stem_and_options,
)
from question_import.utils.validators import validate_question_fields

logger = logging.getLogger(__name__)

DEFAULT_ID_PREFIX = 'bulk'


class BulkQuestionParser:
    """
    Turns pasted exam material into question records.

    Two input shapes are understood: a structured (JSON) payload, optionally
    wrapped in a fenced code block, and a plain-text transcript with an
    answer key section. The parser keeps no state between calls.
    """

    def __init__(self, id_prefix: str = DEFAULT_ID_PREFIX):
        self.id_prefix = id_prefix or DEFAULT_ID_PREFIX

    @staticmethod
    def is_structured(raw_text: str) -> bool:
        """Structured input starts with an object, an array or a code fence."""
        text = raw_text.strip()
        return text.startswith(('{', '[', FENCE_MARKER))

    def parse(self, raw_text: str) -> ParseReport:
        """
        Parse a pasted block of questions.

        Args:
            raw_text: Anything the operator pasted, possibly empty

        Returns:
            ParseReport with the accepted questions, diagnostics and the
            pipeline that was used. Never raises.
        """
        raw_text = raw_text or ''
        structured = self.is_structured(raw_text)
        input_format = INPUT_FORMAT_STRUCTURED if structured else INPUT_FORMAT_TEXT

        try:
            if structured:
                questions, errors = self._parse_structured(raw_text)
            else:
                questions, errors = self._parse_plain_text(raw_text), []
        except Exception as e:
            logger.error(f"Unexpected error parsing {input_format} input: {str(e)}")
            return build_report([], [f"Parsing failed: {str(e)}"], input_format)

        logger.info(f"Parsing complete: {len(questions)} questions, {len(errors)} diagnostics ({input_format})")
        return build_report(questions, errors, input_format)

    def _parse_structured(self, raw_text: str) -> Tuple[List[QuestionRecord], List[str]]:
        try:
            value, repaired = decode_structured_payload(raw_text)
        except StructuredPayloadError as e:
            logger.warning(f"Structured input rejected: {str(e)}")
            return [], ["Input looks like JSON but could not be parsed, even after repairing quotes and line breaks"]

        if repaired:
            logger.info("Structured payload was repaired before decoding")

        questions, errors = normalize_records(value, self.id_prefix)

        if not questions and NO_ARRAY_MESSAGE not in errors:
            errors.append("No usable questions found in structured input")

        return questions, errors

    def _parse_plain_text(self, raw_text: str) -> List[QuestionRecord]:
        text = normalize_text(raw_text)
        questions_region, solutions_region = split_sections(text)
        solutions = match_solutions(solutions_region)

        questions = []
        for number, body in split_blocks(questions_region):
            question = self._build_text_question(number, body, solutions.get(number))
            if question is not None:
                questions.append(question)

        logger.debug(f"Matched {len(solutions)} solutions for {len(questions)} questions")
        return questions

    def _build_text_question(self, number: int, body: str, solution) -> Optional[QuestionRecord]:
        stem, options_raw = split_stem_and_options(body)
        options = parse_options(options_raw)
        extraction = extract_roman_items(stem)
        question_text = extraction.question_text.strip()

        is_valid, errors = validate_question_fields(question_text, options)
        if not is_valid:
            # Plain-text mode stays quiet; a broken block is simply left out
            logger.debug(f"Skipping question #{number}: {', '.join(errors)}")
            return None

        return QuestionRecord(
            id=f"{self.id_prefix}_{number}",
            question_text=question_text,
            options=tuple(options),
            correct_option_index=resolve_answer_index(solution, len(options)),
            explanation=solution.explanation if solution else '',
            context_text=extraction.context_text or None,
            content_items=tuple(extraction.content_items) or None,
        )


_default_parser = BulkQuestionParser()


def parse(raw_text: str) -> ParseReport:
    """Parse pasted questions with the default settings."""
    return _default_parser.parse(raw_text)
