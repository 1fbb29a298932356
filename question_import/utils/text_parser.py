"""
Plain-text exam transcript parsing.

Expected layout::

    1. Question stem ...
    A) first option
    B) second option
    ...
    SOLUTIONS
    1. SOLUTION: why the answer is right ANSWER: B

Turkish markers (SAYFA, ÇÖZÜM, ÇÖZÜMLER, CEVAP) are accepted alongside the
English ones.
"""

import re
import logging
from typing import Dict, List, NamedTuple, Optional, Tuple

from question_import.models import OPTION_LETTERS
from question_import.utils.validators import EXPECTED_OPTIONS, collapse_whitespace

logger = logging.getLogger(__name__)

# Running page headers/footers left over from PDF copy-paste
PAGE_MARKER_RE = re.compile(r'^[ \t]*(?:SAYFA|PAGE)[ \t]*\d+.*$', re.MULTILINE)

FIRST_SOLUTION_RE = re.compile(r'^[ \t]*1\.[ \t]*(?:SOLUTION|ÇÖZÜM)[ \t]*:', re.MULTILINE | re.IGNORECASE)
SOLUTIONS_HEADER_RE = re.compile(
    r'^[ \t]*(?:SOLUTIONS?|ANSWER[ \t]+KEY|ÇÖZÜMLER|ÇÖZÜM)[ \t]*:?[ \t]*$',
    re.MULTILINE | re.IGNORECASE,
)

BLOCK_BOUNDARY_RE = re.compile(r'\n(?=\d+\.\s)')
QUESTION_NUMBER_RE = re.compile(r'^(\d+)\.\s*')

# Options begin at a line-start "A)" (or A. A- A:) marker, else at an inline "A)"
OPTIONS_START_RE = re.compile(r'^[ \t]*A(?:\)|[.:\-](?=\s))', re.MULTILINE)
INLINE_OPTIONS_START_RE = re.compile(r'(?<=\s)A\)')
OPTION_MARKER_RE = re.compile(r'(?:^|(?<=\s))[A-E](?:\)|[.:\-](?=\s))', re.MULTILINE)

SOLUTION_RE = re.compile(
    r'(\d+)\.\s*(?:SOLUTION|ÇÖZÜM)\s*:\s*(.*?)(?:ANSWER|CEVAP)\s*:\s*([A-E])\b',
    re.IGNORECASE | re.DOTALL,
)


class Solution(NamedTuple):
    explanation: str
    answer_letter: str


def normalize_text(text: str) -> str:
    """Unify line endings and drop page marker lines."""
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    return PAGE_MARKER_RE.sub('', text)


def split_sections(text: str) -> Tuple[str, str]:
    """
    Split normalized text into (questions region, solutions region).

    The split happens at whichever comes first: the "1. SOLUTION" line or a
    standalone solutions header. Without either the solutions region is empty.
    """
    positions = []
    for pattern in (FIRST_SOLUTION_RE, SOLUTIONS_HEADER_RE):
        match = pattern.search(text)
        if match:
            positions.append(match.start())

    if not positions:
        return text, ''

    split_at = min(positions)
    return text[:split_at], text[split_at:]


def split_blocks(questions_region: str) -> List[Tuple[int, str]]:
    """
    Split the questions region into (question number, body) pairs.

    Chunks that do not start with "<n>. " (a title line, stray notes) are
    dropped without comment.
    """
    blocks = []
    for chunk in BLOCK_BOUNDARY_RE.split(questions_region):
        chunk = chunk.strip()
        if not chunk:
            continue

        match = QUESTION_NUMBER_RE.match(chunk)
        if not match:
            logger.debug(f"Ignoring unnumbered block: {chunk[:40]}...")
            continue

        blocks.append((int(match.group(1)), chunk[match.end():]))

    return blocks


def find_options_start(body: str) -> Optional[int]:
    match = OPTIONS_START_RE.search(body) or INLINE_OPTIONS_START_RE.search(body)
    if not match:
        return None
    # Skip the indentation matched before the marker
    return match.start() + len(match.group(0)) - len(match.group(0).lstrip())


def split_stem_and_options(body: str) -> Tuple[str, str]:
    """Separate a question body into the stem and the raw options text."""
    start = find_options_start(body)
    if start is None:
        return body.strip(), ''
    return body[:start].strip(), body[start:].strip()


def parse_options(raw: str) -> List[str]:
    """
    Extract up to five options from text using the A) ... E) convention.

    Markers may also use ".", "-" or ":" and must sit at a line start or
    after whitespace. Wrapped option text is joined into one line.
    """
    if not raw or not raw.strip():
        return []

    start = find_options_start(raw)
    if start is None:
        return []
    raw = raw[start:]

    markers = list(OPTION_MARKER_RE.finditer(raw))
    options = []
    for i, marker in enumerate(markers):
        end = markers[i + 1].start() if i + 1 < len(markers) else len(raw)
        cleaned = collapse_whitespace(raw[marker.end():end])
        if cleaned:
            options.append(cleaned)

    if len(options) > EXPECTED_OPTIONS:
        logger.debug(f"Found {len(options)} option segments, keeping the first {EXPECTED_OPTIONS}")
        options = options[:EXPECTED_OPTIONS]

    return options


def match_solutions(solutions_region: str) -> Dict[int, Solution]:
    """Map question numbers to their explanation and answer letter."""
    solutions = {}
    for match in SOLUTION_RE.finditer(solutions_region):
        number = int(match.group(1))
        solutions[number] = Solution(
            explanation=collapse_whitespace(match.group(2)),
            answer_letter=match.group(3).upper(),
        )
    return solutions


def resolve_answer_index(solution: Optional[Solution], option_count: int) -> int:
    """Index of the solution's answer letter, or 0 when it is missing or out of range."""
    if solution is None:
        return 0
    index = OPTION_LETTERS.index(solution.answer_letter)
    return index if index < option_count else 0
