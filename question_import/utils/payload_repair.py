"""
Structured payload recovery.

Pasted JSON is frequently damaged on the way from an editor or chat window:
quotes inside narrative text are left unescaped and long fields are wrapped
with literal line breaks. This module finds candidate payloads in the pasted
text and rewrites them so that ``json.loads`` accepts them.
"""

import enum
import json
import logging
import re
from typing import Any, List, Tuple

logger = logging.getLogger(__name__)

FENCE_MARKER = '```'

# ```json ... ``` blocks; the language tag is optional
FENCED_BLOCK_RE = re.compile(r'```[ \t]*[A-Za-z0-9_-]*[ \t]*\r?\n?(.*?)```', re.DOTALL)

# Characters that may legitimately follow the closing quote of a string
STRING_TERMINATORS = ':,}]'


class StructuredPayloadError(ValueError):
    """Raised when no candidate payload can be decoded, even after repair."""


class ScanState(enum.Enum):
    OUTSIDE = 'outside'
    IN_STRING = 'in_string'
    ESCAPED = 'escaped'


def extract_candidates(text: str) -> List[str]:
    """
    Return the payload candidates found in ``text``.

    The whole text always comes first, followed by the inner content of
    every fenced block in document order.
    """
    text = text.strip()
    candidates = [text]

    for match in FENCED_BLOCK_RE.finditer(text):
        inner = match.group(1).strip()
        if inner and inner not in candidates:
            candidates.append(inner)

    return candidates


def _closes_string(text: str, quote_index: int) -> bool:
    """A quote closes a string only when followed by a JSON delimiter or the end of input."""
    for ch in text[quote_index + 1:]:
        if ch.isspace():
            continue
        return ch in STRING_TERMINATORS
    return True


def repair_payload(candidate: str) -> Tuple[str, bool]:
    """
    Escape stray quotes and raw control characters inside string literals.

    Returns the rewritten text and whether anything was changed.
    """
    out = []
    state = ScanState.OUTSIDE
    repaired = False
    i = 0
    length = len(candidate)

    while i < length:
        ch = candidate[i]

        if state is ScanState.OUTSIDE:
            if ch == '"':
                state = ScanState.IN_STRING
            out.append(ch)

        elif state is ScanState.ESCAPED:
            out.append(ch)
            state = ScanState.IN_STRING

        elif ch == '\\':
            out.append(ch)
            state = ScanState.ESCAPED

        elif ch == '\r' or ch == '\n':
            if ch == '\r' and i + 1 < length and candidate[i + 1] == '\n':
                i += 1
            out.append('\\n')
            repaired = True

        elif ch == '\t':
            out.append('\\t')
            repaired = True

        elif ch == '"':
            if _closes_string(candidate, i):
                out.append(ch)
                state = ScanState.OUTSIDE
            else:
                out.append('\\"')
                repaired = True

        else:
            out.append(ch)

        i += 1

    return ''.join(out), repaired


def decode_structured_payload(text: str) -> Tuple[Any, bool]:
    """
    Decode the first candidate in ``text`` that parses as JSON.

    Each candidate is tried as-is, then in repaired form. Returns the decoded
    value and whether repair was needed.
    """
    candidates = extract_candidates(text)

    for index, candidate in enumerate(candidates):
        try:
            return json.loads(candidate), False
        except json.JSONDecodeError as e:
            logger.debug(f"Candidate {index} is not valid JSON: {e}")

        fixed, changed = repair_payload(candidate)
        if not changed:
            continue

        try:
            value = json.loads(fixed)
        except json.JSONDecodeError as e:
            logger.debug(f"Candidate {index} still invalid after repair: {e}")
            continue

        logger.warning(f"Structured payload needed repair (candidate {index})")
        return value, True

    raise StructuredPayloadError(
        f"Could not decode structured input ({len(candidates)} candidate(s) tried)"
    )
