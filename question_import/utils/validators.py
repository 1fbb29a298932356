import re

MIN_OPTIONS = 2
EXPECTED_OPTIONS = 5

WHITESPACE_RE = re.compile(r'\s+')


def sanitize_string(value, max_length=None):
    """
    Sanitize a string value by stripping whitespace
    and optionally truncating to max_length.
    Numbers are converted to text; anything else becomes an empty string.
    """
    if isinstance(value, bool) or value is None:
        return ''

    if isinstance(value, (int, float)):
        value = str(value)

    if not isinstance(value, str):
        return ''

    value = value.strip()

    if max_length and len(value) > max_length:
        value = value[:max_length]

    return value


def collapse_whitespace(value):
    """Join wrapped lines and squeeze runs of whitespace into single spaces."""
    return WHITESPACE_RE.sub(' ', value).strip()


def validate_question_fields(question_text, options):
    """
    Validate the invariants a question must satisfy to be kept.
    Returns tuple (is_valid, errors)
    """
    errors = []

    if not question_text:
        errors.append("question text is missing")

    if len(options) < MIN_OPTIONS:
        errors.append(f"at least {MIN_OPTIONS} options are required (found {len(options)})")

    return len(errors) == 0, errors


def validate_option_count(options):
    """
    Check the option count against the usual five-choice exam layout.
    Returns a warning message or None.
    """
    count = len(options)
    if count < MIN_OPTIONS or count == EXPECTED_OPTIONS:
        return None

    if count > EXPECTED_OPTIONS:
        return f"expected {EXPECTED_OPTIONS} options, found {count}; only the first {EXPECTED_OPTIONS} were kept"

    return f"expected {EXPECTED_OPTIONS} options, found {count}"
