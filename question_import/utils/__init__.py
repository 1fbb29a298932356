from .decorators import admin_required
from .validators import sanitize_string, validate_question_fields
from .payload_repair import StructuredPayloadError
from .question_parser import BulkQuestionParser, parse

__all__ = [
    'admin_required',
    'sanitize_string',
    'validate_question_fields',
    'StructuredPayloadError',
    'BulkQuestionParser',
    'parse'
]
