from .question import (
    QuestionRecord,
    ParseReport,
    build_report,
    INPUT_FORMAT_TEXT,
    INPUT_FORMAT_STRUCTURED,
    OPTION_LETTERS,
)

__all__ = [
    'QuestionRecord',
    'ParseReport',
    'build_report',
    'INPUT_FORMAT_TEXT',
    'INPUT_FORMAT_STRUCTURED',
    'OPTION_LETTERS',
]
