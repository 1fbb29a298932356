from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

INPUT_FORMAT_TEXT = 'text'
INPUT_FORMAT_STRUCTURED = 'structured'

OPTION_LETTERS = 'ABCDE'


@dataclass(frozen=True)
class QuestionRecord:
    """A validated multiple-choice question ready to be stored."""
    id: str
    question_text: str
    options: Tuple[str, ...]
    correct_option_index: int = 0
    explanation: str = ''
    context_text: Optional[str] = None
    content_items: Optional[Tuple[str, ...]] = None
    source_tag: Optional[str] = None
    image_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase field names used by API consumers."""
        data = {
            'id': self.id,
            'questionText': self.question_text,
            'options': list(self.options),
            'correctOptionIndex': self.correct_option_index,
            'explanation': self.explanation,
        }
        # Optional fields are omitted rather than sent as null
        if self.context_text:
            data['contextText'] = self.context_text
        if self.content_items:
            data['contentItems'] = list(self.content_items)
        if self.source_tag:
            data['sourceTag'] = self.source_tag
        if self.image_url:
            data['imageUrl'] = self.image_url
        return data


@dataclass(frozen=True)
class ParseReport:
    """Result of one parse call: records, diagnostics and the pipeline used."""
    questions: Tuple[QuestionRecord, ...] = field(default_factory=tuple)
    errors: Tuple[str, ...] = field(default_factory=tuple)
    input_format: str = INPUT_FORMAT_TEXT

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'questions': [q.to_dict() for q in self.questions],
            'errors': list(self.errors),
            'inputFormat': self.input_format,
        }


def build_report(questions: List[QuestionRecord], errors: List[str], input_format: str) -> ParseReport:
    return ParseReport(questions=tuple(questions), errors=tuple(errors), input_format=input_format)
