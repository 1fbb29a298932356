from flask import Blueprint, request, jsonify, current_app
from typing import Any, Dict, Optional
import logging

from question_import.models import ParseReport
from question_import.utils.decorators import admin_required
from question_import.utils.question_parser import BulkQuestionParser

logger = logging.getLogger(__name__)

bp = Blueprint('bulk_import', __name__)


def _read_pasted_text() -> Optional[str]:
    """Pasted text from a JSON body ({"text": ...}) or a raw text/plain body."""
    if request.is_json:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return None
        text = data.get('text')
        return text if isinstance(text, str) else None

    return request.get_data(as_text=True)


def _statistics(report: ParseReport) -> Dict[str, Any]:
    return {
        'total_parsed': report.total_questions,
        'total_errors': len(report.errors),
        'with_explanation': sum(1 for q in report.questions if q.explanation),
        'with_content_items': sum(1 for q in report.questions if q.content_items),
    }


@bp.route('/admin/bulk-import/parse', methods=['POST'])
@admin_required
def parse_bulk_questions():
    """
    Parse pasted questions for the preview screen.
    Nothing is stored; the operator reviews the result and saves it separately.
    """
    try:
        text = _read_pasted_text()
        if text is None:
            return jsonify({'error': 'No text provided'}), 400

        if not text.strip():
            return jsonify({'error': 'Pasted text is empty'}), 400

        max_chars = current_app.config['BULK_IMPORT_MAX_CHARS']
        if len(text) > max_chars:
            return jsonify({
                'error': f'Text too large. Maximum size: {max_chars} characters'
            }), 413

        logger.info(f"Starting bulk import parse, {len(text)} characters")

        parser = BulkQuestionParser(id_prefix=current_app.config['BULK_IMPORT_ID_PREFIX'])
        report = parser.parse(text)

        logger.info(f"Bulk import parsed: {report.total_questions} questions, {len(report.errors)} diagnostics")

        return jsonify({
            'message': f'Parsed {report.total_questions} questions',
            'data': {
                **report.to_dict(),
                'statistics': _statistics(report)
            }
        }), 200

    except Exception as e:
        logger.error(f"Bulk import parse error: {str(e)}")
        return jsonify({'error': f'Parse failed: {str(e)}'}), 500


@bp.route('/admin/bulk-import/supported-formats', methods=['GET'])
@admin_required
def get_supported_formats():
    """Get information about the accepted paste formats."""

    format_info = {
        'supported_formats': [
            {
                'name': 'plain_text',
                'description': 'Exam transcript with a separate solutions section',
                'requirements': [
                    'Each question starts with its number at the start of a line: "1. ", "2. "',
                    'Options use A) ... E) (A. A- A: are also accepted)',
                    'Statement lists use I. II. III. in order',
                    'Solutions repeat each number: "1. SOLUTION: ... ANSWER: C" (ÇÖZÜM / CEVAP also accepted)',
                    'Page marker lines such as "PAGE 3" or "SAYFA 3" are ignored'
                ]
            },
            {
                'name': 'json',
                'description': 'Array of question objects, or an object with a "questions" array',
                'requirements': [
                    'questionText and options (array, or an "A) ... E)" string) are required',
                    'Correct answer via correctOptionIndex (0-based) or answer ("C", 2, or "3")',
                    'Optional: explanation, contextText, contentItems, sourceTag, imageUrl, id',
                    'May be wrapped in a ```json fenced block',
                    'Unescaped quotes and line breaks inside text are repaired automatically'
                ]
            }
        ],
        'limits': {
            'max_characters': current_app.config['BULK_IMPORT_MAX_CHARS'],
            'min_options': 2,
            'max_options': 5
        }
    }

    return jsonify(format_info), 200


@bp.route('/admin/bulk-import/template/<format_type>', methods=['GET'])
@admin_required
def download_template(format_type):
    """Sample input for each paste format."""

    templates = {
        'plain_text': {
            'description': 'Plain-text transcript sample',
            'sample': '\n'.join([
                '1. Which city is the capital of Türkiye?',
                'A) Ankara',
                'B) İstanbul',
                'C) İzmir',
                'D) Bursa',
                'E) Antalya',
                '',
                '2. Which of the following statements are correct?',
                'I. Water boils at 100 °C at sea level.',
                'II. Ice is denser than water.',
                'A) Only I',
                'B) Only II',
                'C) I and II',
                'D) Neither',
                'E) Cannot be determined',
                '',
                'SOLUTIONS',
                '1. SOLUTION: Ankara has been the capital since 1923. ANSWER: A',
                '2. SOLUTION: Ice floats because it is less dense. ANSWER: A'
            ])
        },
        'json': {
            'description': 'Structured payload sample',
            'sample': [
                {
                    'questionText': 'Which city is the capital of Türkiye?',
                    'options': ['Ankara', 'İstanbul', 'İzmir', 'Bursa', 'Antalya'],
                    'answer': 'A',
                    'explanation': 'Ankara has been the capital since 1923.',
                    'sourceTag': 'Sample Set 1'
                }
            ]
        }
    }

    if format_type not in templates:
        return jsonify({'error': 'Invalid template type'}), 400

    return jsonify(templates[format_type]), 200
