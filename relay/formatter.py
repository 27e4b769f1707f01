"""
Report formatting for quiz submissions.

Everything here is pure: a SubmissionRecord goes in, Telegram HTML text comes
out. User-supplied strings are HTML-escaped since messages are sent with
parse_mode="HTML".
"""

import math
from datetime import datetime, timezone
from html import escape
from typing import Dict, List, Optional

from relay.models import TENSE_DISPLAY_NAMES, AnswerResult, Number, SubmissionRecord

QUESTION_PREVIEW_LENGTH = 50
INVALID_DATE = "Invalid Date"

# (lower bound, status label, closing feedback), checked top to bottom
PERFORMANCE_TIERS = [
    (90, "🌟 Excellent!",
     "Outstanding! You have mastered all future tenses. Ready for advanced topics!"),
    (75, "👍 Good job!",
     "Very good! You understand most concepts well. Focus on the questions you missed."),
    (60, "📚 Fair attempt",
     "Good effort! Review the explanations for incorrect answers and try again."),
]
LOWEST_TIER = ("💪 Needs practice",
               "Keep practicing! Study each tense carefully and take the test again.")

# ==================== HELPERS ====================

def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3)"""
    return math.floor(value + 0.5)

def format_number(value: Optional[Number]) -> str:
    """Render a number the way the quiz front end shows it (8.0 -> "8")"""
    if value is None:
        return "N/A"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

def format_submission_date(timestamp: Optional[str]) -> str:
    """
    Format an ISO-8601 timestamp as full date + medium time, e.g.
    "Sunday, October 18, 2026 at 2:05:09\u202fPM" (narrow no-break space
    before the meridiem, as en-US ICU renders it). Offset-aware values are shown
    in UTC; naive values are shown as given.
    """
    if not timestamp:
        return INVALID_DATE
    try:
        moment = datetime.fromisoformat(timestamp)
    except ValueError:
        return INVALID_DATE

    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)

    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (
        f"{moment:%A}, {moment:%B} {moment.day}, {moment.year} "
        f"at {hour}:{moment:%M}:{moment:%S}\u202f{meridiem}"
    )

def _tier(percentage: Optional[Number]):
    if percentage is not None:
        for lower_bound, status, feedback in PERFORMANCE_TIERS:
            if percentage >= lower_bound:
                return status, feedback
    return LOWEST_TIER

def get_performance_message(percentage: Optional[Number]) -> str:
    return _tier(percentage)[0]

def get_detailed_feedback(percentage: Optional[Number]) -> str:
    return _tier(percentage)[1]

# ==================== BREAKDOWNS ====================

def tally_by_category(results: List[AnswerResult]) -> Dict[str, Dict[str, int]]:
    """Count correct/total per category code, keyed in first-appearance order"""
    stats: Dict[str, Dict[str, int]] = {}
    for result in results:
        counts = stats.setdefault(result.category, {'correct': 0, 'total': 0})
        counts['total'] += 1
        if result.is_correct:
            counts['correct'] += 1
    return stats

def category_percentage(correct: int, total: int) -> int:
    if total == 0:
        return 0
    return round_half_up(correct / total * 100)

def format_category_breakdown(results: List[AnswerResult]) -> List[str]:
    lines = []
    for code, counts in tally_by_category(results).items():
        label = TENSE_DISPLAY_NAMES.get(code, code)
        percent = category_percentage(counts['correct'], counts['total'])
        lines.append(f"{escape(label)}: {counts['correct']}/{counts['total']} ({percent}%)")
    return lines

def format_question_breakdown(results: List[AnswerResult]) -> List[str]:
    lines = []
    for number, result in enumerate(results, start=1):
        icon = "✅" if result.is_correct else "❌"
        # The ellipsis is appended even when the text is shorter than the preview
        preview = result.question_text[:QUESTION_PREVIEW_LENGTH]
        lines.append(
            f"{icon} Q{number}: {escape(preview)}...\n"
            f"   Your answer: \"{escape(result.selected)}\" | Correct: \"{escape(result.correct)}\"\n"
        )
    return lines

# ==================== MESSAGES ====================

def build_report(submission: SubmissionRecord) -> str:
    """Detailed multi-section report for the first Telegram message"""
    percentage = submission.percentage

    sections = [
        "📝 <b>NEW TEST SUBMISSION</b>",
        "\n".join([
            "👤 <b>Student Information:</b>",
            f"• Name: {escape(submission.name or '')}",
            f"• Email: {escape(submission.email or '')}",
            f"• Date: {format_submission_date(submission.timestamp)}",
        ]),
        "\n".join([
            "📊 <b>Results:</b>",
            f"• Score: {format_number(submission.score)}/{format_number(submission.total)}",
            f"• Percentage: {format_number(percentage)}%",
            f"• Status: {get_performance_message(percentage)}",
        ]),
        "\n".join(["📈 <b>Performance by Tense:</b>"] + format_category_breakdown(submission.results)),
        "\n".join(["📋 <b>Detailed Breakdown:</b>"] + format_question_breakdown(submission.results)),
        "\n".join([
            "🏆 <b>Overall Assessment:</b>",
            get_detailed_feedback(percentage),
        ]),
    ]
    return "\n\n".join(sections)

def build_summary(submission: SubmissionRecord) -> str:
    return (
        "📊 <b>Quick Summary</b>\n"
        f"{escape(submission.name or '')} scored "
        f"{format_number(submission.score)}/{format_number(submission.total)} "
        f"({format_number(submission.percentage)}%)"
    )
