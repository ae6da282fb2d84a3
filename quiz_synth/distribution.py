"""Split a requested question total across question types."""
from __future__ import annotations

from quiz_synth.models import (
    FILL_IN_BLANK,
    IDENTIFICATION,
    MULTIPLE_CHOICE,
    TRUE_FALSE,
    QuestionCounts,
    normalize_question_types,
)

_FIELDS = {
    MULTIPLE_CHOICE: "mcq",
    TRUE_FALSE: "true_false",
    FILL_IN_BLANK: "fill_blank",
    IDENTIFICATION: "identification",
}


def distribute_questions(total: int, question_types: list[str] | None = None) -> QuestionCounts:
    """Return per-type counts that sum to *total*.

    Without a subset the total is split over all four types and remainder
    units go to multiple-choice, true-false and fill-in-blank in that order;
    identification never gets one. With a subset, remainder units go to the
    first types in the caller's order and unlisted types get 0.
    """
    total = max(0, total)
    types = normalize_question_types(question_types)

    if types is None:
        per_type, remainder = divmod(total, 4)
        return QuestionCounts(
            mcq=per_type + (1 if remainder > 0 else 0),
            true_false=per_type + (1 if remainder > 1 else 0),
            fill_blank=per_type + (1 if remainder > 2 else 0),
            identification=per_type,
        )

    counts = QuestionCounts()
    per_type, remainder = divmod(total, len(types))
    for i, qtype in enumerate(types):
        extra = 1 if i < remainder else 0
        setattr(counts, _FIELDS[qtype], per_type + extra)
    return counts
