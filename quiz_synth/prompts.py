"""Prompt templates for LLM question generation."""
from __future__ import annotations

from quiz_synth.models import (
    FILL_IN_BLANK,
    IDENTIFICATION,
    MULTIPLE_CHOICE,
    TRUE_FALSE,
    QuestionCounts,
)

SYSTEM_PROMPT = (
    "You are an expert educational assessment creator. Generate high-quality "
    "questions in valid JSON format only. Do not include any markdown "
    "formatting or code blocks."
)

EXCERPT_CHARS = 3000

QUESTION_PROMPT = """\
Analyze the following text and generate a structured questionnaire with exactly these counts:
{counts_list}

Total Questions Required: {total}
Difficulty Level: {difficulty}

Text to analyze:
\"\"\"
{excerpt}
\"\"\"

Generate questions in this EXACT JSON format (no markdown, no code blocks):
{{
  "multipleChoice": [{multipleChoice_example}
  ],
  "trueFalse": [{trueFalse_example}
  ],
  "fillInTheBlank": [{fillInTheBlank_example}
  ],
  "identification": [{identification_example}
  ]
}}

CRITICAL Requirements:
- Generate EXACTLY {total} question(s) total with the distribution shown above
{empty_rules}- All questions must be directly based on the provided text content
- Multiple choice: Use SPECIFIC, RELEVANT answers extracted from the text, NOT generic placeholders like "Option A/B/C/D"
- Multiple choice: exactly 4 distinct options; correctAnswer is the index (0-3) of the correct option
- True/False: answer must be boolean (true or false)
- Fill-in-the-blank: use "______" for blanks
- Identification: ask to identify people, concepts, terms, or entities from the text
- Ensure questions match the {difficulty} difficulty level
- Include all four arrays (multipleChoice, trueFalse, fillInTheBlank, identification) even if some are empty
- Return ONLY valid JSON with the exact structure shown above, no additional text or formatting
"""

MCQ_EXAMPLE = """
    {
      "question": "Question text here?",
      "options": ["Specific answer from text", "Another specific answer", "Third specific answer", "Fourth specific answer"],
      "correctAnswer": 0
    }"""

TRUE_FALSE_EXAMPLE = """
    {
      "statement": "Statement here",
      "answer": true
    }"""

FILL_BLANK_EXAMPLE = """
    {
      "sentence": "Sentence with ______ blank",
      "answer": "correct word"
    }"""

IDENTIFICATION_EXAMPLE = """
    {
      "question": "Identify the person/concept described...",
      "answer": "Correct identification"
    }"""

# (question type, JSON key, instruction label, schema example)
_TYPE_ROWS = [
    (MULTIPLE_CHOICE, "multipleChoice",
     "Multiple Choice Questions (4 options each with specific, relevant answers from the text)",
     MCQ_EXAMPLE),
    (TRUE_FALSE, "trueFalse", "True/False Questions", TRUE_FALSE_EXAMPLE),
    (FILL_IN_BLANK, "fillInTheBlank", "Fill-in-the-Blank Questions", FILL_BLANK_EXAMPLE),
    (IDENTIFICATION, "identification", "Identification Questions", IDENTIFICATION_EXAMPLE),
]


def format_counts(counts: QuestionCounts) -> str:
    lines = []
    for qtype, _key, label, _example in _TYPE_ROWS:
        n = counts.for_type(qtype)
        if n > 0:
            lines.append(f"- Generate exactly {n} {label}")
    return "\n".join(lines)


def format_empty_rules(counts: QuestionCounts) -> str:
    lines = []
    for qtype, key, _label, _example in _TYPE_ROWS:
        if counts.for_type(qtype) == 0:
            lines.append(f'- "{key}" must be an empty array []\n')
    return "".join(lines)


def build_question_prompt(
    text: str,
    difficulty: str,
    counts: QuestionCounts,
    excerpt_chars: int = EXCERPT_CHARS,
) -> str:
    examples = {
        f"{key}_example": example if counts.for_type(qtype) > 0 else ""
        for qtype, key, _label, example in _TYPE_ROWS
    }
    return QUESTION_PROMPT.format(
        counts_list=format_counts(counts),
        total=counts.total,
        difficulty=difficulty,
        excerpt=text[:excerpt_chars],
        empty_rules=format_empty_rules(counts),
        **examples,
    )
