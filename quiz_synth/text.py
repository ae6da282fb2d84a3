"""Text preprocessing and heuristic key-term / named-entity extraction."""
from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field

KEY_TERM_LIMIT = 15
ENTITY_LIMIT = 10
MIN_TERM_FREQUENCY = 2

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
    "is", "are", "was", "were", "be", "been", "have", "has", "had", "do", "does", "did",
    "will", "would", "could", "should", "may", "might", "can", "this", "that", "these", "those",
    "they", "them", "their", "there", "then", "than", "when", "where", "why", "how", "what",
    "who", "which", "while", "during", "before", "after", "above", "below", "up", "down",
    "out", "off", "over", "under", "again", "further", "once", "here",
    "all", "any", "both", "each", "few", "more", "most", "other", "some", "such", "only",
    "own", "same", "so", "too", "very", "just", "now",
})

_DISALLOWED_CHARS = re.compile(r"[^\w\s.,!?;:()-]")
_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
_WORD = re.compile(r"\b\w+\b")
_ALPHA = re.compile(r"^[a-zA-Z]+$")
_CAPITALIZED = re.compile(r"^[A-Z][a-z]+$")


@dataclass
class PreprocessedText:
    clean: str
    sentences: list[str] = field(default_factory=list)
    paragraphs: list[str] = field(default_factory=list)
    words: list[str] = field(default_factory=list)


def clean_text(text: str) -> str:
    text = re.sub(r"\s+", " ", text)
    return _DISALLOWED_CHARS.sub("", text).strip()


def extract_sentences(text: str, loose: bool = False) -> list[str]:
    """Split on sentence punctuation and drop fragments.

    The strict filter keeps sentences longer than 15 characters with at
    least 4 words; ``loose`` only requires more than 20 characters.
    """
    sentences = []
    for raw in _SENTENCE_SPLIT.split(text):
        s = raw.strip()
        if loose:
            if len(s) > 20:
                sentences.append(s)
        elif len(s) > 15 and len(s.split()) >= 4:
            sentences.append(s)
    return sentences


def extract_paragraphs(text: str) -> list[str]:
    paragraphs = []
    for raw in _PARAGRAPH_SPLIT.split(text):
        p = clean_text(raw)
        if len(p) > 50:
            paragraphs.append(p)
    return paragraphs


def tokenize(text: str) -> list[str]:
    return _WORD.findall(text.lower())


def preprocess(text: str) -> PreprocessedText:
    clean = clean_text(text)
    return PreprocessedText(
        clean=clean,
        sentences=extract_sentences(clean),
        # Blank lines only survive in the raw text
        paragraphs=extract_paragraphs(text),
        words=tokenize(clean),
    )


def extract_key_terms(words: list[str], limit: int = KEY_TERM_LIMIT) -> list[str]:
    """Return the most frequent content words, most frequent first.

    A word counts when it is alphabetic, longer than 3 characters and not a
    stop word; only words seen at least twice qualify.
    """
    frequency = Counter(
        w for w in words
        if len(w) > 3 and w not in STOP_WORDS and _ALPHA.match(w)
    )
    # Counter.most_common is stable for ties (first-seen order)
    return [
        term for term, count in frequency.most_common()
        if count >= MIN_TERM_FREQUENCY
    ][:limit]


def _strip_token(token: str) -> str:
    return re.sub(r"[^\w]", "", token)


def _is_entity_token(word: str) -> bool:
    return (
        len(word) > 2
        and bool(_CAPITALIZED.match(word))
        and word.lower() not in STOP_WORDS
    )


def extract_named_entities(text: str, limit: int = ENTITY_LIMIT) -> list[str]:
    """Capitalized words, plus adjacent capitalized pairs, in first-seen order.

    The length and stop-word filters apply to the leading word only; the word
    following it just has to be capitalized.
    """
    entities: list[str] = []
    tokens = [_strip_token(t) for t in text.split()]
    for i, word in enumerate(tokens):
        if not _is_entity_token(word):
            continue
        if word not in entities:
            entities.append(word)
        if i + 1 < len(tokens) and _CAPITALIZED.match(tokens[i + 1]):
            pair = f"{word} {tokens[i + 1]}"
            if pair not in entities:
                entities.append(pair)
    return entities[:limit]
