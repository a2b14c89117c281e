"""Heuristic sentiment, complexity and key-term scoring over raw message text.

Scores are display-only metadata. All three are deterministic and never raise
for any string input; empty text yields sentiment 0.5, complexity 0.0 and no
key terms.

    sentiment  = clamp(0.5 + step * (positive - negative))
    complexity = clamp(w1*word_len + w2*sentence_len + w3*technical + code_bonus)
"""

from __future__ import annotations

from collections import Counter

from research_assistant.annotation.tokenizer import (
    content_terms,
    has_code_block,
    sentences,
    words,
)
from research_assistant.config.constants import NEGATIVE_WORDS, POSITIVE_WORDS, TECHNICAL_TERMS
from research_assistant.config.settings import Settings
from research_assistant.models.domain import Annotation

MAX_KEY_TERMS = 5


def _clamp(x: float) -> float:
    return max(0.0, min(1.0, x))


class HeuristicAnnotator:
    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or Settings()
        self.step = settings.sentiment_step
        self.w_word = settings.cx_w_word_length
        self.w_sentence = settings.cx_w_sentence_length
        self.w_technical = settings.cx_w_technical
        self.code_bonus = settings.cx_code_bonus
        self.ref_word = settings.cx_ref_word_length
        self.ref_sentence = settings.cx_ref_sentence_length
        self.ref_technical = settings.cx_ref_technical_fraction

    def annotate(self, content: str) -> Annotation:
        return Annotation(
            sentiment=self.sentiment(content),
            complexity=self.complexity(content),
            key_terms=self.key_terms(content),
        )

    def sentiment(self, content: str) -> float:
        tokens = words(content)
        positive = sum(1 for t in tokens if t in POSITIVE_WORDS)
        negative = sum(1 for t in tokens if t in NEGATIVE_WORDS)
        return _clamp(0.5 + self.step * (positive - negative))

    def complexity(self, content: str) -> float:
        tokens = words(content)
        if not tokens:
            return 0.0

        mean_word_len = sum(len(t) for t in tokens) / len(tokens)
        word_factor = min(mean_word_len / self.ref_word, 1.0)

        sentence_word_counts = [len(words(s)) for s in sentences(content)] or [len(tokens)]
        mean_sentence_len = sum(sentence_word_counts) / len(sentence_word_counts)
        sentence_factor = min(mean_sentence_len / self.ref_sentence, 1.0)

        technical_fraction = sum(1 for t in tokens if t in TECHNICAL_TERMS) / len(tokens)
        technical_factor = min(technical_fraction / self.ref_technical, 1.0)

        score = (
            self.w_word * word_factor
            + self.w_sentence * sentence_factor
            + self.w_technical * technical_factor
        )
        if has_code_block(content):
            score += self.code_bonus
        return _clamp(score)

    @staticmethod
    def key_terms(content: str) -> list[str]:
        counts = Counter(content_terms(content))
        # Counter keeps first-seen order and sorted() is stable, so ties fall back to it.
        ranked = sorted(counts, key=lambda term: counts[term], reverse=True)
        return ranked[:MAX_KEY_TERMS]


def annotate_text(content: str, settings: Settings | None = None) -> Annotation:
    return HeuristicAnnotator(settings).annotate(content)
