#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: summarizer.py
# Project: textsense
# Description: Extractive summarization by keyword density and position
# Created: 2025-05-22 13:30:12
# Modified: 2025-06-02 08:55:41

import logging
from typing import List, Set

from .keywords import KeywordExtractor
from .models import ScoredSentence, SummaryResult
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)

SUMMARY_KEYWORD_POOL = 20
LEAD_WEIGHT = 1.5


def sentence_score(words: List[str], keywords: Set[str], position: int, total_sentences: int) -> float:
    """
    Keyword density of a sentence, boosted for sentences in the first third.

    Args:
        words (List[str]): Lowercase word tokens of the sentence
        keywords (Set[str]): Keyword lookup set
        position (int): Zero-based sentence index
        total_sentences (int): Number of sentences in the text

    Returns:
        float: Sentence score
    """
    if not words:
        return 0.0
    density = sum(1 for w in words if w in keywords) / len(words)
    weight = LEAD_WEIGHT if position < total_sentences // 3 else 1.0
    return density * weight


class Summarizer:
    def __init__(self, tokenizer: Tokenizer, keyword_extractor: KeywordExtractor):
        self.tokenizer = tokenizer
        self.keyword_extractor = keyword_extractor

    def summarize(self, text: str, max_sentences: int = 3, language: str = "en") -> SummaryResult:
        """
        Create an extractive summary.

        The best ``max_sentences`` sentences are picked by score and then put
        back into document order before joining.
        """
        if max_sentences <= 0:
            raise ValueError("max_sentences must be >= 1")

        sentences = self.tokenizer.tokenize(text, "sentence", language)
        keywords = {
            k.word for k in self.keyword_extractor.extract(text, language, SUMMARY_KEYWORD_POOL)
        }

        scored = []
        for position, sentence in enumerate(sentences):
            words = [w.lower() for w in self.tokenizer.tokenize(sentence, "word", language)]
            scored.append(ScoredSentence(
                sentence=sentence,
                score=sentence_score(words, keywords, position, len(sentences)),
                position=position,
            ))

        # Stable sort keeps earlier sentences ahead on equal scores
        selected = sorted(scored, key=lambda s: s.score, reverse=True)[:max_sentences]
        selected.sort(key=lambda s: s.position)

        summary = " ".join(s.sentence for s in selected)
        ratio = len(summary) / len(text) if text else 0.0

        return SummaryResult(
            original_text=text,
            summary=summary,
            compression_ratio=ratio,
            selected_sentences=selected,
        )
