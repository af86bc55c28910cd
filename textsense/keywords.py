#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: keywords.py
# Project: textsense
# Description: Frequency and simplified TF-IDF keyword extraction
# Created: 2025-05-22 09:41:26
# Modified: 2025-06-01 19:13:50

import math
import logging
from collections import Counter
from typing import List, Union

from .config import KeywordExtractionMethod, IMPLEMENTED_KEYWORD_METHODS
from .models import Keyword
from .tokenizer import Tokenizer
from .vocabulary import VocabularyStore

logger = logging.getLogger(__name__)

# Fixed document-count proxy standing in for a learned IDF
IDF_CONSTANT = 1000.0
MIN_KEYWORD_LENGTH = 4


class KeywordExtractor:
    """
    Ranks candidate words by a term score.

    Candidates are lowercase word tokens longer than three characters that
    are not stopwords. With ``tfidf`` a word with frequency ``f`` among
    ``total`` candidates scores ``f/total * ln(1000/f)``; with ``frequency``
    it scores ``f/total``.
    """

    def __init__(
        self,
        tokenizer: Tokenizer,
        vocabulary: VocabularyStore,
        method: Union[KeywordExtractionMethod, str] = KeywordExtractionMethod.TFIDF
    ):
        self.tokenizer = tokenizer
        self.vocabulary = vocabulary
        method = KeywordExtractionMethod(method)
        if method not in IMPLEMENTED_KEYWORD_METHODS:
            logger.warning(f"Keyword method '{method.value}' not implemented; using tfidf")
            method = KeywordExtractionMethod.TFIDF
        self.method = method

    def candidates(self, text: str, language: str = "en") -> List[str]:
        stop_words = self.vocabulary.stopwords(language)
        words = (w.lower() for w in self.tokenizer.tokenize(text, "word", language))
        return [w for w in words if len(w) >= MIN_KEYWORD_LENGTH and w not in stop_words]

    def extract(self, text: str, language: str = "en", max_count: int = 10) -> List[Keyword]:
        """
        Extract the highest scoring keywords.

        Args:
            text (str): Input text
            language (str): Language of the text
            max_count (int): Maximum number of keywords returned

        Returns:
            List[Keyword]: Sorted by descending score, ties in first-seen order
        """
        if max_count <= 0:
            return []

        candidates = self.candidates(text, language)
        if not candidates:
            return []

        total = len(candidates)
        word_freq = Counter(candidates)

        keywords = [
            Keyword(word=word, score=self._score(freq, total), frequency=freq)
            for word, freq in word_freq.items()
        ]
        keywords.sort(key=lambda k: k.score, reverse=True)
        return keywords[:max_count]

    def _score(self, frequency: int, total: int) -> float:
        tf = frequency / total
        if self.method is KeywordExtractionMethod.FREQUENCY:
            return tf
        return max(0.0, tf * math.log(IDF_CONSTANT / frequency))
