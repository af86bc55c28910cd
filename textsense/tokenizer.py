#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: tokenizer.py
# Project: textsense
# Description: Locale-aware word, sentence and paragraph segmentation
# Created: 2025-05-20 12:05:31
# Modified: 2025-06-01 16:48:27

import re
import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

from nltk.stem.snowball import SnowballStemmer
from nltk.tokenize import RegexpTokenizer
from nltk.tokenize.punkt import PunktSentenceTokenizer, PunktTokenizer

from .errors import LanguageNotSupportedError
from .models import TokenUnit
from .resources import nltk_language_name

logger = logging.getLogger(__name__)

# Unicode word runs; apostrophes and hyphens inside a word are kept.
WORD_PATTERN = r"\w+(?:['’\-]\w+)*"


def split_paragraphs(text: str) -> List[str]:
    """
    Split text into paragraphs (blocks separated by blank lines).

    Falls back to indentation breaks when no blank lines are present.
    """
    paragraphs = [p.strip() for p in re.split(r"\n[\t ]*\n", text) if p.strip()]

    # Try to detect paragraphs by indentation
    if len(paragraphs) <= 1:
        paragraphs = [p.strip() for p in re.split(r"\n[\t ]+", text) if p.strip()]

    return paragraphs


class LanguageSegmenter:
    """Boundary segmentation for one language."""

    def __init__(self, language: str):
        self.language = language
        self.name = nltk_language_name(language)
        self.word_tokenizer = RegexpTokenizer(WORD_PATTERN)
        self.sentence_tokenizer = self._load_sentence_tokenizer()
        self.stemmer = SnowballStemmer(self.name) if self.name in SnowballStemmer.languages else None

    def _load_sentence_tokenizer(self):
        try:
            return PunktTokenizer(self.name)
        except (LookupError, OSError, ValueError) as e:
            logger.debug(f"No trained Punkt model for '{self.name}' ({e}); using untrained Punkt")
            return PunktSentenceTokenizer()

    def words(self, text: str) -> List[str]:
        return self.word_tokenizer.tokenize(text)

    def word_spans(self, text: str) -> List[Tuple[int, int]]:
        return list(self.word_tokenizer.span_tokenize(text))

    def sentences(self, text: str) -> List[str]:
        return self.sentence_tokenizer.tokenize(text)

    def stems(self, words: Iterable[str]) -> Optional[List[str]]:
        if self.stemmer is None:
            return None
        return [self.stemmer.stem(word) for word in words]


class Tokenizer:
    """
    Splits text into words, sentences or paragraphs for a configured set of
    languages.

    Output is deterministic for a given ``(text, unit, language)``; segments
    are trimmed and empty segments dropped.
    """

    def __init__(self, languages: Iterable[str]):
        self._segmenters: Dict[str, LanguageSegmenter] = {}
        for language in languages:
            self._segmenters[language] = LanguageSegmenter(language)
        logger.debug(f"Tokenizers configured for {len(self._segmenters)} languages")

    @property
    def languages(self) -> List[str]:
        return list(self._segmenters)

    def supports(self, language: str) -> bool:
        return language in self._segmenters

    def segmenter(self, language: str) -> LanguageSegmenter:
        try:
            return self._segmenters[language]
        except KeyError:
            raise LanguageNotSupportedError(language) from None

    def tokenize(
        self,
        text: str,
        unit: Union[TokenUnit, str] = TokenUnit.WORD,
        language: str = "en"
    ) -> List[str]:
        """
        Tokenize text into the requested unit.

        Args:
            text (str): Input text
            unit (TokenUnit): word, sentence or paragraph
            language (str): ISO 639-1 language code

        Returns:
            List[str]: Trimmed, non-empty segments in text order
        """
        unit = TokenUnit(unit)
        segmenter = self.segmenter(language)

        if unit is TokenUnit.WORD:
            segments = segmenter.words(text)
        elif unit is TokenUnit.SENTENCE:
            segments = segmenter.sentences(text)
        else:
            segments = split_paragraphs(text)

        return [s.strip() for s in segments if s.strip()]

    def word_spans(self, text: str, language: str = "en") -> List[Tuple[int, int]]:
        """Character offsets of each word token, in text order."""
        return self.segmenter(language).word_spans(text)

    def stem(self, words: Iterable[str], language: str = "en") -> Optional[List[str]]:
        """Snowball stems for ``words``, or None when the language has no stemmer."""
        return self.segmenter(language).stems(words)

    def clear(self):
        self._segmenters.clear()
