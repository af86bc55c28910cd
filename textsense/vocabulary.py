#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: vocabulary.py
# Project: textsense
# Description: Per-language stopword sets and sentiment lexicons
# Created: 2025-05-20 14:02:48
# Modified: 2025-06-02 10:51:19

import logging
from typing import Dict, FrozenSet, Iterable, List

from nltk.corpus import stopwords as nltk_stopwords

from .resources import nltk_language_name

logger = logging.getLogger(__name__)

BASE_STOPWORDS: Dict[str, FrozenSet[str]] = {
    "en": frozenset({
        "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
        "a", "an", "is", "are", "was", "were", "be", "been", "this", "that", "these",
        "those", "it", "its", "from", "as", "have", "has", "had", "they", "them",
        "their", "there", "which", "what", "when", "where", "would", "could", "should",
        "about", "into", "than", "then", "also", "very", "just", "some", "such",
    }),
    "tr": frozenset({
        "ve", "veya", "ama", "ancak", "ile", "için", "bir", "bu", "şu", "o", "da", "de",
        "gibi", "daha", "çok", "olan", "olarak", "kadar", "sonra", "önce",
    }),
    "fr": frozenset({
        "le", "la", "les", "un", "une", "des", "et", "ou", "mais", "dans", "sur", "pour",
        "avec", "par", "est", "sont", "cette", "comme", "plus", "leur",
    }),
    "de": frozenset({
        "der", "die", "das", "und", "oder", "aber", "in", "auf", "für", "mit", "von",
        "ist", "sind", "ein", "eine", "nicht", "auch", "sich", "dass", "wird",
    }),
    "es": frozenset({
        "el", "la", "los", "las", "un", "una", "y", "o", "pero", "en", "para", "con",
        "por", "es", "son", "que", "como", "este", "esta", "también",
    }),
    "it": frozenset({
        "il", "lo", "la", "gli", "le", "un", "una", "e", "o", "ma", "in", "su", "per",
        "con", "di", "che", "come", "questo", "questa", "sono",
    }),
}

POSITIVE_WORDS: Dict[str, FrozenSet[str]] = {
    "en": frozenset({
        "good", "great", "excellent", "amazing", "wonderful", "fantastic", "awesome",
        "love", "like", "happy", "best", "nice", "beautiful", "perfect", "brilliant",
        "enjoy", "glad", "pleased", "superb", "delightful",
    }),
    "tr": frozenset({
        "iyi", "güzel", "harika", "mükemmel", "muhteşem", "sevmek", "beğenmek", "mutlu",
        "başarılı",
    }),
    "fr": frozenset({"bon", "bien", "excellent", "magnifique", "heureux", "parfait", "super", "aime"}),
    "de": frozenset({"gut", "toll", "ausgezeichnet", "wunderbar", "glücklich", "perfekt", "super", "liebe"}),
    "es": frozenset({"bueno", "genial", "excelente", "maravilloso", "feliz", "perfecto", "increíble", "encanta"}),
    "it": frozenset({"buono", "ottimo", "eccellente", "meraviglioso", "felice", "perfetto", "fantastico", "amo"}),
}

NEGATIVE_WORDS: Dict[str, FrozenSet[str]] = {
    "en": frozenset({
        "bad", "terrible", "awful", "horrible", "hate", "dislike", "sad", "angry",
        "worst", "poor", "disappointing", "ugly", "boring", "broken", "useless",
        "annoying", "fail", "failed", "wrong", "disgusting",
    }),
    "tr": frozenset({"kötü", "berbat", "korkunç", "nefret", "üzgün", "kızgın", "başarısız", "zor"}),
    "fr": frozenset({"mauvais", "terrible", "horrible", "triste", "déteste", "nul", "pire"}),
    "de": frozenset({"schlecht", "schrecklich", "furchtbar", "traurig", "hasse", "wütend", "schlimmste"}),
    "es": frozenset({"malo", "terrible", "horrible", "triste", "odio", "peor", "enojado"}),
    "it": frozenset({"cattivo", "terribile", "orribile", "triste", "odio", "peggiore", "arrabbiato"}),
}


class VocabularyStore:
    """
    Read-only stopword and sentiment-word sets, loaded once per language.

    The built-in sets are merged with the NLTK stopwords corpus when it is
    installed.
    """

    def __init__(self, languages: Iterable[str]):
        self._stopwords: Dict[str, FrozenSet[str]] = {}
        self.nltk_stopwords_loaded: List[str] = []
        for language in languages:
            self._stopwords[language] = self._load_stopwords(language)
        logger.debug(f"Vocabularies loaded for {len(self._stopwords)} languages")

    def _load_stopwords(self, language: str) -> FrozenSet[str]:
        words = set(BASE_STOPWORDS.get(language, frozenset()))
        name = nltk_language_name(language)
        try:
            words.update(w.lower() for w in nltk_stopwords.words(name))
            self.nltk_stopwords_loaded.append(language)
        except (LookupError, OSError) as e:
            logger.debug(f"NLTK stopwords unavailable for '{name}': {e}")
        return frozenset(words)

    @property
    def languages(self) -> List[str]:
        return list(self._stopwords)

    def stopwords(self, language: str) -> FrozenSet[str]:
        return self._stopwords.get(language, BASE_STOPWORDS.get(language, frozenset()))

    def positive_words(self, language: str) -> FrozenSet[str]:
        return POSITIVE_WORDS.get(language, frozenset())

    def negative_words(self, language: str) -> FrozenSet[str]:
        return NEGATIVE_WORDS.get(language, frozenset())

    def clear(self):
        self._stopwords.clear()
        self.nltk_stopwords_loaded.clear()
