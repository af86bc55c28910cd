#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: readability.py
# Project: textsense
# Description: Readability metrics
# Created: 2025-05-23 10:04:19
# Modified: 2025-05-28 12:47:33

import re
from typing import List

from .models import Complexity, ReadabilityMetrics

VOWEL_GROUP = re.compile(r"[aeiouy]+")
SYLLABIC_LE = re.compile(r"[^aeiouy]le$")


def count_syllables(word: str) -> int:
    """
    Estimate English syllables as the number of vowel groups.

    A trailing silent "e" is dropped unless it closes a consonant + "le"
    ending ("ta-ble"). Short words and words without vowels count as one.

    Args:
        word (str): Word token, any case

    Returns:
        int: Estimated syllable count, at least 1
    """
    word = word.lower().strip("'-")
    if len(word) <= 3:
        return 1

    if word.endswith("e") and not SYLLABIC_LE.search(word):
        word = word[:-1]

    return max(1, len(VOWEL_GROUP.findall(word)))


def readability_metrics(words: List[str], sentences: List[str]) -> ReadabilityMetrics:
    """
    Flesch reading ease (clamped to 0-100) and average lengths.

    Args:
        words (List[str]): Word tokens
        sentences (List[str]): Sentences

    Returns:
        ReadabilityMetrics: Readability summary
    """
    if not words:
        return ReadabilityMetrics(
            flesch_score=0.0,
            average_sentence_length=0.0,
            average_word_length=0.0,
            complexity=Complexity.HARD,
        )

    avg_sent_length = len(words) / max(1, len(sentences))
    avg_word_length = sum(len(w) for w in words) / len(words)
    syllables_per_word = sum(count_syllables(w) for w in words) / len(words)

    flesch = 206.835 - (1.015 * avg_sent_length) - (84.6 * syllables_per_word)
    flesch = max(0.0, min(100.0, flesch))

    if flesch > 70:
        complexity = Complexity.EASY
    elif flesch > 40:
        complexity = Complexity.MEDIUM
    else:
        complexity = Complexity.HARD

    return ReadabilityMetrics(
        flesch_score=flesch,
        average_sentence_length=avg_sent_length,
        average_word_length=avg_word_length,
        complexity=complexity,
    )
