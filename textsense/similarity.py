#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: similarity.py
# Project: textsense
# Description: Jaccard and cosine similarity between texts
# Created: 2025-05-22 15:48:37
# Modified: 2025-05-29 17:10:02

from collections import Counter
from typing import List, Tuple

import numpy as np

from .tokenizer import Tokenizer


def jaccard_similarity(tokens_a: List[str], tokens_b: List[str]) -> float:
    set_a, set_b = set(tokens_a), set(tokens_b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def cosine_similarity(tokens_a: List[str], tokens_b: List[str]) -> float:
    """Cosine of the token frequency vectors over the shared vocabulary."""
    freq_a, freq_b = Counter(tokens_a), Counter(tokens_b)
    vocabulary = sorted(set(freq_a) | set(freq_b))
    if not vocabulary:
        return 0.0

    vec_a = np.array([freq_a[t] for t in vocabulary], dtype=float)
    vec_b = np.array([freq_b[t] for t in vocabulary], dtype=float)

    magnitude = np.linalg.norm(vec_a) * np.linalg.norm(vec_b)
    if magnitude == 0:
        return 0.0
    return float(min(1.0, np.dot(vec_a, vec_b) / magnitude))


class SimilarityCalculator:
    def __init__(self, tokenizer: Tokenizer, language: str = "en"):
        self.tokenizer = tokenizer
        self.language = language

    def similarity(self, text_a: str, text_b: str) -> Tuple[float, float, float]:
        """
        Compare two texts on their word tokens.

        Returns:
            Tuple[float, float, float]: (jaccard, cosine, average)
        """
        tokens_a = self.tokenizer.tokenize(text_a, "word", self.language)
        tokens_b = self.tokenizer.tokenize(text_b, "word", self.language)

        jaccard = jaccard_similarity(tokens_a, tokens_b)
        cosine = cosine_similarity(tokens_a, tokens_b)
        return jaccard, cosine, (jaccard + cosine) / 2.0
