#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: classification.py
# Project: textsense
# Description: Keyword-overlap text classification
# Created: 2025-05-23 11:38:50
# Modified: 2025-05-28 12:49:06

import re
from typing import Dict, List, Tuple

UNKNOWN_CATEGORY = "unknown"


def category_keywords(category: str) -> List[str]:
    """Lowercase alphanumeric parts of a category name."""
    return [part for part in re.split(r"[^0-9a-z]+", category.lower()) if part]


def classify(text: str, categories: List[str]) -> Tuple[str, float, Dict[str, float]]:
    """
    Pick the category whose name keywords occur most in the text.

    Args:
        text (str): Input text
        categories (List[str]): Candidate categories

    Returns:
        Tuple[str, float, Dict[str, float]]: (category, confidence, all scores);
        ``"unknown"`` with confidence 0 when no categories are given
    """
    if not categories:
        return UNKNOWN_CATEGORY, 0.0, {}

    lowered = text.lower()
    scores: Dict[str, float] = {}
    for category in categories:
        keywords = category_keywords(category)
        if not keywords:
            scores[category] = 0.0
            continue
        hits = sum(1 for keyword in keywords if keyword in lowered)
        scores[category] = hits / len(keywords)

    best = max(categories, key=lambda c: scores[c])
    return best, scores[best], scores
