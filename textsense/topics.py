#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: topics.py
# Project: textsense
# Description: Naive keyword partitioning into labeled topics
# Created: 2025-05-22 11:07:53
# Modified: 2025-05-31 15:26:04

import logging
from typing import List, Union

from .config import TopicModelingAlgorithm, IMPLEMENTED_TOPIC_ALGORITHMS
from .keywords import KeywordExtractor
from .models import Keyword, Topic

logger = logging.getLogger(__name__)

TOPIC_KEYWORD_POOL = 50
LABEL_KEYWORDS = 3


def partition_keywords(keywords: List[Keyword], topic_count: int) -> List[List[Keyword]]:
    """
    Split ranked keywords into contiguous groups.

    Groups hold ``len(keywords) // topic_count`` keywords (at least one) and the
    last group absorbs the remainder, so at most ``topic_count`` groups are
    returned.
    """
    if topic_count <= 0:
        raise ValueError("topic_count must be >= 1")
    if not keywords:
        return []

    size = max(1, len(keywords) // topic_count)
    groups = []
    for index in range(topic_count):
        start = index * size
        if start >= len(keywords):
            break
        end = len(keywords) if index == topic_count - 1 else start + size
        groups.append(keywords[start:end])
    return groups


def topic_label(keywords: List[Keyword]) -> str:
    return ", ".join(k.word for k in keywords[:LABEL_KEYWORDS])


def topic_confidence(keywords: List[Keyword]) -> float:
    if not keywords:
        return 0.0
    return sum(k.score for k in keywords) / len(keywords)


class TopicModeler:
    """Groups the top keywords of a text into ``topic_count`` topics."""

    def __init__(
        self,
        keyword_extractor: KeywordExtractor,
        algorithm: Union[TopicModelingAlgorithm, str] = TopicModelingAlgorithm.SIMPLE
    ):
        self.keyword_extractor = keyword_extractor
        algorithm = TopicModelingAlgorithm(algorithm)
        if algorithm not in IMPLEMENTED_TOPIC_ALGORITHMS:
            logger.warning(f"Topic algorithm '{algorithm.value}' not implemented; using simple partitioning")
            algorithm = TopicModelingAlgorithm.SIMPLE
        self.algorithm = algorithm

    def extract_topics(self, text: str, language: str = "en", topic_count: int = 5) -> List[Topic]:
        if topic_count <= 0:
            raise ValueError("topic_count must be >= 1")

        keywords = self.keyword_extractor.extract(text, language, TOPIC_KEYWORD_POOL)
        return [
            Topic(
                id=f"topic_{index}",
                label=topic_label(group),
                keywords=group,
                confidence=topic_confidence(group),
            )
            for index, group in enumerate(partition_keywords(keywords, topic_count))
        ]
