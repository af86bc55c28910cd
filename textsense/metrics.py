#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: metrics.py
# Project: textsense
# Description: Per-operation call counters and latency averages
# Created: 2025-05-23 15:02:44
# Modified: 2025-06-01 11:18:05

import copy
from dataclasses import dataclass, field, asdict
from typing import Any, Dict


class Operation:
    ANALYSIS = "analysis"
    LANGUAGE_DETECTION = "language_detection"
    TOKENIZATION = "tokenization"
    SENTIMENT_ANALYSIS = "sentiment_analysis"
    ENTITY_EXTRACTION = "entity_extraction"
    KEYWORD_EXTRACTION = "keyword_extraction"
    TOPIC_EXTRACTION = "topic_extraction"
    SUMMARIZATION = "summarization"
    SIMILARITY = "similarity"
    CLASSIFICATION = "classification"
    READABILITY = "readability"


@dataclass
class PerformanceMetrics:
    """
    Call counts and latency figures per operation kind.

    ``average_times[op]`` is updated as ``(previous + latest) / 2``, which
    weights recent calls heavily; it is not the mean over all calls.
    """

    counts: Dict[str, int] = field(default_factory=dict)
    average_times: Dict[str, float] = field(default_factory=dict)
    cache_hits: int = 0
    cache_misses: int = 0
    total_tokens_processed: int = 0
    total_entities_extracted: int = 0

    def record(self, operation: str, duration: float):
        self.counts[operation] = self.counts.get(operation, 0) + 1
        self.average_times[operation] = (self.average_times.get(operation, 0.0) + duration) / 2.0

    def count(self, operation: str) -> int:
        return self.counts.get(operation, 0)

    def average_time(self, operation: str) -> float:
        return self.average_times.get(operation, 0.0)

    def snapshot(self) -> "PerformanceMetrics":
        return copy.deepcopy(self)

    def reset(self):
        self.counts.clear()
        self.average_times.clear()
        self.cache_hits = 0
        self.cache_misses = 0
        self.total_tokens_processed = 0
        self.total_entities_extracted = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
