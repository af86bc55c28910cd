#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: models.py
# Project: textsense
# Description: Result and option types shared by the analyzers and the engine
# Created: 2025-05-20 10:31:09
# Modified: 2025-06-03 09:14:52

from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class Serializable:
    """Mixin giving dataclass results a plain-dict form for JSON output."""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class TokenUnit(str, Enum):
    WORD = "word"
    SENTENCE = "sentence"
    PARAGRAPH = "paragraph"


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class EntityType(str, Enum):
    PERSON = "person"
    LOCATION = "location"
    ORGANIZATION = "organization"
    DATE = "date"
    MONEY = "money"
    PHONE_NUMBER = "phone_number"
    EMAIL = "email"
    URL = "url"
    OTHER = "other"


class Complexity(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class EngineState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    ERROR = "error"
    SHUTDOWN = "shutdown"


class HealthState(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass(frozen=True)
class AnalysisOptions(Serializable):
    """Selects which sub-analyses ``NLPEngine.analyze`` runs."""

    include_sentiment: bool = True
    include_entities: bool = True
    include_keywords: bool = True
    include_topics: bool = False
    include_language_detection: bool = False
    include_readability: bool = False
    max_keywords: int = 10
    max_topics: int = 5

    def __post_init__(self):
        if self.max_keywords < 0:
            raise ValueError("max_keywords must be >= 0")
        if self.max_topics < 1:
            raise ValueError("max_topics must be >= 1")

    @classmethod
    def comprehensive(cls) -> "AnalysisOptions":
        return cls(
            include_sentiment=True,
            include_entities=True,
            include_keywords=True,
            include_topics=True,
            include_language_detection=True,
            include_readability=True,
            max_keywords=20,
            max_topics=10,
        )

    @classmethod
    def fast(cls) -> "AnalysisOptions":
        return cls(
            include_sentiment=True,
            include_entities=False,
            include_keywords=True,
            include_topics=False,
            include_language_detection=False,
            include_readability=False,
            max_keywords=5,
            max_topics=3,
        )

    def cache_token(self) -> str:
        """Stable textual form used when building cache keys."""
        return "|".join(f"{k}={v}" for k, v in sorted(asdict(self).items()))


@dataclass(frozen=True)
class LanguageHypothesis(Serializable):
    language: str
    confidence: float


@dataclass(frozen=True)
class LanguageDetectionResult(Serializable):
    detected_language: str
    confidence: float
    hypotheses: List[LanguageHypothesis]
    processing_time: float = 0.0


@dataclass(frozen=True)
class TokenizationResult(Serializable):
    tokens: List[str]
    token_count: int
    language: str
    unit: TokenUnit
    processing_time: float = 0.0
    stems: Optional[List[str]] = None


@dataclass(frozen=True)
class SentimentResult(Serializable):
    sentiment: Sentiment
    score: float
    confidence: float
    positive_words: List[str] = field(default_factory=list)
    negative_words: List[str] = field(default_factory=list)
    method: str = "lexicon"


@dataclass(frozen=True)
class NamedEntity(Serializable):
    text: str
    type: EntityType
    start: int
    end: int
    confidence: float


@dataclass(frozen=True)
class EntityExtractionResult(Serializable):
    entities: List[NamedEntity]
    entity_count: int
    processing_time: float = 0.0

    @property
    def confidence(self) -> float:
        if not self.entities:
            return 0.0
        return sum(e.confidence for e in self.entities) / len(self.entities)


@dataclass(frozen=True)
class Keyword(Serializable):
    word: str
    score: float
    frequency: int


@dataclass(frozen=True)
class Topic(Serializable):
    id: str
    label: str
    keywords: List[Keyword]
    confidence: float


@dataclass(frozen=True)
class ScoredSentence(Serializable):
    sentence: str
    score: float
    position: int


@dataclass(frozen=True)
class SummaryResult(Serializable):
    original_text: str
    summary: str
    compression_ratio: float
    selected_sentences: List[ScoredSentence]


@dataclass(frozen=True)
class TextSimilarityResult(Serializable):
    jaccard: float
    cosine: float
    average: float
    processing_time: float = 0.0


@dataclass(frozen=True)
class TextClassificationResult(Serializable):
    predicted_category: str
    confidence: float
    all_scores: Dict[str, float]
    processing_time: float = 0.0


@dataclass(frozen=True)
class ReadabilityMetrics(Serializable):
    flesch_score: float
    average_sentence_length: float
    average_word_length: float
    complexity: Complexity


@dataclass(frozen=True)
class AnalysisResult(Serializable):
    original_text: str
    detected_language: str
    tokens: List[str]
    sentences: List[str]
    confidence: float
    processing_time: float
    sentiment: Optional[SentimentResult] = None
    entities: Optional[List[NamedEntity]] = None
    keywords: Optional[List[Keyword]] = None
    topics: Optional[List[Topic]] = None
    languages: Optional[List[LanguageHypothesis]] = None
    readability: Optional[ReadabilityMetrics] = None
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


@dataclass(frozen=True)
class ValidationIssue(Serializable):
    code: str
    message: str


@dataclass(frozen=True)
class ValidationResult(Serializable):
    is_valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)


@dataclass(frozen=True)
class HealthStatus(Serializable):
    status: HealthState
    message: str
    metrics: Dict[str, str] = field(default_factory=dict)
