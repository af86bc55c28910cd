#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: config.py
# Project: textsense
# Description: Engine configuration and presets
# Created: 2025-05-20 11:02:17
# Modified: 2025-06-02 21:05:44

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, List, Mapping


class ModelLoadingStrategy(str, Enum):
    LAZY = "lazy"
    PRELOAD = "preload"
    SELECTIVE = "selective"


class KeywordExtractionMethod(str, Enum):
    FREQUENCY = "frequency"
    TFIDF = "tfidf"
    RAKE = "rake"
    TEXTRANK = "textrank"


class TopicModelingAlgorithm(str, Enum):
    SIMPLE = "simple"
    LDA = "lda"
    NMF = "nmf"
    BERT = "bert"


# Methods that have a native implementation; the rest run as tfidf / simple.
IMPLEMENTED_KEYWORD_METHODS = {KeywordExtractionMethod.FREQUENCY, KeywordExtractionMethod.TFIDF}
IMPLEMENTED_TOPIC_ALGORITHMS = {TopicModelingAlgorithm.SIMPLE}

CORE_LANGUAGES = ["en", "tr", "fr", "de", "es", "it"]
EXTENDED_LANGUAGES = ["pt", "nl", "ru", "sv", "da", "no", "fi"]


@dataclass
class EngineConfig:
    """
    Settings applied when an ``NLPEngine`` is constructed.

    The first supported entry of ``preferred_languages`` is the fallback
    language used when detection yields nothing usable.
    """

    enable_extended_language_support: bool = False
    max_cache_size: int = 1000
    preferred_languages: List[str] = field(default_factory=lambda: ["en", "tr"])
    processing_timeout: float = 30.0
    model_loading_strategy: ModelLoadingStrategy = ModelLoadingStrategy.LAZY
    max_concurrent_operations: int = 4
    sentiment_threshold: float = 0.6
    entity_threshold: float = 0.7
    keyword_extraction_method: KeywordExtractionMethod = KeywordExtractionMethod.TFIDF
    topic_modeling_algorithm: TopicModelingAlgorithm = TopicModelingAlgorithm.SIMPLE
    morphology_enabled: bool = True
    multilanguage_detection: bool = True
    batch_processing_enabled: bool = True
    streaming_processing: bool = False
    result_caching: bool = True
    max_text_length: int = 10000
    download_resources: bool = False

    def __post_init__(self):
        self.model_loading_strategy = ModelLoadingStrategy(self.model_loading_strategy)
        self.keyword_extraction_method = KeywordExtractionMethod(self.keyword_extraction_method)
        self.topic_modeling_algorithm = TopicModelingAlgorithm(self.topic_modeling_algorithm)
        self.preferred_languages = [lang.lower() for lang in self.preferred_languages]

        if self.max_cache_size < 0:
            raise ValueError("max_cache_size must be >= 0")
        if self.processing_timeout <= 0:
            raise ValueError("processing_timeout must be positive")
        if self.max_concurrent_operations < 1:
            raise ValueError("max_concurrent_operations must be >= 1")
        if self.max_text_length < 1:
            raise ValueError("max_text_length must be >= 1")
        for name in ("sentiment_threshold", "entity_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")

    @property
    def fallback_language(self) -> str:
        """First preferred language the engine supports, else English."""
        supported = self.supported_languages
        for language in self.preferred_languages:
            if language in supported:
                return language
        return "en"

    @property
    def supported_languages(self) -> List[str]:
        languages = list(CORE_LANGUAGES)
        if self.enable_extended_language_support:
            languages.extend(EXTENDED_LANGUAGES)
        return languages

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EngineConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration option(s): {', '.join(unknown)}")
        return cls(**dict(data))

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def with_overrides(self, **overrides) -> "EngineConfig":
        return replace(self, **overrides)

    # Presets

    @classmethod
    def performance(cls) -> "EngineConfig":
        return cls(
            max_cache_size=500,
            preferred_languages=["en"],
            processing_timeout=15.0,
            model_loading_strategy=ModelLoadingStrategy.PRELOAD,
            max_concurrent_operations=8,
            keyword_extraction_method=KeywordExtractionMethod.FREQUENCY,
            topic_modeling_algorithm=TopicModelingAlgorithm.SIMPLE,
            morphology_enabled=False,
            multilanguage_detection=False,
        )

    @classmethod
    def comprehensive(cls) -> "EngineConfig":
        return cls(
            enable_extended_language_support=True,
            max_cache_size=2000,
            preferred_languages=["en", "tr", "es", "fr", "de", "it", "pt"],
            processing_timeout=60.0,
            model_loading_strategy=ModelLoadingStrategy.PRELOAD,
            max_concurrent_operations=6,
            sentiment_threshold=0.5,
            entity_threshold=0.6,
            streaming_processing=True,
        )

    @classmethod
    def memory_efficient(cls) -> "EngineConfig":
        return cls(
            max_cache_size=100,
            processing_timeout=10.0,
            max_concurrent_operations=2,
            keyword_extraction_method=KeywordExtractionMethod.FREQUENCY,
            morphology_enabled=False,
            multilanguage_detection=False,
            batch_processing_enabled=False,
        )
