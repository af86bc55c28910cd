#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: test_config.py
# Project: textsense
# Description: Tests for engine configuration and analysis options
# Created: 2025-05-27 11:22:09
# Modified: 2025-06-01 10:58:37

import unittest

from textsense.config import (
    CORE_LANGUAGES,
    EXTENDED_LANGUAGES,
    EngineConfig,
    KeywordExtractionMethod,
    ModelLoadingStrategy,
    TopicModelingAlgorithm,
)
from textsense.models import AnalysisOptions


class EngineConfigTestCase(unittest.TestCase):
    def test_defaults(self):
        config = EngineConfig()
        self.assertEqual(config.max_cache_size, 1000)
        self.assertEqual(config.preferred_languages, ["en", "tr"])
        self.assertEqual(config.processing_timeout, 30.0)
        self.assertEqual(config.model_loading_strategy, ModelLoadingStrategy.LAZY)
        self.assertEqual(config.keyword_extraction_method, KeywordExtractionMethod.TFIDF)
        self.assertEqual(config.topic_modeling_algorithm, TopicModelingAlgorithm.SIMPLE)
        self.assertTrue(config.result_caching)
        self.assertFalse(config.streaming_processing)
        self.assertEqual(config.fallback_language, "en")

    def test_supported_languages(self):
        self.assertEqual(EngineConfig().supported_languages, CORE_LANGUAGES)
        extended = EngineConfig(enable_extended_language_support=True).supported_languages
        self.assertEqual(extended, CORE_LANGUAGES + EXTENDED_LANGUAGES)

    def test_fallback_language_skips_unsupported(self):
        self.assertEqual(EngineConfig(preferred_languages=["ja", "fr"]).fallback_language, "fr")
        self.assertEqual(EngineConfig(preferred_languages=["pt"]).fallback_language, "en")
        extended = EngineConfig(preferred_languages=["pt"], enable_extended_language_support=True)
        self.assertEqual(extended.fallback_language, "pt")
        self.assertEqual(EngineConfig(preferred_languages=[]).fallback_language, "en")

    def test_presets(self):
        performance = EngineConfig.performance()
        self.assertEqual(performance.model_loading_strategy, ModelLoadingStrategy.PRELOAD)
        self.assertEqual(performance.keyword_extraction_method, KeywordExtractionMethod.FREQUENCY)
        self.assertFalse(performance.morphology_enabled)

        comprehensive = EngineConfig.comprehensive()
        self.assertTrue(comprehensive.enable_extended_language_support)
        self.assertTrue(comprehensive.streaming_processing)

        memory = EngineConfig.memory_efficient()
        self.assertEqual(memory.max_cache_size, 100)
        self.assertFalse(memory.batch_processing_enabled)

    def test_from_dict_coerces_enums(self):
        config = EngineConfig.from_dict({
            "model_loading_strategy": "selective",
            "keyword_extraction_method": "frequency",
            "preferred_languages": ["FR", "en"],
        })
        self.assertEqual(config.model_loading_strategy, ModelLoadingStrategy.SELECTIVE)
        self.assertEqual(config.keyword_extraction_method, KeywordExtractionMethod.FREQUENCY)
        self.assertEqual(config.fallback_language, "fr")

    def test_from_dict_rejects_unknown_keys(self):
        with self.assertRaises(ValueError):
            EngineConfig.from_dict({"max_cache_size": 10, "turbo": True})

    def test_invalid_values(self):
        for overrides in (
            {"max_cache_size": -1},
            {"processing_timeout": 0},
            {"max_concurrent_operations": 0},
            {"sentiment_threshold": 1.5},
            {"entity_threshold": -0.1},
            {"keyword_extraction_method": "magic"},
        ):
            with self.assertRaises(ValueError, msg=str(overrides)):
                EngineConfig(**overrides)

    def test_with_overrides(self):
        config = EngineConfig().with_overrides(max_cache_size=5)
        self.assertEqual(config.max_cache_size, 5)
        self.assertEqual(config.to_dict()["max_cache_size"], 5)


class AnalysisOptionsTestCase(unittest.TestCase):
    def test_defaults(self):
        options = AnalysisOptions()
        self.assertTrue(options.include_sentiment)
        self.assertTrue(options.include_entities)
        self.assertTrue(options.include_keywords)
        self.assertFalse(options.include_topics)
        self.assertFalse(options.include_language_detection)
        self.assertEqual(options.max_keywords, 10)
        self.assertEqual(options.max_topics, 5)

    def test_presets(self):
        self.assertTrue(AnalysisOptions.comprehensive().include_topics)
        self.assertFalse(AnalysisOptions.fast().include_entities)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            AnalysisOptions(max_topics=0)
        with self.assertRaises(ValueError):
            AnalysisOptions(max_keywords=-1)


if __name__ == "__main__":
    unittest.main()
