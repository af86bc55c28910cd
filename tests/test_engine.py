#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: test_engine.py
# Project: textsense
# Description: Tests for the engine lifecycle, pipeline, cache and metrics
# Created: 2025-05-27 14:03:26
# Modified: 2025-06-03 12:19:48

import unittest

from textsense.config import EngineConfig, ModelLoadingStrategy
from textsense.engine import NLPEngine
from textsense.errors import (
    EmptyInputError,
    EngineStateError,
    FeatureDisabledError,
    LanguageNotSupportedError,
    ModelPredictionFailedError,
    NotReadyError,
    ProcessingFailedError,
    TextTooLongError,
)
from textsense.metrics import Operation
from textsense.models import (
    AnalysisOptions,
    EngineState,
    EntityType,
    HealthState,
    Sentiment,
    TokenUnit,
)
from textsense.sentiment import SentimentModelRegistry

from tests.fakes import FakeSentimentModel, FakeTagger, FixedLanguageDetector, make_engine

ARTICLE = (
    "Solar energy adoption is growing rapidly across Europe. "
    "Governments offer subsidies for solar panels on residential rooftops. "
    "Critics argue that subsidies distort the energy market. "
    "Meanwhile, battery storage costs keep falling every year. "
    "Analysts expect solar energy to dominate new installations this decade."
)
APPLE_TEXT = (
    "Apple Inc. is an American technology company headquartered in Cupertino. "
    "Apple is the world's largest technology company by revenue."
)

NO_SUBANALYSES = AnalysisOptions(
    include_sentiment=False,
    include_entities=False,
    include_keywords=False,
)


class CountingRegistry(SentimentModelRegistry):
    """Registry whose factories record each instantiation."""

    def __init__(self, languages):
        super().__init__()
        self.created = []
        for language in languages:
            self.register(language, self._factory(language))

    def _factory(self, language):
        def create():
            self.created.append(language)
            return FakeSentimentModel()
        return create


class BrokenRegistry(SentimentModelRegistry):
    def load(self, languages=None):
        raise RuntimeError("model store unreachable")


class EngineLifecycleTestCase(unittest.TestCase):
    def test_initialize_and_shutdown(self):
        engine = NLPEngine(sentiment_models=SentimentModelRegistry(), entity_tagger=FakeTagger(available=False))
        self.assertEqual(engine.status, EngineState.UNINITIALIZED)

        engine.initialize()
        self.assertEqual(engine.status, EngineState.READY)
        self.assertTrue(engine.is_ready)

        # Second call is a no-op
        engine.initialize()
        self.assertEqual(engine.status, EngineState.READY)

        engine.shutdown()
        self.assertEqual(engine.status, EngineState.SHUTDOWN)
        engine.shutdown()
        self.assertEqual(engine.status, EngineState.SHUTDOWN)

    def test_operations_require_ready(self):
        engine = NLPEngine()
        with self.assertRaises(NotReadyError) as ctx:
            engine.analyze("Some text")
        self.assertEqual(ctx.exception.code, "NLP_NOT_READY")

        for call in (
            lambda: engine.detect_language("text"),
            lambda: engine.tokenize("text"),
            lambda: engine.analyze_sentiment("text"),
            lambda: engine.extract_entities("text"),
            lambda: engine.extract_keywords("text"),
            lambda: engine.extract_topics("text"),
            lambda: engine.summarize_text("text"),
            lambda: engine.calculate_similarity("a", "b"),
            lambda: engine.classify_text("text", ["a"]),
        ):
            with self.assertRaises(NotReadyError):
                call()

    def test_shutdown_is_terminal(self):
        engine = make_engine()
        engine.analyze("Some reasonable text to cache")
        engine.shutdown()

        self.assertEqual(len(engine.cache), 0)
        self.assertEqual(engine.get_performance_metrics().counts, {})
        with self.assertRaises(NotReadyError):
            engine.analyze("Some text")
        with self.assertRaises(EngineStateError):
            engine.initialize()

    def test_initialization_failure_moves_to_error(self):
        engine = NLPEngine(
            EngineConfig(model_loading_strategy=ModelLoadingStrategy.PRELOAD),
            sentiment_models=BrokenRegistry(),
            entity_tagger=FakeTagger(available=False),
        )
        with self.assertRaises(ProcessingFailedError) as ctx:
            engine.initialize()
        self.assertIsInstance(ctx.exception.cause, RuntimeError)
        self.assertEqual(engine.status, EngineState.ERROR)
        self.assertEqual(engine.health_check().status, HealthState.UNHEALTHY)

        with self.assertRaises(EngineStateError):
            engine.initialize()
        with self.assertRaises(NotReadyError):
            engine.analyze("text")

    def test_context_manager(self):
        with NLPEngine(sentiment_models=SentimentModelRegistry(),
                       entity_tagger=FakeTagger(available=False)) as engine:
            self.assertEqual(engine.status, EngineState.READY)
        self.assertEqual(engine.status, EngineState.SHUTDOWN)

    def test_model_loading_strategies(self):
        preload = CountingRegistry(["en", "fr", "ja"])
        make_engine(EngineConfig(model_loading_strategy="preload"), sentiment_models=preload).shutdown()
        self.assertEqual(sorted(preload.created), ["en", "fr"])

        selective = CountingRegistry(["en", "fr"])
        make_engine(
            EngineConfig(model_loading_strategy="selective", preferred_languages=["fr"]),
            sentiment_models=selective,
        ).shutdown()
        self.assertEqual(selective.created, ["fr"])

        lazy = CountingRegistry(["en", "fr"])
        engine = make_engine(EngineConfig(model_loading_strategy="lazy"), sentiment_models=lazy)
        self.assertEqual(lazy.created, [])
        engine.analyze_sentiment("Nice enough", "en")
        self.assertEqual(lazy.created, ["en"])
        engine.shutdown()

    def test_validate(self):
        engine = NLPEngine(EngineConfig(keyword_extraction_method="rake"),
                           sentiment_models=SentimentModelRegistry(),
                           entity_tagger=FakeTagger(available=False))
        result = engine.validate()
        self.assertFalse(result.is_valid)
        self.assertEqual([e.code for e in result.errors], ["NLP_NOT_READY"])

        engine.initialize()
        result = engine.validate()
        codes = {w.code for w in result.warnings}
        self.assertTrue(result.is_valid)
        self.assertIn("NO_SENTIMENT_MODELS", codes)
        self.assertIn("NO_ENTITY_TAGGER", codes)
        self.assertIn("KEYWORD_METHOD_FALLBACK", codes)
        engine.shutdown()

    def test_health_check(self):
        engine = NLPEngine(sentiment_models=SentimentModelRegistry(), entity_tagger=FakeTagger(available=False))
        self.assertEqual(engine.health_check().status, HealthState.DEGRADED)

        engine.initialize()
        health = engine.health_check()
        self.assertEqual(health.status, HealthState.HEALTHY)
        self.assertEqual(health.metrics["tokenizers"], "6")
        self.assertEqual(health.metrics["total_analyses"], "0")
        engine.shutdown()


class EngineAnalysisTestCase(unittest.TestCase):
    def setUp(self):
        self.engine = make_engine()

    def tearDown(self):
        self.engine.shutdown()

    def test_input_validation(self):
        with self.assertRaises(EmptyInputError):
            self.engine.analyze("   \n")
        with self.assertRaises(EmptyInputError):
            self.engine.analyze("")

        engine = make_engine(EngineConfig(max_text_length=20))
        with self.assertRaises(TextTooLongError):
            engine.analyze("x" * 21)
        engine.shutdown()

    def test_sentiment_scenario(self):
        result = self.engine.analyze_sentiment("This is absolutely amazing! I love it!")
        self.assertEqual(result.sentiment, Sentiment.POSITIVE)
        self.assertGreater(result.score, 0.5)

    def test_keyword_scenario(self):
        keywords = self.engine.extract_keywords(APPLE_TEXT, 5)
        words = [k.word for k in keywords]
        self.assertLessEqual(len(keywords), 5)
        self.assertTrue("apple" in words or "technology" in words)

    def test_similarity_scenario(self):
        close = self.engine.calculate_similarity("The cat sat on the mat", "The dog sat on the rug")
        far = self.engine.calculate_similarity("The cat sat on the mat", "Programming is fun")
        self.assertGreater(close.average, far.average)
        self.assertEqual(self.engine.calculate_similarity("Same text", "Same text").jaccard, 1.0)

    def test_tokenize_scenario(self):
        result = self.engine.tokenize("Hello world, how are you?", TokenUnit.WORD)
        self.assertEqual(result.tokens, ["Hello", "world", "how", "are", "you"])
        self.assertEqual(result.token_count, 5)
        self.assertEqual(len(result.stems), 5)
        self.assertEqual(self.engine.tokenize("running dogs").stems, ["run", "dog"])

    def test_tokenize_without_morphology(self):
        engine = make_engine(EngineConfig(morphology_enabled=False))
        self.assertIsNone(engine.tokenize("running dogs").stems)
        engine.shutdown()

    def test_tokenize_sentences_and_unsupported_language(self):
        result = self.engine.tokenize(ARTICLE, "sentence", "en")
        self.assertEqual(result.token_count, 5)
        self.assertIsNone(result.stems)
        with self.assertRaises(LanguageNotSupportedError):
            self.engine.tokenize("text", "word", "ja")

    def test_summary_scenario(self):
        result = self.engine.summarize_text(ARTICLE, 3)
        self.assertLess(len(result.summary), len(ARTICLE))
        keywords = {k.word for k in self.engine.extract_keywords(ARTICLE, 20)}
        self.assertTrue(any(word in result.summary.lower() for word in keywords))

    def test_topics(self):
        topics = self.engine.extract_topics(APPLE_TEXT, 3)
        self.assertLessEqual(len(topics), 3)
        with self.assertRaises(ValueError):
            self.engine.extract_topics(APPLE_TEXT, 0)

    def test_classify(self):
        result = self.engine.classify_text("The football season starts", ["politics", "football"])
        self.assertEqual(result.predicted_category, "football")
        self.assertEqual(self.engine.classify_text("text", []).predicted_category, "unknown")

    def test_detect_language_never_empty(self):
        self.engine.language_detector = FixedLanguageDetector(None)
        result = self.engine.detect_language("12345")
        self.assertEqual(result.detected_language, "en")
        self.assertEqual(result.confidence, 0.0)
        self.assertEqual(len(result.hypotheses), 1)

    def test_analyze_default_options(self):
        result = self.engine.analyze("I love this. Write to jane@example.com today.")

        self.assertEqual(result.detected_language, "en")
        self.assertEqual(result.tokens[:3], ["I", "love", "this"])
        self.assertEqual(len(result.sentences), 2)
        self.assertEqual(result.sentiment.sentiment, Sentiment.POSITIVE)
        self.assertEqual([e.type for e in result.entities], [EntityType.EMAIL])
        self.assertIsNotNone(result.keywords)
        self.assertIsNone(result.topics)
        self.assertIsNone(result.languages)
        self.assertIsNone(result.readability)
        # mean of lexicon confidence (1 match -> 0.1) and the e-mail entity (0.95)
        self.assertAlmostEqual(result.confidence, (0.1 + 0.95) / 2)

    def test_analyze_comprehensive(self):
        result = self.engine.analyze(ARTICLE, AnalysisOptions.comprehensive())
        self.assertIsNotNone(result.topics)
        self.assertEqual(result.languages[0].language, "en")
        self.assertIsNotNone(result.readability)
        self.assertTrue(0.0 <= result.confidence <= 1.0)
        self.assertIsInstance(result.to_dict()["sentiment"], dict)

    def test_confidence_default_without_contributors(self):
        result = self.engine.analyze("Plain words only", NO_SUBANALYSES)
        self.assertEqual(result.confidence, 0.5)
        self.assertIsNone(result.sentiment)

    def test_unsupported_detected_language_uses_fallback(self):
        self.engine.language_detector = FixedLanguageDetector("ja")
        result = self.engine.analyze("Some words typed here")
        self.assertEqual(result.detected_language, "ja")
        self.assertEqual(result.tokens, ["Some", "words", "typed", "here"])

    def test_metrics_per_operation(self):
        self.engine.analyze("I love this wonderful sunny weather today.")
        metrics = self.engine.get_performance_metrics()

        for operation in (
            Operation.ANALYSIS,
            Operation.LANGUAGE_DETECTION,
            Operation.TOKENIZATION,
            Operation.SENTIMENT_ANALYSIS,
            Operation.ENTITY_EXTRACTION,
            Operation.KEYWORD_EXTRACTION,
        ):
            self.assertEqual(metrics.count(operation), 1, operation)
        self.assertEqual(metrics.count(Operation.TOPIC_EXTRACTION), 0)
        self.assertEqual(metrics.total_tokens_processed, 7)

    def test_metrics_snapshot_is_a_copy(self):
        snapshot = self.engine.get_performance_metrics()
        snapshot.cache_hits = 99
        self.assertEqual(self.engine.get_performance_metrics().cache_hits, 0)

    def test_supported_languages(self):
        self.assertEqual(self.engine.get_supported_languages(), ["en", "tr", "fr", "de", "es", "it"])
        engine = make_engine(EngineConfig(enable_extended_language_support=True))
        self.assertEqual(len(engine.get_supported_languages()), 13)
        engine.shutdown()


class EngineCacheTestCase(unittest.TestCase):
    def test_cache_hit_short_circuits(self):
        engine = make_engine()
        first = engine.analyze("Caching makes repeated requests cheap.")
        second = engine.analyze("Caching makes repeated requests cheap.")

        self.assertIs(first, second)
        metrics = engine.get_performance_metrics()
        self.assertEqual(metrics.cache_hits, 1)
        self.assertEqual(metrics.cache_misses, 1)
        self.assertEqual(metrics.count(Operation.ANALYSIS), 1)
        self.assertEqual(metrics.count(Operation.TOKENIZATION), 1)
        engine.shutdown()

    def test_whitespace_variants_are_analyzed_separately(self):
        engine = make_engine()
        spaced = "Call  555-123-4567 now please."
        text = "Call 555-123-4567 now please."
        engine.analyze(spaced)
        result = engine.analyze(text)

        self.assertEqual(result.original_text, text)
        phone = [e for e in result.entities if e.type is EntityType.PHONE_NUMBER][0]
        self.assertEqual(text[phone.start:phone.end], "555-123-4567")
        self.assertEqual(engine.get_performance_metrics().cache_hits, 0)
        self.assertEqual(len(engine.cache), 2)
        engine.shutdown()

    def test_options_are_part_of_the_key(self):
        engine = make_engine()
        engine.analyze("Same text twice", AnalysisOptions())
        engine.analyze("Same text twice", AnalysisOptions.fast())
        self.assertEqual(len(engine.cache), 2)
        engine.shutdown()

    def test_cache_is_bounded(self):
        engine = make_engine(EngineConfig(max_cache_size=3))
        for i in range(6):
            engine.analyze(f"Distinct input number {i}")
            self.assertLessEqual(len(engine.cache), 3)
        engine.shutdown()

    def test_caching_disabled(self):
        engine = make_engine(EngineConfig(result_caching=False))
        first = engine.analyze("Not cached at all")
        second = engine.analyze("Not cached at all")
        self.assertIsNot(first, second)
        self.assertEqual(len(engine.cache), 0)
        self.assertEqual(engine.get_performance_metrics().cache_hits, 0)
        engine.shutdown()

    def test_clear_caches(self):
        engine = make_engine()
        engine.analyze("Fill the cache")
        engine.clear_caches()
        self.assertEqual(len(engine.cache), 0)
        engine.shutdown()


class EngineLanguageDetectionTestCase(unittest.TestCase):
    """Uses the bundled langdetect profiles instead of a fixed detector"""

    def setUp(self):
        self.engine = NLPEngine(
            EngineConfig(),
            sentiment_models=SentimentModelRegistry(),
            entity_tagger=FakeTagger(available=False),
        )
        self.engine.initialize()

    def tearDown(self):
        self.engine.shutdown()

    def test_short_english_greeting(self):
        result = self.engine.detect_language("Hello, how are you today?")
        self.assertEqual(result.detected_language, "en")
        self.assertGreater(result.confidence, 0.9)
        for hypothesis in result.hypotheses:
            self.assertIn(hypothesis.language, self.engine.get_supported_languages())

    def test_analyze_reports_supported_language(self):
        result = self.engine.analyze("Hello, how are you today?")
        self.assertEqual(result.detected_language, "en")
        self.assertEqual(result.tokens, ["Hello", "how", "are", "you", "today"])


class EngineBackendTestCase(unittest.TestCase):
    def test_sentiment_classifier_is_used(self):
        registry = SentimentModelRegistry()
        registry.register_model("en", FakeSentimentModel("negative,-0.6,0.9"))
        engine = make_engine(sentiment_models=registry)

        result = engine.analyze("I love it")
        self.assertEqual(result.sentiment.sentiment, Sentiment.NEGATIVE)
        self.assertEqual(result.sentiment.method, "fake")
        engine.shutdown()

    def test_sentiment_failure_falls_back_silently(self):
        registry = SentimentModelRegistry()
        registry.register_model("en", FakeSentimentModel(error=RuntimeError("backend down")))
        engine = make_engine(sentiment_models=registry)

        result = engine.analyze("What a great day")
        self.assertEqual(result.sentiment.method, "lexicon")
        self.assertEqual(result.sentiment.sentiment, Sentiment.POSITIVE)
        engine.shutdown()

    def test_sentiment_timeout_falls_back(self):
        registry = SentimentModelRegistry()
        registry.register_model("en", FakeSentimentModel(delay=0.5))
        engine = make_engine(EngineConfig(processing_timeout=0.05), sentiment_models=registry)

        result = engine.analyze_sentiment("What a great day", "en")
        self.assertEqual(result.method, "lexicon")
        engine.shutdown()

    def test_tagger_entities_in_analysis(self):
        tagger = FakeTagger({"Ada": "B-PERSON", "Lovelace": "I-PERSON", "London": "B-GPE"})
        engine = make_engine(tagger=tagger)

        result = engine.extract_entities("Ada Lovelace was born in London.")
        self.assertEqual([e.text for e in result.entities], ["Ada Lovelace", "London"])
        self.assertEqual(result.entity_count, 2)
        self.assertAlmostEqual(result.confidence, 0.8)
        self.assertEqual(engine.get_performance_metrics().total_entities_extracted, 2)
        engine.shutdown()

    def test_entity_failure_aborts_analysis(self):
        engine = make_engine(tagger=FakeTagger(error=RuntimeError("tagger crashed")))

        with self.assertRaises(ProcessingFailedError) as ctx:
            engine.analyze("Ada Lovelace was born in London.")
        self.assertIsInstance(ctx.exception.cause, ModelPredictionFailedError)
        self.assertEqual(len(engine.cache), 0)
        self.assertEqual(engine.get_performance_metrics().count(Operation.ANALYSIS), 0)

        with self.assertRaises(ModelPredictionFailedError):
            engine.extract_entities("Ada Lovelace was born in London.")

        # Without entities the same text succeeds
        options = AnalysisOptions(include_entities=False)
        self.assertIsNone(engine.analyze("Ada Lovelace was born in London.", options).entities)
        engine.shutdown()

    def test_entity_timeout_aborts_analysis(self):
        engine = make_engine(EngineConfig(processing_timeout=0.05), tagger=FakeTagger(delay=0.5))
        with self.assertRaises(ProcessingFailedError):
            engine.analyze("Ada Lovelace was born in London.")
        engine.shutdown()


class EngineBatchTestCase(unittest.TestCase):
    def test_batch(self):
        engine = make_engine()
        results = engine.analyze_batch(["First text here", "Second text here"])
        self.assertEqual([r.original_text for r in results], ["First text here", "Second text here"])
        self.assertEqual(engine.get_performance_metrics().count(Operation.ANALYSIS), 2)
        engine.shutdown()

    def test_batch_disabled(self):
        engine = make_engine(EngineConfig.memory_efficient())
        with self.assertRaises(FeatureDisabledError):
            engine.analyze_batch(["text"])
        engine.shutdown()

    def test_stream(self):
        engine = make_engine(EngineConfig(streaming_processing=True))
        stream = engine.analyze_stream(iter(["One text", "Another text"]))
        self.assertEqual([r.original_text for r in stream], ["One text", "Another text"])
        engine.shutdown()

    def test_stream_disabled(self):
        engine = make_engine()
        with self.assertRaises(FeatureDisabledError):
            engine.analyze_stream(["text"])
        engine.shutdown()


if __name__ == "__main__":
    unittest.main()
