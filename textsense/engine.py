#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: engine.py
# Project: textsense
# Description: Orchestrates the analyzers, owns lifecycle, cache and metrics
# Created: 2025-05-24 09:12:36
# Modified: 2025-06-03 13:44:20

import time
import logging
import threading
import concurrent.futures
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures.process import BrokenProcessPool
from concurrent.futures.thread import BrokenThreadPool
from typing import Callable, Iterable, Iterator, List, Optional, Union

from .cache import ResultCache, make_cache_key
from .classification import classify
from .config import (
    EngineConfig,
    IMPLEMENTED_KEYWORD_METHODS,
    IMPLEMENTED_TOPIC_ALGORITHMS,
    ModelLoadingStrategy,
)
from .entities import EntityExtractor, EntityTagger, NltkEntityTagger
from .errors import (
    EmptyInputError,
    EngineStateError,
    FeatureDisabledError,
    ModelPredictionFailedError,
    NotReadyError,
    ProcessingFailedError,
    TextTooLongError,
)
from .keywords import KeywordExtractor
from .language import LanguageDetector
from .metrics import Operation, PerformanceMetrics
from .models import (
    AnalysisOptions,
    AnalysisResult,
    EngineState,
    EntityExtractionResult,
    HealthState,
    HealthStatus,
    Keyword,
    LanguageDetectionResult,
    LanguageHypothesis,
    SentimentResult,
    SummaryResult,
    TextClassificationResult,
    TextSimilarityResult,
    TokenizationResult,
    TokenUnit,
    Topic,
    ValidationIssue,
    ValidationResult,
)
from .readability import readability_metrics
from .resources import download_nltk_data
from .sentiment import SentimentAnalyzer, SentimentModelRegistry, default_sentiment_registry
from .similarity import SimilarityCalculator
from .summarizer import Summarizer
from .tokenizer import Tokenizer
from .topics import TopicModeler
from .vocabulary import VocabularyStore

logger = logging.getLogger(__name__)

# Overall confidence reported when no sub-analysis produced one
DEFAULT_CONFIDENCE = 0.5


class NLPEngine:
    """
    Text analysis engine.

    Every public operation runs under one re-entrant lock, so cache, metrics
    and loaded resources are only touched by one caller at a time. Calls into
    classifier backends run on a worker pool and are awaited with the
    configured ``processing_timeout`` while the lock is still held.

    Example:
        with NLPEngine(EngineConfig()) as engine:
            result = engine.analyze("Some text to analyze.")
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        sentiment_models: Optional[SentimentModelRegistry] = None,
        entity_tagger: Optional[EntityTagger] = None
    ):
        self.config = config or EngineConfig()
        self._status = EngineState.UNINITIALIZED
        self._lock = threading.RLock()

        self._sentiment_models = sentiment_models
        self._entity_tagger = entity_tagger

        self._executor: Optional[ThreadPoolExecutor] = None
        self.tokenizer: Optional[Tokenizer] = None
        self.vocabulary: Optional[VocabularyStore] = None
        self.language_detector: Optional[LanguageDetector] = None
        self.sentiment_analyzer: Optional[SentimentAnalyzer] = None
        self.entity_extractor: Optional[EntityExtractor] = None
        self.keyword_extractor: Optional[KeywordExtractor] = None
        self.topic_modeler: Optional[TopicModeler] = None
        self.summarizer: Optional[Summarizer] = None
        self.similarity_calculator: Optional[SimilarityCalculator] = None

        self.cache = ResultCache(self.config.max_cache_size if self.config.result_caching else 0)
        self.metrics = PerformanceMetrics()

    # Lifecycle

    @property
    def status(self) -> EngineState:
        return self._status

    @property
    def is_ready(self) -> bool:
        return self._status is EngineState.READY

    def __enter__(self) -> "NLPEngine":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()

    def initialize(self):
        """
        Load tokenizers, vocabularies and models and move to ``ready``.

        Calling it on a ready engine does nothing. Calling it after a failure
        or a shutdown raises ``EngineStateError``.
        """
        with self._lock:
            if self._status is EngineState.READY:
                logger.debug("NLP engine already initialized")
                return
            if self._status is not EngineState.UNINITIALIZED:
                raise EngineStateError(f"Cannot initialize NLP engine from state '{self._status.value}'")

            self._status = EngineState.INITIALIZING
            logger.info("Initializing NLP engine...")
            try:
                self._load_resources()
            except Exception as e:
                self._status = EngineState.ERROR
                if self._executor is not None:
                    self._executor.shutdown(wait=False)
                    self._executor = None
                logger.error(f"NLP engine initialization failed: {e}")
                raise ProcessingFailedError("NLP engine initialization failed", e) from e

            self._status = EngineState.READY
            logger.info(f"NLP engine initialized for {len(self.tokenizer.languages)} languages")

    def _load_resources(self):
        config = self.config

        if config.download_resources:
            missing = download_nltk_data()
            if missing:
                logger.warning(f"Continuing without NLTK packages: {', '.join(missing)}")

        languages = config.supported_languages
        self.tokenizer = Tokenizer(languages)
        self.vocabulary = VocabularyStore(languages)
        self.language_detector = LanguageDetector(
            fallback_language=self.fallback_language,
            max_hypotheses=5 if config.multilanguage_detection else 1,
            languages=languages,
        )

        self._executor = ThreadPoolExecutor(
            max_workers=config.max_concurrent_operations,
            thread_name_prefix="textsense-backend",
        )

        if self._sentiment_models is None:
            self._sentiment_models = default_sentiment_registry()
        if config.model_loading_strategy is ModelLoadingStrategy.PRELOAD:
            loaded = self._sentiment_models.load(languages)
            logger.debug(f"Preloaded sentiment models: {loaded}")
        elif config.model_loading_strategy is ModelLoadingStrategy.SELECTIVE:
            preferred = [lang for lang in config.preferred_languages if lang in languages]
            loaded = self._sentiment_models.load(preferred)
            logger.debug(f"Loaded sentiment models for preferred languages: {loaded}")

        self.sentiment_analyzer = SentimentAnalyzer(
            self.tokenizer,
            self.vocabulary,
            registry=self._sentiment_models,
            threshold=config.sentiment_threshold,
            invoke=self._invoke_backend,
        )

        if self._entity_tagger is None:
            self._entity_tagger = NltkEntityTagger()
        self.entity_extractor = EntityExtractor(
            self.tokenizer,
            tagger=self._entity_tagger,
            threshold=config.entity_threshold,
            invoke=self._invoke_backend,
        )

        self.keyword_extractor = KeywordExtractor(
            self.tokenizer, self.vocabulary, config.keyword_extraction_method
        )
        self.topic_modeler = TopicModeler(self.keyword_extractor, config.topic_modeling_algorithm)
        self.summarizer = Summarizer(self.tokenizer, self.keyword_extractor)
        self.similarity_calculator = SimilarityCalculator(self.tokenizer, self.fallback_language)

    def shutdown(self):
        """Release all resources and clear cache and metrics. Terminal."""
        with self._lock:
            if self._status is EngineState.SHUTDOWN:
                return

            self._status = EngineState.SHUTDOWN
            if self._executor is not None:
                self._executor.shutdown(wait=False)
                self._executor = None
            if self.tokenizer is not None:
                self.tokenizer.clear()
            if self.vocabulary is not None:
                self.vocabulary.clear()
            if self._sentiment_models is not None:
                self._sentiment_models.clear()

            self.language_detector = None
            self.sentiment_analyzer = None
            self.entity_extractor = None
            self.keyword_extractor = None
            self.topic_modeler = None
            self.summarizer = None
            self.similarity_calculator = None
            self._entity_tagger = None

            self.cache.clear()
            self.metrics.reset()
            logger.info("NLP engine shutdown complete")

    def validate(self) -> ValidationResult:
        with self._lock:
            errors: List[ValidationIssue] = []
            warnings: List[ValidationIssue] = []

            if self._status is not EngineState.READY:
                errors.append(ValidationIssue("NLP_NOT_READY", "NLP engine not ready"))
                return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

            if not self.tokenizer.languages:
                warnings.append(ValidationIssue("NO_TOKENIZERS", "No tokenizers configured"))
            if not self._sentiment_models.languages:
                warnings.append(ValidationIssue(
                    "NO_SENTIMENT_MODELS", "No sentiment models registered; lexicon fallback only"
                ))
            if not self.entity_extractor.tagger_available(self.fallback_language):
                warnings.append(ValidationIssue(
                    "NO_ENTITY_TAGGER", "Entity tagger unavailable; pattern entities only"
                ))
            if self.config.keyword_extraction_method not in IMPLEMENTED_KEYWORD_METHODS:
                warnings.append(ValidationIssue(
                    "KEYWORD_METHOD_FALLBACK",
                    f"Keyword method '{self.config.keyword_extraction_method.value}' runs as tfidf",
                ))
            if self.config.topic_modeling_algorithm not in IMPLEMENTED_TOPIC_ALGORITHMS:
                warnings.append(ValidationIssue(
                    "TOPIC_ALGORITHM_FALLBACK",
                    f"Topic algorithm '{self.config.topic_modeling_algorithm.value}' runs as simple",
                ))

            return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)

    def health_check(self) -> HealthStatus:
        with self._lock:
            metrics = {
                "tokenizers": str(len(self.tokenizer.languages) if self.tokenizer else 0),
                "sentiment_models": str(len(self._sentiment_models.loaded_languages) if self._sentiment_models else 0),
                "supported_languages": str(len(self.config.supported_languages)),
                "cache_entries": str(len(self.cache)),
                "total_analyses": str(self.metrics.count(Operation.ANALYSIS)),
                "total_tokenizations": str(self.metrics.count(Operation.TOKENIZATION)),
                "total_sentiment_analyses": str(self.metrics.count(Operation.SENTIMENT_ANALYSIS)),
            }

            if self._status is EngineState.READY:
                return HealthStatus(
                    status=HealthState.HEALTHY,
                    message=f"NLP engine operational with {metrics['tokenizers']} tokenizers",
                    metrics=metrics,
                )
            if self._status is EngineState.ERROR:
                return HealthStatus(
                    status=HealthState.UNHEALTHY,
                    message="NLP engine encountered an error",
                    metrics=metrics,
                )
            return HealthStatus(
                status=HealthState.DEGRADED,
                message=f"NLP engine not ready ({self._status.value})",
                metrics=metrics,
            )

    # Helpers

    @property
    def fallback_language(self) -> str:
        return self.config.fallback_language

    def _require_ready(self):
        if self._status is not EngineState.READY:
            raise NotReadyError(self._status.value)

    def _validate_text(self, text: str, allow_empty: bool = False):
        if text is None:
            text = ""
        if not allow_empty and not text.strip():
            raise EmptyInputError()
        if len(text) > self.config.max_text_length:
            raise TextTooLongError(len(text), self.config.max_text_length)

    def _resolve_language(self, language: str) -> str:
        if self.tokenizer.supports(language):
            return language
        logger.debug(f"Language '{language}' not supported; using '{self.fallback_language}'")
        return self.fallback_language

    def _invoke_backend(self, fn: Callable, *args):
        """Run a backend call on the worker pool, bounded by the processing timeout."""
        try:
            future = self._executor.submit(fn, *args)
        except (BrokenThreadPool, BrokenProcessPool) as e:
            self._status = EngineState.ERROR
            logger.error(f"Backend worker pool is broken: {e}")
            raise ProcessingFailedError("Backend worker pool is broken", e) from e

        try:
            return future.result(timeout=self.config.processing_timeout)
        except concurrent.futures.TimeoutError as e:
            future.cancel()
            raise ModelPredictionFailedError(
                f"Backend call exceeded {self.config.processing_timeout}s timeout"
            ) from e

    def _hypotheses(self, text: str) -> List[LanguageHypothesis]:
        hypotheses = self.language_detector.detect(text)
        if not hypotheses:
            hypotheses = [LanguageHypothesis(language=self.fallback_language, confidence=0.0)]
        return hypotheses

    def _detect(self, text: str) -> str:
        return self._resolve_language(self.language_detector.dominant(text).language)

    def _timed(self, operation: str, fn: Callable, *args):
        start = time.perf_counter()
        result = fn(*args)
        self.metrics.record(operation, time.perf_counter() - start)
        return result

    def _stage(self, operation: str, fn: Callable, *args):
        """Run one sub-analysis of ``analyze``; any failure aborts the request."""
        try:
            return self._timed(operation, fn, *args)
        except ProcessingFailedError:
            raise
        except Exception as e:
            logger.error(f"{operation} failed: {e}")
            raise ProcessingFailedError(f"{operation} failed", e) from e

    # Analysis

    def analyze(self, text: str, options: Optional[AnalysisOptions] = None) -> AnalysisResult:
        """
        Run the sub-analyses selected by ``options`` and compose one result.

        Args:
            text (str): Input text
            options (AnalysisOptions): Sub-analyses to run (defaults apply when None)

        Returns:
            AnalysisResult: Combined result, possibly served from the cache

        Raises:
            NotReadyError: Engine is not ready
            EmptyInputError: Text is blank
            TextTooLongError: Text exceeds ``max_text_length``
            ProcessingFailedError: A sub-analysis failed
        """
        with self._lock:
            self._require_ready()
            self._validate_text(text)
            options = options or AnalysisOptions()

            caching = self.config.result_caching and self.cache.max_entries > 0
            key = make_cache_key(text, options.cache_token())
            if caching:
                cached = self.cache.get(key)
                if cached is not None:
                    self.metrics.cache_hits += 1
                    logger.debug("Analysis served from cache")
                    return cached
                self.metrics.cache_misses += 1

            start = time.perf_counter()
            result = self._run_analysis(text, options, start)

            if caching:
                self.cache.put(key, result, cost=len(text))
            self.metrics.record(Operation.ANALYSIS, time.perf_counter() - start)
            return result

    def _run_analysis(self, text: str, options: AnalysisOptions, start: float) -> AnalysisResult:
        hypotheses = self._stage(Operation.LANGUAGE_DETECTION, self._hypotheses, text)
        detected = hypotheses[0].language
        language = self._resolve_language(detected)
        logger.debug(f"Language detected: {detected} (analysing as {language})")

        def segment():
            return (
                self.tokenizer.tokenize(text, TokenUnit.WORD, language),
                self.tokenizer.tokenize(text, TokenUnit.SENTENCE, language),
            )

        tokens, sentences = self._stage(Operation.TOKENIZATION, segment)
        self.metrics.total_tokens_processed += len(tokens)

        confidences: List[float] = []
        sentiment = entities = keywords = topics = languages = readability = None

        if options.include_sentiment:
            sentiment = self._stage(
                Operation.SENTIMENT_ANALYSIS, self.sentiment_analyzer.analyze, text, language
            )
            confidences.append(sentiment.confidence)

        if options.include_entities:
            entities = self._stage(
                Operation.ENTITY_EXTRACTION, self.entity_extractor.extract, text, language
            )
            self.metrics.total_entities_extracted += len(entities)
            if entities:
                confidences.append(sum(e.confidence for e in entities) / len(entities))

        if options.include_keywords:
            keywords = self._stage(
                Operation.KEYWORD_EXTRACTION, self.keyword_extractor.extract,
                text, language, options.max_keywords
            )

        if options.include_topics:
            topics = self._stage(
                Operation.TOPIC_EXTRACTION, self.topic_modeler.extract_topics,
                text, language, options.max_topics
            )

        if options.include_language_detection:
            languages = hypotheses
            confidences.append(hypotheses[0].confidence)

        if options.include_readability:
            readability = self._stage(Operation.READABILITY, readability_metrics, tokens, sentences)

        confidence = sum(confidences) / len(confidences) if confidences else DEFAULT_CONFIDENCE

        return AnalysisResult(
            original_text=text,
            detected_language=detected,
            tokens=tokens,
            sentences=sentences,
            confidence=max(0.0, min(1.0, confidence)),
            processing_time=time.perf_counter() - start,
            sentiment=sentiment,
            entities=entities,
            keywords=keywords,
            topics=topics,
            languages=languages,
            readability=readability,
        )

    def analyze_batch(
        self,
        texts: Iterable[str],
        options: Optional[AnalysisOptions] = None
    ) -> List[AnalysisResult]:
        """Analyze texts one after another; each request completes before the next starts."""
        if not self.config.batch_processing_enabled:
            raise FeatureDisabledError("Batch processing")
        with self._lock:
            return [self.analyze(text, options) for text in texts]

    def analyze_stream(
        self,
        texts: Iterable[str],
        options: Optional[AnalysisOptions] = None
    ) -> Iterator[AnalysisResult]:
        """Lazily analyze an iterable of texts, yielding each result as it completes."""
        if not self.config.streaming_processing:
            raise FeatureDisabledError("Streaming processing")

        def stream():
            for text in texts:
                yield self.analyze(text, options)

        return stream()

    def detect_language(self, text: str) -> LanguageDetectionResult:
        with self._lock:
            self._require_ready()
            self._validate_text(text)

            start = time.perf_counter()
            hypotheses = self._hypotheses(text)
            duration = time.perf_counter() - start
            self.metrics.record(Operation.LANGUAGE_DETECTION, duration)

            dominant = hypotheses[0]
            logger.debug(f"Language detected: {dominant.language}")
            return LanguageDetectionResult(
                detected_language=dominant.language,
                confidence=dominant.confidence,
                hypotheses=hypotheses,
                processing_time=duration,
            )

    def tokenize(
        self,
        text: str,
        unit: Union[TokenUnit, str] = TokenUnit.WORD,
        language: str = "en"
    ) -> TokenizationResult:
        with self._lock:
            self._require_ready()
            self._validate_text(text, allow_empty=True)
            unit = TokenUnit(unit)

            start = time.perf_counter()
            tokens = self.tokenizer.tokenize(text, unit, language)
            stems = None
            if self.config.morphology_enabled and unit is TokenUnit.WORD:
                stems = self.tokenizer.stem(tokens, language)
            duration = time.perf_counter() - start

            self.metrics.record(Operation.TOKENIZATION, duration)
            self.metrics.total_tokens_processed += len(tokens)

            return TokenizationResult(
                tokens=tokens,
                token_count=len(tokens),
                language=language,
                unit=unit,
                processing_time=duration,
                stems=stems,
            )

    def analyze_sentiment(self, text: str, language: Optional[str] = None) -> SentimentResult:
        with self._lock:
            self._require_ready()
            self._validate_text(text)
            language = self._resolve_language(language) if language else self._detect(text)

            result = self._timed(Operation.SENTIMENT_ANALYSIS, self.sentiment_analyzer.analyze, text, language)
            logger.debug(f"Sentiment analyzed: {result.sentiment.value} via {result.method}")
            return result

    def extract_entities(self, text: str, language: Optional[str] = None) -> EntityExtractionResult:
        with self._lock:
            self._require_ready()
            self._validate_text(text)
            language = self._resolve_language(language) if language else self._detect(text)

            start = time.perf_counter()
            entities = self.entity_extractor.extract(text, language)
            duration = time.perf_counter() - start

            self.metrics.record(Operation.ENTITY_EXTRACTION, duration)
            self.metrics.total_entities_extracted += len(entities)
            return EntityExtractionResult(
                entities=entities,
                entity_count=len(entities),
                processing_time=duration,
            )

    def extract_keywords(self, text: str, max_count: int = 10, language: Optional[str] = None) -> List[Keyword]:
        with self._lock:
            self._require_ready()
            self._validate_text(text)
            language = self._resolve_language(language) if language else self._detect(text)
            return self._timed(
                Operation.KEYWORD_EXTRACTION, self.keyword_extractor.extract, text, language, max_count
            )

    def extract_topics(self, text: str, topic_count: int = 5, language: Optional[str] = None) -> List[Topic]:
        with self._lock:
            self._require_ready()
            self._validate_text(text)
            language = self._resolve_language(language) if language else self._detect(text)
            return self._timed(
                Operation.TOPIC_EXTRACTION, self.topic_modeler.extract_topics, text, language, topic_count
            )

    def summarize_text(self, text: str, max_sentences: int = 3, language: Optional[str] = None) -> SummaryResult:
        with self._lock:
            self._require_ready()
            self._validate_text(text)
            language = self._resolve_language(language) if language else self._detect(text)
            return self._timed(
                Operation.SUMMARIZATION, self.summarizer.summarize, text, max_sentences, language
            )

    def calculate_similarity(self, text_a: str, text_b: str) -> TextSimilarityResult:
        with self._lock:
            self._require_ready()
            self._validate_text(text_a, allow_empty=True)
            self._validate_text(text_b, allow_empty=True)

            start = time.perf_counter()
            jaccard, cosine, average = self.similarity_calculator.similarity(text_a or "", text_b or "")
            duration = time.perf_counter() - start
            self.metrics.record(Operation.SIMILARITY, duration)

            return TextSimilarityResult(
                jaccard=jaccard,
                cosine=cosine,
                average=average,
                processing_time=duration,
            )

    def classify_text(self, text: str, categories: List[str]) -> TextClassificationResult:
        with self._lock:
            self._require_ready()
            self._validate_text(text)

            start = time.perf_counter()
            category, confidence, scores = classify(text, list(categories))
            duration = time.perf_counter() - start
            self.metrics.record(Operation.CLASSIFICATION, duration)

            return TextClassificationResult(
                predicted_category=category,
                confidence=confidence,
                all_scores=scores,
                processing_time=duration,
            )

    # Introspection

    def get_performance_metrics(self) -> PerformanceMetrics:
        with self._lock:
            return self.metrics.snapshot()

    def clear_caches(self):
        with self._lock:
            self.cache.clear()
            logger.info("NLP caches cleared")

    def get_supported_languages(self) -> List[str]:
        return list(self.config.supported_languages)
