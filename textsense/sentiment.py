#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: sentiment.py
# Project: textsense
# Description: Two-tier sentiment analysis (trained classifier, then lexicon)
# Created: 2025-05-21 09:20:44
# Modified: 2025-06-03 08:37:15

import logging
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Tuple

from textblob import TextBlob

from .errors import ModelPredictionFailedError
from .models import Sentiment, SentimentResult
from .tokenizer import Tokenizer
from .vocabulary import VocabularyStore

logger = logging.getLogger(__name__)

# Confidence assumed for classifier output that does not report its own.
DEFAULT_MODEL_CONFIDENCE = 0.9
MAX_EVIDENCE_WORDS = 10

# Polarity band treated as neutral by the TextBlob backend
POSITIVE_POLARITY = 0.05
NEGATIVE_POLARITY = -0.05


class SentimentModel(Protocol):
    """
    A trained sentiment classifier for one language.

    ``predict`` returns ``"label,score"`` or ``"label,score,confidence"``
    where label is positive/negative/neutral.
    """

    name: str

    def predict(self, text: str) -> str:
        ...


class TextBlobSentimentModel:
    """English classifier backed by TextBlob's pattern polarity."""

    name = "textblob"

    def predict(self, text: str) -> str:
        polarity = float(TextBlob(text).sentiment.polarity)
        if polarity > POSITIVE_POLARITY:
            label = Sentiment.POSITIVE.value
        elif polarity < NEGATIVE_POLARITY:
            label = Sentiment.NEGATIVE.value
        else:
            label = Sentiment.NEUTRAL.value
        return f"{label},{polarity:.6f}"


ModelFactory = Callable[[], SentimentModel]


class SentimentModelRegistry:
    """
    Sentiment classifiers keyed by language tag.

    Models are registered as factories and instantiated on first ``get`` (or
    eagerly through ``load``). A factory that fails marks the language as
    unavailable instead of raising.
    """

    def __init__(self):
        self._factories: Dict[str, ModelFactory] = {}
        self._models: Dict[str, Optional[SentimentModel]] = {}

    def register(self, language: str, factory: ModelFactory):
        self._factories[language] = factory
        self._models.pop(language, None)

    def register_model(self, language: str, model: SentimentModel):
        self._factories[language] = lambda: model
        self._models[language] = model

    @property
    def languages(self) -> List[str]:
        return list(self._factories)

    @property
    def loaded_languages(self) -> List[str]:
        return [lang for lang, model in self._models.items() if model is not None]

    def has(self, language: str) -> bool:
        return language in self._factories

    def get(self, language: str) -> Optional[SentimentModel]:
        if language not in self._factories:
            return None
        if language not in self._models:
            self._models[language] = self._instantiate(language)
        return self._models[language]

    def load(self, languages: Optional[Iterable[str]] = None) -> List[str]:
        """Instantiate models up front; returns the languages that loaded."""
        targets = self.languages if languages is None else [l for l in languages if self.has(l)]
        return [lang for lang in targets if self.get(lang) is not None]

    def _instantiate(self, language: str) -> Optional[SentimentModel]:
        try:
            model = self._factories[language]()
            logger.info(f"Loaded sentiment model '{getattr(model, 'name', type(model).__name__)}' for {language}")
            return model
        except Exception as e:
            logger.warning(f"Failed to load sentiment model for {language}: {e}")
            return None

    def clear(self):
        self._models.clear()


def default_sentiment_registry() -> SentimentModelRegistry:
    registry = SentimentModelRegistry()
    registry.register("en", TextBlobSentimentModel)
    return registry


def parse_prediction(prediction: str) -> Tuple[Sentiment, float, float]:
    """
    Parse classifier output into ``(sentiment, score, confidence)``.

    Raises:
        ModelPredictionFailedError: If the output is malformed
    """
    parts = [p.strip() for p in str(prediction).split(",")]
    if len(parts) < 2:
        raise ModelPredictionFailedError(f"Malformed sentiment prediction: {prediction!r}")

    try:
        sentiment = Sentiment(parts[0].lower())
        score = float(parts[1])
        confidence = float(parts[2]) if len(parts) > 2 else DEFAULT_MODEL_CONFIDENCE
    except ValueError as e:
        raise ModelPredictionFailedError(f"Malformed sentiment prediction: {prediction!r}") from e

    return sentiment, max(-1.0, min(1.0, score)), max(0.0, min(1.0, confidence))


def lexicon_sentiment(
    words: List[str],
    positive: Iterable[str],
    negative: Iterable[str]
) -> SentimentResult:
    """
    Score lowercase word tokens against positive and negative word sets.

    Args:
        words (List[str]): Lowercase word tokens
        positive (Iterable[str]): Positive lexicon
        negative (Iterable[str]): Negative lexicon

    Returns:
        SentimentResult: Lexicon-based sentiment
    """
    positive = set(positive)
    negative = set(negative)

    positive_matches = [w for w in words if w in positive]
    negative_matches = [w for w in words if w in negative and w not in positive]
    total = len(positive_matches) + len(negative_matches)

    if total == 0:
        sentiment = Sentiment.NEUTRAL
        score = 0.0
    else:
        positive_ratio = len(positive_matches) / total
        if positive_ratio > 0.6:
            sentiment = Sentiment.POSITIVE
            score = 0.5 + (positive_ratio - 0.5)
        elif positive_ratio < 0.4:
            sentiment = Sentiment.NEGATIVE
            score = 0.5 - (0.5 - positive_ratio)
        else:
            sentiment = Sentiment.NEUTRAL
            score = positive_ratio

    return SentimentResult(
        sentiment=sentiment,
        score=max(-1.0, min(1.0, score)),
        confidence=min(total / 10.0, 1.0),
        positive_words=positive_matches[:MAX_EVIDENCE_WORDS],
        negative_words=negative_matches[:MAX_EVIDENCE_WORDS],
        method="lexicon",
    )


def _call(fn, *args):
    return fn(*args)


class SentimentAnalyzer:
    """
    Classifier-first sentiment analysis with a lexicon fallback.

    Args:
        tokenizer (Tokenizer): Word segmentation
        vocabulary (VocabularyStore): Sentiment lexicons
        registry (SentimentModelRegistry): Per-language classifiers
        threshold (float): Minimum classifier confidence that is accepted
        invoke (Callable): Runs a backend call, e.g. on a worker with a timeout
    """

    def __init__(
        self,
        tokenizer: Tokenizer,
        vocabulary: VocabularyStore,
        registry: Optional[SentimentModelRegistry] = None,
        threshold: float = 0.6,
        invoke: Optional[Callable] = None
    ):
        self.tokenizer = tokenizer
        self.vocabulary = vocabulary
        self.registry = registry if registry is not None else SentimentModelRegistry()
        self.threshold = threshold
        self.invoke = invoke or _call

    def analyze(self, text: str, language: str = "en") -> SentimentResult:
        result = self._classify(text, language)
        if result is not None:
            return result
        return self.analyze_lexicon(text, language)

    def analyze_lexicon(self, text: str, language: str = "en") -> SentimentResult:
        words = self.tokenizer.tokenize(text.lower(), "word", language)
        return lexicon_sentiment(
            words,
            self.vocabulary.positive_words(language),
            self.vocabulary.negative_words(language),
        )

    def _classify(self, text: str, language: str) -> Optional[SentimentResult]:
        model = self.registry.get(language)
        if model is None:
            return None

        try:
            prediction = self.invoke(model.predict, text)
            sentiment, score, confidence = parse_prediction(prediction)
        except Exception as e:
            logger.debug(f"Sentiment model for {language} failed, using lexicon: {e}")
            return None

        if confidence < self.threshold:
            logger.debug(f"Sentiment model confidence {confidence:.2f} below threshold {self.threshold:.2f}")
            return None

        return SentimentResult(
            sentiment=sentiment,
            score=score,
            confidence=confidence,
            method=getattr(model, "name", "model"),
        )
