#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: __init__.py
# Project: textsense
# Description:
# Created: 2025-05-22 10:02:11
# Modified: 2025-06-03 14:02:57

from .__version__ import __version__
from .config import (
    EngineConfig,
    KeywordExtractionMethod,
    ModelLoadingStrategy,
    TopicModelingAlgorithm,
)
from .engine import NLPEngine
from .errors import (
    TextSenseError,
    NotReadyError,
    EngineStateError,
    EmptyInputError,
    TextTooLongError,
    LanguageNotSupportedError,
    ModelNotAvailableError,
    ModelPredictionFailedError,
    ProcessingFailedError,
    FeatureDisabledError,
)
from .models import (
    AnalysisOptions,
    AnalysisResult,
    EngineState,
    EntityType,
    HealthState,
    Sentiment,
    TokenUnit,
)
from .sentiment import SentimentModelRegistry, TextBlobSentimentModel
from .entities import NltkEntityTagger
from .resources import download_nltk_data

__all__ = [
    "__version__",
    "NLPEngine",
    "EngineConfig",
    "KeywordExtractionMethod",
    "ModelLoadingStrategy",
    "TopicModelingAlgorithm",
    "AnalysisOptions",
    "AnalysisResult",
    "EngineState",
    "EntityType",
    "HealthState",
    "Sentiment",
    "TokenUnit",
    "SentimentModelRegistry",
    "TextBlobSentimentModel",
    "NltkEntityTagger",
    "download_nltk_data",
    "TextSenseError",
    "NotReadyError",
    "EngineStateError",
    "EmptyInputError",
    "TextTooLongError",
    "LanguageNotSupportedError",
    "ModelNotAvailableError",
    "ModelPredictionFailedError",
    "ProcessingFailedError",
    "FeatureDisabledError",
]
