#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: errors.py
# Project: textsense
# Description: Exception types raised by the analysis engine
# Created: 2025-05-20 10:12:41
# Modified: 2025-06-02 18:40:03

from typing import Optional


class TextSenseError(Exception):
    """Base class for every error raised by textsense."""

    code = "TEXTSENSE_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class NotReadyError(TextSenseError):
    code = "NLP_NOT_READY"

    def __init__(self, status: str):
        super().__init__(f"NLP engine not ready (status: {status})")
        self.status = status


class EngineStateError(TextSenseError):
    code = "INVALID_STATE_TRANSITION"


class EmptyInputError(TextSenseError):
    code = "EMPTY_TEXT"

    def __init__(self, message: str = "Input text is empty"):
        super().__init__(message)


class TextTooLongError(TextSenseError):
    code = "TEXT_TOO_LONG"

    def __init__(self, length: int, limit: int):
        super().__init__(f"Text length {length} exceeds maximum of {limit} characters")
        self.length = length
        self.limit = limit


class LanguageNotSupportedError(TextSenseError):
    code = "LANGUAGE_NOT_SUPPORTED"

    def __init__(self, language: str):
        super().__init__(f"Language {language} not supported")
        self.language = language


class ModelNotAvailableError(TextSenseError):
    code = "MODEL_NOT_AVAILABLE"

    def __init__(self, kind: str, language: str):
        super().__init__(f"No {kind} model available for language {language}")
        self.kind = kind
        self.language = language


class ModelPredictionFailedError(TextSenseError):
    code = "MODEL_PREDICTION_FAILED"


class ProcessingFailedError(TextSenseError):
    """Wraps the underlying cause of an aborted analysis."""

    code = "PROCESSING_FAILED"

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.cause = cause


class FeatureDisabledError(TextSenseError):
    code = "FEATURE_DISABLED"

    def __init__(self, feature: str):
        super().__init__(f"{feature} is disabled in the engine configuration")
        self.feature = feature
