#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: language.py
# Project: textsense
# Description: Ranked language identification on top of langdetect
# Created: 2025-05-20 13:18:02
# Modified: 2025-06-05 10:14:52

import re
import logging
import threading
from typing import Dict, Iterable, List, Optional

from langdetect import DetectorFactory
from langdetect.detector_factory import PROFILES_DIRECTORY
from langdetect.lang_detect_exception import LangDetectException

from .errors import EmptyInputError
from .models import LanguageHypothesis

logger = logging.getLogger(__name__)

# langdetect is randomised; a fixed seed makes rankings reproducible.
DetectorFactory.seed = 0

MAX_HYPOTHESES = 5

_factory: Optional[DetectorFactory] = None
_factory_lock = threading.Lock()


def get_detector_factory() -> DetectorFactory:
    """Load the bundled langdetect profiles once per process."""
    global _factory
    with _factory_lock:
        if _factory is None:
            factory = DetectorFactory()
            factory.load_profile(PROFILES_DIRECTORY)
            _factory = factory
        return _factory


def normalize_language_code(code: str) -> str:
    """Normalize a langdetect code to the tags used by the engine."""
    code = code.lower()
    if code.startswith("zh"):
        if "tw" in code or "hant" in code:
            return "zh-tw"
        return "zh-cn"
    return code


def clean_for_detection(text: str) -> str:
    """Strip URLs, e-mail addresses and excess whitespace before detection."""
    text = re.sub(r"https?://\S+", "", text)
    text = re.sub(r"\S+@\S+", "", text)
    return " ".join(text.split())


def build_prior_map(languages: Iterable[str], profiles: Iterable[str]) -> Dict[str, float]:
    """
    Uniform prior over the languages that have a langdetect profile.

    Args:
        languages (Iterable[str]): Engine language tags
        profiles (Iterable[str]): Profile codes known to the detector factory

    Returns:
        Dict[str, float]: Profile code to prior weight, empty when nothing matches
    """
    known = {normalize_language_code(code): code for code in profiles}
    prior = {}
    for language in languages:
        code = known.get(normalize_language_code(language))
        if code is None:
            logger.debug(f"No langdetect profile for '{language}'")
            continue
        prior[code] = 1.0
    return prior


class LanguageDetector:
    """
    Ranks language hypotheses for a text.

    When ``languages`` is given, detection is restricted to those languages
    through a langdetect prior, so short texts are not attributed to a
    language the engine cannot process.

    Args:
        fallback_language (str): Tag reported as dominant when nothing is detected
        max_hypotheses (int): Upper bound on the ranked list (at most 5)
        languages (Iterable[str]): Candidate languages, all profiles when None
    """

    def __init__(
        self,
        fallback_language: str = "en",
        max_hypotheses: int = MAX_HYPOTHESES,
        languages: Optional[Iterable[str]] = None
    ):
        self.fallback_language = fallback_language
        self.max_hypotheses = max(1, min(max_hypotheses, MAX_HYPOTHESES))
        self.factory = get_detector_factory()

        self.prior_map: Optional[Dict[str, float]] = None
        if languages is not None:
            self.prior_map = build_prior_map(languages, self.factory.get_lang_list()) or None
            if self.prior_map is None:
                logger.warning("No candidate language has a detection profile; using all profiles")

    def detect(self, text: str) -> List[LanguageHypothesis]:
        """
        Detect candidate languages.

        Args:
            text (str): Input text

        Returns:
            List[LanguageHypothesis]: Confidence-descending, possibly empty
        """
        if not text or not text.strip():
            raise EmptyInputError()

        cleaned = clean_for_detection(text)
        if not cleaned:
            return []

        detector = self.factory.create()
        if self.prior_map:
            detector.set_prior_map(self.prior_map)
        detector.append(cleaned)

        try:
            raw = detector.get_probabilities()
        except LangDetectException as e:
            logger.debug(f"Language detection found no features: {e}")
            return []

        hypotheses = [
            LanguageHypothesis(
                language=normalize_language_code(item.lang),
                confidence=max(0.0, min(1.0, float(item.prob))),
            )
            for item in raw
        ]
        hypotheses.sort(key=lambda h: h.confidence, reverse=True)
        return hypotheses[:self.max_hypotheses]

    def dominant(self, text: str) -> LanguageHypothesis:
        """Head of the ranked list, or the fallback language with zero confidence."""
        hypotheses = self.detect(text)
        if hypotheses:
            return hypotheses[0]
        return LanguageHypothesis(language=self.fallback_language, confidence=0.0)
