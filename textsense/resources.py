#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: resources.py
# Project: textsense
# Description: NLTK resource lookup and language-name mapping
# Created: 2025-05-20 11:40:55
# Modified: 2025-05-29 14:22:10

import logging
from typing import Dict, Iterable, List

import nltk

logger = logging.getLogger(__name__)

# ISO 639-1 code -> name used by NLTK corpora, Punkt models and Snowball.
NLTK_LANGUAGE_NAMES: Dict[str, str] = {
    "en": "english",
    "tr": "turkish",
    "fr": "french",
    "de": "german",
    "es": "spanish",
    "it": "italian",
    "pt": "portuguese",
    "nl": "dutch",
    "ru": "russian",
    "sv": "swedish",
    "da": "danish",
    "no": "norwegian",
    "fi": "finnish",
}

# Resource path -> downloadable package name
NLTK_RESOURCES: Dict[str, str] = {
    "tokenizers/punkt_tab": "punkt_tab",
    "corpora/stopwords": "stopwords",
    "taggers/averaged_perceptron_tagger_eng": "averaged_perceptron_tagger_eng",
    "chunkers/maxent_ne_chunker_tab": "maxent_ne_chunker_tab",
    "corpora/words": "words",
}


def nltk_language_name(language: str) -> str:
    return NLTK_LANGUAGE_NAMES.get(language.lower(), language.lower())


def has_resource(path: str) -> bool:
    try:
        nltk.data.find(path)
        return True
    except LookupError:
        return False


def download_nltk_data(paths: Iterable[str] = NLTK_RESOURCES) -> List[str]:
    """
    Download missing NLTK data packages.

    Args:
        paths (Iterable[str]): Resource paths to check

    Returns:
        List[str]: Packages that are still missing afterwards
    """
    missing = []
    for path in paths:
        if has_resource(path):
            continue
        package = NLTK_RESOURCES.get(path, path.rsplit("/", 1)[-1])
        logger.info(f"Downloading NLTK package '{package}'")
        if not nltk.download(package, quiet=True) or not has_resource(path):
            logger.warning(f"NLTK package '{package}' could not be downloaded")
            missing.append(package)
    return missing
