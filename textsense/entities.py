#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: entities.py
# Project: textsense
# Description: Named entity extraction (NLTK chunk tagger + pattern matchers)
# Created: 2025-05-21 14:55:10
# Modified: 2025-06-03 12:02:38

import re
import logging
from typing import Callable, Dict, List, Optional, Protocol, Tuple

import nltk
from nltk.chunk import tree2conlltags

from .errors import ModelNotAvailableError, ModelPredictionFailedError
from .models import EntityType, NamedEntity
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)

# The chunk tagger gives no per-tag confidence; every tagged entity gets this.
TAGGER_CONFIDENCE = 0.8

TAG_TO_ENTITY_TYPE: Dict[str, EntityType] = {
    "PERSON": EntityType.PERSON,
    "GPE": EntityType.LOCATION,
    "LOCATION": EntityType.LOCATION,
    "GSP": EntityType.LOCATION,
    "FACILITY": EntityType.LOCATION,
    "ORGANIZATION": EntityType.ORGANIZATION,
    "DATE": EntityType.DATE,
    "TIME": EntityType.DATE,
    "MONEY": EntityType.MONEY,
}


def map_tag(tag: str) -> EntityType:
    return TAG_TO_ENTITY_TYPE.get(tag.upper(), EntityType.OTHER)


class EntityTagger(Protocol):
    """
    Per-token entity tagging backend.

    ``tag`` returns one IOB label per token: ``B-<TAG>`` opens an entity,
    ``I-<TAG>`` continues it and ``O`` is outside any entity.
    """

    name: str

    def is_available(self, language: str) -> bool:
        ...

    def tag(self, tokens: List[str], language: str) -> List[str]:
        ...


class NltkEntityTagger:
    """English tagger using ``nltk.pos_tag`` and ``nltk.ne_chunk``."""

    name = "nltk"
    languages = ("en",)

    def __init__(self):
        self._ready = self._probe()

    @staticmethod
    def _probe() -> bool:
        try:
            nltk.ne_chunk(nltk.pos_tag(["Probe"]))
            return True
        except (LookupError, OSError) as e:
            logger.warning(f"NLTK entity tagger unavailable: {e}")
            return False

    def is_available(self, language: str) -> bool:
        return self._ready and language in self.languages

    def tag(self, tokens: List[str], language: str) -> List[str]:
        if not self.is_available(language):
            raise ModelNotAvailableError("entity tagger", language)
        if not tokens:
            return []
        tree = nltk.ne_chunk(nltk.pos_tag(tokens))
        return [iob for _, _, iob in tree2conlltags(tree)]


class PatternMatcher:
    """Regex-based matcher for entities with a fixed shape."""

    def __init__(self, entity_type: EntityType, pattern: str, confidence: float, flags: int = 0):
        self.entity_type = entity_type
        self.regex = re.compile(pattern, flags)
        self.confidence = confidence

    def find(self, text: str) -> List[NamedEntity]:
        return [
            NamedEntity(
                text=m.group(0),
                type=self.entity_type,
                start=m.start(),
                end=m.end(),
                confidence=self.confidence,
            )
            for m in self.regex.finditer(text)
        ]


def default_pattern_matchers() -> List[PatternMatcher]:
    return [
        PatternMatcher(
            EntityType.EMAIL,
            r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b",
            0.95,
        ),
        PatternMatcher(
            EntityType.URL,
            r"https?://[^\s<>\"']+|www\.[^\s<>\"']+",
            0.92,
        ),
        PatternMatcher(
            EntityType.PHONE_NUMBER,
            r"(?<![\w/.-])(?:\+\d{1,3}[\s.-]?)?(?:\(\d{3}\)|\d{3})[\s.-]?\d{3}[\s.-]?\d{4}\b",
            0.9,
        ),
        PatternMatcher(
            EntityType.DATE,
            r"\b\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b|\b\d{4}[/-]\d{1,2}[/-]\d{1,2}\b",
            0.8,
        ),
        PatternMatcher(
            EntityType.MONEY,
            r"[$€£¥₺]\s?\d+(?:[.,]\d{1,2})?|\b\d+(?:[.,]\d{1,2})?\s?(?:USD|EUR|GBP|TRY|TL)\b",
            0.88,
        ),
    ]


def _call(fn, *args):
    return fn(*args)


class EntityExtractor:
    """
    Extracts named entities in left-to-right text order.

    Tagger entities (when a tagger serves the language) and pattern entities
    are combined; identical spans keep the most confident entry, overlapping
    spans are all kept. Entities below ``threshold`` are dropped.
    """

    def __init__(
        self,
        tokenizer: Tokenizer,
        tagger: Optional[EntityTagger] = None,
        matchers: Optional[List[PatternMatcher]] = None,
        threshold: float = 0.0,
        invoke: Optional[Callable] = None
    ):
        self.tokenizer = tokenizer
        self.tagger = tagger
        self.matchers = default_pattern_matchers() if matchers is None else matchers
        self.threshold = threshold
        self.invoke = invoke or _call

    def tagger_available(self, language: str) -> bool:
        return self.tagger is not None and self.tagger.is_available(language)

    def extract(self, text: str, language: str = "en") -> List[NamedEntity]:
        entities = self._tagged_entities(text, language)
        for matcher in self.matchers:
            entities.extend(matcher.find(text))

        entities = self._deduplicate(entities)
        return [e for e in entities if e.confidence >= self.threshold]

    def _tagged_entities(self, text: str, language: str) -> List[NamedEntity]:
        if not self.tagger_available(language):
            return []

        spans = self.tokenizer.word_spans(text, language)
        tokens = [text[start:end] for start, end in spans]

        try:
            tags = self.invoke(self.tagger.tag, tokens, language)
        except ModelPredictionFailedError:
            raise
        except Exception as e:
            raise ModelPredictionFailedError(f"Entity tagger '{self.tagger.name}' failed: {e}") from e

        if len(tags) != len(tokens):
            raise ModelPredictionFailedError(
                f"Entity tagger returned {len(tags)} tags for {len(tokens)} tokens"
            )

        return self._entities_from_tags(text, spans, tags)

    @staticmethod
    def _entities_from_tags(
        text: str,
        spans: List[Tuple[int, int]],
        tags: List[str]
    ) -> List[NamedEntity]:
        entities = []
        current: Optional[List] = None  # [tag, start, end]

        for (start, end), iob in zip(spans, tags):
            prefix, _, tag = (iob or "O").partition("-")
            if prefix == "I" and current is not None and current[0] == tag:
                current[2] = end
                continue
            if current is not None:
                entities.append(current)
                current = None
            if prefix in ("B", "I") and tag:
                current = [tag, start, end]

        if current is not None:
            entities.append(current)

        return [
            NamedEntity(
                text=text[start:end],
                type=map_tag(tag),
                start=start,
                end=end,
                confidence=TAGGER_CONFIDENCE,
            )
            for tag, start, end in entities
        ]

    @staticmethod
    def _deduplicate(entities: List[NamedEntity]) -> List[NamedEntity]:
        ordered = sorted(entities, key=lambda e: (e.start, e.end, -e.confidence))
        seen = set()
        result = []
        for entity in ordered:
            span = (entity.start, entity.end)
            if span in seen:
                continue
            seen.add(span)
            result.append(entity)
        return result
