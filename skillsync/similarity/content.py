"""Content similarity between skills using LCS and Jaccard n-gram metrics."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from skillsync.models import Skill

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_THRESHOLD = 0.6
DEFAULT_NGRAM_SIZE = 3


class ContentAlgorithm(str, Enum):
    LCS = "lcs"
    JACCARD = "jaccard"
    COMBINED = "combined"


@dataclass(frozen=True)
class ContentMatcherConfig:
    threshold: float = DEFAULT_CONTENT_THRESHOLD
    algorithm: ContentAlgorithm | str = ContentAlgorithm.COMBINED
    ngram_size: int = DEFAULT_NGRAM_SIZE
    line_mode: bool = True


@dataclass(frozen=True)
class ContentMatch:
    skill_a: Skill
    skill_b: Skill
    score: float
    algorithm: str


class ContentMatcher:
    def __init__(self, config: Optional[ContentMatcherConfig] = None) -> None:
        config = config or ContentMatcherConfig()
        threshold = config.threshold
        if threshold <= 0 or threshold > 1:
            threshold = DEFAULT_CONTENT_THRESHOLD
        ngram_size = config.ngram_size if config.ngram_size > 0 else DEFAULT_NGRAM_SIZE
        self._config = ContentMatcherConfig(
            threshold=threshold,
            algorithm=_normalize_algorithm(config.algorithm),
            ngram_size=ngram_size,
            line_mode=config.line_mode,
        )

    @property
    def config(self) -> ContentMatcherConfig:
        return self._config

    @property
    def algorithm(self) -> ContentAlgorithm:
        return ContentAlgorithm(self._config.algorithm)

    def find_similar(self, skills: Sequence[Skill]) -> list[ContentMatch]:
        logger.debug(
            "finding similar skill content: count=%d threshold=%.2f algorithm=%s",
            len(skills),
            self._config.threshold,
            self.algorithm.value,
        )
        matches: list[ContentMatch] = []
        for i, skill_a in enumerate(skills):
            for skill_b in skills[i + 1 :]:
                score = self.compare(skill_a.content, skill_b.content)
                if score < self._config.threshold:
                    continue
                matches.append(
                    ContentMatch(
                        skill_a=skill_a,
                        skill_b=skill_b,
                        score=score,
                        algorithm=self.algorithm.value,
                    )
                )
                logger.debug(
                    "found similar content: %s ~ %s (%.3f)",
                    skill_a.name,
                    skill_b.name,
                    score,
                )
        logger.debug("content similarity search complete: matches=%d", len(matches))
        return matches

    def compare(self, content_a: str, content_b: str) -> float:
        if content_a == content_b:
            return 1.0
        if not content_a or not content_b:
            return 0.0

        algorithm = self.algorithm
        if algorithm == ContentAlgorithm.JACCARD:
            return self.jaccard_similarity(content_a, content_b)
        if algorithm == ContentAlgorithm.COMBINED:
            return max(
                self.lcs_similarity(content_a, content_b),
                self.jaccard_similarity(content_a, content_b),
            )
        return self.lcs_similarity(content_a, content_b)

    def lcs_similarity(self, content_a: str, content_b: str) -> float:
        if self._config.line_mode:
            seq_a: list[str] = content_a.split("\n")
            seq_b: list[str] = content_b.split("\n")
        else:
            seq_a = list(content_a)
            seq_b = list(content_b)

        longest = max(len(seq_a), len(seq_b))
        if longest == 0:
            return 1.0
        return lcs_length(seq_a, seq_b) / longest

    def jaccard_similarity(self, content_a: str, content_b: str) -> float:
        if self._config.line_mode:
            set_a = token_set(content_a.split("\n"))
            set_b = token_set(content_b.split("\n"))
        else:
            set_a = generate_ngrams(content_a, self._config.ngram_size)
            set_b = generate_ngrams(content_b, self._config.ngram_size)
        return jaccard_index(set_a, set_b)


def lcs_length(source: Sequence[str], target: Sequence[str]) -> int:
    """Length of the longest common subsequence, in O(min(m, n)) memory."""
    if not source or not target:
        return 0
    if len(source) < len(target):
        source, target = target, source

    width = len(target)
    prev = [0] * (width + 1)
    curr = [0] * (width + 1)
    for item in source:
        for j in range(1, width + 1):
            if item == target[j - 1]:
                curr[j] = prev[j - 1] + 1
            else:
                curr[j] = max(prev[j], curr[j - 1])
        prev, curr = curr, prev
    return prev[width]


def generate_ngrams(text: str, n: int) -> set[str]:
    if len(text) < n:
        return {text} if text else set()
    return {text[i : i + n] for i in range(len(text) - n + 1)}


def token_set(tokens: Sequence[str]) -> set[str]:
    return {token.strip() for token in tokens if token.strip()}


def jaccard_index(set_a: set[str], set_b: set[str]) -> float:
    if not set_a and not set_b:
        return 1.0
    if not set_a or not set_b:
        return 0.0
    intersection = len(set_a & set_b)
    union = len(set_a) + len(set_b) - intersection
    if union == 0:
        return 0.0
    return intersection / union


def _normalize_algorithm(value: ContentAlgorithm | str) -> ContentAlgorithm:
    if not value:
        return ContentAlgorithm.COMBINED
    try:
        return ContentAlgorithm(str(getattr(value, "value", value)).lower())
    except ValueError:
        return ContentAlgorithm.LCS
