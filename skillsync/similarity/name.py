"""Name similarity between skills (Levenshtein and Jaro-Winkler)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from skillsync.models import Skill

logger = logging.getLogger(__name__)

DEFAULT_NAME_THRESHOLD = 0.7
WINKLER_SCALING = 0.1
WINKLER_MAX_PREFIX = 4

_NAME_SEPARATORS = frozenset("-_ .")


class NameAlgorithm(str, Enum):
    LEVENSHTEIN = "levenshtein"
    JARO_WINKLER = "jaro-winkler"
    COMBINED = "combined"


@dataclass(frozen=True)
class NameMatcherConfig:
    threshold: float = DEFAULT_NAME_THRESHOLD
    algorithm: NameAlgorithm | str = NameAlgorithm.COMBINED
    normalize: bool = True
    case_sensitive: bool = False


@dataclass(frozen=True)
class NameMatch:
    skill_a: Skill
    skill_b: Skill
    score: float
    algorithm: str
    normalized: bool


class NameMatcher:
    def __init__(self, config: Optional[NameMatcherConfig] = None) -> None:
        config = config or NameMatcherConfig()
        threshold = config.threshold
        if threshold <= 0 or threshold > 1:
            threshold = DEFAULT_NAME_THRESHOLD
        self._config = NameMatcherConfig(
            threshold=threshold,
            algorithm=_normalize_algorithm(config.algorithm),
            normalize=config.normalize,
            case_sensitive=config.case_sensitive,
        )

    @property
    def config(self) -> NameMatcherConfig:
        return self._config

    @property
    def algorithm(self) -> NameAlgorithm:
        return NameAlgorithm(self._config.algorithm)

    def find_similar(self, skills: Sequence[Skill]) -> list[NameMatch]:
        logger.debug(
            "finding similar skill names: count=%d threshold=%.2f algorithm=%s",
            len(skills),
            self._config.threshold,
            self.algorithm.value,
        )
        matches: list[NameMatch] = []
        for i, skill_a in enumerate(skills):
            for skill_b in skills[i + 1 :]:
                score = self.compare(skill_a.name, skill_b.name)
                if score >= self._config.threshold:
                    matches.append(
                        NameMatch(
                            skill_a=skill_a,
                            skill_b=skill_b,
                            score=score,
                            algorithm=self.algorithm.value,
                            normalized=self._config.normalize,
                        )
                    )
        logger.debug("name similarity search complete: matches=%d", len(matches))
        return matches

    def compare(self, name_a: str, name_b: str) -> float:
        if self._config.normalize:
            name_a = normalize_name(name_a)
            name_b = normalize_name(name_b)
        elif not self._config.case_sensitive:
            name_a = name_a.lower()
            name_b = name_b.lower()

        if name_a == name_b:
            return 1.0
        if not name_a or not name_b:
            return 0.0

        algorithm = self.algorithm
        if algorithm == NameAlgorithm.JARO_WINKLER:
            return jaro_winkler(name_a, name_b)
        if algorithm == NameAlgorithm.COMBINED:
            return max(levenshtein_similarity(name_a, name_b), jaro_winkler(name_a, name_b))
        return levenshtein_similarity(name_a, name_b)


def normalize_name(name: str) -> str:
    """Lowercase, drop punctuation and collapse separators into single spaces."""
    chars: list[str] = []
    prev_space = False
    for char in name.lower():
        if char.isalnum():
            chars.append(char)
            prev_space = False
        elif char in _NAME_SEPARATORS and not prev_space:
            chars.append(" ")
            prev_space = True
    return "".join(chars).strip()


def levenshtein_distance(source: str, target: str) -> int:
    if not source:
        return len(target)
    if not target:
        return len(source)
    if len(source) < len(target):
        source, target = target, source

    prev = list(range(len(target) + 1))
    curr = [0] * (len(target) + 1)
    for i, char_a in enumerate(source, start=1):
        curr[0] = i
        for j, char_b in enumerate(target, start=1):
            cost = 0 if char_a == char_b else 1
            curr[j] = min(prev[j] + 1, curr[j - 1] + 1, prev[j - 1] + cost)
        prev, curr = curr, prev
    return prev[len(target)]


def levenshtein_similarity(source: str, target: str) -> float:
    if not source and not target:
        return 1.0
    distance = levenshtein_distance(source, target)
    return 1.0 - distance / max(len(source), len(target))


def jaro_similarity(source: str, target: str) -> float:
    if not source and not target:
        return 1.0
    if not source or not target:
        return 0.0

    window = max(0, max(len(source), len(target)) // 2 - 1)
    source_matches = [False] * len(source)
    target_matches = [False] * len(target)

    matches = 0
    for i, char in enumerate(source):
        start = max(0, i - window)
        end = min(len(target), i + window + 1)
        for j in range(start, end):
            if target_matches[j] or target[j] != char:
                continue
            source_matches[i] = True
            target_matches[j] = True
            matches += 1
            break

    if matches == 0:
        return 0.0

    transpositions = 0
    k = 0
    for i, char in enumerate(source):
        if not source_matches[i]:
            continue
        while not target_matches[k]:
            k += 1
        if char != target[k]:
            transpositions += 1
        k += 1

    return (
        matches / len(source)
        + matches / len(target)
        + (matches - transpositions // 2) / matches
    ) / 3.0


def jaro_winkler(source: str, target: str) -> float:
    jaro = jaro_similarity(source, target)
    prefix = 0
    for char_a, char_b in zip(source[:WINKLER_MAX_PREFIX], target[:WINKLER_MAX_PREFIX]):
        if char_a != char_b:
            break
        prefix += 1
    return jaro + prefix * WINKLER_SCALING * (1.0 - jaro)


def _normalize_algorithm(value: NameAlgorithm | str) -> NameAlgorithm:
    if not value:
        return NameAlgorithm.COMBINED
    try:
        return NameAlgorithm(str(getattr(value, "value", value)).lower())
    except ValueError:
        return NameAlgorithm.LEVENSHTEIN
