from skillsync.similarity.content import (
    ContentAlgorithm,
    ContentMatch,
    ContentMatcher,
    ContentMatcherConfig,
)
from skillsync.similarity.name import (
    NameAlgorithm,
    NameMatch,
    NameMatcher,
    NameMatcherConfig,
)

__all__ = [
    "ContentAlgorithm",
    "ContentMatch",
    "ContentMatcher",
    "ContentMatcherConfig",
    "NameAlgorithm",
    "NameMatch",
    "NameMatcher",
    "NameMatcherConfig",
]
