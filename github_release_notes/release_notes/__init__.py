"""Release notes generation module."""

from .authors import AuthorSet, extract_authors, is_bot, normalize_author
from .categories import DEFAULT_BOT_OVERRIDES, DEFAULT_CATEGORIES, MAX_PRIORITY, PrefixCategoryIndex, build_category_index
from .classifier import CommitClassifier
from .detector import VersionDetector
from .generator import ReleaseNotesGenerator
from .markdown import MarkdownWriter
from .models import (
    AggregationResult,
    CategoryDefinition,
    ClassifiedCommit,
    CommitRecord,
    ReleaseFound,
    ReleaseNotesResult,
    ReleaseNotFound,
    ReleaseWindow,
)

__all__ = [
    "AggregationResult",
    "AuthorSet",
    "CategoryDefinition",
    "ClassifiedCommit",
    "CommitClassifier",
    "CommitRecord",
    "DEFAULT_BOT_OVERRIDES",
    "DEFAULT_CATEGORIES",
    "MAX_PRIORITY",
    "MarkdownWriter",
    "PrefixCategoryIndex",
    "ReleaseFound",
    "ReleaseNotFound",
    "ReleaseNotesGenerator",
    "ReleaseNotesResult",
    "ReleaseWindow",
    "VersionDetector",
    "build_category_index",
    "extract_authors",
    "is_bot",
    "normalize_author",
]
