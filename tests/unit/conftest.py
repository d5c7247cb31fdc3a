"""Fixtures for unit tests."""

from typing import Generator

import pytest
import structlog

from github_release_notes.release_notes.categories import PrefixCategoryIndex, build_category_index
from github_release_notes.release_notes.classifier import CommitClassifier


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Route structlog through the standard library so caplog sees events."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def category_index() -> PrefixCategoryIndex:
    """The default category index."""
    return build_category_index()


@pytest.fixture
def classifier(category_index: PrefixCategoryIndex) -> CommitClassifier:
    """A classifier over the default categories and bot overrides."""
    return CommitClassifier(category_index)
