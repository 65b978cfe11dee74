from __future__ import annotations

from .aggregator import RepositoryIssueAggregator
from .issue_fetcher import IssueFetcher, validate_filters
from .issue_formatter import IssueFormatter
from .project_names import ProjectNameCache
from .project_resolver import ProjectResolver

__all__ = [
    "RepositoryIssueAggregator",
    "IssueFetcher",
    "validate_filters",
    "IssueFormatter",
    "ProjectNameCache",
    "ProjectResolver",
]
