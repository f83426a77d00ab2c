"""
Search backends used by the in-process provider client.
"""

from .base import Searcher
from .github import GithubSearcher

__all__ = ["Searcher", "GithubSearcher"]
