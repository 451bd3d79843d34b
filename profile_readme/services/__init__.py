"""
Services package for GitHub API access and README rendering.
"""

from .github_service import GitHubAPIError, GitHubService
from .readme_service import ReadmeBuilder

__all__ = ["GitHubAPIError", "GitHubService", "ReadmeBuilder"]
