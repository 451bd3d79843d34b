"""
Shared fixtures: sample GitHub payloads and a stubbed GitHub service.
"""

import httpx
import pytest

from profile_readme.config import ProfileConfig, Settings
from profile_readme.services.github_service import GitHubService


def repo_payload(full_name, **overrides):
    owner, name = full_name.split("/")
    data = {
        "id": abs(hash(full_name)) % 100000,
        "name": name,
        "full_name": full_name,
        "description": f"{name} description",
        "html_url": f"https://github.com/{full_name}",
        "homepage": "",
        "language": "Python",
        "stargazers_count": 42,
        "forks_count": 7,
        "open_issues_count": 3,
        "created_at": "2021-03-05T10:00:00Z",
        "updated_at": "2024-06-01T12:00:00Z",
        "pushed_at": "2024-05-31T23:30:00Z",
        "owner": {"login": owner, "type": "User"},
    }
    data.update(overrides)
    return data


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        GITHUB_TOKEN="test-token",
        GITHUB_API_URL="https://api.github.test",
        MAX_RETRIES=2,
        RETRY_DELAY_SECONDS=0,
        TEMPLATE_PATH=str(tmp_path / "readme.template.md"),
        README_PATH=str(tmp_path / "out" / "readme.md"),
        HTML_PATH=str(tmp_path / "out" / "index.html"),
        PROFILE_CONFIG_PATH=str(tmp_path / "profile.json"),
    )


@pytest.fixture
def profile():
    return ProfileConfig.model_validate({
        "github": {"name": "octocat"},
        "motto": "Keep shipping.",
        "timeZone": "Asia/Shanghai",
        "opensource": {
            "active": ["octocat/Hello-World", "octocat/Spoon-Knife"],
            "toys": {"repos": ["octocat/linguist", "octocat/test-repo1"], "limit": 5},
        },
    })


@pytest.fixture
def make_service(test_settings):
    """Build a GitHubService whose requests are answered by ``handler``."""

    def factory(handler, **overrides):
        config = test_settings.model_copy(update=overrides) if overrides else test_settings
        return GitHubService(config, transport=httpx.MockTransport(handler))

    return factory
