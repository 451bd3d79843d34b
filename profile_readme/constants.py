"""
Template placeholders and rendering constants.
"""

PLACEHOLDERS = {
    "OPENSOURCE_DASHBOARD_ACTIVE": "OPENSOURCE_DASHBOARD:active",
    "OPENSOURCE_TOYS": "OPENSOURCE_TOYS",
    "RECENT_STAR": "RECENT_STAR",
    "RANDOM_GITHUB_STARS": "RANDOM_GITHUB_STARS",
    "FOOTER": "FOOTER",
    "MOTTO": "MOTTO",
}

SHIELDS_URL = "https://img.shields.io/github"
BADGE_QUERY = "style=flat-square&labelColor=343b41"

RECENT_STAR_COUNT = 5
RANDOM_STAR_COUNT = 5


def placeholder(token: str) -> str:
    """Return the HTML comment marking ``token`` in the template."""
    return f"<!-- {PLACEHOLDERS[token]} -->"
