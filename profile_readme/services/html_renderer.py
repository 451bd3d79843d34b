"""
HTML fragments substituted into the README template.
"""

from datetime import datetime, tzinfo
from html import escape
from typing import Iterable, Optional

import minify_html

from profile_readme.constants import BADGE_QUERY, SHIELDS_URL
from profile_readme.services.github_service import GitHubRepositoryData


def minify(html: str) -> str:
    """Collapse whitespace and drop redundant attribute quotes."""
    return minify_html.minify(html, keep_closing_tags=True).strip()


def _badge(kind: str, full_name: str, alt: str) -> str:
    return f'<img alt="{alt}" src="{SHIELDS_URL}/{kind}/{full_name}?{BADGE_QUERY}"/>'


def format_date(value: Optional[datetime], tz: tzinfo) -> str:
    if value is None:
        return ""
    local = value.astimezone(tz)
    return f"{local.year}/{local.month}/{local.day}"


def format_datetime(value: datetime, tz: tzinfo) -> str:
    local = value.astimezone(tz)
    return f"{local.year}/{local.month}/{local.day} {local:%H:%M}"


def render_opensource_table(repos: Iterable[GitHubRepositoryData]) -> str:
    """Table of actively maintained projects with live shields.io badges."""
    rows = []
    for repo in repos:
        name = escape(repo.full_name)
        rows.append(f"""
      <tr>
        <td><a href="{escape(repo.url)}"><b>{name}</b></a></td>
        <td>{_badge('stars', name, 'Stars')}</td>
        <td>{_badge('forks', name, 'Forks')}</td>
        <td><a href="https://github.com/{name}/issues" target="_blank">{_badge('issues', name, 'Issues')}</a></td>
        <td><a href="https://github.com/{name}/pulls" target="_blank">{_badge('issues-pr', name, 'Pull Requests')}</a></td>
        <td><a href="https://github.com/{name}/commits" target="_blank">{_badge('last-commit', name, 'Last Commits')}</a></td>
      </tr>""")

    return minify(f"""
  <table>
    <thead align="center">
      <tr>
        <td><b>🎁 Projects</b></td>
        <td><b>⭐ Stars</b></td>
        <td><b>📚 Forks</b></td>
        <td><b>🛎 Issues</b></td>
        <td><b>📬 Pull requests</b></td>
        <td><b>💡 Last Commit</b></td>
      </tr>
    </thead>
    <tbody>
      {''.join(rows)}
    </tbody>
  </table>""")


def render_toys_table(repos: Iterable[GitHubRepositoryData], tz: tzinfo) -> str:
    """Table of side projects with creation and last activity dates."""
    rows = []
    for repo in repos:
        name = escape(repo.full_name)
        homepage = ""
        if repo.homepage:
            homepage = f'<a href="{escape(repo.homepage)}" target="_blank">🔗</a>'
        last_active = repo.pushed_at or repo.updated_at
        rows.append(f"""
      <tr>
        <td><a href="{escape(repo.url)}" target="_blank"><b>{name}</b></a>
        {homepage}</td>
        <td>{_badge('stars', name, 'Stars')}</td>
        <td>{format_date(repo.created_at, tz)}</td>
        <td>{format_date(last_active, tz)}</td>
      </tr>""")

    return minify(f"""
  <table>
    <thead align="center">
      <tr>
        <td><b>🎁 Projects</b></td>
        <td><b>⭐ Stars</b></td>
        <td><b>🕐 Created At</b></td>
        <td><b>📅 Last Active At</b></td>
      </tr>
    </thead>
    <tbody>
      {''.join(rows)}
    </tbody>
  </table>""")


def render_repo_item(repo: GitHubRepositoryData) -> str:
    description = f"<p>{escape(repo.description)}</p>" if repo.description else ""
    return f'<li><a href="{escape(repo.url)}">{escape(repo.full_name)}</a>{description}</li>'


def render_repo_list(repos: Iterable[GitHubRepositoryData]) -> str:
    return minify(f"<ul>{''.join(render_repo_item(repo) for repo in repos)}</ul>")


def render_footer(now: datetime, next_refresh: datetime, tz: tzinfo, interval_hours: int) -> str:
    """Footer noting when the README was generated and when it refreshes next."""
    return minify(f"""
    <p align="center">This <i>README</i> is regenerated automatically <b>every {interval_hours} hours</b>!
    <br/>
    Refreshed at: {format_datetime(now, tz)}
    <br/>
    Next refresh: {format_datetime(next_refresh, tz)}</p>
  """)
