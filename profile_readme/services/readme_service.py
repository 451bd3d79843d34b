"""
README assembly: fetch data, fill the template, write the outputs.
"""

import asyncio
import logging
import random
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import markdown

from profile_readme.config import ProfileConfig, Settings, ToysConfig
from profile_readme.constants import RANDOM_STAR_COUNT, RECENT_STAR_COUNT, placeholder
from profile_readme.services import html_renderer
from profile_readme.services.github_service import GitHubRepositoryData, GitHubService

logger = logging.getLogger(__name__)


def select_toys(toys: ToysConfig, rng: random.Random) -> List[str]:
    """Pick which side projects to show, shuffled when configured."""
    names = list(toys.repos)
    if toys.random:
        rng.shuffle(names)
    return names[:toys.limit]


def split_stars(
    stars: Sequence[GitHubRepositoryData], rng: random.Random
) -> Tuple[List[GitHubRepositoryData], List[GitHubRepositoryData]]:
    """Split stars into the most recent ones and a random pick of the rest."""
    recent = list(stars[:RECENT_STAR_COUNT])
    rest = list(stars[RECENT_STAR_COUNT:])
    picked = rng.sample(rest, min(RANDOM_STAR_COUNT, len(rest)))
    return recent, picked


def fill_template(template: str, fragments: Dict[str, str]) -> str:
    """Replace the first occurrence of each token's placeholder."""
    content = template
    for token, fragment in fragments.items():
        marker = placeholder(token)
        if marker not in content:
            logger.debug(f"Placeholder {marker} not found in template")
            continue
        content = content.replace(marker, fragment, 1)
    return content


def render_html(content: str) -> str:
    """Render README markdown to HTML, passing inline HTML through."""
    return markdown.markdown(content, extensions=["tables", "fenced_code"])


class ReadmeBuilder:
    """Builds the profile README and its HTML rendering."""

    def __init__(
        self,
        config: Settings,
        profile: ProfileConfig,
        github: GitHubService,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config
        self.profile = profile
        self.github = github
        self.rng = rng or random.Random()
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.template_path = Path(config.TEMPLATE_PATH)
        self.readme_path = Path(config.README_PATH)
        self.html_path = Path(config.HTML_PATH)

    async def build(self) -> str:
        """Fetch everything and return the filled README markdown."""
        template = self.template_path.read_text(encoding="utf-8")
        tz = self.profile.tz

        toys = select_toys(self.profile.opensource.toys, self.rng)
        active, toy_repos, stars = await asyncio.gather(
            self.github.get_repositories(self.profile.opensource.active),
            self.github.get_repositories(toys),
            self.github.get_starred(self.profile.github.name),
        )
        recent_stars, random_stars = split_stars(stars, self.rng)

        now = self.clock()
        next_refresh = now + timedelta(hours=self.config.REFRESH_INTERVAL_HOURS)

        fragments = {
            "OPENSOURCE_DASHBOARD_ACTIVE": html_renderer.render_opensource_table(active),
            "OPENSOURCE_TOYS": html_renderer.render_toys_table(toy_repos, tz),
            "RECENT_STAR": html_renderer.render_repo_list(recent_stars),
            "RANDOM_GITHUB_STARS": html_renderer.render_repo_list(random_stars),
            "FOOTER": html_renderer.render_footer(
                now, next_refresh, tz, self.config.REFRESH_INTERVAL_HOURS
            ),
            "MOTTO": self.profile.motto,
        }
        return fill_template(template, fragments)

    def write(self, content: str) -> Tuple[Path, Path]:
        """Write the README and its HTML rendering, replacing old files."""
        self.readme_path.parent.mkdir(parents=True, exist_ok=True)
        self.readme_path.unlink(missing_ok=True)
        self.readme_path.write_text(content, encoding="utf-8")
        logger.info(f"Wrote {self.readme_path}")

        self.html_path.parent.mkdir(parents=True, exist_ok=True)
        self.html_path.write_text(render_html(content), encoding="utf-8")
        logger.info(f"Wrote {self.html_path}")
        return self.readme_path, self.html_path

    async def run(self) -> Tuple[Path, Path]:
        try:
            content = await self.build()
        except FileNotFoundError:
            logger.error(f"README template not found: {self.template_path}")
            raise
        return self.write(content)
