"""
Command line entry point.
"""

import argparse
import asyncio
import logging
from typing import List, Optional

from profile_readme.config import ConfigError, Settings, load_profile_config, settings
from profile_readme.services.github_service import GitHubAPIError, GitHubService
from profile_readme.services.readme_service import ReadmeBuilder

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="profile-readme",
        description="Regenerate a GitHub profile README from live GitHub data.",
    )
    parser.add_argument("--config", help="profile JSON config (default: PROFILE_CONFIG_PATH)")
    parser.add_argument("--template", help="markdown template (default: TEMPLATE_PATH)")
    parser.add_argument("--output", help="README output path (default: README_PATH)")
    parser.add_argument("--html", help="HTML output path (default: HTML_PATH)")
    parser.add_argument(
        "--watch",
        action="store_true",
        help="keep running and regenerate every REFRESH_INTERVAL_HOURS",
    )
    parser.add_argument("--log-level", help="override LOG_LEVEL")
    return parser.parse_args(argv)


def apply_overrides(config: Settings, args: argparse.Namespace) -> Settings:
    """Return a copy of ``config`` with command line overrides applied."""
    overrides = {
        "PROFILE_CONFIG_PATH": args.config,
        "TEMPLATE_PATH": args.template,
        "README_PATH": args.output,
        "HTML_PATH": args.html,
        "LOG_LEVEL": args.log_level,
    }
    return config.model_copy(update={k: v for k, v in overrides.items() if v})


async def generate(config: Settings) -> None:
    """Run one full regeneration."""
    profile = load_profile_config(config.PROFILE_CONFIG_PATH)
    async with GitHubService(config) as github:
        builder = ReadmeBuilder(config, profile, github)
        readme_path, html_path = await builder.run()
    logger.info(f"Generated {readme_path} and {html_path}")


async def watch(config: Settings) -> None:
    interval = config.REFRESH_INTERVAL_HOURS * 3600
    while True:
        try:
            await generate(config)
        except (GitHubAPIError, ConfigError, FileNotFoundError) as e:
            logger.error(f"Regeneration failed: {e}")
        logger.info(f"Next regeneration in {config.REFRESH_INTERVAL_HOURS} hours")
        await asyncio.sleep(interval)


def cli(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = apply_overrides(settings, args)

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format=config.LOG_FORMAT
    )
    logger.info(f"Starting {config.APP_NAME} {config.APP_VERSION}")

    try:
        if args.watch:
            asyncio.run(watch(config))
        else:
            asyncio.run(generate(config))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except (GitHubAPIError, ConfigError, FileNotFoundError) as e:
        logger.error(f"Failed to generate README: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(cli())
