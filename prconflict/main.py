"""prconflict entry point.

Inserts unresolved review threads of a pull request as conflict markers into
the local checkout. Usage: prconflict [--repo owner/name] [--pr N] [--dry-run].
"""

import argparse
import logging
import sys
from pathlib import Path

from prconflict.adapters import GitHubAdapter, GitPlatformError
from prconflict.config import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    ConfigError,
    load_config,
    parse_repository,
    require_token,
)
from prconflict.gh_cli import GhCliError, detect_pr_number, detect_repository
from prconflict.logging import PRConflictLogging
from prconflict.services import annotate_pull_request


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="prconflict",
        description="Insert unresolved PR review threads as conflict markers",
    )
    parser.add_argument("--repo", default=None, help="GitHub repo in owner/name format (optional, autodetected)")
    parser.add_argument("--pr", type=int, default=None, help="Pull request number (optional, autodetected)")
    parser.add_argument("--branch", default=None, help="Git branch name for PR detection (optional)")
    parser.add_argument("--dry-run", action="store_true", help="Print changes instead of writing files")
    parser.add_argument(
        "--repo-dir",
        type=Path,
        default=None,
        help="Checkout root that comment paths are relative to (default: current directory)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(argv)


def resolve_target(args: argparse.Namespace, config: AppConfig, log: logging.Logger) -> tuple[str, int]:
    """Return (owner/name, PR number) from flags, config or gh detection.

    Raises:
        ConfigError: If detection fails or the repository is malformed
    """
    cwd = args.repo_dir
    repo = args.repo or config.repository
    try:
        if not repo:
            repo = detect_repository(cwd=cwd, log=log)
        parse_repository(repo)
        pr_number = args.pr or detect_pr_number(args.branch, cwd=cwd, log=log)
    except GhCliError as e:
        raise ConfigError(f"could not detect pull request: {e}") from e
    return repo, pr_number


def run(args: argparse.Namespace, config: AppConfig) -> int:
    """Validate inputs, then annotate. Returns process exit code."""
    log = logging.getLogger("prconflict.main")
    try:
        repo, pr_number = resolve_target(args, config, log)
        token = require_token(config)
    except ConfigError as e:
        log.error("%s", e)
        return 1

    adapter = GitHubAdapter(
        token,
        api_url=config.github.api_url,
        graphql_url=config.github.graphql_url,
        timeout=config.github.timeout,
    )
    log.info("Annotating %s#%s%s", repo, pr_number, " (dry-run)" if args.dry_run else "")
    try:
        annotate_pull_request(adapter, repo, pr_number, repo_dir=args.repo_dir, dry_run=args.dry_run)
    except GitPlatformError as e:
        log.error("GitHub API: %s", e)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for prconflict."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except (ConfigError, OSError, ValueError) as e:
        logging.basicConfig(level=logging.INFO)
        logging.getLogger("prconflict.main").error("Invalid config %s: %s", args.config, e)
        return 1
    PRConflictLogging(config.logging).setup()

    if args.check:
        print("Config OK:", config.repository or "(repository autodetected)", config.github.api_url)
        return 0

    try:
        return run(args, config)
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
