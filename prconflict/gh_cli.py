"""Detect repository and pull request number with the gh CLI.

Used when --repo or --pr are not given; runs in the current checkout.
"""

import json
import logging
import subprocess
from pathlib import Path


class GhCliError(Exception):
    """Raised when a gh command fails or returns unexpected output."""

    pass


def _run_gh(args: list[str], cwd: Path | None = None, log: logging.Logger | None = None) -> str:
    """Run gh command and return stdout; raise GhCliError on non-zero exit."""
    cmd = ["gh"] + args
    try:
        result = subprocess.run(cmd, cwd=cwd, check=True, capture_output=True, text=True, timeout=60)
    except subprocess.CalledProcessError as e:
        err = (e.stderr or e.stdout or "").strip()
        if log:
            log.warning("gh %s failed: %s", args, err)
        raise GhCliError(f"gh {' '.join(args)}: {err}") from e
    except subprocess.TimeoutExpired as e:
        raise GhCliError(f"gh {' '.join(args)}: timed out") from e
    except FileNotFoundError as e:
        raise GhCliError("gh not found") from e
    return result.stdout.strip()


def detect_repository(cwd: Path | None = None, log: logging.Logger | None = None) -> str:
    """Return owner/name of the repository gh sees in cwd."""
    out = _run_gh(["repo", "view", "--json", "nameWithOwner", "--jq", ".nameWithOwner"], cwd=cwd, log=log)
    if not out:
        raise GhCliError("could not detect repository: empty output from gh repo view")
    return out


def detect_pr_number(
    branch: str | None = None,
    cwd: Path | None = None,
    log: logging.Logger | None = None,
) -> int:
    """Return the PR number for branch, or for the current branch if None."""
    if branch:
        out = _run_gh(["pr", "list", "--json", "number", "--head", branch], cwd=cwd, log=log)
        try:
            prs = json.loads(out or "[]")
        except json.JSONDecodeError as e:
            raise GhCliError(f"invalid JSON from gh pr list: {e}") from e
        if not prs:
            raise GhCliError(f"no PR found for branch {branch}")
        number = prs[0].get("number") if isinstance(prs[0], dict) else None
        if not isinstance(number, int):
            raise GhCliError(f"invalid PR number from gh pr list: {prs[0]!r}")
        return number

    out = _run_gh(["pr", "view", "--json", "number", "--jq", ".number"], cwd=cwd, log=log)
    try:
        return int(out)
    except ValueError as e:
        raise GhCliError(f"invalid PR number from gh CLI: {out!r}") from e
