"""Configuration loading from YAML and environment.

The GitHub token is taken from the config file, the GITHUB_TOKEN environment
variable or a file named by GITHUB_TOKEN_FILE (Docker secrets). Never put real
tokens in config files committed to the repo.
"""

from pathlib import Path
from typing import Any, Tuple

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = Path("prconflict.yaml")


class ConfigError(Exception):
    """Raised for missing credentials or malformed repository identity."""

    pass


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


# Injected by load_config so secret lookups can read env/file
_current_env: dict[str, str] = {}


class GitHubConfig(BaseSettings):
    """GitHub REST and GraphQL endpoints."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="PAT with repo scope; use env or secret file")
    api_url: str = Field(default="https://api.github.com", description="REST API base URL")
    graphql_url: str = Field(default="https://api.github.com/graphql", description="GraphQL endpoint")
    timeout: int = Field(default=30, ge=1, description="Request timeout in seconds")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(env_prefix="PRCONFLICT_", extra="ignore")

    repository: str | None = Field(default=None, description="Default repo in owner/name form (env: PRCONFLICT_REPOSITORY)")
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env or Docker secret file."""
        t = self.github.token
        if t and not t.startswith("${"):
            return t
        return _read_secret("GITHUB_TOKEN", "GITHUB_TOKEN_FILE")


def require_token(config: AppConfig) -> str:
    """Return the GitHub token or raise ConfigError when none is available."""
    try:
        token = config.github_token_resolved
    except OSError as e:
        raise ConfigError(f"cannot read GITHUB_TOKEN_FILE: {e}") from e
    if not token:
        raise ConfigError("GITHUB_TOKEN env var missing - provide a PAT with repo scope")
    return token


def parse_repository(value: str) -> Tuple[str, str]:
    """Split owner/name into its two parts.

    Raises:
        ConfigError: unless the value has exactly two non-empty parts
    """
    parts = value.split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ConfigError(f"invalid repository format: {value}")
    return parts[0], parts[1]


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    A missing file is not an error: defaults and environment apply.
    """
    global _current_env
    import os

    _current_env = dict(os.environ)

    path = config_path or DEFAULT_CONFIG_PATH
    if not path.is_file():
        return AppConfig()

    try:
        raw = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    raw = _substitute_env(raw)

    github = GitHubConfig(**(raw.get("github") or {}))
    logging = LoggingConfig(**(raw.get("logging") or {}))

    return AppConfig(
        repository=raw.get("repository"),
        github=github,
        logging=logging,
    )
