"""
Credential resolution for Repozip.

"Your token is the key. Don't lose it. Don't commit it either." — schema.cx
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from .errors import ConfigError
from .models import DEFAULT_ENV_FILE, DEFAULT_TOKEN_ENV
from .validation import ValidationError, validate_github_token

# Conventional variable name, checked only when GITHUB_AUTH_KEY is unset
FALLBACK_TOKEN_ENV = "GITHUB_TOKEN"


def load_env_file(env_file: Path | str | None = DEFAULT_ENV_FILE) -> bool:
    """
    Load key/value pairs from an env file into the process environment.

    Variables already present in the environment win. A missing file is
    not an error.

    Returns:
        True if the file existed and was read
    """
    if env_file is None:
        return False

    path = Path(env_file)
    if not path.is_file():
        return False

    return load_dotenv(path, override=False)


def resolve_credential(
    env_var: str = DEFAULT_TOKEN_ENV,
    env_file: Path | str | None = DEFAULT_ENV_FILE,
) -> str:
    """
    Resolve the GitHub API token.

    Args:
        env_var: Environment variable holding the token
        env_file: Optional .env file loaded before the lookup

    Returns:
        The bearer token

    Raises:
        ConfigError: If no token is set or the token is malformed
    """
    load_env_file(env_file)

    token = os.environ.get(env_var, "").strip()
    source = env_var
    if not token and env_var == DEFAULT_TOKEN_ENV:
        token = os.environ.get(FALLBACK_TOKEN_ENV, "").strip()
        source = FALLBACK_TOKEN_ENV

    if not token:
        raise ConfigError(
            f"${env_var} is not set. "
            f"Export it or add it to {env_file or 'a .env file'} "
            "(create a token at https://github.com/settings/tokens)."
        )

    try:
        return validate_github_token(token)
    except ValidationError as e:
        raise ConfigError(f"Invalid token in ${source}: {e}") from e
