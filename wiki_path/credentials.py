"""
Persisted Wikimedia API token.

The token is stored as JSON in ``<config dir>/config.json``::

    {"token": "..."}

``$WIKI_PATH_TOKEN`` takes precedence over the stored value.
"""

import json
import os
from pathlib import Path

from wiki_path.config import CONFIG_FILE_NAME, TOKEN_ENV_VAR, config_dir
from wiki_path.errors import CredentialError
from wiki_path.utils.log import log

_TOKEN_KEY = "token"


def config_path() -> Path:
    return config_dir() / CONFIG_FILE_NAME


def _read_config(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise CredentialError(f"cannot read {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise CredentialError(f"cannot read {path}: expected a JSON object")
    return data


def _write_config(path: Path, data: dict) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.chmod(path, 0o600)
    except OSError as exc:
        raise CredentialError(f"cannot write {path}: {exc}") from exc


def load_token() -> str | None:
    """Return the configured token, or ``None`` when there is none.

    Raises ``CredentialError`` if the config file exists but is unreadable.
    """
    env_token = os.environ.get(TOKEN_ENV_VAR, "").strip()
    if env_token:
        log.debug("[TOKEN] Using token from $%s", TOKEN_ENV_VAR)
        return env_token
    token = _read_config(config_path()).get(_TOKEN_KEY)
    if not isinstance(token, str) or not token.strip():
        return None
    return token.strip()


def save_token(token: str) -> Path:
    """Store *token*, keeping any other keys in the config file."""
    token = token.strip()
    if not token:
        raise CredentialError("refusing to store an empty token")
    path = config_path()
    try:
        data = _read_config(path)
    except CredentialError as exc:
        log.warning("[TOKEN] Overwriting unreadable config: %s", exc)
        data = {}
    data[_TOKEN_KEY] = token
    _write_config(path, data)
    log.info("[TOKEN] Token saved to %s", path)
    return path


def clear_token() -> bool:
    """Remove the stored token.  Returns ``True`` if one was removed."""
    path = config_path()
    data = _read_config(path)
    if _TOKEN_KEY not in data:
        return False
    del data[_TOKEN_KEY]
    _write_config(path, data)
    log.info("[TOKEN] Token removed from %s", path)
    return True


def resolve_token() -> str | None:
    """Like ``load_token`` but never raises: errors are logged and the
    search falls back to anonymous mode."""
    try:
        return load_token()
    except CredentialError as exc:
        log.error("[ERR] Error loading preferences: %s", exc)
        return None
