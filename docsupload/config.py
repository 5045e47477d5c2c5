"""Configuration management for docsupload."""

import os
from pathlib import Path
from typing import Optional

DEFAULT_API_URL = "https://docs.example.com/api/v1"

ENV_TOKEN = "DOCSUPLOAD_TOKEN"
ENV_API_URL = "DOCSUPLOAD_API_URL"
ENV_CONFIG_DIR = "DOCSUPLOAD_CONFIG_DIR"


class Config:
    """Reads settings from the environment and ~/.config/docsupload/config.

    Environment variables take precedence over the config file. The file
    holds simple ``KEY=value`` lines.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = config_dir

    @property
    def config_dir(self) -> Path:
        if self._config_dir is not None:
            return self._config_dir
        env_dir = os.environ.get(ENV_CONFIG_DIR)
        if env_dir:
            return Path(env_dir)
        return Path.home() / ".config" / "docsupload"

    def get_config_path(self) -> Path:
        """Path of the config file (which may not exist yet)."""
        return self.config_dir / "config"

    def _read(self) -> dict[str, str]:
        path = self.get_config_path()
        if not path.exists():
            return {}
        values: dict[str, str] = {}
        for line in path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            values[key.strip()] = value.strip()
        return values

    def _write(self, values: dict[str, str]) -> None:
        path = self.get_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        content = "".join(f"{key}={value}\n" for key, value in values.items())
        path.write_text(content, encoding="utf-8")
        # The file holds an access token
        path.chmod(0o600)

    @property
    def token(self) -> Optional[str]:
        """Access token from the environment or the config file."""
        return os.environ.get(ENV_TOKEN) or self._read().get(ENV_TOKEN)

    @property
    def api_url(self) -> str:
        """Base URL of the document store API."""
        return (
            os.environ.get(ENV_API_URL)
            or self._read().get(ENV_API_URL)
            or DEFAULT_API_URL
        )

    def is_configured(self) -> bool:
        """Check whether an access token is available."""
        return bool(self.token)

    def save_token(self, token: str) -> None:
        """Store an access token in the config file.

        Args:
            token: Access token to persist
        """
        values = self._read()
        values[ENV_TOKEN] = token
        self._write(values)

    def save_api_url(self, api_url: str) -> None:
        """Store the API base URL in the config file."""
        values = self._read()
        values[ENV_API_URL] = api_url
        self._write(values)


config = Config()
