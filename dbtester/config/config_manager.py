"""
Configuration Manager for dbtester

Resolves the server connection parameters and migration directory used to
provision ephemeral test databases, from environment variables and env files.
"""

import os
from pathlib import Path
from typing import Dict, Optional

from pydantic import ValidationError

from dbtester.models.server import ServerConfig


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


class ConfigManager:
    """
    Central configuration management for dbtester.

    Provides:
    - Server host/port/credentials per database engine
    - Engine-specific overrides (TEST_MYSQL_*, TEST_PG_*) over generic TEST_DB_*
    - Environment file loading with precedence: os.environ > .env.test > .env
    - Configuration validation
    """

    ENGINES = ('mysql', 'postgres')

    # Default server settings per engine
    DEFAULTS = {
        'mysql': {
            'HOST': 'localhost',
            'PORT': '3306',
            'USER': 'root',
            'PASSWORD': '',
            'MIGRATIONS': './migrations',
        },
        'postgres': {
            'HOST': 'localhost',
            'PORT': '5432',
            'USER': 'postgres',
            'PASSWORD': 'postgres',
            'MIGRATIONS': './migrations',
        },
    }

    # Environment variable prefixes, most specific first
    ENV_PREFIXES = {
        'mysql': ('TEST_MYSQL_', 'TEST_DB_'),
        'postgres': ('TEST_PG_', 'TEST_DB_'),
    }

    ENV_FILES = ('.env', '.env.test')

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize ConfigManager.

        Args:
            config_dir: Directory containing environment files (defaults to cwd)
        """
        self.config_dir = Path(config_dir) if config_dir else Path.cwd()
        self._env_vars: Dict[str, str] = {}
        self._load_env_files()

    def _load_env_files(self):
        """Load environment files in order; later files override earlier ones."""
        for env_file in self.ENV_FILES:
            env_path = self.config_dir / env_file
            if env_path.exists():
                self._load_env_file(env_path)

    def _load_env_file(self, env_path: Path):
        """Load a single environment file into our internal env_vars dict."""
        try:
            with open(env_path, 'r') as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith('#') and '=' in line:
                        key, value = line.split('=', 1)
                        self._env_vars[key.strip()] = value.strip().strip('"').strip("'")
        except OSError as e:
            raise ConfigValidationError(f"Cannot read environment file {env_path}: {e}") from e

    def _check_engine(self, engine: str):
        if engine not in self.ENGINES:
            raise ConfigValidationError(
                f"Unknown database engine '{engine}' - expected one of: {', '.join(self.ENGINES)}"
            )

    def get(self, engine: str, key: str) -> str:
        """
        Resolve a setting for an engine.

        os.environ wins over env files; within each, the engine-specific
        variable wins over the generic TEST_DB_* one.

        Args:
            engine: 'mysql' or 'postgres'
            key: Setting name (HOST, PORT, USER, PASSWORD, MIGRATIONS)

        Returns:
            The configured value, or the engine default
        """
        self._check_engine(engine)
        for source in (os.environ, self._env_vars):
            for prefix in self.ENV_PREFIXES[engine]:
                value = source.get(f"{prefix}{key}")
                if value is not None:
                    return value
        return self.DEFAULTS[engine][key]

    def get_port(self, engine: str) -> int:
        """Get the validated server port for an engine."""
        value = self.get(engine, 'PORT')
        try:
            port = int(value)
        except ValueError:
            raise ConfigValidationError(
                f"Invalid port for {engine}: '{value}' - port must be a number between 1 and 65535"
            )
        if not (1 <= port <= 65535):
            raise ConfigValidationError(
                f"Invalid port for {engine}: '{value}' - port must be between 1 and 65535"
            )
        return port

    def server_config(self, engine: str) -> ServerConfig:
        """
        Build the validated server configuration for an engine.

        Raises:
            ConfigValidationError: If any setting is invalid
        """
        try:
            return ServerConfig(
                host=self.get(engine, 'HOST'),
                port=self.get_port(engine),
                user=self.get(engine, 'USER'),
                password=self.get(engine, 'PASSWORD'),
            )
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid {engine} server configuration: {e}") from e

    def migrations_path(self, engine: str) -> Path:
        """Get the migrations directory for an engine, relative paths resolved against config_dir."""
        path = Path(self.get(engine, 'MIGRATIONS'))
        if not path.is_absolute():
            path = self.config_dir / path
        return path
