"""File and environment backed configuration repositories."""

import json
import os
from pathlib import Path
from typing import Any, Mapping, Optional

import structlog
import yaml

from fraudquery.core.domain.errors import ConfigurationError
from fraudquery.core.ports.outbound.config import IConfigRepository, RepositoryKind

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG_FILE = "application.properties"
DEFAULT_ENV_PREFIX = "FRAUDQUERY_"
REPOSITORY_KIND_PROPERTY = "app.config.repository"


class FileConfigRepository(IConfigRepository):
    """
    Load properties from a file.

    Supports Java-style ``.properties``, YAML (.yaml, .yml) and JSON.
    Nested YAML/JSON mappings are flattened to dotted keys, so
    ``{"nats": {"host": "x"}}`` is read as ``nats.host``.

    A missing file is an empty repository: every lookup falls back
    to its default.
    """

    def __init__(self, file_path: str | Path = DEFAULT_CONFIG_FILE):
        self._path = Path(file_path)
        self._properties: dict[str, str] = {}

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> None:
        """Load properties from the file."""
        if not self._path.exists():
            logger.warning("config_file_not_found", path=str(self._path))
            self._properties = {}
            return

        suffix = self._path.suffix.lower()
        if suffix in (".yaml", ".yml"):
            with open(self._path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            self._properties = _flatten(data)
        elif suffix == ".json":
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._properties = _flatten(data)
        elif suffix in (".properties", ".conf", ""):
            with open(self._path, "r", encoding="utf-8") as f:
                self._properties = parse_properties(f.read())
        else:
            raise ConfigurationError(
                f"Unsupported config format: {self._path.suffix}. "
                "Supported formats: .properties, .yaml, .yml, .json"
            )

        logger.info(
            "config_loaded",
            path=str(self._path),
            properties=len(self._properties),
        )

    def get_property(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._properties.get(name, default)


class EnvConfigRepository(IConfigRepository):
    """
    Read properties from environment variables.

    ``nats.host`` is looked up as ``FRAUDQUERY_NATS_HOST``.
    """

    def __init__(
        self,
        prefix: str = DEFAULT_ENV_PREFIX,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self._prefix = prefix
        self._environ = environ
        self._snapshot: dict[str, str] = {}

    def env_name(self, name: str) -> str:
        """Environment variable name for a dotted property."""
        return self._prefix + name.upper().replace(".", "_").replace("-", "_")

    def load(self) -> None:
        """Snapshot the environment."""
        source = self._environ if self._environ is not None else os.environ
        self._snapshot = {k: v for k, v in source.items() if k.startswith(self._prefix)}
        logger.info("config_env_loaded", prefix=self._prefix, properties=len(self._snapshot))

    def get_property(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._snapshot.get(self.env_name(name), default)


def create_config_repository(
    kind: RepositoryKind | str,
    path: str | Path = DEFAULT_CONFIG_FILE,
    env_prefix: str = DEFAULT_ENV_PREFIX,
) -> IConfigRepository:
    """
    Create a configuration repository of the given kind.

    Args:
        kind: "file" or "env"
        path: Config file path for the file repository
        env_prefix: Variable prefix for the env repository

    Raises:
        ConfigurationError: If the kind is not supported
    """
    try:
        if not isinstance(kind, RepositoryKind):
            kind = RepositoryKind(str(kind).strip().lower())
    except ValueError:
        supported = ", ".join(k.value for k in RepositoryKind)
        raise ConfigurationError(
            f"Unknown config repository '{kind}'. Supported: {supported}"
        ) from None

    if kind is RepositoryKind.ENV:
        return EnvConfigRepository(prefix=env_prefix)
    return FileConfigRepository(path)


def bootstrap_config_repository(
    path: str | Path = DEFAULT_CONFIG_FILE,
    kind: RepositoryKind | str | None = None,
) -> IConfigRepository:
    """
    Build and load the central configuration repository.

    The local file names the central repository kind in
    ``app.config.repository`` unless ``kind`` is given explicitly.
    """
    if kind is None:
        local = FileConfigRepository(path)
        local.load()
        kind = local.get_property(REPOSITORY_KIND_PROPERTY, RepositoryKind.FILE.value)
        if kind == RepositoryKind.FILE.value:
            return local

    repository = create_config_repository(kind, path=path)
    repository.load()
    return repository


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java-style properties text (key=value, key: value, key value)."""
    properties: dict[str, str] = {}
    logical = ""
    for raw in text.splitlines():
        line = raw.strip() if not logical else raw.lstrip()
        if not logical and (not line or line[0] in "#!"):
            continue
        if line.endswith("\\") and not line.endswith("\\\\"):
            logical += line[:-1]
            continue
        logical += line

        key, value = _split_property(logical)
        if key:
            properties[key] = value
        logical = ""

    if logical:
        key, value = _split_property(logical)
        if key:
            properties[key] = value
    return properties


def _split_property(line: str) -> tuple[str, str]:
    for i, char in enumerate(line):
        if char in "=:" or char.isspace():
            key = line[:i].strip()
            rest = line[i:].lstrip()
            if rest[:1] in ("=", ":"):
                rest = rest[1:]
            return key, rest.strip()
    return line.strip(), ""


def _flatten(data: Any, prefix: str = "") -> dict[str, str]:
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration root must be a mapping")

    flat: dict[str, str] = {}
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{name}."))
        elif value is None:
            continue
        elif isinstance(value, bool):
            flat[name] = "true" if value else "false"
        else:
            flat[name] = str(value)
    return flat
