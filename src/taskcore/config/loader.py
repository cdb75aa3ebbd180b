"""Configuration loader for taskcore.

A session is configured by at most one file (YAML or JSON, chosen by
suffix) with ``TASKCORE_*`` environment variables layered on top.
``ConfigLoader`` reads either source into a validated ``TaskCoreConfig``
and reports every failure as a ``ConfigurationError`` naming the source.
"""
from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from pathlib import Path

import yaml
from pydantic import ValidationError

from taskcore.config.defaults import DEFAULT_CONFIG
from taskcore.config.schema import config_error, validate_config
from taskcore.schema.config import TaskCoreConfig
from taskcore.schema.errors import ConfigurationError

logger = logging.getLogger(__name__)

_PARSERS: dict[str, Callable[[str], object]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.loads,
}

# Searched in order by load_auto(); the first file that exists is used.
_AUTO_SEARCH_PATHS: tuple[str, ...] = (
    "taskcore.yaml",
    "taskcore.yml",
    "taskcore.json",
    ".taskcore.yaml",
    ".taskcore.yml",
    ".taskcore.json",
)


class ConfigLoader:
    """Loads ``TaskCoreConfig`` from a config file and the environment.

    Examples
    --------
    >>> loader = ConfigLoader()
    >>> loader.load_env(prefix="TASKCORE_DOCTEST_").session_name
    'default-session'
    """

    def load_file(self, path: str | Path) -> TaskCoreConfig:
        """Load configuration from a ``.yaml``, ``.yml`` or ``.json`` file.

        An empty file yields the defaults.

        Raises
        ------
        ConfigurationError
            If the suffix is unsupported, the file is missing or unparsable,
            its top level is not a mapping, or a value fails validation.
        """
        resolved = Path(path)
        parser = _PARSERS.get(resolved.suffix.lower())
        if parser is None:
            raise ConfigurationError(
                f"Unsupported config format {resolved.suffix!r}: {resolved}",
                context={"source": str(resolved)},
            )
        if not resolved.is_file():
            raise ConfigurationError(
                f"Config file not found: {resolved}",
                context={"source": str(resolved)},
            )

        try:
            raw = parser(resolved.read_text(encoding="utf-8"))
        except (yaml.YAMLError, ValueError) as exc:
            raise ConfigurationError(
                f"Failed to parse config at {resolved}: {exc}",
                context={"source": str(resolved)},
            ) from exc

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"Config at {resolved} must be a mapping, got {type(raw).__name__}",
                context={"source": str(resolved)},
            )
        logger.debug("Loaded config from %s", resolved)
        return validate_config(raw, source=str(resolved))

    def load_env(self, prefix: str = "TASKCORE_") -> TaskCoreConfig:
        """Build configuration from environment variables.

        See :meth:`~taskcore.schema.config.TaskCoreConfig.from_env` for the
        variable mapping rules.

        Raises
        ------
        ConfigurationError
            If an environment value fails validation.
        """
        try:
            config = TaskCoreConfig.from_env(prefix=prefix)
        except ValidationError as exc:
            raise config_error(exc, f"{prefix}* environment") from exc
        logger.debug("Loaded config from environment with prefix %r", prefix)
        return config

    def load_auto(
        self,
        search_dir: str | Path | None = None,
        env_prefix: str = "TASKCORE_",
    ) -> TaskCoreConfig:
        """Discover the session's config file and overlay the environment.

        The first of ``taskcore.yaml``, ``taskcore.yml``, ``taskcore.json``
        and their hidden variants found in *search_dir* (default: ``cwd``)
        is loaded; ``DEFAULT_CONFIG`` is used when there is none.  A file
        that exists but is broken is an error, not a reason to keep looking.
        """
        base_dir = Path(search_dir) if search_dir is not None else Path.cwd()
        config = DEFAULT_CONFIG

        found = next(
            (base_dir / name for name in _AUTO_SEARCH_PATHS if (base_dir / name).is_file()),
            None,
        )
        if found is not None:
            config = self.load_file(found)
            logger.info("Loaded taskcore config from %s", found)
        else:
            logger.debug("No config file in %s; using defaults.", base_dir)

        if any(k.startswith(env_prefix) for k in os.environ):
            config = config.merge(self.load_env(prefix=env_prefix))
            logger.debug("Applied %s* environment overlay.", env_prefix)
        return config
