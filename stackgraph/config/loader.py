"""Helpers for loading export configuration from TOML/JSON sources.

``load_export_config`` accepts:

* None -> default ExportConfig
* dict -> validated mapping
* Path / path-like string -> .toml/.json file on disk
* Inline JSON/TOML strings
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from stackgraph.config.schema import ExportConfig

logger = logging.getLogger("stackgraph.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def _detect_format(text: str) -> str:
    stripped = text.lstrip()
    return "json" if stripped.startswith(("{", "[")) else "toml"


def load_export_config(source: ConfigSource) -> ExportConfig:
    """Load ExportConfig from a configuration source.

    Args:
        source: One of:
            * None: returns the defaults
            * dict: already-parsed configuration mapping
            * str/Path: a filesystem path to a .toml/.json file, or an
              inline TOML/JSON string (auto-detected)

    Returns:
        ExportConfig instance.

    Raises:
        ValueError: If the text cannot be parsed or fails validation.
        TypeError: If the source type is unsupported.
    """
    if source is None:
        logger.debug("No config source provided; using default ExportConfig")
        return ExportConfig()

    if isinstance(source, dict):
        logger.debug("Loading ExportConfig from provided dict")
        return ExportConfig.model_validate(source)

    if isinstance(source, (str, Path)):
        path = Path(source)
        text: Optional[str] = None
        fmt: Optional[str] = None

        if path.is_file():
            text = path.read_text(encoding="utf-8")
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                fmt = _detect_format(text)
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            fmt = _detect_format(text)
            logger.info("Loading configuration from inline %s string", fmt)

        try:
            data = json.loads(text) if fmt == "json" else tomllib.loads(text)
        except (json.JSONDecodeError, tomllib.TOMLDecodeError) as err:
            raise ValueError(f"Invalid {fmt.upper()} configuration: {err}") from err

        if not isinstance(data, dict):
            raise ValueError("Top-level configuration must be a mapping/dict")

        return ExportConfig.model_validate(data)

    raise TypeError(f"Unsupported config source type: {type(source)!r}")


__all__ = ["load_export_config"]
