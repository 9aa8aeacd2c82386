"""
Configuration schema and loader.

This module defines dataclasses that mirror the optional YAML
configuration file.  A helper function `load_config()` reads the file
(if one is given), merges it over the defaults and resolves the AI
service credential from the environment exactly once.  The resulting
`Config` is passed explicitly to the components that need it, so no
module looks up process-wide state on its own.

Example ``config.yaml``::

    ai:
      model: gemini-2.0-flash
      api_key_env: GEMINI_API_KEY
    journal:
      csv_path: trades.csv
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import yaml


DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_API_KEY_ENV = "GEMINI_API_KEY"
DEFAULT_CSV_PATH = "trades.csv"


@dataclass
class AIConfig:
    """Settings for the generative-AI service.

    Attributes
    ----------
    model : str
        Gemini model name used for extraction.
    api_key : str
        Credential handed to the client.  An empty value is not rejected
        here; the outbound call fails instead.
    api_key_env : str
        Name of the environment variable consulted when `api_key` is not
        set in the YAML file.
    """

    model: str = DEFAULT_MODEL
    api_key: str = ""
    api_key_env: str = DEFAULT_API_KEY_ENV


@dataclass
class JournalConfig:
    """Location of the CSV trade journal.

    Attributes
    ----------
    csv_path : str
        Path of the CSV file, relative paths are resolved against the
        current working directory.
    """

    csv_path: str = DEFAULT_CSV_PATH


@dataclass
class Config:
    """Root configuration for the trade logger."""

    ai: AIConfig = field(default_factory=AIConfig)
    journal: JournalConfig = field(default_factory=JournalConfig)


def _merge_dict(defaults: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two dictionaries.

    The values in `override` take precedence over those in `defaults`.
    """
    result: Dict[str, Any] = defaults.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dict(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Config:
    """Build a `Config` from defaults, an optional YAML file and the environment.

    Parameters
    ----------
    path : str, optional
        Path to a YAML file.  When omitted only defaults and the
        environment are used.
    environ : Mapping[str, str], optional
        Environment to read the API key from.  Defaults to `os.environ`.

    Returns
    -------
    Config
        A populated configuration object.

    Raises
    ------
    FileNotFoundError
        If `path` is given but does not exist.
    """
    raw: Dict[str, Any] = {}
    if path is not None:
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")
        with file_path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}

    defaults: Dict[str, Any] = {
        'ai': {
            'model': DEFAULT_MODEL,
            'api_key': "",
            'api_key_env': DEFAULT_API_KEY_ENV,
        },
        'journal': {
            'csv_path': DEFAULT_CSV_PATH,
        },
    }

    # An empty section (``ai:`` with nothing below it) loads as None
    raw = {key: ({} if value is None and key in defaults else value) for key, value in raw.items()}
    merged = _merge_dict(defaults, raw)

    ai_cfg = AIConfig(
        model=str(merged['ai']['model']),
        api_key=str(merged['ai'].get('api_key') or ""),
        api_key_env=str(merged['ai']['api_key_env']),
    )
    if not ai_cfg.api_key:
        env = os.environ if environ is None else environ
        ai_cfg.api_key = env.get(ai_cfg.api_key_env, "")

    journal_cfg = JournalConfig(csv_path=str(merged['journal']['csv_path']))

    return Config(ai=ai_cfg, journal=journal_cfg)
