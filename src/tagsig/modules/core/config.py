"""
Configuration for signature lookups.

Provides:
- SignatureConfig dataclass holding every option with its default
- load_config() to parse .tagsig/config.json
- tag_files_from_env() for the TAGSIG_TAGS override

Example .tagsig/config.json:

    {
        "languageMap": {"objc": ["ObjectiveC", "C"]},
        "pathMapping": [["/home/me/src", "~src"]],
        "pathMappingStyle": 6,
        "maxTooltipLines": 10,
        "tooltipOnly": false,
        "displayTrim": 120
    }
"""

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .languages import DEFAULT_LANGUAGE_MAP

logger = logging.getLogger(__name__)

CONFIG_DIR = ".tagsig"
CONFIG_FILE = "config.json"

ENV_PATH_STYLE = "TAGSIG_PATH_STYLE"
ENV_TAGS = "TAGSIG_TAGS"

DEFAULT_MAX_TOOLTIP_LINES = 20


@dataclass
class SignatureConfig:
    """Options read by the lookup pipeline. Defaults need no config file."""

    language_map: Dict[str, List[str]] = field(
        default_factory=lambda: copy.deepcopy(DEFAULT_LANGUAGE_MAP)
    )
    path_rules: List[Tuple[str, str]] = field(default_factory=list)
    path_style: int = 0
    max_tooltip_lines: int = DEFAULT_MAX_TOOLTIP_LINES
    tooltip_only: bool = False
    display_trim: int = 0


def _parse_path_rules(raw) -> List[Tuple[str, str]]:
    """Accept [[prefix, repl], ...] or {"prefix": "repl", ...}."""
    if isinstance(raw, dict):
        return [(str(k), str(v)) for k, v in raw.items()]
    if not isinstance(raw, list):
        if raw is not None:
            logger.debug("Ignoring pathMapping of type %s", type(raw).__name__)
        return []
    rules: List[Tuple[str, str]] = []
    for item in raw:
        if isinstance(item, (list, tuple)) and len(item) == 2:
            rules.append((str(item[0]), str(item[1])))
        else:
            logger.debug("Ignoring malformed path rule: %r", item)
    return rules


def _clamp_style(value) -> int:
    try:
        style = int(value)
    except (TypeError, ValueError):
        return 0
    return style if 0 <= style <= 7 else 0


def config_from_dict(data: dict) -> SignatureConfig:
    """Build a config from camelCase keys, defaulting anything missing."""
    config = SignatureConfig()

    # User entries extend the defaults; an entry replaces the default list
    language_map = data.get("languageMap")
    if isinstance(language_map, dict):
        for editor_lang, tag_langs in language_map.items():
            if isinstance(tag_langs, str):
                tag_langs = [tag_langs]
            if not isinstance(tag_langs, list) or not all(isinstance(t, str) for t in tag_langs):
                logger.debug("Ignoring languageMap entry for %s: %r", editor_lang, tag_langs)
                continue
            config.language_map[editor_lang] = list(tag_langs)

    if "pathMapping" in data:
        config.path_rules = _parse_path_rules(data["pathMapping"])
    if "pathMappingStyle" in data:
        config.path_style = _clamp_style(data["pathMappingStyle"])
    if "maxTooltipLines" in data:
        try:
            config.max_tooltip_lines = max(1, int(data["maxTooltipLines"]))
        except (TypeError, ValueError):
            pass
    if "tooltipOnly" in data:
        config.tooltip_only = bool(data["tooltipOnly"])
    if "displayTrim" in data:
        try:
            config.display_trim = max(0, int(data["displayTrim"]))
        except (TypeError, ValueError):
            pass
    return config


def load_config(project_path: Union[str, Path, None] = None) -> SignatureConfig:
    """
    Load configuration from .tagsig/config.json under project_path.

    Args:
        project_path: Directory holding .tagsig/ (defaults to the cwd)

    Returns:
        SignatureConfig. Returns defaults if file is missing or invalid.
        TAGSIG_PATH_STYLE overrides pathMappingStyle.
    """
    project_path = Path(project_path or ".")
    config_file = project_path / CONFIG_DIR / CONFIG_FILE

    data: dict = {}
    if config_file.exists():
        try:
            with open(config_file, "r") as f:
                loaded = json.load(f)
            if isinstance(loaded, dict):
                data = loaded
            else:
                logger.debug("Ignoring %s: top level is not an object", config_file)
        except (json.JSONDecodeError, IOError) as e:
            # Invalid JSON or read error - fall back to defaults
            logger.debug("Ignoring unreadable config %s: %s", config_file, e)

    config = config_from_dict(data)

    env_style = os.environ.get(ENV_PATH_STYLE)
    if env_style:
        config.path_style = _clamp_style(env_style)
    return config


def tag_files_from_env() -> Optional[List[str]]:
    """Tags files listed in TAGSIG_TAGS (os.pathsep separated), if set."""
    value = os.environ.get(ENV_TAGS)
    if not value:
        return None
    return [p for p in value.split(os.pathsep) if p]
