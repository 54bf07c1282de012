# config_manager.py - engine constants with an optional JSON override file

from __future__ import annotations
import dataclasses
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AutofillConfig:
    """
    Configurable knobs for ranking, caching and the feedback rule.
    """
    suggestion_count: int = 3   # slots returned by every guess
    cache_size: int = 10        # completions cached per prefix node
    candidate_limit: int = 10   # candidates ranked per keystroke
    context_limit: int = 50     # max followers per bigram/trigram context
    reward: int = 50            # weight added on accepted feedback
    penalty: int = 2            # weight removed on rejected feedback
    seed_weight: int = 1        # weight of a vocabulary word on first sighting
    cache_completions: bool = True

    def with_overrides(self, **changes: Any) -> "AutofillConfig":
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


def _coerce(data: Dict[str, Any]) -> Dict[str, Any]:
    """Keep known keys, cast to the default's type, drop the rest."""
    defaults = AutofillConfig().to_dict()
    out: Dict[str, Any] = {}
    for key, val in data.items():
        if key not in defaults:
            logger.warning("ignoring unknown config option %r", key)
            continue
        kind = type(defaults[key])
        if kind is bool and not isinstance(val, bool):
            logger.warning("config option %r expects true/false, got %r", key, val)
            continue
        try:
            out[key] = kind(val)
        except (TypeError, ValueError):
            logger.warning("config option %r has invalid value %r", key, val)
            continue
        if kind is int and out[key] < 0:
            logger.warning("config option %r must be >= 0, got %r", key, val)
            del out[key]
    return out


def load_config(path: Optional[str] = None) -> AutofillConfig:
    """
    Merge a JSON object from `path` over the defaults.
    A missing or broken file falls back to the defaults.
    """
    cfg = AutofillConfig()
    if not path:
        return cfg
    if not os.path.exists(path):
        logger.warning("config file %s not found, using defaults", path)
        return cfg
    try:
        with open(path, "r", encoding="utf8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("config load failed, using defaults: %s", e)
        return cfg
    if not isinstance(data, dict):
        logger.warning("config file %s is not a JSON object, using defaults", path)
        return cfg
    return cfg.with_overrides(**_coerce(data))
