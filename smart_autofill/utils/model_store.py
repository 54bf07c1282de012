# model_store.py - JSON persistence for a trained SmartWord engine

# handles saving and loading:
# - unigram weights (the vocabulary is rebuilt from them)
# - bigram/trigram context tables
# - the rolling two-word context of the session

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from smart_autofill.core.autofill import SmartWord
from smart_autofill.errors import ModelStoreError
from smart_autofill.utils.config_manager import AutofillConfig

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

PathLike = Union[str, Path]


def export_state(engine: SmartWord) -> Dict[str, Any]:
    """Snapshot of everything learned so far, as plain JSON types."""
    data: Dict[str, Any] = {"format": FORMAT_VERSION}
    data.update(engine.snapshot())
    return data


def import_state(data: Dict[str, Any], config: Optional[AutofillConfig] = None) -> SmartWord:
    """Build a fresh engine from an export_state() payload."""
    if not isinstance(data, dict) or data.get("format") != FORMAT_VERSION:
        raise ModelStoreError("unsupported model format")

    engine = SmartWord((), config=config)
    try:
        engine.model.load_state(data)
    except (TypeError, ValueError, AttributeError) as e:
        raise ModelStoreError(f"malformed model data: {e}") from e

    try:
        for word, weight in sorted(engine.model.unigrams().items()):
            engine.index.insert(word, weight)
    except ValueError as e:
        raise ModelStoreError(f"malformed model data: {e}") from e

    ctx = data.get("context") or {}
    if not isinstance(ctx, dict):
        raise ModelStoreError("malformed model data: context")
    engine.set_context(ctx.get("last_word"), ctx.get("second_last_word"))
    return engine


def save_model(engine: SmartWord, path: PathLike) -> None:
    """
    Write the engine state to `path` as JSON.
    Raises ModelStoreError if the file can't be written.
    """
    data = export_state(engine)
    p = Path(path)
    try:
        with p.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)
    except OSError as e:
        raise ModelStoreError(f"cannot write {p}: {e}") from e
    logger.info("saved model (%d words) to %s", len(data["unigrams"]), p)


def load_model(path: PathLike, config: Optional[AutofillConfig] = None) -> SmartWord:
    """Read a model written by save_model(); raises ModelStoreError on failure."""
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ModelStoreError(f"cannot read {p}: {e}") from e
    engine = import_state(data, config)
    logger.info("loaded model (%d words) from %s", len(engine.index), p)
    return engine
