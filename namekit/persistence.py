#!/usr/bin/env python3
"""
Persistence
===========
Save and load trained generators and models as JSON documents.

A generator document holds the format version, the generator parameters,
the shared alphabet and one entry per model (see ``MarkovModel.to_dict``).
Loading rebuilds the models from their stored chains without retraining.
"""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Optional

from .generator import Generator
from .model import MarkovModel

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def _read_document(filepath: str | Path) -> dict:
    try:
        data = json.loads(Path(filepath).read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise ValueError(f"{filepath} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"{filepath} does not hold a namekit document")
    version = data.get('format')
    if version != FORMAT_VERSION:
        raise ValueError(f"Unsupported document format {version!r} in {filepath}")
    return data


def save_generator(generator: Generator, filepath: str | Path):
    """Save a trained generator to a JSON file"""
    data = {'format': FORMAT_VERSION, **generator.to_dict()}
    Path(filepath).write_text(json.dumps(data, indent=2), encoding='utf-8')
    logger.debug(f"Saved {generator!r} to {filepath}")


def load_generator(filepath: str | Path, rng: Optional[random.Random] = None) -> Generator:
    """Load a generator saved with :func:`save_generator`"""
    generator = Generator.from_dict(_read_document(filepath), rng=rng)
    logger.debug(f"Loaded {generator!r} from {filepath}")
    return generator


def save_model(model: MarkovModel, filepath: str | Path):
    """Save a single trained model to a JSON file"""
    data = {'format': FORMAT_VERSION, **model.to_dict()}
    Path(filepath).write_text(json.dumps(data, indent=2), encoding='utf-8')


def load_model(filepath: str | Path, rng: Optional[random.Random] = None) -> MarkovModel:
    """Load a model saved with :func:`save_model`"""
    return MarkovModel.from_dict(_read_document(filepath), rng=rng)
