#!/usr/bin/env python3
"""
namekit - Markov Chain Name Generator
=====================================

Generates plausible new words from a list of example words using
character-level Markov chains, with optional Katz back-off and a Dirichlet
prior for smoothing.

Quick Start
-----------
    from namekit import NameGenerator, get_corpus

    gen = NameGenerator(get_corpus(['roman']), order=3, prior=0.001, backoff=True)

    # One attempt, None if the word did not meet the constraints
    name = gen.generate_name(4, 10, '', 'us', '', '')

    # Up to 10 names within 10 * 200 ms
    names = gen.generate_names(10, 4, 10, '', '', '', '')

Modules
-------
    namekit.model          - Single-order Markov model, alphabet, sampling
    namekit.generator      - Multi-order generator with back-off
    namekit.name_generator - Constrained name sampling
    namekit.corpus         - Built-in corpora and word-list loading
    namekit.persistence    - JSON save/load of trained generators
    namekit.settings       - app.yaml settings

CLI Usage
---------
    python -m namekit generate -n 10 --corpus norse
    python -m namekit train --words names.txt --output names.json
    python -m namekit generate --model names.json --starts-with k
"""

__version__ = "0.1.0"

from .model import BOUNDARY, MarkovModel, build_alphabet, select_index
from .generator import Generator
from .name_generator import NameGenerator, NameConstraints
from .corpus import TRAINING_CORPUS, get_corpus, list_categories, load_words, normalize_words
from .persistence import save_generator, load_generator, save_model, load_model
from .settings import get_setting

__all__ = [
    "__version__",
    # Core
    "BOUNDARY",
    "MarkovModel",
    "build_alphabet",
    "select_index",
    "Generator",
    "NameGenerator",
    "NameConstraints",
    # Corpora
    "TRAINING_CORPUS",
    "get_corpus",
    "list_categories",
    "load_words",
    "normalize_words",
    # Persistence
    "save_generator",
    "load_generator",
    "save_model",
    "load_model",
    # Settings
    "get_setting",
]
