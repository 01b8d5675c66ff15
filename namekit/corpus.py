#!/usr/bin/env python3
"""
Training Corpora
================
Built-in word lists and word-list file loading.

Word-list files hold one word per line. Blank lines and lines starting with
the ``corpus.comment_prefix`` setting are skipped.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from .settings import get_setting

logger = logging.getLogger(__name__)


# =============================================================================
# BUILT-IN CORPUS
# =============================================================================

TRAINING_CORPUS = {
    # High-fantasy style personal names
    'fantasy': [
        'aerith', 'alaric', 'aldren', 'belgarion', 'caladan', 'calder',
        'dorian', 'elandra', 'elowen', 'eowyn', 'faramir', 'galadriel',
        'garrick', 'isolde', 'ithilien', 'kaelen', 'lirael', 'lorien',
        'mirabel', 'morgana', 'nimue', 'orin', 'peregrin', 'rhiannon',
        'sabriel', 'seraphine', 'talanor', 'thalion', 'theoden', 'vaelin',
        'varian', 'ysolde',
    ],
    # Roman praenomina and cognomina
    'roman': [
        'agrippa', 'appius', 'aurelius', 'brutus', 'caesar', 'camillus',
        'cassius', 'cato', 'cicero', 'claudius', 'crassus', 'decimus',
        'drusus', 'flavius', 'gaius', 'germanicus', 'gnaeus', 'hadrian',
        'julius', 'lucius', 'marcus', 'maximus', 'nero', 'octavius',
        'publius', 'quintus', 'scipio', 'septimus', 'servius', 'tiberius',
        'titus', 'varro',
    ],
    # Old Norse given names
    'norse': [
        'arnbjorn', 'asgeir', 'astrid', 'bjorn', 'brynja', 'dagny',
        'eirik', 'freydis', 'gudrun', 'gunnar', 'halfdan', 'hallgerd',
        'harald', 'helga', 'hrolf', 'ingrid', 'ivar', 'kjartan', 'leif',
        'ragnar', 'ragnhild', 'sigrid', 'sigurd', 'snorri', 'solveig',
        'sven', 'thora', 'thorvald', 'torstein', 'ulf', 'valdis', 'yngvar',
    ],
    # English town names
    'english_towns': [
        'ashby', 'bamburgh', 'barnsley', 'berwick', 'bradford', 'bristol',
        'cheltenham', 'chester', 'colchester', 'darlington', 'dorchester',
        'durham', 'exeter', 'gloucester', 'grimsby', 'harrogate',
        'hastings', 'kendal', 'lancaster', 'leicester', 'lincoln',
        'ludlow', 'malton', 'norwich', 'oldham', 'penrith', 'reading',
        'salisbury', 'scarborough', 'shrewsbury', 'whitby', 'winchester',
    ],
    # Chemical elements
    'elements': [
        'argon', 'barium', 'bismuth', 'boron', 'cadmium', 'calcium',
        'carbon', 'cerium', 'cobalt', 'copper', 'erbium', 'fluorine',
        'gallium', 'helium', 'hydrogen', 'iridium', 'krypton', 'lithium',
        'magnesium', 'neon', 'nickel', 'niobium', 'osmium', 'oxygen',
        'radium', 'rhodium', 'selenium', 'silicon', 'sodium', 'thorium',
        'titanium', 'xenon',
    ],
}


def list_categories() -> dict:
    """Built-in corpus categories with their word counts."""
    return {name: len(words) for name, words in TRAINING_CORPUS.items()}


def get_corpus(categories: Optional[list[str]] = None) -> list[str]:
    """
    Get training words from the built-in corpus.

    Args:
        categories: Category names to combine (default: corpus.default setting)

    Returns:
        Deduplicated words, in category order

    Raises:
        ValueError: If a category name is not found
    """
    if not categories:
        default = get_setting("corpus.default")
        categories = [default] if default else list(TRAINING_CORPUS)

    words = []
    for category in categories:
        if category not in TRAINING_CORPUS:
            available = ', '.join(sorted(TRAINING_CORPUS))
            raise ValueError(
                f"Unknown corpus '{category}'. Available corpora: {available}"
            )
        words.extend(TRAINING_CORPUS[category])

    return list(dict.fromkeys(words))


# =============================================================================
# WORD-LIST FILES
# =============================================================================

def normalize_words(words: Iterable[str], lowercase: bool = True) -> list[str]:
    """Strip whitespace, optionally lowercase, and drop empty entries."""
    result = []
    for word in words:
        word = word.strip()
        if lowercase:
            word = word.lower()
        if word:
            result.append(word)
    return result


def load_words(path: str | Path, lowercase: Optional[bool] = None) -> list[str]:
    """
    Load training words from a UTF-8 word-list file.

    Args:
        path: File with one word per line
        lowercase: Lowercase every word (default: corpus.lowercase setting)

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file holds no words
    """
    if lowercase is None:
        lowercase = get_setting("corpus.lowercase", True)
    prefix = get_setting("corpus.comment_prefix")

    path = Path(path)
    lines = path.read_text(encoding='utf-8').splitlines()
    if prefix:
        lines = [line for line in lines if not line.lstrip().startswith(prefix)]

    words = normalize_words(lines, lowercase)
    if not words:
        raise ValueError(f"No words found in {path}")

    logger.debug(f"Loaded {len(words)} words from {path}")
    return words
