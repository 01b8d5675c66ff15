#!/usr/bin/env python3
"""
Markov Model
============
A single fixed-order, character-level Markov model with Dirichlet-prior
smoothing.

For every context of exactly ``order`` preceding symbols the model learns a
weight vector over the alphabet and samples the next symbol from it.

Theory:
-------
Words are decorated with ``order`` boundary symbols in front and a single
boundary symbol at the end, so the model learns how words start and end:

    order 2, "ann"  ->  "##ann#"
    ##->a  #a->n  an->n  nn->#

The weight of symbol ``s`` after context ``c`` is ``prior + count(c -> s)``.
A prior above zero gives every symbol of the alphabet a chance to appear,
including transitions never seen in training (additive smoothing).
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

# Reserved symbol for word-start padding and the word terminator
BOUNDARY = '#'


# =============================================================================
# ALPHABET
# =============================================================================

def build_alphabet(words: Iterable[str]) -> list[str]:
    """
    Build the alphabet of a training set.

    Args:
        words: Training words

    Returns:
        Sorted unique symbols with the boundary symbol at index 0

    Raises:
        ValueError: If a word contains the boundary symbol
    """
    letters = set()
    for word in words:
        if BOUNDARY in word:
            raise ValueError(
                f"Training word {word!r} contains the reserved boundary symbol {BOUNDARY!r}"
            )
        letters.update(word)

    return [BOUNDARY] + sorted(letters)


def select_index(weights: list[float], rng: random.Random) -> int:
    """
    Pick an index with probability proportional to its weight.

    Inverse-CDF sampling over the running totals of ``weights``.

    Raises:
        RuntimeError: If the weights do not sum to a positive value
    """
    totals = []
    accumulator = 0.0
    for weight in weights:
        accumulator += weight
        totals.append(accumulator)

    if not accumulator > 0:
        raise RuntimeError(f"Cannot sample from a chain with total weight {accumulator}")

    r = rng.random() * accumulator
    for i, total in enumerate(totals):
        if r < total:
            return i

    # Only reachable through float rounding when r lands on the last total
    return len(totals) - 1


def _check_parameters(order: int, prior: float, alphabet: list[str]):
    if order < 0:
        raise ValueError(f"order must be >= 0, got {order}")
    if not 0 <= prior <= 1:
        raise ValueError(f"prior must be within [0, 1], got {prior}")
    if not alphabet:
        raise ValueError("alphabet must not be empty")


# =============================================================================
# MODEL
# =============================================================================

class MarkovModel:
    """Character-level Markov model of a single order"""

    def __init__(self,
                 order: int,
                 prior: float,
                 alphabet: list[str],
                 rng: Optional[random.Random] = None):
        """
        Create an untrained model. Use the named constructors
        :meth:`from_training_data` or :meth:`from_persisted_state` instead.

        Args:
            order: Number of symbols of lookback
            prior: Dirichlet prior, within [0, 1]
            alphabet: Alphabet shared with the owning generator (not copied)
            rng: Random source used for sampling
        """
        _check_parameters(order, prior, alphabet)

        self.order = order
        self.prior = prior
        self.alphabet = alphabet
        self.rng = rng or random.Random()

        self.observations: dict[str, list[str]] = {}
        self.chains: dict[str, list[float]] = {}

    @classmethod
    def from_training_data(cls,
                           data: Iterable[str],
                           order: int,
                           prior: float,
                           alphabet: list[str],
                           rng: Optional[random.Random] = None) -> 'MarkovModel':
        """
        Train a new model.

        Args:
            data: Training words; the sequence is not modified
            order: Number of symbols of lookback
            prior: Dirichlet prior, within [0, 1]
            alphabet: Alphabet of the training data (see :func:`build_alphabet`)
            rng: Random source used for sampling

        Raises:
            ValueError: On a negative order, a prior outside [0, 1], or an
                empty alphabet or training set
        """
        words = list(data)
        if not words:
            raise ValueError("training data must not be empty")

        model = cls(order, prior, alphabet, rng)
        model._train(words)
        model._build_chains()
        return model

    @classmethod
    def from_persisted_state(cls,
                             order: int,
                             prior: float,
                             alphabet: list[str],
                             observations: dict[str, list[str]],
                             chains: Optional[dict[str, list[float]]] = None,
                             rng: Optional[random.Random] = None) -> 'MarkovModel':
        """
        Rebuild a model from previously trained state without retraining.

        Chains are recomputed from the observations when not given.

        Raises:
            ValueError: On invalid parameters, tables that are not mappings,
                or a chain whose length does not match the alphabet
        """
        if not isinstance(observations, dict):
            raise ValueError(f"observations must be a mapping, got {type(observations).__name__}")
        if chains is not None and not isinstance(chains, dict):
            raise ValueError(f"chains must be a mapping, got {type(chains).__name__}")

        model = cls(order, prior, alphabet, rng)
        model.observations = {k: list(v) for k, v in observations.items()}

        if chains is None:
            model._build_chains()
        else:
            for context, weights in chains.items():
                if len(weights) != len(alphabet):
                    raise ValueError(
                        f"Chain for context {context!r} has {len(weights)} weights, "
                        f"expected {len(alphabet)}"
                    )
            model.chains = {k: [float(w) for w in v] for k, v in chains.items()}

        return model

    def generate(self, context: str) -> Optional[str]:
        """
        Sample the symbol following ``context``.

        Returns:
            The next symbol, or None if the context was never observed
        """
        chain = self.chains.get(context)
        if chain is None:
            return None
        return self.alphabet[select_index(chain, self.rng)]

    def retrain(self, data: Iterable[str]):
        """
        Train on more words and rebuild the chains.

        Observations accumulate on top of the existing ones. The alphabet is
        not recomputed: symbols outside it are recorded but never weighted.
        """
        self._train(data)
        self._build_chains()

    def _train(self, data: Iterable[str]):
        padding = BOUNDARY * self.order
        words = 0
        for word in data:
            words += 1
            decorated = padding + word + BOUNDARY
            for i in range(len(decorated) - self.order):
                context = decorated[i:i + self.order]
                self.observations.setdefault(context, []).append(decorated[i + self.order])

        logger.debug(
            f"Order-{self.order} model trained on {words} words "
            f"({len(self.observations)} contexts)"
        )

    def _build_chains(self):
        self.chains = {}
        for context, followers in self.observations.items():
            counts = Counter(followers)
            self.chains[context] = [self.prior + counts[symbol] for symbol in self.alphabet]

    def to_dict(self) -> dict:
        """Serialize model to dictionary"""
        return {
            'order': self.order,
            'prior': self.prior,
            'alphabet': list(self.alphabet),
            'observations': {k: list(v) for k, v in self.observations.items()},
            'chains': {k: list(v) for k, v in self.chains.items()},
        }

    @classmethod
    def from_dict(cls,
                  data: dict,
                  alphabet: Optional[list[str]] = None,
                  rng: Optional[random.Random] = None) -> 'MarkovModel':
        """
        Deserialize model from dictionary.

        Args:
            data: Output of :meth:`to_dict`
            alphabet: Shared alphabet to use instead of the stored copy
            rng: Random source used for sampling
        """
        try:
            return cls.from_persisted_state(
                order=int(data['order']),
                prior=float(data['prior']),
                alphabet=alphabet if alphabet is not None else list(data['alphabet']),
                observations=data['observations'],
                chains=data.get('chains'),
                rng=rng,
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed model document: {e}") from e

    def __repr__(self) -> str:
        return (f"MarkovModel(order={self.order}, prior={self.prior}, "
                f"contexts={len(self.chains)})")
