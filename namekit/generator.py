#!/usr/bin/env python3
"""
Word Generator
==============
Procedural word generator built on a stack of Markov models.

Uses Katz's back-off model: the next letter is looked up with the highest
order model first, backing down to lower orders when a higher model has no
data for the current context. Each model also applies a Dirichlet prior,
which gives every letter of the alphabet a small chance to be picked.

See:
- https://en.wikipedia.org/wiki/Katz%27s_back-off_model
- https://en.wikipedia.org/wiki/Additive_smoothing
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional

from .model import BOUNDARY, MarkovModel, build_alphabet

logger = logging.getLogger(__name__)


class Generator:
    """Generates words letter by letter from a list of Markov models"""

    def __init__(self,
                 data: Iterable[str],
                 order: int,
                 prior: float,
                 backoff: bool = False,
                 rng: Optional[random.Random] = None):
        """
        Train a generator.

        Args:
            data: Training words
            order: Highest model order
            prior: Dirichlet prior shared by all models, within [0, 1]
            backoff: Build models for every order down to 0 and fall back to
                lower orders when a higher one fails
            rng: Random source shared by all models

        Raises:
            ValueError: On a negative order, a prior outside [0, 1], empty
                training data, or a word containing the boundary symbol
        """
        words = list(data)
        if order < 0:
            raise ValueError(f"order must be >= 0, got {order}")
        if not 0 <= prior <= 1:
            raise ValueError(f"prior must be within [0, 1], got {prior}")
        if not words:
            raise ValueError("training data must not be empty")

        self.order = order
        self.prior = prior
        self.backoff = backoff
        self.rng = rng or random.Random()
        self.alphabet = build_alphabet(words)

        # Highest order first
        orders = range(order, -1, -1) if backoff else [order]
        self.models = [
            MarkovModel.from_training_data(words, o, prior, self.alphabet, self.rng)
            for o in orders
        ]

        logger.debug(
            f"Generator ready: order={order}, prior={prior}, backoff={backoff}, "
            f"alphabet={len(self.alphabet)} symbols, {len(words)} words"
        )

    @classmethod
    def from_models(cls,
                    models: list[MarkovModel],
                    backoff: bool,
                    rng: Optional[random.Random] = None) -> 'Generator':
        """
        Assemble a generator from already trained models, highest order first.

        Raises:
            ValueError: If the models are empty, share no alphabet, or are
                not ordered as the back-off flag requires
        """
        if not models:
            raise ValueError("at least one model is required")

        order = models[0].order
        expected = list(range(order, -1, -1)) if backoff else [order]
        actual = [m.order for m in models]
        if actual != expected:
            raise ValueError(f"model orders {actual} do not match expected {expected}")

        alphabet = models[0].alphabet
        if any(m.alphabet != alphabet for m in models):
            raise ValueError("all models must share the same alphabet")

        generator = cls.__new__(cls)
        generator.order = order
        generator.prior = models[0].prior
        generator.backoff = backoff
        generator.rng = rng or random.Random()
        generator.alphabet = alphabet
        generator.models = models
        for model in models:
            model.alphabet = alphabet
            model.rng = generator.rng
        return generator

    def generate(self) -> str:
        """
        Generate one word.

        Returns:
            The word with its leading boundary padding and, unless generation
            stopped early, its trailing boundary symbol
        """
        word = BOUNDARY * self.order
        while True:
            letter = self.next_symbol(word)
            if letter is None:
                logger.debug(f"No model could continue {word!r}")
                return word
            word += letter
            if letter == BOUNDARY:
                return word

    def next_symbol(self, word: str) -> Optional[str]:
        """
        Pick the letter following ``word`` using back-off.

        A model that has no data for its context, or that picks the boundary
        symbol, hands over to the next lower order with the context shortened
        by one letter from the left. The lowest model's answer is final.
        """
        context = word[len(word) - self.order:] if self.order else ''
        letter = None
        for model in self.models:
            letter = model.generate(context)
            if letter is None or letter == BOUNDARY:
                context = context[1:]
            else:
                break
        return letter

    def to_dict(self) -> dict:
        """Serialize generator to dictionary"""
        return {
            'order': self.order,
            'prior': self.prior,
            'backoff': self.backoff,
            'alphabet': list(self.alphabet),
            'models': [m.to_dict() for m in self.models],
        }

    @classmethod
    def from_dict(cls, data: dict, rng: Optional[random.Random] = None) -> 'Generator':
        """Deserialize generator from dictionary"""
        try:
            alphabet = list(data['alphabet'])
            models = [MarkovModel.from_dict(m, alphabet=alphabet) for m in data['models']]
            backoff = bool(data['backoff'])
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed generator document: {e}") from e
        return cls.from_models(models, backoff, rng)

    def __repr__(self) -> str:
        return (f"Generator(order={self.order}, prior={self.prior}, "
                f"backoff={self.backoff}, models={len(self.models)})")
