#!/usr/bin/env python3
"""
Name Generator
==============
Constrained name generation on top of :class:`namekit.generator.Generator`.

Each attempt generates one word and keeps it only if it satisfies the
length, prefix, suffix and substring constraints. Batches repeat attempts
until enough names are accepted or the time budget runs out.

Usage:
    from namekit import NameGenerator, get_corpus

    gen = NameGenerator(get_corpus(['norse']), order=3, prior=0.001, backoff=True)
    gen.generate_name(4, 9, 'th', '', '', '')
    gen.generate_names(10, 4, 9, '', 'a', '', 'x')
"""

from __future__ import annotations

import logging
import random
import sys
import time
from dataclasses import dataclass
from typing import Iterable, Optional

from .generator import Generator
from .model import BOUNDARY
from .settings import get_setting

logger = logging.getLogger(__name__)


@dataclass
class NameConstraints:
    """Acceptance filter for generated names."""
    min_length: int = 0
    max_length: int = sys.maxsize
    starts_with: str = ''
    ends_with: str = ''
    includes: str = ''
    excludes: str = ''

    def accepts(self, name: str) -> bool:
        return (self.min_length <= len(name) <= self.max_length
                and name.startswith(self.starts_with)
                and name.endswith(self.ends_with)
                and (not self.includes or self.includes in name)
                and (not self.excludes or self.excludes not in name))


class NameGenerator:
    """
    Name generator suitable for most simple name generation scenarios.

    For complex generators, working with :class:`Generator` directly may be
    more appropriate.
    """

    def __init__(self,
                 data: Iterable[str],
                 order: Optional[int] = None,
                 prior: Optional[float] = None,
                 backoff: Optional[bool] = None,
                 rng: Optional[random.Random] = None):
        """
        Args:
            data: Training words
            order: Highest model order (default: generator.order setting)
            prior: Dirichlet prior (default: generator.prior setting)
            backoff: Use back-off (default: generator.backoff setting)
            rng: Random source, e.g. ``random.Random(42)`` for repeatable output
        """
        cfg = get_setting("generator", {}) or {}
        if order is None:
            order = cfg.get("order")
        if prior is None:
            prior = cfg.get("prior")
        if backoff is None:
            backoff = cfg.get("backoff", False)
        if order is None or prior is None:
            raise ValueError("generator.order and generator.prior must be set in app.yaml")

        self._generator = Generator(data, order, prior, backoff, rng)

    @classmethod
    def from_generator(cls, generator: Generator) -> 'NameGenerator':
        """Wrap an existing (for example, loaded) generator."""
        name_gen = cls.__new__(cls)
        name_gen._generator = generator
        return name_gen

    @property
    def generator(self) -> Generator:
        return self._generator

    def generate_name(self,
                      min_length: int,
                      max_length: int,
                      starts_with: str,
                      ends_with: str,
                      includes: str,
                      excludes: str) -> Optional[str]:
        """
        Generate one word and check it against the constraints.

        Args:
            min_length: Minimum name length
            max_length: Maximum name length
            starts_with: Required prefix
            ends_with: Required suffix
            includes: Substring the name must contain ('' for any)
            excludes: Substring the name must not contain ('' for none)

        Returns:
            The name, or None if the generated word was rejected
        """
        constraints = NameConstraints(min_length, max_length, starts_with,
                                      ends_with, includes, excludes)
        return self._generate_constrained(constraints)

    def generate_names(self,
                       n: int,
                       min_length: int,
                       max_length: int,
                       starts_with: str,
                       ends_with: str,
                       includes: str,
                       excludes: str,
                       max_time_per_name: float = 200,
                       unique: bool = False) -> list[str]:
        """
        Try to generate ``n`` names meeting the constraints.

        Gives up once ``n * max_time_per_name`` milliseconds have passed. The
        budget is checked between attempts.

        Args:
            n: Number of names wanted
            min_length, max_length, starts_with, ends_with, includes, excludes:
                Constraints, see :meth:`generate_name`
            max_time_per_name: Time allotted per name, in milliseconds
            unique: Skip names already returned by this call

        Returns:
            Accepted names, possibly fewer than ``n``
        """
        constraints = NameConstraints(min_length, max_length, starts_with,
                                      ends_with, includes, excludes)
        names = []
        seen = set()
        attempts = 0

        start = time.perf_counter()
        deadline = start + (max_time_per_name * n) / 1000.0

        while len(names) < n and time.perf_counter() < deadline:
            attempts += 1
            name = self._generate_constrained(constraints)
            if name is None:
                continue
            if unique:
                if name in seen:
                    continue
                seen.add(name)
            names.append(name)

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"Accepted {len(names)}/{n} names in {attempts} attempts ({elapsed_ms:.0f} ms)")
        if len(names) < n:
            logger.info(f"Time budget exhausted: {len(names)} of {n} names found")

        return names

    def _generate_constrained(self, constraints: NameConstraints) -> Optional[str]:
        name = self._generator.generate().replace(BOUNDARY, '')
        if constraints.accepts(name):
            return name
        return None
