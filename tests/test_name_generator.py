"""
Tests for the Name Generator
============================
Tests for constrained name generation in namekit/name_generator.py.
"""

import pytest
import random
import sys
import time
from pathlib import Path
from unittest.mock import patch

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from namekit.corpus import get_corpus
from namekit.model import BOUNDARY
from namekit.name_generator import NameConstraints, NameGenerator


ANY = (0, sys.maxsize, '', '', '', '')


@pytest.fixture
def gen():
    """Name generator trained on the roman corpus with a fixed seed."""
    return NameGenerator(get_corpus(['roman']), order=3, prior=0.001, backoff=True,
                         rng=random.Random(42))


class TestNameConstraints:
    """Tests for the acceptance filter."""

    def test_defaults_accept_everything(self):
        """Test that default constraints accept any string."""
        c = NameConstraints()
        assert c.accepts('')
        assert c.accepts('anything')

    @pytest.mark.parametrize("kwargs,name,expected", [
        ({'min_length': 5}, 'nero', False),
        ({'min_length': 4}, 'nero', True),
        ({'max_length': 3}, 'nero', False),
        ({'starts_with': 'ne'}, 'nero', True),
        ({'starts_with': 'ro'}, 'nero', False),
        ({'ends_with': 'ro'}, 'nero', True),
        ({'ends_with': 'ne'}, 'nero', False),
        ({'includes': 'er'}, 'nero', True),
        ({'includes': 'x'}, 'nero', False),
        ({'excludes': 'x'}, 'nero', True),
        ({'excludes': 'er'}, 'nero', False),
    ])
    def test_single_constraint(self, kwargs, name, expected):
        """Test each constraint on its own."""
        assert NameConstraints(**kwargs).accepts(name) is expected

    def test_contradictory(self):
        """Test that includes == excludes rejects every name."""
        c = NameConstraints(includes='a', excludes='a')
        assert not c.accepts('marcus')
        assert not c.accepts('titus')


class TestGenerateName:
    """Tests for NameGenerator.generate_name()."""

    def test_permissive_never_rejects(self, gen):
        """Test that trivially satisfied constraints always accept."""
        for _ in range(100):
            assert gen.generate_name(*ANY) is not None

    def test_never_contains_boundary(self, gen):
        """Test that boundary symbols are stripped."""
        for _ in range(100):
            assert BOUNDARY not in gen.generate_name(*ANY)

    def test_rejection_returns_none(self, gen):
        """Test that a rejected word gives None, not an error."""
        with patch.object(gen.generator, 'generate', return_value='###marcus#'):
            assert gen.generate_name(0, 3, '', '', '', '') is None
            assert gen.generate_name(0, 20, 'x', '', '', '') is None
            assert gen.generate_name(0, 20, '', '', '', 'arc') is None

    def test_accepted_name_is_cleaned(self, gen):
        """Test that an accepted word is returned without padding."""
        with patch.object(gen.generator, 'generate', return_value='###marcus#'):
            assert gen.generate_name(6, 6, 'ma', 'us', 'rc', 'z') == 'marcus'

    def test_respects_constraints(self, gen):
        """Test that accepted names satisfy every constraint."""
        for _ in range(300):
            name = gen.generate_name(4, 9, '', 'us', '', 'x')
            if name is not None:
                assert 4 <= len(name) <= 9
                assert name.endswith('us')
                assert 'x' not in name


class TestGenerateNames:
    """Tests for NameGenerator.generate_names()."""

    def test_at_most_n(self, gen):
        """Test that no more than n names are returned."""
        names = gen.generate_names(5, *ANY)
        assert len(names) == 5

    def test_constraints_applied(self, gen):
        """Test that every returned name satisfies the constraints."""
        names = gen.generate_names(5, 4, 12, '', 'us', '', '', max_time_per_name=500)
        assert len(names) <= 5
        for name in names:
            assert name.endswith('us')
            assert 4 <= len(name) <= 12

    def test_contradictory_constraints_time_out(self, gen):
        """Test that impossible constraints end within the time budget."""
        start = time.perf_counter()
        names = gen.generate_names(5, 0, sys.maxsize, '', '', 'a', 'a', max_time_per_name=20)
        elapsed = time.perf_counter() - start

        assert names == []
        # 5 * 20 ms budget, with slack for a slow machine
        assert elapsed < 2.0

    def test_zero_requested(self, gen):
        """Test that n=0 returns immediately with nothing."""
        assert gen.generate_names(0, *ANY) == []

    def test_unique(self, gen):
        """Test that unique=True skips repeated names."""
        with patch.object(gen.generator, 'generate', side_effect=['#a#', '#a#', '#b#', '#c#']):
            names = gen.generate_names(3, *ANY, unique=True)
        assert names == ['a', 'b', 'c']

    def test_duplicates_allowed_by_default(self, gen):
        """Test that repeated names are kept without unique."""
        with patch.object(gen.generator, 'generate', side_effect=['#a#', '#a#']):
            names = gen.generate_names(2, *ANY)
        assert names == ['a', 'a']


class TestNameGeneratorInit:
    """Tests for NameGenerator construction."""

    def test_defaults_from_settings(self):
        """Test that omitted parameters come from app.yaml."""
        settings = {'order': 2, 'prior': 0.05, 'backoff': True}
        with patch('namekit.name_generator.get_setting', return_value=settings):
            ng = NameGenerator(get_corpus(['norse']))
        assert ng.generator.order == 2
        assert ng.generator.prior == 0.05
        assert ng.generator.backoff is True

    def test_missing_settings(self):
        """Test that missing order/prior settings are reported."""
        with patch('namekit.name_generator.get_setting', return_value={}):
            with pytest.raises(ValueError, match="app.yaml"):
                NameGenerator(['abc'])

    def test_invalid_prior(self):
        """Test that generator preconditions surface through the wrapper."""
        with pytest.raises(ValueError, match="prior"):
            NameGenerator(['abc'], order=1, prior=3.0, backoff=False)

    def test_from_generator(self, gen):
        """Test wrapping an existing generator."""
        wrapped = NameGenerator.from_generator(gen.generator)
        assert wrapped.generator is gen.generator
        assert wrapped.generate_name(*ANY) is not None
