"""Shared test fixtures."""
from __future__ import annotations

import pytest

# Five sentences, each repeating the same two key terms
SCENARIO_TEXT = (
    "Photosynthesis is a process that relies on chlorophyll inside green leaves. "
    "Chlorophyll absorbs sunlight so that photosynthesis can convert energy. "
    "During photosynthesis, chlorophyll captures red and blue light efficiently. "
    "Scientists study how chlorophyll molecules speed up photosynthesis in algae. "
    "Without chlorophyll, photosynthesis would stop and plants would starve."
)


class SequenceRandom:
    """RandomSource that replays *values* forever."""

    def __init__(self, values):
        self._values = list(values)
        self._i = 0

    def next(self) -> float:
        value = self._values[self._i % len(self._values)]
        self._i += 1
        return value


@pytest.fixture
def scenario_text():
    return SCENARIO_TEXT


@pytest.fixture
def zero_rng():
    return SequenceRandom([0.0])


@pytest.fixture
def history_text():
    """Longer multi-paragraph text with names and repeated terms."""
    return """\
Marie Curie was a physicist and chemist who conducted pioneering research on radioactivity.
Curie was the first woman to win a Nobel Prize, and radioactivity became her lifelong subject.

However, radioactivity is dangerous, and prolonged exposure always increases health risks.
The research of Marie Curie led to the discovery of polonium and radium in Paris.
Radium emits high levels of radiation, so laboratory research requires careful shielding.

Her research can still be seen in modern medicine, where radiation will treat some cancers.
Scientists are grateful that Curie shared her research openly with colleagues in Paris.
"""


@pytest.fixture
def sequence_random():
    """Factory: ``sequence_random([0.1, 0.9])`` builds a replaying source."""
    return SequenceRandom
