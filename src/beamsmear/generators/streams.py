"""
Independent random streams for the six sampled variables.

Each variable owns a numpy ``Generator`` seeded from the base seed plus a
fixed per-variable offset. A given seed reproduces the same beam, and no
variable's draws depend on how many values another variable used.
"""

from typing import Dict, Iterator, Tuple
import logging

import numpy as np

from ..models.beam import COLUMNS

logger = logging.getLogger(__name__)

# Seed offset of each variable's stream
STREAM_OFFSETS: Dict[str, int] = {name: offset for offset, name in enumerate(COLUMNS)}


class RandomStreams:
    """
    Six independently seeded random generators, one per beam variable.

    Streams are created once and never reseeded; their cursors advance
    monotonically over the whole run.

    Example:
        >>> streams = RandomStreams(13)
        >>> e = streams.energy.normal(45.6, 0.1368)
    """

    def __init__(self, seed: int):
        if seed < 0:
            raise ValueError(f"Seed must be non-negative, got {seed}")
        self.seed = seed
        self._generators: Dict[str, np.random.Generator] = {
            name: np.random.default_rng(seed + offset)
            for name, offset in STREAM_OFFSETS.items()
        }
        logger.debug(f"Seeded {len(self._generators)} streams from base seed {seed}")

    def __getitem__(self, name: str) -> np.random.Generator:
        return self._generators[name]

    def __iter__(self) -> Iterator[Tuple[str, np.random.Generator]]:
        return iter(self._generators.items())

    def __len__(self) -> int:
        return len(self._generators)

    @property
    def energy(self) -> np.random.Generator:
        return self._generators["energy"]

    @property
    def x(self) -> np.random.Generator:
        return self._generators["x"]

    @property
    def y(self) -> np.random.Generator:
        return self._generators["y"]

    @property
    def z(self) -> np.random.Generator:
        return self._generators["z"]

    @property
    def xp(self) -> np.random.Generator:
        return self._generators["xp"]

    @property
    def yp(self) -> np.random.Generator:
        return self._generators["yp"]
