import random
from abc import ABC, abstractmethod
from typing import Iterator, Optional, Union

from pathquest.core.grid import Grid


class Generator(ABC):
    def __init__(self, grid: Grid, rng: Optional[Union[random.Random, int]] = None):
        self.grid = grid
        # An int is taken as a seed; None gives a time-seeded source
        if rng is None or isinstance(rng, int):
            rng = random.Random(rng)
        self.rng = rng
        self.step_count = 0

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        The actual grid modifications happen in-place on self.grid.
        """
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
