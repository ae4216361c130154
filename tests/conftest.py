from __future__ import annotations

from ecoscript.things import Organism, Thing


class Marker(Thing):
    """Inert occupant that records which legend entry created it."""

    def __init__(self, num: int) -> None:
        self.num = num


class Recorder(Organism):
    """Organism whose policy result is fixed and whose calls are counted."""

    def __init__(self, pre_result: bool = False, energy: int = 1, species: str = "rec") -> None:
        super().__init__(species, base_energy=energy, max_energy=10)
        self.pre_result = pre_result
        self.pre_calls = 0
        self.act_calls = 0

    def pre_act(self, world, pos) -> bool:
        self.pre_calls += 1
        return self.pre_result

    def act(self, world, pos) -> bool:
        self.act_calls += 1
        return True
