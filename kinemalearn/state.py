from __future__ import annotations
from dataclasses import dataclass


@dataclass
class SimulationState:
    # ведущий параметр (рад), в [0, 2π)
    t: float = 0.0

    is_running: bool = False
    speed: float = 0.02  # рад на тик

    tick_count: int = 0

    def copy(self) -> "SimulationState":
        return SimulationState(**self.__dict__)
