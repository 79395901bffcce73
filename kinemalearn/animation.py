"""Драйвер анимации: ведущий параметр t -> решатель механизма.

Один тик — один синхронный проход: t сдвигается на speed (по модулю 2π),
механизм получает новый кортеж сочленений. Реального времени здесь нет: частоту
тиков задаёт вызывающая сторона (цикл отрисовки, тест, скрипт).
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

import logging

import numpy as np
import pandas as pd

from kinemalearn.config.models import AnimationConfig
from kinemalearn.core.units import TWO_PI
from kinemalearn.core.validation import ensure_positive
from kinemalearn.mechanics.geometry import wrap_angle
from kinemalearn.mechanics.mechanism import Joints, Mechanism
from kinemalearn.state import SimulationState

logger = logging.getLogger(__name__)


class AnimationDriver:
    """Владелец состояния анимации и единственный писатель `Mechanism.joints`."""

    def __init__(self, mechanism: Mechanism, cfg: AnimationConfig = AnimationConfig()) -> None:
        self.cfg = cfg
        self.mechanism = mechanism
        self.state = self._fresh_state()
        self._assemble_at_start()

    def _fresh_state(self) -> SimulationState:
        return SimulationState(t=self.cfg.start_parameter, speed=self.cfg.speed)

    def _assemble_at_start(self) -> None:
        # конструктор топологии уже собрал механизм при t = 0
        if self.state.t != 0.0:
            self.mechanism.advance(self.state.t)

    # --- управление ----------------------------------------------------------

    def start(self) -> None:
        self.state.is_running = True
        logger.info("%s: animation started at t=%.4f", self.mechanism.name, self.state.t)

    def stop(self) -> None:
        self.state.is_running = False
        logger.info("%s: animation stopped at t=%.4f", self.mechanism.name, self.state.t)

    def toggle(self) -> bool:
        if self.state.is_running:
            self.stop()
        else:
            self.start()
        return self.state.is_running

    def select_joint(self, joint_id: str) -> None:
        """Пользователь выбрал сочленение: оно становится ведущим."""

        self.mechanism.set_driver(joint_id)

    def replace_mechanism(self, mechanism: Mechanism) -> None:
        """Новый механизм: состояние сбрасывается, анимация остановлена."""

        self.mechanism = mechanism
        self.state = self._fresh_state()
        self._assemble_at_start()
        logger.info("animation mechanism replaced -> %s (%s)", mechanism.name, mechanism.id)

    # --- шаги ----------------------------------------------------------------

    def tick(self) -> Joints:
        s = self.state
        s.t = wrap_angle(s.t + s.speed)
        s.tick_count += 1
        joints = self.mechanism.advance(s.t)
        logger.debug("tick %d: t=%.4f", s.tick_count, s.t)
        return joints

    def frames(self, max_ticks: Optional[int] = None) -> Iterator[Joints]:
        """Кадры до stop() или до max_ticks тиков (кооперативная отмена)."""

        self.start()
        done = 0
        try:
            while self.state.is_running and (max_ticks is None or done < max_ticks):
                yield self.tick()
                done += 1
        finally:
            if self.state.is_running:
                self.stop()

    def trace(self, n_frames: int = 360, joint_ids: Optional[Sequence[str]] = None) -> pd.DataFrame:
        """Таблица положений за один оборот ведущего параметра.

        Считается на копии кортежа сочленений: ни состояние драйвера, ни
        сочленения механизма не меняются. Колонки: frame, t, <id>_x, <id>_y.
        Недостижимые кадры повторяют предыдущие (мягкий отказ решателя).
        """

        ensure_positive(n_frames, "n_frames")
        mech = self.mechanism
        ids = [j.id for j in mech.joints] if joint_ids is None else list(joint_ids)
        for jid in ids:
            mech.joint(jid)

        ts = self.state.t + np.linspace(0.0, TWO_PI, int(n_frames), endpoint=False)
        joints = mech.joints
        rows: List[dict] = []
        for i, t in enumerate(map(wrap_angle, ts)):
            joints = mech.solve(t, joints)
            by_id = {j.id: j.position for j in joints}
            row = {"frame": i, "t": t}
            for jid in ids:
                row[f"{jid}_x"] = by_id[jid].x
                row[f"{jid}_y"] = by_id[jid].y
            rows.append(row)

        columns = ["frame", "t"] + [f"{jid}_{axis}" for jid in ids for axis in ("x", "y")]
        return pd.DataFrame(rows, columns=columns)
