"""Модель механизма: набор сочленений и звеньев + авторские числа подвижности.

Решатель положения — замыкание конкретной топологии с сигнатурой
`(parameter, joints) -> joints`. Вместо иерархии классов каждая топология
отдаёт свою функцию; механизм хранит её как значение.

Жизненный цикл:
- механизм создаётся конструктором топологии (mechanics.four_bar и др.);
- на каждом тике анимации `advance(t)` заменяет кортеж сочленений;
- выбрасывается при запросе нового механизма.

Решатель никогда не считает подвижность: числа n, j, Σf_i, M — авторские
константы, проверяемые формулой Грюблера на этапе проектирования (в тестах).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import itertools
import logging
import uuid

from kinemalearn.core.types import Joint, Link, MobilityCounts, Point, gruebler_mobility
from kinemalearn.core.units import to_deg
from kinemalearn.core.validation import MalformedTopologyError

logger = logging.getLogger(__name__)

Joints = Tuple[Joint, ...]
Solver = Callable[[float, Joints], Joints]


class GroundFrame:
    """Read-only вид на координаты опор (ground-сочленений).

    Решатели читают из текущего набора сочленений только опоры, поэтому
    ошибка не накапливается между тиками и анимация не "уплывает".
    """

    __slots__ = ("_anchors",)

    def __init__(self, joints: Sequence[Joint]) -> None:
        self._anchors: Mapping[str, Point] = MappingProxyType({j.id: j.position for j in joints if j.ground})

    def __getitem__(self, joint_id: str) -> Point:
        try:
            return self._anchors[joint_id]
        except KeyError:
            raise MalformedTopologyError(f"ground anchor {joint_id!r} is missing") from None

    def __contains__(self, joint_id: object) -> bool:
        return joint_id in self._anchors

    def __iter__(self) -> Iterator[str]:
        return iter(self._anchors)

    def __len__(self) -> int:
        return len(self._anchors)

    def __repr__(self) -> str:
        return f"GroundFrame({dict(self._anchors)})"


def place(
    joints: Sequence[Joint],
    positions: Mapping[str, Point],
    orientations: Optional[Mapping[str, float]] = None,
) -> Joints:
    """Новый кортеж сочленений, где заданные сочленения перенесены.

    Запись в несуществующий id — ошибка авторинга топологии.
    """

    orientations = orientations or {}
    known = {j.id for j in joints}
    unknown = (set(positions) | set(orientations)) - known
    if unknown:
        raise MalformedTopologyError(f"solver writes unknown joints: {sorted(unknown)}")

    out: List[Joint] = []
    for j in joints:
        if j.id not in positions and j.id not in orientations:
            out.append(j)
            continue
        out.append(j.moved_to(positions.get(j.id, j.position), orientations.get(j.id)))
    return tuple(out)


def _validate(joints: Sequence[Joint], links: Sequence[Link]) -> None:
    ids = [j.id for j in joints]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise MalformedTopologyError(f"duplicate joint ids: {duplicates}")

    known = set(ids)
    for link in links:
        missing = [jid for jid in link.joints if jid not in known]
        if missing:
            raise MalformedTopologyError(f"{link.id} references unknown joints: {missing}")

    link_ids = [link.id for link in links]
    if len(set(link_ids)) != len(link_ids):
        raise MalformedTopologyError(f"duplicate link ids: {link_ids}")

    drivers = [j.id for j in joints if j.is_driver]
    if len(drivers) > 1:
        raise MalformedTopologyError(f"more than one driver joint: {drivers}")


@dataclass
class Mechanism:
    """Механизм: сочленения, звенья, авторские числа подвижности и решатель."""

    id: str
    name: str
    description: str
    joints: Joints
    links: Tuple[Link, ...]
    expected: MobilityCounts
    solver: Optional[Solver] = field(default=None, repr=False)
    topology: str = ""

    def __post_init__(self) -> None:
        self.joints = tuple(self.joints)
        self.links = tuple(self.links)
        _validate(self.joints, self.links)

    # --- авторские числа -------------------------------------------------

    @property
    def expected_n(self) -> int:
        return self.expected.n

    @property
    def expected_j(self) -> int:
        return self.expected.j

    @property
    def expected_sum_fi(self) -> int:
        return self.expected.sum_fi

    @property
    def expected_m(self) -> int:
        return self.expected.m

    def counted(self) -> MobilityCounts:
        """Числа подвижности, посчитанные по самим записям модели.

        n — все звенья, включая стойку; j — сочленения с f_i > 0;
        M — из формулы (авторское M сравнивается отдельно).
        """

        n = len(self.links)
        pairs = [j for j in self.joints if j.connectivity > 0]
        sum_fi = sum(j.connectivity for j in pairs)
        m = gruebler_mobility(n, len(pairs), sum_fi, spatial=self.expected.spatial)
        return MobilityCounts(n=n, j=len(pairs), sum_fi=sum_fi, m=m, spatial=self.expected.spatial)

    # --- доступ к сочленениям ---------------------------------------------

    def joint(self, joint_id: str) -> Joint:
        for j in self.joints:
            if j.id == joint_id:
                return j
        raise MalformedTopologyError(f"{self.name}: joint {joint_id!r} not found")

    def positions(self) -> Dict[str, Point]:
        return {j.id: j.position for j in self.joints}

    @property
    def driver(self) -> Optional[Joint]:
        for j in self.joints:
            if j.is_driver:
                return j
        return None

    def set_driver(self, joint_id: str) -> None:
        """Сделать joint_id единственным ведущим сочленением.

        Остальные сочленения не пересчитываются: решатель вызовется на
        следующем тике анимации.
        """

        self.joint(joint_id)
        self.joints = tuple(
            j if j.is_driver == (j.id == joint_id) else _with_driver(j, j.id == joint_id) for j in self.joints
        )
        logger.info("%s: driver joint -> %s", self.name, joint_id)

    def rigid_pairs(self) -> List[Tuple[str, str, str]]:
        """Пары вращательных сочленений на одном подвижном звене: (link_id, a, b).

        Расстояние в каждой паре решатель обязан держать постоянным. Пары со
        скользящими/высшими сочленениями (P, PinSlot, Cam) сюда не входят:
        вдоль них звенья по определению смещаются.
        """

        kinds = {j.id: j.kind for j in self.joints}
        out: List[Tuple[str, str, str]] = []
        for link in self.links:
            if link.ground:
                continue
            revolute = [jid for jid in link.joints if kinds[jid] == "R"]
            out.extend((link.id, a, b) for a, b in itertools.combinations(revolute, 2))
        return out

    # --- решатель ----------------------------------------------------------

    def solve(self, parameter: float, joints: Optional[Sequence[Joint]] = None) -> Joints:
        """Положения всех сочленений при значении ведущего параметра.

        Чистая функция: исходный кортеж не меняется. Механизм без решателя
        (статический) возвращает сочленения как есть.
        """

        current = self.joints if joints is None else tuple(joints)
        if self.solver is None:
            return current
        return self.solver(float(parameter), current)

    def advance(self, parameter: float) -> Joints:
        """Один шаг анимации: заменить сочленения решением при parameter."""

        self.joints = self.solve(parameter)
        return self.joints

    def __repr__(self) -> str:
        return f"Mechanism({self.topology or self.id}: {len(self.links)} links, {len(self.joints)} joints)"


def _with_driver(joint: Joint, is_driver: bool) -> Joint:
    return replace(joint, is_driver=is_driver)


def hold(joints: Joints, topology: str, parameter: float) -> Joints:
    """Мягкий отказ: положение недостижимо, кадр удерживается без изменений."""

    logger.debug(
        "%s: unreachable at t=%.4f (%.1f°), holding previous frame", topology, parameter, to_deg(parameter)
    )
    return joints


def build_mechanism(
    topology: str,
    name: str,
    description: str,
    joints: Sequence[Joint],
    links: Sequence[Link],
    expected: MobilityCounts,
    solver: Optional[Solver],
    assemble_at: Optional[float] = 0.0,
) -> Mechanism:
    """Собрать механизм и один раз решить его при assemble_at.

    Авторская раскладка сочленений приблизительная; после сборки все жёсткие
    длины уже выполнены. Если положение assemble_at недостижимо, остаётся
    авторская раскладка (мягкий отказ).
    """

    mech = Mechanism(
        id=f"{topology}_{uuid.uuid4().hex[:12]}",
        name=name,
        description=description,
        joints=tuple(joints),
        links=tuple(links),
        expected=expected,
        solver=solver,
        topology=topology,
    )
    if solver is not None and assemble_at is not None:
        mech.advance(assemble_at)
    return mech
