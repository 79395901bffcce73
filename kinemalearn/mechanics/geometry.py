"""Геометрическое ядро решателя положений.

Три замкнутые (неитерационные) операции, из которых собирается решатель
каждой топологии:
- пересечение двух окружностей (замыкание контура по двум длинам звеньев);
- пересечение окружности и прямой (ползун на направляющей);
- перенос точки твёрдого тела (третий шарнир тернарного звена).

Функции чистые, про механизмы ничего не знают. "Нет решения" — это `None`,
исключения не бросаются.

Соглашение: экранная СК (y вниз). "Верхняя" точка — с меньшим y.
"""

from __future__ import annotations

from typing import Optional, Tuple

import math

from kinemalearn.core.types import Point
from kinemalearn.core.units import TWO_PI


def distance(p1: Point, p2: Point) -> float:
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def polar(center: Point, radius: float, angle: float) -> Point:
    """Конец кривошипа длиной radius, повёрнутого на angle вокруг center."""

    return Point(center[0] + radius * math.cos(angle), center[1] + radius * math.sin(angle))


def angle_of(p1: Point, p2: Point) -> float:
    return math.atan2(p2[1] - p1[1], p2[0] - p1[0])


def wrap_angle(angle: float) -> float:
    """Привести угол к [0, 2π)."""

    out = float(angle) % TWO_PI
    # -0.0 и погрешность около 2π
    if out >= TWO_PI:
        return 0.0
    return out


def intersect_both(p1: Point, r1: float, p2: Point, r2: float) -> Optional[Tuple[Point, Point]]:
    """Обе точки пересечения окружностей (p1, r1) и (p2, r2).

    Возвращает None, если окружности далеко (d > r1 + r2), одна внутри другой
    (d < |r1 - r2|) или центры совпадают (d == 0).

    Порядок кандидатов фиксирован: первый смещён от оси p1->p2 на (+dy, -dx)·h/d.
    """

    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    d = math.hypot(dx, dy)

    if d > r1 + r2 or d < abs(r1 - r2) or d == 0:
        return None

    # Закон косинусов, a: проекция точки пересечения на линию центров
    a = (r1 * r1 - r2 * r2 + d * d) / (2.0 * d)
    h = math.sqrt(max(0.0, r1 * r1 - a * a))

    x2 = p1[0] + a * dx / d
    y2 = p1[1] + a * dy / d

    first = Point(x2 + h * dy / d, y2 - h * dx / d)
    second = Point(x2 - h * dy / d, y2 + h * dx / d)
    return first, second


def intersect(p1: Point, r1: float, p2: Point, r2: float, upper: bool = True) -> Optional[Point]:
    """Пересечение окружностей с выбором ветки сборки.

    upper=True возвращает кандидата с меньшим y (выше на экране), иначе с большим.

    Это эвристика выбора режима сборки, а не отслеживание непрерывности:
    около сингулярного положения ветка может визуально перескочить.
    Ограничение принято и не исправляется молча.
    """

    both = intersect_both(p1, r1, p2, r2)
    if both is None:
        return None

    first, second = both
    if upper:
        return first if first.y < second.y else second
    return first if first.y > second.y else second


def intersect_line(center: Point, radius: float, line_point: Point, line_angle: float) -> Optional[Point]:
    """Пересечение окружности с прямой (line_point, line_angle).

    Задача поворачивается в СК прямой (прямая = локальная ось x), решается
    квадратное уравнение по локальной координате вдоль прямой.

    Возвращается ровно один корень — с +sqrt. Второй корень не возвращается
    никогда: для части конфигураций физически верной может оказаться другая
    ветка, вызывающий код обязан это учитывать.
    """

    dx = center[0] - line_point[0]
    dy = center[1] - line_point[1]

    c = math.cos(-line_angle)
    s = math.sin(-line_angle)
    local_x = dx * c - dy * s
    local_y = dx * s + dy * c

    disc = radius * radius - local_y * local_y
    if disc < 0:
        return None

    x_sol = local_x + math.sqrt(disc)
    return Point(
        line_point[0] + x_sol * math.cos(line_angle),
        line_point[1] + x_sol * math.sin(line_angle),
    )


def rigid_point(p1: Point, p2: Point, local: Point) -> Point:
    """Точка твёрдого тела, заданная в СК (p1, p1->p2).

    Ось u — единичный вектор p1->p2, ось v — u, повёрнутый на 90° (-u.y, u.x).
    Вырожденная база (p1 == p2) возвращает p1: это бывает только у
    некорректного механизма, поэтому приближение допустимо.
    """

    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    length = math.hypot(dx, dy)
    if length == 0:
        return Point(p1[0], p1[1])

    ux = dx / length
    uy = dy / length
    vx = -uy
    vy = ux

    return Point(
        p1[0] + local[0] * ux + local[1] * vx,
        p1[1] + local[0] * uy + local[1] * vy,
    )


def local_offset(length: float, angle: float) -> Point:
    """Локальные координаты точки тернарного звена по длине и углу от базы."""

    return Point(length * math.cos(angle), length * math.sin(angle))
