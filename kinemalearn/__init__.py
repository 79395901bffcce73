"""kinemalearn package.

Важно: пакет не должен иметь побочных эффектов при импорте.
Поэтому здесь нет eager-import'ов модулей (топологии/генератор/анимация).

Импортируй нужное напрямую:
- from kinemalearn.generator import pick_random_topology
- from kinemalearn.animation import AnimationDriver
- from kinemalearn.mechanics.four_bar import build_four_bar
"""

from __future__ import annotations

__all__: list[str] = []
