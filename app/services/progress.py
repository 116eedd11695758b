"""
Формулы прогресса, общие для API и отчётов.

Клиент показывает те же проценты, поэтому формула определена один раз здесь.
"""

import math


def round_half_up(value: float) -> int:
    """Округление как у Math.round: x.5 всегда вверх."""
    return int(math.floor(value + 0.5))


def clamp_percent(value: float) -> float:
    return min(100.0, max(0.0, value))


def goal_progress_percent(current: float, target: float, inverse: bool = False) -> float:
    """
    Процент выполнения цели, 0..100.

    Обычная цель: current / target.
    Обратная цель (меньше лучше): 100, если current <= target, иначе target / current.
    """
    if inverse:
        if current <= target:
            return 100.0
        return clamp_percent(target / current * 100)

    if target <= 0:
        return 0.0
    return clamp_percent(current / target * 100)


def is_goal_achieved(current: float, target: float, inverse: bool = False) -> bool:
    return goal_progress_percent(current, target, inverse) >= 100


def percent_change(current: float, previous: float) -> int:
    """Изменение относительно прошлого периода в процентах."""
    if previous == 0:
        return 100 if current > 0 else 0
    return round_half_up((current - previous) / previous * 100)
