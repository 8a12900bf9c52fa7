from typing import List, Optional

from .models import AggregateResult, Classification, Status


def exit_code(status: Status) -> int:
    return int(status)


def perfdata(result: AggregateResult, critical_days: int, warning_days: int) -> str:
    parts: List[str] = [
        f"total={result.evaluated_count + len(result.failures)};;;;",
        f"ok={result.count(Classification.OK)};;;;",
        f"warning={result.count(Classification.WARNING)};;;;",
        f"critical={result.count(Classification.CRITICAL)};;;;",
        f"expired={result.count(Classification.EXPIRED)};;;;",
        f"unreadable={result.count(Classification.UNREADABLE)};;;;",
    ]
    min_left = result.min_days_left
    if min_left is not None:
        # "N:" alerte sous N ; les seuils sont inclusifs, d'où le +1
        parts.append(f"min_days_left={min_left};{warning_days + 1}:;{critical_days + 1}:;;")
    return " ".join(parts)


def render(program_name: str, result: AggregateResult, perf: Optional[str] = None) -> str:
    """``<PROGRAM>: <STATUS> - <message>`` with optional ``| perfdata``."""
    line = f"{program_name}: {result.status.name} - {result.message}"
    if perf:
        line = f"{line} | {perf}"
    return line
