from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RevenueTotals:
    all_time: int = 0
    current_month: int = 0
    pending_sum: int = 0
    pending_count: int = 0
    today_count: int = 0
    by_service: dict[str, int] = field(default_factory=dict)
