from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable

from app.domain.entities.appointment import Appointment, AppointmentStatus
from app.domain.entities.ledger_entry import LedgerEntry
from app.domain.entities.revenue import RevenueTotals


EARNING_STATUSES = frozenset({AppointmentStatus.confirmed, AppointmentStatus.completed})


def compute_revenue_totals(
    appointments: Iterable[Appointment],
    ledger_entries: Iterable[LedgerEntry],
    today: date,
) -> RevenueTotals:
    all_time = 0
    current_month = 0
    pending_sum = 0
    pending_count = 0
    today_count = 0

    for appointment in appointments:
        if appointment.status in EARNING_STATUSES:
            all_time += appointment.price
            if (appointment.date.year, appointment.date.month) == (today.year, today.month):
                current_month += appointment.price
        elif appointment.status == AppointmentStatus.pending:
            pending_sum += appointment.price
            pending_count += 1
        if appointment.date == today:
            today_count += 1

    by_service: dict[str, int] = defaultdict(int)
    for entry in ledger_entries:
        by_service[entry.service_kind.value] += entry.price

    return RevenueTotals(
        all_time=all_time,
        current_month=current_month,
        pending_sum=pending_sum,
        pending_count=pending_count,
        today_count=today_count,
        by_service=dict(by_service),
    )
