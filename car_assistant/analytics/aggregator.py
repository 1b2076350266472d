from __future__ import annotations

from collections import Counter
from typing import Any

from ..sessions.models import Session


def _top(counter: Counter[str], n: int = 10) -> list[dict[str, Any]]:
    return [{"name": name, "count": count} for name, count in counter.most_common(n)]


def compute_session_analytics(sessions: list[Session]) -> dict[str, Any]:
    total = len(sessions)

    # Completion funnel
    completed = sum(1 for s in sessions if s.is_completed)
    steps = [len(s.history) for s in sessions]
    avg_steps = round(sum(steps) / total, 1) if total else 0.0

    # Step actions across all histories
    action_counter: Counter[str] = Counter()
    step_counter: Counter[str] = Counter()
    for s in sessions:
        for entry in s.history:
            action_counter[entry.action or "unknown"] += 1
            step_counter[entry.step or "unknown"] += 1

    # Latest selections
    usage_counter: Counter[str] = Counter()
    priority_counter: Counter[str] = Counter()
    body_counter: Counter[str] = Counter()
    fuel_counter: Counter[str] = Counter()
    selected_counter: Counter[str] = Counter()
    for s in sessions:
        usage_counter.update(s.usage_tags)
        priority_counter.update(s.priority_tags)
        if s.body_type:
            body_counter[s.body_type] += 1
        if s.fuel_type:
            fuel_counter[s.fuel_type] += 1
        if s.selected_car_id:
            selected_counter[s.selected_car_id] += 1

    return {
        "total_sessions": total,
        "completed_sessions": completed,
        "completion_rate": round(completed / total * 100, 1) if total else 0.0,
        "avg_steps_per_session": avg_steps,
        "action_counts": dict(action_counter),
        "step_counts": dict(step_counter),
        "top_usage_tags": _top(usage_counter),
        "top_priority_tags": _top(priority_counter),
        "top_body_types": _top(body_counter),
        "top_fuel_types": _top(fuel_counter),
        "top_selected_cars": _top(selected_counter),
    }
