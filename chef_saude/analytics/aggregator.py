from __future__ import annotations

from collections import Counter
from typing import Any


def _avg_time(events: list[dict[str, Any]]) -> float:
    times = [e["response_time_ms"] for e in events if "response_time_ms" in e]
    return round(sum(times) / len(times), 1) if times else 0.0


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    generations = [e for e in events if e["type"] == "generation"]
    searches = [e for e in events if e["type"] == "search"]
    failures = [e for e in events if e["type"] == "failure"]
    requests = generations + searches

    # Top restrictions across both flows
    restriction_counter: Counter[str] = Counter()
    for e in requests:
        for r in e.get("restrictions", []) or []:
            restriction_counter[r] += 1
    top_restrictions = [
        {"name": n, "count": c} for n, c in restriction_counter.most_common(10)
    ]

    # Dish type usage; "any" when the user left it open
    dish_counter: Counter[str] = Counter()
    for e in requests:
        dish_counter[e.get("dish_type") or "any"] += 1

    # Uniqueness retries
    retried = [s for s in searches if s.get("attempts", 1) > 1]
    exhausted = [s for s in searches if s.get("unique") is False]

    return {
        "total_generations": len(generations),
        "total_searches": len(searches),
        "total_failures": len(failures),
        "empty_results": sum(1 for e in requests if e.get("results_returned") == 0),
        "avg_generation_time_ms": _avg_time(generations),
        "avg_search_time_ms": _avg_time(searches),
        "top_restrictions": top_restrictions,
        "dish_type_usage": dict(dish_counter),
        "search_retries": {
            "retried": len(retried),
            "exhausted": len(exhausted),
            "total_attempts": sum(s.get("attempts", 1) for s in searches),
        },
    }
