import math
from typing import Any, Dict, List, Optional, Tuple

from config import (
    ALL,
    ALL_AGES,
    ALL_DEMOGRAPHICS,
    ALL_OCCUPATIONS,
    BREAKDOWN_SAMPLE_SIZE,
    CATEGORY_RESULT_LIMIT,
    FLOW_RESULT_LIMIT,
    GENDER_SHARES,
    TARGET_QUARTER,
    snapshot_key,
)


def _safe_float(value: Any) -> Optional[float]:
    try:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str) and value.strip():
            return float(value.replace(",", ""))
    except (TypeError, ValueError):
        return None
    return None


def parse_threshold(raw: Any, default: float = 0.0) -> float:
    """Numeric query threshold; missing or malformed input falls back to the default."""
    value = _safe_float(raw)
    if value is None or not math.isfinite(value):
        return default
    return value


def category_conditions(demographic: str, age_group: str, occupation: str) -> List[Tuple[str, str, str]]:
    return [
        ("demographic", demographic, ALL_DEMOGRAPHICS),
        ("ageGroup", age_group, ALL_AGES),
        ("occupation", occupation, ALL_OCCUPATIONS),
    ]


def _row_matches(row: Dict[str, Any], conditions: List[Tuple[str, str, str]]) -> bool:
    """Equality match on each (field, requested value, wildcard) condition."""
    for field, requested, wildcard in conditions:
        if requested == wildcard:
            continue
        if row.get(field) != requested:
            return False
    return True


def apply_filters(rows: List[Dict[str, Any]], conditions: List[Tuple[str, str, str]]) -> List[Dict[str, Any]]:
    return [row for row in rows if _row_matches(row, conditions)]


def _apply_sort(rows: List[Dict[str, Any]], field: str, descending: bool = True) -> List[Dict[str, Any]]:
    def sort_key(row: Dict[str, Any]) -> float:
        numeric_value = _safe_float(row.get(field))
        return numeric_value if numeric_value is not None else 0.0

    return sorted(rows, key=sort_key, reverse=descending)


def filter_migration_flows(
    flows: List[Dict[str, Any]],
    demographic: str = ALL_DEMOGRAPHICS,
    age_group: str = ALL_AGES,
    occupation: str = ALL_OCCUPATIONS,
    gender: str = ALL,
    min_flow: float = 0,
    limit: int = FLOW_RESULT_LIMIT,
) -> List[Dict[str, Any]]:
    """Largest flows matching the category filters, at most `limit` of them."""

    conditions = category_conditions(demographic, age_group, occupation)
    conditions.append(("gender", gender, ALL))

    filtered = [
        flow for flow in apply_filters(flows, conditions)
        if (_safe_float(flow.get("value")) or 0.0) >= min_flow
    ]
    return _apply_sort(filtered, "value")[:limit]


def filter_state_quarter_records(
    records: List[Dict[str, Any]],
    state: str = ALL,
    quarter: str = ALL,
    min_field: Optional[str] = None,
    min_value: float = 0,
    limit: int = CATEGORY_RESULT_LIMIT,
) -> List[Dict[str, Any]]:
    """
    Filters infodemic, policy, resilience or emotion records by state and quarter.

    Results keep generation order. When min_field is given, records whose value
    for that field is below min_value are dropped.
    """
    filtered = apply_filters(records, [("state", state, ALL), ("quarter", quarter, ALL)])
    if min_field:
        filtered = [
            record for record in filtered
            if (_safe_float(record.get(min_field)) or 0.0) >= min_value
        ]
    return filtered[:limit]


def state_summary(
    state_data: Dict[str, Dict[str, Any]],
    states: Dict[str, Dict[str, Any]],
    demographic: str = ALL_DEMOGRAPHICS,
    age_group: str = ALL_AGES,
    occupation: str = ALL_OCCUPATIONS,
    quarter: str = TARGET_QUARTER,
) -> Dict[str, Dict[str, Any]]:
    """
    Snapshot per state merged with its map metadata.

    States without a snapshot for the combination are left out, so a missing
    state means no data rather than zero migration.
    """
    summary: Dict[str, Dict[str, Any]] = {}
    for state_name, meta in states.items():
        snapshot = state_data.get(snapshot_key(state_name, quarter, demographic, age_group, occupation))
        if not snapshot:
            continue
        summary[state_name] = {
            **snapshot,
            "state": state_name,
            "abbr": meta.get("abbr"),
            "lat": meta.get("lat"),
            "lon": meta.get("lon"),
            "population": meta.get("population"),
        }
    return summary


def find_time_series(
    series_list: List[Dict[str, Any]],
    demographic: str = ALL_DEMOGRAPHICS,
    age_group: str = ALL_AGES,
    occupation: str = ALL_OCCUPATIONS,
) -> Dict[str, Any]:
    for series in series_list:
        if (
            series.get("demographic") == demographic
            and series.get("ageGroup") == age_group
            and series.get("occupation") == occupation
        ):
            return series
    return {"demographic": demographic, "ageGroup": age_group, "occupation": occupation, "data": []}


def demographics_breakdown(flows: List[Dict[str, Any]], sample_size: int = BREAKDOWN_SAMPLE_SIZE) -> Dict[str, Dict[str, float]]:
    """
    Summed flow value by demographic, age group, occupation and gender.

    Only the first `sample_size` flows are summed. This is an approximation
    that keeps the request cheap. Summing the whole collection gives a
    different answer.
    """
    breakdown: Dict[str, Dict[str, float]] = {
        "byDemographic": {},
        "byAge": {},
        "byOccupation": {},
        "byGender": {gender: 0 for gender in GENDER_SHARES},
    }

    for flow in flows[:sample_size]:
        value = flow.get("value", 0)
        for bucket, field in (("byDemographic", "demographic"), ("byAge", "ageGroup"), ("byOccupation", "occupation")):
            key = flow.get(field)
            breakdown[bucket][key] = breakdown[bucket].get(key, 0) + value

        gender = flow.get("gender")
        if gender in breakdown["byGender"]:
            breakdown["byGender"][gender] += value

    return breakdown
