"""
Synthetic COVID-era migration data generator.

Every collection is a Cartesian expansion over the enumerations in config,
with each value drawn from a bounded range. Only the bounds are contractual.
The seed just makes a run repeatable. Derived fields (net migration, policy
flags, gender splits) are computed from sampled values and never sampled
themselves.
"""

import math
from typing import Any, Dict, List, Optional

import numpy as np

from config import (
    AGE_GROUPS,
    ALL,
    CALM_EMOTIONS,
    DEFAULT_LOCKDOWN_LEVEL,
    DEMOGRAPHICS,
    EMOTION_RANGES,
    EMOTIONS_ARTIFACT,
    FATIGUE_2021_RANGE,
    FATIGUE_RANGES,
    FLOWS_ARTIFACT,
    GENDER_SHARES,
    INFODEMIC_ARTIFACT,
    LOCKDOWN_LEVELS,
    MAJOR_ROUTES,
    MISINFORMATION_THEMES,
    OCCUPATIONS,
    PANDEMIC_PEAK_QUARTERS,
    PEAK_EMOTIONS,
    POLICIES_ARTIFACT,
    POLICY_FLAG_THRESHOLDS,
    QUARTERS,
    RESILIENCE_ARTIFACT,
    RESILIENCE_RANGES,
    STATE_DATA_ARTIFACT,
    STATES,
    TARGET_QUARTER,
    TIME_SERIES_ARTIFACT,
    snapshot_key,
)


def _randint(rng: np.random.Generator, low: int, high: int) -> int:
    """Uniform integer in [low, high], both ends inclusive."""
    return int(rng.integers(low, high, endpoint=True))


def _uniform(rng: np.random.Generator, low: float, high: float) -> float:
    return float(rng.uniform(low, high))


def _choice(rng: np.random.Generator, options: List[str]) -> str:
    return options[_randint(rng, 0, len(options) - 1)]


def is_pandemic_peak(quarter: str) -> bool:
    return quarter in PANDEMIC_PEAK_QUARTERS


def derive_policy_fields(stringency: float) -> Dict[str, Any]:
    """Lockdown level and policy flags implied by a stringency score."""
    lockdown_level = DEFAULT_LOCKDOWN_LEVEL
    for cutoff, level in LOCKDOWN_LEVELS:
        if stringency > cutoff:
            lockdown_level = level
            break

    fields: Dict[str, Any] = {"lockdownLevel": lockdown_level}
    for flag, cutoff in POLICY_FLAG_THRESHOLDS.items():
        fields[flag] = stringency > cutoff
    return fields


def _flow_record(origin: str, destination: str, value: int, demographic: str, age_group: str,
                 occupation: str, gender: str) -> Dict[str, Any]:
    return {
        "from": origin,
        "to": destination,
        "fromLat": STATES[origin]["lat"],
        "fromLon": STATES[origin]["lon"],
        "toLat": STATES[destination]["lat"],
        "toLon": STATES[destination]["lon"],
        "value": value,
        "demographic": demographic,
        "ageGroup": age_group,
        "occupation": occupation,
        "quarter": ALL,
        "gender": gender,
    }


def generate_migration_flows(rng: np.random.Generator) -> List[Dict[str, Any]]:
    """
    Generates flow records for every major route and category combination.

    Each combination yields three records (all, male, female) that share one
    perturbed base. Flows are not quarter-resolved: every record carries the
    aggregate quarter tag.
    """
    flows: List[Dict[str, Any]] = []
    print("Generating migration flows (this may take a minute)...")

    for origin, destination in MAJOR_ROUTES:
        for demographic in DEMOGRAPHICS:
            for age_group in AGE_GROUPS:
                for occupation in OCCUPATIONS:
                    base_flow = _randint(rng, 100, 5000)
                    pandemic_multiplier = _uniform(rng, 1.5, 2.5)
                    scaled = base_flow * pandemic_multiplier

                    flows.append(_flow_record(origin, destination, math.floor(scaled),
                                              demographic, age_group, occupation, ALL))
                    for gender, share in GENDER_SHARES.items():
                        flows.append(_flow_record(origin, destination, math.floor(scaled * share),
                                                  demographic, age_group, occupation, gender))

                    # Three records per combination, so report once per thousand crossed.
                    if len(flows) % 1000 < 3:
                        print(f"  Generated {len(flows)} flows...")

    print(f"✓ Generated {len(flows)} migration flows")
    return flows


def generate_state_data(rng: np.random.Generator, quarter: str = TARGET_QUARTER) -> Dict[str, Dict[str, Any]]:
    """Snapshot per state and category combination, for a single quarter."""
    state_data: Dict[str, Dict[str, Any]] = {}
    print("Generating state data...")

    for state in STATES:
        for demographic in DEMOGRAPHICS:
            for age_group in AGE_GROUPS:
                for occupation in OCCUPATIONS:
                    inflow = _randint(rng, 500, 15000)
                    outflow = _randint(rng, 500, 15000)
                    state_data[snapshot_key(state, quarter, demographic, age_group, occupation)] = {
                        "state": state,
                        "quarter": quarter,
                        "demographic": demographic,
                        "ageGroup": age_group,
                        "occupation": occupation,
                        "inflow": inflow,
                        "outflow": outflow,
                        "netMigration": inflow - outflow,
                        "covidCases": _randint(rng, 1000, 50000),
                        "covidDeaths": _randint(rng, 10, 1000),
                        "infectionRate": _uniform(rng, 0.5, 10.0),
                        "vaccinationRate": _uniform(rng, 60, 90),
                        "hospitalizationRate": _uniform(rng, 1, 8),
                        "policyStringency": _uniform(rng, 20, 80),
                        "avgHouseholdIncome": _randint(rng, 45000, 110000),
                        "unemploymentRate": _uniform(rng, 3, 8),
                        "costOfLivingIndex": _uniform(rng, 85, 145),
                    }

                    if len(state_data) % 1000 == 0:
                        print(f"  Generated {len(state_data)} state records...")

    print(f"✓ Generated {len(state_data)} state data records")
    return state_data


def _time_series_impact(rng: np.random.Generator, quarter: str) -> float:
    if quarter in ("2020-Q2", "2020-Q3"):
        return _uniform(rng, 2, 3.5)
    if quarter.startswith("2020") or quarter.startswith("2021"):
        return _uniform(rng, 1.3, 2.2)
    return _uniform(rng, 0.9, 1.1)


def generate_time_series(rng: np.random.Generator) -> List[Dict[str, Any]]:
    series_list: List[Dict[str, Any]] = []
    print("Generating time series...")

    for demographic in DEMOGRAPHICS:
        for age_group in AGE_GROUPS:
            for occupation in OCCUPATIONS:
                series = {"demographic": demographic, "ageGroup": age_group, "occupation": occupation, "data": []}
                for quarter in QUARTERS:
                    scaled = _randint(rng, 5000, 50000) * _time_series_impact(rng, quarter)
                    series["data"].append({
                        "quarter": quarter,
                        "totalMigration": math.floor(scaled),
                        "inflow": math.floor(scaled * _uniform(rng, 0.4, 0.7)),
                        "outflow": math.floor(scaled * _uniform(rng, 0.3, 0.6)),
                    })
                series_list.append(series)

                if len(series_list) % 100 == 0:
                    print(f"  Generated {len(series_list)} time series...")

    print(f"✓ Generated {len(series_list)} time series")
    return series_list


def generate_infodemic_data(rng: np.random.Generator) -> List[Dict[str, Any]]:
    print("Generating infodemic data...")
    records = [
        {
            "state": state,
            "quarter": quarter,
            "covidCases": _randint(rng, 1000, 100000),
            "misinformationIndex": _uniform(rng, 20, 95),
            "socialMediaActivity": _randint(rng, 10000, 500000),
            "factCheckingRate": _uniform(rng, 10, 60),
            "topMisinfo": _choice(rng, MISINFORMATION_THEMES),
            "sentiment": _uniform(rng, -0.8, 0.3),
        }
        for state in STATES
        for quarter in QUARTERS
    ]
    print(f"✓ Generated {len(records)} infodemic records")
    return records


def generate_policy_data(rng: np.random.Generator) -> List[Dict[str, Any]]:
    print("Generating policy data...")
    policies: List[Dict[str, Any]] = []
    for state in STATES:
        for quarter in QUARTERS:
            stringency = _uniform(rng, 20, 95)
            record = {"state": state, "quarter": quarter, "stringency": stringency}
            record.update(derive_policy_fields(stringency))
            record["duration"] = _randint(rng, 2, 16)
            policies.append(record)
    print(f"✓ Generated {len(policies)} policy records")
    return policies


def _sample_ranges(rng: np.random.Generator, ranges: Dict[str, Any], peak: bool) -> Dict[str, float]:
    values: Dict[str, float] = {}
    for field, (peak_range, normal_range) in ranges.items():
        low, high = peak_range if peak else normal_range
        values[field] = _uniform(rng, low, high)
    return values


def generate_resilience_data(rng: np.random.Generator) -> List[Dict[str, Any]]:
    print("Generating resilience data...")
    resilience: List[Dict[str, Any]] = []
    for state in STATES:
        for quarter in QUARTERS:
            record = {"state": state, "quarter": quarter}
            record.update(_sample_ranges(rng, RESILIENCE_RANGES, is_pandemic_peak(quarter)))
            resilience.append(record)
    print(f"✓ Generated {len(resilience)} resilience records")
    return resilience


def generate_emotional_data(rng: np.random.Generator) -> List[Dict[str, Any]]:
    print("Generating emotional data...")
    emotions: List[Dict[str, Any]] = []
    for state in STATES:
        for quarter in QUARTERS:
            peak = is_pandemic_peak(quarter)
            record = {"state": state, "quarter": quarter}
            record.update(_sample_ranges(rng, EMOTION_RANGES, peak))

            if quarter.startswith("2021"):
                fatigue_range = FATIGUE_2021_RANGE
            else:
                fatigue_range = FATIGUE_RANGES[0] if peak else FATIGUE_RANGES[1]
            record["fatigue"] = _uniform(rng, *fatigue_range)
            record["dominantEmotion"] = _choice(rng, PEAK_EMOTIONS if peak else CALM_EMOTIONS)
            emotions.append(record)
    print(f"✓ Generated {len(emotions)} emotional records")
    return emotions


def generate_all(seed: Optional[int] = None) -> Dict[str, Any]:
    """Builds every collection from one random stream, keyed by artifact name."""
    rng = np.random.default_rng(seed)
    return {
        FLOWS_ARTIFACT: generate_migration_flows(rng),
        STATE_DATA_ARTIFACT: generate_state_data(rng),
        TIME_SERIES_ARTIFACT: generate_time_series(rng),
        INFODEMIC_ARTIFACT: generate_infodemic_data(rng),
        POLICIES_ARTIFACT: generate_policy_data(rng),
        RESILIENCE_ARTIFACT: generate_resilience_data(rng),
        EMOTIONS_ARTIFACT: generate_emotional_data(rng),
    }
