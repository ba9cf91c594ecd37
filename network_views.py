"""Graph payloads for the 3D gravity view and the causality diagram."""

from typing import Any, Dict, List

from config import (
    ALL_AGES,
    ALL_DEMOGRAPHICS,
    ALL_OCCUPATIONS,
    NETWORK_EDGE_LIMIT,
    NETWORK_EDGE_MIN_VALUE,
    TARGET_QUARTER,
    snapshot_key,
)
from queries import apply_filters, category_conditions

# Node defaults when a state has no snapshot for the requested combination.
DEFAULT_INFECTION_RATE = 50
DEFAULT_EMPLOYMENT_RATE = 60
DEFAULT_POLICY_STRINGENCY = 100

# Static catalogue drawn by the causality diagram: pandemic events, the
# migration surges they are linked to, and the lag (in quarters) between them.
CAUSALITY_EVENTS = [
    {"id": "event1", "type": "covid", "label": "First Wave Peak", "quarter": "2020-Q2", "severity": 8},
    {"id": "event2", "type": "covid", "label": "Lockdown Orders", "quarter": "2020-Q2", "severity": 9},
    {"id": "event3", "type": "policy", "label": "Mask Mandates", "quarter": "2020-Q3", "severity": 6},
    {"id": "event4", "type": "covid", "label": "Delta Variant", "quarter": "2021-Q3", "severity": 7},
    {"id": "event5", "type": "policy", "label": "Vaccine Mandates", "quarter": "2021-Q4", "severity": 8},
    {"id": "event6", "type": "covid", "label": "Omicron Surge", "quarter": "2022-Q1", "severity": 6},
    {"id": "event7", "type": "policy", "label": "Restrictions Lifted", "quarter": "2022-Q2", "severity": 5},
]

MIGRATION_SURGES = [
    {"id": "surge1", "state": "Texas", "quarter": "2020-Q3", "magnitude": 45000, "direction": "inflow"},
    {"id": "surge2", "state": "Florida", "quarter": "2020-Q4", "magnitude": 52000, "direction": "inflow"},
    {"id": "surge3", "state": "California", "quarter": "2020-Q3", "magnitude": 38000, "direction": "outflow"},
    {"id": "surge4", "state": "New York", "quarter": "2020-Q4", "magnitude": 41000, "direction": "outflow"},
    {"id": "surge5", "state": "Colorado", "quarter": "2021-Q2", "magnitude": 28000, "direction": "inflow"},
    {"id": "surge6", "state": "Arizona", "quarter": "2021-Q4", "magnitude": 32000, "direction": "inflow"},
    {"id": "surge7", "state": "Illinois", "quarter": "2022-Q1", "magnitude": 25000, "direction": "outflow"},
]

CAUSALITY_LINKS = [
    {"source": "event1", "target": "surge3", "lag": 1, "strength": 0.8},
    {"source": "event2", "target": "surge3", "lag": 1, "strength": 0.9},
    {"source": "event2", "target": "surge4", "lag": 2, "strength": 0.85},
    {"source": "event1", "target": "surge1", "lag": 1, "strength": 0.7},
    {"source": "event3", "target": "surge2", "lag": 1, "strength": 0.75},
    {"source": "event4", "target": "surge5", "lag": 3, "strength": 0.65},
    {"source": "event5", "target": "surge6", "lag": 0, "strength": 0.8},
    {"source": "event6", "target": "surge7", "lag": 0, "strength": 0.7},
    {"source": "event7", "target": "surge1", "lag": 4, "strength": 0.6},
]


def _force_node(state_name: str, meta: Dict[str, Any], snapshot: Dict[str, Any]) -> Dict[str, Any]:
    infection_rate = snapshot.get("infectionRate", DEFAULT_INFECTION_RATE)
    if snapshot.get("unemploymentRate") is not None:
        employment_rate = 100 - snapshot["unemploymentRate"]
    else:
        employment_rate = DEFAULT_EMPLOYMENT_RATE
    policy_stringency = snapshot.get("policyStringency", DEFAULT_POLICY_STRINGENCY)

    return {
        "id": state_name,
        "abbr": meta.get("abbr"),
        "lat": meta.get("lat"),
        "lon": meta.get("lon"),
        "population": meta.get("population"),
        "netMigration": snapshot.get("netMigration", 0),
        "infectionRate": infection_rate,
        "employmentRate": employment_rate,
        "policyStringency": policy_stringency,
        "covidForce": infection_rate / 100,  # repulsion
        "economicForce": employment_rate / 100,  # attraction
        "policyForce": policy_stringency / 200,  # repulsion
    }


def build_force_network(
    flows: List[Dict[str, Any]],
    state_data: Dict[str, Dict[str, Any]],
    states: Dict[str, Dict[str, Any]],
    demographic: str = ALL_DEMOGRAPHICS,
    age_group: str = ALL_AGES,
    occupation: str = ALL_OCCUPATIONS,
    quarter: str = TARGET_QUARTER,
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Nodes and edges for the gravity model view.

    Every state becomes a node. A state with no snapshot falls back to neutral
    force values instead of being dropped. Edges are the first matching flows above NETWORK_EDGE_MIN_VALUE,
    in collection order.
    """
    nodes = [
        _force_node(state_name, meta, state_data.get(snapshot_key(state_name, quarter, demographic, age_group, occupation)) or {})
        for state_name, meta in states.items()
    ]

    matching = apply_filters(flows, category_conditions(demographic, age_group, occupation))
    edges = [
        {"source": flow["from"], "target": flow["to"], "value": flow["value"], "demographic": flow["demographic"]}
        for flow in matching
        if flow.get("value", 0) > NETWORK_EDGE_MIN_VALUE
    ][:NETWORK_EDGE_LIMIT]

    return {"nodes": nodes, "edges": edges}


def causality_network() -> Dict[str, List[Dict[str, Any]]]:
    return {
        "events": [dict(event) for event in CAUSALITY_EVENTS],
        "migrationSurges": [dict(surge) for surge in MIGRATION_SURGES],
        "links": [dict(link) for link in CAUSALITY_LINKS],
    }
