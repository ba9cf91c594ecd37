import os

from dotenv import load_dotenv

load_dotenv()

# Maps state names to the metadata the map layers need: postal abbreviation,
# geographic center used for arc endpoints, and 2020 census population.
STATES = {
    "Alabama": {"abbr": "AL", "lat": 32.806671, "lon": -86.791130, "population": 5024279},
    "Alaska": {"abbr": "AK", "lat": 61.370716, "lon": -152.404419, "population": 733391},
    "Arizona": {"abbr": "AZ", "lat": 33.729759, "lon": -111.431221, "population": 7151502},
    "Arkansas": {"abbr": "AR", "lat": 34.969704, "lon": -92.373123, "population": 3011524},
    "California": {"abbr": "CA", "lat": 36.116203, "lon": -119.681564, "population": 39538223},
    "Colorado": {"abbr": "CO", "lat": 39.059811, "lon": -105.311104, "population": 5773714},
    "Connecticut": {"abbr": "CT", "lat": 41.597782, "lon": -72.755371, "population": 3605944},
    "Delaware": {"abbr": "DE", "lat": 39.318523, "lon": -75.507141, "population": 989948},
    "Florida": {"abbr": "FL", "lat": 27.766279, "lon": -81.686783, "population": 21538187},
    "Georgia": {"abbr": "GA", "lat": 33.040619, "lon": -83.643074, "population": 10711908},
    "Hawaii": {"abbr": "HI", "lat": 21.094318, "lon": -157.498337, "population": 1455271},
    "Idaho": {"abbr": "ID", "lat": 44.240459, "lon": -114.478828, "population": 1839106},
    "Illinois": {"abbr": "IL", "lat": 40.349457, "lon": -88.986137, "population": 12812508},
    "Indiana": {"abbr": "IN", "lat": 39.849426, "lon": -86.258278, "population": 6785528},
    "Iowa": {"abbr": "IA", "lat": 42.011539, "lon": -93.210526, "population": 3190369},
    "Kansas": {"abbr": "KS", "lat": 38.526600, "lon": -96.726486, "population": 2937880},
    "Kentucky": {"abbr": "KY", "lat": 37.668140, "lon": -84.670067, "population": 4505836},
    "Louisiana": {"abbr": "LA", "lat": 31.169546, "lon": -91.867805, "population": 4657757},
    "Maine": {"abbr": "ME", "lat": 44.693947, "lon": -69.381927, "population": 1362359},
    "Maryland": {"abbr": "MD", "lat": 39.063946, "lon": -76.802101, "population": 6177224},
    "Massachusetts": {"abbr": "MA", "lat": 42.230171, "lon": -71.530106, "population": 7029917},
    "Michigan": {"abbr": "MI", "lat": 43.326618, "lon": -84.536095, "population": 10077331},
    "Minnesota": {"abbr": "MN", "lat": 45.694454, "lon": -93.900192, "population": 5706494},
    "Mississippi": {"abbr": "MS", "lat": 32.741646, "lon": -89.678696, "population": 2961279},
    "Missouri": {"abbr": "MO", "lat": 38.456085, "lon": -92.288368, "population": 6154913},
    "Montana": {"abbr": "MT", "lat": 46.921925, "lon": -110.454353, "population": 1084225},
    "Nebraska": {"abbr": "NE", "lat": 41.125370, "lon": -98.268082, "population": 1961504},
    "Nevada": {"abbr": "NV", "lat": 38.313515, "lon": -117.055374, "population": 3104614},
    "New Hampshire": {"abbr": "NH", "lat": 43.452492, "lon": -71.563896, "population": 1377529},
    "New Jersey": {"abbr": "NJ", "lat": 40.298904, "lon": -74.521011, "population": 9288994},
    "New Mexico": {"abbr": "NM", "lat": 34.840515, "lon": -106.248482, "population": 2117522},
    "New York": {"abbr": "NY", "lat": 42.165726, "lon": -74.948051, "population": 20201249},
    "North Carolina": {"abbr": "NC", "lat": 35.630066, "lon": -79.806419, "population": 10439388},
    "North Dakota": {"abbr": "ND", "lat": 47.528912, "lon": -99.784012, "population": 779094},
    "Ohio": {"abbr": "OH", "lat": 40.388783, "lon": -82.764915, "population": 11799448},
    "Oklahoma": {"abbr": "OK", "lat": 35.565342, "lon": -96.928917, "population": 3959353},
    "Oregon": {"abbr": "OR", "lat": 44.572021, "lon": -122.070938, "population": 4237256},
    "Pennsylvania": {"abbr": "PA", "lat": 40.590752, "lon": -77.209755, "population": 13002700},
    "Rhode Island": {"abbr": "RI", "lat": 41.680893, "lon": -71.511780, "population": 1097379},
    "South Carolina": {"abbr": "SC", "lat": 33.856892, "lon": -80.945007, "population": 5118425},
    "South Dakota": {"abbr": "SD", "lat": 44.299782, "lon": -99.438828, "population": 886667},
    "Tennessee": {"abbr": "TN", "lat": 35.747845, "lon": -86.692345, "population": 6910840},
    "Texas": {"abbr": "TX", "lat": 31.054487, "lon": -97.563461, "population": 29145505},
    "Utah": {"abbr": "UT", "lat": 40.150032, "lon": -111.862434, "population": 3271616},
    "Vermont": {"abbr": "VT", "lat": 44.045876, "lon": -72.710686, "population": 643077},
    "Virginia": {"abbr": "VA", "lat": 37.769337, "lon": -78.169968, "population": 8631393},
    "Washington": {"abbr": "WA", "lat": 47.400902, "lon": -121.490494, "population": 7705281},
    "West Virginia": {"abbr": "WV", "lat": 38.491226, "lon": -80.954453, "population": 1793716},
    "Wisconsin": {"abbr": "WI", "lat": 44.268543, "lon": -89.616508, "population": 5893718},
    "Wyoming": {"abbr": "WY", "lat": 42.755966, "lon": -107.302490, "population": 576851},
}

# --- Wildcard filter values ---
# A filter set to one of these imposes no constraint on its field.
ALL_DEMOGRAPHICS = "All Demographics"
ALL_AGES = "All Ages"
ALL_OCCUPATIONS = "All Occupations"
ALL = "all"  # gender, state and quarter wildcard; also the only flow quarter tag

# --- Categorical dimensions ---
# The first entry of each list is the aggregate category, generated alongside the specific ones.
DEMOGRAPHICS = [ALL_DEMOGRAPHICS, "Asian American", "Hispanic/Latino", "African American", "White", "Native American"]
AGE_GROUPS = [ALL_AGES, "18-24", "25-34", "35-44", "45-54", "55-64", "65+"]
OCCUPATIONS = [
    ALL_OCCUPATIONS, "Remote-work eligible", "Healthcare workers", "Construction workers",
    "Service industry", "Tech workers", "Education",
]

# Share of each flow attributed to a gender; "all" carries the full value.
GENDER_SHARES = {"male": 0.52, "female": 0.48}
GENDERS = [ALL] + list(GENDER_SHARES.keys())

# Canonical chronological order. Time series entries follow this list exactly.
QUARTERS = [
    "2019-Q1", "2019-Q2", "2019-Q3", "2019-Q4",
    "2020-Q1", "2020-Q2", "2020-Q3", "2020-Q4",
    "2021-Q1", "2021-Q2", "2021-Q3", "2021-Q4",
    "2022-Q1", "2022-Q2", "2022-Q3", "2022-Q4",
    "2023-Q1", "2023-Q2", "2023-Q3", "2023-Q4",
]
TARGET_QUARTER = QUARTERS[-1]  # state snapshots exist only for this quarter

PANDEMIC_PEAK_QUARTERS = {"2020-Q2", "2020-Q3", "2021-Q1"}

# Directed (origin, destination) pairs that get flow records.
MAJOR_ROUTES = [
    ("California", "Texas"), ("California", "Washington"), ("California", "Oregon"), ("California", "Nevada"),
    ("New York", "Florida"), ("New York", "Texas"), ("New York", "California"), ("New York", "North Carolina"),
    ("Illinois", "Texas"), ("Illinois", "Florida"), ("Illinois", "Arizona"), ("Illinois", "California"),
    ("Texas", "California"), ("Texas", "Florida"), ("Texas", "Colorado"), ("Texas", "Arizona"),
    ("Florida", "Georgia"), ("Florida", "North Carolina"), ("Florida", "Texas"), ("Florida", "Tennessee"),
    ("Massachusetts", "California"), ("Massachusetts", "Florida"), ("Massachusetts", "New Hampshire"),
    ("Pennsylvania", "Florida"), ("Pennsylvania", "North Carolina"), ("Pennsylvania", "Texas"),
    ("Washington", "Oregon"), ("Washington", "Texas"), ("Washington", "California"),
    ("Georgia", "Florida"), ("Georgia", "Texas"), ("Georgia", "North Carolina"),
    ("Ohio", "Florida"), ("Ohio", "Texas"), ("Ohio", "North Carolina"),
    ("Michigan", "Florida"), ("Michigan", "Texas"), ("Michigan", "Arizona"),
    ("Virginia", "North Carolina"), ("Virginia", "Florida"), ("Virginia", "Texas"),
    ("Arizona", "California"), ("Arizona", "Texas"), ("Arizona", "Colorado"),
    ("Colorado", "California"), ("Colorado", "Texas"), ("Colorado", "Florida"),
]

# Policy flags switch on when stringency is strictly above the cutoff.
POLICY_FLAG_THRESHOLDS = {
    "maskMandate": 50,
    "businessRestrictions": 60,
    "travelRestrictions": 55,
    "gatheringLimits": 45,
    "schoolClosure": 70,
}
# Checked top-down; the first cutoff exceeded wins, otherwise "minimal".
LOCKDOWN_LEVELS = [(70, "strict"), (40, "moderate")]
DEFAULT_LOCKDOWN_LEVEL = "minimal"

# Sampling ranges for the resilience and emotion indices: (peak range, normal range).
RESILIENCE_RANGES = {
    "economicRecovery": ((30, 60), (70, 100)),
    "mobilityIndex": ((20, 50), (75, 105)),
    "airQuality": ((85, 100), (60, 85)),
    "mentalHealthIndex": ((40, 65), (60, 85)),
    "employmentRate": ((75, 88), (92, 97)),
    "consumerSpending": ((50, 75), (85, 110)),
}
EMOTION_RANGES = {
    "fear": ((60, 95), (20, 45)),
    "anger": ((50, 85), (25, 50)),
    "sadness": ((55, 80), (30, 50)),
    "hope": ((30, 55), (60, 85)),
    "anxiety": ((65, 90), (35, 60)),
}
# Fatigue climbs through 2021 regardless of the peak classification.
FATIGUE_2021_RANGE = (70, 95)
FATIGUE_RANGES = ((50, 70), (30, 50))
PEAK_EMOTIONS = ["fear", "anxiety", "anger"]
CALM_EMOTIONS = ["hope", "fatigue"]

MISINFORMATION_THEMES = ["vaccine myths", "lockdown conspiracy", "mask ineffectiveness"]

# Key under which a state snapshot is stored and looked up.
def snapshot_key(state: str, quarter: str, demographic: str, age_group: str, occupation: str) -> str:
    return f"{state}-{quarter}-{demographic}-{age_group}-{occupation}"


# --- Artifact names (file stem per collection) ---
FLOWS_ARTIFACT = "migrationFlows"
STATE_DATA_ARTIFACT = "stateData"
TIME_SERIES_ARTIFACT = "timeSeries"
INFODEMIC_ARTIFACT = "infodemic"
POLICIES_ARTIFACT = "policies"
RESILIENCE_ARTIFACT = "resilience"
EMOTIONS_ARTIFACT = "emotions"
STATES_ARTIFACT = "states"

# --- Size limits ---
JSONL_THRESHOLD = 10000  # list collections above this size are written line-delimited
FLOW_RESULT_LIMIT = 100
CATEGORY_RESULT_LIMIT = 1000
BREAKDOWN_SAMPLE_SIZE = 10000  # demographics breakdown only sums this prefix of the flows
NETWORK_EDGE_LIMIT = 150
NETWORK_EDGE_MIN_VALUE = 1000

# --- Runtime settings ---
DEFAULT_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")


def get_data_dir() -> str:
    """Directory holding generated artifacts; read at call time so tests can override it."""
    return os.getenv("MIGRATION_DATA_DIR", DEFAULT_DATA_DIR)
