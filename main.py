from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
import os
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from config import (
    ALL,
    ALL_AGES,
    ALL_DEMOGRAPHICS,
    ALL_OCCUPATIONS,
    QUARTERS,
    TARGET_QUARTER,
    get_data_dir,
)
from data_store import DataLoadError, MigrationDataStore
from network_views import build_force_network, causality_network
from queries import (
    demographics_breakdown,
    filter_migration_flows,
    filter_state_quarter_records,
    find_time_series,
    parse_threshold,
    state_summary,
)

# Determine the environment - any Render variable means production
env = os.getenv("ENVIRONMENT", "development")
render_vars = os.getenv("RENDER") or os.getenv("RENDER_SERVICE_NAME") or os.getenv("RENDER_EXTERNAL_HOSTNAME")
is_production = bool(render_vars) or env == "production"

if is_production:
    # Variables come from the hosting environment
    print("Running in PRODUCTION mode")
    origins = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
else:
    print("Running in DEVELOPMENT mode")
    load_dotenv(dotenv_path=".env.development")
    origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

print(f"CORS Origins configured: {origins}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Requests are not accepted until every collection is loaded; a load failure aborts startup.
    data_dir = get_data_dir()
    try:
        app.state.store = MigrationDataStore.load(data_dir)
    except DataLoadError as e:
        print(f"\n❌ Error loading data: {e}")
        print("\n Please run: python generate_data.py\n")
        raise
    print("========================================")
    print(f"✓ Data loaded from {data_dir}")
    print("✓ API endpoints ready")
    print("========================================\n")
    yield


app = FastAPI(lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    print(f"{request.method} {request.url.path} -> {response.status_code}")
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class HealthResponse(BaseModel):
    """Readiness report: whether the snapshot is loaded, with per-collection counts."""

    status: str = Field(..., description="'ok' once data is loaded, 'loading' before")
    ready: bool = Field(..., description="True when all collections and state metadata are loaded")
    data_loaded: Dict[str, int] = Field(default_factory=dict, alias="dataLoaded")


def get_store(request: Request) -> MigrationDataStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Data is not loaded yet")
    return store


@app.get("/")
async def read_root():
    return {"message": "COVID-19 Migration Backend is running"}


@app.get("/api/health", response_model=HealthResponse)
async def health(request: Request):
    store: Optional[MigrationDataStore] = getattr(request.app.state, "store", None)
    if store is None:
        return HealthResponse(status="loading", ready=False, dataLoaded={})
    return HealthResponse(status="ok", ready=True, dataLoaded=store.counts())


@app.get("/api/migration-flows")
async def migration_flows(
    demographic: str = ALL_DEMOGRAPHICS,
    age_group: str = Query(ALL_AGES, alias="ageGroup"),
    occupation: str = ALL_OCCUPATIONS,
    gender: str = ALL,
    min_flow: Optional[str] = Query(None, alias="minFlow"),
    store: MigrationDataStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    return filter_migration_flows(
        store.migration_flows,
        demographic=demographic,
        age_group=age_group,
        occupation=occupation,
        gender=gender,
        min_flow=parse_threshold(min_flow, 0),
    )


@app.get("/api/3d-network")
async def force_network(
    demographic: str = ALL_DEMOGRAPHICS,
    age_group: str = Query(ALL_AGES, alias="ageGroup"),
    occupation: str = ALL_OCCUPATIONS,
    quarter: str = TARGET_QUARTER,
    store: MigrationDataStore = Depends(get_store),
):
    return build_force_network(
        store.migration_flows,
        store.state_data,
        store.states,
        demographic=demographic,
        age_group=age_group,
        occupation=occupation,
        quarter=quarter,
    )


@app.get("/api/causality-network")
async def causality():
    return causality_network()


@app.get("/api/state-summary")
async def get_state_summary(
    demographic: str = ALL_DEMOGRAPHICS,
    age_group: str = Query(ALL_AGES, alias="ageGroup"),
    occupation: str = ALL_OCCUPATIONS,
    store: MigrationDataStore = Depends(get_store),
) -> Dict[str, Dict[str, Any]]:
    return state_summary(store.state_data, store.states, demographic, age_group, occupation)


@app.get("/api/time-series")
async def time_series(
    demographic: str = ALL_DEMOGRAPHICS,
    age_group: str = Query(ALL_AGES, alias="ageGroup"),
    occupation: str = ALL_OCCUPATIONS,
    store: MigrationDataStore = Depends(get_store),
) -> Dict[str, Any]:
    return find_time_series(store.time_series, demographic, age_group, occupation)


@app.get("/api/demographics")
async def demographics(store: MigrationDataStore = Depends(get_store)):
    return demographics_breakdown(store.migration_flows)


@app.get("/api/infodemic")
async def infodemic(state: str = ALL, quarter: str = ALL, store: MigrationDataStore = Depends(get_store)):
    return filter_state_quarter_records(store.infodemic, state, quarter)


@app.get("/api/policies")
async def policies(
    state: str = ALL,
    quarter: str = ALL,
    min_stringency: Optional[str] = Query(None, alias="minStringency"),
    store: MigrationDataStore = Depends(get_store),
):
    return filter_state_quarter_records(
        store.policies,
        state,
        quarter,
        min_field="stringency",
        min_value=parse_threshold(min_stringency, 0),
    )


@app.get("/api/resilience")
async def resilience(state: str = ALL, quarter: str = ALL, store: MigrationDataStore = Depends(get_store)):
    return filter_state_quarter_records(store.resilience, state, quarter)


@app.get("/api/emotions")
async def emotions(state: str = ALL, quarter: str = ALL, store: MigrationDataStore = Depends(get_store)):
    return filter_state_quarter_records(store.emotions, state, quarter)


@app.get("/api/states")
async def states(store: MigrationDataStore = Depends(get_store)):
    return store.states


@app.get("/api/quarters")
async def quarters() -> List[str]:
    return list(QUARTERS)


if __name__ == "__main__":
    import uvicorn

    try:
        port = int(os.getenv("PORT", "8000"))
    except ValueError:
        print(f"Invalid PORT {os.getenv('PORT')!r}, falling back to 8000")
        port = 8000
    uvicorn.run(app, host="0.0.0.0", port=port)
