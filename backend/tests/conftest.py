# backend/tests/conftest.py
import os
import sys
import tempfile
import pytest
from fastapi.testclient import TestClient

# Make /Project/backend importable as top-level
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

# Settings are read at import time: configure before importing the app.
_TMP_DIR = tempfile.mkdtemp(prefix="greenroute-tests-")
os.environ["DATA_DIR"] = _TMP_DIR
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["MAPBOX_TOKEN"] = "test-token"
# no remote emission calls unless a test wires its own tier
os.environ["EMISSION_API_URL"] = ""
os.environ["JWT_SECRET"] = "test-secret"
os.environ.setdefault("LOG_LEVEL", "WARNING")

# Import app only after setting env
from main import app
from core.cache import geocode_cache

MAPBOX = "https://api.mapbox.com"


@pytest.fixture(scope="session")
def client():
    # Use context manager so FastAPI lifespan (startup/shutdown) runs
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def _fresh_geocode_cache():
    geocode_cache.clear()
    yield
    geocode_cache.clear()


def geocode_feature(name: str, lon: float, lat: float) -> dict:
    return {"features": [{"place_name": name, "center": [lon, lat]}]}


def directions_body(distance: float, duration: float, steps=None) -> dict:
    return {
        "code": "Ok",
        "routes": [
            {
                "distance": distance,
                "duration": duration,
                "geometry": {"type": "LineString", "coordinates": [[72.87, 19.07], [73.85, 18.52]]},
                "legs": [{"steps": steps or [{"maneuver": {"instruction": "Head east"}}]}],
            },
            # alternatives are ignored
            {"distance": distance * 2, "duration": duration * 2, "legs": [{"steps": []}]},
        ],
    }
