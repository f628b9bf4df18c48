"""
Shared pytest fixtures for the Eagles Events quote service test suite.
"""
import os
import sys
import base64
import pytest

_PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)


# ── Temp data directory (per-test isolation) ──────────────────────────────────

@pytest.fixture(autouse=True)
def temp_data_dir(tmp_path, monkeypatch):
    """Redirect DATA_DIR to an isolated tmp directory; rate limiting off."""
    data = str(tmp_path / "data")
    os.makedirs(data, exist_ok=True)
    from eagles.core import paths
    monkeypatch.setattr(paths, "DATA_DIR", data)
    monkeypatch.setenv("DISABLE_RATE_LIMIT", "true")
    monkeypatch.setenv("ADMIN_USER", "admin")
    monkeypatch.setenv("ADMIN_PASS", "changeme")
    return data


# ── Flask test client ─────────────────────────────────────────────────────────

def _basic_auth_header(user="admin", pw="changeme"):
    creds = base64.b64encode(f"{user}:{pw}".encode()).decode()
    return {"Authorization": f"Basic {creds}"}


class AuthenticatedClient:
    """Wraps Flask test client to add Basic Auth headers to every request."""
    def __init__(self, client, headers):
        self._client = client
        self._headers = headers

    def get(self, *args, **kwargs):
        kwargs.setdefault("headers", {}).update(self._headers)
        return self._client.get(*args, **kwargs)

    def post(self, *args, **kwargs):
        kwargs.setdefault("headers", {}).update(self._headers)
        return self._client.post(*args, **kwargs)


@pytest.fixture
def app(temp_data_dir):
    from app import create_app
    _app = create_app(configure_logging=False)
    _app.config["TESTING"] = True
    return _app


@pytest.fixture
def client(app):
    """Authenticated Flask test client (HTTP Basic Auth on every request)."""
    with app.test_client() as c:
        yield AuthenticatedClient(c, _basic_auth_header())


@pytest.fixture
def anon_client(app):
    """Unauthenticated test client."""
    with app.test_client() as c:
        yield c


# ── Sample data factories ─────────────────────────────────────────────────────

@pytest.fixture
def sample_items():
    return [
        {"name": "Stretch Tent 10x15m", "quantity": 1, "price": 3500},
        {"name": "Tiffany Chair", "quantity": "80", "price": "25.5"},
        {"name": "Round Table (10 seater)", "quantity": 8, "price": 120},
    ]


@pytest.fixture
def sample_quote(sample_items):
    """Full quote record as stored by the booking form."""
    return {
        "_id": "6650c0a1f1e2d3c4b5a69788",
        "reference": "EE-2026-0142",
        "eventDate": "2026-03-14T00:00:00.000Z",
        "customerName": "Thandi Mokoena",
        "phone": "071 234 5678",
        "company": "Mokoena Family",
        "location": "Protea Glen, Soweto",
        "email": "thandi@example.co.za",
        "eventType": "wedding",
        "services": ["Tents", "Chairs", "Tables"],
        "guestCount": 80,
        "items": sample_items,
        "totalAmount": 6500,
        "paymentMethod": "bank_transfer",
        "paymentStatus": "pending",
        "notes": "",
    }


@pytest.fixture
def seed_quote(sample_quote):
    """Store sample_quote, return its id."""
    from eagles.core import store
    return store.save_quote(sample_quote)["_id"]
