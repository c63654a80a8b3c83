import json
import pytest
import requests

from cricket_ticker.config import NO_MATCHES_ERROR
from cricket_ticker.models import FetchResult
from cricket_ticker.normalizer import ResponseNormalizer
from cricket_ticker.state import SettingsStore


SAMPLE_PAYLOAD = {
    "data": [
        {
            "id": "m1", "name": "India vs Australia, 3rd T20I", "matchType": "t20",
            "status": "Live", "venue": "Wankhede",
            "teams": ["India", "Australia"],
            "score": {"team": [
                {"runs": 185, "wickets": 5, "overs": 20.0},
                {"runs": 142, "wickets": 3, "overs": 15.2}
            ]}
        },
        {
            "id": "m2", "name": "England vs Pakistan", "matchType": "odi",
            "status": "Stumps", "venue": "Lord's",
            "teams": ["England", "Pakistan"],
            "score": {"team": [{"runs": "240", "wickets": "6", "overs": "41.3"}]}
        }
    ]
}


class FakeResponse:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text


class FakeSession:
    """Stands in for requests.Session: records calls, replays queued responses."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []
        self.closed = False

    def queue_json(self, payload, status_code=200):
        self.responses.append(FakeResponse(status_code, json.dumps(payload)))

    def get(self, url, headers=None, timeout=None):
        self.calls.append({'url': url, 'headers': headers, 'timeout': timeout})
        if not self.responses:
            raise requests.ConnectionError("no route to host")
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp

    def close(self):
        self.closed = True


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture(autouse=True)
def no_env_api_key(monkeypatch):
    monkeypatch.delenv('CRICKET_API_KEY', raising=False)


@pytest.fixture
def settings():
    return SettingsStore(path=None)


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sample_payload():
    return json.loads(json.dumps(SAMPLE_PAYLOAD))


class RecordingRenderer:
    def __init__(self):
        self.frames = []
        self.off = False

    def render(self, frame):
        self.frames.append(frame)

    def turn_off(self):
        self.off = True


class FakeFetcher:
    """Resolves every fetch synchronously with the next queued result."""

    def __init__(self, results=()):
        self.results = list(results)
        self.fetches = 0
        self.invalidated = 0
        self.shut_down = False

    def fetch_live_matches(self, callback=None):
        self.fetches += 1
        result = self.results.pop(0) if self.results else FetchResult.failure(NO_MATCHES_ERROR)
        if callback is not None: callback(result)

    def invalidate(self):
        self.invalidated += 1

    def shutdown(self):
        self.shut_down = True


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def matches(sample_payload):
    return ResponseNormalizer().parse(sample_payload)
