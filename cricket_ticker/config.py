import os

# ================= SERVER VERSION TAG =================
SERVER_VERSION = "v1"

# ================= CONFIGURATION & STORAGE =================
SETTINGS_FILE = os.getenv("CRICKET_SETTINGS_FILE", "cricket_settings.json")
LOG_FILE = os.getenv("CRICKET_LOG_FILE", "cricket_ticker.log")

# ================= DATA SOURCES =================
PRIMARY_API_URL = "https://api.cricketdata.org/cpl_2024_fixtures"

# Connect / read timeouts for requests (seconds)
API_TIMEOUT = (10, 10)

HEADERS = {
    "User-Agent": "CricketGlyphToy/1.0",
    "Accept": "application/json",
}

# === CACHE ===
CACHE_TTL_MS = 15000
NO_MATCHES_ERROR = "No matches found"

# === CADENCES ===
TICK_INTERVAL = 0.150          # scroll / animation tick, fixed
MIN_UPDATE_INTERVAL = 10       # seconds
MAX_UPDATE_INTERVAL = 120      # seconds

# === RUN RATE ===
# Required rate assumes a T20 innings regardless of matchType
REQUIRED_RATE_OVERS = 20.0
LIVE_STATUSES = ("live", "in progress")

# ================= DISPLAY =================
MATRIX_SIZE = 25
TEXT_Y = 12
BALL_RADIUS = 5
BALL_BASE_Y = 10
BALL_AMPLITUDE = 3
BALL_PHASE_STEP = 0.3
BALL_SCALE = 80
LIVE_MARKER = "LIVE: "
STATUS_PLACEHOLDER = "Match in progress"
MISSING_VALUE = "-"
NO_LIVE_MATCHES = "No live matches"
NO_FAVORITE_MATCHES = "No matches for your favorite teams"
WAITING_TEXT = "Loading..."
PRESSED_DIM = 0.8

# Per-view object brightness before the configured brightness is applied
VIEW_BRIGHTNESS = {
    'score': 255,
    'run_rate': 240,
    'overs': 240,
    'match_status': 255,
    'error': 200,
    'no_matches': 200,
    'waiting': 200,
}

# ================= DEFAULT SETTINGS =================
DEFAULT_SETTINGS = {
    'favorite_teams': [],
    'api_key': None,
    'custom_api_url': None,
    'update_interval': 30,
    'show_animations': True,
    'brightness': 255,
    'scroll_speed': 100,
}

BRIGHTNESS_RANGE = (0, 255)

# ================= TEAMS =================
TEAM_ABBREVIATIONS = {
    "india": "IND", "australia": "AUS", "england": "ENG", "pakistan": "PAK",
    "south africa": "RSA", "new zealand": "NZ", "sri lanka": "SL", "west indies": "WI",
    "bangladesh": "BAN", "afghanistan": "AFG", "zimbabwe": "ZIM", "ireland": "IRE",
}

POPULAR_TEAMS = [
    "India", "Australia", "England", "Pakistan", "South Africa", "New Zealand",
    "Sri Lanka", "West Indies", "Bangladesh", "Afghanistan", "Zimbabwe", "Ireland",
    "Netherlands"
]

# ================= DEMO DATA (fallback source) =================
DEMO_PAYLOAD = {
    "data": [
        {
            "id": "mock_1", "name": "India vs Australia - T20", "matchType": "T20",
            "status": "In Progress", "venue": "Mumbai",
            "teams": ["India", "Australia"],
            "score": {"team": [
                {"runs": "185", "wickets": "5", "overs": "20.0"},
                {"runs": "142", "wickets": "3", "overs": "15.2"}
            ]}
        },
        {
            "id": "mock_2", "name": "England vs Pakistan - ODI", "matchType": "ODI",
            "status": "In Progress", "venue": "Lord's",
            "teams": ["England", "Pakistan"],
            "score": {"team": [
                {"runs": "298", "wickets": "7", "overs": "50.0"},
                {"runs": "165", "wickets": "4", "overs": "32.3"}
            ]}
        }
    ]
}
