import threading
import os
import json
from cricket_ticker.config import (
    DEFAULT_SETTINGS, SETTINGS_FILE, BRIGHTNESS_RANGE, MIN_UPDATE_INTERVAL, MAX_UPDATE_INTERVAL
)
from cricket_ticker.models import TickerConfig
from cricket_ticker.utils import save_json_atomically, clamp


def _as_int(value, default):
    try: return int(value)
    except (TypeError, ValueError): return default

def _as_bool(value, default):
    if isinstance(value, bool): return value
    if isinstance(value, str):
        if value.strip().lower() in ('1', 'true', 'yes', 'on'): return True
        if value.strip().lower() in ('0', 'false', 'no', 'off'): return False
    return default

def _as_optional_str(value):
    if value is None: return None
    value = str(value).strip()
    return value or None


class SettingsStore:
    """Typed key/value settings persisted to a JSON file.

    Every getter tolerates a missing or malformed value and falls back to the
    documented default. Brightness and update interval are clamped on write.
    """

    def __init__(self, path=SETTINGS_FILE, autosave=True):
        self.path = path
        self.autosave = autosave
        self.lock = threading.Lock()
        self.values = {}
        self.load()

    # ================= PERSISTENCE =================
    def load(self):
        loaded = {}
        if self.path and os.path.exists(self.path):
            try:
                with open(self.path, 'r') as f:
                    loaded = json.load(f)
                if not isinstance(loaded, dict):
                    print(f"⚠️ Ignoring settings file {self.path}: not an object")
                    loaded = {}
            except Exception as e:
                print(f"⚠️ Error loading settings: {e}")
                loaded = {}
        with self.lock:
            self.values = {k: v for k, v in loaded.items() if k in DEFAULT_SETTINGS}

    def save(self):
        if not self.path: return
        with self.lock:
            export_data = dict(self.values)
        save_json_atomically(self.path, export_data)

    def _put(self, key, value):
        with self.lock:
            self.values[key] = value
        if self.autosave: self.save()

    def _get(self, key):
        with self.lock:
            return self.values.get(key, DEFAULT_SETTINGS[key])

    # ================= FAVORITE TEAMS =================
    def get_favorite_teams(self):
        raw = self._get('favorite_teams')
        if isinstance(raw, str): raw = [raw]
        if not isinstance(raw, (list, tuple, set, frozenset)): return []
        teams = []
        for t in raw:
            name = str(t).strip()
            if name and name not in teams: teams.append(name)
        return teams

    def set_favorite_teams(self, teams):
        if isinstance(teams, str): teams = [teams]
        if not isinstance(teams, (list, tuple, set, frozenset)): teams = []
        unique = []
        for t in teams:
            name = str(t).strip()
            if name and name not in unique: unique.append(name)
        self._put('favorite_teams', unique)

    def add_favorite_team(self, team):
        teams = self.get_favorite_teams()
        if team not in teams:
            teams.append(team)
            self.set_favorite_teams(teams)

    def remove_favorite_team(self, team):
        teams = self.get_favorite_teams()
        if team in teams:
            teams.remove(team)
            self.set_favorite_teams(teams)

    # ================= API =================
    def get_api_key(self):
        env_key = os.getenv('CRICKET_API_KEY')
        if env_key: return env_key
        return _as_optional_str(self._get('api_key'))

    def set_api_key(self, api_key):
        self._put('api_key', _as_optional_str(api_key))

    def get_custom_api_url(self):
        return _as_optional_str(self._get('custom_api_url'))

    def set_custom_api_url(self, url):
        self._put('custom_api_url', _as_optional_str(url))

    # ================= TIMING / DISPLAY =================
    def get_update_interval(self):
        value = _as_int(self._get('update_interval'), DEFAULT_SETTINGS['update_interval'])
        return clamp(value, MIN_UPDATE_INTERVAL, MAX_UPDATE_INTERVAL)

    def set_update_interval(self, seconds):
        value = _as_int(seconds, DEFAULT_SETTINGS['update_interval'])
        self._put('update_interval', clamp(value, MIN_UPDATE_INTERVAL, MAX_UPDATE_INTERVAL))

    def is_animations_enabled(self):
        return _as_bool(self._get('show_animations'), DEFAULT_SETTINGS['show_animations'])

    def set_animations_enabled(self, enabled):
        self._put('show_animations', _as_bool(enabled, DEFAULT_SETTINGS['show_animations']))

    def get_brightness(self):
        value = _as_int(self._get('brightness'), DEFAULT_SETTINGS['brightness'])
        return clamp(value, *BRIGHTNESS_RANGE)

    def set_brightness(self, brightness):
        value = _as_int(brightness, DEFAULT_SETTINGS['brightness'])
        self._put('brightness', clamp(value, *BRIGHTNESS_RANGE))

    def get_scroll_speed(self):
        value = _as_int(self._get('scroll_speed'), DEFAULT_SETTINGS['scroll_speed'])
        return value if value > 0 else DEFAULT_SETTINGS['scroll_speed']

    def set_scroll_speed(self, speed_ms):
        self._put('scroll_speed', _as_int(speed_ms, DEFAULT_SETTINGS['scroll_speed']))

    # ================= BULK =================
    def update(self, data):
        """Applies a partial settings dict (e.g. from POST /api/config) through the typed setters."""
        setters = {
            'favorite_teams': self.set_favorite_teams,
            'api_key': self.set_api_key,
            'custom_api_url': self.set_custom_api_url,
            'update_interval': self.set_update_interval,
            'show_animations': self.set_animations_enabled,
            'brightness': self.set_brightness,
            'scroll_speed': self.set_scroll_speed,
        }
        autosave = self.autosave
        self.autosave = False
        try:
            for k, v in (data or {}).items():
                if k in setters: setters[k](v)
        finally:
            self.autosave = autosave
        if self.autosave: self.save()

    def reset_to_defaults(self):
        with self.lock:
            self.values = {}
        if self.autosave: self.save()

    def snapshot(self):
        return TickerConfig(
            favorite_teams=frozenset(self.get_favorite_teams()),
            api_key=self.get_api_key(),
            custom_api_url=self.get_custom_api_url(),
            update_interval=self.get_update_interval(),
            show_animations=self.is_animations_enabled(),
            brightness=self.get_brightness(),
            scroll_speed=self.get_scroll_speed(),
        )

    def as_dict(self):
        snap = self.snapshot()
        return {
            'favorite_teams': sorted(snap.favorite_teams),
            'api_key_set': bool(snap.api_key),
            'custom_api_url': snap.custom_api_url,
            'update_interval': snap.update_interval,
            'show_animations': snap.show_animations,
            'brightness': snap.brightness,
            'scroll_speed': snap.scroll_speed,
        }
