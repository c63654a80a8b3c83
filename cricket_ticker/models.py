"""
Data models shared by the fetch, filter and display layers.

`MatchRecord` mirrors one entry of the cricket API ``data`` array. Numeric
score fields are ``None`` when the payload does not carry them, so "no score
yet" stays distinguishable from a score of zero.

`TickerConfig` is a read-only snapshot of the persisted settings taken once
per fetch/render cycle.
"""

from dataclasses import dataclass, field

from cricket_ticker.config import TEAM_ABBREVIATIONS, DEFAULT_SETTINGS


@dataclass
class MatchRecord:
    id: str = ""
    name: str = ""
    match_type: str = ""
    venue: str = ""
    status: str = ""

    team1: str = None
    team2: str = None

    runs1: int = None
    wickets1: int = None
    overs1: float = None
    runs2: int = None
    wickets2: int = None
    overs2: float = None
    overs1_text: str = None
    overs2_text: str = None

    is_live: bool = False
    current_run_rate: float = 0.0
    required_run_rate: float = 0.0

    toss_winner: str = ""
    toss_decision: str = ""
    match_date: str = ""

    def is_complete(self):
        return (self.team1 is not None and self.team2 is not None and
                self.runs1 is not None and self.overs1 is not None)

    def short_name(self):
        if self.team1 is not None and self.team2 is not None:
            return f"{team_abbreviation(self.team1)} vs {team_abbreviation(self.team2)}"
        return self.name if self.name else "Unknown Match"

    def to_dict(self):
        return {
            'id': self.id, 'name': self.name, 'matchType': self.match_type,
            'venue': self.venue, 'status': self.status, 'short_name': self.short_name(),
            'team1': self.team1, 'team2': self.team2,
            'score1': {'runs': self.runs1, 'wickets': self.wickets1, 'overs': self.overs1},
            'score2': {'runs': self.runs2, 'wickets': self.wickets2, 'overs': self.overs2},
            'is_live': self.is_live,
            'current_run_rate': round(self.current_run_rate, 2),
            'required_run_rate': round(self.required_run_rate, 2),
        }


def team_abbreviation(team_name):
    """e.g. "India" -> "IND"; unknown teams use their first three letters."""
    if not team_name: return "???"
    return TEAM_ABBREVIATIONS.get(team_name.lower(), team_name[:3].upper())


@dataclass(frozen=True)
class TickerConfig:
    favorite_teams: frozenset = field(default_factory=frozenset)
    api_key: str = DEFAULT_SETTINGS['api_key']
    custom_api_url: str = DEFAULT_SETTINGS['custom_api_url']
    update_interval: int = DEFAULT_SETTINGS['update_interval']
    show_animations: bool = DEFAULT_SETTINGS['show_animations']
    brightness: int = DEFAULT_SETTINGS['brightness']
    scroll_speed: int = DEFAULT_SETTINGS['scroll_speed']


@dataclass(frozen=True)
class CacheEntry:
    matches: tuple
    timestamp: float

    def is_valid(self, now, ttl_ms):
        return bool(self.matches) and (now - self.timestamp) * 1000 < ttl_ms


@dataclass(frozen=True)
class FetchResult:
    """Exactly one of `matches` (ok=True) or `error` (ok=False) is meaningful."""
    ok: bool
    matches: tuple = ()
    error: str = None
    from_cache: bool = False

    @classmethod
    def success(cls, matches, from_cache=False):
        return cls(ok=True, matches=tuple(matches), from_cache=from_cache)

    @classmethod
    def failure(cls, error):
        return cls(ok=False, error=str(error))
