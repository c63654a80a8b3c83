import json
from cricket_ticker.config import REQUIRED_RATE_OVERS, LIVE_STATUSES
from cricket_ticker.models import MatchRecord


def _opt_str(value):
    return "" if value is None else str(value)

def _opt_int(value):
    if value is None or isinstance(value, bool): return None
    try: return int(value)
    except (TypeError, ValueError): pass
    try:
        f = float(value)
        return int(f) if f.is_integer() else None
    except (TypeError, ValueError): return None

def _overs_text(value, parsed):
    """The overs value as the payload wrote it ("20" stays "20"); None when not numeric."""
    if parsed is None: return None
    return value.strip() if isinstance(value, str) else str(value)

def _opt_float(value):
    if value is None or isinstance(value, bool): return None
    try: return float(value)
    except (TypeError, ValueError): return None


class ResponseNormalizer:
    """Turns a raw cricket API payload into a list of MatchRecords.

    Never raises: a payload that is not JSON, or not shaped like
    ``{"data": [...]}``, yields an empty list, and a record that fails to
    parse is skipped while the rest of the batch is kept.
    """

    def parse(self, raw_payload):
        root = self._decode(raw_payload)
        if not isinstance(root, dict): return []

        data = root.get('data')
        if not isinstance(data, list): return []

        matches = []
        for item in data:
            try:
                match = self.parse_match(item)
            except Exception as e:
                print(f"Skipping match record: {e}")
                continue
            matches.append(match)
        return matches

    def _decode(self, raw_payload):
        if isinstance(raw_payload, dict): return raw_payload
        if raw_payload is None: return None
        try:
            if isinstance(raw_payload, (bytes, bytearray)):
                raw_payload = raw_payload.decode('utf-8')
            if not raw_payload.strip(): return None
            return json.loads(raw_payload)
        except (ValueError, UnicodeDecodeError, AttributeError) as e:
            print(f"Unparseable payload: {e}")
            return None

    def parse_match(self, obj):
        if not isinstance(obj, dict):
            raise ValueError(f"expected object, got {type(obj).__name__}")

        match = MatchRecord(
            id=_opt_str(obj.get('id')),
            name=_opt_str(obj.get('name')),
            match_type=_opt_str(obj.get('matchType')),
            status=_opt_str(obj.get('status')),
            venue=_opt_str(obj.get('venue')),
            toss_winner=_opt_str(obj.get('tossWinner')),
            toss_decision=_opt_str(obj.get('tossDecision')),
            match_date=_opt_str(obj.get('dateTimeGMT')),
        )

        teams = obj.get('teams')
        if isinstance(teams, list) and len(teams) >= 2:
            match.team1 = _opt_str(teams[0])
            match.team2 = _opt_str(teams[1])

        score = obj.get('score')
        team_scores = score.get('team') if isinstance(score, dict) else None
        if isinstance(team_scores, list) and len(team_scores) >= 1:
            s1 = team_scores[0] if isinstance(team_scores[0], dict) else {}
            match.runs1 = _opt_int(s1.get('runs'))
            match.wickets1 = _opt_int(s1.get('wickets'))
            match.overs1 = _opt_float(s1.get('overs'))
            match.overs1_text = _overs_text(s1.get('overs'), match.overs1)

            if len(team_scores) >= 2:
                s2 = team_scores[1] if isinstance(team_scores[1], dict) else {}
                match.runs2 = _opt_int(s2.get('runs'))
                match.wickets2 = _opt_int(s2.get('wickets'))
                match.overs2 = _opt_float(s2.get('overs'))
                match.overs2_text = _overs_text(s2.get('overs'), match.overs2)

        match.is_live = match.status.lower() in LIVE_STATUSES
        calculate_run_rates(match)
        return match


def calculate_run_rates(match):
    """Fills current/required run rate in place; values stay 0.0 when not computable."""
    if match.runs1 is not None and match.overs1 is not None and match.overs1 > 0:
        match.current_run_rate = match.runs1 / match.overs1

    if None not in (match.runs1, match.runs2, match.overs1, match.overs2):
        remaining_overs = REQUIRED_RATE_OVERS - match.overs2
        if remaining_overs > 0:
            required_runs = match.runs1 - match.runs2 + 1
            match.required_run_rate = required_runs / remaining_overs
    return match
