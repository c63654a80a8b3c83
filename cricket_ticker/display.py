import math
from enum import Enum

from cricket_ticker.config import (
    TEXT_Y, BALL_RADIUS, BALL_BASE_Y, BALL_AMPLITUDE, BALL_PHASE_STEP, BALL_SCALE,
    LIVE_MARKER, STATUS_PLACEHOLDER, MISSING_VALUE, NO_LIVE_MATCHES, NO_FAVORITE_MATCHES,
    WAITING_TEXT, PRESSED_DIM, VIEW_BRIGHTNESS, TICK_INTERVAL
)
from cricket_ticker.frame import GlyphObject, FrameBuilder, create_circle_image
from cricket_ticker.models import TickerConfig


class DisplayMode(Enum):
    SCORE = 'score'
    RUN_RATE = 'run_rate'
    OVERS = 'overs'
    MATCH_STATUS = 'match_status'

    def next(self):
        modes = list(DisplayMode)
        return modes[(modes.index(self) + 1) % len(modes)]


# ================= TEXT FORMATTING =================
def _val(value):
    return MISSING_VALUE if value is None else str(value)

def _overs(match, innings):
    text = match.overs1_text if innings == 1 else match.overs2_text
    if text is not None: return text
    return _val(match.overs1 if innings == 1 else match.overs2)

def format_score_text(match):
    parts = []
    if match.is_live: parts.append(LIVE_MARKER)
    parts.append(f"{_val(match.team1)} {_val(match.runs1)}/{_val(match.wickets1)} ({_overs(match, 1)}) ")
    parts.append(f"vs {_val(match.team2)}")
    if match.runs2 is not None:
        parts.append(f" {match.runs2}/{_val(match.wickets2)} ({_overs(match, 2)})")
    if match.status:
        parts.append(f" - {match.status}")
    return "".join(parts)

def format_run_rate_text(match):
    return f"CRR: {match.current_run_rate:.2f} | RRR: {match.required_run_rate:.2f}"

def format_overs_text(match):
    return f"{_val(match.team1)}: {_overs(match, 1)} | {_val(match.team2)}: {_overs(match, 2)}"

def format_status_text(match):
    return match.status if match.status else STATUS_PLACEHOLDER

MODE_FORMATTERS = {
    DisplayMode.SCORE: format_score_text,
    DisplayMode.RUN_RATE: format_run_rate_text,
    DisplayMode.OVERS: format_overs_text,
    DisplayMode.MATCH_STATUS: format_status_text,
}


class DisplayController:
    """Owns the display state machine and turns it into frames.

    Not thread-safe on its own: a single owner (TickerService's consumer
    thread) calls every method, which is what keeps display state single-writer.
    """

    def __init__(self, renderer=None, config=None):
        self.renderer = renderer
        self.config = config or TickerConfig()

        self.matches = []
        self.mode = DisplayMode.SCORE
        self.match_index = 0
        self.scroll_position = 0
        self.animation_frame = 0

        self.view = 'waiting'
        self.message = WAITING_TEXT
        self.pressed = False
        self.closed = False
        self.last_frame = None
        self.ball_image = create_circle_image(BALL_RADIUS, 255)

    # ================= EVENTS =================
    def apply_config(self, config):
        self.config = config

    def on_matches(self, matches, favorites_configured=None):
        if favorites_configured is None:
            favorites_configured = bool(self.config.favorite_teams)

        self.matches = list(matches)
        if self.match_index >= len(self.matches):
            self.match_index = 0

        if not self.matches:
            self.view = 'no_matches'
            self.message = NO_FAVORITE_MATCHES if favorites_configured else NO_LIVE_MATCHES
        else:
            self.view = 'match'
            self.message = None
        print(f"Updated matches: {len(self.matches)} matches found")
        return self.render()

    def on_error(self, message):
        print(f"Error fetching scores: {message}")
        self.view = 'error'
        self.message = str(message)
        return self.render()

    def cycle_mode(self):
        if self.matches:
            self.mode = self.mode.next()
            print(f"  Mode -> {self.mode.name}")
        # Without matches there is nothing to cycle; just redraw.
        return self.render()

    def next_match(self):
        if self.matches:
            self.match_index = (self.match_index + 1) % len(self.matches)
        return self.render()

    def tick(self):
        self.scroll_position += 1
        self.animation_frame += 1
        return self.render()

    def button_down(self):
        self.pressed = True
        return self.render()

    def button_up(self):
        self.pressed = False
        return self.render()

    def close(self):
        self.closed = True

    # ================= STATE =================
    def current_match(self):
        if self.view != 'match' or not self.matches: return None
        if self.match_index >= len(self.matches): self.match_index = 0
        return self.matches[self.match_index]

    def current_text(self):
        match = self.current_match()
        if match is None:
            return f"! {self.message}" if self.view == 'error' else self.message
        return MODE_FORMATTERS[self.mode](match)

    def ball_offset(self):
        return int(math.sin(self.animation_frame * BALL_PHASE_STEP) * BALL_AMPLITUDE)

    def scroll_offset(self):
        step = max(1, round(TICK_INTERVAL * 1000 / self.config.scroll_speed))
        return self.scroll_position * step

    def _scaled(self, base):
        value = base * self.config.brightness / 255
        if self.pressed: value *= PRESSED_DIM
        return int(round(value))

    # ================= FRAMES =================
    def build_frame(self):
        view_key = self.mode.value if self.view == 'match' else self.view
        builder = FrameBuilder(view=view_key)
        text = self.current_text()
        brightness = self._scaled(VIEW_BRIGHTNESS[view_key])

        if self.view == 'match' and self.mode == DisplayMode.SCORE:
            if self.config.show_animations:
                builder.add_top(GlyphObject(
                    image=self.ball_image, x=2, y=BALL_BASE_Y + self.ball_offset(),
                    brightness=self._scaled(255), scale=BALL_SCALE
                ))
            builder.add_mid(GlyphObject(text=text, x=8, y=TEXT_Y, brightness=brightness, scroll=self.scroll_offset()))
        else:
            builder.add_top(GlyphObject(text=text, x=0, y=TEXT_Y, brightness=brightness, scroll=self.scroll_offset()))
        return builder.build()

    def render(self):
        if self.closed: return None
        frame = self.build_frame()
        self.last_frame = frame
        if self.renderer is not None:
            self.renderer.render(frame)
        return frame

    def as_dict(self):
        match = self.current_match()
        return {
            'view': self.view,
            'mode': self.mode.name,
            'match_index': self.match_index,
            'match_count': len(self.matches),
            'scroll_position': self.scroll_position,
            'animation_frame': self.animation_frame,
            'text': self.current_text(),
            'match': match.to_dict() if match else None,
        }
