import pytest

from cricket_ticker.config import NO_LIVE_MATCHES, NO_FAVORITE_MATCHES, WAITING_TEXT, BALL_BASE_Y, BALL_AMPLITUDE
from cricket_ticker.display import (
    DisplayController, DisplayMode, format_score_text, format_run_rate_text,
    format_overs_text, format_status_text
)
from cricket_ticker.models import MatchRecord, TickerConfig


@pytest.fixture
def controller(renderer):
    return DisplayController(renderer)


def test_starts_waiting(controller):
    assert controller.view == 'waiting'
    assert controller.current_text() == WAITING_TEXT
    assert controller.mode == DisplayMode.SCORE


def test_mode_cycles_and_wraps(controller, matches):
    controller.on_matches(matches)
    seen = []
    for _ in range(5):
        controller.cycle_mode()
        seen.append(controller.mode)
    assert seen == [DisplayMode.RUN_RATE, DisplayMode.OVERS, DisplayMode.MATCH_STATUS,
                    DisplayMode.SCORE, DisplayMode.RUN_RATE]


def test_cycle_without_matches_keeps_mode(controller, renderer):
    controller.on_matches([])
    controller.cycle_mode()
    assert controller.mode == DisplayMode.SCORE
    assert renderer.frames[-1].text == NO_LIVE_MATCHES


def test_index_resets_when_list_shrinks(controller, matches):
    controller.on_matches(matches + [MatchRecord(id="x", team1="A", team2="B")])
    controller.next_match()
    controller.next_match()
    assert controller.match_index == 2
    controller.on_matches(matches)
    assert controller.match_index == 0
    assert controller.current_match().id == "m1"


def test_next_match_wraps(controller, matches):
    controller.on_matches(matches)
    controller.next_match()
    assert controller.current_match().id == "m2"
    controller.next_match()
    assert controller.current_match().id == "m1"


def test_no_matches_message_depends_on_favorites(controller):
    controller.on_matches([], favorites_configured=False)
    assert controller.current_text() == NO_LIVE_MATCHES
    controller.on_matches([], favorites_configured=True)
    assert controller.current_text() == NO_FAVORITE_MATCHES


def test_no_matches_message_defaults_to_config(renderer):
    c = DisplayController(renderer, TickerConfig(favorite_teams=frozenset({"India"})))
    c.on_matches([])
    assert c.current_text() == NO_FAVORITE_MATCHES


def test_error_view(controller, renderer, matches):
    controller.on_matches(matches)
    controller.on_error("No matches found")
    assert controller.view == 'error'
    assert renderer.frames[-1].text == "! No matches found"
    assert renderer.frames[-1].view == 'error'
    controller.on_matches(matches)
    assert controller.view == 'match'


def test_score_text(matches):
    assert format_score_text(matches[0]) == "LIVE: India 185/5 (20.0) vs Australia 142/3 (15.2) - Live"
    assert format_score_text(matches[1]) == "England 240/6 (41.3) vs Pakistan - Stumps"


def test_score_text_missing_values():
    m = MatchRecord(team1="A", team2="B")
    assert format_score_text(m) == "A -/- (-) vs B"


def test_run_rate_text(matches):
    assert format_run_rate_text(matches[0]) == "CRR: 9.25 | RRR: 9.17"
    assert format_run_rate_text(matches[1]) == "CRR: 5.81 | RRR: 0.00"


def test_overs_and_status_text(matches):
    assert format_overs_text(matches[0]) == "India: 20.0 | Australia: 15.2"
    assert format_overs_text(matches[1]) == "England: 41.3 | Pakistan: -"
    assert format_status_text(matches[1]) == "Stumps"
    assert format_status_text(MatchRecord()) == "Match in progress"


def test_each_mode_renders_its_text(controller, renderer, matches):
    controller.on_matches(matches)
    texts = []
    for _ in DisplayMode:
        texts.append(renderer.frames[-1].text)
        controller.cycle_mode()
    assert texts == [
        "LIVE: India 185/5 (20.0) vs Australia 142/3 (15.2) - Live",
        "CRR: 9.25 | RRR: 9.17",
        "India: 20.0 | Australia: 15.2",
        "Live",
    ]


def test_tick_advances_counters(controller, matches):
    controller.on_matches(matches)
    for _ in range(3):
        controller.tick()
    assert controller.scroll_position == 3
    assert controller.animation_frame == 3


def test_scroll_offset_follows_scroll_speed(renderer):
    c = DisplayController(renderer, TickerConfig(scroll_speed=50))
    for _ in range(4):
        c.tick()
    assert c.scroll_offset() == 12
    c.apply_config(TickerConfig(scroll_speed=1000))
    assert c.scroll_offset() == 4


def test_ball_stays_in_band(controller, renderer, matches):
    controller.on_matches(matches)
    for _ in range(40):
        controller.tick()
        assert -BALL_AMPLITUDE <= controller.ball_offset() <= BALL_AMPLITUDE
        ball = renderer.frames[-1].top[0]
        assert ball.image is not None
        assert BALL_BASE_Y - BALL_AMPLITUDE <= ball.y <= BALL_BASE_Y + BALL_AMPLITUDE


def test_no_ball_when_animations_disabled(renderer, matches):
    c = DisplayController(renderer, TickerConfig(show_animations=False))
    c.on_matches(matches)
    frame = renderer.frames[-1]
    assert all(o.image is None for o in frame.objects())
    assert frame.text.startswith("LIVE: ")


def test_ball_only_in_score_mode(controller, renderer, matches):
    controller.on_matches(matches)
    controller.cycle_mode()
    assert all(o.image is None for o in renderer.frames[-1].objects())


def test_brightness_scales_objects(renderer, matches):
    c = DisplayController(renderer, TickerConfig(brightness=128))
    c.on_matches(matches)
    text_obj = renderer.frames[-1].mid[0]
    assert text_obj.brightness == 128
    c.button_down()
    assert renderer.frames[-1].mid[0].brightness == 102
    c.button_up()
    assert renderer.frames[-1].mid[0].brightness == 128


def test_zero_brightness_is_dark(renderer, matches):
    c = DisplayController(renderer, TickerConfig(brightness=0))
    c.on_matches(matches)
    assert all(o.brightness == 0 for o in renderer.frames[-1].objects())


def test_render_after_close_is_noop(controller, renderer, matches):
    controller.on_matches(matches)
    count = len(renderer.frames)
    controller.close()
    assert controller.tick() is None
    assert controller.cycle_mode() is None
    assert len(renderer.frames) == count


def test_as_dict(controller, matches):
    controller.on_matches(matches)
    d = controller.as_dict()
    assert d['view'] == 'match'
    assert d['mode'] == 'SCORE'
    assert d['match_count'] == 2
    assert d['match']['short_name'] == "IND vs AUS"


def test_overs_render_as_sent():
    m = MatchRecord(team1="A", team2="B", runs1=120, wickets1=2, overs1=20.0, overs1_text="20",
                    runs2=80, wickets2=1, overs2=10.0, overs2_text="10")
    assert format_overs_text(m) == "A: 20 | B: 10"
    assert format_score_text(m) == "A 120/2 (20) vs B 80/1 (10)"
