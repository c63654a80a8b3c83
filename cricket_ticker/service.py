import time
import queue
import threading
from datetime import datetime as dt

from cricket_ticker.config import TICK_INTERVAL
from cricket_ticker.display import DisplayController
from cricket_ticker.fetchers.matches import MatchFetcher
from cricket_ticker.filters import filter_matches
from cricket_ticker.renderer import ConsoleRenderer
from cricket_ticker.scheduler import Scheduler

# External trigger events
EVENT_CHANGE = 'change'            # long press
EVENT_AOD = 'aod'                  # display-suspended periodic update
EVENT_ACTION_DOWN = 'action_down'
EVENT_ACTION_UP = 'action_up'
EVENT_REFRESH = 'refresh'

EVENT_MESSAGES = {
    EVENT_CHANGE: 'mode_cycle',
    EVENT_AOD: 'refresh',
    EVENT_REFRESH: 'refresh',
    EVENT_ACTION_DOWN: 'button_down',
    EVENT_ACTION_UP: 'button_up',
    'next_match': 'next_match',
}

_STOP = '__stop__'


class TickerService:
    """Wires scheduler -> fetcher -> filter -> display controller -> renderer.

    Every state change goes through ``self.queue`` and is applied by one
    consumer thread, so the DisplayController only ever has one writer even
    though fetch results, ticks and button events arrive from other threads.
    """

    def __init__(self, settings, fetcher=None, renderer=None, controller=None, tick_interval=TICK_INTERVAL):
        self.settings = settings
        self.fetcher = fetcher or MatchFetcher(settings)
        self.renderer = renderer or ConsoleRenderer()
        self.controller = controller or DisplayController(self.renderer, settings.snapshot())
        self.queue = queue.Queue()
        self.scheduler = Scheduler(
            on_refresh=self.request_refresh,
            on_tick=lambda: self.post('tick'),
            refresh_interval=self.settings.get_update_interval,
            tick_interval=tick_interval,
        )

        self.accepting = True
        self.running = False
        self.consumer = None
        self.status_lock = threading.Lock()
        self.status = {'status': 'Starting Up', 'last_updated': None, 'display': self.controller.as_dict()}

    # ================= LIFECYCLE =================
    def start(self):
        if self.running: return
        print("Starting cricket ticker...")
        self.running = True
        self.consumer = threading.Thread(target=self._consume, name="display", daemon=True)
        self.consumer.start()
        self.request_refresh()
        self.scheduler.start()

    def shutdown(self):
        print("Stopping cricket ticker...")
        self.accepting = False
        self.scheduler.stop()
        self.running = False
        self.queue.put((_STOP, None))
        if self.consumer is not None and self.consumer is not threading.current_thread():
            self.consumer.join(2.0)
        self.controller.close()
        self.fetcher.shutdown()
        self.renderer.turn_off()
        self._publish('Stopped')

    # ================= MESSAGES =================
    def post(self, kind, payload=None):
        if not self.accepting: return False
        self.queue.put((kind, payload))
        return True

    def request_refresh(self):
        return self.post('refresh')

    def handle_event(self, event):
        """Maps an external trigger event name onto a queued message."""
        kind = EVENT_MESSAGES.get(event)
        if kind is None:
            print(f"Ignoring unknown event: {event}")
            return False
        return self.post(kind)

    def settings_changed(self):
        return self.post('config')

    def _consume(self):
        while self.running:
            try:
                kind, payload = self.queue.get(timeout=0.5)
            except queue.Empty:
                continue
            if kind == _STOP: break
            self._apply_safely(kind, payload)

    def drain(self):
        """Applies every queued message on the calling thread. Returns how many were applied."""
        count = 0
        while True:
            try:
                kind, payload = self.queue.get_nowait()
            except queue.Empty:
                return count
            if kind == _STOP: return count
            self._apply_safely(kind, payload)
            count += 1

    def _apply_safely(self, kind, payload):
        try:
            self.apply(kind, payload)
        except Exception as e:
            print(f"Display Error ({kind}): {e}")

    def apply(self, kind, payload=None):
        if self.controller.closed: return

        if kind == 'refresh':
            self._publish('Updating Data...')
            self.fetcher.fetch_live_matches(callback=lambda result: self.post('fetched', result))
            return

        if kind == 'fetched':
            config = self.settings.snapshot()
            self.controller.apply_config(config)
            if payload.ok:
                matches = filter_matches(list(payload.matches), config.favorite_teams)
                self.controller.on_matches(matches, favorites_configured=bool(config.favorite_teams))
            else:
                self.controller.on_error(payload.error)
            self._publish('Idle', updated=True)
            return

        if kind == 'config':
            self.controller.apply_config(self.settings.snapshot())
            self.fetcher.invalidate()
            self.controller.render()
            self.request_refresh()
        elif kind == 'tick':
            self.controller.tick()
        elif kind == 'mode_cycle':
            self.controller.cycle_mode()
        elif kind == 'next_match':
            self.controller.next_match()
        elif kind == 'button_down':
            self.controller.button_down()
        elif kind == 'button_up':
            self.controller.button_up()
        else:
            print(f"Unknown message: {kind}")
            return
        # Ticks are frequent; only publish once something other than scroll moved
        if kind != 'tick': self._publish()

    # ================= STATUS =================
    def _publish(self, status=None, updated=False):
        snapshot = self.controller.as_dict()
        with self.status_lock:
            if status: self.status['status'] = status
            if updated: self.status['last_updated'] = dt.now().strftime("%I:%M:%S %p")
            self.status['display'] = snapshot
            self.status['published_at'] = time.time()

    def get_status(self):
        with self.status_lock:
            return dict(self.status)
