import threading
from cricket_ticker.config import TICK_INTERVAL


class PeriodicTask:
    """Runs ``action`` every ``interval`` seconds on a daemon thread until stopped.

    ``interval`` may be a callable; it is re-read before every wait so a
    changed refresh setting takes effect on the next cycle.
    """

    def __init__(self, name, interval, action, run_immediately=False):
        self.name = name
        self.interval = interval
        self.action = action
        self.run_immediately = run_immediately
        self.stop_event = threading.Event()
        self.thread = None

    def current_interval(self):
        return self.interval() if callable(self.interval) else self.interval

    def start(self):
        if self.thread is not None: return
        self.thread = threading.Thread(target=self._loop, name=self.name, daemon=True)
        self.thread.start()

    def _loop(self):
        if self.run_immediately: self._run_once()
        while not self.stop_event.wait(self.current_interval()):
            self._run_once()

    def _run_once(self):
        try:
            self.action()
        except Exception as e:
            print(f"{self.name} error: {e}")

    def stop(self, timeout=2.0):
        self.stop_event.set()
        if self.thread is not None and self.thread is not threading.current_thread():
            self.thread.join(timeout)

    @property
    def running(self):
        return self.thread is not None and self.thread.is_alive() and not self.stop_event.is_set()


class Scheduler:
    """The two independent cadences: data refresh and scroll/animation ticks."""

    def __init__(self, on_refresh, on_tick, refresh_interval, tick_interval=TICK_INTERVAL):
        self.refresh_task = PeriodicTask("refresh", refresh_interval, on_refresh)
        self.tick_task = PeriodicTask("tick", tick_interval, on_tick)

    def start(self):
        self.refresh_task.start()
        self.tick_task.start()

    def stop(self):
        self.refresh_task.stop()
        self.tick_task.stop()

    @property
    def running(self):
        return self.refresh_task.running or self.tick_task.running
