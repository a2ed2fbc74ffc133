import shutil
import threading

from terminal_ui.ui_config import MIN_HEIGHT, MIN_WIDTH

POLL_INTERVAL = 0.1


def terminal_size():
    size = shutil.get_terminal_size()
    return size.columns, size.lines


class WindowWatcher:
    """
    Polls the terminal size on a daemon thread and calls on_change(available) when it changes.
    The callback only asks for a redraw; the game loop owns the board.
    """

    def __init__(self, on_change, size_fn=terminal_size, min_width=MIN_WIDTH, min_height=MIN_HEIGHT):
        self.on_change = on_change
        self.size_fn = size_fn
        self.min_width = min_width
        self.min_height = min_height
        self.last_size = size_fn()
        self.available = self.fits(self.last_size)
        self._stop = threading.Event()
        self._thread = None

    def fits(self, size):
        width, height = size
        return width >= self.min_width and height >= self.min_height

    def poll_once(self):
        size = self.size_fn()
        available = self.fits(size)
        if size != self.last_size or available != self.available:
            self.last_size = size
            self.available = available
            self.on_change(available)
            return True
        return False

    def start(self):
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="window-watcher", daemon=True)
        self._thread.start()

    def stop(self):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=POLL_INTERVAL * 2)
        self._thread = None

    def _run(self):
        while not self._stop.wait(POLL_INTERVAL):
            self.poll_once()
