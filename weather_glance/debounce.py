import asyncio
import logging


class Debouncer:
    """
    Delays a call until the calls stop coming in for ``delay`` seconds.

    Every new call cancels the one still waiting, so for a burst of calls only the last one runs,
    ``delay`` seconds after the burst ends.  The pending call is a TimerHandle on the running
    event loop, so this has to be used from inside that loop.
    """

    def __init__(self, delay: float):
        self.delay = delay
        self._handle = None

    @property
    def pending(self):
        return self._handle is not None

    def call(self, func, *args):
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, func, args)

    def cancel(self):
        if self._handle is not None:
            logging.debug('Cancelling pending call')
            self._handle.cancel()
            self._handle = None

    def _fire(self, func, args):
        self._handle = None
        func(*args)
