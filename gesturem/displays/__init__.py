'''
Copyright (c) 2020 Modul 9/HiFiBerry

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
'''

import threading
import logging


class NowPlayingDisplay:
    """
    Receives a snapshot of the playback state after each change

    notify_async() never blocks. Each display has at most one notifier
    thread. States arriving while it is busy replace each other, so only
    the latest one is delivered next.
    """

    def __init__(self):
        logging.debug("initializing NowPlayingDisplay instance")
        self.notifierthread = None
        self.notifier_lock = threading.Lock()
        self.pending = None
        self.busy = False
        self.last_serial = -1

    def notify(self, state):
        raise RuntimeError("notify not implemented")

    def notify_async(self, state):
        with self.notifier_lock:
            if state.serial <= self.last_serial:
                logging.debug("ignoring outdated state %s", state)
                return

            self.last_serial = state.serial
            self.pending = state
            if self.busy:
                return

            self.busy = True
            self.notifierthread = threading.Thread(target=self.deliver,
                                                   name="notifier thread " + self.__str__())
            self.notifierthread.daemon = True
            self.notifierthread.start()

    def deliver(self):
        while True:
            with self.notifier_lock:
                state = self.pending
                self.pending = None
                if state is None:
                    self.busy = False
                    return

            try:
                self.notify(state)
            except Exception as e:
                logging.warning("could not notify %s: %s", self, e)
