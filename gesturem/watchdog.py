'''
Copyright (c) 2018 Modul 9/HiFiBerry

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

import logging
import threading

monitored_threads = {}
stop_requested = threading.Event()


def add_monitored_thread(thread, name):
    monitored_threads[name] = thread


def request_stop(signalNumber=None, frame=None):
    stop_requested.set()


def monitor_threads(interval=5):
    """
    Blocks until a monitored thread died or a stop was requested.

    Returns the name of the dead thread, None after a stop request.
    """
    while not stop_requested.wait(interval):
        for threadname in list(monitored_threads):
            if not(monitored_threads[threadname].is_alive()):
                logging.error("Monitored thread %s died, exiting...", threadname)
                return threadname

    logging.info("stop requested")
    return None
