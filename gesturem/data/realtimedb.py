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

'''
Minimal client for the Firebase Realtime Database REST API

Values are read and written with plain HTTP requests, changes are
received from the server-sent event stream of a location.
'''

import json
import logging

import requests

EVENT_PUT = "put"
EVENT_PATCH = "patch"
EVENT_KEEPALIVE = "keep-alive"
EVENT_CANCEL = "cancel"
EVENT_AUTH_REVOKED = "auth_revoked"


class RealtimeDatabaseError(Exception):
    pass


class Subscription:
    '''
    Stream of value changes of a single location

    The current value is delivered first, then every change. The stream
    can only be consumed once. Use it as a context manager or call
    close() to end the HTTP connection.
    '''

    def __init__(self, response, path):
        self.response = response
        self.path = path
        self.consumed = False
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        if self.closed:
            return
        self.closed = True
        try:
            self.response.close()
        except Exception as e:
            logging.debug("error closing stream for %s: %s", self.path, e)
        logging.debug("closed subscription for %s", self.path)

    def values(self):
        if self.consumed:
            raise RuntimeError("subscription for {} already consumed".format(
                self.path))
        self.consumed = True
        return self._values()

    def _values(self):
        for (event, data) in self.events():
            if event == EVENT_PUT:
                # only changes of the location itself, not of children
                if isinstance(data, dict) and data.get("path") == "/":
                    yield data.get("data")
            elif event == EVENT_PATCH:
                logging.debug("ignoring patch of %s: %s", self.path, data)
            elif event == EVENT_KEEPALIVE:
                continue
            elif event in (EVENT_CANCEL, EVENT_AUTH_REVOKED):
                raise RealtimeDatabaseError("{} listener ended: {} {}".format(
                    self.path, event, data))
            else:
                logging.debug("unknown event %s", event)

    def events(self):
        '''
        Parses the server-sent event stream into (event, data) tuples
        '''
        event = None
        data = []
        for line in self.response.iter_lines(decode_unicode=True):
            if self.closed:
                return

            if line is None:
                continue

            if line == "":
                if event is not None:
                    yield (event, parse_data("\n".join(data)))
                event = None
                data = []
            elif line.startswith(":"):
                # comment
                continue
            elif line.startswith("event:"):
                event = line[6:].strip()
            elif line.startswith("data:"):
                data.append(line[5:].strip())

        if event is not None and not self.closed:
            yield (event, parse_data("\n".join(data)))


def parse_data(data):
    if len(data) == 0:
        return None

    try:
        return json.loads(data)
    except ValueError:
        logging.warning("invalid event data %s", data)
        return None


class RealtimeDatabase:

    def __init__(self, url, auth=None, timeout=10):
        self.url = url.rstrip("/")
        self.auth = auth
        self.timeout = timeout

    def location(self, path):
        return "{}/{}.json".format(self.url, path.strip("/"))

    def params(self):
        if self.auth:
            return {"auth": self.auth}
        return {}

    def set_value(self, path, value):
        res = requests.put(self.location(path),
                           json=value,
                           params=self.params(),
                           timeout=self.timeout)
        res.raise_for_status()
        return res

    def subscribe(self, path):
        # No read timeout, the server sends keep-alive events
        res = requests.get(self.location(path),
                           params=self.params(),
                           headers={"Accept": "text/event-stream"},
                           stream=True,
                           timeout=(self.timeout, None))
        res.raise_for_status()
        logging.info("subscribed to %s", self.location(path))
        return Subscription(res, path)

    def __str__(self):
        return self.url
