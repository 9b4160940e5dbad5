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

import logging

from mpd import MPDClient
from mpd import ConnectionError as MPDConnectionError

from gesturem.players import AudioBackend, PlayerHandle, add_backend_registry


class MPDPlayer(PlayerHandle):
    """
    A track loaded as the only song in MPD's queue
    """

    def __init__(self, backend, track):
        super().__init__(track)
        self.backend = backend
        self.started = False

    def start(self):
        if self.started:
            self.backend.execute("pause", 0)
        else:
            self.backend.execute("play", 0)
            self.started = True

    def pause(self):
        self.backend.execute("pause", 1)

    def release(self):
        if self.backend.client is None:
            return
        self.backend.execute("stop")
        self.backend.execute("clear")


class MPDBackend(AudioBackend):

    def __init__(self, args=None):
        super().__init__(args)
        if args is None:
            args = {}
        self.client = None
        self.backendname = "mpd"
        self.host = args.get("host", "localhost")
        self.port = int(args.get("port", 6600))
        self.timeout = int(args.get("timeout", 5))

    def connect(self):
        if self.client is not None:
            return self.client

        client = MPDClient()
        client.timeout = self.timeout
        try:
            client.connect(self.host, self.port)
            logging.info("Connected to %s:%s", self.host, self.port)
            self.client = client
        except Exception as e:
            logging.warning("could not connect to MPD at %s:%s: %s",
                            self.host, self.port, e)
            self.client = None

        return self.client

    def disconnect(self):
        if self.client is None:
            return

        try:
            self.client.close()
            self.client.disconnect()
        except Exception as e:
            logging.debug("error while disconnecting from MPD: %s", e)

        self.client = None

    def execute(self, command, *args):
        """
        Run an MPD command. MPD closes idle connections, so a broken
        connection is reopened and the command sent once more.
        """
        retry = True
        while True:
            client = self.connect()
            if client is None:
                raise ConnectionError("MPD at {}:{} not reachable".format(
                    self.host, self.port))

            try:
                return getattr(client, command)(*args)
            except (MPDConnectionError, OSError) as e:
                self.disconnect()
                if not retry:
                    raise
                logging.info("connection to MPD lost (%s), reconnecting", e)
                retry = False

    def create_player(self, track):
        self.execute("clear")
        self.execute("add", track.handle)
        logging.debug("loaded %s into MPD", track)
        return MPDPlayer(self, track)

    def close(self):
        self.disconnect()

    def __str__(self):
        return "{}:{}".format(self.host, self.port)


add_backend_registry("mpd", MPDBackend)
