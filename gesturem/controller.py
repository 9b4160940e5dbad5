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

import copy
import logging
import threading

from gesturem.constants import STATE_PLAYING, STATE_PAUSED, STATE_STOPPED


class NoHandle:
    """
    No player is bound to a track
    """

    live = False
    player = None
    track = None

    def __str__(self):
        return "no player"


NO_HANDLE = NoHandle()


class ActiveHandle:
    """
    A live player bound to a track
    """

    live = True

    def __init__(self, player, track):
        self.player = player
        self.track = track

    def __str__(self):
        return "player for {}".format(self.track)


class PlaybackState:
    """
    Internal representation of the playback state
    """

    def __init__(self):
        self.current_index = 0
        self.current_title = ""
        self.handle = NO_HANDLE
        self.player_state = STATE_STOPPED
        self.error = None
        # increases with every change, displays skip older snapshots
        self.serial = 0

    def as_dict(self):
        return {
            "index": self.current_index,
            "title": self.current_title,
            "state": self.player_state,
            "error": self.error,
        }

    def __str__(self):
        return "{} [{}] {}".format(self.player_state,
                                   self.current_index,
                                   self.current_title)


class PlaybackController():
    """
    Command driven playback of a track catalog

    All operations are serialized by a lock, they can be called from
    the remote listener, keyboard and web server threads. Displays are
    notified after the lock has been released. play(), next() and
    previous() return False if no player could be created for the
    track, True otherwise. They never raise.
    """

    def __init__(self, backend):
        self.backend = backend
        self.tracks = ()
        self.lock = threading.RLock()
        self.displays = []
        self._state = PlaybackState()

    def register_display(self, display):
        self.displays.append(display)

    def load(self, catalog):
        with self.lock:
            self.tracks = tuple(catalog)
            if self._state.current_index >= len(self.tracks):
                self._state.current_index = 0
            logging.info("loaded catalog with %s tracks", len(self.tracks))

    @property
    def current_index(self):
        return self._state.current_index

    @property
    def current_title(self):
        return self._state.current_title

    @property
    def handle(self):
        return self._state.handle

    def state(self):
        with self.lock:
            return copy.copy(self._state)

    # ##
    # ## controller functions
    # ##

    def play(self):
        with self.lock:
            if len(self.tracks) == 0:
                logging.info("no tracks available, ignoring play")
                return True

            track = self.tracks[self._state.current_index]
            self._state.current_title = track.title
            res = self._start(track)
            state = self._snapshot()

        self.notify(state)
        return res

    def pause(self):
        with self.lock:
            handle = self._state.handle
            if not handle.live:
                logging.debug("nothing playing, ignoring pause")
                return True

            res = True
            try:
                handle.player.pause()
                self._state.player_state = STATE_PAUSED
            except Exception as e:
                logging.error("could not pause %s: %s", handle.track, e)
                self._state.error = str(e)
                res = False
            state = self._snapshot()

        self.notify(state)
        return res

    def next(self):
        return self._step(1)

    def previous(self):
        return self._step(-1)

    # ##
    # ## end controller functions
    # ##

    def close(self):
        with self.lock:
            self._release()
            self._state.player_state = STATE_STOPPED

    def _step(self, offset):
        with self.lock:
            size = len(self.tracks)
            if size == 0:
                logging.info("no tracks available, ignoring %s",
                             "next" if offset > 0 else "previous")
                return True

            self._release()
            index = (self._state.current_index + offset + size) % size
            self._state.current_index = index
            track = self.tracks[index]
            self._state.current_title = track.title
            res = self._start(track)
            state = self._snapshot()

        self.notify(state)
        return res

    def _start(self, track):
        try:
            if not self._state.handle.live:
                player = self.backend.create_player(track)
                self._state.handle = ActiveHandle(player, track)
            self._state.handle.player.start()
        except Exception as e:
            logging.error("could not start playback of %s: %s", track, e)
            self._release()
            self._state.player_state = STATE_STOPPED
            self._state.error = str(e)
            return False

        logging.info("playing %s", track)
        self._state.player_state = STATE_PLAYING
        self._state.error = None
        return True

    def _release(self):
        handle = self._state.handle
        if not handle.live:
            return

        # The handle is gone even if releasing it fails
        self._state.handle = NO_HANDLE
        try:
            handle.player.release()
        except Exception as e:
            logging.warning("could not release %s: %s", handle, e)

    def _snapshot(self):
        self._state.serial += 1
        return copy.copy(self._state)

    def notify(self, state):
        for display in self.displays:
            try:
                display.notify_async(state)
            except Exception as e:
                logging.warning("could not notify %s: %s", display, e)

    def __str__(self):
        return str(self._state)
