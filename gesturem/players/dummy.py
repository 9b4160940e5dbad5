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

from gesturem.players import AudioBackend, PlayerHandle, add_backend_registry


class DummyPlayer(PlayerHandle):

    def __init__(self, track):
        super().__init__(track)
        self.playing = False

    def start(self):
        self.playing = True
        logging.info("dummy player: playing %s", self.track)

    def pause(self):
        self.playing = False
        logging.info("dummy player: paused %s", self.track)

    def release(self):
        self.playing = False
        logging.debug("dummy player: released %s", self.track)


class DummyBackend(AudioBackend):
    """
    Backend that doesn't output audio, used for development
    """

    def __init__(self, args=None):
        super().__init__(args)
        self.backendname = "dummy"

    def create_player(self, track):
        return DummyPlayer(track)

    def __str__(self):
        return "dummy"


add_backend_registry("dummy", DummyBackend)
