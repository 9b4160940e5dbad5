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

backend_registry = {}


class PlayerHandle:
    """
    Live binding between the audio subsystem and one track
    """

    def __init__(self, track):
        self.track = track

    def start(self):
        # Start playback or resume it if paused
        pass

    def pause(self):
        pass

    def release(self):
        pass


class AudioBackend:

    def __init__(self, args=None):
        self.backendname = None

    def create_player(self, track):
        """
        Create a player handle bound to the given track. Raises an
        exception if the track can't be bound.
        """
        raise NotImplementedError("create_player not implemented")

    def close(self):
        pass


def add_backend_registry(name, backend_class):
    if name in backend_registry:
        logging.error("AudioBackend %s already registered", name)
    else:
        backend_registry[name] = backend_class


def create_backend(name, args=None):
    if name not in backend_registry:
        raise ValueError("unknown audio backend {}".format(name))

    return backend_registry[name](args)
