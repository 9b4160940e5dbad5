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

from typing import Dict

from gesturem.commands import decode_command, dispatch_command
from gesturem.constants import DEFAULT_COMMAND_PATH
from gesturem.data.realtimedb import RealtimeDatabase
from gesturem.plugins.control.controller import Controller


class RealtimeCommandListener(Controller):
    '''
    Receives gesture commands from a Firebase Realtime Database location

    Each recognized command is run on the player control. The location
    is cleared afterwards, but only if the command succeeded.
    '''

    def __init__(self, params: Dict[str, str]=None, database=None):
        super().__init__()

        self.name = "remote"
        self.daemon = True

        if params is None:
            params = {}

        self.path = params.get("path", DEFAULT_COMMAND_PATH)
        if database is None:
            database = RealtimeDatabase(params["url"],
                                        auth=params.get("auth"),
                                        timeout=int(params.get("timeout", 10)))
        self.database = database
        self.subscription = None
        self.stopping = False

    def handle_value(self, value):
        command = decode_command(value)
        logging.debug("received command %s (%r)", command, value)

        if command is None:
            # empty or unrecognized, leave it as it is
            return False

        if self.playercontrol is None:
            logging.info("ignoring %s, no playback control", command)
            return False

        if not dispatch_command(self.playercontrol, command):
            logging.warning("%s failed, not clearing %s", command, self.path)
            return False

        try:
            self.database.set_value(self.path, "")
        except Exception as e:
            logging.error("could not clear command at %s: %s", self.path, e)

        logging.debug("processed %s", command)
        return True

    def run(self):
        try:
            with self.database.subscribe(self.path) as subscription:
                self.subscription = subscription
                for value in subscription.values():
                    self.handle_value(value)
            if not self.stopping:
                logging.warning("command stream for %s ended", self.path)
        except Exception as e:
            if not self.stopping:
                logging.error("remote command listener for %s stopped: %s",
                              self.path, e)
        finally:
            self.subscription = None

    def stop(self):
        self.stopping = True
        subscription = self.subscription
        if subscription is not None:
            subscription.close()

    def __str__(self):
        return "remote:{}/{}".format(self.database, self.path)
