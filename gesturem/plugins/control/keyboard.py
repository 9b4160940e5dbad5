'''
Copyright (c) 2019 Modul 9/HiFiBerry

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

import asyncio
import logging

from typing import Dict

from evdev import InputDevice, ecodes, list_devices

from gesturem.commands import dispatch_command
from gesturem.constants import CMD_NEXT, CMD_PAUSE, CMD_PLAY, CMD_PREV
from gesturem.plugins.control.controller import Controller

KEY_COMMANDS = {
    "play": CMD_PLAY,
    "pause": CMD_PAUSE,
    "next": CMD_NEXT,
    "previous": CMD_PREV,
}


class Keyboard(Controller):

    def __init__(self, params: Dict[str, str]=None):
        super().__init__()

        self.name = "keyboard"
        self.daemon = True

        if params is None or len(params) == 0:
            # Arrow keys, same directions as the gestures
            self.codetable = {
                # up
                ecodes.KEY_UP: CMD_PLAY,
                # down
                ecodes.KEY_DOWN: CMD_PAUSE,
                # left
                ecodes.KEY_LEFT: CMD_PREV,
                # right
                ecodes.KEY_RIGHT: CMD_NEXT,
            }
        else:
            self.codetable = {}
            for i in params:
                if i in KEY_COMMANDS:
                    self.codetable[int(params[i])] = KEY_COMMANDS[i]
                else:
                    logging.warning("unknown keyboard command %s", i)

    def handle_key_event(self, event):
        command = self.codetable.get(event.code)
        if command is None:
            return

        try:
            if self.playercontrol is not None:
                dispatch_command(self.playercontrol, command)
            else:
                logging.info("ignoring %s, no playback control",
                             command)

            logging.debug("processed %s", command)

        except Exception as e:
            logging.warning("problem handling %s (%s)", command, e)

    def run(self):
        try:
            asyncio.run(self.bind_devices())
        except Exception as e:
            logging.error("could not start Keyboard listener, "
                          "no keyboard detected or no permissions (%s)", e)

    async def bind_devices(self):
        await asyncio.gather(*[self.listen(keyboard) for keyboard in self.get_keyboards()])

    async def listen(self, dev):
        logging.info(f"keyboard listener started for {dev.name}")
        async for event in dev.async_read_loop():
            if event.type == ecodes.EV_KEY and event.value == 1:
                self.handle_key_event(event)

    def get_keyboards(self):
        devices = [InputDevice(path) for path in list_devices()]
        for device in devices:
            capabilities = device.capabilities()
            if ecodes.EV_KEY in capabilities:
                if any(x in self.codetable.keys() for x in capabilities[ecodes.EV_KEY]):
                    yield device

    def __str__(self):
        return "keyboard"
