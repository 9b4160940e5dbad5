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

from gesturem.constants import CMD_NEXT, CMD_PAUSE, CMD_PLAY, CMD_PREV, \
    GESTURE_UP, GESTURE_DOWN, GESTURE_LEFT, GESTURE_RIGHT

GESTURE_MAP = {
    GESTURE_UP: CMD_PLAY,
    GESTURE_DOWN: CMD_PAUSE,
    GESTURE_LEFT: CMD_PREV,
    GESTURE_RIGHT: CMD_NEXT,
}


def decode_command(value):
    """
    Converts a raw remote value to a command

    Values are trimmed and compared case-insensitive. Anything that is not
    a known gesture (including empty strings and non-string values)
    returns None.
    """
    if not isinstance(value, str):
        return None

    return GESTURE_MAP.get(value.strip().upper())


def dispatch_command(playercontrol, command):
    """
    Runs a command on the given player control

    Returns the result of the controller operation, False for unknown
    commands.
    """
    if command == CMD_PLAY:
        return playercontrol.play()
    elif command == CMD_PAUSE:
        return playercontrol.pause()
    elif command == CMD_NEXT:
        return playercontrol.next()
    elif command == CMD_PREV:
        return playercontrol.previous()

    logging.warning("command %s not implemented", command)
    return False
