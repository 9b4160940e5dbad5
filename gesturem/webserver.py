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
import threading

from bottle import Bottle, response

from gesturem.commands import dispatch_command
from gesturem.constants import CMD_NEXT, CMD_PAUSE, CMD_PLAY, CMD_PREV

URL_COMMANDS = {
    "play": CMD_PLAY,
    "pause": CMD_PAUSE,
    "next": CMD_NEXT,
    "previous": CMD_PREV,
}


class GestureWebserver():

    def __init__(self,
                 port=80,
                 host='0.0.0.0',
                 debug=False):
        self.port = port
        self.host = host
        self.debug = debug
        self.bottle = Bottle()
        self.route()
        self.player_control = None
        self.catalog = ()
        self.thread = None

    def route(self):
        self.bottle.route('/api/tracks',
                          method="GET",
                          callback=self.tracks_handler)
        self.bottle.route('/api/player/status',
                          method="GET",
                          callback=self.playerstatus_handler)
        self.bottle.route('/api/player/<command>',
                          method="POST",
                          callback=self.playercontrol_handler)

    def startServer(self):
        self.bottle.run(port=self.port,
                        host=self.host,
                        debug=self.debug,
                        quiet=not self.debug)

    # ##
    # ## begin URL handlers
    # ##

    def tracks_handler(self):
        tracks = []
        for track in self.catalog:
            tracks.append({"id": str(track.handle), "title": track.title})

        return {"tracks": tracks}

    def playerstatus_handler(self):
        if self.player_control is None:
            response.status = 501
            return "no player control available"

        return self.player_control.state().as_dict()

    def playercontrol_handler(self, command):
        if command not in URL_COMMANDS:
            response.status = 501
            return "command {} not implemented".format(command)

        if self.player_control is None:
            response.status = 501
            return "no player control available"

        try:
            if not(dispatch_command(self.player_control, URL_COMMANDS[command])):
                response.status = 500
                return "{} failed".format(command)
        except Exception as e:
            response.status = 500
            return "{} failed with exception {}".format(command, e)

        return "ok"

    # ##
    # ## end URL handlers
    # ##

    # ##
    # ##  thread methods
    # ##

    def start(self):
        self.thread = threading.Thread(target=self.startServer, args=())
        self.thread.daemon = True
        self.thread.start()
        logging.info("started web server on port {}".format(self.port))

    def is_alive(self):
        if self.thread is None:
            return True
        else:
            return self.thread.is_alive()

    # ##
    # ## end thread methods
    # ##

    def set_player_control(self, playercontrol):
        self.player_control = playercontrol

    def set_catalog(self, catalog):
        self.catalog = tuple(catalog)

    def __str__(self):
        return "webserver@{}".format(self.port)
