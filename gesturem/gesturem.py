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

'''
This is the main process that reads the configuration file,
loads the track catalog, initializes the playback controller and
starts the command listeners.

Functionality is implemented in the gesturem.* modules
'''

import signal
import configparser
import importlib
import logging
import os
import sys

from gesturem.controller import PlaybackController
from gesturem.library import TrackCatalog, DirectoryLibrary, MpdLibrary
from gesturem.players import create_backend
from gesturem.players.dummy import DummyBackend
from gesturem.players.mpdplayer import MPDBackend
from gesturem.plugins.control.remote import RealtimeCommandListener
from gesturem.displays.console import ConsoleDisplay
from gesturem.webserver import GestureWebserver

from gesturem import watchdog

DEFAULT_CONFIG = "/etc/gesturem.conf"

controller = None
controllers = []


def pause_all(signalNumber=None, frame=None):
    """
    Pause playback on SIGUSR1
    """
    if controller is not None:
        controller.pause()


def print_state(signalNumber=None, frame=None):
    """
    Display state on USR2
    """
    if controller is not None:
        print("\n" + str(controller))


def create_object(classname, param = None):
    module_name, class_name = classname.rsplit(".", 1)
    MyClass = getattr(importlib.import_module(module_name), class_name)

    if param is None:
        instance = MyClass()
    else:
        instance = MyClass(param)

    return instance


def create_library(config, backend):
    source = config.get("library", "source", fallback="directory").lower()

    if source == "mpd":
        if not isinstance(backend, MPDBackend):
            backend = MPDBackend(config["mpd"] if "mpd" in config.sections() else None)
        return MpdLibrary(backend)

    musicdir = config.get("library", "musicdir", fallback="/var/lib/mpd/music")
    if source != "directory":
        logging.error("unknown library source %s, using directory", source)
    return DirectoryLibrary(musicdir)


def parse_config(configfile=DEFAULT_CONFIG, debugmode=False):
    global controller

    config = configparser.ConfigParser()
    config.optionxform = lambda option: option

    config.read(configfile)

    # Audio output
    if debugmode:
        backend = DummyBackend()
        logging.warning("debug mode, using dummy audio backend")
    else:
        backendname = config.get("player", "backend", fallback="mpd")
        params = config["mpd"] if "mpd" in config.sections() else None
        backend = create_backend(backendname, params)
        logging.info("using audio backend %s", backend)

    controller = PlaybackController(backend)

    # Tracks
    catalog = TrackCatalog(create_library(config, backend))
    controller.load(catalog.load())

    # Console "now playing" output
    if config.getboolean("console", "enable", fallback=True):
        controller.register_display(ConsoleDisplay())

    # Web server
    if config.getboolean("webserver", "enable", fallback=False):
        logging.debug("starting webserver")
        port = config.getint("webserver",
                             "port",
                             fallback=80)
        server = GestureWebserver(port=port, debug=debugmode)
        server.set_player_control(controller)
        server.set_catalog(catalog)
        server.start()
        watchdog.add_monitored_thread(server, "webserver")
    else:
        logging.info("web server disabled")

    # Remote commands
    if "remote" in config.sections():
        url = config.get("remote", "url", fallback=None)
        if url is None:
            logging.error("can't listen for remote commands, url missing")
        else:
            listener = RealtimeCommandListener(config["remote"])
            listener.set_player_control(controller)
            listener.start()
            controllers.append(listener)
            watchdog.add_monitored_thread(listener, "remote listener")
            logging.info("listening for commands at %s", listener)
    else:
        logging.info("remote commands not configured")

    # Additional controller modules
    for section in config.sections():
        if section.startswith("controller:"):
            [_,classname] = section.split(":",1)
            try:
                params = config[section]
                plugin = create_object(classname, params)
                plugin.set_player_control(controller)
                plugin.start()
                controllers.append(plugin)
                logging.info("started controller %s", plugin)
            except Exception as e:
                logging.error("Exception during controller %s initialization",
                              classname)
                logging.exception(e)

    return controller


def shutdown():
    for c in controllers:
        try:
            c.stop()
        except Exception as e:
            logging.warning("could not stop %s: %s", c, e)

    if controller is not None:
        controller.close()
        controller.backend.close()


def main():

    if "-v" in sys.argv:
        logging.basicConfig(format='%(levelname)s: %(module)s - %(message)s',
                            level=logging.DEBUG)
        logging.debug("enabled verbose logging")
    else:
        logging.basicConfig(format='%(levelname)s: %(module)s - %(message)s',
                            level=logging.INFO)

    configfile = DEFAULT_CONFIG
    if "-c" in sys.argv:
        i = sys.argv.index("-c")
        if i + 1 < len(sys.argv):
            configfile = sys.argv[i + 1]

    if ('DEBUG' in os.environ):
        logging.warning("starting in debug mode...")
        debugmode = True
    else:
        debugmode = False

    parse_config(configfile, debugmode=debugmode)

    signal.signal(signal.SIGUSR1, pause_all)
    signal.signal(signal.SIGUSR2, print_state)
    signal.signal(signal.SIGTERM, watchdog.request_stop)

    logging.info("startup finished, monitoring %s",
                 ",".join(watchdog.monitored_threads.keys()))

    try:
        watchdog.monitor_threads()
    except KeyboardInterrupt:
        logging.info("interrupted")
    finally:
        shutdown()

    logging.info("Main thread stopped")


if __name__ == "__main__":
    main()
