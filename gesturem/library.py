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
import os
from collections import namedtuple

from mutagen import File as MutagenFile
from mutagen import MutagenError

AUDIO_EXTS = {".mp3", ".m4a", ".flac", ".ogg", ".opus", ".wav"}


class Track(namedtuple("Track", ["handle", "title"])):
    """
    A playable item: an opaque handle the audio backend understands
    and a display title
    """

    __slots__ = ()

    def __str__(self):
        return "{} ({})".format(self.title, self.handle)


class MediaLibrary:
    """
    Enumerates locally available tracks as (id, title) pairs
    """

    def entries(self):
        return []


class DirectoryLibrary(MediaLibrary):
    """
    Scans a music directory. Ids are file names relative to the
    music directory, which is also how MPD refers to them.
    """

    def __init__(self, musicdir):
        self.musicdir = musicdir

    def entries(self):
        if not os.path.isdir(self.musicdir):
            logging.warning("music directory %s does not exist", self.musicdir)
            return

        paths = []
        for dirpath, _, filenames in os.walk(self.musicdir):
            for fn in filenames:
                if os.path.splitext(fn)[1].lower() in AUDIO_EXTS:
                    paths.append(os.path.join(dirpath, fn))

        for path in sorted(paths):
            yield (os.path.relpath(path, self.musicdir), read_title(path))

    def __str__(self):
        return "directory:{}".format(self.musicdir)


def read_title(path):
    """
    Title from the file's tags, the file name if there is none
    """
    title = None
    try:
        tags = MutagenFile(path, easy=True)
        if tags is not None:
            values = tags.get("title")
            if values:
                title = str(values[0]).strip()
    except (MutagenError, OSError) as e:
        logging.debug("could not read tags from %s: %s", path, e)

    if not title:
        title = os.path.splitext(os.path.basename(path))[0]

    return title


class MpdLibrary(MediaLibrary):
    """
    Uses the MPD database as content index
    """

    def __init__(self, backend):
        self.backend = backend

    def entries(self):
        client = self.backend.connect()
        if client is None:
            logging.warning("MPD not reachable, no tracks available")
            return

        for song in client.listallinfo():
            if "file" not in song:
                # directories and playlists
                continue
            uri = song["file"]
            title = song.get("title")
            if isinstance(title, list):
                title = title[0]
            if not title:
                title = os.path.splitext(os.path.basename(uri))[0]
            yield (uri, title)

    def __str__(self):
        return "mpd:{}".format(self.backend)


class TrackCatalog:
    """
    Ordered list of the tracks available in this session. It is loaded
    once and never changes afterwards.
    """

    def __init__(self, library):
        self.library = library
        self.tracks = None

    def load(self):
        if self.tracks is not None:
            return self.tracks

        tracks = []
        try:
            for (trackid, title) in self.library.entries():
                tracks.append(Track(trackid, title))
        except Exception as e:
            # no permission or library not available: stay empty
            logging.warning("could not enumerate tracks from %s: %s",
                            self.library, e)
            tracks = []

        self.tracks = tuple(tracks)
        logging.info("loaded %s tracks from %s", len(self.tracks), self.library)
        return self.tracks

    def __len__(self):
        return len(self.load())

    def __iter__(self):
        return iter(self.load())

    def __getitem__(self, index):
        return self.load()[index]
