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

import random
import threading
import time
import unittest

from gesturem.constants import STATE_PAUSED, STATE_PLAYING, STATE_STOPPED
from gesturem.controller import PlaybackController, NO_HANDLE
from gesturem.library import Track
from gesturem.players import AudioBackend, PlayerHandle


class FakePlayer(PlayerHandle):

    def __init__(self, backend, track):
        super().__init__(track)
        self.backend = backend
        self.playing = False
        self.released = False

    def start(self):
        self.playing = True
        self.backend.started.append(self.track.title)

    def pause(self):
        self.playing = False

    def release(self):
        self.playing = False
        self.released = True
        self.backend.live.remove(self)


class FakeBackend(AudioBackend):

    def __init__(self, broken=()):
        super().__init__()
        self.live = []
        self.started = []
        self.broken = broken
        self.max_live = 0

    def create_player(self, track):
        if track.title in self.broken:
            raise IOError("can't open {}".format(track.handle))
        player = FakePlayer(self, track)
        self.live.append(player)
        self.max_live = max(self.max_live, len(self.live))
        return player


class SlowBackend(FakeBackend):

    def create_player(self, track):
        # give other threads a chance to run
        time.sleep(0.001)
        return super().create_player(track)


def tracks(*titles):
    return [Track(i + 1, title) for (i, title) in enumerate(titles)]


class RecordingDisplay():

    def __init__(self):
        self.states = []

    def notify_async(self, state):
        self.states.append(state)


class TestPlaybackController(unittest.TestCase):

    def setUp(self):
        self.backend = FakeBackend()
        self.controller = PlaybackController(self.backend)

    def test_initial_state(self):
        state = self.controller.state()
        self.assertEqual(state.current_index, 0)
        self.assertEqual(state.current_title, "")
        self.assertIs(state.handle, NO_HANDLE)
        self.assertEqual(state.player_state, STATE_STOPPED)

    def test_play(self):
        self.controller.load(tracks("A", "B"))
        self.assertTrue(self.controller.play())
        self.assertEqual(self.controller.current_title, "A")
        self.assertTrue(self.controller.handle.live)
        self.assertEqual(self.controller.handle.track.title, "A")
        self.assertTrue(self.controller.handle.player.playing)
        self.assertEqual(self.controller.state().player_state, STATE_PLAYING)

    def test_play_resumes_same_handle(self):
        self.controller.load(tracks("A", "B"))
        self.controller.play()
        player = self.controller.handle.player
        self.controller.pause()
        self.assertFalse(player.playing)
        self.assertEqual(self.controller.state().player_state, STATE_PAUSED)
        self.controller.play()
        self.assertIs(self.controller.handle.player, player)
        self.assertTrue(player.playing)
        self.assertEqual(len(self.backend.live), 1)

    def test_pause_without_player(self):
        self.controller.load(tracks("A"))
        self.assertTrue(self.controller.pause())
        self.assertIs(self.controller.handle, NO_HANDLE)
        self.assertEqual(self.controller.state().player_state, STATE_STOPPED)

    def test_next_wraps(self):
        self.controller.load(tracks("A", "B", "C"))
        for k in range(1, 10):
            self.controller.next()
            self.assertEqual(self.controller.current_index, k % 3)
            self.assertEqual(self.controller.current_title,
                             "ABC"[k % 3])

    def test_previous_wraps(self):
        self.controller.load(tracks("A", "B", "C"))
        self.controller.previous()
        self.assertEqual(self.controller.current_index, 2)
        self.assertEqual(self.controller.current_title, "C")
        self.controller.previous()
        self.assertEqual(self.controller.current_index, 1)

    def test_next_then_previous(self):
        for size in range(1, 6):
            controller = PlaybackController(FakeBackend())
            controller.load(tracks(*["T{}".format(i) for i in range(size)]))
            for _i in range(size + 2):
                before = controller.current_index
                controller.next()
                controller.previous()
                self.assertEqual(controller.current_index, before)
                controller.next()

    def test_next_replaces_player(self):
        self.controller.load(tracks("A", "B"))
        self.controller.play()
        first = self.controller.handle.player
        self.controller.next()
        self.assertTrue(first.released)
        self.assertIsNot(self.controller.handle.player, first)
        self.assertTrue(self.controller.handle.player.playing)
        self.assertEqual(self.backend.live, [self.controller.handle.player])

    def test_single_track(self):
        self.controller.load(tracks("A"))
        self.controller.next()
        self.assertEqual(self.controller.current_index, 0)
        self.controller.previous()
        self.assertEqual(self.controller.current_index, 0)
        self.assertEqual(self.backend.started, ["A", "A"])

    def test_empty_catalog(self):
        for operation in [self.controller.play,
                          self.controller.next,
                          self.controller.previous,
                          self.controller.pause]:
            self.assertTrue(operation())
            state = self.controller.state()
            self.assertEqual(state.current_index, 0)
            self.assertEqual(state.current_title, "")
            self.assertIs(state.handle, NO_HANDLE)
        self.assertEqual(self.backend.live, [])

    def test_at_most_one_player(self):
        rnd = random.Random(4711)
        self.controller.load(tracks("A", "B", "C", "D"))
        operations = [self.controller.play,
                      self.controller.pause,
                      self.controller.next,
                      self.controller.previous]
        self.controller.play()
        for _i in range(500):
            rnd.choice(operations)()
            self.assertLessEqual(len(self.backend.live), 1)
            if self.controller.handle.live:
                self.assertEqual(self.backend.live,
                                 [self.controller.handle.player])
            self.assertEqual(self.controller.current_title,
                             self.controller.tracks[self.controller.current_index].title)

    def test_player_creation_failure(self):
        backend = FakeBackend(broken=("B",))
        controller = PlaybackController(backend)
        display = RecordingDisplay()
        controller.register_display(display)
        controller.load(tracks("A", "B", "C"))
        controller.play()

        self.assertFalse(controller.next())
        state = controller.state()
        self.assertEqual(state.current_index, 1)
        self.assertEqual(state.current_title, "B")
        self.assertIs(state.handle, NO_HANDLE)
        self.assertEqual(state.player_state, STATE_STOPPED)
        self.assertIsNotNone(state.error)
        self.assertEqual(backend.live, [])
        self.assertEqual(display.states[-1].error, state.error)

        # play retries the same track
        self.assertFalse(controller.play())
        self.assertEqual(controller.current_index, 1)

        self.assertTrue(controller.next())
        self.assertEqual(controller.current_title, "C")
        self.assertIsNone(controller.state().error)
        self.assertEqual(len(backend.live), 1)

    def test_load_keeps_player(self):
        self.controller.load(tracks("A", "B", "C"))
        self.controller.next()
        self.controller.next()
        player = self.controller.handle.player
        self.controller.load(tracks("X", "Y", "Z", "W"))
        self.assertEqual(self.controller.current_index, 2)
        self.assertIs(self.controller.handle.player, player)
        self.assertTrue(player.playing)

    def test_load_smaller_catalog(self):
        self.controller.load(tracks("A", "B", "C"))
        self.controller.previous()
        self.controller.load(tracks("X"))
        self.assertEqual(self.controller.current_index, 0)

    def test_displays_notified(self):
        display = RecordingDisplay()
        self.controller.register_display(display)
        self.controller.load(tracks("A", "B"))
        self.controller.play()
        self.controller.next()
        self.controller.pause()
        self.assertEqual([s.current_title for s in display.states],
                         ["A", "B", "B"])
        self.assertEqual(display.states[-1].player_state, STATE_PAUSED)

    def test_concurrent_steps(self):
        backend = SlowBackend()
        controller = PlaybackController(backend)
        controller.load(tracks("A", "B", "C", "D", "E", "F", "G"))

        def step(operation, count):
            for _i in range(count):
                operation()

        threads = [threading.Thread(target=step, args=(controller.next, 25))
                   for _i in range(4)]
        threads += [threading.Thread(target=step, args=(controller.previous, 20))
                    for _i in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(controller.current_index, (4 * 25 - 3 * 20) % 7)
        self.assertEqual(backend.max_live, 1)
        self.assertEqual(backend.live, [controller.handle.player])
        self.assertEqual(len(backend.started), 4 * 25 + 3 * 20)

    def test_snapshots_ordered(self):
        display = RecordingDisplay()
        self.controller.register_display(display)
        self.controller.load(tracks("A", "B"))
        self.controller.play()
        self.controller.next()
        self.controller.pause()
        serials = [s.serial for s in display.states]
        self.assertEqual(serials, sorted(set(serials)))

    def test_close(self):
        self.controller.load(tracks("A"))
        self.controller.play()
        player = self.controller.handle.player
        self.controller.close()
        self.assertTrue(player.released)
        self.assertIs(self.controller.handle, NO_HANDLE)
        self.assertEqual(self.backend.live, [])


if __name__ == "__main__":
    unittest.main()
