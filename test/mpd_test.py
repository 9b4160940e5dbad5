import pytest

from gesturem.library import Track
from gesturem.players import create_backend
from gesturem.players.mpdplayer import MPDBackend, MPDConnectionError


@pytest.fixture
def client(mocker):
    client = mocker.Mock()
    mocker.patch("gesturem.players.mpdplayer.MPDClient", return_value=client)
    return client


def test_registry(client):
    backend = create_backend("mpd", {"host": "music", "port": "6601"})

    assert isinstance(backend, MPDBackend)
    assert backend.host == "music"
    assert backend.port == 6601


def test_unknown_backend():
    with pytest.raises(ValueError):
        create_backend("vlc")


def test_player_lifecycle(client):
    backend = MPDBackend()
    player = backend.create_player(Track("album/one.mp3", "One"))

    client.connect.assert_called_once_with("localhost", 6600)
    client.clear.assert_called_once_with()
    client.add.assert_called_once_with("album/one.mp3")

    player.start()
    client.play.assert_called_once_with(0)

    player.pause()
    client.pause.assert_called_with(1)

    player.start()
    client.pause.assert_called_with(0)
    assert client.play.call_count == 1

    player.release()
    client.stop.assert_called_once_with()
    assert client.clear.call_count == 2


def test_connection_failure(client):
    client.connect.side_effect = ConnectionRefusedError("refused")
    backend = MPDBackend()

    assert backend.connect() is None
    with pytest.raises(ConnectionError):
        backend.create_player(Track("one.mp3", "One"))


def test_add_failure_propagates(client):
    client.add.side_effect = OSError("broken pipe")
    backend = MPDBackend()

    with pytest.raises(OSError):
        backend.create_player(Track("one.mp3", "One"))

    # reconnect on next use
    assert backend.client is None


def test_close(client):
    backend = MPDBackend()
    backend.connect()
    backend.close()

    client.disconnect.assert_called_once_with()
    assert backend.client is None


def test_stale_connection_reopened(client):
    backend = MPDBackend()
    backend.connect()
    client.clear.side_effect = [MPDConnectionError("Connection lost while reading line"), None]

    player = backend.create_player(Track("one.mp3", "One"))

    assert client.connect.call_count == 2
    client.disconnect.assert_called_once_with()
    client.add.assert_called_once_with("one.mp3")
    assert player.track.title == "One"


def test_stale_connection_on_start(client):
    backend = MPDBackend()
    player = backend.create_player(Track("one.mp3", "One"))
    client.play.side_effect = [MPDConnectionError("Connection lost"), None]

    player.start()

    assert client.play.call_count == 2
    assert client.connect.call_count == 2
    assert player.started


def test_reconnect_only_once(client):
    backend = MPDBackend()
    player = backend.create_player(Track("one.mp3", "One"))
    client.pause.side_effect = MPDConnectionError("Connection lost")

    with pytest.raises(MPDConnectionError):
        player.pause()

    assert client.pause.call_count == 2
    assert backend.client is None
