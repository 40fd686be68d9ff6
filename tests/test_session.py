from block_smash.game import GameConfig, Move, restart, start, stop
from block_smash.game.shapes import Color, PieceType


class RecordingAudio:
    def __init__(self):
        self.calls = []

    def play(self, name):
        self.calls.append(("play", name))

    def start_music(self):
        self.calls.append(("start_music",))
        return True

    def stop_all(self):
        self.calls.append(("stop_all",))


def test_events_are_forwarded_to_the_audio_sink():
    audio = RecordingAudio()
    handle = start(GameConfig(forced_shapes=[PieceType.O]), audio)
    bottom = handle.game.grid.height - 1
    handle.game.grid.grid[bottom, :] = Color.RED
    handle.game.grid.grid[bottom, 4:6] = 0

    for _ in range(5000):
        if handle.tick().locked:
            break
    assert audio.calls == [("start_music",), ("play", "lock"), ("play", "single")]
    assert handle.game.score == 40


def test_stop_halts_ticks_and_releases_audio():
    audio = RecordingAudio()
    handle = start(GameConfig(), audio)
    handle.tick()
    stop(handle)
    assert not handle.running
    assert audio.calls == [("start_music",), ("stop_all",)]

    ticks = handle.game.tick_count
    result = handle.tick([Move.LEFT])
    assert handle.game.tick_count == ticks
    assert result.events == []

    stop(handle)
    assert audio.calls == [("start_music",), ("stop_all",)]


def test_game_over_stops_the_session_then_cues_sound():
    audio = RecordingAudio()
    handle = start(GameConfig(forced_shapes=[PieceType.O]), audio)
    handle.game.grid.grid[:, 1:] = Color.GREEN

    for _ in range(100):
        result = handle.tick()
        if result.game_over:
            break
    assert handle.game_over
    assert not handle.running
    assert audio.calls == [("start_music",), ("stop_all",), ("play", "gameover")]
    assert handle.stats()["game_over"] is True


def test_max_runtime_stops_the_session():
    handle = start(GameConfig(max_runtime=5.0))
    handle.started_at -= 10
    handle.tick()
    assert not handle.running
    assert not handle.game_over


def test_restart_builds_an_independent_session():
    audio = RecordingAudio()
    first = start(GameConfig(random_seed=9), audio)
    first.game.grid.grid[10, 3] = Color.BLUE
    second = restart(first)
    assert not first.running
    assert second.running
    assert second.game is not first.game
    assert not second.game.grid.grid.any()
    assert second.audio is audio
    assert audio.calls == [("start_music",), ("stop_all",), ("start_music",)]


def test_pushed_moves_reach_the_engine_buffer():
    handle = start()
    handle.push(Move.RIGHT)
    assert handle.game.inputs == [Move.RIGHT]
    stop(handle)
    handle.push(Move.LEFT)
    assert handle.game.inputs == [Move.RIGHT]
