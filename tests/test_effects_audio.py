import pytest

from game.platformer.audio import SoundManager
from game.platformer.effects import Effects
from game.platformer.utils import make_rng


class Recorder:
    def __init__(self, fail=False):
        self.played = []
        self.fail = fail

    def play(self, cue):
        if self.fail:
            raise RuntimeError("no audio device")
        self.played.append(cue)


def test_particles_age_out():
    fx = Effects(make_rng(0))
    fx.explosion(0.0, 0.0, "#ffffff")
    fx.dust(0.0, 0.0)
    assert len(fx.particles) == 18

    for _ in range(20):
        fx.update()
    assert len(fx.particles) == 15

    for _ in range(10):
        fx.update()
    assert fx.particles == []


def test_shake_decays_to_zero():
    fx = Effects(make_rng(0))
    fx.shake(10, 3)
    fx.update()
    assert fx.shake_intensity == pytest.approx(9.0)
    for _ in range(3):
        fx.update()
    assert fx.shake_intensity == 0.0


def test_sound_plays_through_backend():
    backend = Recorder()
    sound = SoundManager(backend=backend)
    sound.play_jump()
    sound.play_coin()
    assert backend.played == ["jump", "coin"]


def test_muted_sound_is_silent():
    backend = Recorder()
    sound = SoundManager(backend=backend, muted=True)
    sound.play_damage()
    assert backend.played == []


def test_unknown_cue_raises():
    with pytest.raises(ValueError):
        SoundManager(backend=Recorder()).play("explosion")


def test_backend_failure_disables_audio(capsys):
    backend = Recorder(fail=True)
    sound = SoundManager(backend=backend)
    sound.play_attack()
    sound.play_attack()
    assert sound.backend is None
    assert capsys.readouterr().out.count("[SoundManager]") == 1


def test_synth_backend_keeps_players_until_they_end():
    pyglet = pytest.importorskip("pyglet")
    pyglet.options["audio"] = ("silent",)
    from game.platformer.audio import SynthBackend

    backend = SynthBackend()
    backend.play("coin")
    assert len(backend.players) == 1

    backend.players[0].dispatch_event("on_player_eos")
    assert backend.players == []
