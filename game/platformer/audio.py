"""
Fire-and-forget sound cues.

Tones are synthesized with pyglet (Arcade's media layer) the first time a cue
plays. Audio is best-effort: if the backend fails, sound is disabled for the
rest of the session.
"""

from __future__ import annotations

from typing import Dict, Optional

CUES = ("jump", "attack", "coin", "enemy_death", "damage")


class SynthBackend:
    """Builds one static pyglet source per cue and plays it on demand"""

    def __init__(self):
        from pyglet.media import StaticSource
        from pyglet.media.synthesis import (
            LinearDecayEnvelope, Sawtooth, Sine, Square, WhiteNoise,
        )

        decay = LinearDecayEnvelope(peak=0.1)
        loud = LinearDecayEnvelope(peak=0.2)
        # Pitch sweeps are approximated by two short segments
        self.sources: Dict[str, list] = {
            "jump": [Square(0.05, frequency=300, envelope=decay),
                     Square(0.05, frequency=600, envelope=decay)],
            "attack": [WhiteNoise(0.1, envelope=decay)],
            "coin": [Sine(0.05, frequency=1200, envelope=decay),
                     Sine(0.25, frequency=1800, envelope=decay)],
            "enemy_death": [Sawtooth(0.1, frequency=200, envelope=decay),
                            Sawtooth(0.1, frequency=50, envelope=decay)],
            "damage": [Sawtooth(0.3, frequency=100, envelope=loud),
                       Square(0.3, frequency=150, envelope=loud)],
        }
        self.sources = {name: [StaticSource(s) for s in parts] for name, parts in self.sources.items()}
        # pyglet only holds weak references to players; keep each one until it ends
        self.players: list = []

    def play(self, cue: str):
        parts = self.sources[cue]
        if cue == "damage":
            # Both oscillators together
            for src in parts:
                src.play()
            return
        from pyglet.media import Player
        player = Player()
        for src in parts:
            player.queue(src)
        player.push_handlers(on_player_eos=lambda: self._finished(player))
        self.players.append(player)
        player.play()

    def _finished(self, player):
        if player in self.players:
            self.players.remove(player)


class SoundManager:
    """Global-mute-aware cue player; any object with play(cue) can be the backend"""

    def __init__(self, backend=None, muted: bool = False, verbose: int = 0):
        self.backend = backend
        self.muted = muted
        self.verbose = verbose
        self._failed = False

    def init(self) -> Optional[object]:
        if self.backend is None and not self._failed:
            try:
                self.backend = SynthBackend()
            except Exception as e:
                self._disable(e)
        return self.backend

    def _disable(self, error: Exception):
        self._failed = True
        self.backend = None
        print(f"[SoundManager] Audio disabled: {error}")

    def play(self, cue: str):
        if self.muted or self._failed:
            return
        if cue not in CUES:
            raise ValueError(f"Unknown sound cue: {cue}")
        backend = self.init()
        if backend is None:
            return
        try:
            backend.play(cue)
        except Exception as e:
            self._disable(e)

    def play_jump(self):
        self.play("jump")

    def play_attack(self):
        self.play("attack")

    def play_coin(self):
        self.play("coin")

    def play_enemy_death(self):
        self.play("enemy_death")

    def play_damage(self):
        self.play("damage")
