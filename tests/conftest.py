import pytest

from game.platformer import Game, SaveStore, SoundManager
from game.platformer.entities import Door, Platform, Player


class ManualClock:
    """Millisecond clock the test advances by hand"""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def store():
    return SaveStore()


@pytest.fixture
def game(store, clock):
    return Game(store=store, sound=SoundManager(muted=True), clock=clock, seed=7)


@pytest.fixture
def flat_game(game):
    """A running game on a single wide floor with nothing else in it"""
    game.start_game()
    game.platforms = [Platform("floor", 0.0, 560.0, 2000.0, 40.0, kind="floor")]
    game.coins = []
    game.enemies = []
    game.yellow_coins = []
    game.door = Door(1800.0, 500.0)
    game.player = Player(100.0, 528.0, hp=game.player_max_hp, max_hp=game.player_max_hp)
    return game
