import json
import os

from game.platformer.state import Cosmetics, SaveData, Upgrades
from game.platformer.storage import FLAGS_FILE, SAVE_FILE, SaveStore


def sample():
    return SaveData(
        gold=42,
        lives=5,
        upgrades=Upgrades(sharp_sword=True, down_strike=True),
        cosmetics=Cosmetics(owned_skins=["default", "crimson"], owned_hats=["none", "crown"],
                            current_skin="crimson", current_hat="crown"),
    )


def test_file_roundtrip(tmp_path):
    store = SaveStore(str(tmp_path))
    assert store.save(sample())
    assert SaveStore(str(tmp_path)).load() == sample()
    assert not os.path.exists(tmp_path / (SAVE_FILE + ".tmp"))


def test_memory_roundtrip():
    store = SaveStore()
    data = sample()
    store.save(data)
    data.gold = 0
    assert store.load() == sample()


def test_saved_file_uses_camel_case_keys(tmp_path):
    SaveStore(str(tmp_path)).save(sample())
    raw = json.loads((tmp_path / SAVE_FILE).read_text())
    assert raw["upgrades"]["sharpSword"] is True
    assert raw["cosmetics"]["currentSkin"] == "crimson"


def test_missing_file_gives_defaults(tmp_path):
    assert SaveStore(str(tmp_path / "nowhere")).load() == SaveData()


def test_corrupt_file_gives_defaults(tmp_path, capsys):
    (tmp_path / SAVE_FILE).write_text("{not json")
    assert SaveStore(str(tmp_path)).load() == SaveData()
    assert "[SaveStore]" in capsys.readouterr().out


def test_non_object_file_gives_defaults(tmp_path):
    (tmp_path / SAVE_FILE).write_text("[1, 2, 3]")
    assert SaveStore(str(tmp_path)).load() == SaveData()


def test_partial_record_merges_over_defaults(tmp_path):
    (tmp_path / SAVE_FILE).write_text(json.dumps({
        "gold": 7,
        "upgrades": {"tripleJump": True},
        "somethingNew": 1,
    }))
    data = SaveStore(str(tmp_path)).load()
    assert data.gold == 7
    assert data.lives == 3
    assert data.upgrades == Upgrades(triple_jump=True)
    assert data.cosmetics == Cosmetics()


def test_secret_flag_persists(tmp_path):
    store = SaveStore(str(tmp_path))
    assert not store.load_secret_unlocked()
    assert store.save_secret_unlocked(True)
    assert SaveStore(str(tmp_path)).load_secret_unlocked()
    assert json.loads((tmp_path / FLAGS_FILE).read_text()) == {"unlockedCR7": True}


def test_secret_flag_must_be_true(tmp_path):
    (tmp_path / FLAGS_FILE).write_text(json.dumps({"unlockedCR7": "yes"}))
    assert not SaveStore(str(tmp_path)).load_secret_unlocked()


def test_unknown_cosmetic_ids_are_dropped(tmp_path):
    (tmp_path / SAVE_FILE).write_text(json.dumps({
        "gold": 20,
        "cosmetics": {"ownedSkins": ["neon", "golden"], "currentSkin": "neon", "currentHat": "crown"},
    }))
    cosmetics = SaveStore(str(tmp_path)).load().cosmetics
    assert cosmetics.owned_skins == ["default", "golden"]
    assert cosmetics.current_skin == "default"
    assert cosmetics.current_hat == "none"
