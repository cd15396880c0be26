from game.platformer.cheats import CHEAT_GOLD, CHEAT_SECRET, CHEAT_SKIP, CheatBuffer


def feed_all(buffer, text):
    return [buffer.feed(c) for c in text]


def test_codes_match_case_insensitively():
    buffer = CheatBuffer()
    assert feed_all(buffer, "xxneymar")[-1] == CHEAT_GOLD
    assert feed_all(buffer, "Messi")[-1] == CHEAT_SKIP
    assert feed_all(buffer, "thetruecr7")[-1] == CHEAT_SECRET


def test_only_the_last_char_reports():
    results = feed_all(CheatBuffer(), "MESSI")
    assert results[:-1] == [None] * 4


def test_other_characters_are_ignored():
    assert feed_all(CheatBuffer(), "NEY-M AR!")[-2] == CHEAT_GOLD


def test_buffer_is_cleared_after_match():
    buffer = CheatBuffer()
    feed_all(buffer, "MESSI")
    assert buffer.buffer == ""
    assert feed_all(buffer, "SSI")[-1] is None


def test_buffer_keeps_last_twelve():
    buffer = CheatBuffer()
    feed_all(buffer, "ABCDEFGHIJKLMNOP")
    assert buffer.buffer == "EFGHIJKLMNOP"
