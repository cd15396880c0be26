from game.platformer.utils import clamp, hex_to_rgb, rects_overlap


def test_touching_rects_do_not_overlap():
    assert not rects_overlap((0, 0, 10, 10), (10, 0, 20, 10))
    assert not rects_overlap((0, 0, 10, 10), (0, 10, 10, 20))
    assert rects_overlap((0, 0, 10, 10), (9, 9, 20, 20))


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0


def test_hex_to_rgb():
    assert hex_to_rgb("#0f172a") == (15, 23, 42)
