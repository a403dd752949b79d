from invaders.entities import Enemy
from invaders.utils import clamp, collides


class Rect:
    def __init__(self, x, y, width, height):
        self.x, self.y, self.width, self.height = x, y, width, height


def test_overlap_is_symmetric():
    pairs = [
        (Rect(0, 0, 10, 10), Rect(5, 5, 10, 10)),
        (Rect(0, 0, 10, 10), Rect(20, 0, 10, 10)),
        (Rect(0, 0, 4, 10), Rect(-3, 8, 40, 30)),
        (Rect(0, 0, 10, 10), Rect(10, 0, 10, 10)),
    ]
    for a, b in pairs:
        assert collides(a, b) == collides(b, a)


def test_overlap():
    assert collides(Rect(0, 0, 10, 10), Rect(9, 9, 10, 10))
    # Containment counts
    assert collides(Rect(0, 0, 100, 100), Rect(40, 40, 4, 4))


def test_edge_touch_is_not_collision():
    a = Rect(0, 0, 10, 10)
    assert not collides(a, Rect(10, 0, 10, 10))
    assert not collides(a, Rect(0, 10, 10, 10))
    assert not collides(a, Rect(10, 10, 10, 10))


def test_works_with_entities():
    assert collides(Enemy(x=0, y=0), Rect(39, 29, 5, 5))
    assert not collides(Enemy(x=0, y=0), Rect(40, 0, 5, 5))


def test_clamp():
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10
    assert clamp(5, 0, 10) == 5
