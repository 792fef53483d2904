class ScriptedRandom:
    """Random source that hands out pre-chosen cells, in order."""

    def __init__(self, cells):
        self._values = [v for cell in cells for v in cell]

    def randrange(self, n):
        return self._values.pop(0)

    def choice(self, seq):
        return seq[0]


class FakeStore:
    def __init__(self, value=0):
        self.value = value
        self.saves = []

    def load(self):
        return self.value

    def save(self, score):
        self.saves.append(score)


def serpentine(size):
    """Every cell of a size x size grid as one boustrophedon path."""
    path = []
    for y in range(size):
        xs = range(size) if y % 2 == 0 else reversed(range(size))
        path.extend((x, y) for x in xs)
    return path
