# core/uv.py
class UV:
    """
    Represents a 2D parametric surface coordinate used for texture lookup.
    """
    __slots__ = ("u", "v")

    def __init__(self, u: float, v: float):
        self.u = u
        self.v = v

    def __eq__(self, other) -> bool:
        if not isinstance(other, UV):
            return NotImplemented
        return self.u == other.u and self.v == other.v

    def __getstate__(self):
        return (self.u, self.v)

    def __setstate__(self, state):
        self.u, self.v = state

    def __repr__(self) -> str:
        return f"UV({self.u}, {self.v})"
