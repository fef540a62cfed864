class Body:
    def __init__(self, mass: float, x: float, y: float, vx: float, vy: float):
        self.mass = float(mass)
        self.x = float(x)
        self.y = float(y)
        self.vx = float(vx)
        self.vy = float(vy)

    def copy(self) -> 'Body':
        return Body(self.mass, self.x, self.y, self.vx, self.vy)

    def __eq__(self, other):
        if not isinstance(other, Body):
            return NotImplemented
        return (self.mass, self.x, self.y, self.vx, self.vy) == (other.mass, other.x, other.y, other.vx, other.vy)

    __hash__ = None

    def __repr__(self):
        return f'M:{self.mass} P:({self.x}, {self.y})  V: ({self.vx}, {self.vy})'
