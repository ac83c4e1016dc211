from collections.abc import Callable

MAX_STEP_SECONDS = 1 / 120


class AnimatedNumber:
    """Damped spring that eases a displayed value towards a target.

    Integrates ``m*a = -k*(x - target) - c*v`` with semi-implicit Euler,
    subdividing large frames so the motion stays stable.
    """

    def __init__(
        self,
        value: float,
        mass: float = 0.8,
        stiffness: float = 75.0,
        damping: float = 15.0,
        rest_delta: float = 0.01,
        rest_speed: float = 0.01,
    ) -> None:
        for name, amount in (("mass", mass), ("stiffness", stiffness), ("damping", damping)):
            if amount <= 0:
                raise ValueError(f"{name} must be positive")
        self.mass = mass
        self.stiffness = stiffness
        self.damping = damping
        self.rest_delta = rest_delta
        self.rest_speed = rest_speed
        self.current = float(value)
        self.target = float(value)
        self.velocity = 0.0

    def set(self, target: float) -> None:
        # velocity carries over so re-targeting mid-flight stays smooth
        self.target = float(target)

    def jump(self, value: float) -> None:
        self.current = self.target = float(value)
        self.velocity = 0.0

    @property
    def is_settled(self) -> bool:
        return abs(self.target - self.current) <= self.rest_delta and abs(self.velocity) <= self.rest_speed

    def step(self, dt: float) -> float:
        if dt < 0:
            raise ValueError("dt must be non-negative")
        remaining = dt
        while remaining > 0 and not self.is_settled:
            h = min(remaining, MAX_STEP_SECONDS)
            force = -self.stiffness * (self.current - self.target) - self.damping * self.velocity
            self.velocity += force / self.mass * h
            self.current += self.velocity * h
            remaining -= h
        if self.is_settled:
            self.current = self.target
            self.velocity = 0.0
        return self.current

    def display(self, formatter: Callable[[float], str]) -> str:
        return formatter(self.current)
