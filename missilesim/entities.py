"""Moving objects of the engagement simulation: missiles and targets."""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

__all__ = [
    "MAP_SIZE_X",
    "MAP_SIZE_Y",
    "EntityOutOfBounds",
    "Entity",
    "Missile",
    "Target",
]

MAP_SIZE_X = 5000.0
MAP_SIZE_Y = 5000.0

log = logging.getLogger(__name__)


class EntityOutOfBounds(RuntimeError):
    """Raised when an entity leaves the map."""


def _advance(x: float, y: float, speed: float, degree: float, delta_time: float) -> tuple[float, float]:
    """Move a point along a heading; only a positive speed moves it."""
    if speed > 0:
        radian = math.radians(degree)
        x += speed * delta_time * math.cos(radian)
        y += speed * delta_time * math.sin(radian)
    return x, y


class Entity(ABC):
    """Something on the map with a position that moves over time."""

    x: float
    y: float

    @abstractmethod
    def update_position(self, delta_time: float) -> None:
        """Advance the entity by ``delta_time`` seconds."""

    def check_bounds(self, name: str, x: float, y: float) -> None:
        """Raise :class:`EntityOutOfBounds` if ``(x, y)`` lies outside the map."""
        if x < 0 or x > MAP_SIZE_X or y < 0 or y > MAP_SIZE_Y:
            log.warning("[%s] Entity out of bounds and removed - x: %.2f, y: %.2f", name, x, y)
            raise EntityOutOfBounds(f"[{name}] Entity removed due to out-of-bounds")


@dataclass(eq=False)
class Missile(Entity):
    """A missile flying at a fixed speed (distance per second) and heading in degrees."""

    id: int
    x: float
    y: float
    speed: float
    degree: float

    def update_position(self, delta_time: float) -> None:
        self.x, self.y = _advance(self.x, self.y, self.speed, self.degree, delta_time)
        self.check_bounds(str(self.id), self.x, self.y)
        log.debug(
            "[%s] Missile updated - x: %.2f, y: %.2f, degree: %.2f, speed: %.2f",
            self.id, self.x, self.y, self.degree, self.speed,
        )


@dataclass(eq=False)
class Target(Entity):
    """A named target moving at a fixed speed and heading in degrees."""

    name: str
    x: float
    y: float
    speed: float
    degree: float

    def update_position(self, delta_time: float) -> None:
        self.x, self.y = _advance(self.x, self.y, self.speed, self.degree, delta_time)
        self.check_bounds(self.name, self.x, self.y)
        log.debug(
            "[%s] Target updated - x: %.2f, y: %.2f, degree: %.2f, speed: %.2f",
            self.name, self.x, self.y, self.degree, self.speed,
        )