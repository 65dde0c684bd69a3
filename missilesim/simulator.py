"""The engagement simulator: entities arrive over UDP, move, and collide."""

from __future__ import annotations

import argparse
import logging
import threading
from typing import Optional, Union

from .datatypes import MissileInfo, TargetInfo, decode_message
from .entities import Entity, EntityOutOfBounds, Missile, Target
from .udp_server import UDPServer

__all__ = ["COLLISION_RANGE", "detect_collision", "Simulation", "main"]

COLLISION_RANGE = 100.0
DEFAULT_PORT = 9000

log = logging.getLogger(__name__)


def detect_collision(missile: Missile, target: Target) -> bool:
    """True when the two are within 100 units of each other on both axes."""
    return (
        abs(missile.x - target.x) <= COLLISION_RANGE
        and abs(missile.y - target.y) <= COLLISION_RANGE
    )


class Simulation:
    """Holds the entities, moves each in its own thread and removes collisions."""

    def __init__(self, tick: float = 0.1, collision_interval: float = 1.0) -> None:
        self.tick = tick
        self.collision_interval = collision_interval
        self._entities: list[Entity] = []
        self._lock = threading.RLock()
        self._stopped = threading.Event()

    @property
    def entities(self) -> list[Entity]:
        """A snapshot of the current entities."""
        with self._lock:
            return list(self._entities)

    @property
    def running(self) -> bool:
        return not self._stopped.is_set()

    def add_entity(self, entity: Entity) -> None:
        with self._lock:
            self._entities.append(entity)

    def resolve_collisions(self) -> list[tuple[Missile, Target]]:
        """Remove every missile that hit a target along with the targets it hit."""
        hits: list[tuple[Missile, Target]] = []
        with self._lock:
            survivors = list(self._entities)
            missiles = [e for e in survivors if isinstance(e, Missile)]
            for missile in missiles:
                struck = [
                    e for e in survivors if isinstance(e, Target) and detect_collision(missile, e)
                ]
                if not struck:
                    continue
                for target in struck:
                    log.info("*** Collision! ***")
                    log.info("Missile ID: [%s], position: (x: %.2f, y: %.2f)", missile.id, missile.x, missile.y)
                    log.info("Target name: [%s], position: (x: %.2f, y: %.2f)", target.name, target.x, target.y)
                    hits.append((missile, target))
                log.info("Removing missile ID: %s", missile.id)
                gone = {id(missile), *(id(t) for t in struck)}
                survivors = [e for e in survivors if id(e) not in gone]
            self._entities[:] = survivors
        return hits

    def _spawn(self, entity: Entity) -> None:
        self.add_entity(entity)
        threading.Thread(target=self._run_entity, args=(entity,), daemon=True).start()

    def handle_message(self, data: bytes) -> Optional[Entity]:
        """Create an entity from a packet and start moving it; None if the packet is bad."""
        try:
            record: Union[MissileInfo, TargetInfo] = decode_message(data)
        except ValueError as exc:
            log.error("[UDP] error while handling command: %s", exc)
            return None
        if isinstance(record, MissileInfo):
            log.info(
                "Received MissileInfo - missile_id: %s, LS_pos_x: %s, LS_pos_y: %s, Speed: %s, Degree: %s",
                record.missile_id, record.ls_pos_x, record.ls_pos_y, record.speed, record.degree,
            )
            entity: Entity = Missile(
                id=record.missile_id, x=record.ls_pos_x, y=record.ls_pos_y,
                speed=record.speed, degree=record.degree,
            )
        else:
            log.info(
                "Received TargetInfo - Name: %s, Pos_x: %s, Pos_y: %s, Speed: %s, Degree: %s",
                record.name, record.pos_x, record.pos_y, record.speed, record.degree,
            )
            entity = Target(
                name=record.name, x=record.pos_x, y=record.pos_y,
                speed=record.speed, degree=record.degree,
            )
        self._spawn(entity)
        return entity

    def step_entity(self, entity: Entity, delta_time: float) -> bool:
        """Move one entity; False once it has left the map."""
        try:
            with self._lock:
                entity.update_position(delta_time)
        except EntityOutOfBounds as exc:
            log.error("Entity removed: %s", exc)
            return False
        if isinstance(entity, Missile):
            log.info("[Missile] ID: %s, x: %.2f, y: %.2f", entity.id, entity.x, entity.y)
        elif isinstance(entity, Target):
            log.info("[Target] Name: %s, x: %.2f, y: %.2f", entity.name, entity.x, entity.y)
        return True

    def _run_entity(self, entity: Entity) -> None:
        while not self._stopped.is_set():
            if not self.step_entity(entity, self.tick):
                break
            self._stopped.wait(self.tick)

    def collision_loop(self) -> None:
        """Report and resolve collisions every interval until stopped."""
        elapsed = 0
        while not self._stopped.is_set():
            with self._lock:
                log.info("========================================")
                log.info("Entities: %d", len(self._entities))
                log.info("Elapsed: %ds", elapsed)
                log.info("========================================")
                self.resolve_collisions()
            self._stopped.wait(self.collision_interval)
            elapsed += 1

    def stop(self) -> None:
        """Stop the collision loop and all entity threads."""
        self._stopped.set()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run the missile engagement simulator.")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="UDP port to listen on")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    simulation = Simulation()
    with UDPServer(args.port) as server:
        server.set_message_handler(simulation.handle_message)
        collisions = threading.Thread(target=simulation.collision_loop, daemon=True)
        collisions.start()
        try:
            server.start()
        except KeyboardInterrupt:
            pass
        finally:
            simulation.stop()
            collisions.join()
    return 0