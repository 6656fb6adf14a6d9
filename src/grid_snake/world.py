"""Entity store addressed by generation-checked integer handles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

C = TypeVar("C")


class MissingComponent(LookupError):
    """Raised when an entity lacks a requested component."""


class NoSuchEntity(MissingComponent):
    """Raised when a handle refers to an entity that no longer exists."""


@dataclass(frozen=True, order=True)
class Entity:
    """Opaque, non-owning entity handle.

    A slot index is recycled after despawn with a bumped generation, so a
    stale handle never aliases the entity that reuses its slot.
    """

    index: int
    generation: int = 0

    def __repr__(self) -> str:
        return f"Entity({self.index}v{self.generation})"


class World:
    """Associates entities with typed component records.

    Components are keyed by their concrete type; an entity holds at most one
    component of each type. Query results are materialized lists, so
    despawning entities while iterating a result is safe.
    """

    def __init__(self) -> None:
        self._generations: list[int] = []
        self._free: list[int] = []
        self._alive: dict[Entity, None] = {}
        self._components: dict[type, dict[Entity, Any]] = {}

    def __len__(self) -> int:
        return len(self._alive)

    def __contains__(self, entity: object) -> bool:
        return entity in self._alive

    def spawn(self, *components: Any) -> Entity:
        """Create an entity carrying *components* and return its handle."""
        if self._free:
            index = self._free.pop()
            self._generations[index] += 1
        else:
            index = len(self._generations)
            self._generations.append(0)
        entity = Entity(index, self._generations[index])
        self._alive[entity] = None
        for component in components:
            self.insert(entity, component)
        return entity

    def despawn(self, entity: Entity) -> None:
        """Remove *entity* and every component attached to it."""
        self._require_alive(entity)
        del self._alive[entity]
        for store in self._components.values():
            store.pop(entity, None)
        self._free.append(entity.index)

    def clear(self) -> None:
        """Despawn every entity."""
        for entity in list(self._alive):
            self.despawn(entity)

    def is_alive(self, entity: Entity) -> bool:
        return entity in self._alive

    def insert(self, entity: Entity, component: Any) -> None:
        """Attach *component*, replacing any existing one of the same type."""
        self._require_alive(entity)
        self._components.setdefault(type(component), {})[entity] = component

    def has(self, entity: Entity, component_type: type) -> bool:
        store = self._components.get(component_type)
        return store is not None and entity in store

    def get(self, entity: Entity, component_type: type[C]) -> C:
        """Return the component of *component_type* attached to *entity*.

        The returned object is the stored instance; mutating it mutates the
        world.
        """
        self._require_alive(entity)
        store = self._components.get(component_type)
        if store is None or entity not in store:
            raise MissingComponent(
                f"{entity!r} has no {component_type.__name__} component."
            )
        return store[entity]

    def query(self, *component_types: type) -> list[tuple[Any, ...]]:
        """Return ``(entity, c1, c2, ...)`` for entities holding all types."""
        if not component_types:
            raise ValueError("query requires at least one component type.")
        stores = [self._components.get(ct) for ct in component_types]
        if any(store is None for store in stores):
            return []
        # Drive iteration from the smallest store.
        driver = min(stores, key=len)
        results: list[tuple[Any, ...]] = []
        for entity in driver:
            if all(entity in store for store in stores):
                results.append(
                    (entity, *(store[entity] for store in stores))
                )
        results.sort(key=lambda row: row[0])
        return results

    def entities_with(self, *component_types: type) -> list[Entity]:
        """Return handles of every entity holding all *component_types*."""
        return [row[0] for row in self.query(*component_types)]

    def _require_alive(self, entity: Entity) -> None:
        if entity not in self._alive:
            raise NoSuchEntity(f"{entity!r} does not exist.")
