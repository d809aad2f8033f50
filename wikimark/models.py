"""
Domain types shared by the resolver pipeline.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, List, Optional, Tuple


class Classification(str, Enum):
    """How an incoming token is resolved."""

    LOOKUP = "lookup"
    SEARCH = "search"


class Rank(Enum):
    """Wikidata statement rank. Lower value means higher priority.

    UNKNOWN marks a rank code the resolver does not recognise and sorts
    after every known rank.
    """

    PREFERRED = 1
    NORMAL = 2
    DEPRECATED = 100
    UNKNOWN = 1000


@dataclass(frozen=True)
class Destination:
    url: str
    rank: Rank = Rank.UNKNOWN


@dataclass(frozen=True)
class Entity:
    uri: str
    label: str
    description: str
    destinations: Tuple[Destination, ...] = ()

    @property
    def urls(self) -> List[str]:
        return [d.url for d in self.destinations]


class EntityMap:
    """
    Insertion-ordered mapping of entity URI to Entity.

    Order reflects the endpoint's relevance ordering, so the first entry is
    the top result. Keys are unique; once frozen the map rejects changes.
    """

    def __init__(self):
        self._keys: List[str] = []
        self._entities: dict = {}
        self._frozen = False

    def insert(self, entity: Entity) -> Entity:
        """Add a new entity. Raises KeyError if its URI is already present."""
        self._check_mutable()
        if entity.uri in self._entities:
            raise KeyError(f"Entity already present: {entity.uri}")
        self._keys.append(entity.uri)
        self._entities[entity.uri] = entity
        return entity

    def add_destination(self, uri: str, destination: Destination) -> None:
        self._check_mutable()
        entity = self._entities[uri]
        self._entities[uri] = replace(entity, destinations=entity.destinations + (destination,))

    def freeze(self) -> "EntityMap":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self):
        if self._frozen:
            raise RuntimeError("EntityMap is frozen")

    def top(self) -> Optional[Entity]:
        """Return the top result, or None for an empty map."""
        if not self._keys:
            return None
        return self._entities[self._keys[0]]

    def others(self) -> List[Entity]:
        """Return every entity after the top result, in order."""
        return [self._entities[k] for k in self._keys[1:]]

    def get(self, uri: str) -> Optional[Entity]:
        return self._entities.get(uri)

    def items(self) -> List[Tuple[str, Entity]]:
        return [(k, self._entities[k]) for k in self._keys]

    def __contains__(self, uri: object) -> bool:
        return uri in self._entities

    def __getitem__(self, uri: str) -> Entity:
        return self._entities[uri]

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._keys))

    def __len__(self) -> int:
        return len(self._keys)

    def __bool__(self) -> bool:
        return bool(self._keys)

    def __repr__(self) -> str:
        return f"EntityMap({self._keys!r})"
