"""Folding Open Graph tags into an ordered, read-only graph.

A top-level key holds either a single value (:class:`Bare`) or an ordered
list of :class:`Slot` records (:class:`Slots`).  A key becomes ``Slots`` the
first time it repeats or gains a nested child and never goes back::

    og:image          -> Bare("a.jpg")
    og:image          -> Slots([{value: "a.jpg"}, {value: "b.jpg"}])
    og:image:width    -> Slots([{value: "a.jpg"}, {value: "b.jpg", width: 300}])

Nested children always attach to the last slot.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from opengraph.coerce import CoercedValue, coerce_value
from opengraph.options import ParseOptions
from opengraph.scanner import MetaPair

logger = logging.getLogger(__name__)

# Open Graph object types grouped by schema.
TYPE_GROUPS: dict[str, tuple[str, ...]] = {
    "activity": ("activity", "sport"),
    "business": ("bar", "company", "cafe", "hotel", "restaurant"),
    "group": ("cause", "sports_league", "sports_team"),
    "organization": ("band", "government", "non_profit", "school", "university"),
    "person": (
        "actor", "athlete", "author", "director", "musician", "politician",
        "public_figure",
    ),
    "place": ("city", "country", "landmark", "state_province"),
    "product": (
        "album", "book", "drink", "food", "game", "movie", "product", "song",
        "tv_show",
    ),
    "website": ("blog", "website"),
}

LOCATION_COORDINATES = ("latitude", "longitude")
LOCATION_ADDRESS = ("street_address", "locality", "region", "postal_code", "country_name")


def schema_for_type(og_type: Any) -> str | None:
    """Return the schema group of an ``og:type`` value, e.g. ``"movie"`` -> ``"product"``."""
    if not isinstance(og_type, str):
        return None
    for group, types in TYPE_GROUPS.items():
        if og_type in types:
            return group
    return None


# ---------------------------------------------------------------------------
# Entry variants
# ---------------------------------------------------------------------------

class Slot(Mapping):
    """One occurrence of a repeated or nested key.

    Behaves as a read-only mapping of ``"value"`` (when set) plus any child
    fields, in the order they were attached.  Attaching a child returns a
    new slot.
    """

    __slots__ = ("_value", "_fields")

    def __init__(
        self,
        value: CoercedValue | None = None,
        fields: Mapping[str, CoercedValue] | None = None,
    ) -> None:
        self._value = value
        self._fields: dict[str, CoercedValue] = dict(fields or {})

    @property
    def value(self) -> CoercedValue | None:
        return self._value

    @property
    def has_value(self) -> bool:
        return self._value is not None

    def with_child(self, key: str, value: CoercedValue) -> Slot:
        if key == "value":
            return Slot(value, self._fields)
        return Slot(self._value, {**self._fields, key: value})

    def _as_dict(self) -> dict[str, CoercedValue]:
        out: dict[str, CoercedValue] = {}
        if self._value is not None:
            out["value"] = self._value
        out.update(self._fields)
        return out

    def __getitem__(self, key: str) -> CoercedValue:
        if key == "value" and self._value is not None:
            return self._value
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._as_dict())

    def __len__(self) -> int:
        return len(self._fields) + (1 if self._value is not None else 0)

    def __repr__(self) -> str:
        return f"Slot({self._as_dict()!r})"


@dataclass(frozen=True)
class Bare:
    value: CoercedValue

    def unwrap(self) -> CoercedValue:
        return self.value

    def to_plain(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Slots:
    slots: tuple[Slot, ...] = ()

    def unwrap(self) -> tuple[Slot, ...]:
        return self.slots

    def to_plain(self) -> list[dict[str, CoercedValue]]:
        return [s._as_dict() for s in self.slots]


Entry = Bare | Slots


def merge_top_level(entry: Entry | None, value: CoercedValue) -> Entry:
    """Merge a plain ``og:key`` occurrence into the existing entry."""
    if entry is None:
        return Bare(value)
    if isinstance(entry, Bare):
        return Slots((Slot(entry.value), Slot(value)))
    return Slots((*entry.slots, Slot(value)))


def merge_nested(entry: Entry | None, child_key: str, value: CoercedValue) -> Slots:
    """Attach ``og:key:child_key`` to the latest occurrence of ``key``.

    A child seen before any parent tag creates a slot with no value.
    """
    if entry is None:
        entry = Slots((Slot(),))
    elif isinstance(entry, Bare):
        entry = Slots((Slot(entry.value),))
    *head, last = entry.slots
    return Slots((*head, last.with_child(child_key, value)))


def split_key(prop: str) -> tuple[str, str | None]:
    """Split ``"image:width"`` into ``("image", "width")``; only the first colon counts."""
    parent, sep, child = prop.partition(":")
    if not sep:
        return prop, None
    return parent, child


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

class GraphBuilder:
    """Accumulates :class:`MetaPair` values into an :class:`OpenGraph`."""

    def __init__(self, options: ParseOptions | None = None) -> None:
        self._options = options or ParseOptions()
        self._entries: dict[str, Entry] = {}

    def add(self, pair: MetaPair) -> None:
        key, child_key = split_key(pair.property)
        value = coerce_value(pair.content, self._options)
        if child_key is None:
            self._entries[key] = merge_top_level(self._entries.get(key), value)
        else:
            self._entries[key] = merge_nested(self._entries.get(key), child_key, value)

    def build(self) -> OpenGraph | None:
        if not self._entries:
            return None
        return OpenGraph(self._entries)


def aggregate(
    pairs: Iterable[MetaPair],
    options: ParseOptions | None = None,
) -> OpenGraph | None:
    """Fold *pairs* into a graph; None when there were no pairs."""
    builder = GraphBuilder(options)
    count = 0
    for pair in pairs:
        builder.add(pair)
        count += 1
    logger.debug("Aggregated %d Open Graph tags", count)
    return builder.build()


# ---------------------------------------------------------------------------
# Query surface
# ---------------------------------------------------------------------------

class GraphCursor:
    """Forward-only iterator over ``(key, value)`` pairs with explicit rewind."""

    def __init__(self, items: list[tuple[str, Any]]) -> None:
        self._items = items
        self._position = 0

    def __iter__(self) -> GraphCursor:
        return self

    def __next__(self) -> tuple[str, Any]:
        if self._position >= len(self._items):
            raise StopIteration
        item = self._items[self._position]
        self._position += 1
        return item

    def reset(self) -> None:
        self._position = 0


class OpenGraph:
    """Open Graph data parsed from one page.

    Values are looked up with :meth:`get`; a single occurrence comes back as
    the coerced value itself, a repeated or nested key as a tuple of
    :class:`Slot` mappings.
    """

    def __init__(self, entries: Mapping[str, Entry]) -> None:
        self._entries: dict[str, Entry] = dict(entries)

    def get(self, key: str, default: Any = None) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return default
        return entry.unwrap()

    def entry(self, key: str) -> Entry | None:
        return self._entries.get(key)

    def keys(self) -> list[str]:
        return list(self._entries)

    def as_dict(self) -> dict[str, Any]:
        """Plain ``dict``/``list`` copy of all values."""
        return {k: e.to_plain() for k, e in self._entries.items()}

    def items(self) -> GraphCursor:
        return GraphCursor([(k, e.unwrap()) for k, e in self._entries.items()])

    def has_location(self) -> bool:
        """True when the page carries coordinates or a full postal address."""
        if all(k in self._entries for k in LOCATION_COORDINATES):
            return True
        return all(k in self._entries for k in LOCATION_ADDRESS)

    def schema(self) -> str | None:
        return schema_for_type(self.get("type"))

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> GraphCursor:
        return self.items()

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"OpenGraph({self.as_dict()!r})"
