"""
In-memory SKU selector for products with several variant dimensions.

Given the attribute values a shopper has picked so far, it answers which
SKUs are still reachable (in stock and matching every pick), their price
range and total stock, and which attribute values would lead to a dead end.

This module has no Django dependency; the ORM loading lives in
VariantNavigationService.
"""

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Hashable, Iterable, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttrRef:
    """A (property, attribute) pair. Compared by value, never by identity."""
    prop_id: Hashable
    attr_id: Hashable


@dataclass(frozen=True)
class Attribute:
    id: Hashable
    label: str = ''


@dataclass(frozen=True)
class Property:
    id: Hashable
    label: str = ''
    attrs: Tuple[Attribute, ...] = ()


@dataclass(frozen=True)
class Sku:
    id: Any
    price: Any
    count: int
    attrs: Tuple[AttrRef, ...] = ()


@dataclass(frozen=True)
class SelectionInfo:
    """Reachable SKUs for a selection. Prices are None when nothing is reachable."""
    max_price: Any
    min_price: Any
    count: int
    active_skus: Tuple[Sku, ...]


@dataclass(frozen=True)
class SelectionResult:
    max_price: Any
    min_price: Any
    count: int
    active_skus: Tuple[Sku, ...]
    disabled_attrs: Tuple[AttrRef, ...] = ()


SelectionKey = FrozenSet[AttrRef]


def selection_key(selection: Iterable[AttrRef]) -> SelectionKey:
    """
    Order-independent cache key for a selection.

    Two selections holding the same references in a different order map to
    the same key. The empty selection maps to the empty key.
    """
    return frozenset(selection)


def is_same_attr(attr1: Optional[AttrRef], attr2: Optional[AttrRef]) -> bool:
    if attr1 is None or attr2 is None:
        return False
    return attr1.prop_id == attr2.prop_id and attr1.attr_id == attr2.attr_id


def reduce_attr_keys(skus: Iterable[Sku]) -> Set[AttrRef]:
    """Collect every attribute reference present on the given SKUs."""
    keys = set()
    for sku in skus:
        keys.update(sku.attrs)
    return keys


class _LRUCache:
    """Insertion-ordered map with optional LRU bound. Not thread-safe on its own."""

    def __init__(self, maxsize: Optional[int] = None, name: str = ''):
        self.maxsize = maxsize
        self.name = name
        self.hits = 0
        self.misses = 0
        self._data = OrderedDict()

    def get(self, key):
        try:
            value = self._data[key]
        except KeyError:
            self.misses += 1
            return None
        self.hits += 1
        if self.maxsize is not None:
            self._data.move_to_end(key)
        return value

    def set(self, key, value):
        self._data[key] = value
        if self.maxsize is not None and len(self._data) > self.maxsize:
            evicted, _ = self._data.popitem(last=False)
            logger.debug("Evicted %s cache entry %s", self.name, sorted(map(repr, evicted)))

    def clear(self):
        self._data.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self):
        return len(self._data)


class SkuSelector:
    """
    Computes reachable SKUs and disabled attribute values for a selection.

    The catalog is indexed once at construction and must not change
    afterwards; build a new selector when it does. Results are memoized per
    instance, keyed by the canonical selection.

    A selection must hold at most one reference per property. This is not
    checked here.

    Example:
        selector = SkuSelector(props, skus)
        result = selector.select([AttrRef('model', 'whisper')])
        result.min_price, result.max_price, result.disabled_attrs
    """

    def __init__(
        self,
        props: Iterable[Property],
        skus: Iterable[Sku],
        cache_size: Optional[int] = None,
    ):
        self.props: Tuple[Property, ...] = tuple(props)
        self.skus: Tuple[Sku, ...] = tuple(skus)

        self._props_by_id: Dict[Hashable, Property] = {}
        for prop in self.props:
            # First definition wins on duplicate ids
            self._props_by_id.setdefault(prop.id, prop)

        self.all_attrs: Tuple[AttrRef, ...] = tuple(
            AttrRef(prop.id, attr.id)
            for prop in self.props
            for attr in prop.attrs
        )

        self._sku_attr_sets: List[Tuple[Sku, FrozenSet[AttrRef]]] = [
            (sku, frozenset(sku.attrs)) for sku in self.skus
        ]

        self._lock = threading.RLock()
        self._cache_info = _LRUCache(cache_size, name='info')
        self._cache_result = _LRUCache(cache_size, name='result')

        logger.debug(
            "Indexed catalog: %d properties, %d attributes, %d skus",
            len(self.props), len(self.all_attrs), len(self.skus)
        )

    def get_property(self, prop_id: Hashable) -> Optional[Property]:
        return self._props_by_id.get(prop_id)

    def select(self, selection: Iterable[AttrRef] = ()) -> SelectionResult:
        """
        Evaluate a selection.

        Args:
            selection: Attribute references picked so far, in any order.

        Returns:
            SelectionResult with the reachable SKUs, their price range and
            total stock, and the attribute references that cannot lead to a
            reachable SKU if picked next.
        """
        # Repeated references collapse onto one
        selection = tuple(dict.fromkeys(selection))
        key = selection_key(selection)

        with self._lock:
            cached = self._cache_result.get(key)
            if cached is not None:
                return cached

            info = self._info(selection, key)

            # Attributes that already co-occur with the selection
            selectable = reduce_attr_keys(info.active_skus)

            # Swap each selected value for its siblings, one at a time
            for index, selected in enumerate(selection):
                prop = self.get_property(selected.prop_id)
                if prop is None:
                    continue
                for attr in prop.attrs:
                    candidate = AttrRef(prop.id, attr.id)
                    if candidate == selected or candidate in selectable:
                        continue
                    swapped = selection[:index] + (candidate,) + selection[index + 1:]
                    if self._info(swapped, selection_key(swapped)).active_skus:
                        selectable.add(candidate)

            disabled = tuple(
                attr for attr in self.all_attrs if attr not in selectable
            )

            result = SelectionResult(
                max_price=info.max_price,
                min_price=info.min_price,
                count=info.count,
                active_skus=info.active_skus,
                disabled_attrs=disabled,
            )
            self._cache_result.set(key, result)
            return result

    def info(self, selection: Iterable[AttrRef] = ()) -> SelectionInfo:
        """Price range, total stock and in-stock SKUs matching every selected value."""
        selection = tuple(selection)
        with self._lock:
            return self._info(selection, selection_key(selection))

    def _info(self, selection: Tuple[AttrRef, ...], key: SelectionKey) -> SelectionInfo:
        cached = self._cache_info.get(key)
        if cached is not None:
            return cached

        active_skus = tuple(
            sku for sku, attrs in self._sku_attr_sets
            if sku.count > 0 and key <= attrs
        )

        prices = [sku.price for sku in active_skus]
        info = SelectionInfo(
            max_price=max(prices) if prices else None,
            min_price=min(prices) if prices else None,
            count=sum(sku.count for sku in active_skus),
            active_skus=active_skus,
        )
        self._cache_info.set(key, info)
        return info

    def cache_info(self) -> Dict[str, Dict[str, int]]:
        """Hit/miss counters and sizes of both caches."""
        with self._lock:
            return {
                cache.name: {
                    'hits': cache.hits,
                    'misses': cache.misses,
                    'size': len(cache),
                    'maxsize': cache.maxsize,
                }
                for cache in (self._cache_info, self._cache_result)
            }

    def cache_clear(self) -> None:
        with self._lock:
            self._cache_info.clear()
            self._cache_result.clear()
