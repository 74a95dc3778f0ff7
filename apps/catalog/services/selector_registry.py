"""
Per-process registry of SkuSelector instances, one per product.

Building a selector costs a few queries, and its caches only pay off when
it is reused across requests. Entries are dropped by the catalog signals
whenever a product's variants, options or stock change.

Every invalidation bumps a generation counter. A selector built while its
product's generation changed is returned to the caller that built it but
never stored, so an edit that lands mid-build is picked up on the next call.
"""

import logging
import threading
from typing import Dict

from django.conf import settings

from .sku_selector import SkuSelector

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_selectors: Dict[int, SkuSelector] = {}
_generations: Dict[int, int] = {}
_epoch = 0


def get_cache_size():
    return getattr(settings, 'SKU_SELECTOR_CACHE_SIZE', None)


def _current_generation(product_id):
    return (_epoch, _generations.get(product_id, 0))


def get_selector(product) -> SkuSelector:
    """Return the selector for a product, building it on first use."""
    with _lock:
        selector = _selectors.get(product.pk)
        if selector is not None:
            return selector
        generation = _current_generation(product.pk)

    from .variant_navigation import VariantNavigationService
    selector = VariantNavigationService.build_selector(
        product, cache_size=get_cache_size()
    )

    with _lock:
        if _current_generation(product.pk) != generation:
            logger.debug("Catalog of product %s changed during build; not caching", product.pk)
            return selector
        selector = _selectors.setdefault(product.pk, selector)
    logger.debug("Selector ready for product %s", product.pk)
    return selector


def invalidate(product_id) -> None:
    with _lock:
        _generations[product_id] = _generations.get(product_id, 0) + 1
        dropped = _selectors.pop(product_id, None)
    if dropped is not None:
        logger.debug("Invalidated selector for product %s", product_id)


def clear() -> None:
    global _epoch
    with _lock:
        _epoch += 1
        _selectors.clear()
        _generations.clear()
