"""
Service for navigating a product's variants by attribute selection.
The selectable options are INFERRED from actual variant data and stock,
not configured manually.
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from apps.catalog.models import Product, AttributeOption, Variant

from . import selector_registry
from .sku_selector import AttrRef, Attribute, Property, Sku, SkuSelector


class VariantNavigationService:
    """
    Loads a product's catalog into a SkuSelector and evaluates selections.

    Attribute types are identified by slug and options by value, so a
    selection reads like {'size': 'A4', 'color': 'azul'}.
    """

    @staticmethod
    def build_catalog(product: Product) -> Tuple[List[Property], List[Sku]]:
        """
        Read the product's attribute options and active variants.

        Returns:
            Tuple of (properties ordered by attribute type display order,
            SKUs ordered by sku code)
        """
        options = AttributeOption.objects.filter(
            product=product
        ).select_related('attribute_type').order_by(
            'attribute_type__display_order', 'attribute_type__name',
            'attribute_type_id', 'display_order', 'value'
        )

        props = []
        current_type = None
        attrs: List[Attribute] = []
        for option in options:
            if current_type is None or option.attribute_type_id != current_type.id:
                if current_type is not None:
                    props.append(Property(current_type.slug, current_type.name, tuple(attrs)))
                current_type = option.attribute_type
                attrs = []
            attrs.append(Attribute(option.value, option.get_display_value()))
        if current_type is not None:
            props.append(Property(current_type.slug, current_type.name, tuple(attrs)))

        variants = Variant.objects.filter(
            product=product,
            is_active=True
        ).prefetch_related(
            'variantattribute_set__attribute_option__attribute_type'
        ).order_by('sku')

        skus = [
            Sku(
                id=variant.sku,
                price=variant.sell_price,
                count=variant.stock_quantity,
                attrs=tuple(
                    AttrRef(slug, value)
                    for slug, value in variant.get_options_dict().items()
                ),
            )
            for variant in variants
        ]
        return props, skus

    @staticmethod
    def build_selector(product: Product, cache_size: Optional[int] = None) -> SkuSelector:
        props, skus = VariantNavigationService.build_catalog(product)
        return SkuSelector(props, skus, cache_size=cache_size)

    @staticmethod
    def selection_from_dict(selections: Dict[str, str]) -> List[AttrRef]:
        """Convert {attribute_slug: option_value} into attribute references."""
        return [AttrRef(slug, value) for slug, value in selections.items()]

    @staticmethod
    def evaluate_selection(
        product: Product,
        selection: Iterable[AttrRef]
    ) -> Dict[str, Any]:
        """
        Evaluate a selection against the product's cached selector.

        Unknown attribute slugs or values are not an error; they simply
        match no variant.

        Returns dict with:
        - selection: the references evaluated
        - active_skus: in-stock variants matching every selected value
        - min_price / max_price: None when no variant is reachable
        - count: total stock of the reachable variants
        - disabled_attrs: options that cannot lead to a reachable variant
        """
        selection = list(selection)
        selector = selector_registry.get_selector(product)
        result = selector.select(selection)

        return {
            'product': product.slug,
            'selection': [
                {'prop_id': ref.prop_id, 'attr_id': ref.attr_id}
                for ref in selection
            ],
            'active_skus': [
                {
                    'sku': sku.id,
                    'price': sku.price,
                    'count': sku.count,
                    'attributes': {ref.prop_id: ref.attr_id for ref in sku.attrs},
                }
                for sku in result.active_skus
            ],
            'min_price': result.min_price,
            'max_price': result.max_price,
            'count': result.count,
            'disabled_attrs': [
                {'prop_id': ref.prop_id, 'attr_id': ref.attr_id}
                for ref in result.disabled_attrs
            ],
        }
