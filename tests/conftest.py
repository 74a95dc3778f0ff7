from decimal import Decimal

import pytest

from apps.catalog.services import AttrRef, Attribute, Property, Sku
from apps.catalog.services import selector_registry

# (model, size, color, price, stock); moth/A3/yellow is intentionally missing
NOTEBOOK_VARIANTS = [
    ('ring', 'A4', 'blue', '100.00', 0),
    ('ring', 'A4', 'yellow', '200.00', 0),
    ('ring', 'A3', 'blue', '200.00', 0),
    ('ring', 'A3', 'yellow', '200.00', 0),
    ('whisper', 'A4', 'blue', '150.00', 0),
    ('whisper', 'A4', 'yellow', '150.00', 0),
    ('whisper', 'A3', 'blue', '600.00', 20),
    ('whisper', 'A3', 'yellow', '600.00', 0),
    ('moth', 'A4', 'blue', '400.00', 65),
    ('moth', 'A4', 'yellow', '400.00', 50),
    ('moth', 'A3', 'blue', '70.00', 0),
]

NOTEBOOK_PROPS = [
    ('model', 'Modelo', ['ring', 'whisper', 'moth']),
    ('size', 'Tamanho', ['A4', 'A3']),
    ('color', 'Cor', ['blue', 'yellow']),
]


def sku_code(model, size, color):
    return f'{model}-{size}-{color}'


@pytest.fixture
def notebook_props():
    return [
        Property(prop_id, label, tuple(Attribute(value, value) for value in values))
        for prop_id, label, values in NOTEBOOK_PROPS
    ]


@pytest.fixture
def notebook_skus():
    return [
        Sku(
            id=sku_code(model, size, color),
            price=Decimal(price),
            count=stock,
            attrs=(AttrRef('model', model), AttrRef('size', size), AttrRef('color', color)),
        )
        for model, size, color, price, stock in NOTEBOOK_VARIANTS
    ]


@pytest.fixture(autouse=True)
def clear_selector_registry():
    selector_registry.clear()
    yield
    selector_registry.clear()


@pytest.fixture
def notebook_product(db):
    from apps.catalog.models import (
        Product, AttributeType, AttributeOption, Variant, VariantAttribute,
    )

    product = Product.objects.create(name='Caderno', slug='caderno')

    options = {}
    for order, (slug, name, values) in enumerate(NOTEBOOK_PROPS):
        attr_type = AttributeType.objects.create(slug=slug, name=name, display_order=order)
        for i, value in enumerate(values):
            options[(slug, value)] = AttributeOption.objects.create(
                attribute_type=attr_type,
                product=product,
                value=value,
                display_order=i,
            )

    for model, size, color, price, stock in NOTEBOOK_VARIANTS:
        variant = Variant.objects.create(
            product=product,
            sku=sku_code(model, size, color),
            sell_price=Decimal(price),
            stock_quantity=stock,
        )
        for key in (('model', model), ('size', size), ('color', color)):
            VariantAttribute.objects.create(variant=variant, attribute_option=options[key])

    return product
