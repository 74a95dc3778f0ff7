"""
Script to create a sample notebook catalog for trying the variant picker.
Run with: python manage.py shell < create_sample_data.py
"""
from apps.catalog.models import (
    Product,
    Variant,
    AttributeType,
    AttributeOption,
    VariantAttribute,
)
from apps.catalog.services import VariantNavigationService
from decimal import Decimal

# Create Attribute Types
print("Creating attribute types...")

model, _ = AttributeType.objects.get_or_create(
    slug='model',
    defaults={'name': 'Modelo', 'datatype': 'text', 'display_order': 1}
)

size, _ = AttributeType.objects.get_or_create(
    slug='size',
    defaults={'name': 'Tamanho', 'datatype': 'text', 'display_order': 2}
)

color, _ = AttributeType.objects.get_or_create(
    slug='color',
    defaults={'name': 'Cor', 'datatype': 'color', 'display_order': 3}
)

# Create Product
print("Creating product...")

notebook, _ = Product.objects.get_or_create(
    slug='caderno',
    defaults={'name': 'Caderno', 'description': 'Caderno em três modelos', 'is_active': True}
)

# Create Attribute Options
print("Creating attribute options...")

options = {}
for attr_type, values in [
    (model, [('ring', 'Ring', ''), ('whisper', 'Whisper', ''), ('moth', 'Moth', '')]),
    (size, [('A4', 'A4', ''), ('A3', 'A3', '')]),
    (color, [('blue', 'Azul', '#0000FF'), ('yellow', 'Amarelo', '#FFFF00')]),
]:
    for i, (value, display, hex_color) in enumerate(values):
        options[value], _ = AttributeOption.objects.get_or_create(
            attribute_type=attr_type,
            product=notebook,
            value=value,
            defaults={'display_value': display, 'color_hex': hex_color, 'display_order': i}
        )

# Create Variants: (model, size, color, price, stock)
print("Creating variants...")

variants = [
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
    ('moth', 'A3', 'yellow', '400.00', 65),
]

for model_value, size_value, color_value, price, stock in variants:
    sku = f'CAD-{model_value[:3].upper()}-{size_value}-{color_value[:3].upper()}'
    variant, created = Variant.objects.get_or_create(
        sku=sku,
        defaults={
            'product': notebook,
            'sell_price': Decimal(price),
            'stock_quantity': stock,
            'is_active': True
        }
    )
    if created:
        for value in (model_value, size_value, color_value):
            VariantAttribute.objects.create(variant=variant, attribute_option=options[value])
        # Regenerate the name now that the options are attached
        variant.name = ''
        variant.save()

result = VariantNavigationService.evaluate_selection(
    notebook,
    VariantNavigationService.selection_from_dict({'model': 'whisper'})
)

print("\n✅ Sample data created successfully!")
print(f"   - {Variant.objects.filter(product=notebook).count()} variants")
print(f"   - model=whisper -> {len(result['active_skus'])} reachable, "
      f"price {result['min_price']} - {result['max_price']}, stock {result['count']}")
print(f"   - disabled: {result['disabled_attrs']}")
print("\nTry: http://localhost:8000/api/products/caderno/select/?model=whisper")
