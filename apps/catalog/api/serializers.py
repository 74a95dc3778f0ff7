from rest_framework import serializers
from apps.catalog.models import (
    Product,
    AttributeOption,
    Variant,
)


# =============================================================================
# Variant Serializers
# =============================================================================

class VariantListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for variant lists."""
    product_slug = serializers.CharField(source='product.slug', read_only=True)
    attributes = serializers.SerializerMethodField()
    is_in_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Variant
        fields = [
            'id', 'sku', 'name', 'product', 'product_slug',
            'sell_price', 'stock_quantity', 'is_active', 'is_in_stock',
            'attributes'
        ]

    def get_attributes(self, obj):
        return obj.get_options_dict()


# =============================================================================
# Product Serializers
# =============================================================================

class ProductSerializer(serializers.ModelSerializer):
    """Base product serializer."""
    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description', 'is_active',
            'created_at', 'updated_at'
        ]


class ProductDetailSerializer(serializers.ModelSerializer):
    """Product with its selectable attribute types and options."""
    attribute_types = serializers.SerializerMethodField()
    active_variant_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description', 'is_active',
            'active_variant_count', 'attribute_types'
        ]

    def get_attribute_types(self, obj):
        options = AttributeOption.objects.filter(
            product=obj
        ).select_related('attribute_type')

        result = []
        for attr_type in obj.get_attribute_types():
            result.append({
                'slug': attr_type.slug,
                'name': attr_type.name,
                'options': [
                    {
                        'value': opt.value,
                        'display_value': opt.get_display_value(),
                        'color_hex': opt.color_hex,
                    }
                    for opt in options if opt.attribute_type_id == attr_type.id
                ],
            })
        return result


# =============================================================================
# Selection Serializers
# =============================================================================

class AttrRefSerializer(serializers.Serializer):
    prop_id = serializers.CharField()
    attr_id = serializers.CharField()


class SelectionRequestSerializer(serializers.Serializer):
    """
    Validates a selection payload:
    {"selection": [{"prop_id": "size", "attr_id": "A4"}, ...]}

    At most one value per attribute type is accepted.
    """
    selection = AttrRefSerializer(many=True, required=False, default=list)

    def validate_selection(self, value):
        seen = set()
        for ref in value:
            if ref['prop_id'] in seen:
                raise serializers.ValidationError(
                    f"Only one value can be selected for '{ref['prop_id']}'"
                )
            seen.add(ref['prop_id'])
        return value


class ActiveSkuSerializer(serializers.Serializer):
    sku = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    count = serializers.IntegerField()
    attributes = serializers.DictField(child=serializers.CharField())


class SelectionResultSerializer(serializers.Serializer):
    product = serializers.CharField()
    selection = AttrRefSerializer(many=True)
    active_skus = ActiveSkuSerializer(many=True)
    min_price = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    max_price = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    count = serializers.IntegerField()
    disabled_attrs = AttrRefSerializer(many=True)
