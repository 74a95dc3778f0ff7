from .serializers import (
    ProductSerializer,
    ProductDetailSerializer,
    VariantListSerializer,
    SelectionRequestSerializer,
    SelectionResultSerializer,
)

__all__ = [
    'ProductSerializer',
    'ProductDetailSerializer',
    'VariantListSerializer',
    'SelectionRequestSerializer',
    'SelectionResultSerializer',
]
