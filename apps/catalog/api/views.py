from rest_framework import viewsets, filters, serializers
from rest_framework.decorators import action
from rest_framework.generics import get_object_or_404
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from apps.catalog.models import Product, Variant
from apps.catalog.services import AttrRef, VariantNavigationService
from .serializers import (
    ProductSerializer,
    ProductDetailSerializer,
    VariantListSerializer,
    SelectionRequestSerializer,
    SelectionResultSerializer,
)
from .filters import VariantFilter


class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for products.

    list: List all products
    retrieve: Get product detail with its attribute types and options
    select: Evaluate an attribute selection against the product's variants
    """
    queryset = Product.objects.all()
    lookup_field = 'slug'
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['is_active']
    search_fields = ['name', 'description']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return ProductDetailSerializer
        return ProductSerializer

    @action(detail=True, methods=['get', 'post'])
    def select(self, request, slug=None):
        """
        Reachable variants, price range, stock and disabled options
        for the given attribute selection.

        GET query params: any attribute_slug=value pairs
        (e.g., ?size=A4&color=azul)

        POST payload:
        {
            "selection": [
                {"prop_id": "size", "attr_id": "A4"},
                {"prop_id": "color", "attr_id": "azul"}
            ]
        }
        """
        # Query params carry the selection, so the list filters must not apply here
        product = get_object_or_404(self.get_queryset(), slug=slug)

        if request.method == 'POST':
            serializer = SelectionRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            selection = [
                AttrRef(ref['prop_id'], ref['attr_id'])
                for ref in serializer.validated_data['selection']
            ]
        else:
            # Build attribute selections from query params
            exclude_params = ['format']
            repeated = [
                k for k in request.query_params
                if k not in exclude_params and len(request.query_params.getlist(k)) > 1
            ]
            if repeated:
                raise serializers.ValidationError({
                    'selection': [
                        f"Only one value can be selected for '{k}'" for k in repeated
                    ]
                })
            selections = {
                k: v for k, v in request.query_params.items()
                if k not in exclude_params
            }
            selection = VariantNavigationService.selection_from_dict(selections)

        result = VariantNavigationService.evaluate_selection(product, selection)
        return Response(SelectionResultSerializer(result).data)


class VariantViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for variants.

    Supports filtering by product, attributes, price range, stock status.
    """
    queryset = Variant.objects.select_related('product').prefetch_related(
        'variantattribute_set__attribute_option__attribute_type'
    )
    serializer_class = VariantListSerializer
    filterset_class = VariantFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['sku', 'name', 'product__name']
    ordering_fields = ['sku', 'sell_price', 'stock_quantity', 'created_at']
    ordering = ['sku']
