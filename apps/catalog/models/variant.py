from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal


class Variant(models.Model):
    """
    Individual SKU with its own price and stock.
    Each variant is a unique combination of attribute options,
    one per attribute type of its product.
    """
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='variants',
        verbose_name='Produto'
    )
    sku = models.CharField(
        max_length=100,
        unique=True,
        verbose_name='SKU'
    )
    name = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Nome',
        help_text='Nome personalizado (gerado automaticamente se vazio)'
    )

    # Pricing
    sell_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Preço de venda'
    )

    # Inventory
    stock_quantity = models.PositiveIntegerField(
        default=0,
        verbose_name='Quantidade em estoque'
    )

    # Status
    is_active = models.BooleanField(
        default=True,
        verbose_name='Ativo'
    )

    # Timestamps
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Atualizado em'
    )

    # Attribute options for this variant
    attribute_options = models.ManyToManyField(
        'catalog.AttributeOption',
        through='VariantAttribute',
        related_name='variants',
        verbose_name='Opções de atributos'
    )

    class Meta:
        ordering = ['product', 'sku']
        verbose_name = 'Variante'
        verbose_name_plural = 'Variantes'

    def __str__(self):
        return self.name or self.sku

    def save(self, *args, **kwargs):
        if not self.name:
            self.name = self._generate_name()
        super().save(*args, **kwargs)

    def _generate_name(self):
        """Generate variant name from product name and attribute options."""
        if not self.pk:
            return self.sku

        options = self.variantattribute_set.select_related(
            'attribute_option__attribute_type'
        ).order_by('attribute_option__attribute_type__display_order')

        if not options.exists():
            return f"{self.product.name} - {self.sku}"

        option_strings = [
            opt.attribute_option.get_display_value()
            for opt in options
        ]
        return f"{self.product.name} - {' / '.join(option_strings)}"

    def get_options_dict(self):
        """
        Return dict of {attribute_slug: option_value}.
        Uses prefetched variantattribute_set__attribute_option__attribute_type when present.
        """
        return {
            va.attribute_option.attribute_type.slug: va.attribute_option.value
            for va in self.variantattribute_set.all()
        }

    @property
    def is_in_stock(self):
        return self.stock_quantity > 0


class VariantAttribute(models.Model):
    """
    Through model linking Variant to AttributeOption.
    Ensures each variant has only one value per attribute type.
    """
    variant = models.ForeignKey(
        Variant,
        on_delete=models.CASCADE,
        verbose_name='Variante'
    )
    attribute_option = models.ForeignKey(
        'catalog.AttributeOption',
        on_delete=models.CASCADE,
        verbose_name='Opção de Atributo'
    )

    class Meta:
        unique_together = ['variant', 'attribute_option']
        verbose_name = 'Atributo da Variante'
        verbose_name_plural = 'Atributos das Variantes'

    def __str__(self):
        return f"{self.variant.sku} - {self.attribute_option}"

    def save(self, *args, **kwargs):
        # Ensure only one option per attribute type per variant
        existing = VariantAttribute.objects.filter(
            variant=self.variant,
            attribute_option__attribute_type=self.attribute_option.attribute_type
        ).exclude(pk=self.pk)

        if existing.exists():
            existing.delete()

        super().save(*args, **kwargs)
