"""
Django signals for the catalog app.
Drops a product's cached SkuSelector whenever its variant data changes.

Invalidation runs twice: right away, so a build already in flight is not
cached, and again on commit, so a selector rebuilt from the rows committed
before this change is dropped too.
"""

from django.db import transaction
from django.db.models.signals import post_save, post_delete, m2m_changed
from django.dispatch import receiver

from .models import Product, AttributeType, AttributeOption, Variant, VariantAttribute
from .services import selector_registry


def _invalidate(product_id):
    selector_registry.invalidate(product_id)
    transaction.on_commit(lambda: selector_registry.invalidate(product_id))


def _clear_all():
    selector_registry.clear()
    transaction.on_commit(selector_registry.clear)


@receiver([post_save, post_delete], sender=Product)
def invalidate_product_selector(sender, instance, **kwargs):
    _invalidate(instance.pk)


@receiver([post_save, post_delete], sender=Variant)
@receiver([post_save, post_delete], sender=AttributeOption)
def invalidate_owner_selector(sender, instance, **kwargs):
    """
    Stock, price, activation or option changes alter which attributes are
    reachable, so the product's selector has to be rebuilt.
    """
    _invalidate(instance.product_id)


@receiver([post_save, post_delete], sender=AttributeType)
def invalidate_all_selectors(sender, instance, **kwargs):
    """
    Attribute types are shared by every product; their slug, name and
    display order end up in each selector built from them.
    """
    _clear_all()


@receiver([post_save, post_delete], sender=VariantAttribute)
def invalidate_variant_attribute_selector(sender, instance, **kwargs):
    try:
        product_id = instance.variant.product_id
    except Variant.DoesNotExist:
        # Variant already gone; its own post_delete handled invalidation
        return
    _invalidate(product_id)


@receiver(m2m_changed, sender=Variant.attribute_options.through)
def invalidate_attribute_options_selector(sender, instance, action, **kwargs):
    # add()/remove()/clear() bypass VariantAttribute.save and delete
    if action not in ('post_add', 'post_remove', 'post_clear'):
        return
    # Variant when changed from the variant side, AttributeOption from the option side
    _invalidate(instance.product_id)
