"""Django signals for cache invalidation."""

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from seating.handlers.views import SEAT_TYPE_LIST_CACHE_KEY
from seating.models import SeatType


@receiver([post_save, post_delete], sender=SeatType)
def invalidate_seat_type_cache(sender, instance, **kwargs):
    """Invalidate the seat type list when a seat type is saved or deleted."""
    cache.delete(SEAT_TYPE_LIST_CACHE_KEY)
