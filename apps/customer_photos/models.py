from django.core.validators import MinValueValidator
from django.db import models
import uuid

MAX_ACTIVE_PHOTOS = 6
DEFAULT_ALT_TEXT = 'Customer photo'


class CustomerPhoto(models.Model):
    """A customer photo shown in the hero section of the online ordering page."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    image = models.CharField(max_length=500)
    alt_text = models.CharField(max_length=200, default=DEFAULT_ALT_TEXT)
    is_active = models.BooleanField(default=False)
    display_order = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'customer_photos'
        ordering = ['display_order', 'created_at']
        indexes = [
            models.Index(fields=['is_active', 'display_order'], name='customer_photos_active_idx'),
        ]

    def __str__(self):
        return f"#{self.display_order} {self.alt_text}"
