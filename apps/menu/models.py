from django.core.validators import MinValueValidator, RegexValidator
from django.db import models
from decimal import Decimal
import uuid


class Owner(models.TextChoices):
    JOHN = 'john', 'John'
    ELWIN = 'elwin', 'Elwin'


category_id_validator = RegexValidator(
    regex=r'^[a-z0-9-]+$',
    message='Category ID can only contain lowercase letters, numbers, and hyphens',
)


class Category(models.Model):
    """Menu category, addressed by its slug id."""

    id = models.CharField(primary_key=True, max_length=50, validators=[category_id_validator])
    name = models.CharField(max_length=50)
    image = models.CharField(max_length=500, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'categories'
        ordering = ['name']
        verbose_name_plural = 'categories'

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        self.id = self.id.strip().lower()
        self.name = self.name.strip()
        super().save(*args, **kwargs)


class MenuItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name='menu_items'
    )
    image = models.CharField(max_length=500, blank=True, default='')
    # Shown to online customers; placeholder when empty
    online_image = models.CharField(max_length=500, blank=True, default='')
    is_best_seller = models.BooleanField(default=False)
    is_public = models.BooleanField(default=False)
    owner = models.CharField(max_length=10, choices=Owner.choices, default=Owner.JOHN)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'menu_items'
        ordering = ['category_id', 'name']
        indexes = [
            models.Index(fields=['category'], name='menu_items_category_idx'),
            models.Index(fields=['is_best_seller'], name='menu_items_best_seller_idx'),
            models.Index(fields=['is_public'], name='menu_items_public_idx'),
        ]

    def __str__(self):
        return f"{self.name} (₱{self.price})"

    def save(self, *args, **kwargs):
        self.name = self.name.strip()
        self.price = Decimal(self.price).quantize(Decimal('0.01'))
        super().save(*args, **kwargs)
