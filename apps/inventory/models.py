from django.core.validators import MinValueValidator
from django.db import models
import uuid

from apps.branches.branches import Branch, DEFAULT_BRANCH


class Unit(models.TextChoices):
    PCS = 'pcs', 'Pieces'
    KG = 'kg', 'Kilograms'
    G = 'g', 'Grams'
    LITERS = 'liters', 'Liters'
    ML = 'ml', 'Milliliters'
    BOXES = 'boxes', 'Boxes'
    BAGS = 'bags', 'Bags'
    BOTTLES = 'bottles', 'Bottles'
    CANS = 'cans', 'Cans'


class InventoryCategory(models.TextChoices):
    COFFEE_BEANS = 'Coffee Beans', 'Coffee Beans'
    MILK_DAIRY = 'Milk & Dairy', 'Milk & Dairy'
    SYRUPS = 'Syrups & Flavors', 'Syrups & Flavors'
    PASTRIES = 'Pastries & Bread', 'Pastries & Bread'
    FOOD = 'Food Ingredients', 'Food Ingredients'
    PACKAGING = 'Packaging', 'Packaging'
    SUPPLIES = 'Supplies', 'Supplies'
    OTHER = 'Other', 'Other'


class StockStatus(models.TextChoices):
    OUT = 'out', 'Out of stock'
    LOW = 'low', 'Low stock'
    GOOD = 'good', 'In stock'


DEFAULT_LOW_STOCK_THRESHOLD = 10


class InventoryItem(models.Model):
    """A stocked ingredient or supply at one branch."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    quantity = models.PositiveIntegerField(default=0)
    unit = models.CharField(max_length=10, choices=Unit.choices, default=Unit.PCS)
    category = models.CharField(max_length=30, choices=InventoryCategory.choices)
    low_stock_threshold = models.PositiveIntegerField(
        default=DEFAULT_LOW_STOCK_THRESHOLD,
        validators=[MinValueValidator(0)]
    )
    notes = models.CharField(max_length=500, blank=True, default='')
    image = models.CharField(max_length=500, blank=True, default='')
    branch = models.CharField(max_length=20, choices=Branch.choices, default=DEFAULT_BRANCH)

    last_updated_by = models.CharField(max_length=100, blank=True, default='')
    last_updated_by_email = models.CharField(max_length=255, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'inventory_items'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['branch', 'name'], name='inventory_unique_name_per_branch'),
        ]
        indexes = [
            models.Index(fields=['category'], name='inventory_category_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.quantity} {self.unit})"

    def save(self, *args, **kwargs):
        self.name = self.name.strip()
        super().save(*args, **kwargs)

    @property
    def stock_status(self) -> str:
        if self.quantity == 0:
            return StockStatus.OUT
        if self.quantity <= self.low_stock_threshold:
            return StockStatus.LOW
        return StockStatus.GOOD
