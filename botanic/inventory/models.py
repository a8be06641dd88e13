from django.conf import settings
from django.db import models
from django.utils import timezone


class InventoryItem(models.Model):
    """Raw material or packaging item kept in stock"""
    UNIT_CHOICES = [
        ('unidad', 'Unidad'),
        ('kg', 'Kilogramo'),
        ('g', 'Gramo'),
        ('L', 'Litro'),
        ('mL', 'Mililitro'),
        ('m', 'Metro'),
        ('cm', 'Centímetro'),
        ('caja', 'Caja'),
        ('bolsa', 'Bolsa'),
    ]

    name = models.CharField(max_length=200)
    sku = models.CharField(max_length=100, unique=True)
    category = models.CharField(max_length=100, blank=True, null=True, db_index=True)
    unit = models.CharField(max_length=10, choices=UNIT_CHOICES, default='unidad')
    description = models.TextField(blank=True, null=True)
    min_stock = models.DecimalField(max_digits=12, decimal_places=3, default=0)
    current_stock = models.DecimalField(max_digits=12, decimal_places=3, default=0)
    cost_per_unit = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    supplier = models.CharField(max_length=200, blank=True, null=True)
    location = models.CharField(max_length=200, blank=True, null=True)
    expiry_tracking = models.BooleanField(default=False)
    notes = models.TextField(blank=True, null=True)
    active = models.BooleanField(default=True, db_index=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='inventory_items')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name} ({self.sku})"

    @property
    def is_low_stock(self):
        return self.current_stock <= self.min_stock

    class Meta:
        db_table = 'inventory_items'
        ordering = ['name']


class InventoryMovement(models.Model):
    MOVEMENT_TYPE_CHOICES = [
        ('entrada', 'Entrada'),
        ('salida', 'Salida'),
        ('ajuste', 'Ajuste'),
        ('produccion', 'Producción'),
        ('venta', 'Venta'),
        ('perdida', 'Pérdida'),
    ]

    inventory_item = models.ForeignKey(InventoryItem, on_delete=models.CASCADE, related_name='movements')
    movement_type = models.CharField(max_length=20, choices=MOVEMENT_TYPE_CHOICES, db_index=True)
    quantity = models.DecimalField(max_digits=12, decimal_places=3)
    unit_cost = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    reference_type = models.CharField(max_length=50, blank=True, null=True)
    reference_id = models.BigIntegerField(blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    movement_date = models.DateTimeField(default=timezone.now, db_index=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='inventory_movements')
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.get_movement_type_display()} {self.quantity} - {self.inventory_item_id}"

    class Meta:
        db_table = 'inventory_movements'
        ordering = ['-movement_date', '-created_at']
