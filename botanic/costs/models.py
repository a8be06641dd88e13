from django.db import models


class Cost(models.Model):
    """Operating expense (payroll, ads, taxes, rent...)"""
    CATEGORY_CHOICES = [
        ('sueldo', 'Sueldo'),
        ('redes_sociales', 'Redes sociales'),
        ('impuestos', 'Impuestos'),
        ('marketing', 'Marketing'),
        ('servicios', 'Servicios'),
        ('alquiler', 'Alquiler'),
        ('otros', 'Otros'),
    ]
    FREQUENCY_CHOICES = [
        ('one_time', 'Único'),
        ('monthly', 'Mensual'),
        ('quarterly', 'Trimestral'),
        ('yearly', 'Anual'),
    ]

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    category = models.CharField(max_length=30, choices=CATEGORY_CHOICES, db_index=True)
    frequency = models.CharField(max_length=20, choices=FREQUENCY_CHOICES, default='one_time')
    date = models.DateField(db_index=True)
    is_recurring = models.BooleanField(default=False)
    next_payment_date = models.DateField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name} ({self.amount})"

    class Meta:
        db_table = 'costs'
        ordering = ['-date', '-id']
