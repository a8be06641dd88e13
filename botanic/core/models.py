from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Store account: customers and administrators"""
    ROLE_CHOICES = [
        ('admin', 'Administrador'),
        ('cliente', 'Cliente'),
    ]

    phone = models.CharField(max_length=20, blank=True, null=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default='cliente', db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def is_store_admin(self):
        return self.role == 'admin' or self.is_superuser or self.is_staff

    class Meta:
        db_table = 'users'


class AppSetting(models.Model):
    """Store configuration value, keyed as `<category>.<key>`"""
    SETTING_TYPE_CHOICES = [
        ('string', 'String'),
        ('number', 'Number'),
        ('boolean', 'Boolean'),
        ('object', 'Object'),
        ('array', 'Array'),
    ]

    setting_key = models.CharField(max_length=150, unique=True)
    setting_value = models.JSONField(null=True, blank=True)
    setting_type = models.CharField(max_length=20, choices=SETTING_TYPE_CHOICES, default='string')
    category = models.CharField(max_length=50, db_index=True)
    description = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.setting_key

    @property
    def short_key(self):
        """Last segment of the setting key ('general.storeName' -> 'storeName')"""
        return self.setting_key.split('.')[-1] or self.setting_key

    class Meta:
        db_table = 'app_settings'
        ordering = ['category', 'setting_key']
