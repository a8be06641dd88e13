from django.db import models


class ProductCategory(models.Model):
    """Storefront category, identified by its slug"""
    id = models.SlugField(max_length=50, primary_key=True)
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, null=True)
    image_url = models.CharField(max_length=500, blank=True, null=True)
    icon = models.CharField(max_length=50, blank=True, null=True)
    display_order = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'product_categories'
        ordering = ['display_order', 'name']
        verbose_name_plural = 'product categories'


class NutrientCategory(models.Model):
    id = models.SlugField(max_length=50, primary_key=True)
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, null=True)
    icon = models.CharField(max_length=50, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'nutrient_categories'
        ordering = ['name']
        verbose_name_plural = 'nutrient categories'


class Nutrient(models.Model):
    """Active ingredient / nutrient a product can be tagged with"""
    name = models.CharField(max_length=200)
    category = models.ForeignKey(NutrientCategory, on_delete=models.PROTECT, related_name='nutrients')
    description = models.TextField(blank=True, default='')
    benefits = models.JSONField(default=list, blank=True)
    sources = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'nutrients'
        ordering = ['name']


class Product(models.Model):
    name = models.CharField(max_length=200)
    # Slug of a ProductCategory; kept as plain text so categories can be renamed freely
    category = models.CharField(max_length=50, db_index=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    original_price = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    image_url = models.CharField(max_length=500, blank=True, null=True)
    emoji = models.CharField(max_length=16, blank=True, null=True)
    rating = models.DecimalField(max_digits=3, decimal_places=1, default=0)
    reviews_count = models.IntegerField(default=0)
    badge = models.CharField(max_length=50, blank=True, null=True)
    description = models.TextField()
    long_description = models.TextField(blank=True, null=True)
    ingredients = models.JSONField(blank=True, null=True)
    benefits = models.JSONField(blank=True, null=True)
    size = models.CharField(max_length=50, blank=True, null=True)
    in_stock = models.BooleanField(default=True, db_index=True)
    sku = models.CharField(max_length=100, unique=True)
    nutrients = models.ManyToManyField(Nutrient, through='ProductNutrient', related_name='products', blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'products'
        ordering = ['-created_at', '-id']


class ProductNutrient(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='product_nutrients')
    nutrient = models.ForeignKey(Nutrient, on_delete=models.CASCADE, related_name='product_nutrients')
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.product_id} - {self.nutrient_id}"

    class Meta:
        db_table = 'product_nutrients'
        unique_together = [['product', 'nutrient']]
