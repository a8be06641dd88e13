from rest_framework import serializers

from .models import ProductCategory, Product, NutrientCategory, Nutrient, ProductNutrient
from .services import link_nutrients, replace_nutrients


class ProductCategorySerializer(serializers.ModelSerializer):
    id = serializers.SlugField(max_length=50)

    class Meta:
        model = ProductCategory
        fields = ['id', 'name', 'description', 'image_url', 'icon', 'display_order', 'is_active',
                  'created_at', 'updated_at']

    def validate_id(self, value):
        # The slug is the primary key; it cannot change once created
        if self.instance is not None and value != self.instance.id:
            raise serializers.ValidationError('El identificador de la categoría no se puede cambiar.')
        if self.instance is None and ProductCategory.objects.filter(id=value).exists():
            raise serializers.ValidationError('Ya existe una categoría con este identificador.')
        return value


class NutrientCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = NutrientCategory
        fields = ['id', 'name', 'description', 'icon', 'created_at', 'updated_at']


class NutrientSerializer(serializers.ModelSerializer):
    category_id = serializers.CharField(read_only=True)

    class Meta:
        model = Nutrient
        fields = ['id', 'name', 'category_id', 'description', 'benefits', 'sources', 'created_at', 'updated_at']


class NutrientWithCategorySerializer(NutrientSerializer):
    category = NutrientCategorySerializer(read_only=True)

    class Meta(NutrientSerializer.Meta):
        fields = NutrientSerializer.Meta.fields + ['category']


class ProductNutrientSerializer(serializers.ModelSerializer):
    product_id = serializers.IntegerField(read_only=True)
    nutrient_id = serializers.IntegerField(read_only=True)
    nutrient = NutrientWithCategorySerializer(read_only=True)

    class Meta:
        model = ProductNutrient
        fields = ['id', 'product_id', 'nutrient_id', 'nutrient', 'created_at']


class ProductSerializer(serializers.ModelSerializer):
    """
    Admin product serializer.

    `nutrient_ids` is write-only. On create the IDs are linked; on update,
    when present (even empty), they replace the current links, and when
    omitted the links are left untouched.
    """
    nutrient_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), write_only=True,
                                         required=False)
    ingredients = serializers.ListField(child=serializers.CharField(), required=False, allow_null=True)
    benefits = serializers.ListField(child=serializers.CharField(), required=False, allow_null=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'category', 'price', 'original_price', 'image_url', 'emoji', 'rating',
            'reviews_count', 'badge', 'description', 'long_description', 'ingredients', 'benefits',
            'size', 'in_stock', 'sku', 'nutrient_ids', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def create(self, validated_data):
        nutrient_ids = validated_data.pop('nutrient_ids', None)
        product = super().create(validated_data)
        if nutrient_ids:
            link_nutrients(product, nutrient_ids)
        return product

    def update(self, instance, validated_data):
        has_nutrients = 'nutrient_ids' in validated_data
        nutrient_ids = validated_data.pop('nutrient_ids', None)
        product = super().update(instance, validated_data)
        if has_nutrients:
            replace_nutrients(product, nutrient_ids or [])
        return product
