from rest_framework import serializers
from .models import Cost


class CostSerializer(serializers.ModelSerializer):
    class Meta:
        model = Cost
        fields = [
            'id', 'name', 'description', 'amount', 'category', 'frequency', 'date',
            'is_recurring', 'next_payment_date', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
