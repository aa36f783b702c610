from rest_framework import serializers

from price_portal.models import PriceRecord

READ_ONLY_SERIALIZER = 'READ ONLY SERIALIZER'

IMPORT_CATEGORY_CHOICES = [
    'BPCM',
    'BASIC NECESSITIES',
    'PRIME COMMODITIES',
    'CONSTRUCTION MATERIALS',
    'NOCHE BUENA',
    'SCHOOL SUPPLIES',
]


class PriceRecordModelSerializer(serializers.ModelSerializer):
    class Meta:
        model = PriceRecord
        fields = '__all__'
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_commodity(self, value):
        value = str(value).strip()
        if not value:
            raise serializers.ValidationError("Commodity is required")
        return value

    def validate_price(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError("Price cannot be negative")
        return value

    def validate_srp(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError("SRP cannot be negative")
        return value


class PriceImportSerializer(serializers.Serializer):
    file = serializers.FileField()
    category = serializers.ChoiceField(choices=IMPORT_CATEGORY_CHOICES, default='BPCM')
    year = serializers.RegexField(r'^\d{4}$', required=False, allow_blank=True)
    dry_run = serializers.BooleanField(default=False)

    def update(self, instance, validated_data):
        raise NotImplementedError(READ_ONLY_SERIALIZER)

    def create(self, validated_data):
        raise NotImplementedError(READ_ONLY_SERIALIZER)


class InquiryLetterSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)
    date = serializers.DateField(required=False)
    officer = serializers.CharField(required=False, allow_blank=True, default="")
    format = serializers.ChoiceField(choices=['html', 'pdf'], default='html')

    def update(self, instance, validated_data):
        raise NotImplementedError(READ_ONLY_SERIALIZER)

    def create(self, validated_data):
        raise NotImplementedError(READ_ONLY_SERIALIZER)


class MigrateSerializer(serializers.Serializer):
    default_year = serializers.RegexField(r'^\d{4}$', required=False, allow_blank=True)

    def update(self, instance, validated_data):
        raise NotImplementedError(READ_ONLY_SERIALIZER)

    def create(self, validated_data):
        raise NotImplementedError(READ_ONLY_SERIALIZER)
