from rest_framework import serializers
from .models import Customer, Seller


# =============================================================================
# Input Serializers
# =============================================================================

class ContactFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for customer/seller listing.

    Query Parameters:
        q (str): Search name, address or WhatsApp
        wa (str): Exact WhatsApp lookup (customers only)
    """

    q = serializers.CharField(required=False, allow_blank=True, max_length=200)
    wa = serializers.CharField(required=False, allow_blank=True, max_length=64)


class ContactInputSerializer(serializers.Serializer):
    """Create/patch payload shared by customers and sellers."""

    name = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=200)
    whatsapp = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=64)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class CustomerExportSerializer(serializers.Serializer):
    simple = serializers.BooleanField(required=False, default=False)
    excel = serializers.BooleanField(required=False, default=False)


class CustomerImportSerializer(serializers.Serializer):
    file = serializers.FileField(required=False)


class CustomerImportQuerySerializer(serializers.Serializer):
    replace = serializers.BooleanField(required=False, default=False)


# =============================================================================
# Output Serializers
# =============================================================================

class CustomerSerializer(serializers.ModelSerializer):

    class Meta:
        model = Customer
        fields = ['id', 'name', 'whatsapp', 'address', 'created_at']
        read_only_fields = fields


class SellerSerializer(serializers.ModelSerializer):

    class Meta:
        model = Seller
        fields = ['id', 'name', 'whatsapp', 'address', 'created_at']
        read_only_fields = fields


class PartyMinimalSerializer(serializers.Serializer):
    """Name/WhatsApp/address of an order's customer or seller."""

    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    whatsapp = serializers.CharField(read_only=True, allow_null=True)
    address = serializers.CharField(read_only=True, allow_null=True)


class ImportErrorSerializer(serializers.Serializer):
    line = serializers.IntegerField()
    message = serializers.CharField()


class ImportResultSerializer(serializers.Serializer):
    created = serializers.IntegerField()
    updated = serializers.IntegerField()
    skipped = serializers.IntegerField()
    deleted = serializers.IntegerField()
    errors = ImportErrorSerializer(many=True)
    replace = serializers.BooleanField()
