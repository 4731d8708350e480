from rest_framework import serializers


class AdminLoginSerializer(serializers.Serializer):
    """PIN login; ``password`` is accepted as an alias for older clients."""

    pin = serializers.CharField(required=False, allow_blank=True, max_length=64)
    password = serializers.CharField(required=False, allow_blank=True, max_length=64)

    def validate(self, attrs):
        pin = attrs.get('pin') or attrs.get('password') or ''
        if not pin.strip():
            raise serializers.ValidationError({'pin': 'PIN is required.'})
        return {'pin': pin}


class SessionSerializer(serializers.Serializer):
    authenticated = serializers.BooleanField()
    name = serializers.CharField()
    expires_at = serializers.DateTimeField()
