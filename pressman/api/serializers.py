"""
Pressman API Serializers.

Input validation only: orders, notifications and board columns already know
how to render themselves (`to_dict()`), in the camelCase shape the shop-floor
client expects.
"""

from rest_framework import serializers

from pressman.notifications import NotificationType
from pressman.steps import Priority, Stage, StepStatus


class OrderSerializer(serializers.Serializer):
    """Serializer for order create / partial update payloads."""

    cliente = serializers.CharField(max_length=200)
    vendedor = serializers.CharField(max_length=100)
    item = serializers.CharField(max_length=255)
    dataEntrega = serializers.DateField()
    numeroItem = serializers.CharField(max_length=50, required=False, allow_blank=True)
    quantidade = serializers.CharField(max_length=50, required=False, allow_blank=True)
    prioridade = serializers.ChoiceField(choices=Priority.choices, required=False)
    observacao = serializers.CharField(required=False, allow_blank=True)
    isRemake = serializers.BooleanField(required=False)
    filePath = serializers.CharField(required=False, allow_blank=True)

    def get_fields(self):
        fields = super().get_fields()
        # 'or' is a keyword, so it cannot be declared as a class attribute
        fields["or"] = serializers.CharField(max_length=50)
        if self.partial:
            # Network paths change through the `paths` action
            fields.pop("filePath")
        return fields

    def validate(self, attrs):
        if "dataEntrega" in attrs:
            attrs["dataEntrega"] = attrs["dataEntrega"].isoformat()
        return attrs


class AdvanceSerializer(serializers.Serializer):
    """Serializer for the advance action. Without status, the step cycles."""

    stage = serializers.ChoiceField(choices=Stage.choices)
    status = serializers.ChoiceField(choices=StepStatus.choices, required=False)


class AssignSerializer(serializers.Serializer):
    """Serializer for the assign action. Empty user_id removes the assignment."""

    stage = serializers.ChoiceField(choices=Stage.choices)
    user_id = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    note = serializers.CharField(required=False, allow_blank=True)


class NetworkPathSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    path = serializers.CharField(max_length=500)


class NetworkPathsSerializer(serializers.Serializer):
    paths = NetworkPathSerializer(many=True)


class BulkDeleteSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.CharField(), allow_empty=False)


class AlertSerializer(serializers.Serializer):
    """Serializer for manual alerts."""

    title = serializers.CharField(max_length=120)
    message = serializers.CharField()
    target_user_id = serializers.CharField(required=False, allow_blank=True)
    type = serializers.ChoiceField(
        choices=NotificationType.choices, default=NotificationType.INFO
    )
    reference_date = serializers.DateField(required=False)


class PasswordResetSerializer(serializers.Serializer):
    login = serializers.CharField(help_text="E-mail do colaborador")
