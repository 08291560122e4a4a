from rest_framework import serializers

from .models import (
    FullKitting,
    Indent,
    Lift,
    PurchaseOrderLine,
    StageEvent,
    StoreIssue,
    TallyEntry,
    VendorQuote,
)
from .services.stages import current_stage


class VendorQuoteSerializer(serializers.ModelSerializer):
    class Meta:
        model = VendorQuote
        fields = [
            "slot",
            "vendor_name",
            "rate_type",
            "rate",
            "with_tax",
            "tax_value",
            "payment_term",
            "whatsapp_number",
            "email_id",
        ]


class IndentSerializer(serializers.ModelSerializer):
    """Indent with its quotes and the stage it is currently waiting in."""

    quotes = VendorQuoteSerializer(many=True, read_only=True)
    current_stage = serializers.SerializerMethodField()

    class Meta:
        model = Indent
        exclude = ["created_at"]

    def get_current_stage(self, obj):
        stage = current_stage(obj)
        return stage.key if stage else None


class PurchaseOrderLineSerializer(serializers.ModelSerializer):
    class Meta:
        model = PurchaseOrderLine
        fields = "__all__"


class LiftSerializer(serializers.ModelSerializer):
    indent_number = serializers.CharField(source="indent_id", read_only=True)

    class Meta:
        model = Lift
        exclude = ["indent"]


class TallyEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = TallyEntry
        exclude = ["lift"]


class StoreIssueSerializer(serializers.ModelSerializer):
    class Meta:
        model = StoreIssue
        fields = "__all__"


class StageEventSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source="user.username", read_only=True, default=None)

    class Meta:
        model = StageEvent
        fields = ["event_id", "timestamp", "username", "stage", "entity_type", "entity_id", "changes", "firm_name_match"]


class FullKittingSerializer(serializers.ModelSerializer):
    class Meta:
        model = FullKitting
        exclude = ["lift"]
