from __future__ import annotations

from decimal import Decimal

from django import forms

from ..models.kitting import FMS_NAME_CHOICES, KITTING_RATE_TYPE_CHOICES
from ..models.lifts import (
    BILL_RECEIVED,
    BILL_STATUS_CHOICES,
    BILL_TYPE_CHOICES,
    CHECK_STATUS_CHOICES,
    PAYMENT_TYPE_CHOICES,
)
from .base import YES_NO, ActionForm


class LiftForm(ActionForm):
    bill_status = forms.ChoiceField(choices=BILL_STATUS_CHOICES)
    bill_no = forms.CharField(max_length=100, required=False)
    qty = forms.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    vendor_name = forms.CharField(max_length=255, required=False)
    lead_time_to_lift_material = forms.IntegerField(min_value=0, required=False)
    type_of_bill = forms.ChoiceField(
        choices=[("", "---------")] + BILL_TYPE_CHOICES, required=False
    )
    bill_amount = forms.DecimalField(max_digits=14, decimal_places=2, required=False)
    discount_amount = forms.DecimalField(max_digits=14, decimal_places=2, required=False)
    payment_type = forms.ChoiceField(
        choices=[("", "---------")] + PAYMENT_TYPE_CHOICES, required=False
    )
    advance_amount = forms.DecimalField(max_digits=14, decimal_places=2, required=False)
    photo_of_bill = forms.FileField(required=False)
    bill_remark = forms.CharField(widget=forms.Textarea(attrs={"rows": 2}), required=False)
    transportation_include = forms.ChoiceField(
        choices=[("", "---------")] + YES_NO, required=False
    )
    transporter_name = forms.CharField(max_length=255, required=False)
    transport_amount = forms.DecimalField(max_digits=14, decimal_places=2, required=False)
    vehicle_no = forms.CharField(max_length=50, required=False)
    driver_name = forms.CharField(max_length=255, required=False)
    driver_mobile_no = forms.CharField(max_length=20, required=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        obj = self.obj
        if obj is not None and not self.is_bound:
            pending = obj.pending_lift_qty
            self.initial.setdefault(
                "qty", pending if pending is not None else obj.effective_quantity
            )
            self.initial.setdefault("vendor_name", obj.approved_vendor_name)

    def clean(self):
        cleaned = super().clean()
        if cleaned.get("bill_status") == BILL_RECEIVED and not cleaned.get("bill_no"):
            self.add_error("bill_no", "Bill number is required when the bill is received")
        if cleaned.get("payment_type") == "Advance" and not cleaned.get("advance_amount"):
            self.add_error("advance_amount", "Advance amount is required")
        return cleaned


class StoreInForm(ActionForm):
    receiving_status = forms.ChoiceField(choices=[("Received", "Received")])
    received_quantity = forms.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.01")
    )
    photo_of_product = forms.FileField(required=False)
    damage_order = forms.ChoiceField(choices=YES_NO)
    quantity_as_per_bill = forms.ChoiceField(choices=YES_NO)
    remark = forms.CharField(widget=forms.Textarea(attrs={"rows": 2}), required=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.obj is not None and not self.is_bound:
            self.initial.setdefault("received_quantity", self.obj.qty)


class QualityCheckForm(ActionForm):
    check_status = forms.ChoiceField(choices=CHECK_STATUS_CHOICES, label="Status")
    bill_copy_attached = forms.FileField(required=False)
    send_debit_note = forms.ChoiceField(choices=YES_NO)
    reason = forms.CharField(widget=forms.Textarea(attrs={"rows": 2}))


class DebitNoteForm(ActionForm):
    debit_note_number = forms.CharField(max_length=100)
    debit_note_copy = forms.FileField(required=False)


class BillPendingForm(ActionForm):
    status = forms.ChoiceField(choices=[("ok", "ok")])
    bill_image = forms.FileField(required=False)


class FullKittingForm(ActionForm):
    fms_name = forms.ChoiceField(choices=FMS_NAME_CHOICES, label="FMS name")
    status = forms.ChoiceField(choices=YES_NO)
    vehicle_number = forms.CharField(max_length=50)
    from_location = forms.CharField(max_length=255, label="From")
    to_location = forms.CharField(max_length=255, label="To")
    material_load_details = forms.CharField(
        widget=forms.Textarea(attrs={"rows": 3}), required=False
    )
    bilty_number = forms.CharField(max_length=100)
    rate_type = forms.ChoiceField(choices=KITTING_RATE_TYPE_CHOICES)
    amount1 = forms.DecimalField(
        max_digits=14, decimal_places=2, min_value=Decimal("0"), label="Amount"
    )
    bilty_image = forms.FileField(required=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.obj is not None and not self.is_bound:
            self.initial.setdefault("vehicle_number", self.obj.vehicle_no)
