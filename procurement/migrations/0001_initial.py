import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


def _dt():
    return models.DateTimeField(blank=True, null=True)


def _text(max_length=255):
    return models.CharField(blank=True, default="", max_length=max_length)


def _dec(max_digits=12, **kwargs):
    return models.DecimalField(decimal_places=2, max_digits=max_digits, **kwargs)


YES_NO = [("Yes", "Yes"), ("No", "No")]
DONE = [("Done", "Done"), ("Not Done", "Not Done")]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Indent",
            fields=[
                ("indent_id", models.AutoField(primary_key=True, serialize=False)),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now)),
                ("indent_number", models.CharField(max_length=20, unique=True)),
                ("firm_name", models.CharField(max_length=100)),
                ("indenter_name", models.CharField(max_length=255)),
                ("department", _text(100)),
                ("area_of_use", _text()),
                ("group_head", _text(100)),
                ("product_name", models.CharField(max_length=255)),
                ("quantity", _dec()),
                ("uom", _text(30)),
                ("specifications", models.TextField(blank=True, default="")),
                ("attachment", _text(500)),
                (
                    "indent_status",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("Critical", "Critical"),
                            ("None Critical", "None Critical"),
                        ],
                        default="",
                        max_length=20,
                    ),
                ),
                ("no_day", models.PositiveIntegerField(default=1)),
                ("planned1", _dt()),
                ("actual1", _dt()),
                (
                    "vendor_type",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("Pending", "Pending"),
                            ("Regular", "Regular"),
                            ("New Vendor", "New Vendor"),
                            ("Reject", "Reject"),
                            ("Three Party", "Three Party"),
                        ],
                        default="",
                        max_length=20,
                    ),
                ),
                ("approved_quantity", _dec(blank=True, null=True)),
                ("planned2", _dt()),
                ("actual2", _dt()),
                ("product_code", _text(100)),
                ("comparison_sheet", _text(500)),
                ("planned3", _dt()),
                ("actual3", _dt()),
                ("approved_vendor_name", _text()),
                ("approved_rate", _dec(blank=True, null=True)),
                ("approved_payment_term", _text()),
                ("approved_with_tax", _text(3)),
                ("approved_tax_value", _dec(6, blank=True, null=True)),
                ("planned4", _dt()),
                ("actual4", _dt()),
                (
                    "po_required",
                    models.CharField(blank=True, choices=YES_NO, default="", max_length=3),
                ),
                ("po_number", _text(50)),
                ("po_copy", _text(500)),
                ("payment_term", _text()),
                ("delivery_date", models.DateField(blank=True, null=True)),
                ("planned5", _dt()),
                ("actual5", _dt()),
                ("status", _text(20)),
                ("pending_lift_qty", _dec(blank=True, null=True)),
                ("payment_type", _text(50)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"db_table": "indent", "ordering": ["-indent_id"]},
        ),
        migrations.CreateModel(
            name="VendorQuote",
            fields=[
                ("quote_id", models.AutoField(primary_key=True, serialize=False)),
                ("slot", models.PositiveSmallIntegerField()),
                ("vendor_name", models.CharField(max_length=255)),
                (
                    "rate_type",
                    models.CharField(
                        choices=[("Basic Rate", "Basic Rate"), ("With Tax", "With Tax")],
                        max_length=20,
                    ),
                ),
                ("rate", _dec()),
                ("with_tax", models.CharField(choices=YES_NO, max_length=3)),
                ("tax_value", _dec(6, default=0)),
                ("payment_term", _text()),
                ("whatsapp_number", _text(20)),
                ("email_id", _text(254)),
                (
                    "indent",
                    models.ForeignKey(
                        db_column="indent_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="quotes",
                        to="procurement.indent",
                    ),
                ),
            ],
            options={"db_table": "vendor_quote", "ordering": ["slot"]},
        ),
        migrations.AddConstraint(
            model_name="vendorquote",
            constraint=models.UniqueConstraint(
                fields=("indent", "slot"), name="unique_quote_slot_per_indent"
            ),
        ),
        migrations.CreateModel(
            name="PurchaseOrderLine",
            fields=[
                ("line_id", models.AutoField(primary_key=True, serialize=False)),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now)),
                ("po_number", models.CharField(db_index=True, max_length=60)),
                ("party_name", models.CharField(max_length=255)),
                ("internal_code", models.CharField(max_length=20)),
                ("product", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("quantity", _dec()),
                ("unit", _text(30)),
                ("rate", _dec()),
                ("gst", _dec(6, default=0)),
                ("discount", _dec(6, default=0)),
                ("amount", _dec(14)),
                ("total_po_amount", _dec(14)),
                ("pdf", _text(500)),
                ("quotation_number", _text(100)),
                ("quotation_date", models.DateField(blank=True, null=True)),
                ("enquiry_number", _text(100)),
                ("enquiry_date", models.DateField(blank=True, null=True)),
                ("terms", models.JSONField(blank=True, default=list)),
                ("delivery_date", models.DateField(blank=True, null=True)),
                ("payment_terms", _text()),
                ("delivery_days", models.PositiveIntegerField(default=0)),
                ("delivery_type", _text(50)),
                ("company_email", _text(254)),
                ("prepared_by", _text(150)),
                ("firm_name_match", _text(100)),
            ],
            options={"db_table": "po_master", "ordering": ["-line_id"]},
        ),
        migrations.CreateModel(
            name="Lift",
            fields=[
                ("lift_id", models.AutoField(primary_key=True, serialize=False)),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now)),
                ("lift_number", models.CharField(max_length=20, unique=True)),
                ("po_number", _text(60)),
                ("vendor_name", _text()),
                ("product_name", _text()),
                (
                    "bill_status",
                    models.CharField(
                        choices=[
                            ("Bill Received", "Bill Received"),
                            ("Bill Not Received", "Bill Not Received"),
                        ],
                        max_length=20,
                    ),
                ),
                ("bill_no", _text(100)),
                ("qty", _dec()),
                ("lead_time_to_lift_material", models.PositiveIntegerField(default=0)),
                (
                    "type_of_bill",
                    models.CharField(
                        blank=True,
                        choices=[("independent", "Independent"), ("common", "Common")],
                        default="",
                        max_length=20,
                    ),
                ),
                ("bill_amount", _dec(14, default=0)),
                ("discount_amount", _dec(14, default=0)),
                (
                    "payment_type",
                    models.CharField(
                        blank=True,
                        choices=[("Advance", "Advance"), ("Credit", "Credit")],
                        default="",
                        max_length=20,
                    ),
                ),
                ("advance_amount", _dec(14, default=0)),
                ("photo_of_bill", _text(500)),
                ("bill_remark", models.TextField(blank=True, default="")),
                ("transportation_include", _text(3)),
                ("transporter_name", _text()),
                ("transport_amount", _dec(14, default=0)),
                ("vehicle_no", _text(50)),
                ("driver_name", _text()),
                ("driver_mobile_no", _text(20)),
                ("firm_name_match", _text(100)),
                ("planned6", _dt()),
                ("actual6", _dt()),
                ("receiving_status", _text(20)),
                ("received_quantity", _dec(blank=True, null=True)),
                ("photo_of_product", _text(500)),
                ("damage_order", _text(3)),
                ("quantity_as_per_bill", _text(3)),
                ("remark", models.TextField(blank=True, default="")),
                ("planned7", _dt()),
                ("actual7", _dt()),
                (
                    "check_status",
                    models.CharField(
                        blank=True,
                        choices=[("Accept", "Accept"), ("Reject", "Reject")],
                        default="",
                        max_length=10,
                    ),
                ),
                ("bill_copy_attached", _text(500)),
                ("send_debit_note", _text(3)),
                ("reason", models.TextField(blank=True, default="")),
                ("planned9", _dt()),
                ("actual9", _dt()),
                ("debit_note_number", _text(100)),
                ("debit_note_copy", _text(500)),
                ("planned11", _dt()),
                ("actual11", _dt()),
                ("bill_status_new", _text(20)),
                ("bill_image_status", _text(500)),
                (
                    "indent",
                    models.ForeignKey(
                        db_column="indent_no",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lifts",
                        to="procurement.indent",
                        to_field="indent_number",
                    ),
                ),
            ],
            options={"db_table": "store_in", "ordering": ["-lift_id"]},
        ),
        migrations.CreateModel(
            name="TallyEntry",
            fields=[
                ("entry_id", models.AutoField(primary_key=True, serialize=False)),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now)),
                ("indent_number", models.CharField(max_length=20)),
                ("lift_number", models.CharField(max_length=20)),
                ("po_number", _text(60)),
                ("indent_date", _dt()),
                ("purchase_date", _dt()),
                ("material_in_date", _dt()),
                ("product_name", _text()),
                ("bill_no", _text(100)),
                ("qty", _dec(default=0)),
                ("party_name", _text()),
                ("bill_amt", _dec(14, default=0)),
                ("bill_image", _text(500)),
                ("location", _text()),
                ("area", _text()),
                ("indented_for", _text()),
                ("rate", _dec(default=0)),
                ("indent_qty", _dec(default=0)),
                ("total_rate", _dec(14, default=0)),
                ("firm_name_match", _text(100)),
                ("planned1", _dt()),
                ("actual1", _dt()),
                ("status1", models.CharField(blank=True, choices=DONE, default="", max_length=10)),
                ("remarks1", models.TextField(blank=True, default="")),
                ("planned2", _dt()),
                ("actual2", _dt()),
                ("status2", models.CharField(blank=True, choices=DONE, default="", max_length=10)),
                ("remarks2", models.TextField(blank=True, default="")),
                ("planned3", _dt()),
                ("actual3", _dt()),
                ("status3", models.CharField(blank=True, choices=DONE, default="", max_length=10)),
                ("remarks3", models.TextField(blank=True, default="")),
                ("planned4", _dt()),
                ("actual4", _dt()),
                ("status4", models.CharField(blank=True, choices=DONE, default="", max_length=10)),
                ("remarks4", models.TextField(blank=True, default="")),
                ("planned5", _dt()),
                ("actual5", _dt()),
                (
                    "status5",
                    models.CharField(
                        blank=True,
                        choices=[("okey", "Okey"), ("not okey", "Not okey")],
                        default="",
                        max_length=10,
                    ),
                ),
                (
                    "lift",
                    models.OneToOneField(
                        db_column="lift_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tally_entry",
                        to="procurement.lift",
                    ),
                ),
            ],
            options={"db_table": "tally_entry", "ordering": ["-entry_id"]},
        ),
        migrations.CreateModel(
            name="StoreIssue",
            fields=[
                ("issue_id", models.AutoField(primary_key=True, serialize=False)),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now)),
                ("issue_no", models.CharField(max_length=20, unique=True)),
                ("issue_to", models.CharField(max_length=255)),
                ("uom", _text(30)),
                ("group_head", _text(100)),
                ("product_name", models.CharField(max_length=255)),
                ("quantity", _dec()),
                ("department", _text(100)),
                ("firm_name_match", _text(100)),
                ("planned1", _dt()),
                ("actual1", _dt()),
                ("status", _text(3)),
                ("given_qty", _dec(blank=True, null=True)),
            ],
            options={"db_table": "issue", "ordering": ["-issue_id"]},
        ),
        migrations.CreateModel(
            name="MasterRecord",
            fields=[
                ("id", models.AutoField(primary_key=True, serialize=False)),
                ("vendor_name", _text()),
                ("vendor_gstin", _text(20)),
                ("vendor_address", models.TextField(blank=True, default="")),
                ("vendor_email", _text(254)),
                ("payment_term", _text()),
                ("department", _text(100)),
                ("group_head", _text(100)),
                ("item_name", _text()),
                ("uom", _text(30)),
                ("firm_name", _text(100)),
                ("company_name", _text()),
                ("company_address", models.TextField(blank=True, default="")),
                ("company_gstin", _text(20)),
                ("company_phone", _text(20)),
                ("company_pan", _text(20)),
                ("company_email", _text(254)),
                ("billing_address", models.TextField(blank=True, default="")),
                ("destination_address", models.TextField(blank=True, default="")),
                ("default_terms", models.TextField(blank=True, default="")),
            ],
            options={"db_table": "master"},
        ),
        migrations.CreateModel(
            name="UserAccess",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("firm_name_match", _text(100)),
                ("permissions", models.JSONField(blank=True, default=list)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="access",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={"db_table": "user_access"},
        ),
        migrations.CreateModel(
            name="StageEvent",
            fields=[
                ("event_id", models.AutoField(primary_key=True, serialize=False)),
                ("timestamp", models.DateTimeField(auto_now_add=True)),
                ("stage", models.CharField(max_length=50)),
                ("entity_type", models.CharField(max_length=50)),
                ("entity_id", models.CharField(max_length=60)),
                ("changes", models.JSONField(blank=True, default=dict)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={"db_table": "stage_event", "ordering": ["-timestamp"]},
        ),
    ]
