import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


def _dt():
    return models.DateTimeField(blank=True, null=True)


def _text(max_length=255):
    return models.CharField(blank=True, default="", max_length=max_length)


class Migration(migrations.Migration):
    dependencies = [
        ("procurement", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="stageevent",
            name="firm_name_match",
            field=_text(100),
        ),
        migrations.CreateModel(
            name="FullKitting",
            fields=[
                ("kitting_id", models.AutoField(primary_key=True, serialize=False)),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now)),
                ("indent_number", models.CharField(max_length=20)),
                ("lift_number", models.CharField(max_length=20)),
                ("vendor_name", _text()),
                ("product_name", _text()),
                ("qty", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("bill_no", _text(100)),
                ("transporting_include", _text(3)),
                ("transporter_name", _text()),
                ("amount", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("vehicle_no", _text(50)),
                ("driver_name", _text()),
                ("driver_mobile_no", _text(20)),
                ("firm_name_match", _text(100)),
                ("planned1", _dt()),
                ("actual1", _dt()),
                (
                    "fms_name",
                    models.CharField(
                        blank=True,
                        choices=[("Store Fms", "Store Fms")],
                        default="",
                        max_length=50,
                    ),
                ),
                ("status", _text(3)),
                ("vehicle_number", _text(50)),
                (
                    "from_location",
                    models.CharField(blank=True, db_column="from", default="", max_length=255),
                ),
                (
                    "to_location",
                    models.CharField(blank=True, db_column="to", default="", max_length=255),
                ),
                ("material_load_details", models.TextField(blank=True, default="")),
                ("bilty_number", _text(100)),
                (
                    "rate_type",
                    models.CharField(
                        blank=True,
                        choices=[("Fixed", "Fixed"), ("Per MT", "Per MT")],
                        default="",
                        max_length=10,
                    ),
                ),
                (
                    "amount1",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True),
                ),
                ("bilty_image", _text(500)),
                (
                    "lift",
                    models.OneToOneField(
                        db_column="lift_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="full_kitting",
                        to="procurement.lift",
                    ),
                ),
            ],
            options={"db_table": "fullkitting", "ordering": ["-kitting_id"]},
        ),
    ]
