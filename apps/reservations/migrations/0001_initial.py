import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("cabins", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Reservation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("guest_name", models.CharField(max_length=200)),
                ("guest_email", models.EmailField(max_length=254)),
                ("check_in", models.DateField()),
                ("check_out", models.DateField()),
                ("guests", models.PositiveSmallIntegerField(default=1)),
                ("total_price", models.PositiveIntegerField(help_text="Precio total fijado al crear la reserva.")),
                ("includes_add_on", models.BooleanField(default=False, help_text="Incluye kit de asado.")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pendiente de pago"),
                            ("confirmed", "Confirmada"),
                            ("cancelled", "Cancelada"),
                            ("expired", "Expirada"),
                        ],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("confirmation_code", models.CharField(editable=False, max_length=16, unique=True)),
                ("payment_instructions", models.TextField(blank=True)),
                (
                    "frozen_until",
                    models.DateTimeField(
                        blank=True,
                        help_text="Fin del congelamiento; después de esta fecha la reserva pendiente expira.",
                        null=True,
                    ),
                ),
                ("calendar_event_id", models.CharField(blank=True, max_length=255, null=True)),
                ("cancellation_reason", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "cabin",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reservations",
                        to="cabins.cabin",
                    ),
                ),
            ],
            options={
                "verbose_name": "Reserva",
                "verbose_name_plural": "Reservas",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["cabin", "check_in", "check_out"], name="reservation_cabin_dates_idx"),
                    models.Index(fields=["status", "frozen_until"], name="reservation_status_frozen_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("check_out__gt", models.F("check_in"))),
                        name="reservation_valid_dates",
                    ),
                ],
            },
        ),
    ]
