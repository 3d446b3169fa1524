import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Cabin",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, unique=True)),
                ("weekday_price", models.PositiveIntegerField(help_text="Precio por noche de domingo a jueves.")),
                ("weekend_price", models.PositiveIntegerField(help_text="Precio por noche de viernes, sábado y víspera de festivo.")),
                ("max_guests", models.PositiveSmallIntegerField(default=2, validators=[django.core.validators.MinValueValidator(1)])),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Cabaña",
                "verbose_name_plural": "Cabañas",
                "ordering": ["name"],
            },
        ),
    ]
