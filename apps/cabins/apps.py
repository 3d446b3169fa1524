from django.apps import AppConfig


class CabinsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.cabins"
    verbose_name = "Cabañas"
