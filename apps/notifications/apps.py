from django.apps import AppConfig  # type: ignore


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.notifications"
    verbose_name = "Notificaciones"

    def ready(self) -> None:
        from .handlers import register_handlers

        register_handlers()
