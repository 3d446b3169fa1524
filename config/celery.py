import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("villa_reservations")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Expire PENDING reservations past their freeze window - every minute
    "expire-pending-reservations": {
        "task": "reservations.expire_pending_reservations",
        "schedule": 60.0,
        "options": {"expires": 50},
    },
}
