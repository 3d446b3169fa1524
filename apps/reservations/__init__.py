"""Reservations app package.

This app holds the reservation core: the pure domain (holidays, pricing,
the reservation aggregate and its state machine), the application services
that drive the lifecycle and the expiry sweeper, and the Django adapters
around them (models, repository, Celery tasks, admin and a thin REST API).
Overlaps per cabin are prevented atomically at write time.
"""
