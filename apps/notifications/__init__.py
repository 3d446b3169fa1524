"""Notifications app package.

Handles delivery of reservation notifications by email. Handlers are
registered on the shared message bus when the app is ready and react to
the reservation domain events (created, confirmed, cancelled, expired).
"""
