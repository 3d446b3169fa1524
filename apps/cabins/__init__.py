"""Cabins app package.

The bookable units of the villa: name, weekday and weekend nightly prices,
guest capacity and an active flag. Reference data maintained through the
Django admin; guest-facing flows only read it.
"""
