"""Settings package for the villa reservations project.

This package exposes multiple environment‑specific settings modules. The
`base.py` contains common configuration shared across environments. The
`dev.py`, `test.py` and `prod.py` modules extend base settings with
environment specific overrides.
"""
