"""
Dramatiq actors.

Importing this package configures the Redis broker before any actor is
declared. Run workers with: dramatiq jobs.tasks.plan_expiry_sweep
"""

from jobs.broker import broker  # noqa: F401
