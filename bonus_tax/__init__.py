"""Year-end bonus split optimizer.

The engine in :mod:`bonus_tax.core` is pure and synchronous; :mod:`bonus_tax.api`
wraps it in a small FastAPI service.
"""
from __future__ import annotations

__version__ = "0.1.0"
