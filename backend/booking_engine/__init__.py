"""Booking creation and lifecycle engine for multi-tenant reservations."""

__version__ = "0.1.0"
