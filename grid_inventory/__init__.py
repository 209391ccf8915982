"""Inventory service for electric-grid equipment with per-type custom fields."""

__all__ = []
