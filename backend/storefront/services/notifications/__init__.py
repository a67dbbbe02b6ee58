"""Operator notifications for submitted orders."""
