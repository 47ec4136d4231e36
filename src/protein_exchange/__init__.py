"""Cafeteria protein exchange service."""
