"""Sinema: administration dashboard for a cinema chain."""
