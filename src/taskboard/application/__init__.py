"""Application layer: settings and services."""
