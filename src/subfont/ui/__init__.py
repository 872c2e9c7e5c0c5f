"""User interfaces for subfont."""
