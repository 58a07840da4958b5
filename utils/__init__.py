"""Shared helpers for tfvc_blame."""
