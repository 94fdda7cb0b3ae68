"""Supabase storage layer."""

from .client import SupabaseClient

__all__ = ["SupabaseClient"]
