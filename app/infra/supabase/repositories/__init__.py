"""Supabase-backed repositories"""
from .tasks import SupabaseTaskRepository

__all__ = [
    'SupabaseTaskRepository',
]
