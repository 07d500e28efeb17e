"""
Shared helpers for the NicheGen backend.
"""
