"""
HTTP routes for the NicheGen backend.
"""
