"""
Request middleware for the NicheGen backend.
"""
