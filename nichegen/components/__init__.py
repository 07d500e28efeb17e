"""
Prompt construction for the generation pipeline.
"""
