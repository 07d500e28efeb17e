"""
Stateful services: conversation storage and the generation pipeline.
"""
