"""
Integrations with external services (web search, image generation).
"""
