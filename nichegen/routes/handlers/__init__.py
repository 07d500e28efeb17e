"""
Request handlers behind the route modules.
"""
