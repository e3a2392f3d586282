"""
Application wiring: lifespan, CORS and error handlers.
"""
