"""
HTTP layer: routes, CORS gate and request/response schemas.
"""
