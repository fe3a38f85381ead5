"""
PRESENTATION LAYER - FastAPI routers, auth dependency, error mapping.

Routers stay thin: parse the request, build a Command/Query, call the
injected handler, return its DTO. Domain exceptions are mapped to HTTP in
``presentation.errors``.
"""
