"""
DOMAIN LAYER - Entities, value objects, ports and the policy core.

Nothing here imports a framework or reads configuration.
"""
