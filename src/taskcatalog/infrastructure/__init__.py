"""Infrastructure layer — filesystem access and the Catalog container.

This layer may import from the domain layer for rule types.
It must never import from services, commands, or output.
"""
