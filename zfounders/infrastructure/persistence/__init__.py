"""Persistence adapters implementing UnitOfWork and the repository ports."""
