"""
Prisma persistence adapter (PostgreSQL).

Requires ``prisma generate`` against the repository's schema.prisma.
"""

from zfounders.infrastructure.persistence.prisma.prisma_unit_of_work import PrismaUnitOfWork

__all__ = ["PrismaUnitOfWork"]
