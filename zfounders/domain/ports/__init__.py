"""
PORTS - Interfaces the domain needs from the outside world

Infrastructure provides the implementations; handlers only see these ABCs.
"""

from zfounders.domain.ports.clock import Clock
from zfounders.domain.ports.realtime import RealtimePublisher
from zfounders.domain.ports.unit_of_work import UnitOfWork

__all__ = ["Clock", "RealtimePublisher", "UnitOfWork"]
