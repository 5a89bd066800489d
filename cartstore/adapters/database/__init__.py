"""
Database adapters: replica probing, replica selection and connection descriptors.

Startup flow::

    probe = LatencyProbe(attempts=5, interval=1.0, timeout=5.0)
    selected = await HostSelector(probe).select(candidates)
    descriptor = ConnectionFactory().build(selected, database, username, password)
"""

from cartstore.adapters.database.connection import ConnectionDescriptor, ConnectionFactory
from cartstore.adapters.database.probe import LatencyProbe, mean_latency
from cartstore.adapters.database.selector import HostSelector

__all__ = [
    'ConnectionDescriptor',
    'ConnectionFactory',
    'HostSelector',
    'LatencyProbe',
    'mean_latency',
]
