"""Moment synchronization: epoch, wall-clock and calendar views of one instant.

Provides TimeCoordinator plus the zone conversion helpers and the
longitude-to-Local-Mean-Time resolver it depends on.
"""
