"""
Marathon application service handles, used for sequential remote execution.
"""

from pravega_systest.services.marathon.base import MarathonBasedService
from pravega_systest.services.marathon.services import (
    BookkeeperMarathonService,
    PravegaControllerMarathonService,
    PravegaSegmentStoreMarathonService,
    ZookeeperMarathonService,
)

__all__ = [
    "MarathonBasedService",
    "ZookeeperMarathonService",
    "BookkeeperMarathonService",
    "PravegaControllerMarathonService",
    "PravegaSegmentStoreMarathonService",
]
