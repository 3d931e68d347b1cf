"""teestream: fan a byte stream out to many sinks.

A Distributor holds an ordered set of sinks and forwards every write,
flush and close to all of them. Sinks are registered first, then the
distributor is sealed for writing; closing it closes only the sinks it
owns, leaving survivable sinks open for later use.
"""

__version__ = "0.1.0"
__description__ = "Two-phase byte stream fan-out with per-sink close policy"

from teestream.core.distributor import Distributor
from teestream.errors import InvalidStateError, SinkFanoutError, TeeStreamError
from teestream.models.registration import SinkRegistration
from teestream.models.state import DistributorState, FanoutPolicy
from teestream.sinks import ByteSink
from teestream.sinks.local_file import LocalFileSink
from teestream.sinks.memory import MemorySink

__all__ = [
    "ByteSink",
    "Distributor",
    "DistributorState",
    "FanoutPolicy",
    "InvalidStateError",
    "LocalFileSink",
    "MemorySink",
    "SinkFanoutError",
    "SinkRegistration",
    "TeeStreamError",
    "__version__",
]
