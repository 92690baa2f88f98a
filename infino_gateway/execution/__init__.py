"""Asynchronous dispatch, mirroring and result formatting."""

from infino_gateway.execution.inflight import InFlightSet
from infino_gateway.execution.mirror import MetadataMirrorSynchronizer
from infino_gateway.execution.dispatcher import ForwardingDispatcher
from infino_gateway.execution.result_formatter import ResultFormatter

__all__ = [
    "InFlightSet",
    "MetadataMirrorSynchronizer",
    "ForwardingDispatcher",
    "ResultFormatter",
]
