"""
Infino Gateway - search platform to Infino protocol translation.

Main entry point for building the gateway context.
"""

from infino_gateway.gateway import InfinoGateway

__all__ = ["InfinoGateway"]
