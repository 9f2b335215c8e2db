"""
Application Layer Ports (Interfaces)

Contains Protocol definitions for dependency inversion.
Infrastructure Layer implements these protocols.
"""

from src.application.ports.notifier import NotifierProtocol

__all__ = ["NotifierProtocol"]
