"""Test fixtures for tcrun tests.

- installations: Installation directory trees and configuration store records

Import fixtures in your tests using:
    from tests.fixtures.installations import swift_installation
"""

__all__ = ["installations"]
