"""Extract DMAMUX and interrupt data for HPMicro chips from SDK headers."""

__version__ = '0.1.0'
