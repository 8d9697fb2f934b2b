"""Host-side models of ESP32-C3 mikroBUS board logic: queues, peers, logging tags, tunes, LED encoding and diagnostics."""

__version__ = "0.1.0"