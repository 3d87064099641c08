"""ps3ipcontrol -- IP control proxy for a PlayStation 3.

Exposes power and button commands over a small HTTP API and realizes
them by driving a GIMX process that impersonates a Sixaxis controller
over Bluetooth. Intended for home theatre remote control integration.
"""

__version__ = "0.1.0"
