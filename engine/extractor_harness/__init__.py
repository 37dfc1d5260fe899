"""
Extractor conformance harness.

Drives streaming media extractors through sniff, init, read and seek while
injecting I/O adversity, and checks the recorded output against golden dumps:
- Consumption driver with transient-fault retry and restart-from-zero policy
- Fault matrix over every combination of simulated I/O conditions
- Golden verification of full runs and seek probes
"""

__version__ = "0.4.0"

from extractor_harness.config import HarnessSettings, get_settings

__all__ = ["__version__", "HarnessSettings", "get_settings"]
