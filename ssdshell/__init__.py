"""Interactive test shell, built-in test scripts and SSD drivers for a 100-LBA SSD."""

__version__ = "0.1.0"