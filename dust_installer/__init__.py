"""dust-installer — fetch and install the latest dust release binary."""

__version__ = "0.1.0"
