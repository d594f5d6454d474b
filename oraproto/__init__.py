"""Building blocks for the Oracle TTC protocol: negotiation, versions, ROWIDs and parameters."""

__version__ = "0.1.0"