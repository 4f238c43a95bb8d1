"""Release bundle builder for the Oasis frontend + backend."""

__version__ = "0.2.6"
