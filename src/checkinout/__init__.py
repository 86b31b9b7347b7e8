"""checkinout: check-in/check-out session lifecycle with typed outcomes."""

__version__ = "0.1.0"
