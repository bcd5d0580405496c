"""diffgrade — grade a candidate migration diff against a golden reference diff."""

__version__ = "0.1.0"
