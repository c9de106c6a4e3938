"""Microsoft 365 command areas."""
