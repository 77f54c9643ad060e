"""Value objects, ports, loggers and test doubles for TPM 2.0 PCR operations."""

__version__ = "0.1.0"