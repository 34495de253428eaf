"""Contract Studio: compile and deploy smart contracts to an EVM test network."""

__version__ = "0.1.0"
