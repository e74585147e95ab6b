"""
Exceptions raised by polar code construction and encoding.
"""


class PolarCodeError(ValueError):
    """Base class for invalid polar code parameters or inputs."""


class ConfigurationError(PolarCodeError):
    """Code parameters (N, K, design SNR, frozen set) are not valid."""


class InputSizeError(PolarCodeError):
    """An information vector or codeword has the wrong length."""
