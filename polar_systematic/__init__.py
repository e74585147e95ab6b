"""
polar-systematic: A NumPy-based toolkit for constructing and systematically encoding Polar Codes.

This package provides Bhattacharyya-bound (PCC-0) and Gaussian approximation code
construction and the EncoderA systematic encoder for Arikan polar codes.
"""

__version__ = "0.1.0"

from .code_construction import construct, polar_code_construct
from .encoder import SystematicEncoder, polar_transform
from .exceptions import ConfigurationError, InputSizeError, PolarCodeError
from .polar_code import CodeParameters, PolarCode

__all__ = [
    "PolarCode",
    "CodeParameters",
    "SystematicEncoder",
    "polar_transform",
    "polar_code_construct",
    "construct",
    "PolarCodeError",
    "ConfigurationError",
    "InputSizeError",
]
