"""
Polar code object: parameters, frozen bit set and systematic encoding.
"""

import logging
from dataclasses import dataclass, field

from .code_construction import polar_code_construct, validate_parameters
from .encoder import SystematicEncoder

logger = logging.getLogger(__name__)

N_DEFAULT = 256
K_DEFAULT = 128
DESIGN_SNR_DEFAULT = 0.0


@dataclass(frozen=True)
class CodeParameters:
    """Code length N, information length K and design SNR in dB."""
    N: int = N_DEFAULT
    K: int = K_DEFAULT
    design_snr: float = DESIGN_SNR_DEFAULT
    n: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, 'n', validate_parameters(self.N, self.K, self.design_snr))

    @property
    def rate(self):
        return self.K / self.N


class PolarCode:
    """
    Polar code with Arikan kernel and systematic encoding.

    The frozen bit set is computed once here and never changes; ``encode``
    only reads it, so one instance can serve any number of encode calls.

    Parameters
    ----------
    N : int, optional
        Code length (must be a power of 2, default: 256).
    K : int, optional
        Number of information bits, 0 < K < N (default: 128).
    design_snr : float, optional
        Design SNR in dB for construction (default: 0.0).
    method : str, optional
        Construction method, 'bhattacharyya' or 'ga' (default: 'bhattacharyya').
    """

    def __init__(self, N=N_DEFAULT, K=K_DEFAULT, design_snr=DESIGN_SNR_DEFAULT,
                 method='bhattacharyya'):
        self.params = CodeParameters(N, K, design_snr)
        self.method = method

        frozen_bits, _ = polar_code_construct(N, K, design_snr=design_snr, method=method)
        self._encoder = SystematicEncoder(N, frozen_bits)
        logger.debug("Created %r", self)

    @property
    def N(self):
        return self.params.N

    @property
    def K(self):
        return self.params.K

    @property
    def n(self):
        return self.params.n

    @property
    def design_snr(self):
        return self.params.design_snr

    @property
    def rate(self):
        return self.params.rate

    @property
    def frozen_bits(self):
        return self._encoder.frozen_bits

    @property
    def info_bits(self):
        return self._encoder.info_bits

    def encode(self, message):
        """Systematically encode K information bits into an N-bit codeword."""
        return self._encoder.encode(message)

    def extract_information(self, codeword):
        """Return the information bits carried by a systematic codeword."""
        return self._encoder.extract_information(codeword)

    def is_codeword(self, codeword):
        return self._encoder.is_codeword(codeword)

    def show_frozen_bits(self):
        return ",".join(str(i) for i in self.frozen_bits)

    def info(self):
        """Human-readable summary of the code."""
        lines = [
            f"N = {self.N}",
            f"K = {self.K}",
            f"R = {self.rate:g}",
            f"Design SNR = {self.design_snr:g} dB",
            self.show_frozen_bits(),
        ]
        return "\n".join(lines) + "\n"

    def __repr__(self):
        return (f"PolarCode(N={self.N}, K={self.K}, design_snr={self.design_snr}, "
                f"method={self.method!r})")
