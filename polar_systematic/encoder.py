"""
Polar code encoder implementation.

Systematic encoding follows EncoderA from Vangala, Hong and Viterbo,
"Efficient algorithms for systematic polar encoding" (2016).
"""

import logging

import numpy as np

from .exceptions import ConfigurationError, InputSizeError

logger = logging.getLogger(__name__)

# Arikan kernel F; the transform is x = u F^{(x)n} over GF(2)
ARIKAN_KERNEL = np.array([[1, 0], [1, 1]], dtype=np.uint8)
ARIKAN_KERNEL.flags.writeable = False


def polar_transform(u):
    """
    Non-systematic polar transform using Kronecker construction.

    The transform is an involution over GF(2), so it also maps a codeword
    back to its source vector.

    Parameters
    ----------
    u : array-like
        Source bits (length must be a power of 2).

    Returns
    -------
    x : ndarray
        Transformed bits, dtype uint8.
    """
    x = np.array(u, dtype=np.uint8) & 1
    N = x.size
    if N == 0 or (N & (N - 1)) != 0:
        raise InputSizeError(f"Transform length must be a power of 2, got {N}")

    n = N.bit_length() - 1
    for i in range(n):
        step = 2 ** (i + 1)
        for j in range(0, N, step):
            x[j:j+step//2] ^= x[j+step//2:j+step]
    return x


def binary_representation(index, n):
    """Return the n-bit binary representation of index, bit 0 least significant."""
    return np.array([(index >> b) & 1 for b in range(n)], dtype=np.uint8)


class SystematicEncoder:
    """
    Systematic polar encoder.

    Information bits appear unchanged at the non-frozen positions of the
    codeword, and the codeword is still the polar transform of a source
    vector that is zero at every frozen position.

    Parameters
    ----------
    N : int
        Code length (must be a power of 2).
    frozen_bits : array-like
        Indices of frozen bit positions.
    """

    def __init__(self, N, frozen_bits):
        if isinstance(N, bool) or not isinstance(N, (int, np.integer)) \
                or N < 2 or (N & (N - 1)) != 0:
            raise ConfigurationError(f"N must be a power of 2, got {N}")

        frozen_bits = list(frozen_bits)
        frozen = np.unique(np.asarray(frozen_bits, dtype=np.int64))
        if frozen.size != len(frozen_bits):
            raise ConfigurationError("Frozen bit positions must be distinct")
        if frozen.size and (frozen[0] < 0 or frozen[-1] >= N):
            raise ConfigurationError(f"Frozen bit positions must lie in [0, {N - 1}]")

        self.N = int(N)
        self.n = self.N.bit_length() - 1
        self.frozen_bits = frozen
        self.frozen_bits.flags.writeable = False
        self.info_bits = np.setdiff1d(np.arange(self.N), self.frozen_bits)
        self.info_bits.flags.writeable = False
        self.K = len(self.info_bits)

        self._frozen_mask = np.zeros(self.N, dtype=bool)
        self._frozen_mask[self.frozen_bits] = True
        self._frozen_mask.flags.writeable = False

    def encode(self, message):
        """
        Encode a message using systematic polar coding.

        Parameters
        ----------
        message : array-like
            Information bits to encode (length K).

        Returns
        -------
        codeword : ndarray
            Encoded codeword (length N), equal to ``message`` at ``info_bits``.
        """
        return self.transform_table(message)[:, self.n].copy()

    def transform_table(self, message):
        """
        Run EncoderA and return the full N x (n+1) transform table.

        Column d holds the bits after d butterfly stages: column 0 is the
        source vector (zero at frozen rows), column n is the codeword.
        """
        message = self._check_message(message)
        N, n = self.N, self.n

        X = np.zeros((N, n + 1), dtype=np.uint8)
        X[self.info_bits, n] = message

        for i in range(N - 1, -1, -1):
            b = binary_representation(i, n)
            if self._frozen_mask[i]:
                # known source bit, propagate towards the codeword
                stages = range(1, n + 1)
                delta = 1
            else:
                # known codeword bit, propagate back towards the source
                stages = range(n, 0, -1)
                delta = -1
            for l in stages:
                src = l - 1 if delta == 1 else l
                dst = src + delta
                k = 2 ** (n - l)
                if b[n - l] == 0:
                    X[i, dst] = X[i, src] ^ X[i + k, src]
                else:
                    X[i, dst] = X[i, src]

        logger.debug("Encoded %d information bits into %d-bit codeword", self.K, N)
        return X

    def extract_information(self, codeword):
        """
        Read the information bits back from a systematic codeword.

        Parameters
        ----------
        codeword : array-like
            Hard-decision codeword (length N).

        Returns
        -------
        message : ndarray
            Bits at the information positions (length K).
        """
        codeword = self._check_codeword(codeword)
        return codeword[self.info_bits]

    def is_codeword(self, codeword):
        """Check that the source vector behind ``codeword`` is zero at every frozen position."""
        codeword = self._check_codeword(codeword)
        u = polar_transform(codeword)
        return not np.any(u[self._frozen_mask])

    def _check_message(self, message):
        message = np.asarray(message)
        if message.ndim != 1 or message.size != self.K:
            raise InputSizeError(f"Message length must be {self.K}, got {message.size}")
        if not np.all((message == 0) | (message == 1)):
            raise ValueError("Message must contain only 0/1 bits")
        return message.astype(np.uint8)

    def _check_codeword(self, codeword):
        codeword = np.asarray(codeword)
        if codeword.ndim != 1 or codeword.size != self.N:
            raise InputSizeError(f"Codeword length must be {self.N}, got {codeword.size}")
        if not np.all((codeword == 0) | (codeword == 1)):
            raise ValueError("Codeword must contain only 0/1 bits")
        return codeword.astype(np.uint8)
