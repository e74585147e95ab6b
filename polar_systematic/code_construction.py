"""
Polar code construction methods.
"""

import logging
import math

import numpy as np

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONSTRUCTION_METHODS = ('bhattacharyya', 'ga')

# Chung's approximation of the GA phi function switches form at this mean
_GA_SWITCH = 10.0


def validate_parameters(N, K, design_snr=0.0):
    """
    Check code parameters and return the number of polarization stages.

    Parameters
    ----------
    N : int
        Code length (must be a power of 2, at least 2).
    K : int
        Number of information bits (0 < K < N).
    design_snr : float, optional
        Design SNR in dB (default: 0.0).

    Returns
    -------
    n : int
        log2(N).

    Raises
    ------
    ConfigurationError
        If any parameter is out of range.
    """
    if isinstance(N, bool) or not isinstance(N, (int, np.integer)):
        raise ConfigurationError(f"N must be an integer, got {N!r}")
    if isinstance(K, bool) or not isinstance(K, (int, np.integer)):
        raise ConfigurationError(f"K must be an integer, got {K!r}")
    if N < 2 or (N & (N - 1)) != 0:
        raise ConfigurationError(f"N must be a power of 2, got {N}")
    if K <= 0 or K >= N:
        raise ConfigurationError(f"K must be between 1 and {N - 1}, got {K}")
    if not math.isfinite(design_snr):
        raise ConfigurationError(f"design SNR must be finite, got {design_snr}")
    return int(N).bit_length() - 1


def polar_code_construct(N, K, design_snr=0.0, method='bhattacharyya'):
    """
    Construct a polar code by selecting frozen bit positions.

    Indices refer to the source vector u of ``x = u F^{(x)n}`` as computed by
    :func:`polar_systematic.encoder.polar_transform`.

    Parameters
    ----------
    N : int
        Code length (must be a power of 2).
    K : int
        Number of information bits.
    design_snr : float, optional
        Design SNR in dB for construction (default: 0.0).
    method : str, optional
        Construction method. Options: 'bhattacharyya', 'ga' (default: 'bhattacharyya').

    Returns
    -------
    frozen_bits : ndarray
        Ascending indices of frozen bit positions (length N - K).
    info_bits : ndarray
        Ascending indices of information bit positions (length K).
    """
    validate_parameters(N, K, design_snr)

    if method == 'bhattacharyya':
        # log Z keeps channels apart after Z itself underflows to 0.0
        scores = bhattacharyya_log_bounds(N, design_snr)
    elif method == 'ga':
        # Larger score must mean a worse channel, GA means grow with quality
        scores = -ga_means(N, design_snr)
    else:
        raise ConfigurationError(f"Unknown construction method: {method}")

    frozen_bits = select_frozen_bits(scores, N - K)
    info_bits = np.setdiff1d(np.arange(N), frozen_bits)

    logger.debug("Constructed (%d, %d) polar code at %.2f dB with %s: %d frozen bits",
                 N, K, design_snr, method, frozen_bits.size)
    return frozen_bits, info_bits


def construct(N, K, design_snr=0.0):
    """Return the frozen bit set of the PCC-0 (Bhattacharyya) construction."""
    frozen_bits, _ = polar_code_construct(N, K, design_snr=design_snr)
    return frozen_bits


def select_frozen_bits(scores, num_frozen):
    """
    Pick the ``num_frozen`` least reliable bit-channels.

    Channels are ranked by descending score; equal scores are ranked by
    ascending index so the result does not depend on sort stability.
    """
    scores = np.asarray(scores, dtype=float)
    indices = np.arange(scores.size)
    ranking = np.lexsort((indices, -scores))
    return np.sort(ranking[:num_frozen]).astype(np.int64)


def bit_reversal_permutation(n):
    """Return the n-bit bit-reversal permutation of range(2**n)."""
    indices = np.arange(2 ** n)
    reversed_indices = np.zeros_like(indices)
    for b in range(n):
        reversed_indices |= ((indices >> b) & 1) << (n - 1 - b)
    return reversed_indices


def bhattacharyya_log_bounds(N, design_snr):
    """
    Compute the natural log of per bit-channel Bhattacharyya bounds (PCC-0).

    Index 0 starts from the AWGN channel bound exp(-S). Stage j doubles the
    populated prefix: entry t becomes the degraded channel 2T - T^2 and entry
    2^(j-1) + t the upgraded channel T^2, so the first split lands in the
    least significant index bit. The result is bit-reversed into the order of
    the transform, where the first split is the most significant bit.

    In the log domain the degraded update is log T + log(2 - T) and the
    upgraded update is 2 log T. Smaller values are more reliable.

    Raises
    ------
    ConfigurationError
        If the recursion produces NaN.
    """
    n = int(N).bit_length() - 1
    snr_linear = 10 ** (design_snr / 10)

    log_z = np.zeros(N)
    log_z[0] = -snr_linear

    for level in range(1, n + 1):
        half = 2 ** (level - 1)
        log_t = log_z[:half].copy()
        # Degraded (minus) channel, log(2 - T) = log1p(1 - T)
        log_z[:half] = np.minimum(log_t + np.log1p(-np.expm1(log_t)), 0.0)
        # Upgraded (plus) channel
        log_z[half:2 * half] = 2 * log_t

    if np.any(np.isnan(log_z)):
        raise ConfigurationError(
            f"Bhattacharyya bounds are undefined at design SNR {design_snr} dB")
    saturated = int(np.count_nonzero(log_z == 0.0))
    if saturated:
        logger.warning("%d of %d bit-channels saturated at Z = 1.0 for design SNR %.2f dB; "
                       "ranking falls back to index order for them", saturated, N, design_snr)
    return log_z[bit_reversal_permutation(n)]


def bhattacharyya_bounds(N, design_snr):
    """
    Per bit-channel Bhattacharyya bounds in [0, 1], in transform order.

    Very reliable channels underflow to 0.0 at high design SNR; rank with
    :func:`bhattacharyya_log_bounds` instead.
    """
    z = np.exp(bhattacharyya_log_bounds(N, design_snr))
    underflow = int(np.count_nonzero(z == 0.0))
    if underflow:
        logger.debug("%d of %d Bhattacharyya bounds underflow to 0.0 at %.2f dB",
                     underflow, N, design_snr)
    return z


def ga_means(N, design_snr):
    """
    Compute per bit-channel LLR means using Gaussian approximation.

    Runs the same layout as :func:`bhattacharyya_log_bounds` and returns the
    means in transform order. Larger means are more reliable.
    """
    n = int(N).bit_length() - 1

    # BPSK over AWGN: LLR = 2y/sigma^2 has mean 4 Es/N0
    snr_linear = 10 ** (design_snr / 10)

    means = np.zeros(N)
    means[0] = 4 * snr_linear

    for level in range(1, n + 1):
        half = 2 ** (level - 1)
        mu_temp = means[:half].copy()
        p = _phi(mu_temp)
        means[:half] = _phi_inv(p * (2 - p))
        means[half:2 * half] = 2 * mu_temp

    return means[bit_reversal_permutation(n)]


def _phi(x):
    """Chung's approximation of the GA phi function."""
    x = np.asarray(x, dtype=float)
    out = np.ones_like(x)
    low = (x > 0) & (x < _GA_SWITCH)
    high = x >= _GA_SWITCH
    out[low] = np.exp(-0.4527 * x[low] ** 0.86 + 0.0218)
    out[high] = np.sqrt(np.pi / x[high]) * np.exp(-x[high] / 4) * (1 - 10 / (7 * x[high]))
    return out


def _phi_inv(y):
    """Inverse of :func:`_phi`; closed form below the switch, bisection above."""
    y = np.clip(np.asarray(y, dtype=float), np.finfo(float).tiny, 1.0)
    out = np.empty_like(y)

    low = y >= _phi(np.array([_GA_SWITCH]))[0]
    out[low] = ((0.0218 - np.log(y[low])) / 0.4527) ** (1 / 0.86)

    target = y[~low]
    if target.size:
        lo = np.full(target.shape, _GA_SWITCH)
        hi = np.full(target.shape, 2 * _GA_SWITCH)
        while np.any(_phi(hi) > target):
            hi = np.where(_phi(hi) > target, 2 * hi, hi)
        for _ in range(60):
            mid = (lo + hi) / 2
            above = _phi(mid) > target
            lo = np.where(above, mid, lo)
            hi = np.where(above, hi, mid)
        out[~low] = (lo + hi) / 2
    return out
