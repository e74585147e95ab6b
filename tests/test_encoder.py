"""
Tests for the systematic encoder and the polar transform.
"""

import numpy as np
import pytest
from polar_systematic import InputSizeError, SystematicEncoder, construct, polar_transform
from polar_systematic.encoder import ARIKAN_KERNEL, binary_representation


def _kronecker_generator(n):
    G = np.array([[1]], dtype=np.uint8)
    for _ in range(n):
        G = np.kron(G, ARIKAN_KERNEL)
    return G


def _two_pass_systematic(message, frozen_bits, N):
    """Reference encoder: transform, clear frozen positions, transform again."""
    info_bits = np.setdiff1d(np.arange(N), frozen_bits)
    u = np.zeros(N, dtype=np.uint8)
    u[info_bits] = message
    v = polar_transform(u)
    v[frozen_bits] = 0
    return polar_transform(v)


def test_polar_transform_matches_generator_matrix():
    n = 4
    G = _kronecker_generator(n)
    rng = np.random.default_rng(7)

    for _ in range(10):
        u = rng.integers(0, 2, 2 ** n)
        np.testing.assert_array_equal(polar_transform(u), u.dot(G) % 2)


def test_polar_transform_is_involution():
    u = np.random.default_rng(1).integers(0, 2, 64)
    np.testing.assert_array_equal(polar_transform(polar_transform(u)), u)


def test_polar_transform_rejects_bad_length():
    with pytest.raises(InputSizeError):
        polar_transform([1, 0, 1])


def test_binary_representation_is_n_bits_lsb_first():
    np.testing.assert_array_equal(binary_representation(6, 3), [0, 1, 1])
    np.testing.assert_array_equal(binary_representation(1, 4), [1, 0, 0, 0])
    assert binary_representation(0, 5).size == 5


@pytest.mark.parametrize("message, expected", [
    ([0, 0], [0, 0, 0, 0]),
    ([1, 0], [1, 1, 0, 0]),
    ([0, 1], [0, 0, 1, 1]),
    ([1, 1], [1, 1, 1, 1]),
])
def test_encode_n4(message, expected):
    """N=4 with frozen {0, 2}: u = [0, a^b, 0, b] gives x = [a, a, b, b]."""
    encoder = SystematicEncoder(4, [0, 2])
    np.testing.assert_array_equal(encoder.encode(message), expected)


def test_encode_n2():
    encoder = SystematicEncoder(2, [0])
    np.testing.assert_array_equal(encoder.encode([1]), [1, 1])
    np.testing.assert_array_equal(encoder.encode([0]), [0, 0])


@pytest.mark.parametrize("N, K, snr", [(8, 4, 0.0), (32, 16, 1.0), (256, 128, 2.0)])
def test_codeword_is_systematic_and_consistent(N, K, snr):
    frozen = construct(N, K, snr)
    encoder = SystematicEncoder(N, frozen)
    rng = np.random.default_rng(N)

    for _ in range(5):
        message = rng.integers(0, 2, K)
        codeword = encoder.encode(message)

        np.testing.assert_array_equal(codeword[encoder.info_bits], message)
        np.testing.assert_array_equal(polar_transform(codeword)[frozen], 0)
        assert encoder.is_codeword(codeword)


def test_matches_two_pass_encoder():
    """Frozen {0, 1, 2, 4} is domination contiguous, so the two-pass encoder applies."""
    N = 8
    frozen = np.array([0, 1, 2, 4])
    encoder = SystematicEncoder(N, frozen)

    for value in range(16):
        message = np.array([(value >> b) & 1 for b in range(4)])
        np.testing.assert_array_equal(encoder.encode(message),
                                      _two_pass_systematic(message, frozen, N))


def test_transform_table_columns():
    N = 16
    frozen = construct(N, 6, 0.0)
    encoder = SystematicEncoder(N, frozen)
    message = np.array([1, 0, 1, 1, 0, 1])

    X = encoder.transform_table(message)

    assert X.shape == (N, encoder.n + 1)
    np.testing.assert_array_equal(X[frozen, 0], 0)
    np.testing.assert_array_equal(X[encoder.info_bits, encoder.n], message)
    np.testing.assert_array_equal(polar_transform(X[:, 0]), X[:, encoder.n])
    np.testing.assert_array_equal(encoder.encode(message), X[:, encoder.n])


def test_frozen_positions_fixed_for_any_message():
    N = 8
    frozen = [0, 1, 2, 4]
    encoder = SystematicEncoder(N, frozen)

    for message in ([0, 0, 0, 0], [1, 1, 1, 1], [1, 0, 0, 1]):
        X = encoder.transform_table(message)
        assert not X[frozen, 0].any()


def test_encode_does_not_mutate_encoder():
    encoder = SystematicEncoder(8, [0, 1, 2, 4])
    frozen_before = encoder.frozen_bits.copy()

    encoder.encode([1, 1, 0, 1])

    np.testing.assert_array_equal(encoder.frozen_bits, frozen_before)
    assert not encoder.frozen_bits.flags.writeable


def test_encode_rejects_non_binary():
    encoder = SystematicEncoder(8, [0, 1, 2, 4])
    with pytest.raises(ValueError):
        encoder.encode([0, 2, 1, 1])


def test_encode_rejects_wrong_shape():
    encoder = SystematicEncoder(8, [0, 1, 2, 4])
    with pytest.raises(InputSizeError):
        encoder.encode([[1, 0], [1, 1]])


def test_extract_information():
    encoder = SystematicEncoder(8, [0, 1, 2, 4])
    message = np.array([0, 1, 1, 0])

    codeword = encoder.encode(message)

    np.testing.assert_array_equal(encoder.extract_information(codeword), message)
    with pytest.raises(InputSizeError):
        encoder.extract_information(codeword[:-1])


def test_is_codeword_detects_flipped_bit():
    encoder = SystematicEncoder(8, [0, 1, 2, 4])
    codeword = encoder.encode([1, 0, 1, 1])

    corrupted = codeword.copy()
    corrupted[0] ^= 1

    assert encoder.is_codeword(codeword)
    assert not encoder.is_codeword(corrupted)
