"""
Tests for Hashed El Gamal
=========================

Round trips, the ciphertext algebra, and the absence of any integrity check:
a wrong key or a tampered ciphertext must decrypt to different bytes, never
raise.
"""

import pytest
from charm.toolbox.pairinggroup import ZR

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from pve_acss.groups import setup
from pve_acss.elgamal import Ciphertext, as_message, decrypt, encrypt, encrypt_with
from pve_acss.errors import InvalidBufferSize, NonceReuseError
from pve_acss.randomness import EphemeralScalar, SeededRandomness
from pve_acss.utils import scalar_to_bytes, xor_bytes

ZERO = bytes(32)


@pytest.fixture(scope="module")
def params():
    return setup('MNT224')


@pytest.fixture(scope="module")
def keys(params):
    group = params['group']
    sk = group.random(ZR)
    pk = params['g'] ** sk
    return sk, pk


def _message(i: int) -> bytes:
    return bytes((i * 7 + j) % 256 for j in range(32))


def test_basic_encrypt_decrypt_works(params, keys):
    group, g = params['group'], params['g']
    sk, pk = keys

    secret_bytes = scalar_to_bytes(group.random(ZR))
    ct = encrypt(secret_bytes, pk, g, group)
    assert decrypt(sk, ct, group) == secret_bytes


@pytest.mark.parametrize("i", range(5))
def test_round_trip_many_messages(params, keys, i):
    group, g = params['group'], params['g']
    sk, pk = keys
    m = _message(i)
    assert decrypt(sk, encrypt(m, pk, g, group), group) == m


def test_zero_message_fixed_keypair(params):
    """All-zero message under a fixed key pair decrypts to zeros."""
    group, g = params['group'], params['g']
    sk = group.init(ZR, 123456789)
    pk = g ** sk

    ct = encrypt(ZERO, pk, g, group, SeededRandomness(42))
    assert decrypt(sk, ct, group) == ZERO

    doubled = ct.add(ct)
    # m XOR m = 0 and mask XOR mask = 0
    assert doubled.c2 == ZERO
    assert doubled.c1 == ct.c1 * ct.c1


def test_decryption_with_bad_key_returns_wrong_value(params, keys):
    group, g = params['group'], params['g']
    sk, pk = keys
    bad_sk = sk + group.init(ZR, 1)

    m = scalar_to_bytes(group.random(ZR))
    ct = encrypt(m, pk, g, group)
    recovered = decrypt(bad_sk, ct, group)
    assert isinstance(recovered, bytes)
    assert len(recovered) == 32
    assert recovered != m


def test_key_mismatch_statistical(params, keys):
    group, g = params['group'], params['g']
    _, pk = keys
    for i in range(20):
        m = _message(i)
        ct = encrypt(m, pk, g, group)
        assert decrypt(group.random(ZR), ct, group) != m


@pytest.mark.parametrize("position", [0, 15, 31])
def test_tampered_c2_decrypts_to_different_value(params, keys, position):
    group, g = params['group'], params['g']
    sk, pk = keys
    m = _message(position)
    ct = encrypt(m, pk, g, group)

    c2 = bytearray(ct.c2)
    c2[position] ^= 0x01
    tampered = Ciphertext(ct.c1, bytes(c2))

    recovered = decrypt(sk, tampered, group)
    assert recovered != m


def test_replaced_c2_decrypts_to_different_value(params, keys):
    group, g = params['group'], params['g']
    sk, pk = keys
    m = _message(3)
    ct = encrypt(m, pk, g, group)
    tampered = Ciphertext(ct.c1, bytes([1] * 32))
    assert decrypt(sk, tampered, group) != m


def test_tampered_c1_decrypts_to_different_value(params, keys):
    group, g = params['group'], params['g']
    sk, pk = keys
    m = _message(4)
    ct = encrypt(m, pk, g, group)
    tampered = Ciphertext(ct.c1 * g, ct.c2)
    assert decrypt(sk, tampered, group) != m


def test_can_add_ciphertexts(params, keys):
    group, g = params['group'], params['g']
    _, pk = keys

    ct = encrypt(scalar_to_bytes(group.random(ZR)), pk, g, group)
    other_ct = encrypt(scalar_to_bytes(group.init(ZR, 1)), pk, g, group)

    expected = Ciphertext(ct.c1 * other_ct.c1, xor_bytes(ct.c2, other_ct.c2))
    assert ct.add(other_ct) == expected
    assert ct + other_ct == expected


def test_add_does_not_mutate_operands(params, keys):
    group, g = params['group'], params['g']
    _, pk = keys
    a = encrypt(_message(1), pk, g, group)
    b = encrypt(_message(2), pk, g, group)
    a_c1, a_c2, b_c1, b_c2 = a.c1, a.c2, b.c1, b.c2

    a.add(b)
    assert a.c1 == a_c1 and a.c2 == a_c2
    assert b.c1 == b_c1 and b.c2 == b_c2


def test_add_is_commutative_and_associative(params, keys):
    group, g = params['group'], params['g']
    _, pk = keys
    a = encrypt(_message(1), pk, g, group)
    b = encrypt(_message(2), pk, g, group)
    c = encrypt(_message(3), pk, g, group)

    assert a.add(b) == b.add(a)
    assert a.add(b).add(c) == a.add(b.add(c))


def test_aggregate_masks_combine(params, keys):
    """The XOR of two decryptions equals m1 XOR m2, and c2 aggregates by XOR."""
    group, g = params['group'], params['g']
    sk, pk = keys
    m1, m2 = _message(5), _message(6)
    a = encrypt(m1, pk, g, group)
    b = encrypt(m2, pk, g, group)

    assert xor_bytes(decrypt(sk, a, group), decrypt(sk, b, group)) == xor_bytes(m1, m2)
    assert a.add(b).c2 == xor_bytes(a.c2, b.c2)


def test_ciphertext_is_immutable(params, keys):
    group, g = params['group'], params['g']
    _, pk = keys
    ct = encrypt(ZERO, pk, g, group)
    with pytest.raises(AttributeError):
        ct.c2 = bytes([1] * 32)


@pytest.mark.parametrize("length", [0, 16, 31, 33, 64])
def test_wrong_message_length_is_rejected(params, keys, length):
    group, g = params['group'], params['g']
    _, pk = keys
    with pytest.raises(InvalidBufferSize) as excinfo:
        encrypt(bytes(length), pk, g, group)
    assert excinfo.value.expected == 32
    assert excinfo.value.actual == length


def test_ciphertext_rejects_wrong_c2_length(params):
    with pytest.raises(InvalidBufferSize):
        Ciphertext(params['g'], bytes(31))


def test_as_message_accepts_bytearray():
    assert as_message(bytearray(32)) == ZERO


def test_encrypt_with_refuses_nonce_reuse(params, keys):
    group, g = params['group'], params['g']
    _, pk = keys
    eph = EphemeralScalar.sample(group)

    encrypt_with(_message(1), pk, g, group, eph)
    with pytest.raises(NonceReuseError):
        encrypt_with(_message(2), pk, g, group, eph)


def test_seeded_encryption_is_reproducible(params, keys):
    group, g = params['group'], params['g']
    _, pk = keys
    a = encrypt(_message(1), pk, g, group, SeededRandomness(7))
    b = encrypt(_message(1), pk, g, group, SeededRandomness(7))
    c = encrypt(_message(1), pk, g, group, SeededRandomness(8))
    assert a == b
    assert a.c1 != c.c1


def test_fresh_randomness_gives_fresh_ciphertexts(params, keys):
    group, g = params['group'], params['g']
    _, pk = keys
    a = encrypt(ZERO, pk, g, group)
    b = encrypt(ZERO, pk, g, group)
    assert a != b
