"""
Utility Functions
=================

Byte-wise XOR, multi-exponentiation and element/scalar serialization.

According to charm-crypto documentation:
- Group operations use * for the group law and ** for scalar multiplication
- Serialization uses group.serialize() / group.deserialize()
"""

from charm.toolbox.pairinggroup import PairingGroup, ZR
from typing import List

from .errors import InvalidBufferSize, InvalidEncoding
from .groups import group_order

SCALAR_SIZE = 32


def xor_bytes(a: bytes, b: bytes) -> bytes:
    """
    Byte-wise XOR of two equal-length buffers.

    Raises
    ------
    InvalidBufferSize
        If the lengths differ.
    """
    if len(a) != len(b):
        raise InvalidBufferSize(len(a), len(b))
    return bytes(x ^ y for x, y in zip(a, b))


def multiexp(bases: List, exponents: List[ZR]):
    """
    Compute ∏ bases[i]^{exponents[i]}.

    Notes
    -----
    - bases must be non-empty and the same length as exponents
    - No special multi-exponentiation algorithm; the product is computed
      directly
    """
    if len(bases) == 0:
        raise ValueError("multiexp needs at least one base")
    if len(bases) != len(exponents):
        raise ValueError(f"bases and exponents must have same length: {len(bases)} != {len(exponents)}")

    result = bases[0] ** exponents[0]
    for base, exp in zip(bases[1:], exponents[1:]):
        result *= base ** exp
    return result


def serialize_element(elem, group: PairingGroup) -> bytes:
    """Canonical compressed serialization of a group element or scalar."""
    return group.serialize(elem, compression=True)


def deserialize_element(data: bytes, group: PairingGroup, expected: int = None):
    """
    Inverse of serialize_element.

    Parameters
    ----------
    expected : int, optional
        charm type constant (ZR, G1, ...) the element must have. charm tags
        every encoding with its type as a b"<type>:" prefix.

    Raises
    ------
    InvalidEncoding
        If charm cannot decode the bytes or the type tag does not match.
    """
    if expected is not None and not bytes(data).startswith(b"%d:" % expected):
        raise InvalidEncoding(f"Expected an element of type {expected}")
    try:
        elem = group.deserialize(data, compression=True)
    except Exception as e:
        raise InvalidEncoding(f"Cannot decode group element: {e}") from e
    if elem is None or elem is False:
        raise InvalidEncoding("Cannot decode group element")
    return elem


def scalar_to_bytes(s: ZR) -> bytes:
    """
    Encode a scalar as 32 big-endian bytes.

    Raises
    ------
    InvalidBufferSize
        If the scalar does not fit in 32 bytes (scalar field too large).
    """
    value = int(s)
    try:
        return value.to_bytes(SCALAR_SIZE, 'big')
    except OverflowError as e:
        raise InvalidBufferSize(SCALAR_SIZE, (value.bit_length() + 7) // 8, what="scalar") from e


def scalar_from_bytes(data: bytes, group: PairingGroup) -> ZR:
    """
    Decode 32 big-endian bytes into a scalar, reducing mod the group order.

    Any 32-byte string decodes; a wrong key therefore yields a wrong scalar,
    not an exception.
    """
    if len(data) != SCALAR_SIZE:
        raise InvalidBufferSize(SCALAR_SIZE, len(data), what="scalar")
    return group.init(ZR, int.from_bytes(data, 'big') % group_order(group))
