"""
Hashing and Fiat-Shamir Random Oracles
======================================

- hash_to_bytes: the map G -> {0,1}^256 used to derive the El Gamal mask
- fiat_shamir_challenge: domain-separated oracle mapping a transcript to ZR

Domain Separation:
------------------
Every challenge is prefixed with a domain tag (e.g. b"PVE-SCHNORR") so an
oracle output for one proof type can never be replayed as another.
"""

import hashlib

from charm.toolbox.pairinggroup import PairingGroup, ZR

from .config import config
from .errors import InvalidBufferSize
from .utils import serialize_element

DIGEST_SIZE = 32


def hash_to_bytes(element, group: PairingGroup, hash_name: str = None) -> bytes:
    """
    Map a group element to a 32-byte digest.

    The element is serialized in canonical compressed form and hashed; the
    first 32 bytes of the digest are the mask key.

    Parameters
    ----------
    element : G1
        The group element to hash
    group : PairingGroup
        The group the element belongs to
    hash_name : str, optional
        A hashlib algorithm name. Defaults to ``config.hash_name`` ('sha256').

    Returns
    -------
    bytes
        Exactly 32 bytes.

    Raises
    ------
    InvalidBufferSize
        If the digest is narrower than 32 bytes.
    """
    hasher = hashlib.new(hash_name or config.hash_name)
    hasher.update(serialize_element(element, group))
    digest = hasher.digest()
    if len(digest) < DIGEST_SIZE:
        raise InvalidBufferSize(DIGEST_SIZE, len(digest), what="digest")
    return digest[:DIGEST_SIZE]


def serialize_transcript(group: PairingGroup, *args) -> bytes:
    """
    Serialize a transcript for hashing.

    Every item is length-prefixed so two different transcripts can never
    concatenate to the same byte string.
    """
    result = b""
    for arg in args:
        if isinstance(arg, bytes):
            item = arg
        elif isinstance(arg, bool):
            item = bytes([arg])
        elif isinstance(arg, int):
            item = arg.to_bytes(8, 'big')
        elif isinstance(arg, str):
            item = arg.encode('utf-8')
        elif isinstance(arg, (list, tuple)):
            item = serialize_transcript(group, *arg)
        else:
            # group element (G1, ZR)
            item = serialize_element(arg, group)
        result += len(item).to_bytes(4, 'big') + item
    return result


def fiat_shamir_challenge(group: PairingGroup, domain: bytes, *items) -> ZR:
    """
    Random oracle H(domain || items) -> ZR.

    Parameters
    ----------
    group : PairingGroup
        The group
    domain : bytes
        Domain separation tag
    *items : variable
        Group elements, ints, bytes, strings or lists thereof

    Returns
    -------
    ZR
        The challenge scalar
    """
    return group.hash(serialize_transcript(group, domain, *items), ZR)
