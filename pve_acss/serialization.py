"""
Serialization
=============

Persisted and JSON-friendly forms of ciphertexts, proofs and capsules.

Ciphertext byte layout:
    compressed c1 || c2 (32 raw bytes)

c2 has a fixed width, so the split point is always len(data) - 32.
"""

import base64
import binascii
import json

from charm.toolbox.pairinggroup import PairingGroup, G1

from .acss import Capsule
from .elgamal import MESSAGE_SIZE, Ciphertext
from .errors import InvalidBufferSize, InvalidEncoding, PVEError
from .sigma import EncryptionProof
from .utils import deserialize_element, scalar_from_bytes, scalar_to_bytes, serialize_element


def ciphertext_to_bytes(ct: Ciphertext, group: PairingGroup) -> bytes:
    return serialize_element(ct.c1, group) + ct.c2


def ciphertext_from_bytes(data: bytes, group: PairingGroup) -> Ciphertext:
    """
    Inverse of ciphertext_to_bytes.

    Raises
    ------
    InvalidBufferSize
        If data cannot hold a c1 and 32 bytes of c2
    InvalidEncoding
        If the c1 part is not a G1 element
    """
    if len(data) <= MESSAGE_SIZE:
        raise InvalidBufferSize(MESSAGE_SIZE + 1, len(data), what="ciphertext")
    c1 = deserialize_element(data[:-MESSAGE_SIZE], group, expected=G1)
    return Ciphertext(c1, data[-MESSAGE_SIZE:])


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode('utf-8')


def _unb64(data: str) -> bytes:
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, TypeError) as e:
        raise InvalidEncoding(f"Invalid base64: {e}") from e


def serialize_proof(proof: EncryptionProof, group: PairingGroup) -> dict:
    return {
        'commitment': _b64(serialize_element(proof.commitment, group)),
        'response': _b64(scalar_to_bytes(proof.response)),
    }


def deserialize_proof(data: dict, group: PairingGroup) -> EncryptionProof:
    return EncryptionProof(
        deserialize_element(_unb64(data['commitment']), group, expected=G1),
        scalar_from_bytes(_unb64(data['response']), group),
    )


def capsule_to_dict(capsule: Capsule, group: PairingGroup) -> dict:
    """Serialize a capsule for transport"""
    return {
        'index': capsule.index,
        'scheme': capsule.scheme,
        'ciphertexts': [_b64(ciphertext_to_bytes(ct, group)) for ct in capsule.ciphertexts],
        'proofs': [serialize_proof(p, group) for p in capsule.proofs],
        'commitment': [_b64(serialize_element(c, group)) for c in capsule.commitment],
    }


def capsule_from_dict(data: dict, group: PairingGroup) -> Capsule:
    """
    Rebuild a capsule from capsule_to_dict output.

    Raises
    ------
    InvalidEncoding
        If a field is missing, has the wrong type, or does not decode
    """
    try:
        index = data['index']
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise InvalidEncoding(f"Capsule index must be a non-negative integer, got {index!r}")
        if not isinstance(data['scheme'], str):
            raise InvalidEncoding("Capsule scheme must be a string")
        return Capsule(
            index=index,
            ciphertexts=[ciphertext_from_bytes(_unb64(c), group) for c in data['ciphertexts']],
            proofs=[deserialize_proof(p, group) for p in data['proofs']],
            commitment=[deserialize_element(_unb64(c), group, expected=G1) for c in data['commitment']],
            scheme=data['scheme'],
        )
    except PVEError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidEncoding(f"Malformed capsule: {e}") from e


def capsule_to_json(capsule: Capsule, group: PairingGroup) -> str:
    return json.dumps(capsule_to_dict(capsule, group))


def capsule_from_json(data: str, group: PairingGroup) -> Capsule:
    try:
        parsed = json.loads(data)
    except json.JSONDecodeError as e:
        raise InvalidEncoding(f"Invalid JSON: {e}") from e
    return capsule_from_dict(parsed, group)
