"""
Publicly Verifiable Encryption Proof
====================================

A Sigma protocol made non-interactive with the Fiat-Shamir transform, proving
knowledge of the ephemeral scalar r behind a Hashed El Gamal ciphertext:

    Prover                          Verifier
    w <- Z_p, A = g^w
    e = H_pve(g, pk, c1, c2, A, ctx)
    z = w + e·r
                  (A, z)  ------>   g^z == A · c1^e

The challenge binds the recipient pk, both ciphertext halves and a caller
context, so a proof cannot be moved to another ciphertext, recipient or
protocol instance. Anyone holding the public values can check it.
"""

import logging

from charm.toolbox.pairinggroup import PairingGroup, ZR

from .elgamal import Ciphertext, encrypt_with
from .hashing import fiat_shamir_challenge
from .randomness import EphemeralScalar, RandomnessSource, default_source

logger = logging.getLogger(__name__)

DOMAIN_PVE = b"PVE-SCHNORR"


class EncryptionProof:
    """Schnorr proof (A, z) of knowledge of the encryption randomness."""

    __slots__ = ('commitment', 'response')

    def __init__(self, commitment, response: ZR):
        self.commitment = commitment
        self.response = response

    def __eq__(self, other):
        if not isinstance(other, EncryptionProof):
            return NotImplemented
        return self.commitment == other.commitment and self.response == other.response

    __hash__ = None

    def __repr__(self):
        return f"EncryptionProof(commitment={self.commitment}, response={self.response})"


def _challenge(group, generator, pk, ciphertext, commitment, context):
    return fiat_shamir_challenge(
        group, DOMAIN_PVE, generator, pk, ciphertext.c1, ciphertext.c2, commitment, context
    )


def encrypt_verifiable(message: bytes, pk, generator, group: PairingGroup,
                       rng: RandomnessSource = None, context: bytes = b""):
    """
    Encrypt and prove knowledge of the encryption randomness.

    Returns
    -------
    (Ciphertext, EncryptionProof)
    """
    rng = default_source(rng)
    r = rng.scalar(group)
    ciphertext = encrypt_with(message, pk, generator, group, EphemeralScalar(r))

    w = rng.scalar(group)
    commitment = generator ** w
    e = _challenge(group, generator, pk, ciphertext, commitment, context)
    response = w + e * r
    return ciphertext, EncryptionProof(commitment, response)


def verify_encryption(ciphertext: Ciphertext, proof: EncryptionProof, pk, generator,
                      group: PairingGroup, context: bytes = b"") -> bool:
    """
    Check g^z == A · c1^e with e recomputed from the transcript.

    Returns
    -------
    bool
        True if the proof holds
    """
    e = _challenge(group, generator, pk, ciphertext, proof.commitment, context)
    lhs = generator ** proof.response
    rhs = proof.commitment * (ciphertext.c1 ** e)
    if lhs != rhs:
        logger.debug("Encryption proof rejected")
        return False
    return True
