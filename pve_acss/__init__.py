"""
Publicly Verifiable Encryption and ACSS Resharing
=================================================

Hashed El Gamal encryption with a Fiat-Shamir Sigma-protocol proof of
encryption, and the asynchronous complete secret sharing (ACSS) protocol
that reshares a double secret (s1, s2) to a committee under threshold t,
built on charm-crypto.

Modules:
--------
- groups: Group initialization and generator derivation
- config: Environment-driven configuration and logging setup
- errors: Exception hierarchy
- randomness: Randomness sources and single-use ephemeral scalars
- hashing: Hash-to-bytes mapper and Fiat-Shamir oracles
- elgamal: Hashed El Gamal encrypt/decrypt and ciphertext algebra
- sigma: Proof of encryption (publicly verifiable)
- polynomial: Polynomials and Lagrange interpolation mod p
- commit: Pluggable share proofs (Pedersen VSS by default)
- acss: DoubleSecret.reshare, Keypair.recover, reconstruct
- serialization: Byte and JSON forms of ciphertexts and capsules
- utils: XOR, multi-exponentiation, element/scalar encoding

Usage:
------
    from pve_acss import setup, DoubleSecret, Keypair

    params = setup('MNT224')
    keys = [Keypair.generate(params) for _ in range(5)]
    secret = DoubleSecret.random(params)
    resharing = secret.reshare([kp.pk for kp in keys], t=2, params=params)
    share = keys[0].recover(resharing[0][1], t=2)
"""

__version__ = "0.1.0"

from .groups import setup
from .acss import Capsule, DoubleSecret, Keypair, Share, reconstruct, recover_all
from .elgamal import Ciphertext, decrypt, encrypt

__all__ = [
    'setup', 'Capsule', 'DoubleSecret', 'Keypair', 'Share', 'reconstruct',
    'recover_all', 'Ciphertext', 'decrypt', 'encrypt',
]
