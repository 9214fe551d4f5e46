"""
ACSS Resharing and Recovery
===========================

Asynchronous complete secret sharing of a double secret (s1, s2) to a
committee of public keys under threshold t.

Reshare (dealer):
-----------------
1. Sample degree-t polynomials f, f' with f(0) = s1, f'(0) = s2
2. Publish a share-proof commitment to (f, f') (Pedersen VSS by default)
3. For committee index i (evaluation point i + 1) encrypt f(i+1) and
   f'(i+1) to pk_i with Hashed El Gamal, each with a Fiat-Shamir proof of
   knowledge of the encryption randomness bound to (i, commitment)

Recover (member i, non-interactive):
------------------------------------
1. Check the encryption proofs against its own public key
2. Decrypt both shares
3. Check the shares against the commitment

Every member recovers on its own; nothing is exchanged between members, so
recovery for a whole committee can run in parallel (recover_all).

Any t+1 validated shares reconstruct (s1, s2) by Lagrange interpolation
(reconstruct).
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Tuple

from charm.toolbox.pairinggroup import ZR

from .commit import ShareProof, get_share_proof
from .config import config
from .elgamal import decrypt
from .errors import InsufficientSharesError, InvalidBufferSize, ShareVerificationError
from .groups import group_order
from .hashing import serialize_transcript
from .polynomial import evaluate, lagrange_coefficients_at_zero, random_polynomial
from .randomness import RandomnessSource, default_source
from .sigma import encrypt_verifiable, verify_encryption
from .utils import scalar_from_bytes, scalar_to_bytes

logger = logging.getLogger(__name__)

DOMAIN_CAPSULE = b"ACSS-CAPSULE"


def evaluation_point(index: int) -> int:
    """Committee index i is evaluated at i + 1; 0 holds the secret."""
    return index + 1


def capsule_context(params: dict, index: int, component: int, commitment: List) -> bytes:
    """Context bound into the encryption proof of one capsule component."""
    return serialize_transcript(params['group'], DOMAIN_CAPSULE, index, component, commitment)


class Share:
    """A validated share (f(i+1), f'(i+1)) held by committee member i."""

    __slots__ = ('index', 's1', 's2')

    def __init__(self, index: int, s1: ZR, s2: ZR):
        self.index = index
        self.s1 = s1
        self.s2 = s2

    def __eq__(self, other):
        if not isinstance(other, Share):
            return NotImplemented
        return self.index == other.index and self.s1 == other.s1 and self.s2 == other.s2

    __hash__ = None

    def __repr__(self):
        return f"Share(index={self.index})"


class Capsule:
    """
    The resharing payload for one committee member.

    Attributes
    ----------
    index : int
        Committee index of the recipient
    ciphertexts : tuple of Ciphertext
        Encryptions of the two shares
    proofs : tuple of EncryptionProof
        One proof of encryption per ciphertext
    commitment : list
        Public commitment to the polynomials (t + 1 elements)
    scheme : str
        Name of the share proof the commitment belongs to
    """

    __slots__ = ('index', 'ciphertexts', 'proofs', 'commitment', 'scheme')

    def __init__(self, index: int, ciphertexts, proofs, commitment: List, scheme: str):
        self.index = index
        self.ciphertexts = tuple(ciphertexts)
        self.proofs = tuple(proofs)
        self.commitment = list(commitment)
        self.scheme = scheme

    def __eq__(self, other):
        if not isinstance(other, Capsule):
            return NotImplemented
        return (self.index == other.index
                and self.ciphertexts == other.ciphertexts
                and self.proofs == other.proofs
                and self.commitment == other.commitment
                and self.scheme == other.scheme)

    __hash__ = None

    def __repr__(self):
        return f"Capsule(index={self.index}, scheme={self.scheme!r}, degree={len(self.commitment) - 1})"


class DoubleSecret:
    """A pair of scalars (s1, s2) reshared together."""

    __slots__ = ('s1', 's2')

    def __init__(self, s1: ZR, s2: ZR):
        self.s1 = s1
        self.s2 = s2

    @classmethod
    def random(cls, params: dict, rng: RandomnessSource = None) -> 'DoubleSecret':
        rng = default_source(rng)
        group = params['group']
        return cls(rng.scalar(group), rng.scalar(group))

    def __eq__(self, other):
        if not isinstance(other, DoubleSecret):
            return NotImplemented
        return self.s1 == other.s1 and self.s2 == other.s2

    __hash__ = None

    def __repr__(self):
        return "DoubleSecret(<hidden>)"

    def reshare(self, committee_public_keys: List, t: int, params: dict, *,
                rng: RandomnessSource = None,
                share_proof: ShareProof = None) -> List[Tuple[object, Capsule]]:
        """
        Reshare (s1, s2) to a committee.

        Parameters
        ----------
        committee_public_keys : List[G1]
            Recipient public keys; the position is the committee index
        t : int
            Polynomial degree; t + 1 shares reconstruct. 0 <= t <= n.
        params : dict
            Output of setup()
        rng : RandomnessSource, optional
            Must be a fresh cryptographic source; defaults to charm's CSPRNG
        share_proof : ShareProof, optional
            Commitment strategy; Pedersen VSS by default

        rng and share_proof are keyword-only.

        Returns
        -------
        List[Tuple[G1, Capsule]]
            (public key, capsule) per member, ordered by committee index

        Raises
        ------
        InvalidBufferSize
            If the committee is larger than config.max_committee_size
        ValueError
            If the committee is empty or t is outside [0, n]
        """
        n = len(committee_public_keys)
        if n == 0:
            raise ValueError("Committee must not be empty")
        if n > config.max_committee_size:
            raise InvalidBufferSize(config.max_committee_size, n, what="committee")
        if t < 0 or t > n:
            raise ValueError(f"Threshold t={t} must be in [0, {n}]")

        rng = default_source(rng)
        share_proof = get_share_proof(share_proof)
        group = params['group']
        g = params['g']
        p = group_order(group)

        f1 = random_polynomial(self.s1, t, group, rng)
        f2 = random_polynomial(self.s2, t, group, rng)
        commitment = share_proof.commit(f1, f2, params)

        resharing = []
        for index, pk in enumerate(committee_public_keys):
            x = evaluation_point(index)
            ciphertexts, proofs = [], []
            for component, poly in enumerate((f1, f2)):
                share_bytes = scalar_to_bytes(group.init(ZR, evaluate(poly, x, p)))
                ct, proof = encrypt_verifiable(
                    share_bytes, pk, g, group, rng,
                    context=capsule_context(params, index, component, commitment),
                )
                ciphertexts.append(ct)
                proofs.append(proof)
            resharing.append((pk, Capsule(index, ciphertexts, proofs, commitment, share_proof.name)))

        logger.debug("Created resharing for %d members with threshold %d (%s)", n, t, share_proof.name)
        return resharing


class Keypair:
    """A committee member's key pair (sk, pk = g^sk)."""

    __slots__ = ('sk', 'pk', 'params')

    def __init__(self, sk: ZR, pk, params: dict):
        self.sk = sk
        self.pk = pk
        self.params = params

    @classmethod
    def generate(cls, params: dict, rng: RandomnessSource = None) -> 'Keypair':
        sk = default_source(rng).scalar(params['group'])
        return cls(sk, params['g'] ** sk, params)

    def __repr__(self):
        return f"Keypair(pk={self.pk})"

    def recover(self, capsule: Capsule, t: int, share_proof: ShareProof = None) -> Share:
        """
        Decrypt and validate this member's share.

        Raises
        ------
        InvalidBufferSize
            If the capsule does not carry exactly two ciphertexts and two
            proofs (structurally malformed input).
        ShareVerificationError
            If the capsule does not match the threshold, an encryption proof
            does not hold for this key, or the decrypted shares do not open
            the commitment.
        """
        share_proof = get_share_proof(share_proof)
        group = self.params['group']
        g = self.params['g']
        index = capsule.index

        if len(capsule.ciphertexts) != 2:
            raise InvalidBufferSize(2, len(capsule.ciphertexts), what="capsule ciphertext count")
        if len(capsule.proofs) != 2:
            raise InvalidBufferSize(2, len(capsule.proofs), what="capsule proof count")
        if capsule.scheme != share_proof.name:
            raise ShareVerificationError(index, f"unexpected share proof {capsule.scheme!r}")
        if len(capsule.commitment) != t + 1:
            raise ShareVerificationError(
                index, f"commitment has degree {len(capsule.commitment) - 1}, expected {t}"
            )

        values = []
        for component, (ct, proof) in enumerate(zip(capsule.ciphertexts, capsule.proofs)):
            context = capsule_context(self.params, index, component, capsule.commitment)
            if not verify_encryption(ct, proof, self.pk, g, group, context):
                logger.warning("Encryption proof %d of capsule %d rejected", component, index)
                raise ShareVerificationError(index, f"encryption proof {component} does not verify")
            values.append(scalar_from_bytes(decrypt(self.sk, ct, group), group))

        s1, s2 = values
        if not share_proof.verify(capsule.commitment, evaluation_point(index), s1, s2, self.params):
            logger.warning("Share %d does not open the commitment", index)
            raise ShareVerificationError(index, "share does not match commitment")

        logger.debug("Recovered share %d", index)
        return Share(index, s1, s2)


def recover_all(keypairs: List[Keypair], resharing: List[Tuple[object, Capsule]], t: int,
                max_workers: int = None, share_proof: ShareProof = None) -> List[Share]:
    """
    Let every member recover its own capsule, in parallel.

    keypairs[i] recovers resharing[i]. Each call only reads its own key and
    capsule, so no synchronization is needed. The first failure is re-raised.

    charm holds the GIL during group arithmetic, so the threads interleave
    rather than run concurrently; expect roughly sequential wall-clock time.
    For real speed-up run members in separate processes.
    """
    if len(keypairs) != len(resharing):
        raise ValueError(f"keypairs and resharing must have same length: {len(keypairs)} != {len(resharing)}")

    workers = max_workers or config.recovery_workers
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(kp.recover, capsule, t, share_proof)
            for kp, (_, capsule) in zip(keypairs, resharing)
        ]
        return [f.result() for f in futures]


def reconstruct(shares: List[Share], t: int, params: dict) -> DoubleSecret:
    """
    Interpolate (s1, s2) from at least t + 1 validated shares.

    Raises
    ------
    InsufficientSharesError
        If fewer than t + 1 distinct indices are supplied.
    """
    group = params['group']
    p = group_order(group)

    by_index = {}
    for share in shares:
        by_index.setdefault(share.index, share)
    if len(by_index) < t + 1:
        raise InsufficientSharesError(t + 1, len(by_index))

    chosen = [by_index[i] for i in sorted(by_index)[:t + 1]]
    lambdas = lagrange_coefficients_at_zero([evaluation_point(s.index) for s in chosen], p)

    s1 = sum(lam * int(s.s1) for lam, s in zip(lambdas, chosen)) % p
    s2 = sum(lam * int(s.s2) for lam, s in zip(lambdas, chosen)) % p
    return DoubleSecret(group.init(ZR, s1), group.init(ZR, s2))
