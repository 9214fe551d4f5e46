"""
Share Proofs
============

Pluggable strategies proving that a member's share is consistent with a
public commitment to the resharing polynomials.

The resharing distributes two polynomials f, f' with f(0) = s1 and
f'(0) = s2. A ShareProof publishes a commitment to (f, f') and lets the
holder of shares (f(i), f'(i)) check them.

PedersenShareProof (default):
-----------------------------
Pedersen VSS commitments to the coefficient pairs:

    C_j := g^{a_j} · h^{b_j}                   for j ∈ [0, t]

Share check for evaluation point i:

    g^{f(i)} · h^{f'(i)} == ∏_{j=0}^{t} C_j^{i^j}

C_0 = g^{s1} h^{s2} is a perfectly hiding, computationally binding
commitment to the double secret.
"""

from charm.toolbox.pairinggroup import ZR
from typing import List

from .utils import multiexp


class ShareProof:
    """Interface for share consistency proofs."""

    name = None

    def commit(self, coeffs1, coeffs2, params: dict) -> List:
        """Publish a commitment to the two polynomials."""
        raise NotImplementedError

    def verify(self, commitment: List, index: int, share1: ZR, share2: ZR, params: dict) -> bool:
        """Check shares evaluated at point index against commitment."""
        raise NotImplementedError


class PedersenShareProof(ShareProof):
    """Pedersen VSS over the generators (g, h) from setup()."""

    name = "pedersen-vss"

    def commit(self, coeffs1, coeffs2, params: dict) -> List:
        group = params['group']
        g, h = params['g'], params['h']

        if len(coeffs1) != len(coeffs2):
            raise ValueError(f"Polynomials must have same length: {len(coeffs1)} != {len(coeffs2)}")

        commitment = []
        for a_j, b_j in zip(coeffs1, coeffs2):
            commitment.append(
                multiexp([g, h], [group.init(ZR, int(a_j)), group.init(ZR, int(b_j))])
            )
        return commitment

    def verify(self, commitment: List, index: int, share1: ZR, share2: ZR, params: dict) -> bool:
        group = params['group']
        g, h = params['g'], params['h']

        lhs = multiexp([g, h], [share1, share2])

        # ∏ C_j^{i^j}
        x = group.init(ZR, index)
        powers = [group.init(ZR, 1)]
        for _ in range(1, len(commitment)):
            powers.append(powers[-1] * x)
        rhs = multiexp(commitment, powers)

        return lhs == rhs


def public_secret_commitment(commitment: List):
    """C_0, the commitment to the double secret itself."""
    return commitment[0]


DEFAULT_SHARE_PROOF = PedersenShareProof()


def get_share_proof(share_proof: ShareProof = None) -> ShareProof:
    return share_proof if share_proof is not None else DEFAULT_SHARE_PROOF
