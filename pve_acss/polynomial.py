"""
Polynomials over Z_p
====================

Coefficients are Python ints reduced mod p, held in numpy object arrays
(index j is the coefficient of X^j). ZR elements are converted at the
boundary since charm scalars do not live in numpy arrays.
"""

import numpy as np
from charm.toolbox.pairinggroup import PairingGroup, ZR
from typing import List

from .groups import group_order
from .randomness import RandomnessSource, default_source


def random_polynomial(constant: ZR, degree: int, group: PairingGroup,
                      rng: RandomnessSource = None) -> np.ndarray:
    """
    Sample f(X) = constant + a_1 X + ... + a_degree X^degree.

    Parameters
    ----------
    constant : ZR
        f(0)
    degree : int
        Degree of the polynomial (the reconstruction threshold t)
    group : PairingGroup
        The group whose order is the modulus
    rng : RandomnessSource, optional
        Source of the random coefficients

    Returns
    -------
    np.ndarray
        degree + 1 coefficients mod p
    """
    if degree < 0:
        raise ValueError(f"Degree must be non-negative, got {degree}")
    rng = default_source(rng)
    p = group_order(group)

    coeffs = np.zeros(degree + 1, dtype=object)
    coeffs[0] = int(constant) % p
    for j in range(1, degree + 1):
        coeffs[j] = int(rng.scalar(group)) % p
    return coeffs


def evaluate(coeffs: np.ndarray, x: int, p: int) -> int:
    """Horner evaluation of f(x) mod p."""
    result = 0
    for c in reversed(coeffs):
        result = (result * x + int(c)) % p
    return result


def lagrange_coefficients_at_zero(indices: List[int], p: int) -> List[int]:
    """
    Lagrange basis values λ_i(0) for the evaluation points in indices.

    f(0) = Σ λ_i(0) f(i)  with  λ_i(0) = ∏_{j≠i} j / (j - i)

    Raises
    ------
    ValueError
        If indices contain duplicates or zero.
    """
    if len(set(indices)) != len(indices):
        raise ValueError("Evaluation points must be distinct")
    if any(i % p == 0 for i in indices):
        raise ValueError("Evaluation point 0 is reserved for the secret")

    lambdas = []
    for i in indices:
        num, den = 1, 1
        for j in indices:
            if j == i:
                continue
            num = (num * j) % p
            den = (den * (j - i)) % p
        lambdas.append((num * pow(den, -1, p)) % p)
    return lambdas

