"""
Group Initialization and Setup
===============================

This module initializes the algebraic group used by the Hashed El Gamal
primitive and the resharing protocol.

The primitive only needs a prime-order group with scalar sampling, the group
operation, scalar multiplication and canonical serialization, so any charm
group works. We use the G1 source group of a charm PairingGroup.

Notation:
---------
charm writes the group operation multiplicatively:
- "addition" of points P + Q is written P * Q
- "scalar multiplication" r·P is written P ** r
"""

import logging

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1

from .config import config

logger = logging.getLogger(__name__)

# Domain tags hashed to G1 to obtain the public generators
GENERATOR_TAG_G = b"pve-acss/generator/g"
GENERATOR_TAG_H = b"pve-acss/generator/h"


def setup(group_name: str = None) -> dict:
    """
    Initialize the group and derive the public generators.

    Parameters
    ----------
    group_name : str, optional
        The charm curve identifier. Defaults to ``config.pairing_curve``
        ('MNT224'). If the curve is unavailable we fall back to 'BN254' and
        then 'SS512'.

    Returns
    -------
    dict
        A dictionary containing:
        - 'group': The PairingGroup object
        - 'group_name': The name of the curve actually used
        - 'G1': The group type constant of the element group
        - 'ZR': The scalar field type constant
        - 'g': The primary generator (encryption and key generation)
        - 'h': The second generator for Pedersen commitments

    Notes
    -----
    Both generators are obtained by hashing fixed tags into G1, so nobody
    knows log_g(h). Every party that calls setup() with the same curve
    derives the same generators; no trusted setup is involved.
    """
    if group_name is None:
        group_name = config.pairing_curve

    try:
        group = PairingGroup(group_name)
    except Exception as e:
        logger.warning("%s not available (%s), falling back to BN254", group_name, e)
        try:
            group = PairingGroup('BN254')
            group_name = 'BN254'
        except Exception as e2:
            logger.warning("BN254 not available (%s), falling back to SS512", e2)
            group = PairingGroup('SS512')
            group_name = 'SS512'

    g, h = derive_generators(group)

    return {
        'group': group,
        'group_name': group_name,
        'G1': G1,
        'ZR': ZR,
        'g': g,
        'h': h,
    }


def derive_generators(group: PairingGroup) -> tuple:
    """
    Derive the generator pair (g, h) of G1 by hashing domain tags.

    Returns
    -------
    tuple
        (g, h), two G1 elements with no known discrete-log relation.
    """
    g = group.hash(GENERATOR_TAG_G, G1)
    h = group.hash(GENERATOR_TAG_H, G1)
    return g, h


def group_order(group: PairingGroup) -> int:
    """Order of the scalar field as a Python int."""
    return int(group.order())
