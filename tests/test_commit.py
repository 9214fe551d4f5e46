"""
Tests for the Pedersen VSS share proof.
"""

import pytest
from charm.toolbox.pairinggroup import ZR

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from pve_acss.groups import setup
from pve_acss.commit import PedersenShareProof, get_share_proof, public_secret_commitment
from pve_acss.polynomial import evaluate, random_polynomial


@pytest.fixture(scope="module")
def params():
    return setup('MNT224')


@pytest.fixture(scope="module")
def dealing(params):
    group = params['group']
    s1, s2 = group.random(ZR), group.random(ZR)
    f1 = random_polynomial(s1, 2, group)
    f2 = random_polynomial(s2, 2, group)
    commitment = PedersenShareProof().commit(f1, f2, params)
    return s1, s2, f1, f2, commitment


def _shares(params, f1, f2, x):
    group = params['group']
    p = int(group.order())
    return group.init(ZR, evaluate(f1, x, p)), group.init(ZR, evaluate(f2, x, p))


def test_commitment_has_t_plus_one_elements(dealing):
    *_, commitment = dealing
    assert len(commitment) == 3


@pytest.mark.parametrize("x", [1, 2, 3, 7])
def test_valid_shares_verify(params, dealing, x):
    _, _, f1, f2, commitment = dealing
    a, b = _shares(params, f1, f2, x)
    assert PedersenShareProof().verify(commitment, x, a, b, params)


def test_wrong_share_fails(params, dealing):
    group = params['group']
    _, _, f1, f2, commitment = dealing
    a, b = _shares(params, f1, f2, 1)
    assert not PedersenShareProof().verify(commitment, 1, a + group.init(ZR, 1), b, params)
    assert not PedersenShareProof().verify(commitment, 1, a, b + group.init(ZR, 1), params)


def test_share_for_other_index_fails(params, dealing):
    _, _, f1, f2, commitment = dealing
    a, b = _shares(params, f1, f2, 1)
    assert not PedersenShareProof().verify(commitment, 2, a, b, params)


def test_constant_term_commits_to_double_secret(params, dealing):
    s1, s2, _, _, commitment = dealing
    assert public_secret_commitment(commitment) == (params['g'] ** s1) * (params['h'] ** s2)


def test_mismatched_polynomials_rejected(params):
    with pytest.raises(ValueError):
        PedersenShareProof().commit([1, 2], [1, 2, 3], params)


def test_default_share_proof():
    assert isinstance(get_share_proof(), PedersenShareProof)
    custom = PedersenShareProof()
    assert get_share_proof(custom) is custom
