"""
Randomness Sources and Single-Use Ephemeral Scalars
===================================================

Encryption draws a fresh ephemeral scalar r for every ciphertext. Reusing r
for two encryptions under the same public key leaks the XOR of the two
plaintexts (c2 XOR c2' = m XOR m'), so the scalar is handed out through a
handle that can be consumed exactly once.
"""

import random

from charm.toolbox.pairinggroup import PairingGroup, ZR

from .errors import NonceReuseError
from .groups import group_order


class RandomnessSource:
    """Interface: anything that can sample a uniform scalar of a group."""

    def scalar(self, group: PairingGroup) -> ZR:
        raise NotImplementedError


class SystemRandomness(RandomnessSource):
    """charm's cryptographically secure generator. The default source."""

    def scalar(self, group: PairingGroup) -> ZR:
        return group.random(ZR)


class SeededRandomness(RandomnessSource):
    """
    Deterministic scalars from a seeded PRNG.

    For reproducible tests only. Never use it to encrypt real data: anyone
    who knows the seed knows every ephemeral scalar.
    """

    def __init__(self, seed: int = 0):
        self._prng = random.Random(seed)

    def scalar(self, group: PairingGroup) -> ZR:
        order = group_order(group)
        return group.init(ZR, self._prng.randrange(1, order))


def default_source(rng: RandomnessSource = None) -> RandomnessSource:
    return rng if rng is not None else SystemRandomness()


class EphemeralScalar:
    """
    A single-use ephemeral scalar.

    Examples
    --------
    >>> eph = EphemeralScalar.sample(group)
    >>> r = eph.consume()
    >>> eph.consume()  # raises NonceReuseError
    """

    __slots__ = ('_value', '_spent')

    def __init__(self, value: ZR):
        self._value = value
        self._spent = False

    @classmethod
    def sample(cls, group: PairingGroup, rng: RandomnessSource = None) -> 'EphemeralScalar':
        return cls(default_source(rng).scalar(group))

    @property
    def spent(self) -> bool:
        return self._spent

    def consume(self) -> ZR:
        if self._spent:
            raise NonceReuseError("Ephemeral scalar already used; sample a fresh one per encryption")
        self._spent = True
        value, self._value = self._value, None
        return value

    def __repr__(self):
        return f"EphemeralScalar(spent={self._spent})"
