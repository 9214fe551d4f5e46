"""
Hashed El Gamal
===============

Encryption of a 32-byte message under a public key pk = g^sk:

    r  <- Z_p
    c1 = g^r
    c2 = H(pk^r) XOR m

Decryption recomputes the Diffie-Hellman value c1^sk = pk^r:

    m = H(c1^sk) XOR c2

There is no MAC. A wrong key or a tampered c2 yields a different 32-byte
value rather than an error; callers must check the result against a public
commitment (see acss and sigma) before trusting it.

Precondition: the ephemeral scalar r must never be reused. encrypt() samples
a fresh one on every call; encrypt_with() consumes a single-use handle.
"""

from charm.toolbox.pairinggroup import PairingGroup, ZR

from .errors import InvalidBufferSize
from .hashing import hash_to_bytes
from .randomness import EphemeralScalar, RandomnessSource
from .utils import xor_bytes

MESSAGE_SIZE = 32


def as_message(data: bytes) -> bytes:
    """
    Validate and return a 32-byte message.

    Raises
    ------
    InvalidBufferSize
        If data is not exactly 32 bytes. Nothing is padded or truncated.
    """
    data = bytes(data)
    if len(data) != MESSAGE_SIZE:
        raise InvalidBufferSize(MESSAGE_SIZE, len(data), what="message")
    return data


class Ciphertext:
    """
    A Hashed El Gamal ciphertext <c1, c2>.

    Attributes
    ----------
    c1 : G1
        The ephemeral Diffie-Hellman contribution g^r
    c2 : bytes
        The 32-byte masked message
    """

    __slots__ = ('_c1', '_c2')

    def __init__(self, c1, c2: bytes):
        object.__setattr__(self, '_c1', c1)
        object.__setattr__(self, '_c2', as_message(c2))

    def __setattr__(self, name, value):
        raise AttributeError("Ciphertext is immutable")

    @property
    def c1(self):
        return self._c1

    @property
    def c2(self) -> bytes:
        return self._c2

    def add(self, other: 'Ciphertext') -> 'Ciphertext':
        """
        Aggregate C = <u, v> and C' = <u', v'> into <u·u', v XOR v'>.

        Returns a new ciphertext; neither operand changes.
        """
        return Ciphertext(self.c1 * other.c1, xor_bytes(self.c2, other.c2))

    def __add__(self, other):
        if not isinstance(other, Ciphertext):
            return NotImplemented
        return self.add(other)

    def __eq__(self, other):
        if not isinstance(other, Ciphertext):
            return NotImplemented
        return self.c1 == other.c1 and self.c2 == other.c2

    __hash__ = None

    def __repr__(self):
        return f"Ciphertext(c1={self.c1}, c2={self.c2.hex()})"


def encrypt_with(message: bytes, pk, generator, group: PairingGroup,
                 ephemeral: EphemeralScalar) -> Ciphertext:
    """
    Encrypt with an explicit single-use ephemeral scalar.

    Raises
    ------
    NonceReuseError
        If the handle was already consumed.
    InvalidBufferSize
        If the message is not 32 bytes.
    """
    message = as_message(message)
    r = ephemeral.consume()
    c1 = generator ** r
    inner = pk ** r
    c2 = xor_bytes(hash_to_bytes(inner, group), message)
    return Ciphertext(c1, c2)


def encrypt(message: bytes, pk, generator, group: PairingGroup,
            rng: RandomnessSource = None) -> Ciphertext:
    """
    Encrypt a 32-byte message to pk.

    Parameters
    ----------
    message : bytes
        Exactly 32 bytes
    pk : G1
        Recipient public key, pk = generator^sk
    generator : G1
        The generator the key pair was formed with
    group : PairingGroup
        The group
    rng : RandomnessSource, optional
        Source of the ephemeral scalar; charm's CSPRNG if omitted

    Returns
    -------
    Ciphertext
    """
    return encrypt_with(message, pk, generator, group, EphemeralScalar.sample(group, rng))


def decrypt(sk: ZR, ciphertext: Ciphertext, group: PairingGroup) -> bytes:
    """
    Recover the 32-byte message.

    A wrong sk or a modified c2 returns a different 32-byte value; this
    function never reports that as an error.
    """
    # s = c1^sk
    s = ciphertext.c1 ** sk
    # m = H(s) XOR c2
    return xor_bytes(hash_to_bytes(s, group), ciphertext.c2)
