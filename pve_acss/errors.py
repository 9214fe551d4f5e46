"""
Error Taxonomy
==============

All failures raised by the primitive and the resharing protocol derive from
PVEError so callers can catch the whole family at once.

- InvalidBufferSize: a fixed-length byte conversion failed
- InvalidEncoding: bytes do not decode to a group element or capsule
- ShareVerificationError: a recovered share does not validate
- NonceReuseError: a single-use ephemeral scalar was consumed twice
- InsufficientSharesError: too few shares to interpolate

Decrypting with the wrong secret key is NOT an error; see elgamal.decrypt.
"""


class PVEError(Exception):
    """Base class for all errors in this package."""


class InvalidBufferSize(PVEError, ValueError):
    """A value could not be coerced to its fixed byte length."""

    def __init__(self, expected: int, actual: int, what: str = "buffer"):
        self.expected = expected
        self.actual = actual
        self.what = what
        super().__init__(f"Invalid {what} size: expected {expected}, got {actual}")


class InvalidEncoding(PVEError, ValueError):
    """Serialized data does not decode to a valid object."""


class ShareVerificationError(PVEError):
    """
    A share failed verification during recovery.

    Raised when the capsule's encryption proofs do not verify for the
    recovering member, or when the decrypted share does not open the public
    commitment. This signals a misbehaving dealer or a capsule meant for
    someone else, as opposed to structurally malformed input.
    """

    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Share {index} failed verification: {reason}")


class NonceReuseError(PVEError, RuntimeError):
    """An ephemeral scalar handle was used more than once."""


class InsufficientSharesError(PVEError, ValueError):
    """Reconstruction needs at least t+1 distinct shares."""

    def __init__(self, needed: int, got: int):
        self.needed = needed
        self.got = got
        super().__init__(f"Need at least {needed} distinct shares, got {got}")
