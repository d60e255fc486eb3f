"""Pure-Python Keccak, SHA-3 and SHAKE."""

from keccak_const.hashes import (
    CLASSES,
    VARIANTS,
    Keccak224,
    Keccak256,
    Keccak384,
    Keccak512,
    KeccakHash,
    Sha3_224,
    Sha3_256,
    Sha3_384,
    Sha3_512,
    Shake128,
    Shake256,
    UnsupportedAlgorithm,
    Variant,
    keccak224,
    keccak256,
    keccak384,
    keccak512,
    new,
    sha3_224,
    sha3_256,
    sha3_384,
    sha3_512,
    shake128,
    shake256,
)
from keccak_const.keccak import InvalidParameters, KeccakState, XofReader, keccak_f1600

__version__ = "0.1.0"

algorithms_available = frozenset(VARIANTS)
