"""
hashlib-style front end for the sponge in keccak_const.keccak.

Every standard variant is one row of VARIANTS; the named classes below only
bind a row to the generic KeccakHash.
"""

from collections import namedtuple

from keccak_const.keccak import InvalidParameters, KeccakState, bits2bytes

# --------------------------------------------------------------------
#                          Variant Table
# --------------------------------------------------------------------

Variant = namedtuple("Variant", ["name", "rate", "capacity", "delimiter", "digest_size"])

SHA3_DELIMITER = 0x06
KECCAK_DELIMITER = 0x01
SHAKE_DELIMITER = 0x1F

VARIANTS = {
    v.name: v
    for v in [
        Variant("sha3_224", 1152, 448, SHA3_DELIMITER, 28),
        Variant("sha3_256", 1088, 512, SHA3_DELIMITER, 32),
        Variant("sha3_384", 832, 768, SHA3_DELIMITER, 48),
        Variant("sha3_512", 576, 1024, SHA3_DELIMITER, 64),
        Variant("keccak_224", 1152, 448, KECCAK_DELIMITER, 28),
        Variant("keccak_256", 1088, 512, KECCAK_DELIMITER, 32),
        Variant("keccak_384", 832, 768, KECCAK_DELIMITER, 48),
        Variant("keccak_512", 576, 1024, KECCAK_DELIMITER, 64),
        Variant("shake_128", 1344, 256, SHAKE_DELIMITER, None),
        Variant("shake_256", 1088, 512, SHAKE_DELIMITER, None),
    ]
}


class UnsupportedAlgorithm(ValueError):
    pass


def lookup(name):
    key = name.lower().replace("-", "_")
    if key.startswith("keccak") and not key.startswith("keccak_"):
        key = "keccak_" + key[len("keccak"):]
    if key.startswith("shake") and not key.startswith("shake_"):
        key = "shake_" + key[len("shake"):]
    try:
        return VARIANTS[key]
    except KeyError:
        raise UnsupportedAlgorithm(f"unsupported hash type {name}") from None

# --------------------------------------------------------------------
#                          Generic Hash Object
# --------------------------------------------------------------------

class KeccakHash:
    """A sponge with a fixed (rate, capacity, delimiter) triple.

    ``output_bits`` fixes the digest length; leave it out for an
    extendable-output function, whose digest() then needs a length.
    """

    def __init__(self, rate, capacity, delimiter, output_bits=None, data=b"", name=None):
        if output_bits is not None and (output_bits <= 0 or output_bits % 8 != 0):
            raise InvalidParameters(
                f"output length must be a positive whole number of bytes, got {output_bits} bits"
            )
        self.sponge = KeccakState.from_rate(rate, capacity, delimiter)
        self.digest_size = output_bits // 8 if output_bits else 0
        self.block_size = bits2bytes(rate)
        self.name = name or f"keccak[r={rate},c={capacity},d=0x{delimiter:02x}]"
        if data:
            self.update(data)

    @property
    def is_xof(self):
        return self.digest_size == 0

    def copy(self):
        new = object.__new__(type(self))
        new.__dict__.update(self.__dict__)
        new.sponge = self.sponge.copy()
        return new

    def update(self, data):
        self.sponge.update(data)
        return self

    def reader(self):
        """Fresh squeeze cursor over everything absorbed so far."""
        return self.sponge.finalize()

    def _output_length(self, length):
        if self.is_xof:
            if length is None:
                raise TypeError(f"{self.name} digest() requires a length")
            return length
        if length is not None and length != self.digest_size:
            raise ValueError(
                f"{self.name} produces {self.digest_size} bytes, not {length}"
            )
        return self.digest_size

    def digest(self, length=None) -> bytes:
        return self.sponge.finish(self._output_length(length))

    def hexdigest(self, length=None) -> str:
        return self.digest(length).hex()

    def __repr__(self):
        return f"<{self.name} hash object @ {hex(id(self))}>"


def _bind(variant):
    output_bits = variant.digest_size * 8 if variant.digest_size else None

    def __init__(self, data=b""):
        KeccakHash.__init__(
            self,
            variant.rate,
            variant.capacity,
            variant.delimiter,
            output_bits=output_bits,
            data=data,
            name=variant.name,
        )

    kind = "extendable-output function" if output_bits is None else "hash function"
    return {"__init__": __init__, "variant": variant, "__doc__": f"The `{variant.name}` {kind}."}


Sha3_224 = type("Sha3_224", (KeccakHash,), _bind(VARIANTS["sha3_224"]))
Sha3_256 = type("Sha3_256", (KeccakHash,), _bind(VARIANTS["sha3_256"]))
Sha3_384 = type("Sha3_384", (KeccakHash,), _bind(VARIANTS["sha3_384"]))
Sha3_512 = type("Sha3_512", (KeccakHash,), _bind(VARIANTS["sha3_512"]))
Keccak224 = type("Keccak224", (KeccakHash,), _bind(VARIANTS["keccak_224"]))
Keccak256 = type("Keccak256", (KeccakHash,), _bind(VARIANTS["keccak_256"]))
Keccak384 = type("Keccak384", (KeccakHash,), _bind(VARIANTS["keccak_384"]))
Keccak512 = type("Keccak512", (KeccakHash,), _bind(VARIANTS["keccak_512"]))
Shake128 = type("Shake128", (KeccakHash,), _bind(VARIANTS["shake_128"]))
Shake256 = type("Shake256", (KeccakHash,), _bind(VARIANTS["shake_256"]))

CLASSES = {
    cls.variant.name: cls
    for cls in [
        Sha3_224, Sha3_256, Sha3_384, Sha3_512,
        Keccak224, Keccak256, Keccak384, Keccak512,
        Shake128, Shake256,
    ]
}

# --------------------------------------------------------------------
#                          One-shot Helpers
# --------------------------------------------------------------------

def new(name, data=b""):
    return CLASSES[lookup(name).name](data)


def sha3_224(data=b""):
    return Sha3_224(data).digest()


def sha3_256(data=b""):
    return Sha3_256(data).digest()


def sha3_384(data=b""):
    return Sha3_384(data).digest()


def sha3_512(data=b""):
    return Sha3_512(data).digest()


def keccak224(data=b""):
    return Keccak224(data).digest()


def keccak256(data=b""):
    return Keccak256(data).digest()


def keccak384(data=b""):
    return Keccak384(data).digest()


def keccak512(data=b""):
    return Keccak512(data).digest()


def shake128(data, length):
    return Shake128(data).digest(length)


def shake256(data, length):
    return Shake256(data).digest(length)
