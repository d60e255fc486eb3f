"""
Keccak-f[1600] permutation and the sponge built on top of it.

KeccakState absorbs input; finalize() pads a private copy of the state and
hands back an XofReader that squeezes as many bytes as the caller asks for.
"""

import logging
from copy import deepcopy

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------
#                          Constants & Helpers
# --------------------------------------------------------------------

LANE_DIAM = 5
LANE_BITS = 64
LANE_BYTES = LANE_BITS // 8
STATE_WIDTH = LANE_DIAM * LANE_DIAM * LANE_BYTES  # 200 bytes, 1600 bits
ROUNDS = 24

Masks = [(1 << i) - 1 for i in range(LANE_BITS + 1)]


class InvalidParameters(ValueError):
    """Raised when a sponge is configured with an impossible rate/capacity."""


def bits2bytes(x):
    return (x + 7) // 8


def rol(value, left, bits=LANE_BITS):
    left %= bits
    top = value >> (bits - left)
    bot = (value & Masks[bits - left]) << left
    return bot | top


def lfsr_step(r):
    return ((r << 1) ^ ((r >> 7) * 0x71)) % 256


def round_constants():
    """Expand the 24 iota constants from the degree-8 LFSR."""
    constants = []
    r = 1
    for _ in range(ROUNDS):
        rc = 0
        for j in range(7):
            r = lfsr_step(r)
            if r & 2:
                rc ^= 1 << ((1 << j) - 1)
        constants.append(rc)
    return constants


def zero_lanes():
    return [[0] * LANE_DIAM for _ in range(LANE_DIAM)]


def bytes2lanes(state):
    lanes = zero_lanes()
    for x in range(LANE_DIAM):
        for y in range(LANE_DIAM):
            start = LANE_BYTES * (x + LANE_DIAM * y)
            lanes[x][y] = int.from_bytes(state[start : start + LANE_BYTES], "little")
    return lanes


def lanes2bytes(lanes):
    out = bytearray(STATE_WIDTH)
    for x in range(LANE_DIAM):
        for y in range(LANE_DIAM):
            start = LANE_BYTES * (x + LANE_DIAM * y)
            out[start : start + LANE_BYTES] = lanes[x][y].to_bytes(LANE_BYTES, "little")
    return out

# --------------------------------------------------------------------
#                          Keccak Permutation
# --------------------------------------------------------------------

def keccak_f1600_on_lanes(lanes):
    """Run the 24 rounds over a 5x5 grid of 64-bit lanes, in place."""
    r = 1  # LFSR state, carried across all rounds
    for _ in range(ROUNDS):
        # Theta
        c = [lanes[x][0] ^ lanes[x][1] ^ lanes[x][2] ^ lanes[x][3] ^ lanes[x][4]
             for x in range(LANE_DIAM)]
        for x in range(LANE_DIAM):
            d = c[(x + 4) % LANE_DIAM] ^ rol(c[(x + 1) % LANE_DIAM], 1)
            for y in range(LANE_DIAM):
                lanes[x][y] ^= d

        # Rho & Pi
        x, y = 1, 0
        current = lanes[x][y]
        for t in range(24):
            x, y = y, (2 * x + 3 * y) % LANE_DIAM
            current, lanes[x][y] = lanes[x][y], rol(current, (t + 1) * (t + 2) // 2)

        # Chi
        for y in range(LANE_DIAM):
            row = [lanes[x][y] for x in range(LANE_DIAM)]
            for x in range(LANE_DIAM):
                lanes[x][y] = row[x] ^ ((~row[(x + 1) % LANE_DIAM]) & row[(x + 2) % LANE_DIAM])

        # Iota
        for j in range(7):
            r = lfsr_step(r)
            if r & 2:
                lanes[0][0] ^= 1 << ((1 << j) - 1)
    return lanes


def keccak_f1600(state):
    """Keccak-f[1600] over a 200-byte state. Returns a new bytearray."""
    assert len(state) == STATE_WIDTH
    return lanes2bytes(keccak_f1600_on_lanes(bytes2lanes(state)))

# --------------------------------------------------------------------
#                          Sponge & Squeeze Cursor
# --------------------------------------------------------------------

class XofReader:
    """Resumable squeeze cursor over a finalized sponge."""

    def __init__(self, state, rate_in_bytes, pos=0):
        self.state = bytearray(state)
        self.rate_in_bytes = rate_in_bytes
        self.pos = pos

    def copy(self):
        return deepcopy(self)

    def read(self, n):
        """Squeeze the next n bytes, advancing this cursor in place.

        Use copy() first to keep an independent stream at the current position.
        """
        if n < 0:
            raise ValueError("cannot read a negative number of bytes")
        out = bytearray(n)
        state, pos, rate = self.state, self.pos, self.rate_in_bytes
        for i in range(n):
            out[i] = state[pos]
            pos += 1
            if pos == rate:
                state = keccak_f1600(state)
                pos = 0
        self.state, self.pos = state, pos
        return bytes(out)


class KeccakState:
    """Absorbing half of the sponge.

    The rate is whatever the capacity (twice the security level) leaves of
    the 1600-bit state. ``delimiter`` carries the domain separation bits
    that start the padding: 0x06 for SHA-3, 0x1F for SHAKE, 0x01 for the
    original Keccak submission.
    """

    def __init__(self, security_bits, delimiter):
        if security_bits <= 0 or security_bits % 4 != 0 or security_bits >= STATE_WIDTH * 4:
            raise InvalidParameters(
                f"security level of {security_bits} bits does not leave a byte-aligned rate"
            )
        if not 0 < delimiter < 256:
            raise InvalidParameters(f"delimiter must be a non-zero byte, got {delimiter!r}")
        self.rate_in_bytes = STATE_WIDTH - security_bits // 4
        self.delimiter = delimiter
        self.state = bytearray(STATE_WIDTH)
        self.pos = 0
        logger.debug(
            "sponge created: rate=%d bytes, delimiter=0x%02x", self.rate_in_bytes, delimiter
        )

    @classmethod
    def from_rate(cls, rate, capacity, delimiter):
        if rate + capacity != STATE_WIDTH * 8:
            raise InvalidParameters(
                f"rate ({rate}) + capacity ({capacity}) must be {STATE_WIDTH * 8} bits"
            )
        if rate <= 0 or rate % 8 != 0:
            raise InvalidParameters(f"rate must be a positive multiple of 8 bits, got {rate}")
        # rate_in_bytes is derived as 200 - security_bits / 4
        return cls(capacity // 2, delimiter)

    @property
    def capacity_in_bytes(self):
        return STATE_WIDTH - self.rate_in_bytes

    def copy(self):
        return deepcopy(self)

    def update(self, data):
        if isinstance(data, str):
            raise TypeError("Strings must be encoded before hashing")
        state, pos, rate = self.state, self.pos, self.rate_in_bytes
        for byte in memoryview(data).cast("B"):
            state[pos] ^= byte
            pos += 1
            if pos == rate:
                state = keccak_f1600(state)
                pos = 0
        self.state, self.pos = state, pos
        return self

    def finalize(self):
        """Pad and switch to the squeezing phase.

        Works on a copy of the state, so the context can keep absorbing or be
        finalized again.
        """
        state = bytearray(self.state)
        pos, rate = self.pos, self.rate_in_bytes
        state[pos] ^= self.delimiter
        # delimiter's top bit and the closing pad bit would share a byte
        if self.delimiter & 0x80 and pos == rate - 1:
            state = keccak_f1600(state)
        state[rate - 1] ^= 0x80
        state = keccak_f1600(state)
        logger.debug("sponge finalized at offset %d of %d", pos, rate)
        return XofReader(state, rate)

    def finish(self, length):
        return self.finalize().read(length)
