# oracle/seeding.py
# Seeding for xoshiro128: 16 raw seed bytes, or a single 64-bit integer
# expanded through SplitMix64. The all-zero state is never produced.

import logging

MASK64 = (1 << 64) - 1
SEED_SIZE = 16

GOLDEN_GAMMA = 0x9E3779B97F4A7C15

logger = logging.getLogger('oracle.seeding')


class SplitMix64:
    """
    SplitMix64 output generator, used only to diffuse a 64-bit seed into
    the 128-bit xoshiro state.
    """
    def __init__(self, seed):
        self.state = seed & MASK64

    def next_u64(self):
        self.state = (self.state + GOLDEN_GAMMA) & MASK64
        z = self.state
        z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & MASK64
        z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & MASK64
        return z ^ (z >> 31)

    def fill_bytes(self, n):
        out = bytearray()
        while len(out) < n:
            out += self.next_u64().to_bytes(8, 'little')
        return bytes(out[:n])


def read_u32_le(seed):
    return [int.from_bytes(seed[i:i + 4], 'little') for i in range(0, len(seed), 4)]


def splitmix_words(seed):
    # two u64 outputs, little-endian, read back as four u32 words (low first)
    return read_u32_le(SplitMix64(seed).fill_bytes(SEED_SIZE))


def splitmix_state(seed):
    words = splitmix_words(seed)
    if not any(words):
        logger.debug("SplitMix64 expansion of %#x gave a zero state, remapping", seed & MASK64)
        return _zero_seed_state()
    return words


def seed_to_state(seed):
    seed = bytes(seed)
    if len(seed) != SEED_SIZE:
        raise ValueError(f"seed must be {SEED_SIZE} bytes, got {len(seed)}")
    if not any(seed):
        logger.debug("all-zero seed bytes, remapping")
        return _zero_seed_state()
    return read_u32_le(seed)


def _zero_seed_state():
    # same state as seeding from the integer 0
    return splitmix_words(0)
