# oracle/rng128.py
# xoshiro128 generators used by oracle/app.py
# State: four 32-bit words.
# Update: linear transform over GF(2) (see transition.py); the variants only
# differ in how the output word is extracted before each update.

from xoshiro_project.oracle.jump import JUMP, LONG_JUMP, jump_state
from xoshiro_project.oracle.rng_core import fill_bytes_via_next, next_u64_via_u32
from xoshiro_project.oracle.seeding import seed_to_state, splitmix_state
from xoshiro_project.oracle.transition import MASK32, plus_output, starstar_output, step


class Xoshiro128:
    """
    Shared xoshiro128 state machine. Subclasses pick the output function.

    Not suitable for cryptographic use: the state can be reconstructed
    from a few outputs (see attacker/recover.py).
    """
    VARIANT = None
    output = None

    def __init__(self, state):
        if self.output is None:
            raise TypeError(f"{type(self).__name__} has no output function; use Xoshiro128Plus or Xoshiro128StarStar")
        self.s = list(state)

    @classmethod
    def from_seed(cls, seed):
        """Seed from 16 bytes; an all-zero seed is mapped to a fixed non-zero one."""
        return cls(seed_to_state(seed))

    @classmethod
    def seed_from_u64(cls, seed):
        """Seed from a 64-bit integer expanded with SplitMix64."""
        return cls(splitmix_state(seed))

    @classmethod
    def from_state(cls, words):
        words = [int(w) for w in words]
        if len(words) != 4:
            raise ValueError(f"state must have 4 words, got {len(words)}")
        for w in words:
            if not 0 <= w <= MASK32:
                raise ValueError(f"state word {w!r} is not an unsigned 32-bit integer")
        if not any(words):
            raise ValueError("state must not be all zero")
        return cls(words)

    @property
    def state(self):
        return tuple(self.s)

    def next_u32(self):
        result = self.output(self.s)
        step(self.s)
        return result

    def next_u64(self):
        return next_u64_via_u32(self)

    def fill_bytes(self, dest):
        return fill_bytes_via_next(self, dest)

    def random_bytes(self, n):
        return bytes(self.fill_bytes(bytearray(n)))

    def jump(self):
        """Jump forward, equivalently to 2^64 calls to next_u32()."""
        jump_state(self.s, JUMP)

    def long_jump(self):
        """Jump forward, equivalently to 2^96 calls to next_u32()."""
        jump_state(self.s, LONG_JUMP)

    def clone(self):
        return type(self)(self.s)

    __copy__ = clone

    def __deepcopy__(self, memo):
        return self.clone()

    def __eq__(self, other):
        if not isinstance(other, Xoshiro128):
            return NotImplemented
        return self.VARIANT == other.VARIANT and self.s == other.s

    def __repr__(self):
        words = ', '.join(f'0x{w:08x}' for w in self.s)
        return f'{type(self).__name__}([{words}])'


class Xoshiro128Plus(Xoshiro128):
    """xoshiro128+: fast, with low linear complexity in the lowest bits."""
    VARIANT = 'plus'
    output = staticmethod(plus_output)


class Xoshiro128StarStar(Xoshiro128):
    """xoshiro128**: all output bits pass statistical tests."""
    VARIANT = 'starstar'
    output = staticmethod(starstar_output)


VARIANTS = {
    Xoshiro128Plus.VARIANT: Xoshiro128Plus,
    Xoshiro128StarStar.VARIANT: Xoshiro128StarStar,
}


def get_variant(name):
    try:
        return VARIANTS[str(name).lower()]
    except KeyError:
        raise ValueError(f"unknown variant {name!r}, expected one of {sorted(VARIANTS)}") from None
