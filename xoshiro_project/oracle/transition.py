# oracle/transition.py
# xoshiro128 state transition and output extractors.
# State: list of four 32-bit words.
# Update: XORs, one shift and one rotate (all linear over GF(2)).

MASK32 = (1 << 32) - 1


def rotl32(x, r):
    r %= 32
    return ((x << r) & MASK32) | (x >> (32 - r))


def step(s):
    # advance the state one position, in place
    t = (s[1] << 9) & MASK32
    s[2] ^= s[0]
    s[3] ^= s[1]
    s[1] ^= s[2]
    s[0] ^= s[3]
    s[2] ^= t
    s[3] = rotl32(s[3], 11)


def plus_output(s):
    return (s[0] + s[3]) & MASK32


def starstar_output(s):
    return (rotl32((s[1] * 5) & MASK32, 7) * 9) & MASK32
