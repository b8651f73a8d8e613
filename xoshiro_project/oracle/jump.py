# oracle/jump.py
# Jump engine: advance the state by 2^64 (JUMP) or 2^96 (LONG_JUMP) steps.
# The transition is linear over GF(2), so jumping is evaluating a fixed
# polynomial in the transition matrix against the current state.

from xoshiro_project.oracle.transition import step

JUMP = (0x8764000b, 0xf542d2d3, 0x6fa035c3, 0x77f2db5b)
LONG_JUMP = (0xb523952e, 0x0b6f099f, 0xccf5a0ef, 0x1c580662)


def jump_state(s, poly):
    # word order, then bit 0 -> 31 within each word; any other order jumps elsewhere
    acc = [0, 0, 0, 0]
    for word in poly:
        for b in range(32):
            if (word >> b) & 1:
                acc[0] ^= s[0]
                acc[1] ^= s[1]
                acc[2] ^= s[2]
                acc[3] ^= s[3]
            step(s)
    s[:] = acc


def parallel_streams(rng, count, long=False):
    """
    Return `count` independent generators derived from `rng`.

    Stream i is a clone of `rng` jumped i times, so the streams cover
    non-overlapping 2^64-word subsequences (2^96 with long=True).
    `rng` itself is left untouched.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    streams = []
    current = rng.clone()
    for _ in range(count):
        streams.append(current.clone())
        if long:
            current.long_jump()
        else:
            current.jump()
    return streams
