# oracle/rng_core.py
# Wider outputs composed from repeated 32-bit words.
# Works with any object exposing next_u32().


def next_u64_via_u32(rng):
    low = rng.next_u32()
    high = rng.next_u32()
    return (high << 32) | low


def fill_bytes_via_next(rng, dest):
    # little-endian words; the last word is truncated to fit
    view = memoryview(dest)
    n = len(view)
    for i in range(0, n, 4):
        chunk = rng.next_u32().to_bytes(4, 'little')
        view[i:i + 4] = chunk[:min(4, n - i)]
    return dest
