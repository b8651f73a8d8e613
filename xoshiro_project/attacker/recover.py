# attacker/recover.py
# Query oracle for outputs, build linear system over GF(2), solve for the
# 128-bit xoshiro128 state, then predict next output and validate via /validate

import argparse
import time

import requests

from xoshiro_project.oracle.rng128 import get_variant
from xoshiro_project.oracle.transition import MASK32, rotl32

ORACLE = 'http://127.0.0.1:5000'
BITS = 128
WORD = 32

INV5 = pow(5, -1, 1 << 32)
INV9 = pow(9, -1, 1 << 32)


# Symbolic words: a word is a list of 32 integer masks, mask[b] tells which
# initial state bits (variable 32*i + b for word i, bit b) feed bit b.
def initial_symbolic_state():
    return [[1 << (WORD * i + b) for b in range(WORD)] for i in range(4)]


def sym_xor(a, b):
    return [x ^ y for x, y in zip(a, b)]


def sym_shl(a, k):
    return [0] * k + a[:WORD - k]


def sym_rotl(a, k):
    k %= WORD
    return a[WORD - k:] + a[:WORD - k]


def symbolic_step(S):
    # mirrors transition.step on symbolic words
    t = sym_shl(S[1], 9)
    S[2] = sym_xor(S[2], S[0])
    S[3] = sym_xor(S[3], S[1])
    S[1] = sym_xor(S[1], S[2])
    S[0] = sym_xor(S[0], S[3])
    S[2] = sym_xor(S[2], t)
    S[3] = sym_rotl(S[3], 11)


def truncate(x, bits, select):
    if bits >= WORD:
        return x & MASK32
    if select == 'high':
        return (x >> (WORD - bits)) & ((1 << bits) - 1)
    return x & ((1 << bits) - 1)


def invert_starstar(out):
    # out = rotl(s1 * 5, 7) * 9  ->  s1
    v = (out * INV9) & MASK32
    return (rotl32(v, WORD - 7) * INV5) & MASK32


def low_bit_visible(output_bits, select):
    return output_bits >= WORD or select == 'low'


def construct_equations(observed, variant, output_bits=WORD, select='high'):
    # observed: list of integers (each truncated if output_bits < 32)
    variant = get_variant(variant).VARIANT
    rows = []
    rhs = []
    S = initial_symbolic_state()
    for out in observed:
        if variant == 'starstar':
            # only a full word can be inverted back to s[1]
            if output_bits >= WORD:
                s1 = invert_starstar(out)
                for b in range(WORD):
                    rows.append(S[1][b])
                    rhs.append((s1 >> b) & 1)
        else:
            # bit 0 of s0 + s3 is s0.bit0 ^ s3.bit0, higher bits carry
            if low_bit_visible(output_bits, select):
                rows.append(S[0][0] ^ S[3][0])
                rhs.append(out & 1)
        symbolic_step(S)
    return rows, rhs


# Gaussian elimination over GF(2) with integer row masks of <=128 bits
def solve_gf2(rows, rhs):
    rows = rows[:]  # copy
    rhs = rhs[:]
    n_eq = len(rows)
    pivot = {}
    row = 0
    for col in reversed(range(BITS)):
        sel = None
        for r in range(row, n_eq):
            if (rows[r] >> col) & 1:
                sel = r
                break
        if sel is None:
            continue
        rows[row], rows[sel] = rows[sel], rows[row]
        rhs[row], rhs[sel] = rhs[sel], rhs[row]
        pivot[col] = row
        # eliminate other rows
        for r in range(n_eq):
            if r != row and ((rows[r] >> col) & 1):
                rows[r] ^= rows[row]
                rhs[r] ^= rhs[row]
        row += 1
        if row >= n_eq:
            break
    # underdetermined: some state bits are free
    if len(pivot) < BITS:
        return None
    sol = 0
    for col, r in pivot.items():
        if rhs[r]:
            sol |= (1 << col)
    # verify
    for rmask, rval in zip(rows, rhs):
        lhs = bin(rmask & sol).count('1') & 1
        if lhs != rval:
            return None
    return sol


def recover_state(observed, variant, output_bits=WORD, select='high'):
    """
    Recover the generator state at the time of the first observation.

    Returns the four state words, or None if the observations do not pin
    down all 128 bits (too few samples, or the visible bits are not linear
    in the state).
    """
    rows, rhs = construct_equations(observed, variant, output_bits, select)
    sol = solve_gf2(rows, rhs)
    if sol is None:
        return None
    words = [(sol >> (WORD * i)) & MASK32 for i in range(4)]
    if not any(words):
        return None
    return words


def predict_next(state, variant, steps):
    rng = get_variant(variant).from_state(state)
    for _ in range(steps):
        rng.next_u32()
    return rng.next_u32()


def query_oracle(n, oracle=ORACLE):
    outs = []
    for _ in range(n):
        r = requests.get(oracle + '/get_output', timeout=5)
        r.raise_for_status()
        outs.append(int(r.json()['output'], 16))
    return outs


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument('--oracle', default=ORACLE, help='oracle base URL')
    parser.add_argument('--variant', default='starstar', help="'plus' or 'starstar'")
    parser.add_argument('--samples', type=int, default=None,
                        help='number of outputs to collect (default: 4 for starstar, 160 for plus)')
    parser.add_argument('--output_bits', type=int, default=32, help='bits returned by oracle (<=32)')
    parser.add_argument('--select', default='high', help="which bits the oracle returns: 'high' or 'low'")
    args = parser.parse_args(argv)

    variant = get_variant(args.variant).VARIANT
    samples = args.samples
    if samples is None:
        samples = 4 if variant == 'starstar' else 160

    t0 = time.time()
    print(f"[attacker] Querying oracle for {samples} outputs (variant={variant}, output_bits={args.output_bits})...")
    obs = query_oracle(samples, args.oracle)
    digits = (args.output_bits + 3) // 4
    for i, o in enumerate(obs[:8]):
        print(f" obs[{i}]: {format(o, '0{}x'.format(digits))}")
    rows, rhs = construct_equations(obs, variant, args.output_bits, args.select)
    print(f"[attacker] Constructed {len(rows)} linear equations. Solving...")
    state = recover_state(obs, variant, args.output_bits, args.select)
    if state is None:
        print("[attacker] Failed to find unique solution. Try increasing samples or output_bits.")
        print(f"[attacker] Done in {time.time()-t0:.2f}s")
        return 1

    print("[attacker] Recovered initial 128-bit state (hex):")
    print(' '.join(format(w, '08x') for w in state))
    predicted = truncate(predict_next(state, variant, len(obs)), args.output_bits, args.select)
    cand_hex = format(predicted, '0{}x'.format(digits))
    print(f"[attacker] Predicted next output: {cand_hex}")
    resp = requests.post(args.oracle + '/validate', json={'candidate': cand_hex}, timeout=5)
    result = resp.json()
    print("[attacker] Validate response:", result)
    print(f"[attacker] Done in {time.time()-t0:.2f}s")
    return 0 if result.get('ok') else 1


if __name__ == '__main__':
    raise SystemExit(main())
