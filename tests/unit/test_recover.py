"""Tests for GF(2) state recovery from observed outputs."""

from __future__ import annotations

import pytest

from xoshiro_project.attacker.recover import (
    construct_equations,
    initial_symbolic_state,
    invert_starstar,
    predict_next,
    recover_state,
    solve_gf2,
    sym_rotl,
    sym_shl,
    symbolic_step,
    truncate,
)
from xoshiro_project.oracle.rng128 import Xoshiro128Plus, Xoshiro128StarStar
from xoshiro_project.oracle.transition import starstar_output, step


def evaluate(S, state):
    """Evaluate symbolic words against a concrete initial state."""
    x = 0
    for i, w in enumerate(state):
        x |= w << (32 * i)
    return [
        sum((bin(mask & x).count('1') & 1) << b for b, mask in enumerate(word))
        for word in S
    ]


class TestSymbolicModel:
    def test_shift_and_rotate(self):
        a = [1 << b for b in range(32)]
        assert sym_shl(a, 9)[:9] == [0] * 9
        assert sym_shl(a, 9)[9] == a[0]
        assert sym_rotl(a, 11)[11] == a[0]
        assert sym_rotl(a, 11)[0] == a[21]

    def test_symbolic_step_tracks_real_step(self):
        state = [0xDEADBEEF, 0x01234567, 0x89ABCDEF, 0xCAFEBABE]
        S = initial_symbolic_state()
        s = list(state)
        for _ in range(10):
            symbolic_step(S)
            step(s)
            assert evaluate(S, state) == s


class TestHelpers:
    @pytest.mark.parametrize('s1', [0, 1, 2, 0xFFFFFFFF, 0x9E3779B9])
    def test_invert_starstar(self, s1):
        assert invert_starstar(starstar_output([0, s1, 0, 0])) == s1

    def test_truncate(self):
        assert truncate(0xABCD1234, 32, 'high') == 0xABCD1234
        assert truncate(0xABCD1234, 16, 'high') == 0xABCD
        assert truncate(0xABCD1234, 16, 'low') == 0x1234
        assert truncate(0xABCD1234, 1, 'low') == 0

    def test_solve_small_system(self):
        rows = [1 << b for b in range(128)]
        rhs = [b % 2 for b in range(128)]
        sol = solve_gf2(rows, rhs)
        assert sol == sum(1 << b for b in range(1, 128, 2))

    def test_solve_underdetermined(self):
        assert solve_gf2([1 << b for b in range(127)], [0] * 127) is None

    def test_solve_inconsistent(self):
        rows = [1 << b for b in range(128)] + [1]
        assert solve_gf2(rows, [0] * 128 + [1]) is None


class TestStarStarRecovery:
    def test_four_outputs_recover_state(self):
        rng = Xoshiro128StarStar.seed_from_u64(1234)
        state = list(rng.state)
        obs = [rng.next_u32() for _ in range(4)]
        assert recover_state(obs, 'starstar') == state
        assert predict_next(state, 'starstar', 4) == rng.next_u32()

    def test_three_outputs_are_not_enough(self):
        rng = Xoshiro128StarStar.seed_from_u64(1234)
        obs = [rng.next_u32() for _ in range(3)]
        assert recover_state(obs, 'starstar') is None

    def test_truncated_outputs_give_no_equations(self):
        rows, _ = construct_equations([1, 2, 3, 4, 5], 'starstar', output_bits=16)
        assert rows == []


class TestPlusRecovery:
    def test_low_bits_recover_state(self):
        rng = Xoshiro128Plus.seed_from_u64(77)
        state = list(rng.state)
        obs = [rng.next_u32() for _ in range(128)]
        assert recover_state(obs, 'plus') == state

    def test_truncated_low_select(self):
        rng = Xoshiro128Plus.seed_from_u64(78)
        state = list(rng.state)
        obs = [truncate(rng.next_u32(), 8, 'low') for _ in range(140)]
        assert recover_state(obs, 'plus', output_bits=8, select='low') == state

    def test_high_select_hides_the_linear_bit(self):
        rng = Xoshiro128Plus.seed_from_u64(79)
        obs = [truncate(rng.next_u32(), 16, 'high') for _ in range(200)]
        assert recover_state(obs, 'plus', output_bits=16, select='high') is None

    def test_too_few_samples(self):
        rng = Xoshiro128Plus.seed_from_u64(80)
        obs = [rng.next_u32() for _ in range(100)]
        assert recover_state(obs, 'plus') is None

    def test_one_equation_per_output(self):
        rows, rhs = construct_equations([3, 4, 5], 'plus')
        assert len(rows) == 3
        assert rhs == [1, 0, 1]
