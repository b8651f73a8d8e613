"""Tests for raw-byte and SplitMix64 seeding."""

from __future__ import annotations

import logging

import pytest

from xoshiro_project.oracle.rng128 import Xoshiro128Plus, Xoshiro128StarStar
from xoshiro_project.oracle.seeding import (
    SplitMix64,
    read_u32_le,
    seed_to_state,
    splitmix_state,
    splitmix_words,
)

# SplitMix64 outputs for seed 0
SM_ZERO = [0xE220A8397B1DCDAF, 0x6E789E6AA1B965F4, 0x06C45D188009454F]
ZERO_SEED_STATE = [0x7B1DCDAF, 0xE220A839, 0xA1B965F4, 0x6E789E6A]


class TestSplitMix64:
    def test_known_outputs(self):
        sm = SplitMix64(0)
        assert [sm.next_u64() for _ in range(3)] == SM_ZERO

    def test_seed_is_masked(self):
        assert SplitMix64(1 << 64).next_u64() == SM_ZERO[0]

    def test_fill_bytes_little_endian(self):
        data = SplitMix64(0).fill_bytes(12)
        assert data[:8] == SM_ZERO[0].to_bytes(8, 'little')
        assert data[8:] == SM_ZERO[1].to_bytes(8, 'little')[:4]

    def test_state_words_low_first(self):
        assert splitmix_state(0) == ZERO_SEED_STATE
        assert splitmix_state(0) == read_u32_le(SplitMix64(0).fill_bytes(16))

    @pytest.mark.parametrize('seed', [1, 0xDEADBEEF, 0xFFFFFFFFFFFFFFFF])
    def test_seed_bytes_come_from_fill_bytes(self, seed):
        sm = SplitMix64(seed)
        a, b = sm.next_u64(), sm.next_u64()
        expected = [a & 0xFFFFFFFF, a >> 32, b & 0xFFFFFFFF, b >> 32]
        assert splitmix_words(seed) == expected
        assert splitmix_words(seed) == read_u32_le(SplitMix64(seed).fill_bytes(16))


class TestSeedFromU64:
    def test_deterministic(self):
        assert Xoshiro128Plus.seed_from_u64(42) == Xoshiro128Plus.seed_from_u64(42)
        assert Xoshiro128Plus.seed_from_u64(42) != Xoshiro128Plus.seed_from_u64(43)

    def test_zero_seed(self):
        assert list(Xoshiro128StarStar.seed_from_u64(0).state) == ZERO_SEED_STATE

    @pytest.mark.parametrize('seed', [0, 1, 2, 0xFFFFFFFFFFFFFFFF, 0x1234567890ABCDEF])
    def test_never_zero(self, seed):
        assert any(Xoshiro128Plus.seed_from_u64(seed).state)


class TestFromSeedBytes:
    def test_zero_seed_is_remapped(self):
        rng = Xoshiro128Plus.from_seed(bytes(16))
        assert any(rng.state)
        assert list(rng.state) == ZERO_SEED_STATE
        assert rng == Xoshiro128Plus.seed_from_u64(0)

    def test_zero_seed_remap_is_stable(self):
        assert Xoshiro128StarStar.from_seed(bytes(16)) == Xoshiro128StarStar.from_seed(bytearray(16))

    def test_zero_seed_logged_at_debug(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.DEBUG, logger='oracle.seeding'):
            seed_to_state(bytes(16))
        assert any('all-zero seed' in rec.message for rec in caplog.records)

    def test_nonzero_seed_used_directly(self):
        seed = bytes(15) + b'\x80'
        assert seed_to_state(seed) == [0, 0, 0, 0x80000000]

    @pytest.mark.parametrize('size', [0, 8, 15, 17, 32])
    def test_wrong_size(self, size):
        with pytest.raises(ValueError):
            seed_to_state(bytes([1]) * size)
