# xoshiro128+ / xoshiro128** generators, a Flask oracle serving them, and a
# GF(2) state-recovery attacker showing why they are not cryptographic.

from xoshiro_project.oracle.rng128 import Xoshiro128, Xoshiro128Plus, Xoshiro128StarStar, get_variant

__all__ = ['Xoshiro128', 'Xoshiro128Plus', 'Xoshiro128StarStar', 'get_variant']
