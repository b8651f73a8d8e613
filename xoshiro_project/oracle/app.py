# oracle/app.py
# Flask oracle exposing /get_output and /validate, plus wider outputs,
# jump control and (optionally) raw state access.
# Supports SEED_MODE = 'fixed' | 'random' | 'time'

import logging
import os
import time

from flask import Flask, jsonify, request

from xoshiro_project.oracle import config, serde
from xoshiro_project.oracle.rng128 import get_variant
from xoshiro_project.oracle.seeding import MASK64
from xoshiro_project.oracle.transition import MASK32

app = Flask(__name__)

# Setup logging
logging.basicConfig(level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger('oracle')

DEFAULT_SEED = 0x1234567890ABCDEF


def derive_seed():
    """
    Derive a 64-bit seed integer according to config.SEED_MODE.
    Priority:
      - If SEED_MODE == 'fixed' and config.SEED is int -> use it
      - If SEED_MODE == 'fixed' and config.SEED is None -> use deterministic default
      - If SEED_MODE == 'random' -> use os.urandom(8)
      - If SEED_MODE == 'time' -> use current time (seconds or ms)
    """
    mode = (config.SEED_MODE or 'fixed').lower()
    if mode == 'fixed':
        if config.SEED is not None:
            seed = int(config.SEED) & MASK64
            logger.info(f"Using fixed SEED from config: {seed:016x}")
        else:
            seed = DEFAULT_SEED
            logger.info(f"Using default fixed SEED: {seed:016x}")
        return seed
    elif mode == 'random':
        seed = int.from_bytes(os.urandom(8), 'little')
        logger.info(f"Using random SEED (os.urandom): {seed:016x}")
        return seed
    elif mode == 'time':
        if config.TIME_GRANULARITY == 'ms':
            t = int(time.time() * 1000)
        else:
            t = int(time.time())
        # intentionally low-entropy (for demo of weak seed)
        seed = t & MASK64
        logger.info(f"Using time-derived SEED (granu={config.TIME_GRANULARITY}): {seed:016x}")
        return seed
    else:
        seed = DEFAULT_SEED
        logger.warning(f"Unknown SEED_MODE '{config.SEED_MODE}', falling back to default SEED: {seed:016x}")
        return seed


def build_rng():
    try:
        cls = get_variant(config.VARIANT)
    except ValueError:
        logger.warning(f"Unknown VARIANT '{config.VARIANT}', falling back to 'starstar'")
        cls = get_variant('starstar')
    return cls.seed_from_u64(derive_seed())


# Initialize RNG with derived seed
RNG = build_rng()


def output_hexdigits(bits=None):
    if bits is None:
        bits = config.OUTPUT_BITS
    return (bits + 3) // 4


def mask_output(x, bits=None, select=None):
    if bits is None:
        bits = config.OUTPUT_BITS
    if select is None:
        select = config.OUTPUT_SELECT
    if bits >= 32:
        return x & MASK32
    if select == 'high':
        return (x >> (32 - bits)) & ((1 << bits) - 1)
    else:
        return x & ((1 << bits) - 1)


def bad_request(reason, status=400):
    return jsonify({'ok': False, 'reason': reason}), status


@app.route('/get_output', methods=['GET'])
def get_output():
    out = mask_output(RNG.next_u32())
    return jsonify({'output': format(out, '0{}x'.format(output_hexdigits()))})


@app.route('/validate', methods=['POST'])
def validate():
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'candidate' not in data:
        return bad_request('need candidate')
    try:
        candidate = int(data['candidate'], 16)
    except (TypeError, ValueError):
        return bad_request('bad hex')
    expected = mask_output(RNG.next_u32())
    ok = (candidate & ((1 << config.OUTPUT_BITS) - 1)) == expected
    return jsonify({'ok': ok, 'expected': format(expected, '0{}x'.format(output_hexdigits()))})


@app.route('/next_u64', methods=['GET'])
def next_u64():
    return jsonify({'output': format(RNG.next_u64(), '016x')})


@app.route('/bytes', methods=['GET'])
def random_bytes():
    n = request.args.get('n', type=int)
    if n is None:
        return bad_request('need integer n')
    if not 0 <= n <= config.MAX_BYTES:
        return bad_request(f'n must be in 0..{config.MAX_BYTES}')
    return jsonify({'bytes': RNG.random_bytes(n).hex()})


@app.route('/jump', methods=['POST'])
def jump():
    RNG.jump()
    logger.info("Jumped 2^64 steps ahead")
    return jsonify({'ok': True})


@app.route('/long_jump', methods=['POST'])
def long_jump():
    RNG.long_jump()
    logger.info("Jumped 2^96 steps ahead")
    return jsonify({'ok': True})


@app.route('/state', methods=['GET', 'POST'])
def state():
    global RNG
    if not config.ALLOW_STATE_ACCESS:
        return bad_request('state access disabled', 403)
    if request.method == 'GET':
        return jsonify(serde.state_to_dict(RNG))
    try:
        RNG = serde.state_from_dict(request.get_json(silent=True))
    except ValueError as e:
        return bad_request(str(e))
    logger.info(f"Restored {RNG.VARIANT} state from request")
    return jsonify({'ok': True})


if __name__ == '__main__':
    logger.info(f"Starting oracle at http://{config.HOST}:{config.PORT} with VARIANT={config.VARIANT} SEED_MODE={config.SEED_MODE}")
    app.run(host=config.HOST, port=config.PORT, debug=False)
