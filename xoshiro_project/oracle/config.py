# oracle/config.py
# Configuration for the oracle (xoshiro128 service)

# Network config
HOST = '127.0.0.1'
PORT = 5000

# Generator variant: 'plus' (xoshiro128+) or 'starstar' (xoshiro128**)
VARIANT = 'starstar'

# Seed configuration:
# - SEED_MODE:
#     'fixed'  : use the 64-bit integer in SEED (if SEED is None, falls back to deterministic constant)
#     'random' : use os.urandom(8) at startup (non-deterministic each run)
#     'time'   : use current unix time (int(time.time())) as seed - low entropy (for demo)
# The seed is expanded to the 128-bit state with SplitMix64.
SEED_MODE = 'fixed'   # 'fixed' | 'random' | 'time'

# If SEED_MODE == 'fixed', use this SEED (64-bit integer).
# If None, a default deterministic 64-bit constant will be used.
SEED = 0x1234567890ABCDEF  # or None

# If SEED_MODE == 'time', this controls whether we use seconds or milliseconds.
# 's' -> int(time.time()), 'ms' -> int(time.time() * 1000)
TIME_GRANULARITY = 's'  # 's' or 'ms'

# How many bits the oracle reveals on each /get_output call (1..32)
OUTPUT_BITS = 32
OUTPUT_SELECT = 'high'   # 'high' or 'low'

# Expose GET/POST /state (raw generator state). Off unless debugging.
ALLOW_STATE_ACCESS = False

# Upper bound for GET /bytes?n=
MAX_BYTES = 4096

# Logging level
LOG_LEVEL = 'INFO'
