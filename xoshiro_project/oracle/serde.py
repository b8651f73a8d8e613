# oracle/serde.py
# Structured (de)serialization of a generator's raw 4-word state.
# Payload: {'variant': 'plus' | 'starstar', 's': [w0, w1, w2, w3]}

import json

from xoshiro_project.oracle.rng128 import get_variant
from xoshiro_project.oracle.transition import MASK32


def state_to_dict(rng):
    return {'variant': rng.VARIANT, 's': list(rng.s)}


def state_from_dict(payload):
    if not isinstance(payload, dict):
        raise ValueError("state payload must be an object")
    if 'variant' not in payload or 's' not in payload:
        raise ValueError("state payload needs 'variant' and 's'")
    cls = get_variant(payload['variant'])
    words = payload['s']
    if not isinstance(words, (list, tuple)) or len(words) != 4:
        raise ValueError("'s' must be a list of 4 words")
    for w in words:
        # bool is an int subclass; reject it explicitly
        if isinstance(w, bool) or not isinstance(w, int) or not 0 <= w <= MASK32:
            raise ValueError(f"state word {w!r} is not an unsigned 32-bit integer")
    return cls.from_state(words)


def dumps(rng):
    return json.dumps(state_to_dict(rng))


def loads(text):
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"bad state JSON: {e}") from e
    return state_from_dict(payload)
