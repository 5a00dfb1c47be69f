"""Seed management API routes.

Lets a client pick (or randomize) the dungeon seed used by the map endpoints
for the rest of its session.
"""
import hashlib
import random

from flask import Blueprint, jsonify, request, session

bp_seed = Blueprint('seed_api', __name__)

SEED_MAX = 2**63 - 1


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into a bounded non-negative int.

    Numeric strings are parsed, other strings hash deterministically, missing
    or blank values produce a fresh random seed.
    """
    if payload_seed is None or isinstance(payload_seed, bool):
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % SEED_MAX
        h = hashlib.sha256(s.encode('utf-8')).digest()
        return int.from_bytes(h[:8], 'big') % SEED_MAX
    return random.randint(1, 1_000_000)


@bp_seed.route('/api/dungeon/seed', methods=['POST'])
def set_seed():
    """Set (or generate) the session's dungeon seed.

    Body JSON (all optional):
      { "seed": <int|str|null>, "regenerate": <bool> }
    - If seed omitted or null and regenerate true => random seed.
    - If seed provided (int or string) => deterministic hashing.

    Response: { "seed": <int> }
    """
    data = request.get_json(silent=True) or {}
    regenerate = data.get('regenerate')
    provided = data.get('seed', None)
    if regenerate and provided is None:
        seed = _coerce_seed(None)
    else:
        seed = _coerce_seed(provided)
    session['dungeon_seed'] = seed
    return jsonify({"seed": seed})


@bp_seed.route('/api/dungeon/seed', methods=['GET'])
def get_seed():
    return jsonify({"seed": session.get('dungeon_seed')})
