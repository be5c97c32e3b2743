"""Lightweight request payload validation.

Minimal schema-like checking with consistent error responses; not a general
JSON Schema implementation.

Schema Mini-Language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types: 'str', 'int', 'seed' (int or str)
Extras: min/max (int), min_len/max_len (str)

If invalid: (False, {'field': 'max_y', 'error': 'expected int', 'code': 'type'})
If valid: (True, normalized_data)
"""
from __future__ import annotations

from typing import Any, Dict, Tuple

PRIMITIVES = {
    'str': (str,),
    'int': (int,),
    'seed': (int, str),
}


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {'field': field, 'error': message, 'code': code}


def validate(payload: Any, schema: Dict[str, tuple]) -> Tuple[bool, Dict[str, Any]]:
    if not isinstance(payload, dict):
        return _fail('__root__', 'payload must be an object', 'type')
    unknown = sorted(set(payload) - set(schema))
    if unknown:
        return _fail(unknown[0], 'unknown field', 'unknown')
    out = {}
    for name, spec in schema.items():
        type_name, required = spec[0], spec[1]
        extras = spec[2] if len(spec) > 2 else {}
        if type_name not in PRIMITIVES:
            return _fail('__schema__', f'unsupported type {type_name}', 'schema')
        if name not in payload or payload[name] is None:
            if required:
                return _fail(name, 'missing required field', 'required')
            continue
        value = payload[name]
        # bool is an int subclass; never accept it as a number
        if isinstance(value, bool) or not isinstance(value, PRIMITIVES[type_name]):
            return _fail(name, f'expected {type_name}', 'type')
        if isinstance(value, int):
            if 'min' in extras and value < extras['min']:
                return _fail(name, f'must be >= {extras["min"]}', 'min')
            if 'max' in extras and value > extras['max']:
                return _fail(name, f'must be <= {extras["max"]}', 'max')
        else:
            s = value.strip()
            if 'max_len' in extras and len(s) > extras['max_len']:
                return _fail(name, 'too long', 'max_len')
            if 'min_len' in extras and len(s) < extras['min_len']:
                return _fail(name, 'too short', 'min_len')
            value = s
        out[name] = value
    return True, out


# Coordinates accepted from requests; grid size is capped separately by LayoutConfig.validate
COORD_LIMIT = 1_000_000
_COORD = {'min': -COORD_LIMIT, 'max': COORD_LIMIT}

# Predefined schemas used by handlers
GENERATE_LAYOUT = {
    'seed': ('seed', False, {'max_len': 128}),
    'move_amount': ('int', False, {'min': 1, 'max': COORD_LIMIT}),
    'min_y': ('int', False, _COORD),
    'max_y': ('int', False, _COORD),
    'max_x': ('int', False, _COORD),
    'start_x': ('int', False, _COORD),
}
