"""
Test data generators for JSON parsing benchmarks.

Builds documents shaped like the configuration and save files an embedding
application reads:
- flat settings objects and large level descriptions
- long arrays of mixed scalars
- deep trees of nested containers
- string tables full of escapes, including surrogate pairs
"""

import json
import random
import string
from typing import Any

_ESCAPE_PROBABILITY = 0.25
_SIMPLE_ESCAPES = ['\\"', "\\\\", "\\/", "\\b", "\\f", "\\n", "\\r", "\\t"]


def generate_test_data(data_type: str) -> str:
    """Generates JSON test data based on specified type."""
    generators = {
        "small_object": _generate_settings,
        "large_object": _generate_level,
        "mixed_array": _generate_mixed_array,
        "nested_structure": _generate_scene_tree,
        "string_heavy": _generate_string_table,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type]()


def _generate_settings() -> str:
    """Generates a small settings object (< 1KB)."""
    data = {
        "version": 3,
        "fullscreen": True,
        "resolution": [1920, 1080],
        "volume": {"master": 0.8, "music": 0.55, "effects": 1.0},
        "language": "en",
        "keybindings": {"jump": "space", "fire": "mouse1", "pause": "esc"},
        "last_save": None,
    }
    return json.dumps(data)


def _generate_level() -> str:
    """Generates a large level description (> 10KB)."""
    data = {
        "name": _random_word(12),
        "seed": random.randint(0, 2**31 - 1),
        "tiles": [
            [random.randint(0, 15) for _ in range(32)] for _ in range(24)
        ],
        "entities": [
            {
                "id": i,
                "kind": random.choice(["crate", "enemy", "door", "pickup"]),
                "position": [
                    round(random.uniform(0, 512), 2),
                    round(random.uniform(0, 384), 2),
                ],
                "health": random.randint(1, 100),
                "solid": random.choice([True, False]),
                "script": None if i % 3 else f"on_touch_{_random_word(6)}",
            }
            for i in range(80)
        ],
    }
    return json.dumps(data)


def _generate_mixed_array() -> str:
    """Generates a large array with every scalar variant."""
    choices = [
        lambda: random.randint(-(10**6), 10**6),
        lambda: random.uniform(-1e3, 1e3),
        lambda: random.uniform(-1.0, 1.0) * 10 ** random.randint(-20, 20),
        lambda: _random_word(random.randint(1, 24)),
        lambda: random.choice([True, False]),
        lambda: None,
    ]
    array: list[Any] = [random.choice(choices)() for _ in range(400)]
    return json.dumps(array)


def _generate_scene_tree() -> str:
    """Generates a deeply nested scene graph."""

    def node(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"mesh": _random_word(8), "visible": True}

        return {
            "name": _random_word(10),
            "transform": [round(random.random(), 4) for _ in range(3)],
            "children": [node(depth - 1) for _ in range(2)],
        }

    return json.dumps(node(9))


def _generate_string_table() -> str:
    """Generates localized strings heavy in escape sequences."""

    def escaped_line() -> str:
        parts = []
        for _ in range(60):
            if random.random() < _ESCAPE_PROBABILITY:
                parts.append(random.choice(_SIMPLE_ESCAPES))
            else:
                parts.append(random.choice(string.ascii_letters + " .,!?"))
        return "".join(parts)

    lines = {f"line_{i:04d}": escaped_line() for i in range(150)}
    # json.dumps with ensure_ascii writes non-BMP characters as surrogate pairs
    glyph = (
        "\N{GRINNING FACE} \N{CROSSED SWORDS} "
        "caf\N{LATIN SMALL LETTER E WITH ACUTE}"
    )
    glyphs = json.dumps([glyph] * 50)
    body = ", ".join(f'"{key}": "{value}"' for key, value in lines.items())
    return f'{{{body}, "glyphs": {glyphs}}}'


def _random_word(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
