"""Primary keys are 26-character ULID strings, sortable by creation time."""

from ulid import ULID


def generate_ulid() -> str:
    return str(ULID())
