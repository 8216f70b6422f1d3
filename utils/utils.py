import uuid


def clamp(value, floor=None, ceiling=None):
    """Constrain value to [floor, ceiling]; a bound of None is left open."""
    if floor is not None and value < floor:
        return floor
    if ceiling is not None and value > ceiling:
        return ceiling
    return value


def generate_char_id(prefix="char"):
    """Generate a unique, opaque character ID."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"
