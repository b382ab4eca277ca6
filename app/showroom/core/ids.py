import uuid


def parse_uuid(value) -> uuid.UUID | None:
    """Parse an opaque id from a request; ``None`` when it is not a UUID."""
    if value is None or isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None
