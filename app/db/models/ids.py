import uuid


def new_id() -> str:
    """Opaque string primary key for new rows."""
    return str(uuid.uuid4())
