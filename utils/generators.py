import uuid
from pathlib import PurePath


def generate_id() -> str:
    """Generate a random 128-bit (UUID4) identifier"""
    return str(uuid.uuid4())


def generate_image_name(original_filename: str) -> str:
    """
    Build a stored file name from a fresh identifier and the client's extension.

    Only the extension of the original name is kept, so directory parts or
    other characters in client file names never reach the filesystem.
    """
    # Browsers may send Windows-style paths as the file name
    suffix = PurePath(original_filename.replace("\\", "/")).suffix
    return f"{generate_id()}{suffix}"
