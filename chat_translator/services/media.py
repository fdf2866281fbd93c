"""Resolution of chat media paths under the uploads directory."""

from pathlib import Path
from typing import Union

from chat_translator.core.exceptions import InvalidMediaPathError, MediaNotFoundError


def resolve_media_path(uploads_dir: Union[str, Path], relative_path: str) -> Path:
    """
    Resolve `relative_path` inside `uploads_dir`.

    Raises:
        InvalidMediaPathError: empty path, or one that resolves outside the
            uploads directory
        MediaNotFoundError: the file does not exist
    """
    if not relative_path or not relative_path.strip():
        raise InvalidMediaPathError(relative_path or "")

    root = Path(uploads_dir).resolve()
    candidate = (root / relative_path).resolve()
    if root != candidate and root not in candidate.parents:
        raise InvalidMediaPathError(relative_path)

    if not candidate.is_file():
        raise MediaNotFoundError(relative_path)
    return candidate
