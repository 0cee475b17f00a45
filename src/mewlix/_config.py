"""Project metadata for compiled Mewlix programs"""

__all__ = ["ProjectMeta", "load_meta"]

import json
from dataclasses import dataclass
from pathlib import Path

import mewlix


@dataclass
class ProjectMeta:
    """Settings shipped next to a compiled project.

    Attributes:
        name: Display name of the project
        entrypoint: Module key of the yarn ball that starts the program
    """

    name: str = "mewlix"
    entrypoint: str = "main"


def load_meta(path: str | Path | None) -> ProjectMeta:
    """Read a project meta JSON file.

    Missing fields keep their defaults, unknown fields are ignored. Without
    a path the defaults are returned.

    Raises:
        MewlixError: BadConversion when the file isn't a JSON object or a
            field has the wrong type, ExternalError when it can't be read
    """
    if path is None:
        return ProjectMeta()

    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise mewlix.MewlixError(
            mewlix.ErrorCode.ExternalError,
            f"Cannot read project meta file {path}: {e}",
        ) from e

    try:
        data = json.loads(text)
    except ValueError as e:
        raise mewlix.MewlixError(
            mewlix.ErrorCode.BadConversion,
            f"Project meta file {path} isn't valid JSON: {e}",
        ) from e
    if not isinstance(data, dict):
        raise mewlix.MewlixError(
            mewlix.ErrorCode.BadConversion,
            f"Project meta file {path} must hold a JSON object",
        )

    meta = ProjectMeta()
    for field in ("name", "entrypoint"):
        if field not in data:
            continue
        value = data[field]
        if not isinstance(value, str) or not value:
            raise mewlix.MewlixError(
                mewlix.ErrorCode.BadConversion,
                f"Project meta field '{field}' must be a non-empty string",
            )
        setattr(meta, field, value)
    return meta
