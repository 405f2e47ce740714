from io import BytesIO
from os import PathLike

import magic

DEFAULT_MIME = "application/octet-stream"

# libmagic builds disagree on the BMP mime type
MIME_ALIASES: dict[str, str] = {
    "image/x-ms-bmp": "image/bmp",
    "image/x-bmp": "image/bmp",
    "image/jpg": "image/jpeg",
    "image/pjpeg": "image/jpeg",
}


def normalize_mime(file_type: str | None) -> str | None:
    if not file_type:
        return file_type
    file_type = file_type.split(";", 1)[0].strip().lower()
    return MIME_ALIASES.get(file_type, file_type)


def determine_mime(bytes_io: BytesIO, file_type: str | None = None) -> str:
    if not file_type:
        _ = bytes_io.seek(0)
        # Create a Magic object
        mime = magic.Magic(mime=True)

        # Determine the file type
        file_type = mime.from_buffer(bytes_io.getvalue())
        if not file_type:
            file_type = DEFAULT_MIME
    return normalize_mime(file_type) or DEFAULT_MIME


def determine_file_mime(path: str | PathLike[str]) -> str:
    mime = magic.Magic(mime=True)
    file_type = mime.from_file(str(path))
    if not file_type:
        file_type = DEFAULT_MIME
    return normalize_mime(file_type) or DEFAULT_MIME
