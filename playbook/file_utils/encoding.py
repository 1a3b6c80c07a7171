from typing import IO, Optional, Tuple, Union

import chardet

from playbook.errors import SourceUnavailableError

ENCODE_REC_THRESHOLD = 0.8

# Encodings tried in order when detection is not confident. Playbooks are exported from word
# processors on Windows and macOS; latin-1 decodes anything so it comes last.
# UTF-16 is not tried, it decodes most even-length byte strings.
COMMON_ENCODINGS = [
    "utf_8",
    "cp1252",
    "mac_roman",
    "iso_8859_1",
]


def format_encoding_str(encoding: str) -> str:
    """Format input encoding string (e.g., `utf-8`, `iso-8859-1`, etc).
    Parameters
    ----------
    encoding
        The encoding string to be formatted (e.g., `UTF-8`, `utf_8`, `ISO-8859-1`, `iso_8859_1`,
        etc).
    """
    return encoding.lower().replace("_", "-")


def _read_bytes(filename: str = "", file: Optional[Union[bytes, IO[bytes]]] = None) -> bytes:
    if filename:
        try:
            with open(filename, "rb") as f:
                return f.read()
        except OSError as error:
            raise SourceUnavailableError(filename, reason=error.strerror or str(error)) from error
    if isinstance(file, bytes):
        return file
    if file is not None:
        file.seek(0)
        return file.read()
    raise SourceUnavailableError("", reason="no filename nor file were specified")


def detect_file_encoding(
    filename: str = "",
    file: Optional[Union[bytes, IO[bytes]]] = None,
) -> Tuple[str, str]:
    byte_data = _read_bytes(filename=filename, file=file)

    result = chardet.detect(byte_data)
    encoding = result["encoding"]
    confidence = result["confidence"] or 0.0

    if encoding is None or confidence < ENCODE_REC_THRESHOLD:
        # Encoding detection failed, fallback to predefined encodings
        for enc in COMMON_ENCODINGS:
            try:
                file_text = byte_data.decode(enc)
                encoding = enc
                break
            except (UnicodeDecodeError, UnicodeError):
                continue
        else:
            raise SourceUnavailableError(
                filename,
                reason="unable to determine the encoding of the file",
            )
    else:
        try:
            file_text = byte_data.decode(encoding)
        except (UnicodeDecodeError, UnicodeError, LookupError) as error:
            raise SourceUnavailableError(
                filename,
                reason=f"detected {encoding!r} but decode failed",
            ) from error

    return format_encoding_str(encoding), file_text


def read_txt_file(
    filename: str = "",
    file: Optional[Union[bytes, IO[bytes]]] = None,
    encoding: Optional[str] = None,
) -> Tuple[str, str]:
    """Reads a playbook source and returns its encoding and text.

    Raises `SourceUnavailableError` when the source cannot be opened or decoded.
    """
    if not encoding:
        return detect_file_encoding(filename=filename, file=file)

    formatted_encoding = format_encoding_str(encoding)
    byte_data = _read_bytes(filename=filename, file=file)
    try:
        file_text = byte_data.decode(formatted_encoding)
    except (UnicodeDecodeError, UnicodeError, LookupError) as error:
        raise SourceUnavailableError(
            filename, reason=f"cannot decode as {formatted_encoding}"
        ) from error

    return formatted_encoding, file_text
