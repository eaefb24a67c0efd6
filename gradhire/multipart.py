"""multipart/form-data body builder (RFC 2388 framing)."""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Callable, Sequence, Union

from gradhire.errors import EncodingError
from gradhire.files import ResumeFile, read_bytes

CRLF = b"\r\n"

# Part data is either bytes already in memory, text, a file to read, or a
# zero-argument callable producing bytes.
PartData = Union[bytes, str, ResumeFile, Callable[[], bytes]]


@dataclass(frozen=True)
class Part:
    name: str
    data: PartData
    filename: str | None = None
    content_type: str | None = None

    def payload(self) -> bytes:
        data = self.data
        if isinstance(data, bytes):
            return data
        if isinstance(data, str):
            return data.encode("utf-8")
        if isinstance(data, ResumeFile):
            return read_bytes(data)
        try:
            result = data()
        except EncodingError:
            raise
        except Exception as exc:
            raise EncodingError(f"Could not read data for part {self.name!r}") from exc
        if not isinstance(result, bytes):
            raise EncodingError(f"Data for part {self.name!r} is not bytes")
        return result


def file_part(name: str, ref: ResumeFile, content_type: str = "application/pdf") -> Part:
    return Part(name=name, data=ref, filename=ref.filename, content_type=content_type)


def field_part(name: str, value: str) -> Part:
    return Part(name=name, data=value)


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def encode(parts: Sequence[Part], boundary: str | None = None) -> tuple[bytes, str]:
    """Serialize parts in order; returns (body, boundary).

    Raises EncodingError if any part's data cannot be produced. Nothing is
    returned in that case, so a truncated body never reaches the wire.
    """
    boundary = boundary or uuid.uuid4().hex
    delimiter = f"--{boundary}".encode("ascii")
    chunks: list[bytes] = []
    for part in parts:
        disposition = f'Content-Disposition: form-data; name="{_quote(part.name)}"'
        if part.filename is not None:
            disposition += f'; filename="{_quote(part.filename)}"'
        chunks.append(delimiter + CRLF)
        chunks.append(disposition.encode("utf-8") + CRLF)
        if part.content_type:
            chunks.append(f"Content-Type: {part.content_type}".encode("ascii") + CRLF)
        chunks.append(CRLF)
        chunks.append(part.payload() + CRLF)
    chunks.append(delimiter + b"--" + CRLF)
    return b"".join(chunks), boundary


def content_type_header(boundary: str) -> str:
    return f"multipart/form-data; boundary={boundary}"
