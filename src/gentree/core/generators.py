from __future__ import annotations

"""
Content Generator Factories.

Ready-made generator callables for the common kinds of generated files.
JSON output is stable (indentation, sorted keys, ASCII escaping) so that
identical data always yields identical bytes and write avoidance applies.
"""

import json
from typing import Any, BinaryIO, List

from gentree.domain.tree_models import ContentGenerator

DEFAULT_CHUNK_SIZE = 64 * 1024


def bytes_generator(data: bytes) -> ContentGenerator:
    payload = bytes(data)

    def _generate(sink: BinaryIO) -> None:
        sink.write(payload)

    return _generate


def text_generator(text: str, encoding: str = "utf-8") -> ContentGenerator:
    return bytes_generator(text.encode(encoding))


def json_generator(obj: Any) -> ContentGenerator:
    """
    Serialize 'obj' as a diff-friendly JSON document.

    Serialization happens on every invocation, so later mutations of 'obj'
    are reflected in the next resolution.
    """
    def _generate(sink: BinaryIO) -> None:
        text = json.dumps(obj, indent=2, sort_keys=True, ensure_ascii=True) + "\n"
        sink.write(text.encode("utf-8"))

    return _generate


def file_copy_generator(source_path: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> ContentGenerator:
    """
    Stream the bytes of an existing file into the sink.

    Args:
        source_path: File whose content is reproduced.
        chunk_size: Read block size in bytes.

    Returns:
        ContentGenerator: Generator raising OSError when the source is unreadable.
    """
    def _generate(sink: BinaryIO) -> None:
        with open(source_path, "rb") as src:
            for chunk in iter(lambda: src.read(chunk_size), b""):
                sink.write(chunk)

    return _generate


def stream_generator(stream: BinaryIO) -> ContentGenerator:
    """
    Generator over a one-shot stream (e.g. stdin).

    The stream is drained on first use and the captured bytes are replayed
    on later invocations, since each visit may call the generator again.
    """
    captured: List[bytes] = []

    def _generate(sink: BinaryIO) -> None:
        if not captured:
            captured.append(stream.read())
        sink.write(captured[0])

    return _generate
