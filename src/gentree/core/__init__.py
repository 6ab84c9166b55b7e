from __future__ import annotations

from .change_detector import content_changed, has_content
from .file_node import GeneratedFileNode
from .generators import (
    bytes_generator,
    file_copy_generator,
    json_generator,
    stream_generator,
    text_generator,
)
from .singleton_tree import GeneratedSingletonFileTree
from .visitors import ConcreteFileDetails, FileCollectingVisitor

__all__ = [
    "ConcreteFileDetails",
    "FileCollectingVisitor",
    "GeneratedFileNode",
    "GeneratedSingletonFileTree",
    "bytes_generator",
    "content_changed",
    "file_copy_generator",
    "has_content",
    "json_generator",
    "stream_generator",
    "text_generator",
]
