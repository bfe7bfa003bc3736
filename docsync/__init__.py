"""Offset-preserving DocBook-style markup parsing with editor/preview sync."""

from .config import DocSyncConfig, load_config
from .offset_index import OffsetIndex
from .parser import parse_document
from .patcher import apply_text_edit, escape_markup, resolve_focus_intent
from .session import DocumentSession
from .sync import SyncController
from .tokenizer import Token, tokenize
from .tree_model import Node, ParseResult, TextRun

__all__ = [
    "DocSyncConfig",
    "DocumentSession",
    "Node",
    "OffsetIndex",
    "ParseResult",
    "SyncController",
    "TextRun",
    "Token",
    "apply_text_edit",
    "escape_markup",
    "load_config",
    "parse_document",
    "resolve_focus_intent",
    "tokenize",
]
