# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Transform adapters wrapping the style, script, document and icon compilers."""

from __future__ import annotations

from .base import (
    CompiledScript,
    CompiledStyle,
    DocumentTransform,
    ScriptOptions,
    ScriptTransform,
    StyleTransform,
    Translate,
    TransformSuite,
    no_translation,
)
from .documents import MarkdownDocumentTransform
from .icons import build_sprite
from .polyfill import build_polyfill
from .scripts import EsbuildScriptTransform, clean_bundle, is_declaration_file
from .styles import SassStyleTransform, node_include_paths
from .translations import TranslationCatalog, replace_translation_keys

__all__ = [
    "CompiledScript",
    "CompiledStyle",
    "DocumentTransform",
    "EsbuildScriptTransform",
    "MarkdownDocumentTransform",
    "SassStyleTransform",
    "ScriptOptions",
    "ScriptTransform",
    "StyleTransform",
    "Translate",
    "TransformSuite",
    "TranslationCatalog",
    "build_polyfill",
    "build_sprite",
    "clean_bundle",
    "is_declaration_file",
    "no_translation",
    "node_include_paths",
    "replace_translation_keys",
]
