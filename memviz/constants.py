"""Named constants — eliminates magic strings across the codebase."""

from __future__ import annotations

# Stack grows downward from STACK_TOP, heap grows upward from HEAP_BASE.
STACK_TOP = 0x7FFFE000
HEAP_BASE = 0x10000000

MIN_SLOT_SIZE = 4
ADDRESS_HEX_WIDTH = 8
DEFAULT_LOCAL_SIZE = 4
DEFAULT_MALLOC_SIZE = 4
MAX_HEAP_BLOCK_SIZE = 1 << 16

CLANG_DEFAULT_VTYPE = "int"
WASM_DEFAULT_VTYPE = "i32"
RECIPE_DEFAULT_VTYPE = "int"

DEFAULT_FRAME_NAME = "func"
MAIN_FRAME_NAME = "main"

MALLOC_LABEL = "malloc"
FREED_LABEL = "freed"
RECIPE_HEAP_LABEL = "malloc(int[n])"

CHAR_TYPE_PREFIX = "char"

# Clang AST JSON root marker (clang -Xclang -ast-dump=json)
AST_KIND_FIELD = "kind"
AST_ROOT_KIND = "TranslationUnitDecl"

CLANG_TAG_FIELD = "type"
WASM_TAG_FIELD = "kind"
EVENTS_FIELD = "events"

MISSING_TAG = "<missing>"

DEFAULT_LOCALE = "en"
