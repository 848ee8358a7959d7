"""Localized step descriptions.

Each catalog maps a message key to a ``str.format`` template.  ``bn`` keeps
the Bengali wording the visualizer was originally written with.
"""

from __future__ import annotations

from typing import Any

from .memory_types import Value

_EN: dict[str, str] = {
    "function": "function",
    "note": "note",
    "unknown_event": "unrecognized event: {tag}",
    "malformed_event": "malformed {tag} event ignored",
    "init_suffix": " = {value}",
    # instrumented-call-log (Clang)
    "clang.ast": (
        "Input is a Clang AST JSON. Deriving runtime steps from an AST "
        "requires instrumented events (e.g., -finstrument-functions or a "
        "custom log)."
    ),
    "clang.enter": "{fn} called; stack frame created",
    "clang.exit": "return from {fn}; stack frame removed",
    "clang.declare": "local variable {name} ({type}, {size} bytes) allocated @ {addr}{init}",
    "clang.set": "local {name} = {value}",
    "clang.malloc": "{size} bytes allocated on heap @ {addr} ({label})",
    "clang.free": "free({addr}); → block released",
    "clang.store_heap": "{count} bytes written to heap block {addr}",
    "clang.store_local": "stack local {name} @ {addr} updated",
    "clang.store": "store @ {addr}",
    "clang.output": 'printf → output "{text}"',
    # shim-event-log (WASM)
    "wasm.enter": "{fn} called",
    "wasm.exit": "{fn} returned",
    "wasm.declare": "local {name} ({type}) allocated @ {addr}{init}",
    "wasm.set": "local {name} = {value}",
    "wasm.malloc": "{size} bytes on heap @ {addr}",
    "wasm.free": "free({addr})",
    "wasm.store_mem": "heap @ {addr} [+{offset}] = {byte}",
    "wasm.output": "stdout ← {text}",
    # recipes
    "recipe.start": "main started",
    "recipe.local": "local {name} allocated",
    "recipe.heap": "heap allocated @ {addr}",
    "recipe.print": 'printf → "{text}"',
    "recipe.end": "return 0; program finished",
}

_BN: dict[str, str] = {
    "function": "function",
    "note": "নোট",
    "unknown_event": "অচেনা ইভেন্ট: {tag}",
    "malformed_event": "ত্রুটিপূর্ণ {tag} ইভেন্ট উপেক্ষা করা হলো",
    "init_suffix": " = {value}",
    "clang.ast": (
        "প্রাপ্ত ইনপুটটি Clang AST JSON। AST থেকে রানটাইম স্টেপ জেনারেট করতে "
        "ইন্সট্রুমেন্টেড ইভেন্ট প্রয়োজন (e.g., -finstrument-functions বা কাস্টম লগ)।"
    ),
    "clang.enter": "{fn} কল শুরু; স্ট্যাক ফ্রেম তৈরি হলো",
    "clang.exit": "{fn} থেকে রিটার্ন; স্ট্যাক ফ্রেম অপসারণ",
    "clang.declare": "লোকাল ভেরিয়েবল {name} ({type}, {size} bytes) বরাদ্দ @ {addr}{init}",
    "clang.set": "লোকাল {name} = {value}",
    "clang.malloc": "হিপে {size} বাইট বরাদ্দ @ {addr} ({label})",
    "clang.free": "free({addr}); → ব্লক মুক্ত",
    "clang.store_heap": "হিপ ব্লক {addr} তে {count} বাইট লেখা",
    "clang.store_local": "স্ট্যাকে {name} @ {addr} আপডেট",
    "clang.store": "store @ {addr}",
    "clang.output": 'printf → আউটপুটে "{text}"',
    "wasm.enter": "{fn} কল",
    "wasm.exit": "{fn} রিটার্ন",
    "wasm.declare": "লোকাল {name} ({type}) বরাদ্দ @ {addr}{init}",
    "wasm.set": "লোকাল {name} = {value}",
    "wasm.malloc": "হিপে {size} বাইট @ {addr}",
    "wasm.free": "free({addr})",
    "wasm.store_mem": "হিপ @ {addr} [+{offset}] = {byte}",
    "wasm.output": "stdout ← {text}",
    "recipe.start": "main শুরু",
    "recipe.local": "লোকাল {name} বরাদ্দ",
    "recipe.heap": "হিপ বরাদ্দ @ {addr}",
    "recipe.print": 'printf → "{text}"',
    "recipe.end": "return 0; প্রোগ্রাম শেষ",
}

CATALOGS: dict[str, dict[str, str]] = {"en": _EN, "bn": _BN}

SUPPORTED_LOCALES: tuple[str, ...] = tuple(CATALOGS.keys())


class Messages:
    """Renders description templates for one locale."""

    def __init__(self, locale: str):
        catalog = CATALOGS.get(locale)
        if catalog is None:
            raise ValueError(
                f"Unknown locale: {locale}. Available: {list(SUPPORTED_LOCALES)}"
            )
        self.locale = locale
        self._catalog = catalog

    def __call__(self, key: str, **kwargs: Any) -> str:
        return self._catalog[key].format(**kwargs)


def format_value(v: Value | Any) -> str:
    """Render a value the way the description strings show it."""
    if isinstance(v, (bytes, list, tuple)):
        return ",".join(str(x) for x in v)
    return str(v)


def escape_newlines(text: str) -> str:
    return text.replace("\n", "\\n")
