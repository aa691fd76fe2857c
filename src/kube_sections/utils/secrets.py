"""Content classification for Secret and ConfigMap payloads.

Each entry is classified along three axes, in this order:

1. Decodability: values that are not valid base64 are binary.
2. Printability: payloads with a NUL byte, or where more than 10% of the
   first 1000 characters are control characters (other than tab, newline
   and carriage return), are binary.
3. Shape: text containing a newline is multiline, anything else single-line.

Sensitivity is independent of content: every key is sensitive unless it
follows a well-known public naming convention such as certificates. ConfigMap
keys are never sensitive.

All functions here are pure. Decoded values are wrapped in ``SecretStr``
as soon as they leave this module and are never logged.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from typing import Any

from pydantic import SecretStr

from kube_sections.models.sections import SecretContent, SecretEntry

BINARY_SAMPLE_SIZE = 1000
BINARY_CONTROL_RATIO = 0.1
MASK = "•" * 16

_ALLOWED_CONTROL_CHARS = frozenset("\t\n\r")
_PUBLIC_KEY_SUFFIXES = (".crt", ".pem")
_PUBLIC_KEYS = frozenset({"ca.crt", "tls.crt", "namespace"})


def decode_base64(encoded: str) -> bytes | None:
    """Strictly decode a base64 value, returning None when it is not valid base64."""
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        return None


def bytes_to_text(raw: bytes) -> str:
    """Decode bytes as UTF-8, falling back to Latin-1 which accepts any byte."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def is_binary_text(text: str) -> bool:
    """Check whether sampled text has too many control characters to be shown."""
    if "\x00" in text:
        return True
    sample = text[:BINARY_SAMPLE_SIZE]
    if not sample:
        return False
    control = sum(1 for ch in sample if ord(ch) < 32 and ch not in _ALLOWED_CONTROL_CHARS)
    return control > len(sample) * BINARY_CONTROL_RATIO


def is_sensitive_key(key: str) -> bool:
    """Check whether a key should be masked by default."""
    if key in _PUBLIC_KEYS:
        return False
    return not key.endswith(_PUBLIC_KEY_SUFFIXES)


def classify_content(raw: bytes | None) -> tuple[SecretContent, str | None]:
    """Classify decoded bytes and return the content kind with its text, if any."""
    if raw is None or b"\x00" in raw:
        return "binary", None
    text = bytes_to_text(raw)
    if is_binary_text(text):
        return "binary", None
    if "\n" in text:
        return "multiline", text
    return "single-line", text


def classify_entry(key: str, raw: bytes | None) -> SecretEntry:
    """Classify one Secret key given its decoded bytes (None when undecodable)."""
    content, text = classify_content(raw)
    return SecretEntry(
        key=key,
        content=content,
        sensitive=is_sensitive_key(key),
        value=SecretStr(text) if text is not None else None,
    )


def classify_secret_data(
    data: dict[str, str] | None,
    string_data: dict[str, str] | None = None,
) -> list[SecretEntry]:
    """Classify every key of a Secret's ``data`` and ``stringData``.

    Keys keep their order of first appearance, ``data`` first. When a key is
    present in both, a non-empty ``data`` value wins. ``stringData`` values
    are plaintext and are not base64-decoded.
    """
    data = data or {}
    string_data = string_data or {}

    entries = []
    for key in dict.fromkeys([*data, *string_data]):
        encoded = data.get(key)
        if encoded:
            raw = decode_base64(encoded)
        elif key in string_data:
            raw = (string_data[key] or "").encode("utf-8")
        else:
            raw = b""
        entries.append(classify_entry(key, raw))
    return entries


def classify_config_map_data(
    data: dict[str, Any] | None,
    binary_data: dict[str, str] | None = None,
) -> list[SecretEntry]:
    """Classify every key of a ConfigMap's ``data`` and ``binaryData``.

    ``data`` values are plaintext and skip the decodability check.
    ``binaryData`` keys are always binary. No entry is sensitive.
    """
    entries = []
    for key, value in (data or {}).items():
        if not isinstance(value, str):
            value = "" if value is None else str(value)
        content, text = classify_content(value.encode("utf-8"))
        entries.append(
            SecretEntry(
                key=key,
                content=content,
                sensitive=False,
                value=SecretStr(text) if text is not None else None,
            )
        )
    entries.extend(
        SecretEntry(key=key, content="binary", sensitive=False) for key in binary_data or {}
    )
    return entries


@dataclass
class SecretViewState:
    """Caller-owned reveal/expand toggles for Secret entries, keyed by entry key.

    Expanding and revealing are independent: a multiline entry can be
    expanded while its value stays masked.
    """

    revealed: set[str] = field(default_factory=set)
    expanded: set[str] = field(default_factory=set)

    def toggle_reveal(self, key: str) -> bool:
        """Flip the reveal state of an entry and return the new state."""
        if key in self.revealed:
            self.revealed.discard(key)
            return False
        self.revealed.add(key)
        return True

    def toggle_expand(self, key: str) -> bool:
        """Flip the expand state of an entry and return the new state."""
        if key in self.expanded:
            self.expanded.discard(key)
            return False
        self.expanded.add(key)
        return True

    def is_masked(self, entry: SecretEntry) -> bool:
        return entry.masked_by_default and entry.key not in self.revealed

    def is_collapsed(self, entry: SecretEntry) -> bool:
        return entry.collapsed_by_default and entry.key not in self.expanded

    def display_value(self, entry: SecretEntry) -> str | None:
        """Return the text to display for an entry.

        None means nothing is shown: binary entries, or collapsed multiline ones.
        """
        if entry.value is None or self.is_collapsed(entry):
            return None
        if self.is_masked(entry):
            return MASK
        return entry.value.get_secret_value()
