"""Textual host adapter for the editing core."""

from .controller import (
    TextualEditAdapter,
    TextualUIHooks,
    ViewFrame,
    decode_key,
)

__all__ = ["TextualEditAdapter", "TextualUIHooks", "ViewFrame", "decode_key"]
