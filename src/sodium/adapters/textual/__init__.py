"""Textual terminal surface for the editor."""

from .controller import EditorController, Frame, Prompt, UIHooks, open_document

__all__ = ["EditorController", "Frame", "Prompt", "UIHooks", "open_document"]
