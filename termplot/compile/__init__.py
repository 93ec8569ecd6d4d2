from .text import compile_text

__all__ = ["compile_text"]
