"""
Core application components.

Import ``core.application`` explicitly for the window; the input handler
can be used on its own without an OpenGL context.
"""

from .input_handler import InputHandler

__all__ = ["InputHandler"]
