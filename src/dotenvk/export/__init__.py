"""Export renderers."""

from .renderers import RENDERERS, render, render_bash, render_json, shell_escape

__all__ = ["RENDERERS", "render", "render_bash", "render_json", "shell_escape"]
