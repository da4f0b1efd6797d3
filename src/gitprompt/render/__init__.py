"""gitprompt rendering.

Formats an aggregated Status into a single prompt line according to an
immutable RenderConfig.
"""

from gitprompt.render._color import escape, paint
from gitprompt.render._renderer import render

__all__ = ["escape", "paint", "render"]
