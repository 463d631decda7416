"""
css_var_colorizer
=================

Does: Root package initializer for the CSS variable colorizer.
Returns: Exposes the `colorize` subpackages (variables, color, highlight, utils)
         through a stable namespace.
Used by: Editor integrations and the `css-var-colorizer` CLI.
"""

__all__: list[str] = []
__docformat__ = "google"
