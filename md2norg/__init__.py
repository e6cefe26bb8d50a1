"""
md2norg — batch Markdown (and Obsidian) to Neorg converter.
"""

__version__ = "0.1.0"
