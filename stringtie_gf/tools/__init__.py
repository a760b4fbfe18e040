"""Wrappers for external tools."""

from .base import Tool, ToolSpec
from .stringtie import STRINGTIE_TEMPLATE, StringtieConfig, StringtieTool, TemplateParam

__all__ = [
    "Tool",
    "ToolSpec",
    "StringtieConfig",
    "StringtieTool",
    "TemplateParam",
    "STRINGTIE_TEMPLATE",
]
