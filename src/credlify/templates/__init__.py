"""Bundled templates, classification and placeholder rendering."""

from credlify.templates.base import TemplateDescriptor, TemplateKind
from credlify.templates.loader import (
    CONFIG_TEMPLATE,
    TemplateDirectoryError,
    classify_template,
    get_package_templates_path,
    list_templates,
    read_template,
)
from credlify.templates.render import render_placeholders

__all__ = [
    "CONFIG_TEMPLATE",
    "TemplateDescriptor",
    "TemplateDirectoryError",
    "TemplateKind",
    "classify_template",
    "get_package_templates_path",
    "list_templates",
    "read_template",
    "render_placeholders",
]
