# foliopress/templatetags/markdown_tags.py

from django import template
from django.utils.safestring import mark_safe

from foliopress.markdown.preview import render_preview
from foliopress.markdown.renderer import render_markdown_sync
from foliopress.markdown.toc import extract_toc

register = template.Library()


@register.filter(name="markdoc")
def markdoc_filter(value):
    return mark_safe(render_markdown_sync(value or ""))


@register.filter(name="markdoc_preview")
def markdoc_preview_filter(value):
    """Render markup for the editor preview (custom tags shown as placeholders)"""
    return mark_safe(render_preview(value or ""))


@register.simple_tag
def toc(html):
    """Template tag returning the h2/h3 outline of rendered HTML"""
    return extract_toc(str(html or ""))
