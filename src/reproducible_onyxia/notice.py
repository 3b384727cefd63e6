"""HTML notice fragment for the launch button.

Three variants share one anchor:

- ``full``: wrapper div, bold title, button and metadata line
- ``minimal``: wrapper div, button and metadata line
- ``button-only``: the bare anchor

All styling is inline so the fragment does not depend on any stylesheet.
"""

from __future__ import annotations

import html

from reproducible_onyxia.resolved import ResolvedConfig
from reproducible_onyxia.tiers import NoticeStyle

METADATA_SEPARATOR = " • "


def _text(value: str) -> str:
    return html.escape(value, quote=False)


def _attr(value: str) -> str:
    return html.escape(value, quote=True)


def _href(url: str) -> str:
    # Keep "&" literal so the rendered href matches the URL byte-for-byte.
    return url.replace('"', "&quot;").replace("<", "&lt;").replace(">", "&gt;")


def metadata_line(resolved: ResolvedConfig) -> str:
    parts = [resolved.tier_label]
    if resolved.show_runtime:
        parts.append(f"Est. runtime: {resolved.estimated_runtime}")
    parts.append(f"Auto-expires: {resolved.session_duration}")
    return METADATA_SEPARATOR.join(parts)


def _button_style(resolved: ResolvedConfig) -> str:
    return (
        f"background: {resolved.primary_color}; color: #ffffff; padding: 8px 18px; "
        "border-radius: 4px; text-decoration: none; font-weight: 600; display: inline-block;"
    )


def _anchor(url: str, resolved: ResolvedConfig, *, css_class: str | None = None) -> str:
    class_attr = f' class="{_attr(css_class)}"' if css_class else ""
    return (
        f'<a{class_attr} href="{_href(url)}" target="_blank" rel="noopener noreferrer" '
        f'style="{_attr(_button_style(resolved))}">{_text(resolved.button_text)}</a>'
    )


def _wrapper_style(resolved: ResolvedConfig) -> str:
    return (
        f"border-left: 4px solid {resolved.primary_color}; "
        f"background: {resolved.background_color}; color: {resolved.text_color}; "
        "padding: 14px 18px; margin: 20px 0; border-radius: 4px;"
    )


def _action_row(url: str, resolved: ResolvedConfig) -> str:
    meta_style = f"color: {resolved.text_color}; font-size: 0.9em;"
    return "\n".join(
        [
            '  <div style="display: flex; align-items: center; flex-wrap: wrap; gap: 12px;">',
            f"    {_anchor(url, resolved)}",
            f'    <span style="{_attr(meta_style)}">{_text(metadata_line(resolved))}</span>',
            "  </div>",
        ]
    )


def _render_button_only(url: str, resolved: ResolvedConfig) -> str:
    return _anchor(url, resolved, css_class="reproducible-button") + "\n"


def _render_wrapped(url: str, resolved: ResolvedConfig, *, with_title: bool) -> str:
    style_name = NoticeStyle.FULL.value if with_title else NoticeStyle.MINIMAL.value
    lines = [
        f'<div class="reproducible-notice {style_name}" '
        f'style="{_attr(_wrapper_style(resolved))}">',
    ]
    if with_title:
        title_style = f"display: block; margin-bottom: 8px; color: {resolved.text_color};"
        lines.append(
            f'  <strong style="{_attr(title_style)}">{_text(resolved.notice_title)}</strong>'
        )
    lines.append(_action_row(url, resolved))
    lines.append("</div>")
    return "\n".join(lines) + "\n"


def render_notice(url: str, resolved: ResolvedConfig) -> str:
    if resolved.notice_style is NoticeStyle.BUTTON_ONLY:
        return _render_button_only(url, resolved)
    if resolved.notice_style is NoticeStyle.MINIMAL:
        return _render_wrapped(url, resolved, with_title=False)
    return _render_wrapped(url, resolved, with_title=True)
