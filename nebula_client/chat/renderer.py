"""
Message renderer.

Turns chat events into HTML fragments for the transcript QTextBrowser.
Every function here is pure; appending and scrolling is left to the widget.
"""

import html
from enum import Enum

from nebula_common.constants import COMPACT_MAX_LENGTH, NARROW_MAX_LENGTH, MEDIUM_MAX_LENGTH
from nebula_common.protocol_definitions import ChatPayload, StructuredMessage


class BubbleWidth(Enum):
    """Bubble width band, valued by the table width used in the transcript."""
    COMPACT = ''  # shrink to content
    NARROW = '65%'
    MEDIUM = '75%'
    WIDE = '85%'


# Colors
SELF_BUBBLE = '#3730A3'
OTHER_BUBBLE = '#1E1B4B'
NAME_LABEL = '#A5B4FC'
BADGE_BACKGROUND = '#312E81'
JOINED_COLOR = '#86EFAC'
LEFT_COLOR = '#FCA5A5'
SYSTEM_COLOR = '#95A5A6'


def bubble_width(body: str) -> BubbleWidth:
    """Pick a width band from the body length."""
    length = len(body)
    if length < COMPACT_MAX_LENGTH:
        return BubbleWidth.COMPACT
    if length < NARROW_MAX_LENGTH:
        return BubbleWidth.NARROW
    if length < MEDIUM_MAX_LENGTH:
        return BubbleWidth.MEDIUM
    return BubbleWidth.WIDE


def name_initial(name: str) -> str:
    """First character of the name, uppercased, for the avatar badge."""
    return name[:1].upper() or '?'


def _width_attr(width: BubbleWidth) -> str:
    return f' width="{width.value}"' if width.value else ''


def render_message(name: str, body: str, is_self: bool = False) -> str:
    """Render one chat message as a transcript entry."""
    width = _width_attr(bubble_width(body))
    text = html.escape(body).replace('\n', '<br>')

    if is_self:
        return (
            f'<table align="right"{width} cellspacing="0" cellpadding="0" style="margin: 4px 0;">'
            f'<tr><td align="right" style="color: {NAME_LABEL}; font-size: 8pt;">You</td></tr>'
            f'<tr><td style="background-color: {SELF_BUBBLE}; padding: 8px;">{text}</td></tr>'
            f'</table>'
        )

    initial = html.escape(name_initial(name))
    label = html.escape(name)
    return (
        f'<table align="left"{width} cellspacing="0" cellpadding="0" style="margin: 4px 0;">'
        f'<tr><td rowspan="2" valign="top" width="28" align="center" '
        f'style="background-color: {BADGE_BACKGROUND}; padding: 4px;"><b>{initial}</b></td>'
        f'<td style="color: {NAME_LABEL}; font-size: 8pt; padding-left: 6px;">{label}</td></tr>'
        f'<tr><td style="background-color: {OTHER_BUBBLE}; padding: 8px;">{text}</td></tr>'
        f'</table>'
    )


def render_payload(payload: ChatPayload, own_name: str) -> str:
    """Render a decoded chat payload; messages under our own name render as self."""
    is_self = isinstance(payload, StructuredMessage) and payload.name == own_name
    return render_message(payload.name, payload.message, is_self)


def render_presence(name: str, joined: bool) -> str:
    """Render a join or departure notice."""
    if joined:
        color, text = JOINED_COLOR, f'{name} joined'
    else:
        color, text = LEFT_COLOR, f'{name} left'
    return f'<p align="center" style="color: {color}; font-size: 8pt;">{html.escape(text)}</p>'


def render_system(text: str) -> str:
    """Render a local status line such as connect/disconnect notices."""
    return f'<p align="center" style="color: {SYSTEM_COLOR}; font-size: 8pt;">{html.escape(text)}</p>'
