from __future__ import annotations
from typing import List, Optional
from PIL import Image, ImageDraw, ImageFont

from .agenda import AgendaView, DayColumn
from .layout import BlockLayout
from .models import EXTERNAL
from .views import ViewMode

CATEGORY_COLORS = {
    EXTERNAL: (59, 130, 246),
    "meeting": (249, 115, 22),
    "video": (37, 99, 235),
    "call": (16, 185, 129),
}
NOW_COLOR = (239, 68, 68)
MUTED = (148, 163, 184)
WEEKDAY_LABELS = ["Lun", "Mar", "Mer", "Jeu", "Ven", "Sam", "Dim"]

def _load_font(size: int) -> ImageFont.ImageFont:
    try:
        return ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", size)
    except OSError:
        return ImageFont.load_default()

def _tint(rgb: tuple[int, int, int], ratio: float = 0.2) -> tuple[int, int, int]:
    # Blend toward white, the e-ink safe stand-in for a translucent fill.
    return tuple(int(round(255 - (255 - c) * ratio)) for c in rgb)

def _color_for(block_event) -> tuple[int, int, int]:
    return CATEGORY_COLORS.get(block_event.category, CATEGORY_COLORS["meeting"])

def _truncate(draw: ImageDraw.ImageDraw, text: str, font, max_width: float) -> str:
    if draw.textlength(text, font=font) <= max_width:
        return text
    while text and draw.textlength(text + "…", font=font) > max_width:
        text = text[:-1]
    return text + "…" if text else ""

def block_lines(block: BlockLayout) -> List[str]:
    """Text lines for a laid-out block: contact only when short, else time/contact/category."""
    contact = block.event.contact or block.event.title
    if block.is_short:
        return [contact]
    if block.is_continuation:
        return [block.time_label, contact]
    return [block.time_label, contact, block.event.category]

def _draw_block(
    d: ImageDraw.ImageDraw,
    block: BlockLayout,
    x0: float,
    x1: float,
    y_origin: float,
    min_height: float,
    font,
) -> None:
    color = _color_for(block.event)
    top = y_origin + block.top
    height = max(block.height, min_height)
    d.rectangle((x0, top, x1, top + height), fill=_tint(color), outline=None)
    d.rectangle((x0, top, x0 + 4, top + height), fill=color)

    line_h = font.size + 2 if hasattr(font, "size") else 12
    y = top + 2
    for line in block_lines(block):
        if y + line_h > top + height + 1 and y != top + 2:
            break
        d.text((x0 + 8, y), _truncate(d, line, font, x1 - x0 - 10), fill="black", font=font)
        y += line_h

def render_agenda(
    view: AgendaView,
    width: int = 1200,
    min_block_height: float = 20,
    header_h: int = 48,
    rail_w: int = 64,
) -> Image.Image:
    if view.state.mode is ViewMode.MONTH:
        return _render_month(view, width, header_h)

    font_small = _load_font(14)
    font_header = _load_font(20)
    lane_rows = max((len(c.all_day) for c in view.columns), default=0)
    lane_h = lane_rows * 26 + (8 if lane_rows else 0)
    grid_top = header_h + lane_h
    grid_h = 24 * view.hour_height

    img = Image.new("RGB", (width, int(grid_top + grid_h)), "white")
    d = ImageDraw.Draw(img)

    col_w = (width - rail_w) / max(1, len(view.columns))

    for hour in range(24):
        y = grid_top + hour * view.hour_height
        d.line((rail_w, y, width, y), fill=(226, 232, 240), width=1)
        d.text((6, y + 2), f"{hour:02d}:00", fill=MUTED, font=font_small)
    d.line((rail_w, grid_top, rail_w, grid_top + grid_h), fill="black", width=1)

    for idx, column in enumerate(view.columns):
        x0 = rail_w + idx * col_w
        x1 = x0 + col_w
        _draw_column_header(d, column, x0, col_w, font_header)
        d.line((x1, 0, x1, grid_top + grid_h), fill=(226, 232, 240), width=1)

        for i, event in enumerate(column.all_day):
            y = header_h + 4 + i * 26
            d.rectangle((x0 + 4, y, x1 - 4, y + 22), fill=_tint(CATEGORY_COLORS[EXTERNAL], 0.15))
            d.text((x0 + 10, y + 3), _truncate(d, event.title, font_small, col_w - 16), fill="black", font=font_small)

        for block in [*column.continuations, *column.blocks]:
            _draw_block(d, block, x0 + 4, x1 - 4, grid_top, min_block_height, font_small)

        if column.now_percent is not None and 0 <= column.now_percent <= 100:
            y = grid_top + grid_h * column.now_percent / 100
            d.ellipse((x0 - 5, y - 5, x0 + 5, y + 5), fill=NOW_COLOR)
            d.line((x0, y, x1, y), fill=NOW_COLOR, width=2)

    return img

def _draw_column_header(d: ImageDraw.ImageDraw, column: DayColumn, x0: float, col_w: float, font) -> None:
    label = f"{WEEKDAY_LABELS[column.date.weekday()]} {column.date.day}"
    fill = NOW_COLOR if column.is_today else "black"
    w = d.textlength(label, font=font)
    d.text((x0 + (col_w - w) / 2, 12), label, fill=fill, font=font)

def _render_month(view: AgendaView, width: int, header_h: int, cell_h: Optional[int] = None) -> Image.Image:
    font_small = _load_font(12)
    font_day = _load_font(16)
    cell_w = width / 7
    cell_h = cell_h or 120
    img = Image.new("RGB", (width, header_h + 6 * cell_h), "white")
    d = ImageDraw.Draw(img)

    for i, label in enumerate(WEEKDAY_LABELS):
        w = d.textlength(label, font=font_day)
        d.text((i * cell_w + (cell_w - w) / 2, 14), label, fill=MUTED, font=font_day)

    for idx, column in enumerate(view.columns):
        row, col = divmod(idx, 7)
        x0 = col * cell_w
        y0 = header_h + row * cell_h
        if not column.in_month:
            d.rectangle((x0, y0, x0 + cell_w, y0 + cell_h), fill=(241, 245, 249))
        d.rectangle((x0, y0, x0 + cell_w, y0 + cell_h), outline=(226, 232, 240))

        if column.is_today:
            day_fill = NOW_COLOR
        elif column.in_month:
            day_fill = "black"
        else:
            day_fill = MUTED
        d.text((x0 + 6, y0 + 4), str(column.date.day), fill=day_fill, font=font_day)

        y = y0 + 26
        for event in column.preview:
            start = event.start_minutes or 0
            text = f"{start // 60:02d}:{start % 60:02d} {event.contact or event.title}"
            color = CATEGORY_COLORS.get(event.category, CATEGORY_COLORS["meeting"])
            d.rectangle((x0 + 4, y, x0 + cell_w - 4, y + 16), fill=_tint(color))
            d.text((x0 + 8, y + 1), _truncate(d, text, font_small, cell_w - 14), fill="black", font=font_small)
            y += 19
        if column.hidden_count:
            d.text((x0 + 8, y), f"+{column.hidden_count}", fill=MUTED, font=font_small)

    return img
