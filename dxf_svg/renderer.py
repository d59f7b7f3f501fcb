"""
SVG Renderer Module

Turns entities into an SVG 1.1 document string:
- Line -> <line>
- Circle -> <circle>
- Arc -> <path> with an A command
- Polyline -> <polyline> (open) or <polygon> (closed)
- Ellipse -> <ellipse> (full) or <path> (partial)
- Point -> small filled <circle>
- Text -> <text>
- Other -> skipped

Every coordinate goes through one Affine computed per call, which also flips
the DXF Y-up axis into SVG's Y-down axis.
"""

import logging
import math
from dataclasses import fields, is_dataclass
from typing import Callable, Dict, List, Optional, Sequence
from xml.sax.saxutils import escape, quoteattr

from .bounds import compute_bounds
from .entities import Entity, EntityKind
from .options import SvgOptions
from .transform import Affine, Viewport, default_transform, fit_transform

logger = logging.getLogger("SVGRenderer")

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
PRECISION = 6  # decimals kept in emitted numbers


def fmt(value: float) -> str:
    """Format a number compactly and deterministically (10.0 -> '10', -0.0 -> '0')"""
    value = round(float(value), PRECISION)
    if value == 0:
        value = 0.0
    text = f"{value:.{PRECISION}f}".rstrip('0').rstrip('.')
    return text if text not in ('', '-') else '0'


def _pt(point) -> str:
    return f"{fmt(point[0])},{fmt(point[1])}"


class _Context:
    """Per-call rendering state: the active transform and resolved options"""

    def __init__(self, transform: Affine, options: SvgOptions):
        self.transform = transform
        self.options = options
        # DXF angles run CCW; SVG's positive sweep is CW once Y is flipped
        self.sweep_flag = 0 if transform.flips else 1

    def stroke(self, entity) -> str:
        color = entity.color or self.options.default_color
        return (
            f'stroke={quoteattr(color)} stroke-width="{fmt(self.options.stroke_width)}" '
            f'fill="none"'
        )

    def fill(self, entity) -> str:
        color = entity.color or self.options.default_color
        return f'fill={quoteattr(color)}'


def _render_line(entity, ctx: _Context) -> Optional[str]:
    x1, y1 = ctx.transform.apply(*entity.start)
    x2, y2 = ctx.transform.apply(*entity.end)
    return (
        f'<line x1="{fmt(x1)}" y1="{fmt(y1)}" x2="{fmt(x2)}" y2="{fmt(y2)}" '
        f'{ctx.stroke(entity)} />'
    )


def _render_circle(entity, ctx: _Context) -> Optional[str]:
    cx, cy = ctx.transform.apply(*entity.center)
    r = abs(entity.radius) * ctx.transform.length_scale
    return f'<circle cx="{fmt(cx)}" cy="{fmt(cy)}" r="{fmt(r)}" {ctx.stroke(entity)} />'


def _render_arc(entity, ctx: _Context) -> Optional[str]:
    cx, cy = entity.center
    radius = abs(entity.radius)
    start = math.radians(entity.start_angle)
    sweep = entity.sweep
    r = fmt(radius * ctx.transform.length_scale)

    def at(angle):
        return ctx.transform.apply(cx + radius * math.cos(angle), cy + radius * math.sin(angle))

    start_pt = at(start)
    end_pt = at(start + math.radians(sweep))
    # an A command whose endpoints coincide draws nothing: full turns use two half arcs
    if sweep >= 360.0 or _pt(start_pt) == _pt(end_pt):
        mid_pt = at(start + math.pi)
        d = (
            f"M {_pt(start_pt)} "
            f"A {r},{r} 0 0 {ctx.sweep_flag} {_pt(mid_pt)} "
            f"A {r},{r} 0 0 {ctx.sweep_flag} {_pt(start_pt)}"
        )
    else:
        large_arc = 1 if sweep > 180.0 else 0
        d = f"M {_pt(start_pt)} A {r},{r} 0 {large_arc} {ctx.sweep_flag} {_pt(end_pt)}"

    return f'<path d="{d}" {ctx.stroke(entity)} />'


def _render_polyline(entity, ctx: _Context) -> Optional[str]:
    if len(entity.vertices) < 2:
        logger.debug(f"Skipping polyline with {len(entity.vertices)} vertices")
        return None

    points = " ".join(_pt(p) for p in ctx.transform.apply_many(entity.vertices))
    # <polygon> implies the closing segment back to the first vertex
    tag = 'polygon' if entity.closed else 'polyline'
    return f'<{tag} points="{points}" {ctx.stroke(entity)} />'


def _render_ellipse(entity, ctx: _Context) -> Optional[str]:
    mx, my = entity.major_axis
    major = math.hypot(mx, my)
    if major == 0:
        return None

    scale = ctx.transform.length_scale
    rx = major * scale
    ry = major * abs(entity.ratio) * scale
    rotation = ctx.transform.apply_angle(math.degrees(math.atan2(my, mx)))

    if not entity.is_full:
        span = (entity.end_param - entity.start_param) % math.tau
        start_pt = ctx.transform.apply(*entity.point_at(entity.start_param))
        end_pt = ctx.transform.apply(*entity.point_at(entity.start_param + span))
        # nearly closed arcs collapse to coincident endpoints: drawn as the full ellipse
        if _pt(start_pt) != _pt(end_pt):
            large_arc = 1 if span > math.pi else 0
            d = (
                f"M {_pt(start_pt)} A {fmt(rx)},{fmt(ry)} {fmt(rotation)} "
                f"{large_arc} {ctx.sweep_flag} {_pt(end_pt)}"
            )
            return f'<path d="{d}" {ctx.stroke(entity)} />'

    cx, cy = ctx.transform.apply(*entity.center)
    return (
        f'<ellipse cx="{fmt(cx)}" cy="{fmt(cy)}" rx="{fmt(rx)}" ry="{fmt(ry)}" '
        f'transform="rotate({fmt(rotation)} {fmt(cx)} {fmt(cy)})" {ctx.stroke(entity)} />'
    )


def _render_point(entity, ctx: _Context) -> Optional[str]:
    cx, cy = ctx.transform.apply(*entity.location)
    return (
        f'<circle cx="{fmt(cx)}" cy="{fmt(cy)}" r="{fmt(ctx.options.stroke_width)}" '
        f'{ctx.fill(entity)} />'
    )


def _render_text(entity, ctx: _Context) -> Optional[str]:
    if not entity.text:
        return None

    x, y = ctx.transform.apply(*entity.insert)
    size = abs(entity.height) * ctx.transform.length_scale
    attrs = f'x="{fmt(x)}" y="{fmt(y)}" font-size="{fmt(size)}" {ctx.fill(entity)}'
    if entity.rotation:
        angle = ctx.transform.apply_angle(entity.rotation)
        attrs += f' transform="rotate({fmt(angle)} {fmt(x)} {fmt(y)})"'

    lines = entity.text.splitlines()
    if len(lines) <= 1:
        return f'<text {attrs}>{escape(entity.text)}</text>'

    # SVG collapses newlines, so each MTEXT line gets its own tspan one font-size lower
    spans = "".join(
        f'<tspan x="{fmt(x)}" dy="{fmt(size if i else 0)}">{escape(line)}</tspan>'
        for i, line in enumerate(lines)
    )
    return f'<text {attrs}>{spans}</text>'


def _render_other(entity, ctx: _Context) -> Optional[str]:
    logger.debug(f"Unsupported entity type: {getattr(entity, 'dxftype', entity)}, skipping")
    return None


RENDERERS: Dict[EntityKind, Callable[[Entity, _Context], Optional[str]]] = {
    EntityKind.LINE: _render_line,
    EntityKind.CIRCLE: _render_circle,
    EntityKind.ARC: _render_arc,
    EntityKind.POLYLINE: _render_polyline,
    EntityKind.ELLIPSE: _render_ellipse,
    EntityKind.POINT: _render_point,
    EntityKind.TEXT: _render_text,
    EntityKind.OTHER: _render_other,
}


def resolve_viewport(entities: Sequence[Entity], options: SvgOptions):
    """
    Pick the transform and viewport for a conversion.

    Args:
        entities: Entities to render
        options: Resolved options

    Returns:
        tuple: (Affine, (width, height))
    """
    if options.use_bounds:
        bounds = compute_bounds(entities)
        if bounds is not None:
            return fit_transform(bounds, options.padding)
        logger.info("No geometry to fit, using default viewport")
    return default_transform()


def _numbers(value):
    if isinstance(value, (tuple, list)):
        for item in value:
            yield from _numbers(item)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        yield value


def _is_finite(entity) -> bool:
    """False when any numeric field of the entity is NaN or infinite"""
    if not is_dataclass(entity):
        return True
    return all(
        math.isfinite(v)
        for f in fields(entity)
        for v in _numbers(getattr(entity, f.name))
    )


def render_elements(entities: Sequence[Entity], transform: Affine, options: SvgOptions) -> List[str]:
    """Render each entity in input order, dropping the ones that produce nothing"""
    ctx = _Context(transform, options)
    elements = []

    for entity in entities:
        if not _is_finite(entity):
            logger.debug(f"Entity with non-finite geometry: {entity}, skipping")
            continue
        renderer = RENDERERS.get(getattr(entity, 'kind', None), _render_other)
        element = renderer(entity, ctx)
        if element is not None:
            elements.append(element)

    return elements


def render_svg(entities: Sequence[Entity], options: SvgOptions) -> str:
    """
    Render entities as a complete SVG document.

    Args:
        entities: Entities in drawing order
        options: Fully resolved SvgOptions (never None here)

    Returns:
        str: SVG document
    """
    entities = list(entities)
    transform, viewport = resolve_viewport(entities, options)
    elements = render_elements(entities, transform, options)

    logger.info(f"Rendered {len(elements)} of {len(entities)} entities")
    return _wrap(elements, viewport)


def _wrap(elements: List[str], viewport: Viewport) -> str:
    width, height = fmt(viewport[0]), fmt(viewport[1])
    header = (
        f'<svg xmlns="{SVG_NAMESPACE}" version="1.1" '
        f'width="{width}" height="{height}" viewBox="0 0 {width} {height}">'
    )
    return header + "".join(elements) + "</svg>"
