"""
DXF Reader Module

Reads DXF files with ezdxf and converts modelspace entities into the
converter's entity variants:
- LINE -> Line
- CIRCLE -> Circle
- ARC -> Arc
- LWPOLYLINE, POLYLINE (2D/3D) -> Polyline
- SPLINE -> Polyline (flattened by ezdxf)
- ELLIPSE -> Ellipse
- POINT -> Point
- TEXT, MTEXT -> Text
- anything else -> Other

Uses ezdxf library for DXF parsing.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .entities import Arc, Circle, Ellipse, Entity, Line, Other, Point, Polyline, Text
from .errors import FileReadError, ParseError

logger = logging.getLogger("DXFReader")

try:
    import ezdxf
    from ezdxf import colors
except ImportError as e:
    logger.error(f"Failed to import ezdxf: {e}")
    raise

SPLINE_FLATTENING_DISTANCE = 0.01  # max deviation of the flattened spline, drawing units

# ACI 7 is black/white; 0 (BYBLOCK) and 256 (BYLAYER) fall outside 1..255
_BLACK_WHITE_ACI = 7


def read_entities(filepath: Union[str, Path]) -> List[Entity]:
    """
    Read a DXF file and convert its modelspace entities.

    Args:
        filepath: Path to the DXF file

    Returns:
        list: Entities in modelspace order

    Raises:
        FileReadError: If the file does not exist or cannot be read
        ParseError: If ezdxf cannot interpret the file contents

    Example:
        >>> entities = read_entities('/path/to/part.dxf')
        >>> print(len(entities))
        42
    """
    filepath = Path(filepath)
    if not filepath.is_file():
        raise FileReadError(f"DXF file not found: {filepath}", path=str(filepath))

    try:
        with open(filepath, 'rb') as f:
            f.read(1)
    except OSError as e:
        raise FileReadError(f"Cannot read DXF file {filepath}: {e}", path=str(filepath)) from e

    try:
        doc = ezdxf.readfile(str(filepath))
    except ezdxf.DXFStructureError as e:
        raise ParseError(f"Invalid DXF file structure: {e}", path=str(filepath)) from e
    except (ezdxf.DXFError, UnicodeDecodeError) as e:
        raise ParseError(f"Error parsing DXF file: {e}", path=str(filepath)) from e
    except OSError as e:
        # the file is readable, so ezdxf rejected its contents
        raise ParseError(f"Not a DXF file: {e}", path=str(filepath)) from e

    entities = entities_from_layout(doc.modelspace())
    logger.info(f"Read {len(entities)} entities from {filepath.name}")
    return entities


def entities_from_layout(layout: Iterable[Any]) -> List[Entity]:
    """
    Convert every entity of an ezdxf layout (modelspace, paperspace, block).

    Args:
        layout: Iterable of ezdxf DXF entities

    Returns:
        list: Converted entities, one per input entity, order preserved
    """
    entities = []
    skipped = 0

    for dxf_entity in layout:
        entity = convert_entity(dxf_entity)
        if isinstance(entity, Other):
            skipped += 1
        entities.append(entity)

    if skipped:
        logger.info(f"{skipped} entities have no SVG mapping and will be skipped")
    return entities


def convert_entity(dxf_entity: Any) -> Entity:
    """
    Convert a single ezdxf entity.

    Entities whose kind is not supported, or whose data cannot be read,
    become Other.
    """
    dxftype = dxf_entity.dxftype()
    converter = _CONVERTERS.get(dxftype)
    if converter is None:
        return Other(dxftype=dxftype)

    try:
        entity = converter(dxf_entity, _color(dxf_entity))
    except (AttributeError, TypeError, ValueError, ezdxf.DXFError) as e:
        logger.warning(f"Failed to process {dxftype}: {e}")
        return Other(dxftype=dxftype)

    return entity if entity is not None else Other(dxftype=dxftype)


def _color(dxf_entity: Any) -> Optional[str]:
    """SVG color of an entity, None when it should use the default color"""
    rgb = dxf_entity.rgb if dxf_entity.dxf.hasattr('true_color') else None
    if rgb is None:
        aci = dxf_entity.dxf.get('color', 256)
        if aci == _BLACK_WHITE_ACI or not 0 < aci < 256:
            return None
        rgb = colors.aci2rgb(aci)
    r, g, b = rgb
    return f"#{r:02x}{g:02x}{b:02x}"


def _xy(vec) -> tuple:
    return (float(vec[0]), float(vec[1]))


def _line(e, color):
    return Line(_xy(e.dxf.start), _xy(e.dxf.end), color=color)


def _circle(e, color):
    return Circle(_xy(e.dxf.center), float(e.dxf.radius), color=color)


def _arc(e, color):
    return Arc(
        _xy(e.dxf.center),
        float(e.dxf.radius),
        float(e.dxf.start_angle),
        float(e.dxf.end_angle),
        color=color,
    )


def _lwpolyline(e, color):
    vertices = tuple(_xy(p) for p in e.get_points('xy'))
    return Polyline(vertices, closed=bool(e.closed), color=color)


def _polyline(e, color):
    # polyface and polymesh POLYLINEs are 3D surfaces, not outlines
    if not (e.is_2d_polyline or e.is_3d_polyline):
        return None
    vertices = tuple(_xy(v.dxf.location) for v in e.vertices)
    return Polyline(vertices, closed=bool(e.is_closed), color=color)


def _spline(e, color):
    vertices = tuple(_xy(p) for p in e.flattening(SPLINE_FLATTENING_DISTANCE))
    return Polyline(vertices, closed=bool(e.closed), color=color)


def _ellipse(e, color):
    return Ellipse(
        _xy(e.dxf.center),
        _xy(e.dxf.major_axis),
        float(e.dxf.ratio),
        start_param=float(e.dxf.start_param),
        end_param=float(e.dxf.end_param),
        color=color,
    )


def _point(e, color):
    return Point(_xy(e.dxf.location), color=color)


def _text(e, color):
    return Text(
        _xy(e.dxf.insert),
        e.dxf.text,
        height=float(e.dxf.get('height', 1.0)),
        rotation=float(e.dxf.get('rotation', 0.0)),
        color=color,
    )


def _mtext(e, color):
    return Text(
        _xy(e.dxf.insert),
        e.plain_text(),
        height=float(e.dxf.get('char_height', 1.0)),
        rotation=float(e.get_rotation()),
        color=color,
    )


_CONVERTERS: Dict[str, Callable[[Any, Optional[str]], Optional[Entity]]] = {
    'LINE': _line,
    'CIRCLE': _circle,
    'ARC': _arc,
    'LWPOLYLINE': _lwpolyline,
    'POLYLINE': _polyline,
    'SPLINE': _spline,
    'ELLIPSE': _ellipse,
    'POINT': _point,
    'TEXT': _text,
    'MTEXT': _mtext,
}
