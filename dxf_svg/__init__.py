"""
DXF to SVG Package

This package converts DXF drawing entities into SVG markup.

Modules:
    entities: Entity variants (Line, Circle, Arc, Polyline, Ellipse, Point, Text, Other)
    bounds: Bounding box calculation
    transform: Affine transform and viewport fitting
    renderer: SVG element generation
    dxf_reader: DXF file reading with ezdxf
    converter: Public conversion entry points
"""

__version__ = "1.0.0"

from .converter import convert_entities_to_svg, convert_file_to_svg, dxf_file_to_svg, dxf_to_svg
from .entities import Arc, Circle, Ellipse, Entity, EntityKind, Line, Other, Point, Polyline, Text
from .errors import DxfSvgError, FileReadError, ParseError
from .options import SvgOptions

__all__ = [
    'convert_entities_to_svg', 'convert_file_to_svg', 'dxf_file_to_svg', 'dxf_to_svg',
    'SvgOptions', 'Entity', 'EntityKind',
    'Line', 'Circle', 'Arc', 'Polyline', 'Ellipse', 'Point', 'Text', 'Other',
    'DxfSvgError', 'FileReadError', 'ParseError',
]
