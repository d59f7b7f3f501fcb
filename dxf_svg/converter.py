"""
Converter Module

Public entry points:
- convert_file_to_svg: read a DXF file with ezdxf, then convert its entities
- convert_entities_to_svg: convert entities already in memory

Both are pure functions of their inputs; neither writes any file.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from .dxf_reader import read_entities
from .entities import Entity
from .options import SvgOptions
from .renderer import render_svg

logger = logging.getLogger("DXFConverter")


def convert_entities_to_svg(
    entities: Iterable[Entity],
    options: Optional[SvgOptions] = None
) -> str:
    """
    Convert entities to an SVG document string.

    Unsupported entities are skipped and an empty sequence produces a
    document with the default viewport, so this call does not fail.

    Args:
        entities: Entities in drawing order
        options: Conversion settings (default SvgOptions())

    Returns:
        str: SVG document

    Example:
        >>> svg = convert_entities_to_svg([Line((0, 0), (10, 10))], SvgOptions(padding=0))
        >>> svg.startswith('<svg')
        True
    """
    if options is None:
        options = SvgOptions()
    return render_svg(list(entities), options)


def convert_file_to_svg(
    filepath: Union[str, Path],
    options: Optional[SvgOptions] = None
) -> str:
    """
    Read a DXF file and convert its modelspace to an SVG document string.

    Args:
        filepath: Path to the DXF file
        options: Conversion settings (default SvgOptions())

    Returns:
        str: SVG document

    Raises:
        FileReadError: If the file cannot be opened or read
        ParseError: If the file is not valid DXF
    """
    entities = read_entities(filepath)
    logger.info(f"Converting {filepath} to SVG")
    return convert_entities_to_svg(entities, options)


# Names used by the original library's README
dxf_file_to_svg = convert_file_to_svg
dxf_to_svg = convert_entities_to_svg
