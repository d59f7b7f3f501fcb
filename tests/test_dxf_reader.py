"""Tests for dxf_reader.py - ezdxf entity conversion."""

import math

import ezdxf
import pytest

from dxf_svg.dxf_reader import convert_entity, entities_from_layout, read_entities
from dxf_svg.entities import Arc, Circle, Ellipse, Line, Other, Point, Polyline, Text
from dxf_svg.errors import FileReadError, ParseError


def _msp():
    return ezdxf.new("R2010").modelspace()


def _save(doc, tmp_path, name="drawing.dxf"):
    path = tmp_path / name
    doc.saveas(path)
    return path


class TestConvertEntity:
    def test_line(self):
        e = _msp().add_line((0, 0), (10, 5))
        assert convert_entity(e) == Line((0, 0), (10, 5))

    def test_circle(self):
        e = _msp().add_circle((5, 5), 2.5)
        assert convert_entity(e) == Circle((5, 5), 2.5)

    def test_arc(self):
        e = _msp().add_arc((1, 2), 3, 30, 120)
        assert convert_entity(e) == Arc((1, 2), 3, 30, 120)

    def test_lwpolyline_closed(self):
        e = _msp().add_lwpolyline([(0, 0), (4, 0), (4, 3)], close=True)
        entity = convert_entity(e)
        assert isinstance(entity, Polyline)
        assert entity.vertices == ((0, 0), (4, 0), (4, 3))
        assert entity.closed

    def test_polyline2d_open(self):
        e = _msp().add_polyline2d([(0, 0), (1, 1), (2, 0)])
        entity = convert_entity(e)
        assert entity.vertices == ((0, 0), (1, 1), (2, 0))
        assert not entity.closed

    def test_polyface_is_other(self):
        mesh = _msp().add_polyface()
        mesh.append_face([(0, 0, 0), (1, 0, 0), (1, 1, 0)])
        assert convert_entity(mesh) == Other("POLYLINE")

    def test_spline_flattened(self):
        e = _msp().add_open_spline([(0, 0), (2, 4), (6, 4), (8, 0)])
        entity = convert_entity(e)
        assert isinstance(entity, Polyline)
        assert len(entity.vertices) > 2
        assert entity.vertices[0] == pytest.approx((0, 0))
        assert entity.vertices[-1] == pytest.approx((8, 0))

    def test_ellipse(self):
        e = _msp().add_ellipse((1, 1), major_axis=(4, 0), ratio=0.5)
        entity = convert_entity(e)
        assert isinstance(entity, Ellipse)
        assert entity.major_axis == (4, 0)
        assert entity.ratio == 0.5
        assert entity.is_full

    def test_point(self):
        assert convert_entity(_msp().add_point((3, 4))) == Point((3, 4))

    def test_text(self):
        e = _msp().add_text("Hello", dxfattribs={'insert': (1, 2), 'height': 2.5, 'rotation': 45})
        assert convert_entity(e) == Text((1, 2), "Hello", height=2.5, rotation=45)

    def test_mtext_plain_text(self):
        e = _msp().add_mtext("Line one", dxfattribs={'insert': (0, 5), 'char_height': 1.5})
        entity = convert_entity(e)
        assert isinstance(entity, Text)
        assert entity.text == "Line one"
        assert entity.height == 1.5

    def test_unsupported_is_other(self):
        e = _msp().add_solid([(0, 0), (1, 0), (0, 1)])
        assert convert_entity(e) == Other("SOLID")

    def test_aci_color(self):
        e = _msp().add_line((0, 0), (1, 1), dxfattribs={'color': 1})
        assert convert_entity(e).color == "#ff0000"

    def test_true_color(self):
        e = _msp().add_circle((0, 0), 1)
        e.rgb = (0, 128, 255)
        assert convert_entity(e).color == "#0080ff"

    def test_bylayer_byblock_and_white_use_default(self):
        msp = _msp()
        assert convert_entity(msp.add_line((0, 0), (1, 1))).color is None
        assert convert_entity(msp.add_line((0, 0), (1, 1), dxfattribs={'color': 7})).color is None
        assert convert_entity(msp.add_line((0, 0), (1, 1), dxfattribs={'color': 0})).color is None


class TestEntitiesFromLayout:
    def test_order_preserved(self):
        msp = _msp()
        msp.add_circle((0, 0), 1)
        msp.add_solid([(0, 0), (1, 0), (0, 1)])
        msp.add_line((0, 0), (1, 1))
        kinds = [type(e) for e in entities_from_layout(msp)]
        assert kinds == [Circle, Other, Line]


class TestReadEntities:
    def test_reads_modelspace(self, tmp_path):
        doc = ezdxf.new("R2010")
        msp = doc.modelspace()
        msp.add_line((0, 0), (10, 0))
        msp.add_arc((0, 0), 5, 0, 90)
        entities = read_entities(_save(doc, tmp_path))
        assert entities[0] == Line((0, 0), (10, 0))
        assert isinstance(entities[1], Arc)
        assert math.isclose(entities[1].end_angle, 90)

    def test_accepts_str_path(self, tmp_path):
        doc = ezdxf.new("R2010")
        doc.modelspace().add_point((1, 1))
        assert read_entities(str(_save(doc, tmp_path))) == [Point((1, 1))]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileReadError) as exc_info:
            read_entities(tmp_path / "missing.dxf")
        assert exc_info.value.path.endswith("missing.dxf")

    def test_directory_is_not_readable(self, tmp_path):
        with pytest.raises(FileReadError):
            read_entities(tmp_path)

    def test_garbage_is_parse_error(self, tmp_path):
        path = tmp_path / "garbage.dxf"
        path.write_text("this is not a drawing\nat all\n")
        with pytest.raises(ParseError):
            read_entities(path)

    def test_errors_are_builtin_compatible(self, tmp_path):
        with pytest.raises(OSError):
            read_entities(tmp_path / "missing.dxf")
