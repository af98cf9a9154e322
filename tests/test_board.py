"""Tests for the per-primitive converters in the board module."""

from __future__ import annotations

import pytest

from easyeda_kicad.board import (
    convert_arc,
    convert_board_pad,
    convert_circle,
    convert_copper_area,
    convert_hole,
    convert_pad,
    convert_pad_to_via,
    convert_solid_region,
    convert_text,
    convert_track,
    convert_via,
    is_via_pad,
)
from easyeda_kicad.exceptions import MissingLayerError, RecordError
from easyeda_kicad.models import Pose
from easyeda_kicad.sexpr import encode_object, normalize

FOOTPRINT_POSE = Pose(4000, 3000, 0)


def _record(line: str) -> list[str]:
    """Fields of a ``TYPE~...`` record string, type tag dropped."""
    return line.split("~")[1:]


class TestConvertTrack:
    """Test TRACK conversion."""

    def test_copper_track_becomes_segment(self):
        fields = ["0.63", "1", "GND", "4000 3000 4000 3030", "gge1", "0"]
        assert convert_track(fields, ["", "GND"]) == [
            [
                "segment",
                ["start", 0, 0],
                ["end", 0, 7.62],
                ["width", 0.16002],
                ["layer", "F.Cu"],
                ["net", 1],
            ]
        ]

    def test_unknown_layer_raises(self):
        fields = ["0.63", "999", "GND", "4000 3000 4000 3030", "gge1", "0"]
        with pytest.raises(MissingLayerError, match="Missing layer id: 999"):
            convert_track(fields, ["", "GND"])

    def test_one_segment_per_consecutive_pair(self):
        fields = ["1", "2", "", "4000 3000 4010 3000 4010 3010", "gge2", "0"]
        segments = convert_track(fields, [""])
        assert len(segments) == 2
        assert segments[0][2] == ["end", 2.54, 0]
        assert segments[1][1] == ["start", 2.54, 0]
        assert segments[1][2] == ["end", 2.54, 2.54]
        assert all(s[4] == ["layer", "B.Cu"] for s in segments)
        assert all(s[5] == ["net", 0] for s in segments)

    def test_uncataloged_net_is_minus_one(self):
        fields = ["1", "1", "VCC", "4000 3000 4010 3000", "gge3", "0"]
        assert convert_track(fields, [""])[0][-1] == ["net", -1]

    def test_non_copper_track_becomes_gr_line(self):
        fields = ["1", "10", "", "4000 3000 4010 3000", "gge4", "0"]
        assert convert_track(fields, [""]) == [
            ["gr_line", ["start", 0, 0], ["end", 2.54, 0], ["width", 0.254], ["layer", "Edge.Cuts"]]
        ]

    def test_single_point_yields_nothing(self):
        assert convert_track(["1", "1", "", "4000 3000", "gge5", "0"], [""]) == []

    def test_inside_footprint(self):
        fields = ["1", "3", "", "4010 3000 4020 3000", "gge6", "0"]
        assert convert_track(fields, [""], FOOTPRINT_POSE) == [
            ["fp_line", ["start", 2.54, 0], ["end", 5.08, 0], ["width", 0.254], ["layer", "F.SilkS"]]
        ]

    def test_back_side_footprint_track_is_mirrored(self):
        fields = ["1", "4", "", "4010 3000 4020 3000", "gge7", "0"]
        assert convert_track(fields, [""], FOOTPRINT_POSE) == [
            ["fp_line", ["start", -2.54, 0], ["end", -5.08, 0], ["width", 0.254], ["layer", "B.SilkS"]]
        ]


class TestConvertArc:
    """Test ARC conversion."""

    def test_quarter_arc(self):
        fields = ["1", "10", "", "M4050,3060 A10,10 0 0 1 4060,3050", "", "gge276", "0"]
        assert encode_object(convert_arc(fields)) == (
            '(gr_arc (start 15.24 15.24) (end 12.7 15.24) (angle 90) (width 0.254) (layer "Edge.Cuts"))'
        )

    def test_compact_path_and_radius_correction(self):
        """A radius shorter than half the chord is scaled up to a half circle."""
        fields = ["1", "10", "", "M4000 3000A10 10 0 0 1 4050 3050", "", "gge170", "0"]
        assert normalize(convert_arc(fields)) == [
            "gr_arc",
            ["start", 6.35, 6.35],
            ["end", 0, 0],
            ["angle", 180],
            ["width", 0.254],
            ["layer", "Edge.Cuts"],
        ]

    def test_negative_numbers(self):
        fields = [
            "0.6",
            "4",
            "",
            "M 3977.3789 3026.2151 A 28.4253 28.4253 -150 1 1 3977.6376 3026.643",
            "",
            "gge66",
            "0",
        ]
        assert encode_object(convert_arc(fields)) == (
            '(gr_arc (start 0.465 2.978) (end -5.746 6.659) (angle 358.992) (width 0.152) (layer "B.SilkS"))'
        )

    def test_counter_clockwise_arc_departs_from_end(self):
        fields = _record("ARC~1~1~S$9~M4262.5,3279.5 A33.5596,33.5596 0 0 0 4245.5921,3315.5816~~gge8~0")
        assert encode_object(convert_arc(fields)) == (
            '(gr_arc (start 70.739 78.486) (end 62.38 80.158) (angle 72.836) (width 0.254) (layer "F.Cu"))'
        )

    def test_near_full_circle_stays_below_full_turn(self):
        """A large arc over a tiny chord never reports a 360 degree sweep."""
        fields = ["1", "10", "", "M4000,3000 A1000,1000 0 1 1 4000.001,3000", "", "gge13", "0"]
        angle = convert_arc(fields)[3][1]
        assert 0 <= angle < 360

    def test_not_a_single_arc(self):
        assert convert_arc(["1", "10", "", "M 4000 3000 L 4010 3010", "", "gge9", "0"]) is None

    def test_unknown_layer_raises(self):
        with pytest.raises(MissingLayerError):
            convert_arc(["1", "77", "", "M4050,3060 A10,10 0 0 1 4060,3050", "", "gge10", "0"])

    def test_inside_footprint(self):
        fields = ["1", "3", "", "M4010,3000 A10,10 0 0 1 4000,3010", "", "gge11", "0"]
        assert normalize(convert_arc(fields, [""], FOOTPRINT_POSE)) == [
            "fp_arc",
            ["start", 0, 0],
            ["end", 2.54, 0],
            ["angle", 90],
            ["width", 0.254],
            ["layer", "F.SilkS"],
        ]

    def test_back_side_footprint_arc(self):
        """Mirrored arcs depart from the opposite endpoint with the same sweep."""
        fields = ["1", "4", "", "M4010,3000 A10,10 0 0 1 4000,3010", "", "gge12", "0"]
        assert normalize(convert_arc(fields, [""], FOOTPRINT_POSE)) == [
            "fp_arc",
            ["start", 0, 0],
            ["end", 0, 2.54],
            ["angle", 90],
            ["width", 0.254],
            ["layer", "B.SilkS"],
        ]


class TestConvertCopperArea:
    """Test COPPERAREA conversion."""

    FIELDS = [
        "1",
        "2",
        "GND",
        "M 4050 3050 L 4164 3050 L 4160 3120 L4050,3100 Z",
        "1",
        "solid",
        "gge221",
        "spoke",
        "none",
        "",
        "0",
        "",
        "2",
        "1",
        "1",
        "0",
        "yes",
    ]

    def test_zone(self):
        assert convert_copper_area(self.FIELDS, []) == [
            "zone",
            ["net", -1],
            ["net_name", "GND"],
            ["layer", "B.Cu"],
            ["hatch", "edge", 0.508],
            ["connect_pads", ["clearance", 0.254]],
            [
                "polygon",
                ["pts", ["xy", 12.7, 12.7], ["xy", 41.656, 12.7], ["xy", 40.64, 30.48], ["xy", 12.7, 25.4]],
            ],
        ]

    def test_cataloged_net(self):
        assert convert_copper_area(self.FIELDS, ["", "GND"])[1] == ["net", 1]

    def test_clearance_field_is_scaled(self):
        fields = list(self.FIELDS)
        fields[4] = "2"
        assert convert_copper_area(fields, [])[5] == ["connect_pads", ["clearance", 0.508]]

    def test_arc_outline_yields_none(self):
        fields = list(self.FIELDS)
        fields[3] = "M 4367 3248 A 33.8 33.8 0 1 0 4366.99 3248 Z"
        assert convert_copper_area(fields, []) is None


class TestConvertSolidRegion:
    """Test SOLIDREGION conversion."""

    def test_cutout_becomes_keepout_zone(self):
        fields = [
            "2",
            "L3_2",
            "M 4280 3173 L 4280 3127.5 L 4358.5 3128 L 4358.5 3163.625 L 4371.5 3163.625 "
            "L 4374.5 3168.625 L 4374.5 3173.125 L 4369 3173.125 L 4358.5 3173.125 "
            "L 4358.5 3179.625 L 4406.5 3179.625 L 4459 3179.5 L 4459 3252.5 L 4280.5 3253 "
            "L 4280 3173 Z",
            "cutout",
            "gge40",
            "0",
        ]
        assert normalize(convert_solid_region(fields, ["L3_2"])) == [
            "zone",
            ["net", 0],
            ["net_name", ""],
            ["hatch", "edge", 0.508],
            ["layer", "B.Cu"],
            ["keepout", ["tracks", "allowed"], ["vias", "allowed"], ["copperpour", "not_allowed"]],
            [
                "polygon",
                [
                    "pts",
                    ["xy", 71.12, 43.942],
                    ["xy", 71.12, 32.385],
                    ["xy", 91.059, 32.512],
                    ["xy", 91.059, 41.561],
                    ["xy", 94.361, 41.561],
                    ["xy", 95.123, 42.831],
                    ["xy", 95.123, 43.974],
                    ["xy", 93.726, 43.974],
                    ["xy", 91.059, 43.974],
                    ["xy", 91.059, 45.625],
                    ["xy", 103.251, 45.625],
                    ["xy", 116.586, 45.593],
                    ["xy", 116.586, 64.135],
                    ["xy", 71.247, 64.262],
                    ["xy", 71.12, 43.942],
                ],
            ],
        ]

    def test_region_with_arc_yields_none(self):
        fields = ["1", "", "M 4367 3248 A 33.8 33.8 0 1 0 4366.99 3248 Z ", "cutout", "gge1953", "", "", "", "0"]
        assert convert_solid_region(fields, []) is None

    def test_solid_copper_region_becomes_filled_zone(self):
        fields = ["1", "GND", "M 4000 3000 L 4010 3000 L 4010 3010 Z", "solid", "gge41", "0"]
        assert convert_solid_region(fields, ["", "GND"]) == [
            "zone",
            ["net", 1],
            ["net_name", "GND"],
            ["hatch", "edge", 0.508],
            ["layer", "F.Cu"],
            ["connect_pads", ["clearance", 0.254]],
            ["fill", "yes"],
            ["polygon", ["pts", ["xy", 0, 0], ["xy", 2.54, 0], ["xy", 2.54, 2.54]]],
        ]

    def test_solid_silk_region_becomes_gr_poly(self):
        fields = ["3", "", "M 4000 3000 L 4010 3000 L 4010 3010 Z", "solid", "gge42", "0"]
        assert convert_solid_region(fields, [""]) == [
            "gr_poly",
            ["pts", ["xy", 0, 0], ["xy", 2.54, 0], ["xy", 2.54, 2.54]],
            ["layer", "F.SilkS"],
            ["width", 0],
        ]

    def test_unknown_kind_yields_none(self):
        fields = ["1", "", "M 4000 3000 L 4010 3000 L 4010 3010 Z", "npth", "gge43", "0"]
        assert convert_solid_region(fields, [""]) is None

    def test_footprint_cutout_is_skipped(self):
        fields = ["1", "", "M 4000 3000 L 4010 3000 L 4010 3010 Z", "cutout", "gge44", "0"]
        assert convert_solid_region(fields, [""], FOOTPRINT_POSE) is None

    def test_unknown_layer_raises(self):
        fields = ["999", "", "M 4000 3000 L 4010 3000 L 4010 3010 Z", "solid", "gge45", "0"]
        with pytest.raises(MissingLayerError):
            convert_solid_region(fields, [""])


class TestConvertHole:
    """Test HOLE conversion."""

    def test_board_hole_becomes_mounting_hole_module(self):
        assert normalize(convert_hole(["4475.5", "3170.5", "2.9528", "gge1205", "1"])) == [
            "module",
            "AutoGenerated:MountingHole_1.50mm",
            "locked",
            ["layer", "F.Cu"],
            ["at", 120.777, 43.307],
            ["attr", "virtual"],
            ["fp_text", "reference", "", ["at", 0, 0], ["layer", "F.SilkS"]],
            ["fp_text", "value", "", ["at", 0, 0], ["layer", "F.SilkS"]],
            [
                "pad",
                "",
                "np_thru_hole",
                "circle",
                ["at", 0, 0],
                ["size", 1.5, 1.5],
                ["drill", 1.5],
                ["layers", "*.Cu", "*.Mask"],
            ],
        ]

    def test_unlocked_hole(self):
        tree = convert_hole(["4000", "3000", "5", "gge1206", "0"])
        assert "locked" not in tree
        assert tree[1] == "AutoGenerated:MountingHole_2.54mm"

    def test_footprint_hole_is_bare_pad(self):
        assert normalize(convert_hole(["4010", "3000", "5", "gge1207", "0"], [""], FOOTPRINT_POSE)) == [
            "pad",
            "",
            "np_thru_hole",
            "circle",
            ["at", 2.54, 0],
            ["size", 2.54, 2.54],
            ["drill", 2.54],
            ["layers", "*.Cu", "*.Mask"],
        ]


class TestConvertCircle:
    def test_end_lies_one_radius_along_x(self):
        assert normalize(convert_circle(["4000", "3000", "12.4", "1", "3", "gge635", "0", "", ""])) == [
            "gr_circle",
            ["center", 0, 0],
            ["end", 3.15, 0],
            ["layer", "F.SilkS"],
            ["width", 0.254],
        ]

    def test_inside_footprint(self):
        tree = normalize(convert_circle(["4010", "3000", "10", "1", "3", "gge636", "0"], [""], FOOTPRINT_POSE))
        assert tree[0] == "fp_circle"
        assert tree[1] == ["center", 2.54, 0]
        assert tree[2] == ["end", 5.08, 0]

    def test_unknown_layer_raises(self):
        with pytest.raises(MissingLayerError, match="Missing layer id: 999"):
            convert_circle(["4000", "3000", "12.4", "1", "999", "gge637", "0"])


class TestConvertVia:
    def test_via(self):
        fields = ["4050", "3050", "2.4", "GND", "0.6", "gge5", "0"]
        assert normalize(convert_via(fields, ["", "GND"])) == [
            "via",
            ["at", 12.7, 12.7],
            ["size", 0.61],
            ["drill", 0.305],
            ["layers", "F.Cu", "B.Cu"],
            ["net", 1],
        ]


class TestConvertPadToVia:
    """Test conversion of round multi-layer pads to vias."""

    FIELDS = ["ELLIPSE", "0", "0", "2.4", "2.4", "11", "VCC3V3", "", "0.6", "", "0", "gge19", "0", "", "Y", "0"]

    def test_pad_as_via(self):
        assert convert_pad_to_via(self.FIELDS, []) == [
            "via",
            ["at", 0, 0],
            ["size", 0.61],
            ["drill", 0.305],
            ["layers", "F.Cu", "B.Cu"],
            ["net", -1],
        ]

    def test_cataloged_net(self):
        assert convert_pad_to_via(self.FIELDS, ["", "VCC3V3"])[-1] == ["net", 1]

    def test_rect_pad_is_rejected(self):
        fields = list(self.FIELDS)
        fields[0] = "RECT"
        with pytest.raises(RecordError):
            convert_pad_to_via(fields, [])

    def test_single_layer_pad_is_rejected(self):
        fields = list(self.FIELDS)
        fields[5] = "1"
        with pytest.raises(RecordError):
            convert_pad_to_via(fields, [])

    def test_is_via_pad(self):
        assert is_via_pad(self.FIELDS)
        smd = list(self.FIELDS)
        smd[8] = "0"
        assert not is_via_pad(smd)


class TestConvertPad:
    """Test PAD conversion inside footprints."""

    def test_smd_rect_pad(self):
        fields = ["RECT", "4010", "3000", "4", "2", "1", "GND", "1", "0", "", "0", "gge20", "0", "", "Y", "0"]
        assert normalize(convert_pad(fields, ["", "GND"], FOOTPRINT_POSE)) == [
            "pad",
            1,
            "smd",
            "rect",
            ["at", 2.54, 0],
            ["size", 1.016, 0.508],
            ["layers", "F.Cu", "F.Paste", "F.Mask"],
            ["net", 1, "GND"],
        ]

    def test_non_numeric_pad_number_stays_text(self):
        fields = ["RECT", "4010", "3000", "4", "2", "1", "", "A1", "0", "", "0", "gge21", "0", "", "Y", "0"]
        assert convert_pad(fields, [""], FOOTPRINT_POSE)[1] == "A1"

    def test_empty_net_is_omitted(self):
        fields = ["RECT", "4010", "3000", "4", "2", "1", "", "1", "0", "", "0", "gge22", "0", "", "Y", "0"]
        tree = convert_pad(fields, [""], FOOTPRINT_POSE)
        assert not any(isinstance(item, list) and item[0] == "net" for item in tree)

    def test_oval_slot(self):
        fields = ["OVAL", "4000", "3000", "6", "3", "11", "", "2", "0.5", "", "0", "gge23", "4", "", "Y", "0"]
        assert normalize(convert_pad(fields, [""], FOOTPRINT_POSE)) == [
            "pad",
            2,
            "thru_hole",
            "oval",
            ["at", 0, 0],
            ["size", 1.524, 0.762],
            ["layers", "*.Cu", "*.Paste", "*.Mask"],
            ["drill", "oval", 1.016, 0.254],
        ]

    def test_unplated_hole(self):
        fields = ["ELLIPSE", "4000", "3000", "4", "4", "11", "", "3", "1", "", "0", "gge24", "0", "", "N", "0"]
        assert convert_pad(fields, [""], FOOTPRINT_POSE)[2] == "np_thru_hole"

    def test_polygon_pad_has_primitives(self):
        fields = [
            "POLYGON",
            "4000",
            "3000",
            "20",
            "20",
            "1",
            "",
            "1",
            "0",
            "3990 2990 4010 2990 4010 3010 3990 3010",
            "0",
            "gge25",
            "0",
            "",
            "Y",
            "0",
        ]
        assert normalize(convert_pad(fields, [""], FOOTPRINT_POSE)) == [
            "pad",
            1,
            "smd",
            "custom",
            ["at", 0, 0],
            ["size", 5.08, 5.08],
            ["layers", "F.Cu", "F.Paste", "F.Mask"],
            ["options", ["clearance", "outline"], ["anchor", "circle"]],
            [
                "primitives",
                [
                    "gr_poly",
                    ["pts", ["xy", -2.54, -2.54], ["xy", 2.54, -2.54], ["xy", 2.54, 2.54], ["xy", -2.54, 2.54]],
                    ["width", 0],
                ],
            ],
        ]

    def test_unsupported_shape_raises(self):
        fields = ["STAR", "4000", "3000", "4", "4", "1", "", "1", "0", "", "0", "gge26", "0", "", "Y", "0"]
        with pytest.raises(RecordError, match="STAR"):
            convert_pad(fields, [""], FOOTPRINT_POSE)


class TestConvertBoardPad:
    """Test PAD records placed directly on the board."""

    def test_round_multilayer_pad_becomes_via(self):
        fields = ["ELLIPSE", "4050", "3050", "2.4", "2.4", "11", "GND", "", "0.6", "", "0", "gge30", "0", "", "Y", "0"]
        assert normalize(convert_board_pad(fields, ["", "GND"])) == [
            "via",
            ["at", 12.7, 12.7],
            ["size", 0.61],
            ["drill", 0.305],
            ["layers", "F.Cu", "B.Cu"],
            ["net", 1],
        ]

    def test_other_pad_is_wrapped_in_module(self):
        fields = ["RECT", "4050", "3050", "4", "2", "1", "GND", "1", "0", "", "0", "gge31", "0", "", "Y", "0"]
        assert normalize(convert_board_pad(fields, ["", "GND"])) == [
            "module",
            "AutoGenerated:Pad_1",
            ["layer", "F.Cu"],
            ["at", 12.7, 12.7],
            [
                "pad",
                1,
                "smd",
                "rect",
                ["at", 0, 0],
                ["size", 1.016, 0.508],
                ["layers", "F.Cu", "F.Paste", "F.Mask"],
                ["net", 1, "GND"],
            ],
        ]


class TestConvertText:
    """Test TEXT conversion."""

    def test_board_text(self):
        fields = ["L", "4050", "3050", "0.6", "0", "0", "3", "", "4.5", "Hello", "", "", "gge77", "", "0"]
        assert normalize(convert_text(fields)) == [
            "gr_text",
            "Hello",
            ["at", 12.7, 12.7],
            ["layer", "F.SilkS"],
            ["effects", ["font", ["size", 1.143, 1.143], ["thickness", 0.152]], ["justify", "left"]],
        ]

    def test_board_text_on_back_is_mirrored(self):
        fields = ["L", "4050", "3050", "0.6", "90", "0", "4", "", "4.5", "Hello", "", "", "gge78", "", "0"]
        tree = normalize(convert_text(fields))
        assert tree[2] == ["at", 12.7, 12.7, 90]
        assert tree[-1][-1] == ["justify", "left", "mirror"]

    def test_hidden_text(self):
        fields = ["L", "4050", "3050", "0.6", "0", "0", "3", "", "4.5", "Hello", "", "none", "gge79", "", "0"]
        assert "hide" in convert_text(fields)

    def test_footprint_reference(self):
        fields = ["P", "4010", "3000", "0.6", "0", "0", "3", "", "4.5", "R1", "", "", "gge80", "", "0"]
        tree = normalize(convert_text(fields, [""], FOOTPRINT_POSE))
        assert tree[:4] == ["fp_text", "reference", "R1", ["at", 2.54, 0]]
        assert tree[4] == ["layer", "F.SilkS"]

    def test_footprint_back_text_is_mirrored(self):
        fields = ["L", "4010", "3000", "0.6", "0", "0", "4", "", "4.5", "Hi", "", "", "gge81", "", "0"]
        assert normalize(convert_text(fields, [""], FOOTPRINT_POSE)) == [
            "fp_text",
            "user",
            "Hi",
            ["at", -2.54, 0],
            ["layer", "B.SilkS"],
            ["effects", ["font", ["size", 1.143, 1.143], ["thickness", 0.152]], ["justify", "left", "mirror"]],
        ]

    def test_unknown_layer_raises(self):
        fields = ["L", "4050", "3050", "0.6", "0", "0", "55", "", "4.5", "Hello", "", "", "gge82", "", "0"]
        with pytest.raises(MissingLayerError):
            convert_text(fields)
