"""Tests for placed components."""

import pytest

from tabletcontrol.core.id import is_component_id
from tabletcontrol.models import (
    AbsolutePosition,
    ComponentData,
    LabelData,
    PositionMode,
    RelativePosition,
    UNKNOWN_FUNCTION_TYPE,
    repaired,
)


# ============================================================================
# Placement
# ============================================================================

@pytest.mark.unit
def test_absolute_position_is_returned_unscaled(button):
    """ABSOLUTE mode ignores the container size."""
    assert button.get_absolute_position(1920, 1080) == AbsolutePosition(10, 20, 120, 40)
    assert button.get_absolute_position(320, 240) == AbsolutePosition(10, 20, 120, 40)


@pytest.mark.unit
def test_relative_position_delegates(slider):
    """RELATIVE mode converts through the relative position."""
    expected = slider.relative_position.to_absolute(1000, 500)

    assert slider.get_absolute_position(1000, 500) == expected
    assert expected == AbsolutePosition(100, 250, 400, 50)


@pytest.mark.unit
def test_active_placement(button, slider):
    """The authoritative variant follows the position mode."""
    assert isinstance(button.active_placement(), AbsolutePosition)
    assert slider.active_placement() is slider.relative_position


@pytest.mark.unit
def test_set_relative_position_switches_mode(button):
    button.set_relative_position(RelativePosition.of(0.0, 0.0, 0.5, 0.5))

    assert button.position_mode == PositionMode.RELATIVE
    assert button.is_relative


@pytest.mark.unit
def test_update_relative_position(button):
    """Absolute fields become fractions and the component turns RELATIVE."""
    button.update_relative_position(800, 600)

    assert button.position_mode == PositionMode.RELATIVE
    assert button.relative_position.relative_x == pytest.approx(10 / 800)
    assert button.relative_position.relative_width == pytest.approx(120 / 800)
    assert button.get_absolute_position(800, 600) == AbsolutePosition(10, 20, 120, 40)


@pytest.mark.unit
@pytest.mark.parametrize("width,height", [(0, 600), (800, 0), (-800, 600)])
def test_update_relative_position_ignores_empty_container(button, width, height):
    button.update_relative_position(width, height)

    assert button.position_mode == PositionMode.ABSOLUTE
    assert button.relative_position is None


@pytest.mark.unit
def test_update_relative_position_keeps_pixel_bounds(button):
    """Recomputing fractions keeps previously configured min/max sizes."""
    button.relative_position = RelativePosition(min_width=80, min_height=30, max_width=600)

    button.update_relative_position(800, 600)

    assert button.relative_position.min_width == 80
    assert button.relative_position.min_height == 30
    assert button.relative_position.max_width == 600


@pytest.mark.unit
def test_update_absolute_position_keeps_mode(slider):
    """Absolute fields are materialised without switching mode."""
    slider.update_absolute_position(1000, 500)

    assert (slider.x, slider.y, slider.width, slider.height) == (100, 250, 400, 50)
    assert slider.position_mode == PositionMode.RELATIVE


@pytest.mark.unit
def test_update_absolute_position_without_relative_is_noop(button):
    button.update_absolute_position(1000, 500)

    assert (button.x, button.y, button.width, button.height) == (10, 20, 120, 40)


# ============================================================================
# Validation and repair
# ============================================================================

@pytest.mark.unit
def test_validity_rules(button, slider):
    assert button.is_valid()
    assert slider.is_valid()

    assert not ComponentData.absolute(0, 0, 10, 10, 10, 10, None).is_valid()
    assert not ComponentData.absolute(0, 0, 0, 10, 0, 10, "Button").is_valid()
    assert not ComponentData.relative(RelativePosition(relative_x=0.9, relative_width=0.5), "Slider").is_valid()


@pytest.mark.unit
def test_repair_manufactures_defaults():
    """Missing type, id and label are filled in; the rectangle becomes visible."""
    component = ComponentData(
        x=-5, y=3, width=0, height=-3, function_type=None, component_id=None, label_data=None
    )

    report = component.repair()

    assert report
    assert component.function_type == UNKNOWN_FUNCTION_TYPE
    assert is_component_id(component.component_id)
    assert component.label_data is not None
    assert (component.x, component.y, component.width, component.height) == (0, 3, 1, 1)
    assert component.is_valid()
    assert not component.repair()


@pytest.mark.unit
def test_repair_relative_mode_without_position_falls_back():
    """RELATIVE without a relative position becomes ABSOLUTE."""
    component = ComponentData(position_mode=PositionMode.RELATIVE, function_type="Button", width=10, height=10)

    component.repair()

    assert component.position_mode == PositionMode.ABSOLUTE
    assert component.is_valid()


@pytest.mark.unit
def test_repair_relative_position(slider):
    slider.relative_position.relative_x = 0.9

    report = slider.repair()

    assert report
    assert slider.relative_position.relative_x == pytest.approx(0.6)
    assert slider.is_valid()


@pytest.mark.unit
def test_repaired_returns_copy():
    component = ComponentData(function_type=None, width=10, height=10)

    fixed, report = repaired(component)

    assert report
    assert component.function_type is None
    assert fixed.function_type == UNKNOWN_FUNCTION_TYPE


@pytest.mark.unit
def test_repair_is_idempotent():
    """A second repair finds nothing left to change."""
    component = ComponentData(
        position_mode=PositionMode.RELATIVE,
        relative_position=RelativePosition(
            relative_x=1.4, relative_y=-0.2, relative_width=0.0, relative_height=0.3
        ),
        function_type=" ",
        component_id="",
        label_data=None,
    )

    assert component.repair()
    once = component.model_dump()

    assert not component.repair()
    assert component.model_dump() == once
    assert component.is_valid()


# ============================================================================
# Copy and document mapping
# ============================================================================

@pytest.mark.unit
def test_copy_generates_new_id(slider):
    """Copies are deep and never share identity with their source."""
    clone = slider.copy()

    assert clone.component_id != slider.component_id
    assert is_component_id(clone.component_id)
    assert clone.relative_position == slider.relative_position
    assert clone.relative_position is not slider.relative_position
    assert clone.label_data is not slider.label_data


@pytest.mark.unit
def test_new_components_have_unique_ids():
    first = ComponentData(function_type="Button")
    second = ComponentData(function_type="Button")

    assert first.component_id != second.component_id


@pytest.mark.unit
def test_document_fields(button):
    document = button.model_dump(by_alias=True, mode="json")

    assert document["positionMode"] == "ABSOLUTE"
    assert document["functionType"] == "Button"
    assert document["labelData"]["text"] == "OK"
    assert document["relativePosition"] is None
    for key in ("componentId", "originalWidth", "originalHeight", "cssClass", "tooltip", "visible", "enabled"):
        assert key in document


@pytest.mark.unit
def test_load_relative_document():
    component = ComponentData.model_validate(
        {
            "positionMode": "RELATIVE",
            "relativePosition": {"relativeX": 0.25, "relativeY": 0.5, "relativeWidth": 0.5, "relativeHeight": 0.25},
            "functionType": "Slider",
            "componentId": "legacy-id",
            "unknownField": 1,
        }
    )

    assert component.is_relative
    assert component.component_id == "legacy-id"
    assert component.relative_position.min_width == 50
    assert component.label_data == LabelData()


@pytest.mark.unit
def test_component_summary(button):
    summary = button.component_summary()

    assert "Button" in summary
    assert 'text: "OK"' in summary
    assert "(10,20)" in summary
