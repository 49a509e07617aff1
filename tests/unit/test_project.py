"""Tests for the project aggregate."""

import pytest

from tabletcontrol.core.errors import InputError
from tabletcontrol.models import ComponentData, PageData, ProjectData, repaired


@pytest.fixture
def project():
    project = ProjectData(name="Demo")
    for name in ("Main", "Settings", "About"):
        project.add_page(name)
    return project


# ============================================================================
# Pages
# ============================================================================

@pytest.mark.unit
def test_defaults():
    project = ProjectData()

    assert project.name == "New Project"
    assert project.version == "1.0.0"
    assert project.edit_resolution == "1366x768"
    assert project.is_empty()
    assert project.current_page is None
    assert project.last_modified_time == project.created_time


@pytest.mark.unit
def test_first_page_becomes_current(project):
    assert project.pages == ["Main", "Settings", "About"]
    assert project.current_page == "Main"
    assert project.current_page_data().name == "Main"


@pytest.mark.unit
def test_add_existing_name_is_noop(project):
    main = project.get_page("Main")

    assert not project.add_page("Main")
    assert project.pages.count("Main") == 1
    assert project.get_page("Main") is main


@pytest.mark.unit
def test_add_page_data_replaces_stored_page(project, button):
    replacement = PageData(name="Main")
    replacement.add_component(button)

    project.add_page(replacement)

    assert project.pages == ["Main", "Settings", "About"]
    assert project.get_page("Main") is replacement


@pytest.mark.unit
@pytest.mark.parametrize("name", [None, "", "   "])
def test_add_blank_page_rejected(project, name):
    with pytest.raises(InputError):
        project.add_page(name)


@pytest.mark.unit
def test_remove_current_page_moves_pointer(project):
    assert project.remove_page("Main")

    assert project.pages == ["Settings", "About"]
    assert project.current_page == "Settings"
    assert not project.remove_page("Main")


@pytest.mark.unit
def test_remove_every_page_clears_pointer(project):
    for name in list(project.pages):
        project.remove_page(name)

    assert project.current_page is None
    assert project.is_empty()


@pytest.mark.unit
def test_rename_keeps_position_and_pointer(project):
    assert project.rename_page("Main", "Home")

    assert project.pages == ["Home", "Settings", "About"]
    assert project.current_page == "Home"
    assert project.get_page("Home").name == "Home"
    assert not project.has_page("Main")
    assert project.validate_integrity()


@pytest.mark.unit
def test_rename_refusals(project):
    assert not project.rename_page("Main", "Settings")
    assert not project.rename_page("Missing", "Other")
    assert not project.rename_page("Main", "  ")
    assert project.pages == ["Main", "Settings", "About"]


@pytest.mark.unit
def test_set_current_page(project):
    assert project.set_current_page("About")
    assert not project.set_current_page("Missing")
    assert project.current_page == "About"


@pytest.mark.unit
def test_lookup_is_case_sensitive(project):
    assert project.has_page("Main")
    assert not project.has_page("main")
    assert project.get_page("MAIN") is None


@pytest.mark.unit
def test_component_count_and_summary(project, button, slider):
    project.get_page("Main").add_component(button)
    project.get_page("About").add_component(slider)

    assert project.total_component_count() == 2
    assert "pages: 3" in project.project_summary()


@pytest.mark.unit
@pytest.mark.parametrize(
    "resolution,size",
    [("1366x768", (1366, 768)), (" 800 X 600 ", (800, 600)), ("wide", None), (None, None)],
)
def test_edit_resolution_size(resolution, size):
    assert ProjectData(edit_resolution=resolution).edit_resolution_size() == size


# ============================================================================
# Integrity
# ============================================================================

@pytest.mark.unit
def test_untyped_component_scenario():
    """An untyped component invalidates the project until repair removes it."""
    project = ProjectData()
    project.add_page("Main")
    project.add_page("P2")
    untyped = ComponentData(function_type=None, width=10, height=10)
    project.get_page("P2").add_component(untyped)

    assert not project.validate_integrity()

    project.repair_integrity()

    assert project.validate_integrity()
    assert untyped not in project.get_page("P2").components
    assert project.get_page("P2").is_empty()


@pytest.mark.unit
def test_repair_structural_damage():
    """Duplicates, dangling names, orphaned data and a bad pointer are all fixed."""
    project = ProjectData(
        pages=["A", "A", "B", None, "C"],
        page_contents={"A": PageData(name="X"), "B": None, "D": PageData(name="D")},
        current_page="D",
    )
    assert not project.validate_integrity()

    report = project.repair_integrity()

    assert report
    assert project.pages == ["A"]
    assert list(project.page_contents) == ["A"]
    assert project.get_page("A").name == "A"
    assert project.current_page == "A"
    assert project.validate_integrity()


@pytest.mark.unit
def test_repair_empties_project_when_nothing_survives():
    project = ProjectData(pages=["Ghost"], current_page="Ghost")

    project.repair_integrity()

    assert project.pages == []
    assert project.current_page is None
    assert project.validate_integrity()


@pytest.mark.unit
def test_repair_is_idempotent(project):
    project.pages.append("Settings")
    project.get_page("About").components.append(None)

    assert project.repair_integrity()
    snapshot = project.to_document()

    assert not project.repair_integrity()
    assert project.to_document() == snapshot


@pytest.mark.unit
def test_repaired_copy(project):
    project.current_page = "Missing"

    fixed, report = repaired(project)

    assert report
    assert project.current_page == "Missing"
    assert fixed.current_page == "Main"


# ============================================================================
# Document mapping
# ============================================================================

@pytest.mark.unit
def test_document_round_trip(project, button, slider):
    project.get_page("Settings").add_component(button)
    project.get_page("Settings").add_component(slider)
    project.set_current_page("Settings")

    document = project.to_document()
    loaded = ProjectData.from_document(document)

    assert loaded.pages == project.pages
    assert loaded.current_page == "Settings"
    assert loaded.to_document() == document
    assert loaded.get_page("Settings").get_component(1).relative_position == slider.relative_position


@pytest.mark.unit
def test_document_field_names(project):
    document = project.to_document()

    for key in ("name", "description", "version", "editResolution", "createdTime",
                "lastModifiedTime", "pages", "currentPage", "pageContents"):
        assert key in document
    assert document["pageContents"]["Main"]["backgroundImage"] is None


@pytest.mark.unit
def test_document_null_collections():
    project = ProjectData.from_document({"name": "Old", "pages": None, "pageContents": None})

    assert project.pages == []
    assert project.page_contents == {}
    assert project.validate_integrity()
