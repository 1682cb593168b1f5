"""Tests éditeurs — fusion + émission du contenu complet, panneaux, champs protégés."""
import pytest

from page_builder.blocks import ContainerBlockContent
from page_builder.editor import (
    BannerBlockEditor, ContainerBlockEditor, GalleryBlockEditor, ImageBlockEditor,
    TextBlockEditor, editor_for,
)
from page_builder.errors import UnrecognizedBlockType, ValidationFailure


@pytest.fixture
def emitted():
    return []


@pytest.fixture
def container(emitted):
    content = {
        "layout": "columns", "columns": 3, "gap": "1rem",
        "children": [{"type": "text", "content": {"html": "<p>a</p>"}}, {"type": "image", "content": {}}],
    }
    return ContainerBlockEditor(content, emitted.append)


# ── update_content ───────────────────────────────────────────────────────────

def test_update_content_emits_once_with_merged_content(container, emitted):
    result = container.update_content({"gap": "2rem"})
    assert len(emitted) == 1
    assert emitted[0] is result
    assert result.gap == "2rem"
    assert result.columns == 3
    assert result.layout == "columns"
    assert len(result.children) == 2


def test_every_edit_emits_exactly_once(container, emitted):
    container.update_content(gap="3rem")
    container.update_content(layout="rows")
    container.update_spacing("paddingTop", "1rem")
    assert len(emitted) == 3
    assert emitted[-1].gap == "3rem"
    assert emitted[-1].layout == "rows"


def test_update_content_produces_new_value(container, emitted):
    before = container.content
    after = container.update_content(gap="4rem")
    assert after is not before
    assert before.gap == "1rem"


def test_camel_case_keys_accepted():
    emitted = []
    editor = editor_for("cta", {"title": "T"}, emitted.append)
    editor.update_content({"buttonText": "Prenota"})
    assert emitted[0].button_text == "Prenota"
    assert emitted[0].title == "T"


# ── update_spacing ───────────────────────────────────────────────────────────

def test_update_spacing_keeps_previous_fields(container, emitted):
    container.update_spacing("paddingTop", "2rem")
    container.update_spacing("marginLeft", "0")
    spacing = emitted[-1].spacing
    assert spacing.padding_top == "2rem"
    assert spacing.margin_left == "0"
    assert emitted[-1].to_json()["spacing"] == {"paddingTop": "2rem", "marginLeft": "0"}


def test_update_spacing_preserves_other_seven(emitted):
    full = {f: "1px" for f in ("paddingTop", "paddingBottom", "paddingLeft", "paddingRight",
                               "marginTop", "marginBottom", "marginLeft", "marginRight")}
    editor = ContainerBlockEditor({"spacing": full}, emitted.append)
    editor.update_spacing("margin_right", "8px")
    assert emitted[0].to_json()["spacing"] == {**full, "marginRight": "8px"}


def test_update_spacing_unknown_field(container, emitted):
    with pytest.raises(ValueError):
        container.update_spacing("borderTop", "1px")
    assert emitted == []


# ── Container ────────────────────────────────────────────────────────────────

def test_container_panels(container):
    assert [p.label for p in container.panels] == ["Layout", "Spaziatura"]
    assert container.panel("layout").fields == ("layout", "columns", "gap")
    assert len(container.panel("spacing").fields) == 8


def test_switching_to_rows_keeps_columns(container, emitted):
    container.update_content(layout="rows")
    assert emitted[-1].columns == 3
    assert "columns" not in container.visible_fields("layout")
    container.update_content(layout="columns")
    assert container.values("layout")["columns"] == 3


def test_children_are_read_only(container, emitted):
    assert container.children_count == 2
    with pytest.raises(ValidationFailure) as exc:
        container.update_content(children=[])
    assert exc.value.field == "children"
    assert emitted == []
    assert container.children_count == 2


def test_children_count_without_children(emitted):
    assert ContainerBlockEditor({}, emitted.append).children_count == 0


@pytest.mark.parametrize("columns", [0, 7, 12])
def test_container_columns_range(container, emitted, columns):
    with pytest.raises(ValidationFailure):
        container.update_content(columns=columns)
    assert emitted == []


def test_container_unknown_layout(container):
    with pytest.raises(ValidationFailure):
        container.update_content(layout="diagonal")


def test_unknown_field_rejected(container, emitted):
    with pytest.raises(ValidationFailure):
        container.update_content(rotation="45deg")
    assert emitted == []


def test_spacing_panel_values(container):
    container.update_spacing("paddingLeft", "5px")
    values = container.values("spacing")
    assert values["padding_left"] == "5px"
    assert values["margin_top"] is None


def test_accepts_typed_content(emitted):
    editor = ContainerBlockEditor(ContainerBlockContent(layout="rows"), emitted.append)
    assert editor.content.layout == "rows"


# ── Autres variantes ─────────────────────────────────────────────────────────

def test_editor_for_unknown_type():
    with pytest.raises(UnrecognizedBlockType):
        editor_for("hologram", {}, lambda c: None)


def test_editor_for_returns_variant():
    assert isinstance(editor_for("gallery", {}, lambda c: None), GalleryBlockEditor)


def test_image_dimensions_merge(emitted):
    editor = ImageBlockEditor({"imageUrl": "/a.jpg", "dimensions": {"width": "100%"}}, emitted.append)
    editor.update_dimensions("aspectRatio", "16/9")
    assert emitted[-1].dimensions.width == "100%"
    assert emitted[-1].dimensions.aspect_ratio == "16/9"
    assert emitted[-1].image_url == "/a.jpg"


def test_gallery_image_operations(emitted):
    editor = GalleryBlockEditor({"images": [{"url": "/1.jpg"}]}, emitted.append)
    editor.add_image("/2.jpg", alt="due")
    editor.update_image(0, "caption", "prima")
    editor.remove_image(1)
    assert len(emitted) == 3
    assert [img.url for img in emitted[-1].images] == ["/1.jpg"]
    assert emitted[-1].images[0].caption == "prima"


def test_gallery_columns_restricted(emitted):
    editor = GalleryBlockEditor({}, emitted.append)
    with pytest.raises(ValidationFailure):
        editor.update_content(columns=5)
    editor.update_content(columns=4)
    assert emitted[-1].columns == 4


def test_text_typography_merge(emitted):
    editor = TextBlockEditor({"html": "<p>x</p>", "typography": {"fontSize": "1rem"}}, emitted.append)
    editor.update_typography("color", "#333")
    assert emitted[-1].typography == {"fontSize": "1rem", "color": "#333"}
    assert emitted[-1].html == "<p>x</p>"


def test_banner_nested_updates(emitted):
    editor = BannerBlockEditor({"content": {"title": "Estate"}}, emitted.append)
    editor.update_text("subtitle", "Corsi aperti")
    editor.update_cta("text", "Iscriviti")
    assert emitted[-1].content.title == "Estate"
    assert emitted[-1].content.subtitle == "Corsi aperti"
    assert emitted[-1].cta.text == "Iscriviti"
    assert editor.values("content") == {"title": "Estate", "subtitle": "Corsi aperti"}


@pytest.mark.parametrize("block_type,field,value", [
    ("cta", "variant", "ghost"),
    ("image", "alignment", "justify"),
    ("gallery", "variant", "slideshow"),
    ("gallery", "columns", "four"),
    ("banner", "variant", "hero"),
    ("container", "columns", 2.5),
])
def test_editor_rejects_value_outside_choices(emitted, block_type, field, value):
    editor = editor_for(block_type, {}, emitted.append)
    with pytest.raises(ValidationFailure) as exc:
        editor.update_content({field: value})
    assert exc.value.field == field
    assert emitted == []


def test_editor_accepts_clearing_optional_choice(emitted):
    editor = ImageBlockEditor({"imageUrl": "/a.jpg", "alignment": "left"}, emitted.append)
    editor.update_content(alignment=None)
    assert emitted[-1].alignment is None
