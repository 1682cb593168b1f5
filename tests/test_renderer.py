"""Tests renderer HTML — dispatch par tag, liens externes, embeds vidéo, container récursif."""
import pytest

from page_builder.renderer import embed_url, is_external, render_block, render_blocks, render_page_header


def _block(block_type, **content):
    return {"id": f"{block_type}-1", "type": block_type, "contentJson": content}


# ── Tag inconnu ──────────────────────────────────────────────────────────────

def test_unknown_tag_renders_nothing():
    assert render_block(_block("hologram", foo="bar")) is None


def test_unknown_tag_does_not_affect_siblings():
    blocks = [
        _block("text", html="<p>prima</p>"),
        _block("hologram"),
        _block("text", html="<p>dopo</p>"),
    ]
    out = render_blocks(blocks)
    assert len(out) == 2
    assert "<p>prima</p>" in out[0]
    assert "<p>dopo</p>" in out[1]


def test_invalid_content_degrades_to_empty_block():
    html = render_block(_block("gallery", images="not-a-list"))
    assert html == '<div class="block block--gallery block--invalid"></div>'


def test_unknown_tag_with_non_dict_content_is_skipped():
    blocks = [
        _block("text", html="<p>prima</p>"),
        {"id": "x", "type": "mystery", "contentJson": "legacy"},
        _block("text", html="<p>dopo</p>"),
    ]
    out = render_blocks(blocks)
    assert len(out) == 2
    assert "<p>dopo</p>" in out[1]


def test_known_tag_with_non_dict_content_degrades():
    html = render_block({"id": "b1", "type": "text", "contentJson": "legacy"})
    assert html == '<div class="block block--text block--invalid"></div>'


@pytest.mark.parametrize("entry", [None, "text", 42, {"type": ["text"]}, {"contentJson": {}}])
def test_malformed_entry_renders_nothing(entry):
    assert render_block(entry) is None


# ── Text ─────────────────────────────────────────────────────────────────────

def test_text_html_injected_verbatim():
    html = render_block(_block("text", html="<h2>Onde</h2><p>Ciao <strong>surfer</strong></p>"))
    assert "<h2>Onde</h2><p>Ciao <strong>surfer</strong></p>" in html


def test_text_missing_html_does_not_crash():
    assert 'class="text-block prose"' in render_block(_block("text"))


# ── Image ────────────────────────────────────────────────────────────────────

def test_image_alt_defaults_to_empty():
    html = render_block(_block("image", imageUrl="/img/spot.jpg"))
    assert 'src="/img/spot.jpg"' in html
    assert 'alt=""' in html
    assert "figcaption" not in html


def test_image_caption_rendered():
    html = render_block(_block("image", imageUrl="/a.jpg", caption="Tramonto"))
    assert '<figcaption class="image-block__caption">Tramonto</figcaption>' in html


def test_image_external_link():
    html = render_block(_block("image", imageUrl="/a.jpg", link="https://example.com"))
    assert 'href="https://example.com" target="_blank" rel="noopener noreferrer"' in html


def test_image_alignment_class():
    assert "image-block__img--center" in render_block(_block("image", imageUrl="/a.jpg", alignment="center"))


def test_image_unknown_alignment_is_ignored():
    html = render_block(_block("image", imageUrl="/a.jpg", alignment="justify"))
    assert 'src="/a.jpg"' in html
    assert "image-block__img--" not in html


# ── CTA ──────────────────────────────────────────────────────────────────────

def test_cta_external_link_opens_new_tab():
    html = render_block(_block("cta", title="Prenota", buttonText="Vai", buttonUrl="http://external.example"))
    assert 'target="_blank"' in html
    assert 'rel="noopener noreferrer"' in html


def test_cta_internal_link_has_no_new_tab():
    html = render_block(_block("cta", title="Prenota", buttonText="Vai", buttonUrl="/internal"))
    assert 'href="/internal"' in html
    assert "target=" not in html
    assert "noreferrer" not in html


def test_cta_variant_class():
    html = render_block(_block("cta", title="T", buttonText="B", buttonUrl="/", variant="outline"))
    assert "btn btn-outline btn-lg" in html
    default = render_block(_block("cta", title="T", buttonText="B", buttonUrl="/"))
    assert "btn btn-default btn-lg" in default


def test_cta_unknown_variant_falls_back_to_default():
    html = render_block(_block("cta", title="Prenota", buttonText="Vai", buttonUrl="/", variant="primary"))
    assert "btn btn-default btn-lg" in html
    assert "Prenota" in html


def test_cta_description_optional():
    html = render_block(_block("cta", title="T", buttonText="B", buttonUrl="/"))
    assert "cta-block__description" not in html


def test_is_external_is_literal_prefix():
    assert is_external("http://a.b")
    assert is_external("https://a.b")
    assert not is_external("/corsi")
    assert not is_external("mailto:info@example.com")


# ── Gallery ──────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("columns,expected", [(2, 2), (3, 3), (4, 4)])
def test_gallery_supported_columns(columns, expected):
    html = render_block(_block("gallery", images=[], columns=columns))
    assert f"gallery-block--cols-{expected}" in html


@pytest.mark.parametrize("columns", [1, 5, 6, 0, -3, 12, 2.5, "four", None, True])
def test_gallery_other_columns_fall_back_to_three(columns):
    html = render_block(_block("gallery", images=[{"url": "/1.jpg"}], columns=columns))
    assert "gallery-block--cols-3" in html
    assert 'src="/1.jpg"' in html


def test_gallery_numeric_string_columns():
    assert "gallery-block--cols-4" in render_block(_block("gallery", columns="4"))


def test_gallery_unknown_variant_keeps_images():
    html = render_block(_block("gallery", images=[{"url": "/1.jpg"}], variant="slideshow"))
    assert "block--invalid" not in html
    assert 'src="/1.jpg"' in html


def test_gallery_default_alt_and_order():
    html = render_block(_block("gallery", images=[
        {"url": "/1.jpg"}, {"url": "/2.jpg", "alt": "Secondo", "caption": "Onda"},
    ]))
    assert 'alt="Gallery image 1"' in html
    assert 'alt="Secondo"' in html
    assert html.index("/1.jpg") < html.index("/2.jpg")
    assert "Onda" in html


# ── Video ────────────────────────────────────────────────────────────────────

def test_embed_youtu_be_short_link():
    assert embed_url("https://youtu.be/abc123?t=5") == "https://www.youtube.com/embed/abc123"


def test_embed_youtube_watch():
    assert embed_url("https://www.youtube.com/watch?v=xyz789") == "https://www.youtube.com/embed/xyz789"


def test_embed_youtube_without_v_is_undefined():
    assert embed_url("https://www.youtube.com/channel/abc") == "https://www.youtube.com/embed/undefined"


def test_embed_vimeo():
    assert embed_url("https://vimeo.com/76979871?share=copy") == "https://player.vimeo.com/video/76979871"


def test_embed_other_url_unchanged():
    url = "https://player.example.com/embed/99"
    assert embed_url(url) == url


def test_video_block_iframe():
    html = render_block(_block("video", videoUrl="https://youtu.be/abc123?t=5", title="Take off"))
    assert 'src="https://www.youtube.com/embed/abc123"' in html
    assert "Take off" in html


# ── Container ────────────────────────────────────────────────────────────────

def test_container_columns_grid():
    html = render_block(_block("container", layout="columns", columns=3, children=[]))
    assert "grid-template-columns:repeat(3,minmax(0,1fr))" in html
    assert "gap:1rem" in html


def test_container_columns_out_of_range_falls_back_to_two():
    html = render_block(_block("container", layout="columns", columns=9))
    assert "repeat(2,minmax(0,1fr))" in html


@pytest.mark.parametrize("columns", ["six", 2.5, [3]])
def test_container_non_integer_columns_fall_back_to_two(columns):
    html = render_block(_block("container", layout="columns", columns=columns,
                               children=[{"type": "text", "content": {"html": "<p>ok</p>"}}]))
    assert "repeat(2,minmax(0,1fr))" in html
    assert "<p>ok</p>" in html


def test_container_unknown_layout_is_columns():
    html = render_block(_block("container", layout="diagonal", columns=3))
    assert "repeat(3,minmax(0,1fr))" in html


def test_container_rows_is_vertical_flex():
    html = render_block(_block("container", layout="rows", columns=4, gap="2rem"))
    assert "flex-direction:column" in html
    assert "gap:2rem" in html
    assert "grid-template-columns" not in html


def test_container_only_set_spacing_is_emitted():
    html = render_block(_block("container", spacing={"paddingTop": "2rem", "marginLeft": "0", "paddingBottom": ""}))
    assert "padding-top:2rem" in html
    assert "margin-left:0" in html
    assert "padding-bottom" not in html
    assert "margin-right" not in html


def test_container_renders_children_recursively():
    html = render_block(_block("container", layout="rows", children=[
        {"id": "c1", "type": "text", "content": {"html": "<p>figlio</p>"}},
        {"id": "c2", "type": "hologram", "content": {}},
        {"type": "container", "layout": "columns", "columns": 2, "children": [
            {"type": "cta", "title": "Annidato", "buttonText": "Vai", "buttonUrl": "/x"},
        ]},
    ]))
    assert "<p>figlio</p>" in html
    assert "Annidato" in html
    assert html.count('class="container-block') == 2


def test_container_child_with_numeric_id():
    html = render_block(_block("container", layout="rows", children=[
        {"id": 1, "type": "text", "content": {"html": "<p>ciao</p>"}},
        {"id": 2, "type": "text", "contentJson": "legacy"},
    ]))
    assert "<p>ciao</p>" in html
    assert "block--text block--invalid" in html


def test_container_without_children_renders_empty_wrapper():
    html = render_block(_block("container"))
    assert html.startswith('<div class="container-block container-block--columns')


# ── Banner ───────────────────────────────────────────────────────────────────

def test_banner_fullwidth_with_cta():
    html = render_block(_block(
        "banner", variant="fullwidth", backgroundColor="#003366",
        content={"title": "Estate 2025", "subtitle": "Corsi aperti"},
        cta={"text": "Iscriviti", "link": "/corsi"},
    ))
    assert "banner-block--fullwidth" in html
    assert "background-color:#003366" in html
    assert "Estate 2025" in html
    assert 'href="/corsi"' in html


# ── Page header ──────────────────────────────────────────────────────────────

def test_page_header_without_image_uses_gradient():
    html = render_page_header("Corsi")
    assert "page-header__gradient" in html
    assert "pt-16 pb-24" in html
    assert "min-h-96" in html


def test_page_header_with_image_and_subtitle():
    html = render_page_header("Corsi", image_url="/h.jpg", subtitle="Impara a surfare")
    assert 'src="/h.jpg"' in html
    assert "Impara a surfare" in html
