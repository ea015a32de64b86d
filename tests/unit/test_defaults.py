"""Unit tests for PDF layout defaults and YAML overrides."""

from pathlib import Path

import pytest
from omegaconf.errors import ConfigKeyError

from dossier.contexts.rendering import defaults
from dossier.contexts.rendering.defaults import PAGE_WIDTH, PDFLayout, load_pdf_layout

CONFIGS_PATH = Path(__file__).resolve().parents[2] / "configs"


@pytest.fixture(autouse=True)
def no_layout_env(monkeypatch):
    monkeypatch.setattr(defaults, "PDF_LAYOUT_CONFIG", None)


@pytest.mark.unit
def test_default_layout():
    layout = load_pdf_layout()

    assert layout == PDFLayout()
    assert layout.margin == 50
    assert (layout.title_size, layout.heading_size, layout.text_size) == (24, 16, 12)
    assert layout.line_height == 18
    assert layout.content_width == pytest.approx(PAGE_WIDTH - 100)


@pytest.mark.unit
def test_shipped_config_matches_defaults():
    assert load_pdf_layout(CONFIGS_PATH / "pdf_layout.yaml") == PDFLayout()


@pytest.mark.unit
def test_yaml_overrides(tmp_path):
    config = tmp_path / "layout.yaml"
    config.write_text("margin: 60\ntext_size: 11\n")

    layout = load_pdf_layout(config)

    assert isinstance(layout, PDFLayout)
    assert layout.margin == 60
    assert layout.text_size == 11
    assert layout.line_height == 18


@pytest.mark.unit
def test_env_config_is_used(tmp_path, monkeypatch):
    config = tmp_path / "layout.yaml"
    config.write_text("line_height: 16\n")
    monkeypatch.setattr(defaults, "PDF_LAYOUT_CONFIG", str(config))

    assert load_pdf_layout().line_height == 16


@pytest.mark.unit
def test_unknown_keys_rejected(tmp_path):
    config = tmp_path / "layout.yaml"
    config.write_text("page_width: 612\n")

    with pytest.raises(ConfigKeyError):
        load_pdf_layout(config)


@pytest.mark.unit
@pytest.mark.parametrize(
    "overrides",
    [
        {"margin": 0},
        {"text_size": -1},
        {"margin": 300},
        {"heading_reserve": 800},
        {"line_reserve": 150},
    ],
)
def test_inconsistent_layouts_rejected(overrides):
    with pytest.raises(ValueError):
        PDFLayout(**overrides)
