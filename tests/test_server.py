"""Tests for the deck HTTP server."""

import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from slides_md.config import Theme
from slides_md.content import build_deck
from slides_md.server import create_app

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


@pytest.fixture
def asset_dir():
    with tempfile.TemporaryDirectory() as tmp:
        (Path(tmp) / "img").mkdir()
        (Path(tmp) / "img" / "pic.png").write_bytes(PNG_BYTES)
        yield Path(tmp)


@pytest.fixture
def theme():
    return Theme(css="body { background: black; }", title="Served", last_slide="# Bye")


@pytest.fixture
def client(asset_dir, theme):
    deck = build_deck("# Hello\n![pic](img/pic.png)\n---\n# World", theme)
    return TestClient(create_app(deck, theme, asset_dir=asset_dir))


def test_index_serves_page(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "<h1>Hello</h1>" in response.text
    assert '<img src="/assets/img/pic.png" alt="pic"/>' in response.text
    assert 'id="slide-3"' in response.text
    assert "<h1>Bye</h1>" in response.text


def test_stylesheet(client, theme):
    response = client.get("/style.css")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/css")
    assert response.text == theme.css


def test_assets_served_from_document_dir(client):
    response = client.get("/assets/img/pic.png")
    assert response.status_code == 200
    assert response.content == PNG_BYTES


def test_missing_asset_is_404(client):
    assert client.get("/assets/img/missing.png").status_code == 404


def test_no_asset_dir(theme):
    deck = build_deck("# A", theme)
    client = TestClient(create_app(deck, theme))
    assert client.get("/").status_code == 200
    assert client.get("/assets/x.png").status_code == 404


def test_nonexistent_asset_dir_is_not_mounted(theme):
    deck = build_deck("# A", theme)
    client = TestClient(create_app(deck, theme, asset_dir="/nonexistent/dir"))
    assert client.get("/assets/x.png").status_code == 404
