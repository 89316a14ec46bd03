"""Tests for asset path resolution."""

import pytest

from slides_md.assets import asset_relative_path, is_absolute_target, resolve_asset_path


@pytest.mark.parametrize("target", [
    "http://example.com/a.png",
    "https://example.com/a.png",
    "HTTPS://EXAMPLE.COM/A.PNG",
    "data:image/png;base64,AAAA",
    "/static/a.png",
])
def test_absolute_targets_unchanged(target):
    assert is_absolute_target(target)
    assert resolve_asset_path(target) == target


@pytest.mark.parametrize("target, expected", [
    ("pic.png", "/assets/pic.png"),
    ("img/diagram.svg", "/assets/img/diagram.svg"),
    ("../shared/logo.png", "/assets/../shared/logo.png"),
    ("ftp://host/file", "/assets/ftp://host/file"),
])
def test_relative_targets_mounted(target, expected):
    assert resolve_asset_path(target) == expected


def test_asset_relative_path():
    assert asset_relative_path("/assets/img/a.png") == "img/a.png"
    assert asset_relative_path("https://h/a.png") == ""
