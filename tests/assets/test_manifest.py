"""资源清单构建的单元测试。"""

import math

import pytest

from iconhub.packages.assets.services.manifest import coerce_size, infer_type, public_url, to_descriptor


@pytest.mark.parametrize(
    "name, expected",
    [
        ("a.svg", "image/svg+xml"),
        ("A.SVG", "image/svg+xml"),
        ("b.png", "image/png"),
        ("c.exe", "application/octet-stream"),
        ("README", "application/octet-stream"),
        ("archive.svg.zip", "application/octet-stream"),
    ],
)
def test_infer_type_uses_extension_only(name, expected):
    assert infer_type(name) == expected


@pytest.mark.parametrize("value", [None, "12", math.nan, math.inf, True, [1]])
def test_size_defaults_to_zero(value):
    assert coerce_size(value) == 0


def test_size_passes_numbers_through():
    assert coerce_size(42) == 42
    assert coerce_size(42.0) == 42


def test_default_category_url_has_no_segment():
    assert public_url("/uploads", None, "a b.svg") == "/uploads/a%20b.svg"
    assert public_url("/uploads", "default", "a.svg") == "/uploads/a.svg"


def test_category_url_is_encoded():
    assert public_url("/uploads", "Social Media", "it's #1.png") == "/uploads/Social%20Media/it's%20%231.png"


def test_descriptor_fields():
    descriptor = to_descriptor("/uploads", None, "home.svg", 120)
    assert descriptor.to_dict() == {
        "name": "home.svg",
        "url": "/uploads/home.svg",
        "type": "image/svg+xml",
        "size": 120,
        "category": "default",
    }
    assert to_descriptor("/uploads", "UI", "x.png", None).size == 0
