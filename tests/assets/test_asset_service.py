"""资源服务（列表/上传/删除）的单元测试。"""

from pathlib import Path
from urllib.parse import unquote

import pytest

from iconhub.packages.assets.core.enums import AssetErrorKind
from iconhub.packages.assets.core.exceptions import AssetError
from iconhub.packages.assets.services.asset_service import UploadItem
from iconhub.packages.assets.services.asset_store import AssetStore

SVG = b'<svg xmlns="http://www.w3.org/2000/svg"/>'


def _item(name, data=SVG, content_type="image/svg+xml"):
    return UploadItem(filename=name, content_type=content_type, data=data)


def _names(descriptors):
    return {(d.category, d.name) for d in descriptors}


def test_upload_then_list_reports_size(asset_service):
    outcome = asset_service.upload_assets("UI", [_item("home.svg")])
    assert [d.name for d in outcome.accepted] == ["home.svg"]
    listed = asset_service.list_assets("UI")
    assert [(d.name, d.size) for d in listed] == [("home.svg", len(SVG))]


def test_upload_delete_list(asset_service):
    asset_service.upload_assets("UI", [_item("home.svg")])
    outcome = asset_service.delete_asset("home.svg", "UI")
    assert outcome.to_dict() == {"ok": True, "deletedName": "home.svg", "categoryFound": "UI"}
    assert asset_service.list_assets("UI") == []


def test_default_and_missing_category_share_root(asset_service, store_root):
    asset_service.upload_assets("default", [_item("a.svg")])
    assert (store_root / "a.svg").is_file()
    assert ("default", "a.svg") in _names(asset_service.list_assets())


def test_list_without_category_aggregates_root_and_categories(asset_service):
    asset_service.upload_assets(None, [_item("root.svg")])
    asset_service.upload_assets("UI", [_item("ui.svg")])
    asset_service.upload_assets("Apps", [_item("app.png", b"png", "image/png")])
    assert _names(asset_service.list_assets()) == {
        ("default", "root.svg"),
        ("UI", "ui.svg"),
        ("Apps", "app.png"),
    }
    assert _names(asset_service.list_assets("UI")) == {("UI", "ui.svg")}


def test_list_unknown_category_is_empty_and_not_created(asset_service, store_root):
    assert asset_service.list_assets("Nope") == []
    assert not (store_root / "Nope").exists()


def test_batch_rejections_do_not_block_others(asset_service):
    outcome = asset_service.upload_assets(
        "UI",
        [
            _item("ok.svg"),
            _item("virus.exe", b"MZ", "application/octet-stream"),
            _item("fake.svg", SVG, "text/html"),
            _item("big.png", b"x" * 2048, "image/png"),
            _item("ok.png", b"png", "image/png"),
        ],
    )
    assert [d.name for d in outcome.accepted] == ["ok.svg", "ok.png"]
    kinds = {err.name: err.kind for err in outcome.rejected}
    assert kinds == {
        "virus.exe": AssetErrorKind.TYPE_NOT_ALLOWED,
        "fake.svg": AssetErrorKind.TYPE_NOT_ALLOWED,
        "big.png": AssetErrorKind.SIZE_EXCEEDED,
    }
    assert "virus.exe" not in {d.name for d in asset_service.list_assets()}


def test_count_limit_rejects_overflow_items(asset_service):
    items = [_item(f"i{n}.svg") for n in range(7)]
    outcome = asset_service.upload_assets(None, items)
    assert len(outcome.accepted) == 5
    assert [err.kind for err in outcome.rejected] == [AssetErrorKind.COUNT_EXCEEDED] * 2


def test_generic_content_type_falls_back_to_extension(asset_service):
    outcome = asset_service.upload_assets(None, [_item("a.png", b"png", "application/octet-stream"), _item("b.svg", SVG, None)])
    assert [d.type for d in outcome.accepted] == ["image/png", "image/svg+xml"]


def test_duplicate_names_last_writer_wins(asset_service):
    asset_service.upload_assets(None, [_item("a.svg", b"<svg>1</svg>"), _item("a.svg", b"<svg/>")])
    assert [(d.name, d.size) for d in asset_service.list_assets()] == [("a.svg", 6)]


def test_delete_without_category_prefers_root(asset_service, store_root):
    asset_service.upload_assets(None, [_item("a.svg")])
    asset_service.upload_assets("X", [_item("a.svg")])
    outcome = asset_service.delete_asset("a.svg")
    assert outcome.category_found == "default"
    assert not (store_root / "a.svg").exists()
    assert (store_root / "X" / "a.svg").is_file()


def test_delete_unknown_is_not_found(asset_service):
    with pytest.raises(AssetError) as exc_info:
        asset_service.delete_asset("never.svg")
    assert exc_info.value.kind is AssetErrorKind.NOT_FOUND


def test_traversal_upload_stays_inside_root(asset_service, store_root):
    outcome = asset_service.upload_assets("../../etc", [_item("../../passwd.svg")])
    assert outcome.accepted[0].category == "etc"
    assert (store_root / "etc" / "passwd.svg").is_file()
    for path in store_root.parent.rglob("passwd.svg"):
        assert store_root in path.parents


def test_url_round_trip_addresses_same_file(asset_service, store_root):
    outcome = asset_service.upload_assets("Social Media", [_item("my icon #1.svg")])
    descriptor = outcome.accepted[0]
    category, name = [unquote(part) for part in descriptor.url[len("/uploads/"):].split("/")]
    directory = asset_service.resolver.resolve(category)
    assert directory.path / name == store_root / "Social Media" / "my icon #1.svg"
    assert AssetStore(directory).get(name) == SVG


def test_read_svg_finds_category_copy(asset_service):
    asset_service.upload_assets("UI", [_item("logo.svg")])
    text, category = asset_service.read_svg("logo.svg")
    assert text == SVG.decode()
    assert category == "UI"


def test_read_svg_rejects_png(asset_service):
    with pytest.raises(AssetError) as exc_info:
        asset_service.read_svg("logo.png")
    assert exc_info.value.kind is AssetErrorKind.TYPE_NOT_ALLOWED


def test_unusable_names_are_invalid(asset_service):
    outcome = asset_service.upload_assets(None, [_item("../"), _item(".~upload-x.svg"), _item(None)])
    assert outcome.accepted == []
    assert [err.kind for err in outcome.rejected] == [AssetErrorKind.INVALID_NAME] * 3


def test_delete_io_error_during_lookup_is_delete_failed(asset_service, monkeypatch):
    asset_service.upload_assets("UI", [_item("a.svg")])
    real_lstat = Path.lstat

    def _lstat(self):
        if self.name == "a.svg":
            raise PermissionError("denied")
        return real_lstat(self)

    monkeypatch.setattr(Path, "lstat", _lstat)
    with pytest.raises(AssetError) as exc_info:
        asset_service.delete_asset("a.svg", "UI")
    assert exc_info.value.kind is AssetErrorKind.DELETE_FAILED


def test_symlinked_category_does_not_expose_outside_files(asset_service, store_root, tmp_path):
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "secret.svg").write_bytes(b"<svg>secret</svg>")
    store_root.mkdir()
    (store_root / "evil").symlink_to(outside, target_is_directory=True)

    assert asset_service.list_assets("evil") == []
    assert asset_service.list_assets() == []
    with pytest.raises(AssetError) as exc_info:
        asset_service.read_asset("secret.svg", "evil")
    assert exc_info.value.kind is AssetErrorKind.NOT_FOUND


@pytest.mark.parametrize("category", ["..", "/", "../"])
def test_list_unaddressable_category_is_empty(asset_service, category):
    asset_service.upload_assets(None, [_item("root.svg")])
    assert asset_service.list_assets(category) == []


def test_upload_item_size_is_payload_length():
    assert _item("a.svg", b"12345").size == 5
