from pathlib import Path

from tubely.services.assets import (
    ensure_assets_dir,
    get_asset_disk_path,
    get_asset_url,
    media_type_to_extension,
)


def test_media_type_to_extension():
    assert media_type_to_extension("image/png") == ".png"
    assert media_type_to_extension("image/jpeg") == ".jpeg"
    assert media_type_to_extension("image/PNG") == ".png"
    assert media_type_to_extension("bogus") == ".bin"
    assert media_type_to_extension("a/b/c") == ".bin"
    assert media_type_to_extension("") == ".bin"


def test_ensure_assets_dir_is_idempotent(settings, tmp_path):
    settings.assets_root = str(tmp_path / "nested" / "assets")
    first = ensure_assets_dir(settings)
    second = ensure_assets_dir(settings)
    assert first == second
    assert first.is_dir()


def test_paths_and_urls(settings):
    assert get_asset_disk_path(settings, "abc.png") == Path(settings.assets_root) / "abc.png"
    assert get_asset_url(settings, "abc.png") == "http://localhost:8091/assets/abc.png"
