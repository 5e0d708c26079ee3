"""Where thumbnails live on disk and the URL they are served from."""
from pathlib import Path
from tubely.config import Settings


def ensure_assets_dir(settings: Settings) -> Path:
    root = Path(settings.assets_root)
    root.mkdir(parents=True, exist_ok=True)
    return root


def media_type_to_extension(media_type: str) -> str:
    """'image/PNG' -> '.png'. Anything that is not exactly '<type>/<subtype>' -> '.bin'."""
    parts = media_type.split("/")
    if len(parts) != 2:
        return ".bin"
    return f".{parts[1].lower()}"


def get_asset_disk_path(settings: Settings, file_name: str) -> Path:
    return Path(settings.assets_root) / file_name


def get_asset_url(settings: Settings, file_name: str) -> str:
    return f"http://localhost:{settings.port}/assets/{file_name}"
