"""Tubely: video hosting API (thumbnails on disk, fast-start MP4s in object storage)."""
