"""faceclaimer: character image storage behind a small HTTP API.

Images are fetched from remote URLs, converted to WebP and stored write-once
under ``<images_dir>/<charid>/<objectid>.webp``. Deletion prunes directories
left empty, never the images directory itself.
"""

__version__ = "0.1.0"
