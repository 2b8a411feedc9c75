"""HTML generation for blog posts: markdown rendering, page templates,
directory conversion and the post manifest."""

from .metadata import build_manifest, update_metadata
from .pipeline import ConversionPipeline

__all__ = ["ConversionPipeline", "build_manifest", "update_metadata"]
