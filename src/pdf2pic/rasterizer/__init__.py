"""Adapter over poppler (through pdf2image) and Pillow."""

from pdf2pic.rasterizer.image_converter import Rasterizer

__all__ = ["Rasterizer"]
