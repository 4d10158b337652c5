"""
Rendering package - Pillow rasterisation of Wrapped cards and social previews.
"""
