"""Batch visual-regression driver around the pixelmatch container.

Compares every PNG in a source directory with the same-named PNG in a target
directory by running the external pixelmatch tool once per pair, then prints
which files differ in dimensions and which differ in pixels.
"""

__all__: list[str] = []
