"""
Metaball Field
==============

Bouncing influence sources rendered as filled metaball contours.

Every frame:

  - Each source moves one velocity step and reflects off the viewport edges
  - The field Σ(sizeᵢ² / dᵢ²) is sampled lazily on a 5 px lattice, cached
    per node with an iteration stamp
  - A marching-squares walk from each source's nearest cell follows the
    |force| = 1 contour, interpolating crossings along cell edges
  - Each source's contour is filled independently with a radial gradient
  - The field polarity flips, so successive frames trace complementary
    surfaces

The geometry (``sources``, ``field``, ``tracer``, ``animator``) has no
graphics dependency; ``qt_surface`` and the viewer modules draw it with
PyQt5.
"""

__version__ = "1.0.0"
__author__ = "Metaball Field"
