"""Wavefront OBJ/MTL models, geometry, textures, resampling, ring buffers and viseme mixtures."""

__version__ = "0.1.0"