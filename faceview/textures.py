"""Image textures loaded from disk and a store that shares them by path."""

from __future__ import annotations

import itertools
import logging
from typing import Optional

from PIL import Image

log = logging.getLogger(__name__)

_texture_ids = itertools.count(1)


class Texture:
    """An RGBA image flipped bottom-to-top, identified by a positive id."""

    def __init__(self) -> None:
        self.pathname = ""
        self.texid = 0
        self.image: Optional[Image.Image] = None

    @staticmethod
    def _read(pathname: str) -> Image.Image:
        with Image.open(pathname) as im:
            return im.convert("RGBA").transpose(Image.Transpose.FLIP_TOP_BOTTOM)

    def load(self, pathname: str) -> int:
        """Load the image at ``pathname`` and return the new texture id.

        Raises OSError if the image cannot be read.
        """
        self.image = self._read(pathname)
        self.pathname = pathname
        self.texid = next(_texture_ids)
        return self.texid

    def reload(self) -> None:
        """Read the image again from its path, keeping the same id."""
        if not self.pathname:
            raise OSError("texture has not been loaded")
        self.image = self._read(self.pathname)


class TextureStore:
    """Loads each texture path once and hands out its id."""

    def __init__(self) -> None:
        self.textures: list[Texture] = []

    def find_or_add(self, pathname: str) -> int:
        """Return the id of the texture at ``pathname``, loading it if new.

        Paths compare case-insensitively. Returns 0 if the image cannot be loaded.
        """
        key = pathname.casefold()
        for texture in self.textures:
            if texture.pathname.casefold() == key:
                log.debug("found existing texture %r => %d", pathname, texture.texid)
                return texture.texid
        texture = Texture()
        try:
            texture.load(pathname)
        except OSError:
            log.debug("failed to load texture %r", pathname)
            return 0
        self.textures.append(texture)
        log.debug("added texture %r => %d", pathname, texture.texid)
        return texture.texid

    def reload(self) -> None:
        """Reload every texture from disk."""
        for texture in self.textures:
            texture.reload()

    def __len__(self) -> int:
        return len(self.textures)