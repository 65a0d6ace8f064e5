"""Wavefront MTL material libraries."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from faceview.textures import TextureStore

log = logging.getLogger(__name__)


@dataclass
class Material:
    """Surface properties of one named material."""

    name: str = ""
    diffuse: list[float] = field(default_factory=lambda: [0.8, 0.8, 0.8, 1.0])
    ambient: list[float] = field(default_factory=lambda: [0.2, 0.2, 0.2, 1.0])
    specular: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0, 1.0])
    emissive: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0, 1.0])
    shininess: float = 65.0
    texture_id: int = -1
    used: bool = False


def dir_name(path: str) -> str:
    """Return the directory part of ``path`` including its trailing separator."""
    cut = path.rfind("/")
    if cut < 0:
        cut = path.rfind("\\")
    return path[: cut + 1] if cut >= 0 else ""


def _leading_floats(tokens: list[str], limit: int) -> list[float]:
    values = []
    for token in tokens[:limit]:
        try:
            values.append(float(token))
        except ValueError:
            break
    return values


def read_mtl(path: str, textures: TextureStore) -> list[Material]:
    """Read the material library at ``path``.

    The result starts with a material named ``default`` that receives any
    properties given before the first ``newmtl``. Diffuse texture maps are
    loaded through ``textures`` relative to the library's directory.
    Raises OSError if the file cannot be opened.
    """
    base = dir_name(path)
    materials = [Material(name="default")]
    current = materials[0]
    with open(path, encoding="utf-8", errors="replace") as fh:
        for line in fh:
            tokens = line.split()
            if not tokens:
                continue
            keyword, args = tokens[0], tokens[1:]
            head = keyword[0]
            if head == "n":
                current = Material(name=args[0] if args else "")
                materials.append(current)
                log.debug("material[%d]=%r", len(materials) - 1, current.name)
            elif head == "N":
                if keyword[1:2] == "s":
                    values = _leading_floats(args, 1)
                    if values:
                        current.shininess = values[0] / 1000.0 * 128.0
            elif head == "K":
                target = {"d": current.diffuse, "s": current.specular,
                          "a": current.ambient}.get(keyword[1:2])
                if target is not None:
                    values = _leading_floats(args, 3)
                    target[: len(values)] = values
            elif head == "m":
                if keyword.startswith("map_Kd"):
                    filename = line.strip()[len(keyword):].strip()
                    current.texture_id = textures.find_or_add(base + filename)
                else:
                    log.debug("map %s ignored", keyword)
    return materials