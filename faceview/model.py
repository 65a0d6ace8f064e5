"""Wavefront OBJ models: triangles, groups and materials read from disk.

Vertex, normal and texture-coordinate indices held in triangles are the
1-based indices written in the OBJ file, so index ``i`` refers to
``vertices[i - 1]``. An index of 0 means the triangle carries none.
"""

from __future__ import annotations

import enum
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Optional

from faceview.materials import Material, dir_name, read_mtl
from faceview.textures import TextureStore

log = logging.getLogger(__name__)

DEFAULT_GROUP = "default"


class RenderMode(enum.IntFlag):
    """What to render or write besides the bare vertices."""

    NONE = 0
    FLAT = 1 << 0
    SMOOTH = 1 << 1
    TEXTURE = 1 << 2
    COLOR = 1 << 3
    MATERIAL = 1 << 4


class ObjLoadError(Exception):
    """Raised when an OBJ file or its material library cannot be loaded."""


@dataclass
class Triangle:
    """One triangle's vertex, normal and texture indices and its facet normal."""

    vindices: list[int] = field(default_factory=lambda: [0, 0, 0])
    nindices: list[int] = field(default_factory=lambda: [0, 0, 0])
    tindices: list[int] = field(default_factory=lambda: [0, 0, 0])
    findex: int = 0


@dataclass
class Group:
    """A named set of triangles sharing one material."""

    name: str
    triangles: list[int] = field(default_factory=list)
    material: int = 0


class ObjModel:
    """A triangulated model with its groups and materials."""

    def __init__(self, pathname: str = "") -> None:
        self.pathname = pathname
        self.mtllibname = ""
        self.vertices: list[list[float]] = []
        self.normals: list[list[float]] = []
        self.texcoords: list[list[float]] = []
        self.facetnorms: list[list[float]] = []
        self.triangles: list[Triangle] = []
        self.materials: list[Material] = []
        self.groups: dict[str, Group] = {}
        self.shift = [0.0, 0.0, 0.0]
        self.scale = 1.0

    def find_group(self, name: str) -> Optional[Group]:
        """Return the group called ``name``, or None."""
        return self.groups.get(name)

    def add_group(self, name: str) -> Group:
        """Return the group called ``name``, appending it if it is new."""
        group = self.groups.get(name)
        if group is None:
            group = Group(name)
            self.groups[name] = group
        return group

    def find_material(self, name: str) -> int:
        """Return the index of material ``name`` and mark it used.

        An unknown name yields the default material 0.
        """
        for index, material in enumerate(self.materials):
            if material.name == name:
                material.used = True
                return index
        log.debug("can't find material %r", name)
        if self.materials:
            self.materials[0].used = True
        return 0

    def dimensions(self) -> tuple[float, float, float]:
        """Return the model's extent along x, y and z."""
        if not self.vertices:
            return (0.0, 0.0, 0.0)
        lows, highs = self._bounds()
        return tuple(hi - lo for lo, hi in zip(lows, highs))  # type: ignore[return-value]

    def find_position(self) -> None:
        """Set the shift that centres the model and the scale fitting it in a 2-unit box."""
        if not self.vertices:
            return
        lows, highs = self._bounds()
        self.shift = [-(hi + lo) / 2 for lo, hi in zip(lows, highs)]
        largest = max(hi - lo for lo, hi in zip(lows, highs))
        self.scale = 2.0 / largest if largest else math.inf
        log.debug("model shift=%s scale=%g", self.shift, self.scale)

    def _bounds(self) -> tuple[list[float], list[float]]:
        columns = list(zip(*self.vertices))
        return [min(c) for c in columns], [max(c) for c in columns]


_PATTERNS = {
    "vn": re.compile(r"([+-]?\d+)(?://([+-]?\d+))?"),
    "vtn": re.compile(r"([+-]?\d+)(?:/([+-]?\d+)(?:/([+-]?\d+))?)?"),
    "vt": re.compile(r"([+-]?\d+)(?:/([+-]?\d+))?"),
    "v": re.compile(r"([+-]?\d+)"),
}


def _face_kind(token: str) -> str:
    if "//" in token:
        return "vn"
    match = _PATTERNS["vtn"].match(token)
    if match and match.group(3) is not None:
        return "vtn"
    match = _PATTERNS["vt"].match(token)
    if match and match.group(2) is not None:
        return "vt"
    return "v"


def _face_corners(args: list[str]) -> tuple[str, list[tuple[int, int, int]]]:
    if not args:
        raise ObjLoadError("face without vertices")
    kind = _face_kind(args[0])
    pattern = _PATTERNS[kind]
    corners = []
    v = t = n = 0
    for token in args:
        match = pattern.match(token)
        if not match:
            break
        groups = match.groups()
        v = int(groups[0])
        if kind == "vn":
            if groups[1] is not None:
                n = int(groups[1])
        elif kind in ("vt", "vtn"):
            if groups[1] is not None:
                t = int(groups[1])
            if kind == "vtn" and groups[2] is not None:
                n = int(groups[2])
        corners.append((v, t, n))
    if len(corners) < 3:
        raise ObjLoadError(f"face with fewer than three vertices: {' '.join(args)!r}")
    return kind, corners


def _add_face(model: ObjModel, group: Group, args: list[str]) -> None:
    kind, corners = _face_corners(args)
    with_t = kind in ("vt", "vtn")
    with_n = kind in ("vn", "vtn")
    first = corners[0]
    for second, third in zip(corners[1:], corners[2:]):
        trio = (first, second, third)
        triangle = Triangle(vindices=[c[0] for c in trio])
        if with_t:
            triangle.tindices = [c[1] for c in trio]
        if with_n:
            triangle.nindices = [c[2] for c in trio]
        group.triangles.append(len(model.triangles))
        model.triangles.append(triangle)


def _floats(args: list[str], count: int) -> list[float]:
    values = []
    for token in args[:count]:
        try:
            values.append(float(token))
        except ValueError:
            break
    return values + [0.0] * (count - len(values))


def _load_materials(model: ObjModel, lines: list[list[str]], textures: TextureStore) -> None:
    for tokens in lines:
        if tokens and tokens[0].startswith("m"):
            name = tokens[1] if len(tokens) > 1 else ""
            model.mtllibname = name
            path = dir_name(model.pathname) + name
            try:
                model.materials = read_mtl(path, textures)
            except OSError as exc:
                raise ObjLoadError(f"can't open material file {path!r}") from exc


def _parse(model: ObjModel, lines: list[list[str]]) -> None:
    group = model.add_group(DEFAULT_GROUP)
    material = 0
    last = ""
    group_count = 0
    for tokens in lines:
        if not tokens:
            continue
        keyword, args = tokens[0], tokens[1:]
        head = keyword[0]
        if head == "v":
            sub = keyword[1:2]
            if sub == "":
                model.vertices.append(_floats(args, 3))
            elif sub == "n":
                model.normals.append(_floats(args, 3))
            elif sub == "t":
                model.texcoords.append(_floats(args, 2))
            else:
                log.debug("unknown token %r", keyword)
            last = "v"
        elif head == "u":
            if last != "g":
                group_count += 1
                group = model.add_group(f"GROUP{group_count:05d}")
            material = model.find_material(args[0] if args else "")
            group.material = material
            last = "u"
        elif head == "g":
            group = model.add_group(args[0] if args else "")
            group.material = material
            last = "g"
        elif head == "f":
            _add_face(model, group, args)
            last = "f"
        elif head == "m":
            last = "m"


def load_obj(path: str, textures: Optional[TextureStore] = None) -> ObjModel:
    """Read the OBJ file at ``path`` together with its material library.

    Faces with more than three corners are split into a fan of triangles.
    Raises ObjLoadError if the file or its material library cannot be read.
    """
    if textures is None:
        textures = TextureStore()
    try:
        with open(path, encoding="utf-8", errors="replace") as fh:
            lines = [line.split() for line in fh]
    except OSError as exc:
        raise ObjLoadError(f"can't open {path!r}") from exc

    model = ObjModel(pathname=path)
    _load_materials(model, lines, textures)
    _parse(model, lines)
    model.find_position()
    log.debug(
        "loaded %s: %d vertices, %d normals, %d texcoords, %d triangles, %d groups",
        path, len(model.vertices), len(model.normals), len(model.texcoords),
        len(model.triangles), len(model.groups),
    )
    return model