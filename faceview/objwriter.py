"""Writing models back out as Wavefront OBJ files and MTL libraries."""

from __future__ import annotations

import logging

from faceview.materials import dir_name
from faceview.model import ObjModel, RenderMode, Triangle

log = logging.getLogger(__name__)


def _effective_mode(model: ObjModel, mode: int) -> RenderMode:
    """Drop the parts of ``mode`` the model cannot supply or that conflict."""
    mode = RenderMode(mode)
    if mode & RenderMode.FLAT and not model.facetnorms:
        log.debug("flat normal output requested with no facet normals defined")
        mode &= ~RenderMode.FLAT
    if mode & RenderMode.SMOOTH and not model.normals:
        log.debug("smooth normal output requested with no normals defined")
        mode &= ~RenderMode.SMOOTH
    if mode & RenderMode.TEXTURE and not model.texcoords:
        log.debug("texture output requested with no texture coordinates defined")
        mode &= ~RenderMode.TEXTURE
    if mode & RenderMode.FLAT and mode & RenderMode.SMOOTH:
        log.debug("flat and smooth normal output requested, using smooth")
        mode &= ~RenderMode.FLAT
    if mode & RenderMode.COLOR and not model.materials:
        log.debug("color output requested with no materials defined")
        mode &= ~RenderMode.COLOR
    if mode & RenderMode.MATERIAL and not model.materials:
        log.debug("material output requested with no materials defined")
        mode &= ~RenderMode.MATERIAL
    if mode & RenderMode.COLOR and mode & RenderMode.MATERIAL:
        log.debug("color and material output requested, writing materials only")
        mode &= ~RenderMode.COLOR
    return mode


def _fmt(values) -> str:
    return " ".join(f"{v:f}" for v in values)


def write_mtl(model: ObjModel, model_path: str, mtllib_name: str) -> None:
    """Write the model's used materials to ``mtllib_name`` beside ``model_path``.

    Raises OSError if the file cannot be written.
    """
    filename = dir_name(model_path) + mtllib_name
    with open(filename, "w", encoding="utf-8") as fh:
        fh.write("#  \n")
        fh.write("#  Wavefront MTL generated by faceview\n")
        fh.write("#  \n\n")
        for material in model.materials:
            if not material.used:
                continue
            fh.write(f"newmtl {material.name}\n")
            fh.write(f"Ka {_fmt(material.ambient[:3])}\n")
            fh.write(f"Kd {_fmt(material.diffuse[:3])}\n")
            fh.write(f"Ks {_fmt(material.specular[:3])}\n")
            fh.write(f"Ns {material.shininess / 128.0 * 1000.0:f}\n")
            fh.write("\n")


def _face_line(triangle: Triangle, mode: RenderMode) -> str:
    v, t, n, f = triangle.vindices, triangle.tindices, triangle.nindices, triangle.findex
    smooth = bool(mode & RenderMode.SMOOTH)
    flat = bool(mode & RenderMode.FLAT)
    texture = bool(mode & RenderMode.TEXTURE)
    if smooth and texture:
        corners = [f"{v[i]}/{t[i]}/{n[i]}" for i in range(3)]
    elif flat and texture:
        corners = [f"{v[i]}/{t[i]}/{f}" for i in range(3)]
    elif texture:
        corners = [f"{v[i]}/{t[i]}" for i in range(3)]
    elif smooth:
        corners = [f"{v[i]}//{n[i]}" for i in range(3)]
    elif flat:
        corners = [f"{v[i]}//{f}" for i in range(3)]
    else:
        corners = [str(v[i]) for i in range(3)]
    return "f " + " ".join(corners) + "\n"


def write_obj(model: ObjModel, path: str, mode: int = RenderMode.NONE) -> None:
    """Write the model to ``path`` in Wavefront OBJ format.

    ``mode`` selects normals, texture coordinates and materials to include;
    parts the model lacks are left out. With materials, the material library
    named by the model is written beside the OBJ file.
    Raises OSError if the OBJ file cannot be written.
    """
    mode = _effective_mode(model, mode)
    with open(path, "w", encoding="utf-8") as fh:
        fh.write("#  \n")
        fh.write("#  Wavefront OBJ generated by faceview\n")
        fh.write("#  \n")

        if mode & RenderMode.MATERIAL and model.mtllibname:
            fh.write(f"\nmtllib {model.mtllibname}\n\n")
            try:
                write_mtl(model, path, model.mtllibname)
            except OSError:
                log.debug("failed to write material file %r", model.mtllibname)

        fh.write("\n")
        fh.write(f"# {len(model.vertices)} vertices\n")
        for vertex in model.vertices:
            fh.write(f"v {_fmt(vertex)}\n")

        if mode & RenderMode.SMOOTH:
            fh.write("\n")
            fh.write(f"# {len(model.normals)} normals\n")
            for normal in model.normals:
                fh.write(f"vn {_fmt(normal)}\n")
        elif mode & RenderMode.FLAT:
            fh.write("\n")
            fh.write(f"# {len(model.facetnorms)} normals\n")
            for normal in model.facetnorms:
                fh.write(f"vn {_fmt(normal)}\n")

        if mode & RenderMode.TEXTURE:
            fh.write("\n")
            fh.write(f"# {len(model.texcoords)} texcoords\n")
            for coord in model.texcoords:
                fh.write(f"vt {_fmt(coord)}\n")

        fh.write("\n")
        fh.write(f"# {len(model.groups)} groups\n")
        fh.write(f"# Total {len(model.triangles)} faces (triangles)\n")
        fh.write("\n")

        for group in model.groups.values():
            if not group.triangles:
                continue
            fh.write(f"g {group.name}\n")
            fh.write(f"# {len(group.triangles)} faces (triangles)\n")
            if mode & RenderMode.MATERIAL:
                fh.write(f"usemtl {model.materials[group.material].name}\n")
            for index in group.triangles:
                fh.write(_face_line(model.triangles[index], mode))
            fh.write("\n")