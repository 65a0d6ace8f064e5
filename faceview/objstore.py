"""A collection of loaded models, addressed by index or by label."""

from __future__ import annotations

import logging
from typing import Optional, Union

from faceview.geometry import facet_normals, vertex_normals
from faceview.model import ObjModel, load_obj
from faceview.textures import TextureStore

log = logging.getLogger(__name__)

SMOOTHING_ANGLE = 90.0


class ObjStore:
    """Loads each model file once and shares textures between models."""

    def __init__(self) -> None:
        self.models: list[ObjModel] = []
        self.textures = TextureStore()
        self.labels: dict[str, ObjModel] = {}

    def add(self, path: str, label: str) -> int:
        """Load the model at ``path`` under ``label`` and return its index.

        A path already loaded is not read again; the label is pointed at it.
        Facet and vertex normals are computed when the file has none.
        Raises ObjLoadError if the model cannot be loaded.
        """
        for index, model in enumerate(self.models):
            if model.pathname == path:
                self.labels[label] = model
                return index

        model = load_obj(path, self.textures)
        log.debug("dimensions = %s", model.dimensions())
        if not model.facetnorms:
            facet_normals(model)
        if not model.normals:
            vertex_normals(model, SMOOTHING_ANGLE)

        self.models.append(model)
        self.labels[label] = model
        return len(self.models) - 1

    def remove_all(self) -> None:
        """Forget every model and label."""
        self.models.clear()
        self.labels.clear()

    def get(self, key: Union[str, int]) -> Optional[ObjModel]:
        """Return the model with this label or index, or None."""
        if isinstance(key, str):
            return self.labels.get(key)
        if 0 <= key < len(self.models):
            return self.models[key]
        return None

    def __getitem__(self, index: int) -> ObjModel:
        model = self.get(index)
        if model is None:
            raise IndexError(f"no model at index {index}")
        return model

    def __len__(self) -> int:
        return len(self.models)

    def reload_textures(self) -> None:
        """Reload every shared texture from disk."""
        self.textures.reload()

    def get_label(self, index: int) -> Optional[str]:
        """Return a label attached to the model at ``index``, or None."""
        model = self.get(index)
        if model is None:
            return None
        for label, labelled in self.labels.items():
            if labelled is model:
                return label
        return None