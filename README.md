# faceview

A library for the face models and audio used by a talking-head viewer.

- **Wavefront OBJ/MTL models** (`faceview.model`, `faceview.materials`):
  load a model with its groups, materials and diffuse textures. Faces with
  more than three corners are split into a fan of triangles.
- **Geometry** (`faceview.geometry`): facet normals, smooth vertex normals,
  scaling, rotation, unitizing and linear texture coordinates.
- **Writing** (`faceview.objwriter`): write a model back out as OBJ, with
  its used materials as MTL.
- **Model store** (`faceview.objstore`): load several models once and look
  them up by label or position.
- **Textures** (`faceview.textures`): images read with Pillow as RGBA,
  flipped bottom-to-top, each given a positive id and shared by path.
- **Audio helpers**: a streaming sample-rate converter with a
  Kaiser-windowed low-pass filter (`faceview.resample`) and a thread-safe
  ring buffer of samples (`faceview.ringbuffer`).
- **Viseme mixtures** (`faceview.viseme`): a viseme label of at most three
  characters paired with a weight.

## Installation

```
pip install faceview
```

## Loading a model

```python
from faceview.textures import TextureStore
from faceview.model import load_obj, RenderMode
from faceview import geometry
from faceview.objwriter import write_obj

textures = TextureStore()
model = load_obj("head.obj", textures)

geometry.facet_normals(model)
geometry.vertex_normals(model, 90.0)

print(model.dimensions())          # extent along x, y and z
print(model.shift, model.scale)    # centring shift and 2-unit-box scale
write_obj(model, "head-out.obj", RenderMode.SMOOTH | RenderMode.MATERIAL)
```

Triangles hold the 1-based indices written in the OBJ file, so index `i`
refers to `model.vertices[i - 1]`; 0 means the triangle carries none.
Groups are kept in `model.groups`, a dict in file order. Materials are in
`model.materials`, with the `default` material first.

A file that cannot be opened, or whose material library is missing, raises
`ObjLoadError`. A texture that cannot be read gets id 0.

`write_obj` leaves out any part of the requested `RenderMode` the model
does not have. With `RenderMode.MATERIAL` it also writes the model's
material library, listing only materials used by the model's groups, next
to the OBJ file.

## Keeping several models

```python
from faceview.objstore import ObjStore

store = ObjStore()
index = store.add("head.obj", "neutral")
model = store.get("neutral")      # by label
same = store[index]               # by position
print(len(store), store.get_label(index))
```

Adding a path that is already loaded only attaches the new label to the
existing model. When a model file has no normals, the store computes facet
normals and smooth vertex normals with a 90 degree angle. `store.get`
returns `None` for an unknown label or index; `store[index]` raises
`IndexError`.

## Resampling audio

```python
from faceview.resample import Resampler

resampler = Resampler(16000 / 44100)
used, out = resampler.process(samples, last=True, max_output=10000)
```

`process` returns how many input samples were consumed and the output
samples produced. Output that did not fit within `max_output` is held over
for the next call (`held_over()`). For a range of factors, call
`open(high_quality, min_factor, max_factor)` and pass `factor=` to
`process`; a factor outside the range raises `ValueError`.

## Ring buffer

```python
from faceview.ringbuffer import RingBuffer

ring = RingBuffer(1000)
ring.put(0.5)
value = ring.get()
```

A ring of `size` slots holds at most `size - 1` samples. When it is full
the oldest sample is dropped; reading an empty ring returns `0.0`.

## What this package does not do

It does not draw anything: there is no OpenGL rendering, display list,
morph-target drawing, window or progress display. Textures are loaded as
Pillow images only, not uploaded to a graphics card. There is no command
to run; it is a library.