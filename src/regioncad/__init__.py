# -*- coding: utf-8 -*-
"""regionCAD: planar region booleans, offsets and VNF meshes.

Import the operations from their modules, *e.g.* ::

   from regioncad.combine import union, difference
   from regioncad.offset import offset
   from regioncad.vnf import vnf, vnf_add_face
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("regionCAD")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"
