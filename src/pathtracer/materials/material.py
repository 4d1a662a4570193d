"""Material tag set.

Material is closed: a primitive carries one Material value and the
integrator dispatches on it. There are no per-instance parameters beyond the
primitive's colour and emission; glass always has an index of refraction of
1.5 against a vacuum of 1.0.
"""

from enum import IntEnum


class Material(IntEnum):
    """Enumeration of supported surface materials.

    Used by the integrator to choose the scattering branch.
    """

    DIFFUSE = 0
    SPECULAR = 1
    REFRACTIVE = 2
