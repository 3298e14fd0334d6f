"""Governing radius selection for offices with two service radii."""

from __future__ import annotations

from ...models.domain import Layer, Office, RadiusPolicy

DEFAULT_MANAGEMENT_RADIUS_KM = 15.0


def governing_radius(office: Office, policy: RadiusPolicy = RadiusPolicy.RECEPTION) -> float:
    """Return the radius that defines ``office``'s coverage circle under ``policy``.

    Only Layer A offices carry separate reception and management radii; Layers
    B and C always use their single ``radius``. A Layer A office without an
    explicit reception radius falls back to its primary ``radius``, and one
    without a management radius falls back to 15 km.

    The map viewer falls back to a fixed 5 km reception radius instead. The
    fixture loader always sets both radii, so the two only differ for
    hand-built offices.
    """

    if office.layer is not Layer.A:
        return office.radius
    if policy is RadiusPolicy.MANAGEMENT:
        if office.management_radius is None:
            return DEFAULT_MANAGEMENT_RADIUS_KM
        return office.management_radius
    if office.reception_radius is None:
        return office.radius
    return office.reception_radius
