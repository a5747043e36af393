# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "orbitjax"]
#
# [tool.uv.sources]
# orbitjax = { path = ".." }
# ///
"""Convert an orbit state between Cartesian, Keplerian and USM representations.

Reads a single state from the command line, converts it into the other
two representations and prints all three. Conversion failures (invalid
inputs, unsupported regimes, degenerate geometry) are reported and the
script exits with status 1.

Requires orbitjax to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/convert.py [OPTIONS] VALUES...

Examples:
    # Keplerian elements [a, e, i, RAAN, omega, nu] in degrees around Earth
    uv run examples/convert.py --source keplerian --degrees 7000e3 0.01 98.0 30.0 45.0 10.0

    # Cartesian state around a unit-gravity body
    uv run examples/convert.py --source cartesian --gm 1.0 1 2 1 -0.25 -0.25 0.5

    # USM elements with solver debug logging
    uv run examples/convert.py --source usm --log-level DEBUG 7546.0 -1.2 5.1 0.3 0.2 0.4 0.84
"""

import enum
import logging
import sys
from typing import Annotated

import jax.numpy as jnp
import typer

from orbitjax import (
    GM_EARTH,
    OrbitConversionError,
    set_dtype,
    state_cartesian_to_koe,
    state_koe_to_cartesian,
    state_koe_to_usm,
    state_usm_to_koe,
)

set_dtype(jnp.float64)

_SIZES = {"cartesian": 6, "keplerian": 6, "usm": 7}


class Source(enum.StrEnum):
    """Representation of the input state."""

    cartesian = "cartesian"
    keplerian = "keplerian"
    usm = "usm"


def _format(values) -> str:
    return "[" + ", ".join(f"{float(v):.12g}" for v in values) + "]"


def main(
    values: Annotated[list[float], typer.Argument(help="State vector components")],
    source: Annotated[Source, typer.Option(help="Representation of VALUES")] = Source.keplerian,
    gm: Annotated[float, typer.Option(help="Gravitational parameter [m^3/s^2]")] = GM_EARTH,
    degrees: Annotated[
        bool, typer.Option(help="Keplerian angles are read and printed in degrees")
    ] = False,
    log_level: Annotated[str, typer.Option(help="Logging level for orbitjax")] = "WARNING",
) -> None:
    """Convert one orbit state into every supported representation."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if len(values) != _SIZES[source]:
        print(f"ERROR: {source} state needs {_SIZES[source]} values, got {len(values)}.")
        sys.exit(1)

    x = jnp.array(values)
    try:
        if source == Source.cartesian:
            cart = x
            koe = state_cartesian_to_koe(cart, gm, use_degrees=degrees)
            usm = state_koe_to_usm(state_cartesian_to_koe(cart, gm), gm)
        elif source == Source.keplerian:
            koe = x
            cart = state_koe_to_cartesian(koe, gm, use_degrees=degrees)
            usm = state_koe_to_usm(state_cartesian_to_koe(cart, gm), gm)
        else:
            usm = x
            koe_rad = state_usm_to_koe(usm, gm)
            cart = state_koe_to_cartesian(koe_rad, gm)
            koe = state_cartesian_to_koe(cart, gm, use_degrees=degrees)
    except OrbitConversionError as exc:
        print(f"ERROR: {type(exc).__name__}: {exc}")
        sys.exit(1)

    unit = "deg" if degrees else "rad"
    print(f"Cartesian [x, y, z, vx, vy, vz]:            {_format(cart)}")
    print(f"Keplerian [a|p, e, i, RAAN, omega, nu] ({unit}): {_format(koe)}")
    print(f"USM       [C, Rf1, Rf2, e1, e2, e3, eta]:   {_format(usm)}")


if __name__ == "__main__":
    typer.run(main)
