"""Flux reconstruction on interior and boundary faces of the box method, and the
non-isothermal extension with the conductive heat flux."""
