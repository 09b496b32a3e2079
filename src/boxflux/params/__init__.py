"""Permeability tensors and material values of fluids and solids."""
