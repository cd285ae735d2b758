"""
Evolution Module

The generational engine and its pluggable components live in
`poly_evo.evolution.components`.
"""
