"""Core generation primitives for Polytension.

Modules:
- rng: seeded random stream shared by generation and animation
- geometry: point arena, triangle records, rotation
- tessellation: seeded recursive subdivision into coloured triangles
- morph: per-frame vertex jitter
- colors: hsla fill styles
- seed: URL seed channel
- animation: run/frame loop and frame schedulers
"""
