"""
models/ - Domain Objects
========================
Plain dataclasses for the GuideResto entities. Entities compare by identity
(``eq=False``): the mappers guarantee one instance per persisted row, so two
objects standing for the same row are always the same object.
"""
