"""
mappers/ - Data Mapper Layer
============================
One mapper per entity type. Each mapper owns an IdentityMap and encapsulates
all SQL for its table; rows come in, shared domain objects go out.
Build the mappers through ``mappers.registry.MapperRegistry`` so that the
mappers which resolve foreign keys share their collaborators' caches.
"""
