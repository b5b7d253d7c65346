from datetime import date

from db.connection import transaction
from db.sequence import SequenceAllocator
from mappers.registry import MapperRegistry
from models.city import City
from models.evaluation import BasicEvaluation, CompleteEvaluation
from models.restaurant import Restaurant


def test_allocator_is_monotonic_per_sequence(store) -> None:
    allocator = SequenceAllocator()

    with transaction() as cur:
        first = allocator.next(cur, "seq_villes")
        second = allocator.next(cur, "seq_villes")
        other = allocator.next(cur, "seq_notes")

    assert (first, second, other) == (1, 2, 1)


def test_create_draws_ids_from_table_sequence(registry: MapperRegistry) -> None:
    first = registry.cities.create(City(zip_code="2000", city_name="Neuchâtel"))
    second = registry.cities.create(City(zip_code="1003", city_name="Lausanne"))

    assert (first.id, second.id) == (1, 2)


def test_evaluation_variants_share_one_id_space(registry: MapperRegistry, da_mario: Restaurant) -> None:
    like = registry.basic_evaluations.create(
        BasicEvaluation(like_restaurant=True, ip_address="10.0.0.1", restaurant=da_mario)
    )
    review = registry.complete_evaluations.create(
        CompleteEvaluation(comment="Great", username="bob", visit_date=date(2024, 3, 14), restaurant=da_mario)
    )

    assert like.id != review.id
    assert {like.id, review.id} == {1, 2}


def test_failed_sequence_leaves_no_row(store, registry: MapperRegistry) -> None:
    store.fail_sequences = True
    city = City(zip_code="2000", city_name="Neuchâtel")

    assert registry.cities.create(city) is None
    assert city.id is None
    assert store.ids("villes") == set()
    assert registry.cities.identity_map.is_empty()
    assert not any(statement.startswith("INSERT") for statement in store.statements)
